from typing import List

from app.models.string import StringAnalysis
from app.schemas.string import FilterSpec


def matches(entry: StringAnalysis, spec: FilterSpec) -> bool:
    """Return True when the entry satisfies every criterion set on the spec."""
    if spec.is_palindrome is not None and entry.is_palindrome != spec.is_palindrome:
        return False

    if spec.min_length is not None and entry.length < spec.min_length:
        return False

    if spec.max_length is not None and entry.length > spec.max_length:
        return False

    if spec.word_count is not None and entry.word_count != spec.word_count:
        return False

    if spec.contains_character is not None:
        # Case-sensitive against the stored (lower-cased) text
        if entry.character_frequency_map.get(spec.contains_character, 0) <= 0:
            return False

    return True


def query_strings(store, spec: FilterSpec) -> List[StringAnalysis]:
    """Get all stored strings matching the filters"""
    return [entry for entry in store.list_all() if matches(entry, spec)]
