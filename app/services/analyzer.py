import hashlib
from collections import Counter
from typing import Dict


def normalize(text: str) -> str:
    """Trim surrounding whitespace and lower-case; the result is the store key."""
    return text.strip().lower()


def is_valid_unicode(text: str) -> bool:
    """False for text holding lone surrogates, which cannot be encoded as UTF-8."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    # surrogatepass keeps lone surrogates hashable
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string reads the same backward (code-point reversal)"""
    return text == text[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count maximal runs of non-whitespace; blank text has zero words"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str) -> Dict:
    """Analyze a string and return all computed properties.

    The text is analyzed exactly as given; callers that store it pass the
    normalized form so every property agrees with the stored key.
    """
    return {
        "value": value,
        "length": len(value),
        "is_palindrome": is_palindrome(value),
        "unique_characters": count_unique_characters(value),
        "word_count": count_words(value),
        "sha256_hash": compute_sha256(value),
        "character_frequency_map": get_character_frequency(value),
    }
