from fastapi import APIRouter, Depends, Query, status
from dotenv import load_dotenv
from typing import Optional
import logging
import os

from app import schemas
from app.crud import get_store
from app.crud.string import StringStore
from app.exceptions import ParseError
from app.services.filters import query_strings
from app.services.nl_parser import parse_natural_language_query

load_dotenv()

router = APIRouter()
logger = logging.getLogger(__name__)

NL_QUERY_MAX_LENGTH = int(os.getenv("NL_QUERY_MAX_LENGTH", 500))


@router.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(string_data: schemas.StringCreate, store: StringStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    record = store.insert(string_data.value)
    return schemas.StringResponse.from_record(record)


@router.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    store: StringStore = Depends(get_store)
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if len(query) > NL_QUERY_MAX_LENGTH:
        raise ParseError(f"Query too long (max {NL_QUERY_MAX_LENGTH} chars)")

    original = query.strip()
    spec = parse_natural_language_query(original)
    logger.info(f"Natural language query {original!r} -> {spec.applied()}")
    strings = query_strings(store, spec)

    data = [schemas.StringResponse.from_record(s) for s in strings]
    return schemas.NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=schemas.InterpretedQuery(original=original, parsed_filters=spec.applied())
    )


@router.get("/strings/{string_value}", response_model=schemas.StringResponse)
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    return schemas.StringResponse.from_record(store.get(string_value))


@router.get("/strings", response_model=schemas.StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1, max_length=1),
    store: StringStore = Depends(get_store)
):
    """
    Get all strings with optional filtering.
    """
    spec = schemas.FilterSpec(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character
    )
    strings = query_strings(store, spec)

    data = [schemas.StringResponse.from_record(s) for s in strings]
    filters_applied = spec.applied()
    return schemas.StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters_applied if filters_applied else None
    )


@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    store.delete(string_value)
    return None


@router.get("/health", response_model=schemas.HealthResponse)
def health_check(store: StringStore = Depends(get_store)):
    """Health check endpoint"""
    return schemas.HealthResponse(status="healthy", total_strings=store.count())
