from app.schemas.string import (
    FilterSpec,
    HealthResponse,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringProperties,
    StringResponse,
)

__all__ = [
    "FilterSpec",
    "HealthResponse",
    "InterpretedQuery",
    "NaturalLanguageResponse",
    "StringCreate",
    "StringListResponse",
    "StringProperties",
    "StringResponse",
]
