from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Optional, List
from datetime import datetime

from app.services.analyzer import is_valid_unicode


class StringCreate(BaseModel):
    value: str = Field(..., description="String to analyze")

    @field_validator("value")
    @classmethod
    def value_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value must not be empty")
        if not is_valid_unicode(v):
            raise ValueError("value must be valid Unicode text")
        return v


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, record) -> "StringResponse":
        return cls(
            id=record.sha256_hash,
            value=record.value,
            properties=StringProperties(
                length=record.length,
                is_palindrome=record.is_palindrome,
                unique_characters=record.unique_characters,
                word_count=record.word_count,
                sha256_hash=record.sha256_hash,
                character_frequency_map=record.character_frequency_map,
            ),
            created_at=record.created_at,
        )


class FilterSpec(BaseModel):
    """Optional match criteria; unset fields impose no constraint."""

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    def applied(self) -> Dict:
        return self.model_dump(exclude_none=True)


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Optional[Dict] = None


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery


class HealthResponse(BaseModel):
    status: str
    total_strings: int
