from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON
from sqlalchemy.types import TypeDecorator
from datetime import timezone
from app.database import Base


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes in, timezone-aware UTC datetimes out.

    SQLite keeps no offset, so values are stored as naive UTC and get their
    tzinfo back on load.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class StringAnalysis(Base):
    __tablename__ = "string_analyses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)  # insertion order
    value = Column(String, unique=True, nullable=False, index=True)  # normalized text
    length = Column(Integer, nullable=False)
    is_palindrome = Column(Boolean, nullable=False)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    sha256_hash = Column(String(64), unique=True, nullable=False, index=True)
    character_frequency_map = Column(JSON, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
