from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
from typing import List, Optional
import logging
import threading

from app.database import SessionLocal
from app.exceptions import DuplicateError, NotFoundError, StringValidationError
from app.models.string import StringAnalysis
from app.services.analyzer import analyze_string, is_valid_unicode, normalize

logger = logging.getLogger(__name__)

_STORED_PROPERTIES = (
    "length",
    "is_palindrome",
    "unique_characters",
    "word_count",
    "sha256_hash",
    "character_frequency_map",
)


class StringStore:
    """Normalized string -> analyzed record, held for the life of the process.

    Every operation takes the store lock, so an insert-if-absent cannot
    interleave with another insert of the same key.
    """

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory
        self._lock = threading.Lock()

    @staticmethod
    def _find(db: Session, key: str) -> Optional[StringAnalysis]:
        if not is_valid_unicode(key):
            return None  # never stored
        return db.query(StringAnalysis).filter(StringAnalysis.value == key).first()

    def insert(self, raw_text: str) -> StringAnalysis:
        """Analyze and store a string. Raises DuplicateError if its key exists."""
        key = normalize(raw_text)
        if not is_valid_unicode(key):
            raise StringValidationError("value must be valid Unicode text")

        with self._lock, self._session_factory() as db:
            if self._find(db, key) is not None:
                logger.info(f"Rejected duplicate string: {key!r}")
                raise DuplicateError()

            record = StringAnalysis(**analyze_string(key), created_at=datetime.now(timezone.utc))
            db.add(record)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise DuplicateError() from e

            logger.info(f"Stored string {record.sha256_hash[:12]} ({record.length} chars)")
            return record

    def get(self, key: str) -> StringAnalysis:
        """Get string analysis by value"""
        key = normalize(key)
        with self._lock, self._session_factory() as db:
            record = self._find(db, key)
        if record is None:
            logger.debug(f"String not found: {key!r}")
            raise NotFoundError()
        return record

    def delete(self, key: str) -> None:
        """Delete string analysis by value"""
        key = normalize(key)
        with self._lock, self._session_factory() as db:
            record = self._find(db, key)
            if record is None:
                logger.debug(f"Cannot delete missing string: {key!r}")
                raise NotFoundError()
            db.delete(record)
            db.commit()
        logger.info(f"Deleted string {record.sha256_hash[:12]}")

    def list_all(self) -> List[StringAnalysis]:
        """Snapshot of every stored string, oldest first"""
        with self._lock, self._session_factory() as db:
            return db.query(StringAnalysis).order_by(StringAnalysis.id).all()

    def count(self) -> int:
        with self._lock, self._session_factory() as db:
            return db.query(StringAnalysis).count()

    def revalidate(self, key: str) -> bool:
        """Recompute a stored string's properties and report whether they still match."""
        record = self.get(key)
        fresh = analyze_string(record.value)
        stale = [name for name in _STORED_PROPERTIES if getattr(record, name) != fresh[name]]
        if stale:
            logger.warning(f"Stored properties diverged for {record.sha256_hash[:12]}: {stale}")
        return not stale
