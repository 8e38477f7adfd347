from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

# Strings live only as long as the process does.
DATABASE_URL = "sqlite://"

Base = declarative_base()


# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
def make_engine(url: str = DATABASE_URL):
    """Create an in-memory engine that shares one connection across sessions."""
    return create_engine(
        url,
        connect_args={"check_same_thread": False},  # FastAPI runs sync routes in a threadpool
        poolclass=StaticPool,
    )


def make_session_factory(engine):
    # expire_on_commit=False keeps returned records readable after the session closes
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


try:
    engine = make_engine()
    SessionLocal = make_session_factory(engine)
except Exception as e:
    logger.error(f"❌ Failed to create SQLAlchemy engine: {e}")
    raise e


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(bind=None):
    """Create tables on the given engine (the process-wide one by default)."""
    from app.models import string  # ensure models are imported
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("✅ Database tables created successfully.")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise
