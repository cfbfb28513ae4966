"""
Database connection management

SQLite for local development, any SQLAlchemy URL (PostgreSQL) in production.
Connection string comes from settings.database_url.
"""
import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from grant_portal.config import settings

logger = logging.getLogger(__name__)


def create_db_engine(url: str):
    """Create SQLAlchemy engine"""
    if url.startswith("sqlite"):
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

        db_path = url.replace("sqlite:///", "", 1)
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(url, pool_size=10, max_overflow=20, pool_pre_ping=True)


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db():
    """Create all tables. Safe to call multiple times."""
    # Register models on Base.metadata
    import grant_portal.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    url = settings.database_url
    logger.info(f"Database initialized: {url.split('@')[-1] if '@' in url else url}")


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
