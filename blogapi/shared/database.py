"""
Database configuration and session management

This module provides the basic SQLAlchemy setup for database connectivity.
NO models are defined here - this is just infrastructure.
"""

import os
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool, StaticPool

# Get database URL from environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://blog_user:changeme@db:5432/blog_db")


def _engine_options(url: str) -> dict:
    """
    Pick pool settings for the configured backend.

    SQLite connections are shared across the request threadpool, and an
    in-memory database only exists for as long as its single connection does.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    # Using NullPool for better compatibility with containerized environments
    return {"poolclass": NullPool}


# Create engine
engine = create_engine(
    DATABASE_URL,
    echo=False,  # Set to True for SQL query logging during development
    **_engine_options(DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def init_db() -> None:
    """Create all tables for the models imported so far."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @router.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> bool:
    """
    Test database connectivity
    Returns True if connection successful, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
