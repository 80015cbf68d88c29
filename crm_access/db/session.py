"""
Database Session Management Module
==================================

Responsible for:
- Creating the database engine for the directory store
- Managing session lifecycle
- Providing dependency for FastAPI routes

The access resolver only reads, so sessions are never committed here;
writes belong to the external directory-sync process.
"""

from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from crm_access.core.config import Settings, get_settings
from crm_access.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

settings = get_settings()


# ==========================
# Database Engine
# ==========================

def _engine_options(config: Settings) -> Dict[str, Any]:
    """Build engine keyword arguments suited to the configured dialect."""
    if config.is_sqlite:
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }

    return {
        "poolclass": QueuePool,
        "pool_size": config.db_pool_size,
        "max_overflow": config.db_max_overflow,
        "pool_timeout": config.db_pool_timeout,
        "pool_recycle": config.db_pool_recycle,
        "pool_pre_ping": True,  # Validate connections before use
        "connect_args": {
            "connect_timeout": 10,
            "application_name": "crm-access",
        },
    }


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings),
)


# ==========================
# Pool Event Listeners
# ==========================

@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection, connection_record):
    """Log new database connections."""
    logger.debug("db_connect")


# ==========================
# Session Factory
# ==========================

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


# ==========================
# Dependency for FastAPI
# ==========================

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Ensures:
    - Session is opened per request
    - Session is properly closed after request completes
    - Transactions are rolled back on error

    Yields:
        SQLAlchemy Session object
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error("db_session_error", error=str(e))
        db.rollback()
        raise
    finally:
        db.close()


# ==========================
# Database Health Check
# ==========================

def check_database_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("db_health_check_failed", error=str(e))
        return False
