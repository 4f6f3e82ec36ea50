# File: config/db_config.py
# Centralized database configuration for the hash table visualizer.
# Builds the SQLAlchemy engine that backs the word store, exposes the declarative Base
# for ORM models and provides context-managed sessions with rollback on failure.

import os  # For accessing environment variables
import logging  # For logging messages
from contextlib import contextmanager  # For context-managed database sessions
from pathlib import Path  # For locating the .env file
from typing import Optional

from dotenv import load_dotenv  # Loads environment variables from config/.env
from sqlalchemy import create_engine  # Creates the engine for the configured URL
from sqlalchemy.engine import Engine  # Engine type for type hinting
from sqlalchemy.exc import SQLAlchemyError  # For SQLAlchemy error handling
from sqlalchemy.orm import declarative_base, sessionmaker  # ORM base and session factory
from sqlalchemy.pool import StaticPool  # Keeps a single connection for in-memory SQLite

logger = logging.getLogger(__name__)  # Create a logger specific to this module

# Load environment variables from the optional .env file in the config directory
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_DATABASE_URL = "sqlite:///hash_table_visualizer.db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

# Define the SQLAlchemy Base class for ORM models
Base = declarative_base()


def build_engine(url: str, echo: Optional[bool] = None) -> Engine:
    """
    Creates a SQLAlchemy engine for the given database URL.

    SQLite engines are shared with the word store's worker threads, so the
    same-thread check is disabled; in-memory SQLite additionally keeps one
    connection alive through a StaticPool so every session sees the same data.

    Args:
        url (str): SQLAlchemy database URL.
        echo (Optional[bool]): Log emitted SQL. Defaults to the DEBUG environment variable.

    Returns:
        Engine: The configured engine.

    Raises:
        RuntimeError: If the engine cannot be created.
    """
    if echo is None:
        echo = os.getenv("DEBUG", "False").lower() == "true"

    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    try:
        engine = create_engine(url, **kwargs)
        logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}.")
        return engine
    except (SQLAlchemyError, ImportError) as e:
        logger.error(f"Error creating database engine: {e}")
        raise RuntimeError(
            "Failed to create database engine. Check DATABASE_URL and installed drivers."
        ) from e


# Engine and session factory for the configured database
engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_engine() -> Engine:
    """
    Provides the SQLAlchemy engine for the configured database.

    Returns:
        Engine: The module-level engine built from DATABASE_URL.
    """
    return engine


@contextmanager
def get_session_context(session_factory: Optional[sessionmaker] = None):
    """
    Provides a database session as a context manager.

    The session is rolled back when a SQLAlchemy error escapes the block and is
    always closed afterwards.

    Args:
        session_factory (Optional[sessionmaker]): Factory to use instead of SessionLocal.

    Yields:
        Session: A SQLAlchemy session for ORM operations.
    """
    session = (session_factory or SessionLocal)()
    try:
        yield session
    except SQLAlchemyError as e:
        session.rollback()  # Rollback the transaction on error
        logger.error(f"Error during session operation: {e}")
        raise
    finally:
        session.close()
        logger.debug("Session closed.")
