# File: initialize_schema.py
"""
This script initializes the database schema by creating the word table used as the
visualizer's backing store.
"""

import os
import sys
from typing import List

from sqlalchemy.exc import SQLAlchemyError

# Add the project root directory to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.db_config import get_engine  # Import engine accessor
from config.logger_config import configure_logger
from db.schema.word_schema import Word

logger = configure_logger(name="initialize_schema", log_file="schema.log", output="console")


def initialize_tables(models: List[type], engine=None) -> None:
    """
    Initializes the tables in the configured database by creating the schema
    for the provided list of SQLAlchemy models.

    Args:
        models (List[type]): List of SQLAlchemy ORM models to initialize.
        engine: Engine to use instead of the configured one.

    Raises:
        RuntimeError: If an error occurs during schema initialization.
    """
    engine = engine or get_engine()
    try:
        logger.info("Initializing database schema...")
        for model in models:
            model.__table__.create(bind=engine, checkfirst=True)
            logger.info(f"Initialized schema for model: {model.__tablename__}")

        logger.info("Database schema initialized successfully.")

    except SQLAlchemyError as e:
        logger.error(f"SQLAlchemy error occurred during initialization: {e}")
        raise RuntimeError("Database initialization failed.") from e


if __name__ == "__main__":
    initialize_tables([Word])
