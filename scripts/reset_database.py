import argparse
import os
import sys

from sqlalchemy.exc import SQLAlchemyError

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.db_config import Base, get_engine
from config.logger_config import configure_logger
from db.schema.word_schema import Word  # noqa: F401  Registers the words table on Base.metadata

logger = configure_logger(name="reset_database", log_file="schema.log", output="console")


def reset_database(engine=None) -> None:
    """
    Drops and recreates the word table to match the current schema.
    WARNING: This will delete every stored word!
    """
    engine = engine or get_engine()

    logger.info("Dropping existing tables...")
    try:
        Base.metadata.drop_all(engine)
        logger.info("Existing tables dropped successfully.")
    except SQLAlchemyError as e:
        logger.error(f"Error dropping tables: {e}")
        raise

    logger.info("Creating new tables...")
    Base.metadata.create_all(engine)
    logger.info("Database schema updated successfully.")


def confirm_reset(prompt=input) -> bool:
    """
    Prompt the user to confirm if they want to proceed with resetting the database.
    Returns:
        bool: True if the user confirms, False otherwise.
    """
    while True:
        user_input = prompt(
            "WARNING: This will remove every stored word.\n"
            "Are you sure you want to proceed? (yes/no): "
        ).strip().lower()
        if user_input in ['yes', 'no']:
            return user_input == 'yes'
        print("Invalid input. Please type 'yes' or 'no'.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Reset the word store by dropping its table and recreating it."
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Skip the confirmation prompt and reset the database immediately."
    )
    args = parser.parse_args()

    if args.confirm or confirm_reset():
        reset_database()
    else:
        print("Operation aborted. The database was not modified.")
