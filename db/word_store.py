import concurrent.futures  # For running database calls off the pumping thread
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from config.db_config import get_engine, get_session_context
from db.schema.word_schema import Word
from utils.exceptions import WordStoreError

logger = logging.getLogger(__name__)


class WordStore:
    """
    Backing store for the visualized hash table.

    add/remove/search run on a thread pool and return futures; the caller decides how
    completion is delivered back to the visualizer.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None, max_workers: int = 2) -> None:
        """
        Initializes the store with a session factory and a worker pool.

        Args:
            session_factory (Optional[sessionmaker]): Factory for database sessions.
                Defaults to one bound to the configured engine.
            max_workers (int): Number of worker threads serving requests.
        """
        self.session_factory = session_factory or sessionmaker(
            autocommit=False, autoflush=False, bind=get_engine()
        )
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="word-store"
        )

    def add_word(self, key: str) -> "concurrent.futures.Future[None]":
        """Store the word; adding an existing word is a no-op."""
        return self._executor.submit(self._add, key)

    def remove_word(self, key: str) -> "concurrent.futures.Future[None]":
        """Delete the word; removing a missing word is a no-op."""
        return self._executor.submit(self._remove, key)

    def search_word(self, key: str) -> "concurrent.futures.Future[Optional[bool]]":
        """
        Look the word up.

        An empty or whitespace-only query completes immediately with None and never
        reaches the database.
        """
        if not key.strip():
            future: concurrent.futures.Future = concurrent.futures.Future()
            future.set_result(None)
            return future
        return self._executor.submit(self._search, key)

    def list_words(self) -> List[str]:
        """
        Returns every stored word in insertion order.

        Raises:
            WordStoreError: If the database cannot be read.
        """
        try:
            with get_session_context(self.session_factory) as session:
                return [row.word for row in session.query(Word.word).order_by(Word.id).all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing words: {e}")
            raise WordStoreError("list_words", "*") from e

    def close(self) -> None:
        """Wait for in-flight requests and release the worker threads."""
        self._executor.shutdown(wait=True)

    def _add(self, key: str) -> None:
        try:
            with get_session_context(self.session_factory) as session:
                if session.query(Word.id).filter(Word.word == key).first() is not None:
                    logger.info(f"Word already stored: {key}")
                    return
                session.add(Word(word=key))
                try:
                    session.commit()
                except IntegrityError:
                    # A concurrent add stored the same word between the check and the commit
                    session.rollback()
                    logger.info(f"Word already stored: {key}")
                    return
                logger.info(f"Word added: {key}")
        except SQLAlchemyError as e:
            logger.error(f"Database error while adding '{key}': {e}")
            raise WordStoreError("add_word", key) from e

    def _remove(self, key: str) -> None:
        try:
            with get_session_context(self.session_factory) as session:
                deleted = session.query(Word).filter(Word.word == key).delete(synchronize_session=False)
                session.commit()
                logger.info(f"Word removed: {key}" if deleted else f"Word not stored, nothing removed: {key}")
        except SQLAlchemyError as e:
            logger.error(f"Database error while removing '{key}': {e}")
            raise WordStoreError("remove_word", key) from e

    def _search(self, key: str) -> bool:
        try:
            with get_session_context(self.session_factory) as session:
                found = session.query(Word.id).filter(Word.word == key).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Database error while searching '{key}': {e}")
            raise WordStoreError("search_word", key) from e
        logger.info(f"Search result for {key}: {found}")
        return found
