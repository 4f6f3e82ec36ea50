"""
This module defines the schema for the words mirrored by the hash table visualizer.

Overview:
    - `Word` is the source of truth for every key shown in the visualized table.
    - Words are unique; the bucket a word lands in is computed client-side and never stored.

Why This Design:
    - Keeping the bucket out of the database lets the visualized table size change
      without migrating stored rows.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Index
from config.db_config import Base


class Word(Base):
    """
    Represents one key stored in the backing word store.
    """
    __tablename__ = "words"  # Name of the database table

    # Surrogate primary key; preserves insertion order for restores
    id = Column(Integer, primary_key=True, autoincrement=True)

    # The key itself, compared with exact (case-sensitive) equality
    word = Column(String, nullable=False, unique=True)

    # When the word was added
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("idx_words_word", "word"),
    )

    def __repr__(self):
        """
        Provides a string representation of the object for debugging.
        """
        return f"<Word(id={self.id}, word={self.word!r})>"
