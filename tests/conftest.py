# tests/conftest.py
import os
import sys

import pytest

# Add the parent directory to the system path to ensure correct module import
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("MPLBACKEND", "Agg")

from sqlalchemy.orm import sessionmaker

from config.db_config import Base, build_engine
from db.schema.word_schema import Word  # noqa: F401  Registers the words table
from db.word_store import WordStore
from ui.visualizer_session import VisualizerSession
from utils.config_utils import VisualizerSettings
from utils.frame_scheduler import FrameScheduler


@pytest.fixture
def engine():
    """
    In-memory SQLite engine with the word table created.
    """
    engine = build_engine("sqlite://", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def word_store(session_factory):
    """
    Word store backed by the in-memory database. A single worker keeps requests ordered.
    """
    store = WordStore(session_factory=session_factory, max_workers=1)
    yield store
    store.close()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def visualizer(word_store, scheduler):
    """
    Visualizer session with the default geometry (10 buckets, 20 steps per phase).
    """
    return VisualizerSession(word_store, settings=VisualizerSettings(), scheduler=scheduler)
