import os
import sys
import time

import pandas as pd
import streamlit as st

# Add the project root so the dashboard runs with `streamlit run ui/streamlit_dashboard.py`
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.db_config import Base, get_engine
from config.logger_config import configure_logger
from db.word_store import WordStore
from ui.canvas_renderer import CanvasRenderer
from ui.visualizer_session import VisualizerSession
from utils.config_utils import load_visualizer_settings

logger = configure_logger(name="hash_table_visualizer", log_file="dashboard.log")


def create_session() -> VisualizerSession:
    """Create the word table if needed and mirror its contents into a new session."""
    Base.metadata.create_all(get_engine())
    settings = load_visualizer_settings()
    session = VisualizerSession(WordStore(max_workers=settings.max_workers), settings=settings)
    restored = session.restore_from_store()
    logger.info(f"Visualizer session ready with {restored} stored words.")
    return session


def draw(placeholder, session: VisualizerSession, renderer: CanvasRenderer) -> None:
    snapshot, state = session.snapshot()
    placeholder.pyplot(renderer.render(snapshot, state))


def pump(placeholder, session: VisualizerSession, renderer: CanvasRenderer) -> None:
    """Deliver store completions and play the animation frame by frame."""
    interval = session.settings.frame_interval_ms / 1000
    while session.scheduler.has_pending:
        session.scheduler.run_pending()
        draw(placeholder, session, renderer)
        time.sleep(interval)


if "visualizer" not in st.session_state:
    st.session_state.visualizer = create_session()

session: VisualizerSession = st.session_state.visualizer
renderer = CanvasRenderer(session.animator.geometry)

# Streamlit App Title
st.title("Hash Table Visualizer")
st.caption(f"Separate chaining over {session.table.bucket_count} buckets")

new_word = st.text_input("Word:", placeholder="cat")
add_col, remove_col, search_col = st.columns(3)
canvas = st.empty()

if add_col.button("Add"):
    session.add_word(new_word)
    pump(canvas, session, renderer)

if remove_col.button("Remove"):
    session.remove_word(new_word)
    pump(canvas, session, renderer)

if search_col.button("Search"):
    session.search_word(new_word)
    pump(canvas, session, renderer)
    if session.search_result is None:
        st.info("Enter a word to search for.")
    elif session.search_result:
        st.success(f"'{new_word.strip()}' is in the table.")
    else:
        st.warning(f"'{new_word.strip()}' is not in the table.")

if session.last_error is not None:
    st.error(f"Error: {session.last_error}")

draw(canvas, session, renderer)

# Chain listing
st.subheader("Buckets")
st.dataframe(
    pd.DataFrame(
        [
            {"Bucket": index, "Length": len(chain), "Chain": " -> ".join(chain)}
            for index, chain in session.table.enumerate()
        ]
    ),
    hide_index=True,
)
