# File: ui/visualizer_session.py
# Owns everything one visualizer page works with: the mirrored hash table, the insertion
# animator, the frame scheduler that ticks it and the backing word store.
# Store calls complete on worker threads; their results are posted back to the scheduler
# so the table and the animation only ever change on the pumping thread.

import concurrent.futures
import logging
from typing import List, Optional, Tuple

from db.word_store import WordStore
from utils.config_utils import VisualizerSettings
from utils.data_structures.hashmap import ChainedHashTable
from utils.data_structures.insertion_animator import AnimationGeometry, AnimationState, InsertionAnimator
from utils.frame_scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class VisualizerSession:
    """
    One user's hash table visualizer.

    Attributes:
        table (ChainedHashTable): Client-side mirror of the word store.
        animator (InsertionAnimator): Animates keys into `table`.
        scheduler (FrameScheduler): Tick source and completion-event queue.
        store (WordStore): Backing store for add/remove/search.
        search_result (Optional[bool]): Result of the latest search, None for an empty query.
        last_error (Optional[BaseException]): Most recent store failure, cleared on success.
    """

    def __init__(
        self,
        store: WordStore,
        settings: Optional[VisualizerSettings] = None,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        settings = settings or VisualizerSettings()
        self.settings = settings
        self.store = store
        self.scheduler = scheduler or FrameScheduler()
        self.table = ChainedHashTable(settings.bucket_count)
        self.animator = InsertionAnimator(
            self.table,
            AnimationGeometry(
                cell_width=settings.cell_width,
                cell_height=settings.cell_height,
                padding=settings.padding,
                total_steps=settings.animation_steps,
            ),
        )
        self.search_result: Optional[bool] = None
        self.last_error: Optional[BaseException] = None
        self._frame_handle: Optional[int] = None

    # ------------------------------------------------------------------ actions

    def add_word(self, key: str) -> concurrent.futures.Future:
        """
        Store the word, then animate it into the table once the store confirms.

        Insertion is not guarded: empty or whitespace keys are stored and animated as-is.
        """
        logger.info(f"Adding word: {key}")
        return self._request(lambda: self.store.add_word(key), lambda f: self._on_add_complete(key, f))

    def remove_word(self, key: str) -> Optional[concurrent.futures.Future]:
        """
        Delete the trimmed word from the store, then from the mirror.

        Returns:
            The pending future, or None when the key is blank and nothing was requested.
        """
        key = key.strip()
        if not key:
            return None
        logger.info(f"Removing word: {key}")
        return self._request(lambda: self.store.remove_word(key), lambda f: self._on_remove_complete(key, f))

    def search_word(self, key: str) -> Optional[concurrent.futures.Future]:
        """
        Ask the store whether the trimmed word exists; the answer lands in `search_result`.

        A blank query sets `search_result` to None immediately without a lookup.
        """
        key = key.strip()
        if not key:
            self.search_result = None
            return None
        return self._request(lambda: self.store.search_word(key), lambda f: self._on_search_complete(key, f))

    def restore_from_store(self) -> int:
        """
        Rebuild the mirror from the store without animating.

        Returns:
            int: Number of keys in the rebuilt table.
        """
        self.table.clear()
        for word in self.store.list_words():
            self.table.insert(word)
        logger.info(f"Restored {len(self.table)} words from the store.")
        return len(self.table)

    # ---------------------------------------------------------------- animation

    def start_animation(self, key: str, bucket_index: Optional[int] = None) -> AnimationState:
        """Cancel any pending frame, restart the animator and request the first frame."""
        self.scheduler.cancel_frame(self._frame_handle)
        state = self.animator.start(key, bucket_index)
        self._frame_handle = self.scheduler.request_frame(self._on_frame)
        return state

    def tick(self) -> bool:
        """
        Advance the animation by one frame.

        Returns:
            bool: True if further ticks are needed.
        """
        return self.animator.tick()

    @property
    def is_animating(self) -> bool:
        return self.animator.is_animating

    def snapshot(self) -> Tuple[List[Tuple[int, Tuple[str, ...]]], Optional[AnimationState]]:
        """Everything a renderer needs for one frame."""
        return self.table.enumerate(), self.animator.state

    def run_until_idle(self, max_iterations: int = 10_000, wait_timeout: float = 5.0) -> int:
        """Pump the scheduler until store completions and the animation have settled."""
        return self.scheduler.run_until_idle(max_iterations=max_iterations, wait_timeout=wait_timeout)

    def close(self) -> None:
        self.scheduler.cancel_frame(self._frame_handle)
        self.store.close()

    def _on_frame(self) -> None:
        self._frame_handle = None
        if self.tick():
            self._frame_handle = self.scheduler.request_frame(self._on_frame)

    # -------------------------------------------------------------- completions

    def _request(self, submit, handler) -> concurrent.futures.Future:
        # The post is announced before submitting, so a fast worker cannot settle it early
        self.scheduler.expect_post()
        try:
            future = submit()
        except Exception:
            self.scheduler.withdraw_post()
            raise
        # Deliver the result on the pumping thread, whichever thread finishes the future
        future.add_done_callback(
            lambda f: self.scheduler.post(lambda: handler(f), expected=True)
        )
        return future

    def _record_failure(self, action: str, key: str, future: concurrent.futures.Future) -> bool:
        error = future.exception()
        if error is None:
            self.last_error = None
            return False
        logger.error(f"{action} failed for '{key}': {error}")
        self.last_error = error
        return True

    def _on_add_complete(self, key: str, future: concurrent.futures.Future) -> None:
        if self._record_failure("Add", key, future):
            return
        logger.info(f"Word added: {key}")
        self.start_animation(key, self.table.bucket_for(key))

    def _on_remove_complete(self, key: str, future: concurrent.futures.Future) -> None:
        if self._record_failure("Remove", key, future):
            return
        self.table.remove(key)
        logger.info(f"Word removed: {key}")

    def _on_search_complete(self, key: str, future: concurrent.futures.Future) -> None:
        if self._record_failure("Search", key, future):
            return
        self.search_result = future.result()
        logger.info(f"Search result for {key}: {self.search_result}")
