# File: utils/frame_scheduler.py
# Cooperative tick source for the visualizer.
# Frame callbacks and posted completion events are queued here and executed one at a time
# by whichever thread pumps the scheduler, so table and animation state are never touched
# from two threads at once.

import itertools  # For monotonically increasing frame handles
import logging  # For logging callback failures
import threading  # For guarding the queues against posts from worker threads
import time  # For waiting on outstanding posts
from collections import OrderedDict, deque
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FrameScheduler:
    """
    Queues frame callbacks and cross-thread events for a single pumping thread.

    `request_frame` / `cancel_frame` mirror a browser's requestAnimationFrame pair;
    `post` is the only method meant to be called from other threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events_ready = threading.Condition(self._lock)
        self._frames: "OrderedDict[int, Callable[[], None]]" = OrderedDict()
        self._events: deque = deque()
        self._handles = itertools.count(1)
        self._outstanding = 0  # Posts promised by expect_post() but not delivered yet

    def request_frame(self, callback: Callable[[], None]) -> int:
        """
        Queue a callback for the next frame.

        Args:
            callback (Callable[[], None]): Function to run on the next pump.

        Returns:
            int: Handle usable with cancel_frame().
        """
        with self._lock:
            handle = next(self._handles)
            self._frames[handle] = callback
            return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        """Drop a queued frame. Unknown or already-run handles are ignored."""
        if handle is None:
            return
        with self._lock:
            self._frames.pop(handle, None)

    def expect_post(self) -> None:
        """Announce that a worker will post an event, so run_until_idle() waits for it."""
        with self._lock:
            self._outstanding += 1

    def withdraw_post(self) -> None:
        """Cancel an expect_post() whose worker was never started."""
        with self._events_ready:
            self._outstanding = max(self._outstanding - 1, 0)
            self._events_ready.notify_all()

    def post(self, callback: Callable[[], None], expected: bool = False) -> None:
        """
        Queue an event from any thread; it runs before the frames of the next pump.

        Args:
            callback (Callable[[], None]): Function to run on the pumping thread.
            expected (bool): True when the post settles an earlier expect_post().
        """
        with self._events_ready:
            self._events.append(callback)
            if expected:
                self._outstanding = max(self._outstanding - 1, 0)
            self._events_ready.notify_all()

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return bool(self._frames or self._events or self._outstanding)

    def run_pending(self) -> bool:
        """
        Pump once: run every queued event, then the frames queued before this call.

        Events and frames queued while pumping run on the next call. An exception raised
        by a callback is logged and re-raised; callbacks not yet run stay queued.

        Returns:
            bool: True if work remains queued or outstanding.
        """
        with self._lock:
            event_count = len(self._events)

        for _ in range(event_count):
            with self._lock:
                event = self._events.popleft()
            self._run(event)

        with self._lock:
            handles = list(self._frames)

        for handle in handles:
            # A callback earlier in this batch may have cancelled a later one
            with self._lock:
                frame = self._frames.pop(handle, None)
            if frame is not None:
                self._run(frame)

        return self.has_pending

    def run_until_idle(self, max_iterations: int = 10_000, wait_timeout: float = 5.0) -> int:
        """
        Pump until no frames, events or outstanding posts remain.

        Args:
            max_iterations (int): Upper bound on pumps, guards against runaway frame loops.
            wait_timeout (float): Seconds to wait for an outstanding post before giving up.

        Returns:
            int: Number of pumps performed.

        Raises:
            TimeoutError: If an outstanding post never arrives.
            RuntimeError: If work is still queued after max_iterations pumps.
        """
        iterations = 0
        while self.has_pending:
            if iterations >= max_iterations:
                raise RuntimeError(f"Scheduler still busy after {max_iterations} pumps.")
            self._wait_for_events(wait_timeout)
            self.run_pending()
            iterations += 1
        return iterations

    def _wait_for_events(self, timeout: float) -> None:
        # Block only when nothing is runnable and a worker still owes a post
        deadline = time.monotonic() + timeout
        with self._events_ready:
            while not self._frames and not self._events and self._outstanding:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError("Timed out waiting for a posted completion event.")
                self._events_ready.wait(remaining)

    def _run(self, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as e:
            logger.error(f"Scheduled callback {callback!r} failed: {e}")
            raise
