"""
This module defines the state machine that animates a key into its hash table chain.

Overview:
    - A new key appears above the table, drops into its bucket row, then slides to the
      end of that bucket's chain.
    - Each phase takes a fixed number of ticks. Every tick covers 1 / (steps remaining + 1)
      of the distance still left, which needs no stored velocity and stops the key
      1 / (steps + 1) short of its target; the commit snaps it into place.
    - The table only changes when the animation commits; until then the key is purely visual.

Phases:
    IDLE -> DROPPING_TO_BUCKET -> SLIDING_TO_CHAIN_END -> COMMITTED -> IDLE

Starting a new animation while one is in flight replaces it; the replaced key is never
committed.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from utils.data_structures.hashmap import ChainedHashTable

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    DROPPING_TO_BUCKET = "dropping_to_bucket"
    SLIDING_TO_CHAIN_END = "sliding_to_chain_end"
    COMMITTED = "committed"


@dataclass(frozen=True)
class AnimationGeometry:
    """Canvas geometry shared by the animator and the renderer."""
    cell_width: float = 100
    cell_height: float = 30
    padding: float = 5
    total_steps: int = 20

    def row_y(self, bucket_index: int) -> float:
        """Top edge of a bucket row."""
        return bucket_index * (self.cell_height + self.padding) + self.padding

    def chain_x(self, slot: int) -> float:
        """Left edge of a cell; slot 0 is the bucket cell, slot n the n-th chain cell."""
        return self.padding + (self.cell_width + self.padding) * slot


@dataclass
class AnimationState:
    """Mutable state of the insertion currently in flight."""
    key: str
    bucket_index: int
    chain_position: int
    phase: Phase
    step: int
    current_x: float
    current_y: float
    target_x: float
    target_y: float


class InsertionAnimator:
    """
    Drives one animated insertion at a time into a ChainedHashTable.

    The animator never schedules itself: callers invoke `tick()` once per frame until it
    returns False.
    """

    def __init__(self, table: ChainedHashTable, geometry: Optional[AnimationGeometry] = None):
        self.table = table
        self.geometry = geometry or AnimationGeometry()
        self._state: Optional[AnimationState] = None

    @property
    def state(self) -> Optional[AnimationState]:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase if self._state else Phase.IDLE

    @property
    def is_animating(self) -> bool:
        return self._state is not None

    def start(self, key: str, bucket_index: Optional[int] = None) -> AnimationState:
        """
        Begin animating a key toward its bucket, replacing any animation in flight.

        Args:
            key: The key to insert.
            bucket_index: Target bucket; computed from the table's hash when omitted.

        Returns:
            AnimationState: The freshly created state.
        """
        if self._state is not None:
            logger.info(f"Animation of '{self._state.key}' preempted by '{key}'; it will not be committed.")

        if bucket_index is None:
            bucket_index = self.table.bucket_for(key)

        geometry = self.geometry
        self._state = AnimationState(
            key=key,
            bucket_index=bucket_index,
            # Slot the key will occupy; fixes how far the slide phase travels
            chain_position=self.table.chain_length(bucket_index),
            phase=Phase.DROPPING_TO_BUCKET,
            step=0,
            current_x=geometry.padding,
            current_y=-geometry.cell_height,
            target_x=geometry.chain_x(1),
            target_y=geometry.row_y(bucket_index),
        )
        logger.debug(f"Animating '{key}' into bucket {bucket_index} at chain position {self._state.chain_position}.")
        return self._state

    def tick(self) -> bool:
        """
        Advance the animation by one frame.

        Returns:
            bool: True while further ticks are needed, False once idle.
        """
        state = self._state
        if state is None:
            return False

        total_steps = self.geometry.total_steps

        if state.step < total_steps:
            fraction = 1.0 / (total_steps - state.step + 1)
            state.current_x += (state.target_x - state.current_x) * fraction
            if state.phase is Phase.DROPPING_TO_BUCKET:
                state.current_y += (state.target_y - state.current_y) * fraction
            state.step += 1
            return True

        if state.phase is Phase.DROPPING_TO_BUCKET:
            state.phase = Phase.SLIDING_TO_CHAIN_END
            state.step = 0
            state.target_x = self.geometry.chain_x(state.chain_position + 1)
            return True

        state.phase = Phase.COMMITTED
        self._commit(state)
        return False

    def _commit(self, state: AnimationState) -> None:
        # Single point where an animated insertion becomes table data
        if self.table.insert(state.key):
            logger.info(f"Committed '{state.key}' to bucket {state.bucket_index}.")
        else:
            logger.info(f"'{state.key}' already in bucket {state.bucket_index}; commit was a no-op.")
        self._state = None
