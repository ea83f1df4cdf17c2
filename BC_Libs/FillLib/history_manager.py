"""
Bounded undo history for Brush Color.

Classes:
    HistoryManager: FIFO-bounded stack of buffer snapshots
"""

import logging
from typing import List, Optional

import numpy as np

from BC_Libs.constants import MAX_UNDO_STATES

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Ordered undo stack of pixel snapshots, most recent last.

    Pushing past ``capacity`` silently discards the oldest entry, so the
    stack never holds more than ``capacity`` snapshots.

    Example:
        >>> history = HistoryManager(capacity=2)
        >>> history.push(buffer.snapshot())
        >>> previous = history.pop()
    """

    def __init__(self, capacity: int = MAX_UNDO_STATES) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = int(capacity)
        self._entries: List[np.ndarray] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def can_undo(self) -> bool:
        return bool(self._entries)

    def push(self, snapshot: np.ndarray) -> None:
        """
        Append a snapshot, evicting the oldest entry when over capacity.

        The snapshot must already be a copy; it is stored as given.
        """
        self._entries.append(snapshot)
        if len(self._entries) > self._capacity:
            self._entries.pop(0)
            logger.debug(f"History full, discarded oldest of {self._capacity} snapshots")

    def pop(self) -> Optional[np.ndarray]:
        """Remove and return the most recent snapshot, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
