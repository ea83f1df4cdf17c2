"""
Unit tests for history_manager module.
"""

import numpy as np
import pytest

from BC_Libs.FillLib.history_manager import HistoryManager


def _snapshot(value):
    return np.full((2, 2, 4), value, dtype=np.uint8)


class TestHistoryManager:
    """Tests for HistoryManager class."""

    def test_starts_empty(self):
        history = HistoryManager()

        assert len(history) == 0
        assert not history.can_undo
        assert history.capacity == 15

    def test_pop_returns_most_recent(self):
        history = HistoryManager()
        history.push(_snapshot(1))
        history.push(_snapshot(2))

        assert int(history.pop()[0, 0, 0]) == 2
        assert int(history.pop()[0, 0, 0]) == 1

    def test_pop_on_empty_returns_none(self):
        history = HistoryManager()
        assert history.pop() is None

    def test_evicts_oldest_past_capacity(self):
        """After N > 15 pushes, only the newest 15 remain."""
        history = HistoryManager()
        for value in range(20):
            history.push(_snapshot(value))

        assert len(history) == 15

        popped = []
        while history.can_undo:
            popped.append(int(history.pop()[0, 0, 0]))

        assert popped == list(range(19, 4, -1))

    def test_custom_capacity(self):
        history = HistoryManager(capacity=2)
        for value in range(3):
            history.push(_snapshot(value))

        assert len(history) == 2
        assert int(history.pop()[0, 0, 0]) == 2

    def test_clear(self):
        history = HistoryManager()
        history.push(_snapshot(1))

        history.clear()

        assert len(history) == 0
        assert history.pop() is None

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            HistoryManager(capacity=0)
