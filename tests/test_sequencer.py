"""Tests for the sequencer."""

from __future__ import annotations

import pytest

from lesson_timeline.sequencer import sequence

pytestmark = pytest.mark.unit


class TestSequence:
    """Tests for sequence."""

    def test_fallback_layout(self):
        """Default fallback durations reproduce the fixed 930-frame layout."""
        starts, total = sequence([90, 180, 210, 210, 240])
        assert starts == [0, 90, 270, 480, 690]
        assert total == 930

    def test_contiguous(self):
        durations = [90, 300, 225, 198, 141]
        starts, total = sequence(durations)
        for i in range(len(durations) - 1):
            assert starts[i + 1] == starts[i] + durations[i]
        assert total == starts[-1] + durations[-1]

    def test_zero_length_scene(self):
        starts, total = sequence([10, 0, 5])
        assert starts == [0, 10, 10]
        assert total == 15

    def test_empty(self):
        assert sequence([]) == ([], 0)
