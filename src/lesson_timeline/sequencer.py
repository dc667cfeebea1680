"""Sequencer — lays scenes end to end on the global timeline."""

from __future__ import annotations

from itertools import accumulate


def sequence(durations: list[int] | tuple[int, ...]) -> tuple[list[int], int]:
    """Return each scene's global start frame and the total length.

    ``start[0] == 0`` and ``start[i] == start[i-1] + duration[i-1]``, so
    scenes are contiguous and never overlap.

    Args:
        durations: Scene lengths in frames, in playback order.

    Returns:
        Tuple of (start frames, total frames).
    """
    ends = list(accumulate(durations))
    starts = [0, *ends[:-1]] if ends else []
    total = ends[-1] if ends else 0
    return starts, total
