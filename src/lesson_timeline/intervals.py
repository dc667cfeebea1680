"""Interval extractor — speech windows for the talking-character overlay.

Windows are projected from scene-relative sub-slots into global frames.
Sub-slots never overlap inside a scene and scenes never overlap each
other, so the resulting list is sorted and disjoint by construction;
``validation.validate_timeline`` checks that rather than this module
repairing it.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Sequence

from .models.timeline import ResolvedScene, SpeechWindow, SubSlot
from .types import MouthState

SlotPredicate = Callable[[SubSlot], bool]


def language_mask(language: str) -> SlotPredicate:
    """Return a predicate marking audio-backed slots spoken in *language*."""

    def _is_markable(slot: SubSlot) -> bool:
        return slot.duration_frames is not None and slot.language == language

    return _is_markable


def extract_speech_windows(
    scenes: Sequence[ResolvedScene],
    is_markable: SlotPredicate,
) -> tuple[SpeechWindow, ...]:
    """Collect global windows for every markable sub-slot.

    Args:
        scenes: Resolved scenes in playback order.
        is_markable: Policy deciding which sub-slots drive the overlay.

    Returns:
        Windows in scene order, then sub-slot order.
    """
    windows = []
    for scene in scenes:
        for slot in scene.sub_slots:
            if not is_markable(slot) or slot.duration_frames is None:
                continue
            start = scene.start_frame + slot.offset_frames
            windows.append(SpeechWindow(start_frame=start, end_frame=start + slot.duration_frames))
    return tuple(windows)


def window_at(frame: int, windows: Sequence[SpeechWindow]) -> SpeechWindow | None:
    """Return the window containing *frame*, or None."""
    starts = [w.start_frame for w in windows]
    idx = bisect_right(starts, frame) - 1
    if idx >= 0 and windows[idx].contains(frame):
        return windows[idx]
    return None


def speaking_state(frame: int, windows: Sequence[SpeechWindow], period: int) -> MouthState:
    """Return the overlay state at *frame*.

    Outside every window the overlay is idle. Inside one it alternates
    between open and closed every *period* frames, starting open on the
    window's first frame.
    """
    window = window_at(frame, windows)
    if window is None:
        return MouthState.IDLE
    phase = (frame - window.start_frame) // period
    return MouthState.OPEN if phase % 2 == 0 else MouthState.CLOSED
