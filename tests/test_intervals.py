"""Tests for the interval extractor and speaking-state toggle."""

from __future__ import annotations

import pytest

from lesson_timeline.intervals import (
    extract_speech_windows,
    language_mask,
    speaking_state,
    window_at,
)
from lesson_timeline.models.timeline import ResolvedScene, SpeechWindow, SubSlot
from lesson_timeline.types import MouthState, SceneKind

pytestmark = pytest.mark.unit


def _term_scene(start: int = 90) -> ResolvedScene:
    return ResolvedScene(
        id=SceneKind.TERM,
        start_frame=start,
        duration_frames=300,
        sub_slots=(
            SubSlot(name="word_en", language="en", offset_frames=0, duration_frames=30),
            SubSlot(name="word_jp", language="ja", offset_frames=45, duration_frames=36),
            SubSlot(name="definition_en", language="en", offset_frames=96, duration_frames=60),
            SubSlot(name="definition_jp", language="ja", offset_frames=171, duration_frames=54),
        ),
    )


class TestExtractSpeechWindows:
    """Tests for extract_speech_windows."""

    def test_projects_to_global_frames(self):
        windows = extract_speech_windows([_term_scene()], language_mask("ja"))
        assert windows == (
            SpeechWindow(start_frame=135, end_frame=171),
            SpeechWindow(start_frame=261, end_frame=315),
        )

    def test_source_language_mask(self):
        windows = extract_speech_windows([_term_scene(start=0)], language_mask("en"))
        assert [(w.start_frame, w.end_frame) for w in windows] == [(0, 30), (96, 156)]

    def test_scene_order_then_slot_order(self):
        context = ResolvedScene(
            id=SceneKind.CONTEXT,
            start_frame=390,
            duration_frames=225,
            sub_slots=(
                SubSlot(name="context_en", language="en", offset_frames=0, duration_frames=90),
                SubSlot(name="context_jp", language="ja", offset_frames=105, duration_frames=75),
            ),
        )
        windows = extract_speech_windows([_term_scene(), context], language_mask("ja"))
        assert [w.start_frame for w in windows] == [135, 261, 495]

    def test_fallback_slots_never_marked(self):
        """Sub-slots without audio produce no window."""
        scene = ResolvedScene(
            id=SceneKind.TERM,
            start_frame=90,
            duration_frames=180,
            sub_slots=(SubSlot(name="word_jp", language="ja", offset_frames=20),),
        )
        assert extract_speech_windows([scene], language_mask("ja")) == ()

    def test_custom_predicate(self):
        windows = extract_speech_windows([_term_scene()], lambda s: s.name == "definition_en")
        assert windows == (SpeechWindow(start_frame=186, end_frame=246),)


class TestWindowAt:
    """Tests for window_at."""

    windows = (
        SpeechWindow(start_frame=135, end_frame=171),
        SpeechWindow(start_frame=261, end_frame=315),
    )

    def test_inside(self):
        assert window_at(140, self.windows) == self.windows[0]
        assert window_at(261, self.windows) == self.windows[1]

    def test_end_is_exclusive(self):
        assert window_at(171, self.windows) is None

    def test_before_and_between(self):
        assert window_at(0, self.windows) is None
        assert window_at(200, self.windows) is None

    def test_empty(self):
        assert window_at(10, ()) is None


class TestSpeakingState:
    """Tests for speaking_state."""

    windows = (SpeechWindow(start_frame=135, end_frame=171),)

    def test_idle_outside(self):
        assert speaking_state(0, self.windows, 4) is MouthState.IDLE
        assert speaking_state(171, self.windows, 4) is MouthState.IDLE

    def test_toggles_every_period(self):
        states = [speaking_state(f, self.windows, 4) for f in range(135, 147)]
        assert states == [MouthState.OPEN] * 4 + [MouthState.CLOSED] * 4 + [MouthState.OPEN] * 4

    def test_pure_function_of_frame(self):
        """Querying out of order gives the same answers as in order."""
        frames = [150, 136, 170, 10, 150]
        first = [speaking_state(f, self.windows, 4) for f in frames]
        second = [speaking_state(f, self.windows, 4) for f in reversed(frames)]
        assert first == list(reversed(second))
