"""Shared test fixtures for lesson-timeline."""

from __future__ import annotations

from typing import Any

import pytest

import lesson_timeline.config as cfg_mod
from lesson_timeline.config import TimelineConfig
from lesson_timeline.models.lesson import AudioDurations, Lesson


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


LESSON_DATA: dict = {
    "category": "Civil Code (民法)",
    "titleText": "Good Faith\nin Contracts",
    "word": "Good faith",
    "japaneseWordTranslation": "信義誠実",
    "definition": "The duty to act honestly in exercising rights and performing obligations.",
    "japaneseDefinition": "権利の行使及び義務の履行は、信義に従い誠実に行わなければならない。",
    "legalContext": "Article 1(2) of the Civil Code codifies the principle of good faith.",
    "japaneseLegalContext": "民法第1条第2項は信義誠実の原則を定める。",
    "exampleSentence": "The court held that the seller breached the duty of good faith.",
    "exampleTranslation": "裁判所は、売主が信義則に違反したと判断した。",
    "vocabularyList": [
        {"word": "obligation", "translation": "債務"},
        {"word": "performance", "translation": "履行"},
        {"word": "breach", "translation": "違反"},
    ],
}

DURATION_DATA: dict = {
    "title": 2.0,
    "word_en": 1.0,
    "word_jp": 1.2,
    "definition_en": 2.0,
    "definition_jp": 1.8,
    "context_en": 3.0,
    "context_jp": 2.5,
    "example_en": 2.2,
    "example_jp": 2.4,
    "vocab": [0.8, 0.9, 0.5],
}


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    """Reset the config singleton and strip TIMELINE_* env between tests."""
    for key in (
        "TIMELINE_FPS",
        "TIMELINE_BASE_BUFFER",
        "TIMELINE_INTER_CLIP_GAP",
        "TIMELINE_TOGGLE_PERIOD",
        "TIMELINE_SPEECH_LANGUAGE",
        "TIMELINE_FALLBACK_SPACING",
        "TIMELINE_VOCAB_FALLBACK_SPACING",
    ):
        monkeypatch.delenv(key, raising=False)
    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def config() -> TimelineConfig:
    """Default policy: 30 fps, 30-frame buffer, 15-frame gap."""
    return TimelineConfig()


@pytest.fixture()
def lesson_data() -> dict:
    """Raw camelCase lesson dict as written by the content generator."""
    return {**LESSON_DATA, "vocabularyList": [dict(v) for v in LESSON_DATA["vocabularyList"]]}


@pytest.fixture()
def duration_data() -> dict:
    """Raw audio metadata dict as written after speech synthesis."""
    return {**DURATION_DATA, "vocab": list(DURATION_DATA["vocab"])}


@pytest.fixture()
def lesson(lesson_data) -> Lesson:
    return Lesson.model_validate(lesson_data)


@pytest.fixture()
def durations(duration_data) -> AudioDurations:
    return AudioDurations.model_validate(duration_data)


@pytest.fixture()
def make_durations(duration_data):
    """Factory for audio tables with selected fields overridden."""

    def _factory(**overrides) -> AudioDurations:
        return AudioDurations.model_validate({**duration_data, **overrides})

    return _factory
