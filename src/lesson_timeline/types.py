"""Shared enums, type aliases and helpers for tool parameters."""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Literal

from pydantic import Field


class SceneKind(str, Enum):
    """Scene kinds, declared in playback order."""

    TITLE = "title"
    TERM = "term"
    CONTEXT = "context"
    EXAMPLE = "example"
    VOCABULARY = "vocabulary"


SCENE_ORDER: tuple[SceneKind, ...] = tuple(SceneKind)


class AudioMode(str, Enum):
    """Whether scene durations come from measured audio or from fallbacks."""

    WITH_AUDIO = "with_audio"
    FALLBACK_ONLY = "fallback_only"


class MouthState(str, Enum):
    """State of the talking-character overlay at a given frame."""

    IDLE = "idle"
    OPEN = "open"
    CLOSED = "closed"


def coerce_json_param(value: str | dict | list | None, expected_type: type) -> dict | list | None:
    """Parse MCP JSON-RPC string params back to dict/list.

    MCP JSON-RPC transport may serialize dict/list params as JSON strings.
    Pydantic v2 rejects these — this helper coerces them back.

    Args:
        value: The parameter value (possibly a JSON string).
        expected_type: Expected Python type (``dict`` or ``list``).

    Returns:
        Parsed value if coercion succeeded, original value otherwise.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = json.loads(value)
        if isinstance(parsed, expected_type):
            return parsed
    except (json.JSONDecodeError, TypeError):
        pass
    return value

# ── Literal enums ────────────────────────────────────────────────────────────

Language = Literal["en", "ja"]

# ── Annotated aliases ────────────────────────────────────────────────────────

FrameIndex = Annotated[int, Field(ge=0, description="Global frame index (0-based)")]
LessonParam = Annotated[dict | str, Field(
    description="Lesson content (camelCase keys: titleText, word, definition, vocabularyList, ...)",
)]
AudioDurationsParam = Annotated[dict | str | None, Field(
    description=(
        "Optional audio durations in seconds (title, word_en, word_jp, definition_en, "
        "definition_jp, context_en, context_jp, example_en, example_jp, vocab[])"
    ),
)]
