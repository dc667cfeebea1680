"""Timeline tools — 3 tools on a FastMCP sub-server."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..config import get_config, update_config
from ..engine import build_timeline, frame_state
from ..errors import make_tool_error
from ..models.lesson import AudioDurations, Lesson
from ..models.timeline import Timeline
from ..types import AudioDurationsParam, FrameIndex, LessonParam, coerce_json_param
from ..validation import validate_timeline

logger = logging.getLogger(__name__)
timeline_server = FastMCP("timeline")


def _build(lesson: dict | str, audio_durations: dict | str | None) -> Timeline:
    """Validate raw tool params and build a timeline from them."""
    lesson_obj = Lesson.model_validate(coerce_json_param(lesson, dict))
    raw_durations = coerce_json_param(audio_durations, dict)
    durations = AudioDurations.model_validate(raw_durations) if raw_durations is not None else None
    timeline = build_timeline(lesson_obj, durations)

    check = validate_timeline(timeline)
    if not check.passed:
        logger.warning("Timeline self-check reported %d issue(s): %s", len(check.issues), "; ".join(check.issues))
    return timeline


@timeline_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def timeline_build(
    lesson: LessonParam,
    audio_durations: AudioDurationsParam = None,
) -> dict:
    """Lay out the scene table and speech windows for one lesson video.

    Args:
        lesson: Lesson content with camelCase keys.
        audio_durations: Measured clip lengths in seconds; omit to use
            fallback timing for every scene.

    Returns:
        Dict with fps, audioMode, totalFrames, scenes and speechWindows.
    """
    try:
        return _build(lesson, audio_durations).to_render_props()
    except Exception as exc:
        return make_tool_error(exc)


@timeline_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def timeline_frame(
    lesson: LessonParam,
    frame: FrameIndex,
    audio_durations: AudioDurationsParam = None,
) -> dict:
    """Describe what is on screen at one frame.

    The layout is rebuilt from the inputs on every call, so the answer
    depends only on (lesson, audio durations, frame).

    Args:
        lesson: Lesson content with camelCase keys.
        frame: Global frame index.
        audio_durations: Measured clip lengths in seconds, or omitted.

    Returns:
        Dict with sceneId, sceneFrame, progress, mouth and window.
    """
    try:
        timeline = _build(lesson, audio_durations)
        return frame_state(timeline, frame, get_config().toggle_period)
    except Exception as exc:
        return make_tool_error(exc)


@timeline_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def timeline_configure(
    fps: Annotated[int | None, Field(ge=1, description="Output frame rate")] = None,
    base_buffer: Annotated[int | None, Field(ge=0, description="Per-slot buffer in frames")] = None,
    inter_clip_gap: Annotated[int | None, Field(ge=1, description="Gap between clips in frames")] = None,
    toggle_period: Annotated[int | None, Field(ge=1, description="Frames per overlay toggle")] = None,
    speech_language: Annotated[str | None, Field(description='Overlay language track: "en" or "ja"')] = None,
) -> dict:
    """Reconfigure timeline constants at runtime.

    Changes take effect immediately for all subsequent tool calls.

    Args:
        fps: Output frame rate.
        base_buffer: Per-slot buffer in frames.
        inter_clip_gap: Gap between sequential clips in frames.
        toggle_period: Frames per speaking-overlay toggle.
        speech_language: Language track that drives the overlay.

    Returns:
        Dict with current_config.
    """
    try:
        overrides = {
            "fps": fps,
            "base_buffer": base_buffer,
            "inter_clip_gap": inter_clip_gap,
            "toggle_period": toggle_period,
            "speech_language": speech_language,
        }
        if any(v is not None for v in overrides.values()):
            cfg = update_config(**overrides)
        else:
            cfg = get_config()
        return {"current_config": cfg.model_dump(mode="json")}
    except Exception as exc:
        return make_tool_error(exc)
