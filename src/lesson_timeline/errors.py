"""Structured error handling — input errors, classification, and tool error model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ValidationError


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    INVALID_DURATION = "INVALID_DURATION"
    INCOMPLETE_AUDIO_TABLE = "INCOMPLETE_AUDIO_TABLE"
    INVALID_LESSON = "INVALID_LESSON"
    FRAME_OUT_OF_RANGE = "FRAME_OUT_OF_RANGE"
    CONFIG_INVALID = "CONFIG_INVALID"
    UNKNOWN = "UNKNOWN"


class TimelineInputError(ValueError):
    """Raised when timeline construction is refused for malformed input."""


class InvalidDurationError(TimelineInputError):
    """Raised for a negative, NaN, infinite or overflowing audio duration."""

    def __init__(self, slot: str, seconds: float) -> None:
        self.slot = slot
        self.seconds = seconds
        super().__init__(f"Invalid duration for slot {slot!r}: {seconds!r} seconds")


class IncompleteAudioTableError(TimelineInputError):
    """Raised when the audio table does not cover every slot of the lesson."""


class FrameOutOfRangeError(IndexError):
    """Raised when a frame query falls outside ``[0, total_frames)``."""

    def __init__(self, frame: int, total_frames: int) -> None:
        self.frame = frame
        self.total_frames = total_frames
        super().__init__(f"Frame {frame} outside timeline of {total_frames} frames")


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    if isinstance(error, InvalidDurationError):
        return (
            ErrorCategory.INVALID_DURATION,
            "Audio durations must be finite and >= 0 seconds — re-measure the clip",
        )
    if isinstance(error, IncompleteAudioTableError):
        return (
            ErrorCategory.INCOMPLETE_AUDIO_TABLE,
            "Supply a duration for every slot (one vocab entry per item) or omit audio entirely",
        )
    if isinstance(error, FrameOutOfRangeError):
        return (
            ErrorCategory.FRAME_OUT_OF_RANGE,
            f"Frame must be between 0 and {error.total_frames - 1}",
        )
    if isinstance(error, ValidationError):
        if error.title == "TimelineConfig":
            return (
                ErrorCategory.CONFIG_INVALID,
                "Invalid timeline setting — check fps, gaps and speech_language",
            )
        return (
            ErrorCategory.INVALID_LESSON,
            "Lesson or audio table failed schema validation — check field names and types",
        )
    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    return ToolError(
        error=str(error),
        category=cat.value,
        hint=hint,
        retryable=False,
    ).model_dump()
