"""Duration resolver — measured seconds to whole frames.

Frames are always rounded up: allocating one frame too few would cut the
tail of a clip, while one frame too many is an invisible pause.
"""

from __future__ import annotations

import logging
import math

from .errors import IncompleteAudioTableError, InvalidDurationError
from .models.lesson import AudioDurations, Lesson
from .models.timeline import SceneSpec

logger = logging.getLogger(__name__)

# Products such as 1.2 * 30 land a hair above the integer in binary
# floating point; rounding first keeps ceil from adding a phantom frame.
# A genuine fraction below 1e-9 frames is rounded away with the noise.
_FRAME_PRECISION = 9


def check_seconds(slot: str, seconds: float) -> float:
    """Return *seconds* unchanged, or raise if it is not a usable duration.

    Raises:
        InvalidDurationError: For negative, NaN or infinite values.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidDurationError(slot, seconds)
    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidDurationError(slot, seconds)
    return float(seconds)


def seconds_to_frames(seconds: float, fps: int, *, slot: str = "clip") -> int:
    """Convert a clip length to frames, rounding up.

    Args:
        seconds: Clip length in seconds (finite, >= 0).
        fps: Frame rate.
        slot: Slot name used in the error message.

    Returns:
        ``ceil(seconds * fps)``, after rounding the product to nine
        decimals. A clip that overshoots a whole frame by less than
        1e-9 of a frame is counted as that whole frame.

    Raises:
        InvalidDurationError: For malformed seconds, or a length too large
            to express as a frame count.
    """
    check_seconds(slot, seconds)
    product = seconds * fps
    if not math.isfinite(product):
        raise InvalidDurationError(slot, seconds)
    return math.ceil(round(product, _FRAME_PRECISION))


def validate_audio_table(lesson: Lesson, durations: AudioDurations) -> None:
    """Reject an audio table before any scene is computed from it.

    Every duration must be finite and non-negative, and the vocabulary list
    must carry exactly one duration per vocabulary item.

    Raises:
        InvalidDurationError: On the first malformed duration.
        IncompleteAudioTableError: When the vocab list length disagrees.
    """
    for slot, seconds in durations.named_durations():
        check_seconds(slot, seconds)
        if seconds == 0:
            logger.warning("Slot %s has a zero-length clip", slot)

    expected = len(lesson.vocabulary_list)
    if len(durations.vocab) != expected:
        raise IncompleteAudioTableError(
            f"Audio table has {len(durations.vocab)} vocab duration(s) "
            f"for {expected} vocabulary item(s)"
        )


def slot_frames(spec: SceneSpec, durations: AudioDurations, fps: int) -> tuple[int, ...]:
    """Return the frame length of each slot in *spec*, in slot order."""
    return tuple(
        seconds_to_frames(durations.seconds_for(slot.name), fps, slot=slot.name)
        for slot in spec.slots
    )


def resolve_duration(spec: SceneSpec, frames: tuple[int, ...] | None) -> int:
    """Return the scene length in frames.

    Args:
        spec: Scene to size.
        frames: Per-slot frame lengths, or None when the render has no audio.

    Returns:
        ``spec.fallback_frames`` without audio, otherwise the spoken frames
        plus the scene's buffer.
    """
    if frames is None:
        return spec.fallback_frames
    return sum(frames) + spec.buffer_frames
