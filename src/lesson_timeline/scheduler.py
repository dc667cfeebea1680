"""Sub-slot scheduler — where each clip starts inside its scene."""

from __future__ import annotations

from itertools import accumulate

from .models.timeline import SceneSpec, SubSlot


def schedule_offsets(frames: tuple[int, ...] | list[int], gap: int) -> list[int]:
    """Return start offsets for clips played back to back.

    Slot 0 starts at 0; every later slot starts after the previous slot's
    frames plus one inter-clip gap.

    Args:
        frames: Frame length of each slot, in playback order.
        gap: Inter-clip gap in frames.

    Returns:
        One offset per slot (empty for an empty scene).
    """
    if not frames:
        return []
    return [0, *accumulate(f + gap for f in frames[:-1])]


def fallback_offsets(count: int, spacing: int, span: int | None = None) -> list[int]:
    """Return evenly spaced offsets for a scene rendered without audio.

    Presentation-only: the spacing is a staggered reveal, not a measurement
    of any clip, so these offsets must not be used to place sound.

    With *span* set, the spacing shrinks so the last offset still falls
    inside a scene of *span* frames. It never drops below one frame, so a
    scene with more slots than frames still overruns.
    """
    if span is not None and count > 1:
        spacing = min(spacing, max(1, (span - 1) // (count - 1)))
    return [k * spacing for k in range(count)]


def schedule_sub_slots(
    spec: SceneSpec,
    frames: tuple[int, ...] | None,
    gap: int,
) -> tuple[SubSlot, ...]:
    """Place every slot of *spec* relative to the scene start.

    Args:
        spec: Scene whose slots are placed.
        frames: Per-slot frame lengths, or None when the render has no audio.
        gap: Inter-clip gap in frames.

    Returns:
        SubSlots in slot order; durations are None without audio.
    """
    if frames is None:
        offsets = fallback_offsets(len(spec.slots), spec.fallback_spacing, spec.fallback_frames)
        return tuple(
            SubSlot(name=slot.name, language=slot.language, offset_frames=offset)
            for slot, offset in zip(spec.slots, offsets)
        )

    offsets = schedule_offsets(frames, gap)
    return tuple(
        SubSlot(
            name=slot.name,
            language=slot.language,
            offset_frames=offset,
            duration_frames=length,
        )
        for slot, offset, length in zip(spec.slots, offsets, frames)
    )
