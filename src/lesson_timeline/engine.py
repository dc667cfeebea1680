"""Timeline construction — one pure pass from lesson + audio to layout.

The audio mode is decided once, up front, and threaded through every
scene; no scene re-checks whether audio exists. The renderer receives
the finished Timeline as plain data and may query it on every frame.
"""

from __future__ import annotations

import logging

from .config import TimelineConfig, get_config
from .errors import FrameOutOfRangeError
from .intervals import extract_speech_windows, language_mask, speaking_state, window_at
from .models.lesson import AudioDurations, Lesson
from .models.timeline import ResolvedScene, Timeline
from .resolver import resolve_duration, slot_frames, validate_audio_table
from .scenes import build_scene_specs
from .scheduler import schedule_sub_slots
from .sequencer import sequence
from .types import AudioMode

logger = logging.getLogger(__name__)


def resolve_audio_mode(durations: AudioDurations | None) -> AudioMode:
    """Return the single audio policy for a render."""
    return AudioMode.FALLBACK_ONLY if durations is None else AudioMode.WITH_AUDIO


def build_timeline(
    lesson: Lesson,
    durations: AudioDurations | None = None,
    config: TimelineConfig | None = None,
) -> Timeline:
    """Lay out every scene, sub-slot and speech window of a lesson video.

    Args:
        lesson: Lesson content.
        durations: Measured clip lengths, or None to use fallback timing.
        config: Policy constants; defaults to the global config.

    Returns:
        A new immutable Timeline. Identical inputs give identical output.

    Raises:
        InvalidDurationError: A duration is negative, NaN or infinite.
        IncompleteAudioTableError: The vocab durations do not match the list.
    """
    cfg = config if config is not None else get_config()
    mode = resolve_audio_mode(durations)
    if mode is AudioMode.WITH_AUDIO:
        validate_audio_table(lesson, durations)

    specs = build_scene_specs(lesson, cfg)
    frames_by_scene = [
        slot_frames(spec, durations, cfg.fps) if mode is AudioMode.WITH_AUDIO else None
        for spec in specs
    ]
    scene_durations = [resolve_duration(spec, frames) for spec, frames in zip(specs, frames_by_scene)]
    starts, total = sequence(scene_durations)

    scenes = tuple(
        ResolvedScene(
            id=spec.kind,
            start_frame=start,
            duration_frames=duration,
            sub_slots=schedule_sub_slots(spec, frames, cfg.inter_clip_gap),
        )
        for spec, frames, start, duration in zip(specs, frames_by_scene, starts, scene_durations)
    )
    windows = extract_speech_windows(scenes, language_mask(cfg.speech_language))

    logger.debug(
        "Built %s timeline: %d scene(s), %d speech window(s), %d frame(s)",
        mode.value,
        len(scenes),
        len(windows),
        total,
    )
    return Timeline(
        fps=cfg.fps,
        audio_mode=mode,
        scenes=scenes,
        speech_windows=windows,
        total_frames=total,
    )


def _check_frame(timeline: Timeline, frame: int) -> None:
    if not 0 <= frame < timeline.total_frames:
        raise FrameOutOfRangeError(frame, timeline.total_frames)


def scene_at(timeline: Timeline, frame: int) -> tuple[ResolvedScene, int]:
    """Return the scene visible at *frame* and the frame index inside it.

    Zero-length scenes are never visible.

    Raises:
        FrameOutOfRangeError: *frame* is outside the timeline.
    """
    _check_frame(timeline, frame)
    for scene in timeline.scenes:
        if scene.contains(frame):
            return scene, frame - scene.start_frame
    raise FrameOutOfRangeError(frame, timeline.total_frames)


def progress(timeline: Timeline, frame: int) -> float:
    """Return the fraction of the video played at *frame* (0.0 to <1.0)."""
    _check_frame(timeline, frame)
    return frame / timeline.total_frames


def frame_state(timeline: Timeline, frame: int, toggle_period: int) -> dict:
    """Describe everything frame-dependent the renderer needs at *frame*.

    Args:
        timeline: A built timeline.
        frame: Global frame index.
        toggle_period: Frames per overlay toggle.

    Returns:
        Dict with sceneId, sceneFrame, progress, mouth and the active window.
    """
    scene, local = scene_at(timeline, frame)
    window = window_at(frame, timeline.speech_windows)
    mouth = speaking_state(frame, timeline.speech_windows, toggle_period)
    return {
        "frame": frame,
        "sceneId": scene.id.value,
        "sceneFrame": local,
        "progress": progress(timeline, frame),
        "mouth": mouth.value,
        "window": window.model_dump(by_alias=True) if window else None,
    }
