"""Structural checks on a built timeline.

These verify properties the engine guarantees by construction (contiguous
scenes, ordered sub-slots, sorted disjoint windows). They report issues;
they never repair the timeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .models.timeline import ResolvedScene, SpeechWindow, Timeline


@dataclass
class ValidationResult:
    """Aggregated result of all validation checks."""

    passed: bool
    issues: list[str] = field(default_factory=list)


def validate_scenes(scenes: tuple[ResolvedScene, ...] | list[ResolvedScene], total_frames: int) -> list[str]:
    """Check that scenes start at 0, are contiguous, and sum to the total.

    Returns:
        List of issue strings (empty = all valid).
    """
    issues: list[str] = []
    expected_start = 0
    for i, scene in enumerate(scenes):
        if scene.duration_frames < 0:
            issues.append(f"Scene {i} ({scene.id.value}): negative duration {scene.duration_frames}")
        if scene.start_frame != expected_start:
            issues.append(
                f"Scene {i} ({scene.id.value}): starts at {scene.start_frame}, expected {expected_start}"
            )
        expected_start = scene.start_frame + scene.duration_frames

    if expected_start != total_frames:
        issues.append(f"Total frames {total_frames} != end of last scene {expected_start}")
    return issues


def validate_sub_slots(scene: ResolvedScene) -> list[str]:
    """Check that sub-slot offsets start at 0, strictly increase and end inside the scene."""
    issues: list[str] = []
    offsets = [s.offset_frames for s in scene.sub_slots]
    if offsets and offsets[0] != 0:
        issues.append(f"Scene {scene.id.value}: first sub-slot at {offsets[0]}, expected 0")
    for prev, cur in zip(offsets, offsets[1:]):
        if cur <= prev:
            issues.append(f"Scene {scene.id.value}: sub-slot offset {cur} does not follow {prev}")
    for s in scene.sub_slots:
        end = s.offset_frames + (s.duration_frames or 0)
        if end > scene.duration_frames:
            issues.append(
                f"Scene {scene.id.value}: sub-slot {s.name} ends at {end}, past scene length {scene.duration_frames}"
            )
    return issues


def validate_windows(windows: tuple[SpeechWindow, ...] | list[SpeechWindow]) -> list[str]:
    """Check that speech windows are well-formed, sorted and disjoint."""
    issues: list[str] = []
    for i, w in enumerate(windows):
        if w.end_frame < w.start_frame:
            issues.append(f"Window {i}: ends at {w.end_frame} before it starts at {w.start_frame}")
    for i, (a, b) in enumerate(zip(windows, windows[1:])):
        if a.end_frame > b.start_frame:
            issues.append(f"Window {i + 1}: starts at {b.start_frame} inside window {i} ending at {a.end_frame}")
    return issues


def validate_timeline(timeline: Timeline) -> ValidationResult:
    """Run every structural check on *timeline*."""
    issues = validate_scenes(timeline.scenes, timeline.total_frames)
    for scene in timeline.scenes:
        issues.extend(validate_sub_slots(scene))
    issues.extend(validate_windows(timeline.speech_windows))
    return ValidationResult(passed=not issues, issues=issues)
