"""Timeline policy configuration via environment variables.

Every frame constant the engine consults lives here so that one change
(say, a faster frame rate) reaches every scene without per-scene edits.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator, model_validator

from .types import SceneKind

logger = logging.getLogger(__name__)

# Scene kind → total frames when no audio table is supplied.
DEFAULT_FALLBACK_FRAMES: dict[SceneKind, int] = {
    SceneKind.TITLE: 90,
    SceneKind.TERM: 180,
    SceneKind.CONTEXT: 210,
    SceneKind.EXAMPLE: 210,
    SceneKind.VOCABULARY: 240,
}

VALID_SPEECH_LANGUAGES = {"en", "ja"}


class TimelineConfig(BaseModel):
    """Frame constants consulted by the resolver, scheduler and extractor.

    ``base_buffer`` is head/tail room per spoken slot; ``inter_clip_gap``
    separates two clips played back to back inside one scene.
    """

    fps: int = Field(default=30, description="Output frame rate")
    base_buffer: int = Field(default=30, description="Per-slot buffer in frames")
    inter_clip_gap: int = Field(default=15, description="Gap between sequential clips in frames")
    fallback_frames: dict[SceneKind, int] = Field(
        default_factory=lambda: dict(DEFAULT_FALLBACK_FRAMES),
        description="Scene duration when no audio is available",
    )
    fallback_slot_spacing: int = Field(
        default=20,
        description="Sub-slot spacing without audio (presentation only, not audio-accurate)",
    )
    vocabulary_fallback_spacing: int = Field(
        default=5,
        description="Vocabulary item spacing without audio (presentation only)",
    )
    toggle_period: int = Field(default=4, description="Frames per speaking-overlay toggle")
    speech_language: str = Field(default="ja", description="Language track that drives the overlay")

    # Gaps and spacings of at least one frame keep sub-slot offsets
    # strictly increasing even around zero-length clips.
    @field_validator(
        "fps",
        "toggle_period",
        "inter_clip_gap",
        "fallback_slot_spacing",
        "vocabulary_fallback_spacing",
    )
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Frame rate, toggle period, gaps and spacings must be >= 1")
        return value

    @field_validator("base_buffer")
    @classmethod
    def validate_base_buffer(cls, value: int) -> int:
        if value < 0:
            raise ValueError("base_buffer must be >= 0")
        return value

    @field_validator("fallback_frames")
    @classmethod
    def validate_fallback_frames(cls, value: dict[SceneKind, int]) -> dict[SceneKind, int]:
        merged = dict(DEFAULT_FALLBACK_FRAMES)
        merged.update(value)
        for kind, frames in merged.items():
            if frames < 0:
                raise ValueError(f"Fallback frames for '{kind.value}' must be >= 0")
        return merged

    @field_validator("speech_language")
    @classmethod
    def validate_speech_language(cls, value: str) -> str:
        v = value.strip().lower()
        if v not in VALID_SPEECH_LANGUAGES:
            allowed = ", ".join(sorted(VALID_SPEECH_LANGUAGES))
            raise ValueError(f"Invalid speech language '{value}'. Allowed: {allowed}")
        return v

    # k * base_buffer >= (k - 1) * inter_clip_gap for every slot count k,
    # so the last clip of a scene always ends inside it.
    @model_validator(mode="after")
    def validate_buffer_covers_gaps(self) -> TimelineConfig:
        if self.base_buffer < self.inter_clip_gap:
            raise ValueError(
                f"base_buffer ({self.base_buffer}) must be >= inter_clip_gap ({self.inter_clip_gap})"
            )
        return self

    def buffer_frames_for(self, kind: SceneKind, slot_count: int) -> int:
        """Return the buffer added on top of a scene's spoken frames.

        Fixed-slot scenes scale the base buffer by their slot count
        (title 1x, term 4x, context and example 2x). The vocabulary scene
        instead pays one base buffer plus a flat inter-clip gap per item,
        so an empty list still lasts ``base_buffer`` frames.
        """
        if kind is SceneKind.VOCABULARY:
            return self.base_buffer + slot_count * self.inter_clip_gap
        return slot_count * self.base_buffer

    def fallback_for(self, kind: SceneKind, slot_count: int) -> int:
        """Return the audio-less duration of a scene."""
        if kind is SceneKind.VOCABULARY and slot_count == 0:
            return self.base_buffer
        return self.fallback_frames[kind]

    def spacing_for(self, kind: SceneKind) -> int:
        """Return the audio-less sub-slot spacing of a scene kind."""
        if kind is SceneKind.VOCABULARY:
            return self.vocabulary_fallback_spacing
        return self.fallback_slot_spacing

    @classmethod
    def from_env(cls) -> TimelineConfig:
        """Build config from environment variables."""
        return cls(
            fps=int(os.getenv("TIMELINE_FPS", "30")),
            base_buffer=int(os.getenv("TIMELINE_BASE_BUFFER", "30")),
            inter_clip_gap=int(os.getenv("TIMELINE_INTER_CLIP_GAP", "15")),
            fallback_slot_spacing=int(os.getenv("TIMELINE_FALLBACK_SPACING", "20")),
            vocabulary_fallback_spacing=int(os.getenv("TIMELINE_VOCAB_FALLBACK_SPACING", "5")),
            toggle_period=int(os.getenv("TIMELINE_TOGGLE_PERIOD", "4")),
            speech_language=os.getenv("TIMELINE_SPEECH_LANGUAGE", "ja"),
        )


# Singleton — initialised once on first access.
_config: TimelineConfig | None = None


def get_config() -> TimelineConfig:
    """Return the global config singleton, creating it on first access."""
    global _config
    if _config is None:
        _config = TimelineConfig.from_env()
    return _config


def update_config(**overrides: object) -> TimelineConfig:
    """Patch the live config."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = TimelineConfig(**data)
    logger.info("Timeline config updated: %s", ", ".join(sorted(k for k, v in overrides.items() if v is not None)))
    return _config


def reset_config() -> None:
    """Reset the config singleton (for testing)."""
    global _config
    _config = None
