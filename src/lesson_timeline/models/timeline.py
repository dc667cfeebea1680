"""Scene specs and the resolved timeline handed to the renderer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..types import AudioMode, Language, SceneKind

_OUTPUT_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SlotSpec(BaseModel):
    """One named audio slot a scene may contain."""

    model_config = ConfigDict(frozen=True)

    name: str
    language: Language
    text: str = ""


class SceneSpec(BaseModel):
    """A scene kind bound to lesson content, before timing is resolved."""

    model_config = ConfigDict(frozen=True)

    kind: SceneKind
    slots: tuple[SlotSpec, ...] = Field(default_factory=tuple)
    fallback_frames: int
    buffer_frames: int
    fallback_spacing: int


class SubSlot(BaseModel):
    """Start of one audio slot relative to its scene's first frame.

    ``duration_frames`` is None when the timeline was built without audio;
    offsets are then a fixed-spacing approximation, not audio-accurate.
    """

    model_config = _OUTPUT_CONFIG

    name: str
    language: Language
    offset_frames: int
    duration_frames: int | None = None


class ResolvedScene(BaseModel):
    """A scene placed on the global timeline."""

    model_config = _OUTPUT_CONFIG

    id: SceneKind
    start_frame: int
    duration_frames: int
    sub_slots: tuple[SubSlot, ...] = Field(default_factory=tuple)

    @property
    def end_frame(self) -> int:
        """First frame after this scene."""
        return self.start_frame + self.duration_frames

    def contains(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame


class SpeechWindow(BaseModel):
    """Half-open ``[start_frame, end_frame)`` interval of global frames."""

    model_config = _OUTPUT_CONFIG

    start_frame: int
    end_frame: int

    def contains(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame


class Timeline(BaseModel):
    """Complete layout of one render: scenes, speech windows, total length."""

    model_config = _OUTPUT_CONFIG

    fps: int
    audio_mode: AudioMode
    scenes: tuple[ResolvedScene, ...]
    speech_windows: tuple[SpeechWindow, ...] = Field(default_factory=tuple)
    total_frames: int

    def scene(self, kind: SceneKind | str) -> ResolvedScene:
        """Return the resolved scene of a given kind."""
        kind = SceneKind(kind)
        for scene in self.scenes:
            if scene.id is kind:
                return scene
        raise KeyError(kind.value)

    def to_render_props(self) -> dict:
        """Serialise with camelCase keys for the renderer."""
        return self.model_dump(mode="json", by_alias=True)
