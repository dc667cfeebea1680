"""Scene catalogue — which slots each scene kind plays, in which order."""

from __future__ import annotations

from .config import TimelineConfig
from .models.lesson import Lesson
from .models.timeline import SceneSpec, SlotSpec
from .types import SCENE_ORDER, SceneKind

# Scene kind → (slot name, language, lesson field read aloud)
FIXED_SLOTS: dict[SceneKind, tuple[tuple[str, str, str], ...]] = {
    SceneKind.TITLE: (
        ("title", "en", "title_text"),
    ),
    SceneKind.TERM: (
        ("word_en", "en", "word"),
        ("word_jp", "ja", "japanese_word_translation"),
        ("definition_en", "en", "definition"),
        ("definition_jp", "ja", "japanese_definition"),
    ),
    SceneKind.CONTEXT: (
        ("context_en", "en", "legal_context"),
        ("context_jp", "ja", "japanese_legal_context"),
    ),
    SceneKind.EXAMPLE: (
        ("example_en", "en", "example_sentence"),
        ("example_jp", "ja", "example_translation"),
    ),
}


def _slots_for(kind: SceneKind, lesson: Lesson) -> tuple[SlotSpec, ...]:
    if kind is SceneKind.VOCABULARY:
        # Vocabulary is read in English only, one clip per item.
        return tuple(
            SlotSpec(name=f"vocab_{i}", language="en", text=item.word)
            for i, item in enumerate(lesson.vocabulary_list)
        )
    return tuple(
        SlotSpec(name=name, language=language, text=getattr(lesson, field).replace("\n", " "))
        for name, language, field in FIXED_SLOTS[kind]
    )


def build_scene_specs(lesson: Lesson, config: TimelineConfig) -> tuple[SceneSpec, ...]:
    """Bind every scene kind to the lesson, in playback order.

    Args:
        lesson: Validated lesson content.
        config: Policy constants supplying buffers and fallbacks.

    Returns:
        One SceneSpec per scene kind.
    """
    specs = []
    for kind in SCENE_ORDER:
        slots = _slots_for(kind, lesson)
        specs.append(SceneSpec(
            kind=kind,
            slots=slots,
            fallback_frames=config.fallback_for(kind, len(slots)),
            buffer_frames=config.buffer_frames_for(kind, len(slots)),
            fallback_spacing=config.spacing_for(kind),
        ))
    return tuple(specs)

