"""Lesson content and measured audio durations — the engine's inputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VocabularyItem(BaseModel):
    """One entry of the closing vocabulary review."""

    model_config = ConfigDict(frozen=True)

    word: str
    translation: str


class Lesson(BaseModel):
    """Structured text of one legal-English lesson.

    Accepts the camelCase keys written by the content generator
    (``titleText``, ``japaneseDefinition``, ``vocabularyList`` ...) as well
    as the snake_case field names.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    category: str = ""
    title_text: str
    word: str
    japanese_word_translation: str
    definition: str
    japanese_definition: str
    legal_context: str
    japanese_legal_context: str
    example_sentence: str
    example_translation: str
    vocabulary_list: tuple[VocabularyItem, ...] = Field(default_factory=tuple)


class AudioDurations(BaseModel):
    """Seconds per spoken slot, as measured after speech synthesis.

    Mirrors the synthesis metadata file: one key per fixed slot plus
    ``vocab``, a list with one English reading per vocabulary item.
    Values are not range-checked here; the duration resolver rejects
    malformed numbers before any scene is built.
    """

    model_config = ConfigDict(frozen=True)

    title: float
    word_en: float
    word_jp: float
    definition_en: float
    definition_jp: float
    context_en: float
    context_jp: float
    example_en: float
    example_jp: float
    vocab: tuple[float, ...] = Field(default_factory=tuple)

    def seconds_for(self, slot: str) -> float:
        """Return the duration of a named slot (``vocab_3`` style for vocabulary)."""
        if slot.startswith("vocab_"):
            return self.vocab[int(slot.removeprefix("vocab_"))]
        return getattr(self, slot)

    def named_durations(self) -> list[tuple[str, float]]:
        """Return every ``(slot, seconds)`` pair in playback order."""
        fixed = [
            (name, getattr(self, name))
            for name in (
                "title",
                "word_en",
                "word_jp",
                "definition_en",
                "definition_jp",
                "context_en",
                "context_jp",
                "example_en",
                "example_jp",
            )
        ]
        return fixed + [(f"vocab_{i}", s) for i, s in enumerate(self.vocab)]
