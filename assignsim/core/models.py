"""
Core Input Models.

Canonical representations of the two entities every simulation consumes:

- Problem: one decomposed, tagged assignment item (produced upstream by
  the text-decomposition step, read-only here)
- LearnerPersona: one synthetic student with stable traits and zero or
  more behavioural overlays

Both are frozen pydantic models. Problem fields are range-checked at
construction so a malformed record is rejected where it is produced;
persona traits are clamped into [0, 1] instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CognitiveLevel(str, Enum):
    """
    Revised Bloom's Taxonomy level.

    Ordered from lowest to highest cognitive demand; used both as a display
    tag and as a numeric difficulty weight.
    """

    REMEMBER = "Remember"
    UNDERSTAND = "Understand"
    APPLY = "Apply"
    ANALYZE = "Analyze"
    EVALUATE = "Evaluate"
    CREATE = "Create"

    @classmethod
    def ordered(cls) -> list[CognitiveLevel]:
        """All levels, easiest first."""
        return list(cls)

    @classmethod
    def from_value(cls, value: str | CognitiveLevel) -> CognitiveLevel:
        """Parse a level name case-insensitively."""
        if isinstance(value, CognitiveLevel):
            return value
        normalized = str(value).strip().lower()
        for level in cls:
            if level.value.lower() == normalized:
                return level
        raise ValueError(f"Unknown cognitive level: {value!r}")

    @property
    def ordinal(self) -> int:
        """Zero-based position (Remember=0 ... Create=5)."""
        return list(CognitiveLevel).index(self)

    @property
    def rank(self) -> int:
        """One-based position (Remember=1 ... Create=6)."""
        return self.ordinal + 1

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            CognitiveLevel.REMEMBER: "green",
            CognitiveLevel.UNDERSTAND: "cyan",
            CognitiveLevel.APPLY: "blue",
            CognitiveLevel.ANALYZE: "yellow",
            CognitiveLevel.EVALUATE: "magenta",
            CognitiveLevel.CREATE: "red",
        }[self]


class Overlay(str, Enum):
    """Named behavioural modifiers a persona can carry."""

    ATTENTION_LIMITING = "adhd"
    READING_LIMITING = "dyslexic"
    FATIGUE_SENSITIVE = "fatigue_sensitive"
    ANXIETY_PRONE = "anxiety_prone"
    LANGUAGE_LEARNER = "esl"
    COGNITIVE_DEMAND = "cognitive_demand"


# Alternate spellings seen in persona sources, mapped to the canonical value
OVERLAY_ALIASES: dict[str, str] = {
    "attention_limiting": Overlay.ATTENTION_LIMITING.value,
    "dyslexia": Overlay.READING_LIMITING.value,
    "reading_limiting": Overlay.READING_LIMITING.value,
    "fatigue": Overlay.FATIGUE_SENSITIVE.value,
    "fatigue_sensitivity": Overlay.FATIGUE_SENSITIVE.value,
    "anxiety": Overlay.ANXIETY_PRONE.value,
    "ell": Overlay.LANGUAGE_LEARNER.value,
    "language_learner": Overlay.LANGUAGE_LEARNER.value,
}


def normalize_overlay(name: str | Overlay) -> str:
    """Canonical identifier for an overlay name (unknown names pass through lowercased)."""
    if isinstance(name, Overlay):
        return name.value
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    return OVERLAY_ALIASES.get(key, key)


def _dedupe(values: list[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return tuple(seen)


def clamp_unit(value: float) -> float:
    """Clamp a number into [0, 1]."""
    return max(0.0, min(1.0, float(value)))


class Problem(BaseModel):
    """
    One decomposed assignment item.

    Accepts snake_case or camelCase keys (``length_words`` / ``lengthWords``)
    so records from the decomposition step load unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    id: str = Field(..., min_length=1, description="Identifier, unique within an assignment")
    text: str = Field("", description="Rendered problem content")
    length_words: int = Field(0, ge=0, description="Word count of text")
    is_multi_part: bool = Field(False, description="True if the item has sub-parts")
    cognitive_level: CognitiveLevel
    linguistic_complexity: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False)
    novelty_score: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False)
    sequence_index: int = Field(..., ge=1, description="1-based position in assignment order")

    # Optional metadata carried through from decomposition
    similarity_to_previous: float | None = Field(None, ge=0.0, le=1.0, allow_inf_nan=False)
    estimated_time_minutes: float | None = Field(None, gt=0.0, allow_inf_nan=False)
    test_type: str | None = None
    subject: str | None = None

    @field_validator("cognitive_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> CognitiveLevel:
        return CognitiveLevel.from_value(value)

    @model_validator(mode="before")
    @classmethod
    def _fill_length(cls, data: Any) -> Any:
        # Derive the word count from the text when the producer omitted it
        if isinstance(data, dict):
            has_length = "length_words" in data or "lengthWords" in data
            if not has_length and data.get("text"):
                data = {**data, "length_words": len(str(data["text"]).split())}
        return data

    @property
    def similarity(self) -> float:
        """Similarity to neighbouring problems (falls back to 1 - novelty)."""
        if self.similarity_to_previous is not None:
            return self.similarity_to_previous
        return 1.0 - self.novelty_score

    def excerpt(self, limit: int = 100) -> str:
        """First ``limit`` characters of the text."""
        return self.text[:limit]


class PersonaTraits(BaseModel):
    """Stable trait scores, each clamped into [0, 1]."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    reading: float = 0.5  # Reading proficiency
    quantitative: float = 0.5  # Quantitative fluency
    attention: float = 0.5  # Sustained-attention capacity
    confidence: float = 0.5  # Self-confidence

    @field_validator("reading", "quantitative", "attention", "confidence", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return clamp_unit(value)

    def to_dict(self) -> dict[str, float]:
        return {
            "reading": self.reading,
            "quantitative": self.quantitative,
            "attention": self.attention,
            "confidence": self.confidence,
        }


class LearnerPersona(BaseModel):
    """
    One synthetic student.

    Overlays are normalised to canonical identifiers and deduplicated;
    narrative tags are display-only and never affect scoring.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    display_name: str = ""
    traits: PersonaTraits = Field(default_factory=PersonaTraits)
    overlays: tuple[str, ...] = ()
    narrative_tags: tuple[str, ...] = ()
    grade_level: str | None = None
    is_accessibility_profile: bool = False

    @field_validator("overlays", mode="before")
    @classmethod
    def _normalize_overlays(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        return _dedupe([normalize_overlay(v) for v in value])

    @field_validator("narrative_tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        return _dedupe([str(v).strip() for v in value])

    def has_overlay(self, overlay: str | Overlay) -> bool:
        """Check whether the persona carries an overlay (aliases accepted)."""
        return normalize_overlay(overlay) in self.overlays

    def with_overlays(self, overlays: list[str] | tuple[str, ...]) -> LearnerPersona:
        """Return a copy carrying the given overlays merged with the existing ones."""
        return LearnerPersona(
            id=self.id,
            display_name=self.display_name,
            traits=self.traits,
            overlays=[*self.overlays, *overlays],
            narrative_tags=self.narrative_tags,
            grade_level=self.grade_level,
            is_accessibility_profile=self.is_accessibility_profile,
        )

    @property
    def label(self) -> str:
        """Display name, falling back to the id."""
        return self.display_name or self.id
