"""
Persona catalog: fixed learner presets.

Six standard learners and five accessibility profiles. Presets are
immutable LearnerPersona instances; callers build variations with
create_custom_persona().
"""

from __future__ import annotations

from collections.abc import Callable

from assignsim.core.models import LearnerPersona, Overlay, PersonaTraits


def _preset(
    key: str,
    name: str,
    traits: tuple[float, float, float, float],
    tags: list[str],
    overlays: list[Overlay] | None = None,
) -> LearnerPersona:
    reading, quantitative, attention, confidence = traits
    return LearnerPersona(
        id=f"persona_{key}",
        display_name=name,
        traits=PersonaTraits(
            reading=reading,
            quantitative=quantitative,
            attention=attention,
            confidence=confidence,
        ),
        overlays=[o.value for o in overlays or []],
        narrative_tags=tags,
        grade_level="6-12",
        is_accessibility_profile=bool(overlays),
    )


# Traits: (reading, quantitative, attention, confidence)
PREDEFINED_PERSONAS: dict[str, LearnerPersona] = {
    # Standard learners
    "strong_reader": _preset(
        "strong_reader", "Strong Reader", (0.9, 0.7, 0.85, 0.85),
        ["analytical", "detail-oriented", "focused", "organized"],
    ),
    "visual_learner": _preset(
        "visual_learner", "Visual Learner", (0.65, 0.75, 0.7, 0.7),
        ["visual", "spatial", "creative", "intuitive"],
    ),
    "hands_on_learner": _preset(
        "hands_on", "Hands-On Learner", (0.6, 0.8, 0.65, 0.75),
        ["practical", "experiential", "kinesthetic", "applied"],
    ),
    "collaborative_learner": _preset(
        "collaborative", "Collaborative Learner", (0.7, 0.65, 0.75, 0.8),
        ["social", "collaborative", "communicative", "empathetic"],
    ),
    "struggling_learner": _preset(
        "struggling", "Struggling Learner", (0.45, 0.4, 0.5, 0.4),
        ["needs-support", "persistent", "effort-based", "resilient"],
    ),
    "gifted_learner": _preset(
        "gifted", "Gifted Learner", (0.95, 0.9, 0.95, 0.9),
        ["advanced", "curious", "independent", "creative"],
    ),
    # Accessibility profiles
    "dyslexic": _preset(
        "dyslexic", "Dyslexic Learner", (0.45, 0.7, 0.65, 0.55),
        ["visual-spatial", "creative", "big-picture-thinker", "verbal"],
        [Overlay.READING_LIMITING],
    ),
    "adhd": _preset(
        "adhd", "ADHD Learner", (0.65, 0.6, 0.4, 0.65),
        ["creative", "hyperfocus-capable", "energetic", "big-picture-thinker"],
        [Overlay.ATTENTION_LIMITING],
    ),
    "fatigue_sensitive": _preset(
        "fatigue_sensitive", "Fatigue-Sensitive Learner", (0.7, 0.7, 0.5, 0.7),
        ["needs-breaks", "energy-conscious", "paced", "strategic"],
        [Overlay.FATIGUE_SENSITIVE],
    ),
    "anxiety_prone": _preset(
        "anxiety", "Anxiety-Prone Learner", (0.75, 0.65, 0.8, 0.4),
        ["perfectionist", "cautious", "thoughtful", "thorough"],
        [Overlay.ANXIETY_PRONE],
    ),
    "esl_learner": _preset(
        "esl", "ESL Learner", (0.5, 0.7, 0.75, 0.55),
        ["multilingual", "translating-concepts", "cultural-bridge", "determined"],
        [Overlay.LANGUAGE_LEARNER],
    ),
}


def get_all_personas() -> list[LearnerPersona]:
    """Every preset, standard learners first."""
    return list(PREDEFINED_PERSONAS.values())


def get_persona(key: str) -> LearnerPersona:
    """
    Look up a preset by catalog key or persona id.

    Raises:
        KeyError: If no preset matches
    """
    if key in PREDEFINED_PERSONAS:
        return PREDEFINED_PERSONAS[key]
    for persona in PREDEFINED_PERSONAS.values():
        if persona.id == key:
            return persona
    raise KeyError(f"Unknown persona: {key}")


def filter_personas(predicate: Callable[[LearnerPersona], bool]) -> list[LearnerPersona]:
    return [p for p in get_all_personas() if predicate(p)]


def get_accessibility_personas() -> list[LearnerPersona]:
    return filter_personas(lambda p: p.is_accessibility_profile)


def get_standard_personas() -> list[LearnerPersona]:
    return filter_personas(lambda p: not p.is_accessibility_profile)


def create_custom_persona(
    persona_id: str,
    display_name: str,
    reading: float,
    quantitative: float,
    attention: float,
    confidence: float,
    overlays: list[str] | None = None,
    narrative_tags: list[str] | None = None,
    grade_level: str | None = None,
) -> LearnerPersona:
    """
    Build a persona from user input.

    Traits are clamped into [0, 1] and overlays deduplicated by the model.
    """
    return LearnerPersona(
        id=persona_id,
        display_name=display_name,
        traits=PersonaTraits(
            reading=reading,
            quantitative=quantitative,
            attention=attention,
            confidence=confidence,
        ),
        overlays=overlays or [],
        narrative_tags=narrative_tags or [],
        grade_level=grade_level,
        is_accessibility_profile=bool(overlays),
    )
