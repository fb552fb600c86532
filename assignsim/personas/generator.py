"""
Randomized persona generation.

Builds population-shaped rosters instead of hand-picked presets:

- Each generated learner has a Bloom ceiling (1-6), the highest level they
  are comfortable working at
- A standard class of 20 follows STANDARD_BLOOM_DISTRIBUTION; a custom
  size spreads learners evenly across ceilings
- Traits are Gaussian draws clamped to [0, 1]; confidence is centred on
  the ceiling
- 0-2 random overlays and 0-3 narrative tags, deduplicated

All draws come from an injected random.Random, so a seeded generator
reproduces the same roster.
"""

from __future__ import annotations

import random

from loguru import logger

from assignsim.core.models import CognitiveLevel, LearnerPersona, Overlay, PersonaTraits, clamp_unit

# Students per Bloom ceiling in a standard class of 20
STANDARD_BLOOM_DISTRIBUTION: dict[int, int] = {
    1: 2,  # Remember
    2: 4,  # Understand
    3: 6,  # Apply
    4: 5,  # Analyze
    5: 2,  # Evaluate
    6: 1,  # Create
}

RANDOM_OVERLAYS: tuple[str, ...] = (
    Overlay.ATTENTION_LIMITING.value,
    Overlay.READING_LIMITING.value,
    Overlay.FATIGUE_SENSITIVE.value,
    Overlay.ANXIETY_PRONE.value,
    Overlay.LANGUAGE_LEARNER.value,
)

NARRATIVE_TAGS: tuple[str, ...] = (
    "quiet",
    "resilient",
    "curious",
    "focused",
    "creative",
    "analytical",
    "collaborative",
    "independent",
)

# (mean, std dev) per trait
TRAIT_DISTRIBUTIONS: dict[str, tuple[float, float]] = {
    "reading": (0.65, 0.15),
    "quantitative": (0.60, 0.20),
    "attention": (0.60, 0.20),
}
CONFIDENCE_STD_DEV = 0.12


class PersonaGenerator:
    """Draws synthetic learner rosters."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def gaussian(self, mean: float, std_dev: float) -> float:
        """Normal draw clamped to [0, 1]."""
        return clamp_unit(self.rng.gauss(mean, std_dev))

    def confidence_for_ceiling(self, bloom_ceiling: int) -> float:
        """Confidence centred at 0.3 for ceiling 1 rising to 0.9 for ceiling 6."""
        mean = 0.3 + (bloom_ceiling - 1) * 0.12
        return self.gaussian(mean, CONFIDENCE_STD_DEV)

    def pick_distinct(self, pool: tuple[str, ...], max_count: int) -> list[str]:
        """0..max_count draws from pool, duplicates dropped."""
        count = self.rng.randint(0, max_count)
        picked: list[str] = []
        for _ in range(count):
            choice = self.rng.choice(pool)
            if choice not in picked:
                picked.append(choice)
        return picked

    def generate_persona(self, persona_id: str, bloom_ceiling: int) -> LearnerPersona:
        """
        Generate one learner.

        Args:
            persona_id: Unique id for the learner
            bloom_ceiling: Highest comfortable Bloom level (1-6)
        """
        bloom_ceiling = max(1, min(6, bloom_ceiling))
        ceiling_level = CognitiveLevel.ordered()[bloom_ceiling - 1]

        traits = PersonaTraits(
            reading=self.gaussian(*TRAIT_DISTRIBUTIONS["reading"]),
            quantitative=self.gaussian(*TRAIT_DISTRIBUTIONS["quantitative"]),
            attention=self.gaussian(*TRAIT_DISTRIBUTIONS["attention"]),
            confidence=self.confidence_for_ceiling(bloom_ceiling),
        )
        overlays = self.pick_distinct(RANDOM_OVERLAYS, 2)

        return LearnerPersona(
            id=persona_id,
            display_name=f"Student {persona_id.rsplit('_', 1)[-1]} ({ceiling_level.value})",
            traits=traits,
            overlays=overlays,
            narrative_tags=self.pick_distinct(NARRATIVE_TAGS, 3),
            is_accessibility_profile=bool(overlays),
        )

    def generate_classroom(self) -> list[LearnerPersona]:
        """Standard class of 20 following STANDARD_BLOOM_DISTRIBUTION."""
        personas: list[LearnerPersona] = []
        student_number = 1
        for bloom_ceiling, count in STANDARD_BLOOM_DISTRIBUTION.items():
            for _ in range(count):
                personas.append(self.generate_persona(f"student_{student_number}", bloom_ceiling))
                student_number += 1

        logger.debug(f"Generated standard classroom of {len(personas)} personas")
        return personas

    def generate_custom_classroom(self, total_students: int) -> list[LearnerPersona]:
        """
        Class of a given size spread evenly across Bloom ceilings 1-6.

        Raises:
            ValueError: If total_students < 1
        """
        if total_students < 1:
            raise ValueError(f"total_students must be at least 1, got {total_students}")

        personas = [
            self.generate_persona(f"student_{i}", ((i - 1) % 6) + 1)
            for i in range(1, total_students + 1)
        ]
        logger.debug(f"Generated custom classroom of {len(personas)} personas")
        return personas
