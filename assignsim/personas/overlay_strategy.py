"""
Strategic overlay assignment.

Overlays are derived from the problem set rather than drawn at random.
The same problems and the same persona always yield the same overlays.

Rules:
1. Dense language (avg complexity > 0.7) + weak reader (< 0.5) -> reading-limiting
2. Long assignment (>= 60 estimated minutes) -> fatigue-sensitive
3. Bloom spike (consecutive levels differ by 2+) -> anxiety-prone
4. Very dense language (avg complexity > 0.8) -> language-learner
5. Mostly low levels + low attention + long simple work -> attention-limiting
6. Analyze-or-higher present + low confidence (< 0.5) -> cognitive-demand
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from loguru import logger

from assignsim.core.models import LearnerPersona, Overlay, Problem


@dataclass(frozen=True)
class ProblemSetStats:
    """Aggregate characteristics of an assignment's problems."""
    avg_complexity: float = 0.0
    avg_level: float = 1.0  # Bloom rank, 1-6
    max_level: int = 1
    total_time_minutes: float = 0.0
    has_bloom_spike: bool = False


def problem_set_stats(problems: Sequence[Problem]) -> ProblemSetStats:
    """Compute the statistics the overlay rules read."""
    if not problems:
        return ProblemSetStats()

    ordered = sorted(problems, key=lambda p: p.sequence_index)
    ranks = [p.cognitive_level.rank for p in ordered]
    has_spike = any(abs(a - b) >= 2 for a, b in zip(ranks, ranks[1:]))

    return ProblemSetStats(
        avg_complexity=sum(p.linguistic_complexity for p in ordered) / len(ordered),
        avg_level=sum(ranks) / len(ranks),
        max_level=max(ranks),
        total_time_minutes=sum(p.estimated_time_minutes or 0.0 for p in ordered),
        has_bloom_spike=has_spike,
    )


# A rule returns a human-readable trigger when it fires, else None
OverlayRule = Callable[[LearnerPersona, ProblemSetStats], "str | None"]


def _reading_rule(persona: LearnerPersona, stats: ProblemSetStats) -> str | None:
    if stats.avg_complexity > 0.7 and persona.traits.reading < 0.5:
        return (
            f"High text load (complexity: {stats.avg_complexity:.2f}) + "
            f"weak reader (level: {persona.traits.reading:.2f})"
        )
    return None


def _fatigue_rule(persona: LearnerPersona, stats: ProblemSetStats) -> str | None:
    if stats.total_time_minutes >= 60:
        return f"Long assessment ({stats.total_time_minutes:.0f} minutes total)"
    return None


def _anxiety_rule(persona: LearnerPersona, stats: ProblemSetStats) -> str | None:
    if stats.has_bloom_spike:
        return "Assignment has Bloom spikes (large difficulty jumps)"
    return None


def _language_rule(persona: LearnerPersona, stats: ProblemSetStats) -> str | None:
    if stats.avg_complexity > 0.8:
        return f"Very high linguistic complexity ({stats.avg_complexity:.2f})"
    return None


def _attention_rule(persona: LearnerPersona, stats: ProblemSetStats) -> str | None:
    mostly_low_level = stats.avg_level <= 2
    low_attention = persona.traits.attention < 0.5
    simple_but_long = stats.avg_complexity < 0.4 and stats.total_time_minutes > 45
    if mostly_low_level and low_attention and simple_but_long:
        return (
            f"Low Bloom level (avg: {stats.avg_level:.1f}) + "
            f"low attention ({persona.traits.attention:.2f}) + long simple tasks"
        )
    return None


def _cognitive_demand_rule(persona: LearnerPersona, stats: ProblemSetStats) -> str | None:
    if stats.max_level >= 4 and persona.traits.confidence < 0.5:
        return (
            f"High Bloom (max: {stats.max_level}) + "
            f"low confidence ({persona.traits.confidence:.2f})"
        )
    return None


OVERLAY_RULES: list[tuple[Overlay, OverlayRule]] = [
    (Overlay.READING_LIMITING, _reading_rule),
    (Overlay.FATIGUE_SENSITIVE, _fatigue_rule),
    (Overlay.ANXIETY_PRONE, _anxiety_rule),
    (Overlay.LANGUAGE_LEARNER, _language_rule),
    (Overlay.ATTENTION_LIMITING, _attention_rule),
    (Overlay.COGNITIVE_DEMAND, _cognitive_demand_rule),
]


@dataclass
class OverlayExplanation:
    """Why a persona received its overlays."""
    persona_id: str
    display_name: str
    applied_overlays: list[str] = field(default_factory=list)
    triggers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "persona_id": self.persona_id,
            "display_name": self.display_name,
            "applied_overlays": self.applied_overlays,
            "triggers": self.triggers,
        }


def _evaluate(persona: LearnerPersona, stats: ProblemSetStats) -> OverlayExplanation:
    explanation = OverlayExplanation(persona_id=persona.id, display_name=persona.label)
    for overlay, rule in OVERLAY_RULES:
        trigger = rule(persona, stats)
        if trigger is not None:
            if overlay.value not in explanation.applied_overlays:
                explanation.applied_overlays.append(overlay.value)
            explanation.triggers.append(trigger)
    return explanation


def explain_overlays(
    personas: Sequence[LearnerPersona],
    problems: Sequence[Problem],
) -> list[OverlayExplanation]:
    """Report which overlays each persona would receive and the trigger for each."""
    stats = problem_set_stats(problems)
    return [_evaluate(persona, stats) for persona in personas]


def assign_overlays(
    personas: Sequence[LearnerPersona],
    problems: Sequence[Problem],
) -> list[LearnerPersona]:
    """
    Apply the overlay rules to every persona.

    Returns new persona instances; overlays a persona already carries are
    kept and triggered overlays are merged in (deduplicated).
    """
    stats = problem_set_stats(problems)
    assigned: list[LearnerPersona] = []
    for persona in personas:
        explanation = _evaluate(persona, stats)
        if explanation.applied_overlays:
            logger.debug(
                f"Overlays for {persona.id}: {explanation.applied_overlays} "
                f"({'; '.join(explanation.triggers)})"
            )
            persona = persona.with_overlays(explanation.applied_overlays)
        assigned.append(persona)
    return assigned
