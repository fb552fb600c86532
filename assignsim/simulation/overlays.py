"""
Overlay modifiers for the pairwise interaction model.

Each overlay (attention-limiting, reading-limiting, ...) has one modifier
function that looks at a problem and returns an OverlayEffect. Effects
from every overlay a persona carries are summed and applied once by the
interaction model:

- extra_confusion: added to the confusion-signal count
- time_scale: added to 1.0 and multiplied into time-on-task
- fatigue_scale: added to 1.0 and multiplied into the fatigue increment
- engagement_delta: added to the engagement score before clamping

Modifiers never alter perceived success, and time/fatigue scales are
non-negative so fatigue stays monotone.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from assignsim.core.models import CognitiveLevel, LearnerPersona, Overlay, Problem, normalize_overlay


@dataclass(frozen=True)
class OverlayEffect:
    """Additive perturbation contributed by one or more overlays."""
    extra_confusion: int = 0
    time_scale: float = 0.0
    fatigue_scale: float = 0.0
    engagement_delta: float = 0.0

    def __add__(self, other: OverlayEffect) -> OverlayEffect:
        return OverlayEffect(
            extra_confusion=self.extra_confusion + other.extra_confusion,
            time_scale=self.time_scale + other.time_scale,
            fatigue_scale=self.fatigue_scale + other.fatigue_scale,
            engagement_delta=self.engagement_delta + other.engagement_delta,
        )

    @property
    def is_neutral(self) -> bool:
        return self == NO_EFFECT


NO_EFFECT = OverlayEffect()

OverlayModifier = Callable[[Problem], OverlayEffect]

# Modifier registry - populated by @register decorator
MODIFIERS: dict[str, OverlayModifier] = {}


def register(overlay: Overlay):
    """Decorator to register an overlay modifier."""
    def decorator(fn: OverlayModifier) -> OverlayModifier:
        MODIFIERS[overlay.value] = fn
        return fn
    return decorator


def get_modifier(overlay: str | Overlay) -> OverlayModifier | None:
    """Get the modifier for an overlay (aliases accepted)."""
    return MODIFIERS.get(normalize_overlay(overlay))


# =============================================================================
# Modifiers
# =============================================================================


@register(Overlay.ATTENTION_LIMITING)
def attention_limiting(problem: Problem) -> OverlayEffect:
    """Context switches inside multi-part items are confusing; stamina drains faster."""
    return OverlayEffect(
        extra_confusion=1 if problem.is_multi_part else 0,
        fatigue_scale=0.15,
    )


@register(Overlay.READING_LIMITING)
def reading_limiting(problem: Problem) -> OverlayEffect:
    """Decoding cost grows with linguistic complexity."""
    return OverlayEffect(time_scale=0.35 * problem.linguistic_complexity)


@register(Overlay.LANGUAGE_LEARNER)
def language_learner(problem: Problem) -> OverlayEffect:
    """Translating dense vocabulary costs time."""
    return OverlayEffect(time_scale=0.25 * problem.linguistic_complexity)


@register(Overlay.FATIGUE_SENSITIVE)
def fatigue_sensitive(problem: Problem) -> OverlayEffect:
    """Every problem tires this learner a quarter faster."""
    return OverlayEffect(fatigue_scale=0.25)


@register(Overlay.ANXIETY_PRONE)
def anxiety_prone(problem: Problem) -> OverlayEffect:
    """Highly novel items feel threatening and cut engagement."""
    if problem.novelty_score > 0.75:
        return OverlayEffect(engagement_delta=-0.1)
    return NO_EFFECT


@register(Overlay.COGNITIVE_DEMAND)
def cognitive_demand(problem: Problem) -> OverlayEffect:
    """Analyze-and-above items take longer to think through."""
    if problem.cognitive_level.ordinal >= CognitiveLevel.ANALYZE.ordinal:
        return OverlayEffect(time_scale=0.15, fatigue_scale=0.1)
    return NO_EFFECT


def combined_effect(persona: LearnerPersona, problem: Problem) -> OverlayEffect:
    """
    Sum the effects of every overlay the persona carries.

    Overlays without a registered modifier contribute nothing.
    """
    total = NO_EFFECT
    for overlay in persona.overlays:
        modifier = MODIFIERS.get(overlay)
        if modifier is None:
            logger.warning(f"No modifier registered for overlay '{overlay}' ({persona.id})")
            continue
        total = total + modifier(problem)
    return total


__all__ = [
    "MODIFIERS",
    "NO_EFFECT",
    "OverlayEffect",
    "OverlayModifier",
    "combined_effect",
    "get_modifier",
    "register",
]
