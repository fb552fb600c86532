"""
Pairwise Interaction Model.

Closed-form signals for one learner persona attempting one problem:

1. PERCEIVED SUCCESS: ability vs. cognitive-level difficulty
2. TIME ON TASK: length x complexity x level x reading speed
3. CONFUSION SIGNALS: additive points from novelty, complexity and level gap
4. ENGAGEMENT: novelty appeal, success, fatigue and confidence blend
5. FATIGUE UPDATE: compounds from low success and elapsed time

Every function is pure: identical inputs always give identical outputs.
Numeric inputs are clamped here rather than rejected; range validation
happens when a Problem is constructed.
"""

from __future__ import annotations

from loguru import logger

from assignsim.core.models import LearnerPersona, Problem, clamp_unit
from assignsim.simulation.models import BloomMismatch, InteractionResult
from assignsim.simulation.overlays import NO_EFFECT, OverlayEffect, combined_effect
from assignsim.simulation.tuning import DEFAULT_CONFIG, SimulationConfig


def scaled_ability(persona: LearnerPersona, config: SimulationConfig = DEFAULT_CONFIG) -> float:
    """
    Weighted learner ability on the 0-5 difficulty scale.

    Formula: (0.4 x reading + 0.3 x quantitative + 0.3 x confidence) x 5
    """
    traits = persona.traits
    ability = (
        clamp_unit(traits.reading) * config.ability_weight_reading
        + clamp_unit(traits.quantitative) * config.ability_weight_quantitative
        + clamp_unit(traits.confidence) * config.ability_weight_confidence
    )
    return ability * config.ability_scale


def perceived_success(
    persona: LearnerPersona,
    problem: Problem,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """
    Probability the learner perceives themselves as successful.

    Formula: clamp(1 - (difficulty - ability) / 5, 0.1, 1.0)

    Success degrades linearly as the level's difficulty weight exceeds the
    scaled ability, and never drops below the floor.
    """
    difficulty = config.difficulty_weight(problem.cognitive_level)
    ability = scaled_ability(persona, config)
    success = 1.0 - (difficulty - ability) / config.success_divisor
    return max(config.success_floor, min(config.success_ceiling, success))


def time_on_task(
    persona: LearnerPersona,
    problem: Problem,
    config: SimulationConfig = DEFAULT_CONFIG,
    effect: OverlayEffect = NO_EFFECT,
) -> int:
    """
    Seconds the learner spends on the problem.

    Formula: words x (1 + 1.5 x complexity) x level_multiplier x (1 + (1 - reading))
    scaled by (1 + overlay time_scale), rounded to the nearest second.
    """
    complexity = clamp_unit(problem.linguistic_complexity)
    reading = clamp_unit(persona.traits.reading)

    complexity_multiplier = 1 + complexity * config.complexity_time_factor
    level_multiplier = config.time_multiplier(problem.cognitive_level)
    reading_speed_factor = 1 + (1 - reading)
    overlay_multiplier = 1 + max(0.0, effect.time_scale)

    seconds = (
        max(0, problem.length_words)
        * complexity_multiplier
        * level_multiplier
        * reading_speed_factor
        * overlay_multiplier
    )
    # Half-up rounding; Python's round() is banker's rounding
    return int(seconds + 0.5)


def level_gap(persona: LearnerPersona, problem: Problem, config: SimulationConfig = DEFAULT_CONFIG) -> float:
    """Problem level ordinal (0-5) minus the confidence-derived level estimate."""
    estimated_level = clamp_unit(persona.traits.confidence) * config.level_estimate_scale
    return problem.cognitive_level.ordinal - estimated_level


def bloom_mismatch(gap: float, config: SimulationConfig = DEFAULT_CONFIG) -> BloomMismatch:
    """Severity band for a level gap (same cut points as the confusion rule)."""
    if gap > config.level_gap_severe:
        return BloomMismatch.SEVERE
    if gap > config.level_gap_mild:
        return BloomMismatch.MILD
    return BloomMismatch.NONE


def confusion_signals(
    persona: LearnerPersona,
    problem: Problem,
    config: SimulationConfig = DEFAULT_CONFIG,
    effect: OverlayEffect = NO_EFFECT,
) -> int:
    """
    Count confusion triggers with an additive point system.

    - High novelty: +2 (> 0.75), else +1 (> 0.5)
    - Dense language: +2 for a weak reader (< 0.6), else +1 (complexity > 0.7)
    - Level gap: +3 (> 2), else +1 (> 1)
    - Overlay extras (attention-limiting on a multi-part item: +1)
    """
    signals = 0
    novelty = clamp_unit(problem.novelty_score)
    complexity = clamp_unit(problem.linguistic_complexity)

    if novelty > config.novelty_high:
        signals += 2
    elif novelty > config.novelty_moderate:
        signals += 1

    if complexity > config.complexity_high and clamp_unit(persona.traits.reading) < config.weak_reader_threshold:
        signals += 2
    elif complexity > config.complexity_high:
        signals += 1

    gap = level_gap(persona, problem, config)
    if gap > config.level_gap_severe:
        signals += 3
    elif gap > config.level_gap_mild:
        signals += 1

    return max(0, signals + effect.extra_confusion)


def novelty_appeal(novelty: float, config: SimulationConfig = DEFAULT_CONFIG) -> float:
    """Sweet spot between 0.3 and 0.7; too novel overwhelms, too familiar bores."""
    novelty = clamp_unit(novelty)
    if novelty > config.novelty_sweet_spot_high:
        return max(0.0, 1 - (novelty - config.novelty_sweet_spot_high) * config.novelty_overload_penalty)
    if novelty > config.novelty_sweet_spot_low:
        return 1.0
    return config.novelty_familiar_appeal


def engagement_score(
    persona: LearnerPersona,
    problem: Problem,
    fatigue: float,
    config: SimulationConfig = DEFAULT_CONFIG,
    effect: OverlayEffect = NO_EFFECT,
) -> float:
    """
    Engagement in [0, 1].

    Formula: 0.3 x novelty_appeal + 0.3 x success + 0.3 x (1 - fatigue x 0.5)
             + 0.1 x (0.5 + confidence x 0.5)
    """
    success = perceived_success(persona, problem, config)
    fatigue_discount = 1 - clamp_unit(fatigue) * config.fatigue_engagement_discount
    confidence_boost = 0.5 + clamp_unit(persona.traits.confidence) * 0.5

    engagement = (
        novelty_appeal(problem.novelty_score, config) * config.engagement_weight_novelty
        + success * config.engagement_weight_success
        + fatigue_discount * config.engagement_weight_fatigue
        + confidence_boost * config.engagement_weight_confidence
        + effect.engagement_delta
    )
    return clamp_unit(engagement)


def update_fatigue(
    prior_fatigue: float,
    success: float,
    seconds: int,
    config: SimulationConfig = DEFAULT_CONFIG,
    effect: OverlayEffect = NO_EFFECT,
) -> float:
    """
    Next fatigue index.

    Formula: min(1, prior + ((1 - success) x 0.1 + seconds / 3600) x (1 + fatigue_scale))

    The increment is never negative, so fatigue is non-decreasing within a run.
    """
    increment = (1 - success) * config.fatigue_failure_rate + seconds / config.fatigue_seconds_per_unit
    increment *= 1 + max(0.0, effect.fatigue_scale)
    return min(1.0, clamp_unit(prior_fatigue) + max(0.0, increment))


def simulate_interaction(
    persona: LearnerPersona,
    problem: Problem,
    fatigue: float,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> InteractionResult:
    """
    Compute every signal for one (persona, problem, prior fatigue) triple.

    Deterministic; the stochastic pass/fail draw happens in the simulator.

    Args:
        persona: The learner attempting the problem
        problem: The problem being attempted
        fatigue: Cumulative fatigue before this problem
        config: Tuning constants

    Returns:
        InteractionResult including the updated fatigue for the next step
    """
    effect = combined_effect(persona, problem)

    success = perceived_success(persona, problem, config)
    seconds = time_on_task(persona, problem, config, effect)
    signals = confusion_signals(persona, problem, config, effect)
    engagement = engagement_score(persona, problem, fatigue, config, effect)
    next_fatigue = update_fatigue(fatigue, success, seconds, config, effect)

    result = InteractionResult(
        student_id=persona.id,
        problem_id=problem.id,
        perceived_success=success,
        time_on_task_seconds=seconds,
        confusion_signals=signals,
        engagement_score=engagement,
        fatigue_index=next_fatigue,
        time_pressure_index=seconds / config.time_pressure_window_seconds * 2,
        level_gap=level_gap(persona, problem, config),
    )

    logger.debug(
        f"{persona.id} x {problem.id}: success={success:.2f} time={seconds}s "
        f"confusion={signals} engagement={engagement:.2f} fatigue={next_fatigue:.2f}"
    )

    return result
