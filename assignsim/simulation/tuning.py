"""
Simulation Tuning Constants.

Every coefficient and threshold the engine uses lives here so a caller
can inject an alternative calibration. The defaults are empirically chosen
values; none of them is derived from first principles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from assignsim.core.models import CognitiveLevel

if TYPE_CHECKING:
    from config import Settings


def _default_difficulty_weights() -> dict[CognitiveLevel, float]:
    return {
        CognitiveLevel.REMEMBER: 1.0,  # Easiest
        CognitiveLevel.UNDERSTAND: 1.8,
        CognitiveLevel.APPLY: 2.5,
        CognitiveLevel.ANALYZE: 3.2,
        CognitiveLevel.EVALUATE: 3.8,
        CognitiveLevel.CREATE: 4.5,  # Hardest
    }


def _default_time_multipliers() -> dict[CognitiveLevel, float]:
    return {
        CognitiveLevel.REMEMBER: 1.0,
        CognitiveLevel.UNDERSTAND: 1.3,
        CognitiveLevel.APPLY: 1.6,
        CognitiveLevel.ANALYZE: 2.0,
        CognitiveLevel.EVALUATE: 2.3,
        CognitiveLevel.CREATE: 2.8,
    }


def _default_grade_thresholds() -> dict[str, float]:
    return {"A": 90.0, "B": 80.0, "C": 70.0, "D": 60.0}


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for the interaction model, simulator and aggregator."""

    # Perceived success
    difficulty_weights: dict[CognitiveLevel, float] = field(default_factory=_default_difficulty_weights)
    ability_weight_reading: float = 0.4
    ability_weight_quantitative: float = 0.3
    ability_weight_confidence: float = 0.3
    ability_scale: float = 5.0
    success_divisor: float = 5.0
    success_floor: float = 0.1
    success_ceiling: float = 1.0

    # Time on task
    time_multipliers: dict[CognitiveLevel, float] = field(default_factory=_default_time_multipliers)
    complexity_time_factor: float = 1.5

    # Confusion signals
    novelty_high: float = 0.75
    novelty_moderate: float = 0.5
    complexity_high: float = 0.7
    weak_reader_threshold: float = 0.6
    level_estimate_scale: float = 3.0  # confidence x scale = estimated level ordinal
    level_gap_severe: float = 2.0
    level_gap_mild: float = 1.0

    # Engagement
    engagement_weight_novelty: float = 0.3
    engagement_weight_success: float = 0.3
    engagement_weight_fatigue: float = 0.3
    engagement_weight_confidence: float = 0.1
    novelty_sweet_spot_low: float = 0.3
    novelty_sweet_spot_high: float = 0.7
    novelty_overload_penalty: float = 0.5
    novelty_familiar_appeal: float = 0.5
    fatigue_engagement_discount: float = 0.5

    # Fatigue
    fatigue_failure_rate: float = 0.1
    fatigue_seconds_per_unit: float = 3600.0
    time_pressure_window_seconds: float = 3600.0

    # Level bands
    confusion_medium_at: int = 2
    confusion_high_at: int = 4
    engagement_medium_at: float = 0.35
    engagement_high_at: float = 0.65

    # Outcome summary
    grade_thresholds: dict[str, float] = field(default_factory=_default_grade_thresholds)
    at_risk_confusion_ratio: float = 0.5
    high_fatigue_threshold: float = 0.8

    # Aggregation
    top_confusion_points: int = 5

    def difficulty_weight(self, level: CognitiveLevel) -> float:
        return self.difficulty_weights.get(level, 2.5)

    def time_multiplier(self, level: CognitiveLevel) -> float:
        return self.time_multipliers.get(level, 1.5)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SimulationConfig:
        """Build a configuration from application settings (env / .env overrides)."""
        if settings is None:
            from config import get_settings

            settings = get_settings()

        values = settings.get_simulation_config()
        weights = values["ability_weights"]
        return cls(
            ability_weight_reading=weights["reading"],
            ability_weight_quantitative=weights["quantitative"],
            ability_weight_confidence=weights["confidence"],
            success_floor=values["success_floor"],
            grade_thresholds=dict(values["grade_thresholds"]),
            at_risk_confusion_ratio=values["at_risk_confusion_ratio"],
            high_fatigue_threshold=values["high_fatigue_threshold"],
            top_confusion_points=values["top_confusion_points"],
        )


DEFAULT_CONFIG = SimulationConfig()
