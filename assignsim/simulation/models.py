"""
Data models for simulation results.

Interaction-level, student-level and classroom-level results. Everything
here is a frozen dataclass: a simulation run creates new instances and
never mutates them afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

# Decimal places kept when comparing a score against grade thresholds
SCORE_DECIMALS = 9


class SignalLevel(str, Enum):
    """Three-band classification for confusion and engagement."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_confusion(cls, signals: int, medium_at: int = 2, high_at: int = 4) -> SignalLevel:
        """Classify a confusion-signal count (<2 low, <4 medium, else high)."""
        if signals < medium_at:
            return cls.LOW
        elif signals < high_at:
            return cls.MEDIUM
        return cls.HIGH

    @classmethod
    def from_engagement(
        cls, score: float, medium_at: float = 0.35, high_at: float = 0.65
    ) -> SignalLevel:
        """Classify an engagement score (<0.35 low, <0.65 medium, else high)."""
        if score < medium_at:
            return cls.LOW
        elif score < high_at:
            return cls.MEDIUM
        return cls.HIGH


class BloomMismatch(str, Enum):
    """How far a problem's level sits above the learner's estimated level."""

    NONE = "none"
    MILD = "mild"
    SEVERE = "severe"


class EngagementTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class Grade(str, Enum):
    """Letter grade estimate."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @classmethod
    def from_score(cls, score_percent: float, thresholds: Mapping[str, float]) -> Grade:
        """
        Map a 0-100 score to a letter grade.

        Args:
            score_percent: Average success percentage
            thresholds: Minimum score per letter (keys A, B, C, D)

        Returns:
            The highest grade whose threshold the score reaches, else F

        Thresholds are inclusive; the score is snapped to 9 decimals first so
        a computed 89.99999999999999 grades as the 90 it represents.
        """
        score_percent = round(score_percent, SCORE_DECIMALS)
        for letter in (cls.A, cls.B, cls.C, cls.D):
            if score_percent >= thresholds[letter.value]:
                return letter
        return cls.F

    @property
    def is_failing(self) -> bool:
        return self is Grade.F

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            Grade.A: "green",
            Grade.B: "cyan",
            Grade.C: "yellow",
            Grade.D: "dark_orange",
            Grade.F: "red",
        }[self]


@dataclass(frozen=True)
class InteractionResult:
    """
    Signals for one (persona, problem, prior fatigue) triple.

    Attributes:
        perceived_success: Probability the learner feels successful (0.1-1.0)
        time_on_task_seconds: Whole seconds spent on the problem
        confusion_signals: Non-negative confusion point count
        engagement_score: Engagement in [0, 1]
        fatigue_index: Updated fatigue, input to the next problem
        time_pressure_index: Share of the pressure window this problem uses (x2)
        level_gap: Problem level ordinal minus the learner's estimated level
    """
    student_id: str
    problem_id: str
    perceived_success: float
    time_on_task_seconds: int
    confusion_signals: int
    engagement_score: float
    fatigue_index: float
    time_pressure_index: float = 0.0
    level_gap: float = 0.0

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "problem_id": self.problem_id,
            "perceived_success": self.perceived_success,
            "time_on_task_seconds": self.time_on_task_seconds,
            "confusion_signals": self.confusion_signals,
            "engagement_score": self.engagement_score,
            "fatigue_index": self.fatigue_index,
            "time_pressure_index": self.time_pressure_index,
            "level_gap": self.level_gap,
        }


@dataclass(frozen=True)
class ProblemOutcome:
    """One materialized (stochastic) outcome of a persona attempting a problem."""
    student_id: str
    problem_id: str
    sequence_index: int
    time_to_complete_seconds: int
    percentage_successful: float
    confusion_level: SignalLevel
    engagement_level: SignalLevel
    actual_correct: bool
    confusion_signals: int = 0
    engagement_score: float = 0.0
    fatigue_after: float = 0.0
    time_pressure_index: float = 0.0
    bloom_mismatch: BloomMismatch = BloomMismatch.NONE
    feedback: str = ""

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "problem_id": self.problem_id,
            "sequence_index": self.sequence_index,
            "time_to_complete_seconds": self.time_to_complete_seconds,
            "percentage_successful": self.percentage_successful,
            "confusion_level": self.confusion_level.value,
            "engagement_level": self.engagement_level.value,
            "actual_correct": self.actual_correct,
            "confusion_signals": self.confusion_signals,
            "engagement_score": self.engagement_score,
            "fatigue_after": self.fatigue_after,
            "time_pressure_index": self.time_pressure_index,
            "bloom_mismatch": self.bloom_mismatch.value,
            "feedback": self.feedback,
        }


@dataclass(frozen=True)
class EngagementTrajectory:
    """Engagement at the start, middle and end of a run, plus its trend."""
    initial: float
    at_midpoint: float
    final: float
    trend: EngagementTrend
    values: tuple[float, ...] = ()

    @classmethod
    def from_scores(cls, scores: Sequence[float]) -> EngagementTrajectory:
        """
        Reduce a per-problem engagement sequence.

        initial/at_midpoint/final are the first, middle (index len // 2)
        and last elements, exactly.
        """
        if not scores:
            raise ValueError("Engagement trajectory needs at least one score")
        initial, final = scores[0], scores[-1]
        if final > initial:
            trend = EngagementTrend.IMPROVING
        elif final < initial:
            trend = EngagementTrend.DECLINING
        else:
            trend = EngagementTrend.STABLE
        return cls(
            initial=initial,
            at_midpoint=scores[len(scores) // 2],
            final=final,
            trend=trend,
            values=tuple(scores),
        )

    def to_dict(self) -> dict:
        return {
            "initial": self.initial,
            "at_midpoint": self.at_midpoint,
            "final": self.final,
            "trend": self.trend.value,
            "values": list(self.values),
        }


@dataclass(frozen=True)
class FatigueTrajectory:
    """Fatigue before the first problem, at its highest, and at the end."""
    initial: float
    peak: float
    final: float
    values: tuple[float, ...] = ()

    @classmethod
    def from_values(cls, values: Sequence[float], initial: float = 0.0) -> FatigueTrajectory:
        """Reduce the fatigue observed after each problem."""
        if not values:
            return cls(initial=initial, peak=initial, final=initial)
        return cls(
            initial=initial,
            peak=max(initial, *values),
            final=values[-1],
            values=tuple(values),
        )

    def to_dict(self) -> dict:
        return {
            "initial": self.initial,
            "peak": self.peak,
            "final": self.final,
            "values": list(self.values),
        }


@dataclass(frozen=True)
class PerStudentSimulation:
    """One persona's full run across every problem, in sequence order."""
    student_id: str
    display_name: str
    total_time_seconds: int
    total_time_minutes: int
    estimated_score_percent: float
    estimated_grade: Grade
    problem_outcomes: tuple[ProblemOutcome, ...]
    engagement_trajectory: EngagementTrajectory
    fatigue_trajectory: FatigueTrajectory
    confusion_points: tuple[str, ...] = ()
    at_risk: bool = False
    risk_factors: tuple[str, ...] = ()

    @property
    def problem_count(self) -> int:
        return len(self.problem_outcomes)

    @property
    def correct_count(self) -> int:
        return sum(1 for o in self.problem_outcomes if o.actual_correct)

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "display_name": self.display_name,
            "total_time_seconds": self.total_time_seconds,
            "total_time_minutes": self.total_time_minutes,
            "estimated_score_percent": round(self.estimated_score_percent, 2),
            "estimated_grade": self.estimated_grade.value,
            "problem_outcomes": [o.to_dict() for o in self.problem_outcomes],
            "engagement_trajectory": self.engagement_trajectory.to_dict(),
            "fatigue_trajectory": self.fatigue_trajectory.to_dict(),
            "confusion_points": list(self.confusion_points),
            "at_risk": self.at_risk,
            "risk_factors": list(self.risk_factors),
        }


@dataclass(frozen=True)
class ClassroomSimulationResult:
    """Population analytics over every persona's run of one assignment."""
    assignment_id: str
    average_score: int
    average_time_minutes: int
    completion_rate: int
    bloom_coverage: dict[str, float]
    common_confusion_points: tuple[str, ...]
    at_risk_student_count: int
    student_results: tuple[PerStudentSimulation, ...]
    problem_count: int
    student_count: int
    warnings: tuple[str, ...] = ()
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def at_risk_students(self) -> list[PerStudentSimulation]:
        return [s for s in self.student_results if s.at_risk]

    def get_student(self, student_id: str) -> PerStudentSimulation | None:
        for student in self.student_results:
            if student.student_id == student_id:
                return student
        return None

    def to_dict(self) -> dict:
        return {
            "assignment_id": self.assignment_id,
            "generated_at": self.generated_at.isoformat(),
            "aggregated_analytics": {
                "average_score": self.average_score,
                "average_time_minutes": self.average_time_minutes,
                "completion_rate": self.completion_rate,
                "bloom_coverage": dict(self.bloom_coverage),
                "common_confusion_points": list(self.common_confusion_points),
                "at_risk_student_count": self.at_risk_student_count,
            },
            "problem_count": self.problem_count,
            "student_count": self.student_count,
            "warnings": list(self.warnings),
            "student_results": [s.to_dict() for s in self.student_results],
        }
