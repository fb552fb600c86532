"""
Per-Student Outcome Summarizer.

Reduces the ordered per-problem outcomes of one run into a score, a
letter grade, and an at-risk flag with human-readable reasons.

At-risk rule:
- Grade D or F, OR
- More than half of the problems flagged high-confusion
"""

from __future__ import annotations

from collections.abc import Sequence

from assignsim.simulation.models import (
    EngagementTrajectory,
    FatigueTrajectory,
    Grade,
    PerStudentSimulation,
    ProblemOutcome,
)
from assignsim.simulation.tuning import DEFAULT_CONFIG, SimulationConfig


def estimate_score(outcomes: Sequence[ProblemOutcome]) -> float:
    """Mean percentage_successful across all outcomes (0-100)."""
    if not outcomes:
        raise ValueError("Cannot estimate a score from zero problem outcomes")
    return sum(o.percentage_successful for o in outcomes) / len(outcomes)


def is_at_risk(
    grade: Grade,
    confusion_count: int,
    problem_count: int,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> bool:
    """True for a D/F grade or when high confusion covers more than half the problems."""
    if grade in (Grade.D, Grade.F):
        return True
    return confusion_count > config.at_risk_confusion_ratio * problem_count


def risk_factors(
    grade: Grade,
    confusion_count: int,
    final_fatigue: float,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> list[str]:
    """
    Ordered reasons a student is at risk.

    Every at-risk student gets at least one reason: a D grade with no
    confusion and low fatigue is reported as low performance.
    """
    factors = [
        "Very low performance" if grade is Grade.F else "",
        "Low performance (grade D)" if grade is Grade.D else "",
        f"Confusion on {confusion_count} problems" if confusion_count > 0 else "",
        "High fatigue" if final_fatigue > config.high_fatigue_threshold else "",
    ]
    return [f for f in factors if f]


class OutcomeSummarizer:
    """Builds the immutable PerStudentSimulation from a finished run."""

    def __init__(self, config: SimulationConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def summarize(
        self,
        student_id: str,
        display_name: str,
        outcomes: Sequence[ProblemOutcome],
        engagement_scores: Sequence[float],
        fatigue_values: Sequence[float],
        total_time_seconds: int,
        confusion_points: Sequence[str],
    ) -> PerStudentSimulation:
        """
        Summarize one student's run.

        Args:
            student_id: Persona id
            display_name: Persona display name
            outcomes: Per-problem outcomes in sequence order
            engagement_scores: Engagement score per problem, in order
            fatigue_values: Fatigue after each problem, in order
            total_time_seconds: Summed time on task
            confusion_points: Ids of high-confusion problems, in order

        Returns:
            PerStudentSimulation
        """
        score = estimate_score(outcomes)
        grade = Grade.from_score(score, self.config.grade_thresholds)
        fatigue = FatigueTrajectory.from_values(fatigue_values)

        at_risk = is_at_risk(grade, len(confusion_points), len(outcomes), self.config)
        reasons = (
            risk_factors(grade, len(confusion_points), fatigue.final, self.config)
            if at_risk
            else []
        )

        return PerStudentSimulation(
            student_id=student_id,
            display_name=display_name,
            total_time_seconds=total_time_seconds,
            total_time_minutes=int(total_time_seconds / 60 + 0.5),
            estimated_score_percent=score,
            estimated_grade=grade,
            problem_outcomes=tuple(outcomes),
            engagement_trajectory=EngagementTrajectory.from_scores(engagement_scores),
            fatigue_trajectory=fatigue,
            confusion_points=tuple(confusion_points),
            at_risk=at_risk,
            risk_factors=tuple(reasons),
        )
