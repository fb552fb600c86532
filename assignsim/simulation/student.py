"""
Per-Student Sequential Simulator.

Drives one persona through the assignment in sequence order, carrying
state from problem to problem:

    state = (cumulative_fatigue, engagement_trajectory, total_time_seconds,
             confusion_points)

Initial state is (0, [], 0, []). Each transition runs the pairwise
interaction model with the current fatigue, folds its signals into the
state and draws one Bernoulli pass/fail outcome from the injected
random source. The terminal state is summarized into a
PerStudentSimulation.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from assignsim.core.models import LearnerPersona, Problem
from assignsim.core.validation import EmptyAssignmentError
from assignsim.simulation.interaction import bloom_mismatch, simulate_interaction
from assignsim.simulation.models import (
    InteractionResult,
    PerStudentSimulation,
    ProblemOutcome,
    SignalLevel,
)
from assignsim.simulation.summary import OutcomeSummarizer
from assignsim.simulation.tuning import DEFAULT_CONFIG, SimulationConfig


@dataclass
class RunState:
    """Mutable state threaded through one persona's run."""
    cumulative_fatigue: float = 0.0
    engagement_trajectory: list[float] = field(default_factory=list)
    fatigue_trajectory: list[float] = field(default_factory=list)
    total_time_seconds: int = 0
    confusion_points: list[str] = field(default_factory=list)
    outcomes: list[ProblemOutcome] = field(default_factory=list)


def outcome_feedback(student_id: str, correct: bool, success: float, confusion: SignalLevel) -> str:
    """One-line instructor-facing note on an outcome."""
    if correct and success > 0.7:
        return f"{student_id} demonstrated strong understanding of this problem."
    if not correct and confusion is SignalLevel.HIGH:
        return f"{student_id} may need additional support with this problem type."
    return f"{student_id} showed moderate progress on this problem."


class StudentSimulator:
    """
    Simulates one persona working through an assignment.

    The random source is injected so a seeded run replays exactly; draws
    are never cached, so repeated runs with an unseeded source differ.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize simulator.

        Args:
            config: Tuning constants (defaults to SimulationConfig())
            rng: Random source for the pass/fail draws (defaults to a fresh Random)
        """
        self.config = config or DEFAULT_CONFIG
        self.rng = rng or random.Random()
        self.summarizer = OutcomeSummarizer(self.config)

    def step(
        self,
        state: RunState,
        persona: LearnerPersona,
        problem: Problem,
        rng: random.Random,
    ) -> InteractionResult:
        """Advance the state machine by one problem."""
        interaction = simulate_interaction(persona, problem, state.cumulative_fatigue, self.config)

        state.engagement_trajectory.append(interaction.engagement_score)
        state.total_time_seconds += interaction.time_on_task_seconds
        state.cumulative_fatigue = interaction.fatigue_index
        state.fatigue_trajectory.append(interaction.fatigue_index)

        actual_correct = rng.random() < interaction.perceived_success

        confusion_level = SignalLevel.from_confusion(
            interaction.confusion_signals,
            self.config.confusion_medium_at,
            self.config.confusion_high_at,
        )
        if confusion_level is SignalLevel.HIGH:
            state.confusion_points.append(problem.id)

        engagement_level = SignalLevel.from_engagement(
            interaction.engagement_score,
            self.config.engagement_medium_at,
            self.config.engagement_high_at,
        )

        state.outcomes.append(
            ProblemOutcome(
                student_id=persona.id,
                problem_id=problem.id,
                sequence_index=problem.sequence_index,
                time_to_complete_seconds=interaction.time_on_task_seconds,
                percentage_successful=interaction.perceived_success * 100,
                confusion_level=confusion_level,
                engagement_level=engagement_level,
                actual_correct=actual_correct,
                confusion_signals=interaction.confusion_signals,
                engagement_score=interaction.engagement_score,
                fatigue_after=interaction.fatigue_index,
                time_pressure_index=interaction.time_pressure_index,
                bloom_mismatch=bloom_mismatch(interaction.level_gap, self.config),
                feedback=outcome_feedback(
                    persona.id, actual_correct, interaction.perceived_success, confusion_level
                ),
            )
        )
        return interaction

    def simulate(
        self,
        persona: LearnerPersona,
        problems: Sequence[Problem],
        rng: random.Random | None = None,
    ) -> PerStudentSimulation:
        """
        Run one persona through every problem in ascending sequence_index.

        Args:
            persona: The learner
            problems: The assignment's problems
            rng: Optional per-run random source (overrides the simulator's)

        Returns:
            PerStudentSimulation for this run

        Raises:
            EmptyAssignmentError: If there are no problems
        """
        if not problems:
            raise EmptyAssignmentError(f"Cannot simulate {persona.id} on an empty problem list")

        draw = rng or self.rng
        state = RunState()
        for problem in sorted(problems, key=lambda p: p.sequence_index):
            self.step(state, persona, problem, draw)

        simulation = self.summarizer.summarize(
            student_id=persona.id,
            display_name=persona.label,
            outcomes=state.outcomes,
            engagement_scores=state.engagement_trajectory,
            fatigue_values=state.fatigue_trajectory,
            total_time_seconds=state.total_time_seconds,
            confusion_points=state.confusion_points,
        )

        logger.debug(
            f"Simulated {persona.id}: score={simulation.estimated_score_percent:.1f} "
            f"grade={simulation.estimated_grade.value} at_risk={simulation.at_risk}"
        )
        return simulation
