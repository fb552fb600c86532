"""
Classroom Aggregator.

Runs the per-student simulator for every persona on the roster against
the same problem sequence and reduces the runs into population analytics:

- average_score / average_time_minutes: means, rounded half-up
- completion_rate: percent of personas not graded F
- bloom_coverage: percent of problems at each cognitive level
- common_confusion_points: most-flagged problems, ties by sequence order
- at_risk_student_count

Each persona gets its own child random source, split from the
aggregator's source in roster order before any run starts. Draws are
therefore independent across personas, and a seeded run replays
identically whether it executes sequentially or on worker threads.
"""

from __future__ import annotations

import random
import time
from collections import Counter
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from loguru import logger

from assignsim.core.models import CognitiveLevel, LearnerPersona, Problem
from assignsim.core.validation import (
    EmptyAssignmentError,
    EmptyRosterError,
    validate_problems,
    validate_roster,
)
from assignsim.simulation.models import ClassroomSimulationResult, PerStudentSimulation
from assignsim.simulation.student import StudentSimulator
from assignsim.simulation.tuning import DEFAULT_CONFIG, SimulationConfig


class SimulationObserver(Protocol):
    """Receives per-student and classroom completion events."""

    def on_student_complete(self, simulation: PerStudentSimulation) -> None:
        ...

    def on_classroom_complete(self, result: ClassroomSimulationResult) -> None:
        ...


class LoggingObserver:
    """Observer that reports progress through loguru."""

    def on_student_complete(self, simulation: PerStudentSimulation) -> None:
        logger.debug(
            f"{simulation.student_id}: {simulation.estimated_grade.value} "
            f"({simulation.estimated_score_percent:.0f}%), {simulation.total_time_minutes} min"
        )

    def on_classroom_complete(self, result: ClassroomSimulationResult) -> None:
        logger.info(
            f"Simulated {result.student_count} students x {result.problem_count} problems: "
            f"avg score {result.average_score}%, completion {result.completion_rate}%, "
            f"{result.at_risk_student_count} at risk"
        )
        for warning in result.warnings:
            logger.warning(warning)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (for non-negative values)."""
    return int(value + 0.5)


def bloom_coverage(problems: Sequence[Problem]) -> dict[str, float]:
    """
    Percent of problems at each cognitive level.

    Computed independently per level from the problem set; all six levels
    are present and sum to 100 for a non-empty list.
    """
    if not problems:
        raise ValueError("Bloom coverage is undefined for an empty problem list")
    counts = Counter(p.cognitive_level for p in problems)
    total = len(problems)
    return {level.value: counts.get(level, 0) * 100 / total for level in CognitiveLevel.ordered()}


def rank_confusion_points(
    students: Sequence[PerStudentSimulation],
    problems: Sequence[Problem],
    top_n: int = 5,
) -> list[str]:
    """
    Problem ids ranked by how many students flagged them high-confusion.

    Descending count, ties broken by ascending sequence_index, truncated to top_n.
    """
    counts: Counter[str] = Counter()
    for student in students:
        counts.update(set(student.confusion_points))

    order = {p.id: p.sequence_index for p in problems}
    ranked = sorted(counts, key=lambda pid: (-counts[pid], order.get(pid, len(order) + 1)))
    return ranked[:top_n]


def degenerate_warnings(students: Sequence[PerStudentSimulation]) -> list[str]:
    """Flag at-risk students whose risk-factor list is empty."""
    return [
        f"Student {s.student_id} is at risk but has no recorded risk factors"
        for s in students
        if s.at_risk and not s.risk_factors
    ]


class ClassroomSimulator:
    """
    Simulates a whole roster on one assignment.

    Usage:
        simulator = ClassroomSimulator(rng=random.Random(42))
        result = simulator.run(problems, personas)
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
        max_workers: int = 1,
        observer: SimulationObserver | None = None,
    ):
        """
        Initialize aggregator.

        Args:
            config: Tuning constants (defaults to SimulationConfig())
            rng: Master random source; seed it for deterministic replay
            max_workers: Worker threads for per-student runs (1 = sequential)
            observer: Receives per-student and classroom completion events
        """
        self.config = config or DEFAULT_CONFIG
        self.rng = rng or random.Random()
        self.max_workers = max(1, max_workers)
        self.observer = observer
        self.student_simulator = StudentSimulator(self.config)

    def _spawn_rngs(self, count: int) -> list[random.Random]:
        return [random.Random(self.rng.getrandbits(64)) for _ in range(count)]

    def simulate_students(
        self,
        problems: Sequence[Problem],
        personas: Sequence[LearnerPersona],
    ) -> list[PerStudentSimulation]:
        """Run every persona; results keep roster order."""
        rngs = self._spawn_rngs(len(personas))

        if self.max_workers > 1 and len(personas) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                students = list(
                    pool.map(
                        lambda pair: self.student_simulator.simulate(pair[0], problems, pair[1]),
                        zip(personas, rngs),
                    )
                )
        else:
            students = [
                self.student_simulator.simulate(persona, problems, rng)
                for persona, rng in zip(personas, rngs)
            ]

        if self.observer is not None:
            for student in students:
                self.observer.on_student_complete(student)
        return students

    def aggregate(
        self,
        problems: Sequence[Problem],
        students: Sequence[PerStudentSimulation],
        assignment_id: str | None = None,
    ) -> ClassroomSimulationResult:
        """
        Reduce per-student runs into classroom analytics.

        Raises:
            EmptyAssignmentError: If there are no problems
            EmptyRosterError: If there are no student runs
        """
        if not problems:
            raise EmptyAssignmentError("Cannot aggregate an assignment with no problems")
        if not students:
            raise EmptyRosterError("Cannot aggregate a classroom with no student results")

        count = len(students)
        average_score = round_half_up(sum(s.estimated_score_percent for s in students) / count)
        average_time = round_half_up(sum(s.total_time_minutes for s in students) / count)
        passing = sum(1 for s in students if not s.estimated_grade.is_failing)

        return ClassroomSimulationResult(
            assignment_id=assignment_id or f"assignment_{int(time.time() * 1000)}",
            average_score=average_score,
            average_time_minutes=average_time,
            completion_rate=round_half_up(passing / count * 100),
            bloom_coverage=bloom_coverage(problems),
            common_confusion_points=tuple(
                rank_confusion_points(students, problems, self.config.top_confusion_points)
            ),
            at_risk_student_count=sum(1 for s in students if s.at_risk),
            student_results=tuple(students),
            problem_count=len(problems),
            student_count=count,
            warnings=tuple(degenerate_warnings(students)),
        )

    def run(
        self,
        problems: Sequence[Problem],
        personas: Sequence[LearnerPersona],
        assignment_id: str | None = None,
    ) -> ClassroomSimulationResult:
        """
        Simulate the full roster and aggregate.

        Args:
            problems: Problems in sequence order (1..n, contiguous)
            personas: Roster of learner personas
            assignment_id: Optional identifier for the run

        Returns:
            ClassroomSimulationResult with every PerStudentSimulation attached

        Raises:
            EmptyAssignmentError: Empty problem list
            EmptyRosterError: Empty roster
            ProblemSequenceError: Broken sequence or duplicate problem ids
        """
        validate_problems(problems)
        validate_roster(personas)

        logger.info(f"Simulating {len(personas)} personas on {len(problems)} problems")
        students = self.simulate_students(problems, personas)
        result = self.aggregate(problems, students, assignment_id)

        if self.observer is not None:
            self.observer.on_classroom_complete(result)
        return result


def run_classroom_simulation(
    problems: Sequence[Problem],
    personas: Sequence[LearnerPersona],
    seed: int | None = None,
    config: SimulationConfig | None = None,
    assignment_id: str | None = None,
) -> ClassroomSimulationResult:
    """Convenience wrapper: one seeded, sequential classroom run."""
    simulator = ClassroomSimulator(config=config, rng=random.Random(seed))
    return simulator.run(problems, personas, assignment_id)
