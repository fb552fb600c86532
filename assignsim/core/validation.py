"""
Input Validation - Fail fast on inputs the engine cannot simulate.

Philosophy:
- The aggregator should NOT run on an empty assignment or roster
- No silent fallbacks: an invalid input raises, it is never repaired
- Value ranges are enforced when a Problem is constructed; this module
  checks the properties of the list as a whole
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from loguru import logger

from assignsim.core.models import LearnerPersona, Problem


class SimulationInputError(ValueError):
    """Raised when the engine is handed inputs it cannot simulate."""
    pass


class EmptyAssignmentError(SimulationInputError):
    """Raised when the problem list is empty."""
    pass


class EmptyRosterError(SimulationInputError):
    """Raised when the persona roster is empty."""
    pass


class ProblemSequenceError(SimulationInputError):
    """Raised when sequence indexes are not contiguous, unique and ascending."""
    pass


def validate_problems(problems: Sequence[Problem]) -> None:
    """
    Check that a problem list can be simulated.

    Requirements:
    1. At least one problem
    2. Problem ids are unique
    3. sequence_index runs 1..n, in list order, with no gaps or repeats

    Raises:
        EmptyAssignmentError: If the list is empty
        ProblemSequenceError: If ids repeat or the sequence is broken
    """
    if not problems:
        raise EmptyAssignmentError(
            "Cannot simulate an assignment with no problems; "
            "the decomposition step produced an empty problem list"
        )

    duplicates = [pid for pid, count in Counter(p.id for p in problems).items() if count > 1]
    if duplicates:
        raise ProblemSequenceError(f"Duplicate problem ids: {', '.join(sorted(duplicates))}")

    indexes = [p.sequence_index for p in problems]
    expected = list(range(1, len(problems) + 1))
    if indexes != expected:
        raise ProblemSequenceError(
            f"Problem sequence_index values must run 1..{len(problems)} in order; got {indexes}"
        )

    logger.debug(f"Validated {len(problems)} problems")


def validate_roster(personas: Sequence[LearnerPersona]) -> None:
    """
    Check that a persona roster can be simulated.

    Raises:
        EmptyRosterError: If the roster is empty
        SimulationInputError: If persona ids repeat
    """
    if not personas:
        raise EmptyRosterError("Cannot simulate a classroom with no personas; the roster is empty")

    duplicates = [pid for pid, count in Counter(p.id for p in personas).items() if count > 1]
    if duplicates:
        raise SimulationInputError(f"Duplicate persona ids: {', '.join(sorted(duplicates))}")

    logger.debug(f"Validated roster of {len(personas)} personas")
