"""
Core Module - Shared domain models and input validation.

Components:
- models: Problem, LearnerPersona, PersonaTraits, CognitiveLevel, Overlay
- validation: Fail-fast checks for problem lists and persona rosters

Design Principle:
The simulation, persona and export modules import entities from
assignsim.core rather than redefining them.
"""

from assignsim.core.models import (
    OVERLAY_ALIASES,
    CognitiveLevel,
    LearnerPersona,
    Overlay,
    PersonaTraits,
    Problem,
    clamp_unit,
    normalize_overlay,
)
from assignsim.core.validation import (
    EmptyAssignmentError,
    EmptyRosterError,
    ProblemSequenceError,
    SimulationInputError,
    validate_problems,
    validate_roster,
)

__all__ = [
    # Models
    "CognitiveLevel",
    "LearnerPersona",
    "Overlay",
    "OVERLAY_ALIASES",
    "PersonaTraits",
    "Problem",
    "clamp_unit",
    "normalize_overlay",
    # Validation
    "EmptyAssignmentError",
    "EmptyRosterError",
    "ProblemSequenceError",
    "SimulationInputError",
    "validate_problems",
    "validate_roster",
]
