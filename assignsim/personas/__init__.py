"""
Learner Personas.

Components:
- catalog: Fixed presets (standard learners + accessibility profiles)
- generator: Randomized, population-shaped rosters
- overlay_strategy: Deterministic overlay assignment from problem-set statistics
"""

from assignsim.personas.catalog import (
    PREDEFINED_PERSONAS,
    create_custom_persona,
    filter_personas,
    get_accessibility_personas,
    get_all_personas,
    get_persona,
    get_standard_personas,
)
from assignsim.personas.generator import STANDARD_BLOOM_DISTRIBUTION, PersonaGenerator
from assignsim.personas.overlay_strategy import (
    OverlayExplanation,
    ProblemSetStats,
    assign_overlays,
    explain_overlays,
    problem_set_stats,
)

__all__ = [
    "PREDEFINED_PERSONAS",
    "STANDARD_BLOOM_DISTRIBUTION",
    "OverlayExplanation",
    "PersonaGenerator",
    "ProblemSetStats",
    "assign_overlays",
    "create_custom_persona",
    "explain_overlays",
    "filter_personas",
    "get_accessibility_personas",
    "get_all_personas",
    "get_persona",
    "get_standard_personas",
    "problem_set_stats",
]
