"""
Assignment Simulation Engine.

Predicts how a roster of learner personas will experience an assignment.

Components:
- interaction: Pairwise Interaction Model (pure per-pair signals)
- overlays: Overlay modifier registry, composed additively
- student: Per-Student Sequential Simulator (fatigue/engagement state machine)
- summary: Per-Student Outcome Summarizer (grade, at-risk, risk factors)
- classroom: Classroom Aggregator (population analytics)
- tuning: Injectable SimulationConfig
"""

from assignsim.simulation.classroom import (
    ClassroomSimulator,
    LoggingObserver,
    SimulationObserver,
    bloom_coverage,
    rank_confusion_points,
    run_classroom_simulation,
)
from assignsim.simulation.interaction import simulate_interaction
from assignsim.simulation.models import (
    BloomMismatch,
    ClassroomSimulationResult,
    EngagementTrajectory,
    EngagementTrend,
    FatigueTrajectory,
    Grade,
    InteractionResult,
    PerStudentSimulation,
    ProblemOutcome,
    SignalLevel,
)
from assignsim.simulation.overlays import OverlayEffect, combined_effect
from assignsim.simulation.student import StudentSimulator
from assignsim.simulation.summary import OutcomeSummarizer
from assignsim.simulation.tuning import DEFAULT_CONFIG, SimulationConfig

__all__ = [
    # Engines
    "ClassroomSimulator",
    "StudentSimulator",
    "OutcomeSummarizer",
    "simulate_interaction",
    "run_classroom_simulation",
    # Observers
    "LoggingObserver",
    "SimulationObserver",
    # Aggregation helpers
    "bloom_coverage",
    "rank_confusion_points",
    # Overlays
    "OverlayEffect",
    "combined_effect",
    # Config
    "DEFAULT_CONFIG",
    "SimulationConfig",
    # Data models
    "ClassroomSimulationResult",
    "EngagementTrajectory",
    "FatigueTrajectory",
    "InteractionResult",
    "PerStudentSimulation",
    "ProblemOutcome",
    # Enums
    "BloomMismatch",
    "EngagementTrend",
    "Grade",
    "SignalLevel",
]
