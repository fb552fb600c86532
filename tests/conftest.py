"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from assignsim.core.models import LearnerPersona, PersonaTraits, Problem  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_problem(
    index: int = 1,
    level: str = "Apply",
    complexity: float = 0.5,
    novelty: float = 0.5,
    words: int = 40,
    multi_part: bool = False,
    **extra,
) -> Problem:
    """Build a Problem with sensible defaults."""
    return Problem(
        id=extra.pop("id", f"p{index}"),
        text=extra.pop("text", f"Problem {index} text"),
        length_words=words,
        is_multi_part=multi_part,
        cognitive_level=level,
        linguistic_complexity=complexity,
        novelty_score=novelty,
        sequence_index=index,
        **extra,
    )


def make_persona(
    persona_id: str = "learner",
    reading: float = 0.7,
    quantitative: float = 0.7,
    attention: float = 0.7,
    confidence: float = 0.7,
    overlays: list[str] | None = None,
) -> LearnerPersona:
    """Build a LearnerPersona with sensible defaults."""
    return LearnerPersona(
        id=persona_id,
        display_name=persona_id.title(),
        traits=PersonaTraits(
            reading=reading,
            quantitative=quantitative,
            attention=attention,
            confidence=confidence,
        ),
        overlays=overlays or [],
    )


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Seeded random source for reproducible draws."""
    return random.Random(1234)


@pytest.fixture
def five_problems():
    """Five problems at Analyze, Analyze, Evaluate, Understand, Create."""
    levels = ["Analyze", "Analyze", "Evaluate", "Understand", "Create"]
    return [
        make_problem(i, level, complexity=0.4 + i * 0.08, novelty=0.2 + i * 0.12, words=30 + i * 10)
        for i, level in enumerate(levels, start=1)
    ]


@pytest.fixture
def six_personas():
    """Six fixed personas with every trait between 0.6 and 0.9."""
    values = [
        (0.6, 0.7, 0.8, 0.9),
        (0.9, 0.6, 0.7, 0.8),
        (0.8, 0.9, 0.6, 0.7),
        (0.7, 0.8, 0.9, 0.6),
        (0.65, 0.75, 0.85, 0.7),
        (0.85, 0.65, 0.7, 0.75),
    ]
    return [
        make_persona(f"student_{i}", r, q, a, c)
        for i, (r, q, a, c) in enumerate(values, start=1)
    ]


@pytest.fixture
def assignment_payload():
    """Assignment file contents in camelCase, as the decomposition step emits them."""
    return {
        "assignmentId": "unit-quiz",
        "problems": [
            {
                "id": "q1",
                "text": "Define photosynthesis in your own words.",
                "lengthWords": 6,
                "isMultiPart": False,
                "cognitiveLevel": "Remember",
                "linguisticComplexity": 0.3,
                "noveltyScore": 0.2,
                "sequenceIndex": 1,
                "estimatedTimeMinutes": 5,
            },
            {
                "id": "q2",
                "text": "Compare the light and dark reactions. Explain which depends on the other.",
                "lengthWords": 12,
                "isMultiPart": True,
                "cognitiveLevel": "Analyze",
                "linguisticComplexity": 0.75,
                "noveltyScore": 0.8,
                "sequenceIndex": 2,
                "estimatedTimeMinutes": 15,
            },
            {
                "id": "q3",
                "text": "Design an experiment that measures the effect of light intensity.",
                "lengthWords": 10,
                "isMultiPart": False,
                "cognitiveLevel": "Create",
                "linguisticComplexity": 0.85,
                "noveltyScore": 0.9,
                "sequenceIndex": 3,
                "estimatedTimeMinutes": 45,
            },
        ],
    }


@pytest.fixture
def problem_factory():
    """Factory fixture for Problems."""
    return make_problem


@pytest.fixture
def persona_factory():
    """Factory fixture for LearnerPersonas."""
    return make_persona
