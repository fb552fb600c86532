"""
Unit tests for the core input models and input validation.
"""

import pytest
from pydantic import ValidationError

from assignsim.core.models import CognitiveLevel, LearnerPersona, PersonaTraits, Problem, clamp_unit
from assignsim.core.validation import (
    EmptyAssignmentError,
    EmptyRosterError,
    ProblemSequenceError,
    SimulationInputError,
    validate_problems,
    validate_roster,
)


class TestCognitiveLevel:
    def test_order(self):
        assert [level.rank for level in CognitiveLevel.ordered()] == [1, 2, 3, 4, 5, 6]
        assert CognitiveLevel.CREATE.ordinal == 5

    def test_parse_case_insensitive(self):
        assert CognitiveLevel.from_value("analyze") is CognitiveLevel.ANALYZE
        assert CognitiveLevel.from_value(" Evaluate ") is CognitiveLevel.EVALUATE

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            CognitiveLevel.from_value("Synthesize")


class TestProblem:
    def test_camel_case_keys(self):
        problem = Problem.model_validate(
            {
                "id": "q1",
                "text": "Explain the water cycle",
                "isMultiPart": True,
                "cognitiveLevel": "understand",
                "linguisticComplexity": 0.4,
                "noveltyScore": 0.3,
                "sequenceIndex": 1,
                "similarityToPrevious": 0.6,
            }
        )
        assert problem.cognitive_level is CognitiveLevel.UNDERSTAND
        assert problem.is_multi_part
        assert problem.similarity == 0.6

    def test_length_derived_from_text(self):
        problem = Problem(
            id="q1",
            text="one two three four",
            cognitive_level="Remember",
            linguistic_complexity=0.1,
            novelty_score=0.1,
            sequence_index=1,
        )
        assert problem.length_words == 4

    def test_similarity_fallback(self, problem_factory):
        assert problem_factory(novelty=0.25).similarity == pytest.approx(0.75)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("linguistic_complexity", 1.2),
            ("linguistic_complexity", -0.1),
            ("novelty_score", float("nan")),
            ("novelty_score", "high"),
            ("sequence_index", 0),
        ],
    )
    def test_out_of_range_rejected(self, field, value):
        data = {
            "id": "q1",
            "cognitive_level": "Apply",
            "linguistic_complexity": 0.5,
            "novelty_score": 0.5,
            "sequence_index": 1,
            field: value,
        }
        with pytest.raises(ValidationError):
            Problem(**data)

    def test_excerpt(self, problem_factory):
        problem = problem_factory(text="x" * 250)
        assert len(problem.excerpt()) == 100


class TestPersona:
    def test_traits_clamped(self):
        traits = PersonaTraits(reading=2, quantitative=-1, attention=0.5, confidence=0.5)
        assert traits.reading == 1.0
        assert traits.quantitative == 0.0

    def test_label_falls_back_to_id(self):
        assert LearnerPersona(id="p-7").label == "p-7"

    def test_tags_deduplicated(self):
        persona = LearnerPersona(id="p", narrative_tags=["quiet", "quiet ", "curious"])
        assert persona.narrative_tags == ("quiet", "curious")

    def test_clamp_unit(self):
        assert clamp_unit(1.5) == 1.0
        assert clamp_unit(-3) == 0.0
        assert clamp_unit(0.25) == 0.25


class TestValidation:
    def test_valid_problems(self, five_problems):
        validate_problems(five_problems)

    def test_empty_problems(self):
        with pytest.raises(EmptyAssignmentError):
            validate_problems([])

    def test_gap_in_sequence(self, problem_factory):
        with pytest.raises(ProblemSequenceError):
            validate_problems([problem_factory(1), problem_factory(2), problem_factory(4)])

    def test_out_of_order(self, problem_factory):
        with pytest.raises(ProblemSequenceError):
            validate_problems([problem_factory(2), problem_factory(1)])

    def test_duplicate_ids(self, problem_factory):
        with pytest.raises(ProblemSequenceError):
            validate_problems([problem_factory(1, id="same"), problem_factory(2, id="same")])

    def test_empty_roster(self):
        with pytest.raises(EmptyRosterError):
            validate_roster([])

    def test_duplicate_personas(self, persona_factory):
        with pytest.raises(SimulationInputError):
            validate_roster([persona_factory("a"), persona_factory("a")])

    def test_errors_are_value_errors(self):
        assert issubclass(EmptyAssignmentError, ValueError)
        assert issubclass(EmptyRosterError, SimulationInputError)
