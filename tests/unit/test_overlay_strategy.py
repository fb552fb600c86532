"""
Unit tests for strategic overlay assignment.
"""

import pytest

from assignsim.personas.overlay_strategy import (
    ProblemSetStats,
    assign_overlays,
    explain_overlays,
    problem_set_stats,
)


@pytest.fixture
def demanding_problems(problem_factory):
    """Dense, long, spiky assignment: triggers every problem-driven rule."""
    return [
        problem_factory(1, "Remember", complexity=0.85, estimated_time_minutes=20),
        problem_factory(2, "Analyze", complexity=0.85, estimated_time_minutes=20),
        problem_factory(3, "Create", complexity=0.85, estimated_time_minutes=20),
    ]


@pytest.fixture
def easy_long_problems(problem_factory):
    """Low-level, plain-language but lengthy assignment."""
    return [
        problem_factory(i, level, complexity=0.3, estimated_time_minutes=20)
        for i, level in enumerate(["Remember", "Understand", "Remember"], start=1)
    ]


class TestProblemSetStats:
    def test_stats(self, demanding_problems):
        stats = problem_set_stats(demanding_problems)
        assert stats.avg_complexity == pytest.approx(0.85)
        assert stats.avg_level == pytest.approx((1 + 4 + 6) / 3)
        assert stats.max_level == 6
        assert stats.total_time_minutes == pytest.approx(60)
        assert stats.has_bloom_spike

    def test_no_spike_for_gradual_levels(self, problem_factory):
        levels = ["Remember", "Understand", "Apply", "Analyze"]
        problems = [problem_factory(i, level) for i, level in enumerate(levels, start=1)]
        assert not problem_set_stats(problems).has_bloom_spike

    def test_missing_estimates_count_as_zero(self, problem_factory):
        assert problem_set_stats([problem_factory(1)]).total_time_minutes == 0

    def test_empty(self):
        assert problem_set_stats([]) == ProblemSetStats()


class TestAssignOverlays:
    def test_weak_anxious_reader_on_demanding_set(self, persona_factory, demanding_problems):
        persona = persona_factory(reading=0.4, confidence=0.3, attention=0.8)
        [assigned] = assign_overlays([persona], demanding_problems)
        assert assigned.overlays == (
            "dyslexic",
            "fatigue_sensitive",
            "anxiety_prone",
            "esl",
            "cognitive_demand",
        )

    def test_strong_reader_skips_trait_rules(self, persona_factory, demanding_problems):
        persona = persona_factory(reading=0.9, confidence=0.9)
        [assigned] = assign_overlays([persona], demanding_problems)
        assert "dyslexic" not in assigned.overlays
        assert "cognitive_demand" not in assigned.overlays
        assert "fatigue_sensitive" in assigned.overlays

    def test_attention_rule(self, persona_factory, easy_long_problems):
        [assigned] = assign_overlays([persona_factory(attention=0.3)], easy_long_problems)
        assert "adhd" in assigned.overlays

        [focused] = assign_overlays([persona_factory(attention=0.8)], easy_long_problems)
        assert "adhd" not in focused.overlays

    def test_existing_overlays_kept(self, persona_factory, demanding_problems):
        persona = persona_factory(reading=0.9, confidence=0.9, overlays=["adhd", "fatigue_sensitive"])
        [assigned] = assign_overlays([persona], demanding_problems)
        assert assigned.overlays[:2] == ("adhd", "fatigue_sensitive")
        assert assigned.overlays.count("fatigue_sensitive") == 1

    def test_inputs_not_mutated(self, persona_factory, demanding_problems):
        persona = persona_factory(reading=0.4)
        assign_overlays([persona], demanding_problems)
        assert persona.overlays == ()

    def test_deterministic(self, six_personas, demanding_problems):
        assert assign_overlays(six_personas, demanding_problems) == assign_overlays(six_personas, demanding_problems)


class TestExplainOverlays:
    def test_triggers_align_with_overlays(self, persona_factory, demanding_problems):
        persona = persona_factory(reading=0.4, confidence=0.3)
        [explanation] = explain_overlays([persona], demanding_problems)
        assert len(explanation.triggers) == len(explanation.applied_overlays) == 5
        assert explanation.triggers[1] == "Long assessment (60 minutes total)"
        assert explanation.to_dict()["persona_id"] == persona.id

    def test_nothing_triggered(self, persona_factory, problem_factory):
        [explanation] = explain_overlays([persona_factory()], [problem_factory(1, "Apply", complexity=0.2)])
        assert explanation.applied_overlays == []
        assert explanation.triggers == []
