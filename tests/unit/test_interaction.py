"""
Unit tests for the pairwise interaction model.

Pure functions only; no random draws are involved.
"""

import pytest

from assignsim.core.models import CognitiveLevel
from assignsim.simulation.interaction import (
    bloom_mismatch,
    confusion_signals,
    engagement_score,
    level_gap,
    novelty_appeal,
    perceived_success,
    scaled_ability,
    simulate_interaction,
    time_on_task,
    update_fatigue,
)
from assignsim.simulation.models import BloomMismatch
from assignsim.simulation.overlays import OverlayEffect


class TestPerceivedSuccess:
    def test_scaled_ability_uses_weighted_traits(self, persona_factory):
        persona = persona_factory(reading=0.7, quantitative=0.7, confidence=0.7)
        assert scaled_ability(persona) == pytest.approx(3.5)

    def test_easy_problem_saturates_at_ceiling(self, persona_factory, problem_factory):
        persona = persona_factory()
        assert perceived_success(persona, problem_factory(level="Apply")) == pytest.approx(1.0)

    def test_difficulty_above_ability_degrades_linearly(self, persona_factory, problem_factory):
        persona = persona_factory()
        # 1 - (4.5 - 3.5) / 5
        assert perceived_success(persona, problem_factory(level="Create")) == pytest.approx(0.8)

    def test_floor_for_weakest_learner(self, persona_factory, problem_factory):
        persona = persona_factory(reading=0, quantitative=0, attention=0, confidence=0)
        # 1 - 4.5 / 5 = 0.1 exactly at the floor
        assert perceived_success(persona, problem_factory(level="Create")) == pytest.approx(0.1)

    def test_perfect_learner_on_remember_items(self, persona_factory, problem_factory):
        persona = persona_factory(reading=1, quantitative=1, attention=1, confidence=1)
        for i in range(1, 6):
            problem = problem_factory(i, "Remember", complexity=i / 5, novelty=i / 5)
            assert perceived_success(persona, problem) >= 0.9

    def test_success_always_within_bounds(self, persona_factory, problem_factory):
        for trait in (0.0, 0.25, 0.5, 0.75, 1.0):
            persona = persona_factory(reading=trait, quantitative=trait, confidence=trait)
            for level in CognitiveLevel:
                success = perceived_success(persona, problem_factory(level=level.value))
                assert 0.1 <= success <= 1.0


class TestTimeOnTask:
    def test_formula(self, persona_factory, problem_factory):
        persona = persona_factory(reading=0.7)
        problem = problem_factory(level="Apply", complexity=0.5, words=40)
        # 40 x 1.75 x 1.6 x 1.3 = 145.6
        assert time_on_task(persona, problem) == 146

    def test_zero_words_takes_no_time(self, persona_factory, problem_factory):
        assert time_on_task(persona_factory(), problem_factory(words=0)) == 0

    def test_weaker_reader_takes_longer(self, persona_factory, problem_factory):
        problem = problem_factory()
        slow = time_on_task(persona_factory(reading=0.2), problem)
        fast = time_on_task(persona_factory(reading=0.9), problem)
        assert slow > fast

    def test_overlay_time_scale_applies(self, persona_factory, problem_factory):
        persona = persona_factory()
        problem = problem_factory()
        base = time_on_task(persona, problem)
        scaled = time_on_task(persona, problem, effect=OverlayEffect(time_scale=0.5))
        assert scaled == pytest.approx(base * 1.5, abs=1)


class TestConfusionSignals:
    def test_all_triggers_fire(self, persona_factory, problem_factory):
        persona = persona_factory(reading=0.5, confidence=0.5)
        problem = problem_factory(level="Create", complexity=0.8, novelty=0.8)
        # novelty +2, dense text for weak reader +2, level gap 3.5 > 2 +3
        assert confusion_signals(persona, problem) == 7

    def test_moderate_triggers(self, persona_factory, problem_factory):
        persona = persona_factory(reading=0.8, confidence=0.7)
        problem = problem_factory(level="Analyze", complexity=0.75, novelty=0.6)
        assert confusion_signals(persona, problem) == 2

    def test_no_triggers(self, persona_factory, problem_factory):
        persona = persona_factory(confidence=0.9)
        problem = problem_factory(level="Remember", complexity=0.2, novelty=0.2)
        assert confusion_signals(persona, problem) == 0

    def test_overlay_extra_confusion(self, persona_factory, problem_factory):
        persona = persona_factory(confidence=0.9)
        problem = problem_factory(level="Remember", complexity=0.2, novelty=0.2)
        assert confusion_signals(persona, problem, effect=OverlayEffect(extra_confusion=1)) == 1

    def test_level_gap_and_mismatch(self, persona_factory, problem_factory):
        persona = persona_factory(confidence=0.5)
        gap = level_gap(persona, problem_factory(level="Create"))
        assert gap == pytest.approx(3.5)
        assert bloom_mismatch(gap) is BloomMismatch.SEVERE
        assert bloom_mismatch(1.5) is BloomMismatch.MILD
        assert bloom_mismatch(0.5) is BloomMismatch.NONE


class TestEngagement:
    @pytest.mark.parametrize(
        "novelty,expected",
        [(0.2, 0.5), (0.5, 1.0), (0.9, 0.9), (1.0, 0.85)],
    )
    def test_novelty_appeal(self, novelty, expected):
        assert novelty_appeal(novelty) == pytest.approx(expected)

    def test_fresh_learner_engagement(self, persona_factory, problem_factory):
        persona = persona_factory(confidence=0.7)
        problem = problem_factory(level="Apply", novelty=0.5)
        # 0.3 + 0.3 + 0.3 + 0.1 x 0.85
        assert engagement_score(persona, problem, fatigue=0.0) == pytest.approx(0.985)

    def test_fatigue_lowers_engagement(self, persona_factory, problem_factory):
        persona = persona_factory(confidence=0.7)
        problem = problem_factory(level="Apply", novelty=0.5)
        assert engagement_score(persona, problem, fatigue=1.0) == pytest.approx(0.835)

    def test_engagement_clamped(self, persona_factory, problem_factory):
        persona = persona_factory(reading=0, quantitative=0, confidence=0)
        problem = problem_factory(level="Create", novelty=1.0)
        score = engagement_score(persona, problem, 1.0, effect=OverlayEffect(engagement_delta=-5))
        assert score == 0.0


class TestFatigue:
    def test_update_formula(self):
        # (1 - 0.5) x 0.1 + 360 / 3600
        assert update_fatigue(0.2, 0.5, 360) == pytest.approx(0.35)

    def test_overlay_fatigue_scale(self):
        assert update_fatigue(0.2, 0.5, 360, effect=OverlayEffect(fatigue_scale=0.25)) == pytest.approx(0.3875)

    def test_capped_at_one(self):
        assert update_fatigue(0.95, 0.1, 3600) == 1.0

    def test_never_decreases(self):
        for prior in (0.0, 0.3, 0.9, 1.0):
            assert update_fatigue(prior, 1.0, 0) >= prior


class TestSimulateInteraction:
    def test_deterministic_for_identical_inputs(self, persona_factory, problem_factory):
        persona = persona_factory(overlays=["adhd", "dyslexic"])
        problem = problem_factory(level="Evaluate", complexity=0.8, novelty=0.9, multi_part=True)

        first = simulate_interaction(persona, problem, fatigue=0.3)
        second = simulate_interaction(persona, problem, fatigue=0.3)
        assert first == second

    def test_result_fields(self, persona_factory, problem_factory):
        persona = persona_factory("ana")
        problem = problem_factory(3, "Analyze")
        result = simulate_interaction(persona, problem, fatigue=0.0)

        assert result.student_id == "ana"
        assert result.problem_id == "p3"
        assert result.fatigue_index >= 0.0
        assert result.time_pressure_index == pytest.approx(result.time_on_task_seconds / 3600 * 2)
        assert result.to_dict()["confusion_signals"] == result.confusion_signals

    def test_overlays_do_not_change_success(self, persona_factory, problem_factory):
        problem = problem_factory(level="Create", complexity=0.9, novelty=0.9, multi_part=True)
        plain = simulate_interaction(persona_factory(), problem, 0.0)
        loaded = simulate_interaction(
            persona_factory(overlays=["adhd", "dyslexic", "esl", "anxiety_prone"]), problem, 0.0
        )
        assert plain.perceived_success == loaded.perceived_success
        assert loaded.time_on_task_seconds > plain.time_on_task_seconds
        assert loaded.confusion_signals == plain.confusion_signals + 1
