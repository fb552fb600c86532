"""
Unit tests for settings and the simulation configuration built from them.
"""

import pytest

from assignsim.core.models import CognitiveLevel
from assignsim.simulation.tuning import DEFAULT_CONFIG, SimulationConfig
from config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.simulation_max_workers == 1
        assert settings.simulation_seed is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SIMULATION_SEED", "42")
        monkeypatch.setenv("GRADE_THRESHOLD_A", "93")
        settings = Settings(_env_file=None)
        assert settings.simulation_seed == 42
        assert settings.get_simulation_config()["grade_thresholds"]["A"] == 93

    def test_workers_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, simulation_max_workers=0)

    def test_simulation_config_dict(self):
        values = Settings(_env_file=None).get_simulation_config()
        assert values["ability_weights"] == {"reading": 0.4, "quantitative": 0.3, "confidence": 0.3}
        assert values["top_confusion_points"] == 5


class TestSimulationConfig:
    def test_from_settings(self):
        settings = Settings(_env_file=None, success_floor=0.2, simulation_top_confusion_points=3)
        config = SimulationConfig.from_settings(settings)
        assert config.success_floor == 0.2
        assert config.top_confusion_points == 3
        assert config.difficulty_weight(CognitiveLevel.CREATE) == 4.5

    def test_defaults_match_settings_defaults(self):
        config = SimulationConfig.from_settings(Settings(_env_file=None))
        assert config == DEFAULT_CONFIG

    def test_injected_config_changes_grades(self, five_problems, six_personas):
        from assignsim.simulation import run_classroom_simulation

        strict = SimulationConfig(grade_thresholds={"A": 101, "B": 101, "C": 101, "D": 101})
        result = run_classroom_simulation(five_problems, six_personas, seed=1, config=strict)
        assert result.completion_rate == 0
        assert result.at_risk_student_count == 6
