"""
Configuration settings for the assignsim simulation engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Simulation Runtime
    # ========================================
    simulation_seed: int | None = Field(
        default=None,
        description="Seed for the outcome draws (None for a fresh random run)",
    )
    simulation_max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads for per-student simulations (1 = sequential)",
    )
    simulation_top_confusion_points: int = Field(
        default=5,
        ge=1,
        description="How many common confusion problems to report",
    )

    # ========================================
    # Tuning Constants (empirically chosen)
    # ========================================
    ability_weight_reading: float = Field(
        default=0.4,
        description="Weight of reading proficiency in the ability score",
    )
    ability_weight_quantitative: float = Field(
        default=0.3,
        description="Weight of quantitative fluency in the ability score",
    )
    ability_weight_confidence: float = Field(
        default=0.3,
        description="Weight of self-confidence in the ability score",
    )
    success_floor: float = Field(
        default=0.1,
        description="Lowest perceived success any pairing can reach",
    )
    grade_threshold_a: float = Field(default=90.0, description="Minimum score for an A")
    grade_threshold_b: float = Field(default=80.0, description="Minimum score for a B")
    grade_threshold_c: float = Field(default=70.0, description="Minimum score for a C")
    grade_threshold_d: float = Field(default=60.0, description="Minimum score for a D")
    at_risk_confusion_ratio: float = Field(
        default=0.5,
        description="Share of high-confusion problems that flags a student at risk",
    )
    high_fatigue_threshold: float = Field(
        default=0.8,
        description="Final fatigue above this value is reported as a risk factor",
    )

    # ========================================
    # Persona Generation
    # ========================================
    persona_generation_count: int | None = Field(
        default=None,
        description="Roster size for generated classes (None = standard 20-student class)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def get_simulation_config(self) -> dict[str, Any]:
        """Get simulation tuning values as a dictionary."""
        return {
            "ability_weights": {
                "reading": self.ability_weight_reading,
                "quantitative": self.ability_weight_quantitative,
                "confidence": self.ability_weight_confidence,
            },
            "success_floor": self.success_floor,
            "grade_thresholds": {
                "A": self.grade_threshold_a,
                "B": self.grade_threshold_b,
                "C": self.grade_threshold_c,
                "D": self.grade_threshold_d,
            },
            "at_risk_confusion_ratio": self.at_risk_confusion_ratio,
            "high_fatigue_threshold": self.high_fatigue_threshold,
            "top_confusion_points": self.simulation_top_confusion_points,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
