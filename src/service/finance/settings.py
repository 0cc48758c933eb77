"""
Finance Settings for the personal finance engine.

This module holds the tunable parameters used by the pure calculation
modules: budget status thresholds, trailing-return windows, anomaly
detection sensitivity and the like. Values can be adjusted via
environment variables without code changes.

Environment variables use the FINANCE_ prefix:
    FINANCE_BUDGET_WARNING_THRESHOLD=0.9
    FINANCE_NAV_MAX_GAP_DAYS=30
    FINANCE_ANOMALY_Z_THRESHOLD=2.5

Usage:
    from src.service.finance.settings import finance_settings

    # Use default settings (loaded from env)
    tolerance = finance_settings.nav_max_gap_days

    # Or create custom settings for testing
    custom = FinanceSettings(rollover_cap_ratio=0.5)
"""

import json
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FinanceSettings(BaseSettings):
    """
    Configurable parameters for the finance calculations.

    All settings can be overridden via environment variables with FINANCE_ prefix.
    All monetary values are in rupees.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Budget Status ===
    budget_on_track_threshold: float = Field(
        default=0.7,
        ge=0.0,
        description="Spend/budget ratio at or below this is on track",
    )
    budget_warning_threshold: float = Field(
        default=0.9,
        ge=0.0,
        description="Spend/budget ratio at or above this is a warning",
    )
    budget_exceeded_threshold: float = Field(
        default=1.0,
        ge=0.0,
        description="Spend/budget ratio at or above this is exceeded",
    )
    rollover_cap_ratio: float = Field(
        default=1.0,
        ge=0.0,
        description="Maximum carried-over amount as a fraction of the monthly budget",
    )

    # === Trailing Returns ===
    nav_max_gap_days: int = Field(
        default=30,
        ge=0,
        description="Largest allowed distance between target date and nearest NAV",
    )
    nav_min_years: float = Field(
        default=0.5,
        gt=0.0,
        description="Shortest actual period that is annualized",
    )
    trailing_periods_json: str = Field(
        default="[1, 3, 5]",
        description="Trailing return periods in years as a JSON array",
    )

    # === Analytics ===
    anomaly_z_threshold: float = Field(
        default=2.0,
        gt=0.0,
        description="z-score at or above which an expense is flagged as unusual",
    )
    anomaly_min_samples: int = Field(
        default=3,
        ge=2,
        description="Minimum expenses in a category before scoring anomalies",
    )
    one_time_expense_threshold: float = Field(
        default=50_000.0,
        gt=0.0,
        description="Expenses at or above this amount are treated as one-time",
    )

    # === Notifications ===
    breach_warning_ratio: float = Field(
        default=0.8,
        gt=0.0,
        description="Spend/budget ratio that triggers a warning notification",
    )
    renewal_window_days: int = Field(
        default=3,
        ge=0,
        description="Days ahead to look for upcoming subscription renewals",
    )

    # === Learn ===
    quiz_pass_percent: float = Field(
        default=80.0,
        ge=0.0,
        le=100.0,
        description="Quiz score percentage required to master a topic",
    )

    @field_validator("trailing_periods_json")
    @classmethod
    def validate_periods_json(cls, v: str) -> str:
        """Validate that trailing periods are a JSON list of positive integers."""
        try:
            periods = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(periods, list) or not periods:
            raise ValueError("Trailing periods must be a non-empty list")
        if not all(isinstance(p, int) and p > 0 for p in periods):
            raise ValueError("Trailing periods must be positive integers")
        return v

    @property
    def trailing_periods(self) -> List[int]:
        """Trailing return periods in years."""
        return json.loads(self.trailing_periods_json)


@lru_cache
def get_finance_settings() -> FinanceSettings:
    """Get cached finance settings instance."""
    return FinanceSettings()


finance_settings = get_finance_settings()
