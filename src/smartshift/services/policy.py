"""Tunable policy constants for eligibility checks and candidate scoring."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EligibilityPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_rest_hours: float = Field(default=11.0, ge=0)
    max_consecutive_days: int = Field(default=6, ge=1)
    weekly_soft_threshold_hours: float = Field(default=48.0, gt=0)
    weekly_hard_cap_hours: float = Field(default=72.0, gt=0)
    weekly_window_days: int = Field(default=7, ge=1)
    max_night_shifts: int = Field(default=4, ge=1)
    night_window_days: int = Field(default=14, ge=1)
    default_shift_hours: float = Field(default=12.0, gt=0)

    @model_validator(mode="after")
    def validate_weekly_bounds(self) -> "EligibilityPolicy":
        if self.weekly_soft_threshold_hours > self.weekly_hard_cap_hours:
            raise ValueError("weekly soft threshold cannot exceed the hard cap")
        return self


class ScoringWeights(BaseModel):
    """Named weights of the additive scoring model."""

    model_config = ConfigDict(frozen=True)

    tier_permanent: float = 40
    tier_bank: float = 20
    tier_agency: float = 5
    tier_unknown: float = 0

    home_ward_match: float = 30
    other_ward: float = 5

    preference_any: float = 10
    preference_match: float = 15
    preference_mismatch: float = -5

    default_contracted_hours: float = Field(default=37.5, gt=0)
    utilisation_low_band: float = 0.5
    utilisation_high_band: float = 1.0
    under_utilised: float = 35
    within_contract: float = 20
    over_contract: float = -10

    flexible_low_hours_threshold: float = 24
    flexible_high_hours_threshold: float = 48
    flexible_low_hours: float = 10
    flexible_high_hours: float = -10

    wellbeing_low_threshold: float = 30
    wellbeing_high_threshold: float = 70
    wellbeing_low: float = -5
    wellbeing_high: float = 5

    @model_validator(mode="after")
    def validate_bands(self) -> "ScoringWeights":
        if self.utilisation_low_band > self.utilisation_high_band:
            raise ValueError("utilisation low band cannot exceed the high band")
        if self.flexible_low_hours_threshold > self.flexible_high_hours_threshold:
            raise ValueError("flexible low-hours threshold cannot exceed the high-hours threshold")
        if self.wellbeing_low_threshold > self.wellbeing_high_threshold:
            raise ValueError("wellbeing low threshold cannot exceed the high threshold")
        return self


class Policy(BaseModel):
    model_config = ConfigDict(frozen=True)

    eligibility: EligibilityPolicy = Field(default_factory=EligibilityPolicy)
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)

    def with_overrides(
        self,
        *,
        eligibility: dict[str, Any] | None = None,
        scoring: dict[str, Any] | None = None,
    ) -> "Policy":
        """Return a validated copy with the given fields replaced."""

        return Policy(
            eligibility=EligibilityPolicy.model_validate(
                {**self.eligibility.model_dump(), **(eligibility or {})}
            ),
            scoring=ScoringWeights.model_validate({**self.scoring.model_dump(), **(scoring or {})}),
        )


def _load_policy_from_json() -> Policy:
    with resources.files("smartshift.services.data").joinpath("default_policy.json").open(
        "r", encoding="utf-8"
    ) as handle:
        payload = json.load(handle)
    return Policy.model_validate(payload["policy"])


@lru_cache(maxsize=1)
def load_default_policy() -> Policy:
    """Return the default policy bundled with the application."""

    return _load_policy_from_json()
