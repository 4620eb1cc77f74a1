import math
import os
import json
from typing import Any, Dict, Literal
from pydantic import BaseModel, Field, field_validator, ValidationInfo
from loguru import logger

from constants import (
    COMPOUNDING_FREQUENCIES,
    CONTRIBUTION_FREQUENCIES,
    DEFAULT_CURRENCY,
    DEFAULT_MAX_YEARS,
)

CurrencyCode = Literal["AUD", "USD", "EUR", "GBP"]
ContributionFrequency = Literal["weekly", "fortnightly", "monthly"]
CompoundingFrequency = Literal[
    "annually", "semiannually", "quarterly", "monthly", "weekly", "daily"
]
ProjectionMode = Literal["target", "future_value"]


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be loaded or parsed."""


def finite_or_zero(value: Any) -> float:
    """
    Coerces a raw input (number, numeric string, None) to a finite float.

    Anything missing, unparseable, NaN or infinite becomes 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


class Config(BaseModel):
    """Scenario inputs for the retirement timeline."""

    Nickname: str = Field(
        "DefaultScenario",
        alias="scenario",
        description="A nickname for this scenario.",
    )
    first_name: str = Field("", description="Optional display name.")
    currency: CurrencyCode = Field(DEFAULT_CURRENCY)
    mode: ProjectionMode = Field(
        "target",
        description="'target' finds the months needed to reach the nest egg; 'future_value' projects a fixed horizon.",
    )

    principal: float = Field(10000.0, ge=0, description="Current invested balance.")
    contribution: float = Field(
        500.0, ge=0, description="Amount invested each contribution period."
    )
    nominal_return_pct: float = Field(7.0, description="Expected annual return, in percent.")
    inflation_pct: float = Field(2.5, description="Expected annual inflation, in percent.")
    annual_spend: float = Field(
        40000.0, ge=0, description="Annual spend in retirement in today's money."
    )
    withdrawal_pct: float = Field(4.0, description="Withdrawal rate, in percent.")
    max_years: float = Field(DEFAULT_MAX_YEARS, gt=0)

    contribution_frequency: ContributionFrequency = Field("monthly")

    # Separate savings account, projected as its own track when non-zero.
    # Its contribution follows contribution_frequency too.
    savings_balance: float = Field(0.0, ge=0)
    savings_contribution: float = Field(0.0, ge=0)
    savings_return_pct: float = Field(0.0)

    # future_value mode
    horizon_years: int = Field(30, ge=0)
    compounding_frequency: CompoundingFrequency = Field("monthly")

    model_config = {"validate_by_name": True, "validate_assignment": True}

    @field_validator(
        "principal",
        "contribution",
        "annual_spend",
        "savings_balance",
        "savings_contribution",
        mode="before",
    )
    @classmethod
    def coerce_amount(cls, v: Any) -> float:
        # Negative amounts are treated as no money rather than rejected.
        return max(finite_or_zero(v), 0.0)

    @field_validator(
        "nominal_return_pct",
        "inflation_pct",
        "withdrawal_pct",
        "savings_return_pct",
        mode="before",
    )
    @classmethod
    def coerce_percent(cls, v: Any) -> float:
        return finite_or_zero(v)

    @field_validator("max_years", mode="before")
    @classmethod
    def coerce_max_years(cls, v: Any) -> float:
        return finite_or_zero(v) or DEFAULT_MAX_YEARS

    @field_validator("inflation_pct")
    @classmethod
    def check_inflation(cls, v: float, info: ValidationInfo) -> float:
        if v > 10.0:
            scen_name = info.data.get("Nickname", "N/A")
            logger.warning(
                f"Inflation ({v:.1f}%) is unusually high for scenario '{scen_name}'."
            )
        return v

    @property
    def contribution_periods_per_year(self) -> int:
        return CONTRIBUTION_FREQUENCIES[self.contribution_frequency]

    @property
    def compounding_periods_per_year(self) -> int:
        return COMPOUNDING_FREQUENCIES[self.compounding_frequency]


def load_config_from_json(file_path: str) -> Dict[str, Any]:
    """Loads and returns the configuration dictionary from a JSON file."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Configuration file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Error parsing JSON file '{file_path}': {e}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Unexpected error reading config file '{file_path}': {e}"
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file '{file_path}' must contain a JSON object."
        )
    return data
