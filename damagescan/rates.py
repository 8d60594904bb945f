"""
Rate configuration — the 16 knobs that price labor and equipment and set
material moisture targets, plus the published min/max table they are
checked against.

The configuration layer checks user overrides against RATE_LIMITS before a
RateConfiguration reaches the calculators. The calculators check again with
ensure_rates_in_range(), so an out-of-range value raises instead of
producing an estimate.
"""

import logging
import math

from .schemas import RateConfiguration

logger = logging.getLogger(__name__)


class ConfigurationOutOfRangeError(ValueError):
    """One or more rate values fall outside the published limits."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(
            "Configuration validation failed: " + ", ".join(self.errors)
        )


# field: (min, max, unit)
RATE_LIMITS = {
    # Labor in $/hour, PM is a flat fee
    "tech_base": (25, 150, "$/hour"),
    "supervisor_base": (35, 200, "$/hour"),
    "specialist_base": (75, 300, "$/hour"),
    "project_management_base": (100, 500, "$ flat fee"),
    # Equipment in $/day per unit
    "large_dehumidifier_daily": (15, 50, "$/day"),
    "standard_dehumidifier_daily": (8, 30, "$/day"),
    "air_mover_daily": (4, 15, "$/day"),
    "heater_daily": (6, 25, "$/day"),
    "air_scrubber_daily": (20, 75, "$/day"),
    "injection_system_daily": (15, 50, "$/day"),
    "generator_daily": (25, 100, "$/day"),
    # Target moisture content, percent
    "hardwood_target_mc": (6, 12, "%"),
    "paneling_target_mc": (8, 15, "%"),
    "vinyl_target_mc": (1, 5, "%"),
    "drywall_target_mc": (10, 18, "%"),
    "carpet_target_mc": (3, 8, "%"),
}

DEFAULT_RATES = RateConfiguration().model_dump()


def _range_message(field: str) -> str:
    low, high, unit = RATE_LIMITS[field]
    if unit == "%":
        return f"{field} must be between {low:g}-{high:g}%"
    return f"{field} must be between ${low:g}-{high:g}"


def validate_rate_values(values: dict) -> list:
    """
    Check a full or partial set of rate values against RATE_LIMITS.
    Returns a list of messages — empty when everything is in range.
    """
    errors = []
    for field, value in values.items():
        if field not in RATE_LIMITS:
            errors.append(f"{field} is not a configurable rate")
            continue
        if isinstance(value, bool):
            errors.append(f"{field} must be a number")
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            errors.append(f"{field} must be a number")
            continue
        low, high, _ = RATE_LIMITS[field]
        if not math.isfinite(number) or number < low or number > high:
            errors.append(_range_message(field))
    return errors


def build_rate_configuration(overrides: dict = None) -> RateConfiguration:
    """
    Merge overrides onto the defaults and return a frozen snapshot.
    Raises ConfigurationOutOfRangeError listing every bad field.
    """
    overrides = overrides or {}
    errors = validate_rate_values(overrides)
    if errors:
        logger.warning("Rejected rate configuration: %s", "; ".join(errors))
        raise ConfigurationOutOfRangeError(errors)

    merged = dict(DEFAULT_RATES)
    merged.update({field: float(value) for field, value in overrides.items()})
    return RateConfiguration(**merged)


def ensure_rates_in_range(rates: RateConfiguration) -> None:
    """Raise ConfigurationOutOfRangeError if a snapshot slipped past validation."""
    errors = validate_rate_values(rates.model_dump())
    if errors:
        raise ConfigurationOutOfRangeError(errors)


def rate_limits_table() -> list:
    """Published limits with defaults, in display order."""
    return [
        {
            "field": field,
            "min": low,
            "max": high,
            "unit": unit,
            "default": DEFAULT_RATES[field],
        }
        for field, (low, high, unit) in RATE_LIMITS.items()
    ]
