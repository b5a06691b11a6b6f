# Scenario parameter validation
# Layer 3: Simulation Engine
#
# Checks scenario parameters against the per-domain ranges declared on the
# scenario dataclasses. Validation is fail-fast and never raises: callers
# get a ValidationResult naming the first offending field.
#
# Check order: numeric fields (declaration order), crop type, start date,
# end date, date ordering, date span.

import math
import re
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from typing import Optional

from infrastress.domains import DOMAIN_MODELS

MAX_RANGE_DAYS = 1825

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class ValidationResult:
    """Outcome of validate_params().

    Args:
        is_valid: True when every check passed
        error: Message for the first failed check, None when valid
    """
    is_valid: bool
    error: Optional[str] = None


def _parse_iso_date(value):
    """Parse a YYYY-MM-DD string (or date) into a date, None if invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _is_finite_number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are exact; out-of-range ones fail the range check instead
    return isinstance(value, int) or math.isfinite(value)


def _scenario_values(scenario, domain):
    """Return (scenario_class, values dict) or raise ValueError with a message."""
    if is_dataclass(scenario) and not isinstance(scenario, type):
        scenario_cls = type(scenario)
        if getattr(scenario_cls, "domain", None) not in DOMAIN_MODELS:
            raise ValueError(f"Unsupported scenario type: {scenario_cls.__name__}")
        values = {f.name: getattr(scenario, f.name) for f in fields(scenario)}
        return scenario_cls, values

    if isinstance(scenario, dict):
        values = dict(scenario)
        domain = domain or values.pop("domain", None)
        values.pop("domain", None)
        if domain not in DOMAIN_MODELS:
            valid = ", ".join(DOMAIN_MODELS.keys())
            raise ValueError(f"Unknown domain: '{domain}'. Available: {valid}")
        scenario_cls = DOMAIN_MODELS[domain].scenario_class
        declared = [f.name for f in fields(scenario_cls)]
        for name in declared:
            if name not in values:
                raise ValueError(f"Missing required field '{name}'")
        for name in values:
            if name not in declared:
                raise ValueError(f"Unexpected field '{name}'")
        return scenario_cls, values

    raise ValueError(f"Unsupported scenario type: {type(scenario).__name__}")


def validate_params(scenario, domain=None):
    """Validate scenario parameters for one domain.

    Args:
        scenario: EnergyScenario, WaterScenario or AgricultureScenario, or a
            plain dict of the same fields
        domain: Domain name, required only for dicts without a "domain" key

    Returns:
        ValidationResult
    """
    try:
        scenario_cls, values = _scenario_values(scenario, domain)
    except ValueError as e:
        return ValidationResult(False, str(e))

    for name, (low, high) in scenario_cls.PARAMETER_RANGES.items():
        value = values[name]
        if not _is_finite_number(value):
            return ValidationResult(False, f"{name} must be a finite number")
        if value < low or value > high:
            return ValidationResult(False, f"{name} must be between {low} and {high}")

    crop_choices = getattr(scenario_cls, "CROP_CHOICES", None)
    if crop_choices is not None and values.get("crop_type") not in crop_choices:
        valid = ", ".join(crop_choices)
        return ValidationResult(False, f"crop_type must be one of: {valid}")

    start = _parse_iso_date(values["start_date"])
    if start is None:
        return ValidationResult(False, "start_date must be a valid date in YYYY-MM-DD format")
    end = _parse_iso_date(values["end_date"])
    if end is None:
        return ValidationResult(False, "end_date must be a valid date in YYYY-MM-DD format")
    if end <= start:
        return ValidationResult(False, "end_date must be after start_date")
    if (end - start).days > MAX_RANGE_DAYS:
        return ValidationResult(
            False, f"Date range cannot exceed 5 years ({MAX_RANGE_DAYS} days)"
        )

    return ValidationResult(True)
