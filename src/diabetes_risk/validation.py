from __future__ import annotations

import math
from typing import Mapping

from loguru import logger

from diabetes_risk.config import RangePolicy
from diabetes_risk.constants import FIELDS, MeasurementField
from diabetes_risk.scoring import HealthProfile


class ProfileValidationError(ValueError):
    """Raised when raw form input cannot be turned into a health profile."""


class IncompleteProfileError(ProfileValidationError):
    """One or more measurements were left empty."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required fields: {missing}")


class InvalidMeasurementError(ProfileValidationError):
    """One or more measurements are not usable numbers."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        details = "; ".join(f"{key}: {message}" for key, message in errors.items())
        super().__init__(f"Invalid measurements: {details}")


def raw_value(raw: Mapping[str, object], field: MeasurementField) -> str:
    """Look up a field by its key or its camelCase alias, as a stripped string."""
    value = raw.get(field.key)
    if value is None:
        value = raw.get(field.alias)
    if value is None:
        return ""
    return str(value).strip()


def missing_fields(raw: Mapping[str, object]) -> list[str]:
    """Return the keys of every field that is absent or empty."""
    return [field.key for field in FIELDS if raw_value(raw, field) == ""]


def parse_measurement(text: str, field: MeasurementField) -> float:
    """Parse one measurement string.

    Integer fields are truncated toward zero.

    Raises:
        ValueError: If the text is not a finite number.
    """
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"could not convert string to a finite number: {text!r}")
    if field.is_integer:
        return int(value)
    return value


def apply_range_policy(value: float, field: MeasurementField, policy: RangePolicy) -> float:
    """Check ``value`` against the declared bounds of ``field``.

    Raises:
        ValueError: If the value is out of range and the policy is ``reject``.
    """
    if field.min_value <= value <= field.max_value or policy == "pass":
        return value
    if policy == "clamp":
        return max(field.min_value, min(value, field.max_value))
    raise ValueError(f"must be between {field.min_value:g} and {field.max_value:g}, got {value:g}")


def parse_profile(raw: Mapping[str, object], range_policy: RangePolicy = "reject") -> HealthProfile:
    """Validate raw form input and build a health profile.

    Args:
        raw: Mapping of field key (or camelCase alias) to the entered text.
        range_policy: How to treat values outside the declared bounds.

    Returns:
        The parsed profile.

    Raises:
        IncompleteProfileError: If any field is empty. Nothing else is checked.
        InvalidMeasurementError: If any field is not a number, or is out of
            range under the ``reject`` policy.
    """
    missing = missing_fields(raw)
    if missing:
        logger.warning(f"Assessment rejected - missing fields: {missing}")
        raise IncompleteProfileError(missing)

    values: dict[str, float] = {}
    errors: dict[str, str] = {}
    for field in FIELDS:
        try:
            value = parse_measurement(raw_value(raw, field), field)
            values[field.key] = apply_range_policy(value, field, range_policy)
        except ValueError as exc:
            errors[field.key] = str(exc)

    if errors:
        logger.warning(f"Assessment rejected - invalid fields: {sorted(errors)}")
        raise InvalidMeasurementError(errors)

    return HealthProfile(**values)
