"""
SpotBnB Backend — Declarative Field Rules
===========================================

What:  Small rule primitives and the rule sets for spot payloads.
Why:   Each spot field has an ordered list of checks with its own message.
       The first failing check ends validation of that field (bail), while
       the other fields keep validating, so a bad request reports exactly
       one message per failed field.
How:   A rule is a callable taking the raw value and returning the
       (possibly coerced) value, or raising PydanticCustomError. The request
       schemas in spotbnb.schemas.spot run `apply_rules` from a single
       mode="before" field validator; pydantic collects one error per field
       and FastAPI surfaces them as a RequestValidationError.

Example:
    apply_rules("45.5", SPOT_RULES["lat"])  → 45.5
    apply_rules("95", SPOT_RULES["lat"])    → PydanticCustomError
                                               ("Latitude must be a number between -90 and 90.")
"""

import math
from typing import Any, Callable, Dict, Optional, Sequence

from pydantic_core import PydanticCustomError

Rule = Callable[[Any], Any]

RULE_ERROR_TYPE = "invalid_field"


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError(RULE_ERROR_TYPE, message)


def not_empty(message: str) -> Rule:
    """Rejects missing values and empty strings."""

    def rule(value: Any) -> Any:
        if value is None or (isinstance(value, str) and value == ""):
            raise _fail(message)
        return value

    return rule


def is_float(
    message: str,
    min: Optional[float] = None,
    max: Optional[float] = None,
    gt: Optional[float] = None,
) -> Rule:
    """
    Accepts numbers and numeric strings inside the given bounds.

    Booleans, NaN and infinities are rejected. Returns the value as a float.
    """

    def rule(value: Any) -> float:
        if isinstance(value, bool) or value is None:
            raise _fail(message)
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                raise _fail(message) from None
        else:
            raise _fail(message)

        if not math.isfinite(number):
            raise _fail(message)
        if min is not None and number < min:
            raise _fail(message)
        if max is not None and number > max:
            raise _fail(message)
        if gt is not None and number <= gt:
            raise _fail(message)
        return number

    return rule


def max_length(limit: int, message: str) -> Rule:
    def rule(value: Any) -> Any:
        if isinstance(value, str) and len(value) > limit:
            raise _fail(message)
        return value

    return rule


def apply_rules(value: Any, rules: Sequence[Rule]) -> Any:
    """Runs rules in order, stopping at the first failure."""
    for rule in rules:
        value = rule(value)
    return value


# ── Spot rule set ─────────────────────────────────────────────────────────
# Shared by create (all fields required) and edit (fields validated only
# when present in the body).
SPOT_RULES: Dict[str, Sequence[Rule]] = {
    "address": [not_empty("Address is required.")],
    "city": [not_empty("City is required.")],
    "state": [not_empty("State is required.")],
    "country": [not_empty("Country is required.")],
    "lat": [
        not_empty("Latitude is required."),
        is_float("Latitude must be a number between -90 and 90.", min=-90, max=90),
    ],
    "lng": [
        not_empty("Longitude is required."),
        is_float("Longitude must be a number between -180 and 180.", min=-180, max=180),
    ],
    "name": [
        not_empty("Name is required."),
        max_length(50, "Name cannot be longer than 50 characters."),
    ],
    "description": [not_empty("Description is required.")],
    "price": [is_float("Price must be a positive number.", gt=0)],
}
