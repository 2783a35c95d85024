"""
Conversion of the vendor's string-typed numeric fields.

The vendor returns numbers as strings with inconsistent sentinels: ``"-"``
or ``""`` for "no value", a leading ``+`` on positive changes, a trailing
``%`` on percentages and thousands separators on large prices. Every field
goes through ``parse_number`` with an explicit presence policy:

    token                 OPTIONAL   MANDATORY
    None / "" / "-"       None       0.0
    unparsable text       None       0.0
    "+1,234.50%"          1234.5     1234.5
"""

import math
from enum import Enum
from typing import Any, Optional

ABSENT_TOKENS = frozenset({"", "-"})


class Presence(str, Enum):
    """Whether a vendor field must always carry a number."""

    OPTIONAL = "OPTIONAL"
    MANDATORY = "MANDATORY"


_FALLBACK: dict[Presence, Optional[float]] = {
    Presence.OPTIONAL: None,
    Presence.MANDATORY: 0.0,
}


def is_absent_token(value: Any) -> bool:
    """True for None and the vendor's 'no value' sentinels."""
    if value is None:
        return True
    return isinstance(value, str) and value.strip() in ABSENT_TOKENS


def clean_numeric_token(value: str) -> str:
    """Strip sign prefix, percent suffix and thousands separators."""
    token = value.strip().replace(",", "")
    if token.startswith("+"):
        token = token[1:]
    if token.endswith("%"):
        token = token[:-1]
    return token.strip()


def parse_number(value: Any, presence: Presence = Presence.OPTIONAL) -> Optional[float]:
    """Parse a vendor numeric field according to the presence policy."""
    fallback = _FALLBACK[presence]
    if is_absent_token(value):
        return fallback
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(clean_numeric_token(str(value)))
        except ValueError:
            return fallback
    if math.isnan(number) or math.isinf(number):
        return fallback
    return number


def parse_optional(value: Any) -> Optional[float]:
    """Shorthand for an optional field."""
    return parse_number(value, Presence.OPTIONAL)


def parse_mandatory(value: Any) -> float:
    """Shorthand for a mandatory field; never returns None."""
    number = parse_number(value, Presence.MANDATORY)
    return 0.0 if number is None else number


def text_or_empty(value: Any) -> str:
    """Vendor text field, stripped; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def round2(value: float) -> float:
    """Round to 2 decimal places for monetary values."""
    return round(float(value), 2)
