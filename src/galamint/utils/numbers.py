"""Number formatting for values passed to the chain as strings."""

import math
import re
from typing import Optional

# Leading float literal, the part a lenient parser would accept.
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_float(value: str) -> float:
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def format_big_number(value: Optional[str]) -> str:
    """Render a supply/capacity input as a plain whole-number string.

    ``"1000.00"`` -> ``"1000"``, ``None``/``""`` -> ``""``, ``"abc"`` -> ``"0"``.
    Fractions are floored; no separators or exponent notation in the output.
    """
    if not value:
        return ""
    return str(math.floor(_parse_float(value)))
