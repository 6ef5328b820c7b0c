"""Small text helpers shared by the compiler, validator and assembler.

Route schemas were written against JavaScript semantics, so a few helpers
reproduce how values are stringified and percent-encoded there.
"""

import json
import math
import re
from datetime import datetime
from typing import Any
from urllib.parse import quote

_CAMEL_BOUNDARY = re.compile(r"(^.)|(\s+.)|(-.)")

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()~"


def to_camel_case(value: str, upper: bool = False) -> str:
    """Camel-case a hyphen or space separated name.

    ``"get-all"`` becomes ``"getAll"``; ``"Pull-Requests"`` becomes
    ``"pullRequests"``. With ``upper=True`` the first letter stays upper-case.
    """
    result = _CAMEL_BOUNDARY.sub(lambda m: m.group(0)[-1].upper(), value.lower())
    if upper:
        return result
    return result[:1].lower() + result[1:]


def is_true(value: Any) -> bool:
    """Lenient boolean parsing for configuration flags."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def trim(value: Any) -> Any:
    """Strip surrounding whitespace from strings, pass anything else through."""
    if isinstance(value, str):
        return value.strip()
    return value


def is_blank(value: Any) -> bool:
    """Return True for values a schema treats as "not supplied".

    ``False`` is a real value. Numeric zero and NaN count as blank, while
    non-empty containers count as present.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def to_text(value: Any) -> str:
    """Stringify a scalar the way the schemas expect it on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return to_json(value)
    return str(value)


def to_json(value: Any) -> str:
    """Compact JSON, dates rendered as ISO-8601."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_uri_component(value: Any) -> str:
    """Percent-encode a value like JavaScript's encodeURIComponent."""
    return quote(to_text(value), safe=_URI_COMPONENT_SAFE)
