"""Per-call parameter validation and coercion.

Every declared parameter of a route is checked against its
:class:`ParamRule`. Valid values are coerced to their declared type and
written back into the message, so implementations always see typed values.
"""

import json
import math
import re
from collections.abc import Mapping, MutableMapping
from datetime import UTC, datetime
from typing import Any

from route_client_core.errors.exceptions import BadRequestError
from route_client_core.schema.models import ParamRule
from route_client_core.utils import is_blank, to_text, trim

_LEADING_INT = re.compile(r"^[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def validate_params(message: MutableMapping[str, Any], rules: Mapping[str, ParamRule]) -> MutableMapping[str, Any]:
    """Validate and coerce ``message`` in place against ``rules``.

    Args:
        message: Caller-supplied parameter values, keyed by parameter name.
        rules: Resolved parameter rules of the route being called.

    Returns:
        The same message object, with validated values written back.

    Raises:
        BadRequestError: On a missing required value, a failed validation
            pattern, or a value that cannot be coerced to its declared type.
    """
    for name, rule in rules.items():
        value = trim(message.get(name))
        if is_blank(value):
            if not rule.required or (rule.allow_empty and value == ""):
                continue
            raise BadRequestError(f"Empty value for parameter '{name}': {value}", param=name)

        if rule.validation and not re.search(rule.validation, to_text(value)):
            raise BadRequestError(f"Invalid value for parameter '{name}': {value}", param=name)

        if rule.type:
            value = coerce_value(name, value, rule.type, original=message.get(name))
        message[name] = value
    return message


def coerce_value(name: str, value: Any, param_type: str, original: Any = None) -> Any:
    """Convert a trimmed value to ``param_type``.

    Unknown types leave the value untouched.
    """
    if param_type == "number":
        number = _parse_leading(_LEADING_INT, value, int)
        if number is None:
            raise BadRequestError(
                f"Invalid value for parameter '{name}': {original} is NaN",
                param=name,
            )
        return number

    if param_type == "float":
        number = _parse_leading(_LEADING_FLOAT, value, float)
        if number is None:
            raise BadRequestError(
                f"Invalid value for parameter '{name}': {original} is NaN",
                param=name,
            )
        return number

    if param_type == "json":
        if not isinstance(value, str):
            return value
        try:
            return json.loads(value)
        except ValueError:
            raise BadRequestError(
                f"JSON parse error of value for parameter '{name}': {value}",
                param=name,
            ) from None

    if param_type == "date":
        return _parse_date(name, value)

    return value


def _parse_leading(pattern: re.Pattern[str], value: Any, target: type) -> Any:
    # Numbers parse by their longest numeric prefix: "42px" -> 42
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if target is int and not math.isfinite(value):
            return None
        return target(value)
    match = pattern.match(to_text(value))
    if not match:
        return None
    text = match.group(0)
    if target is float:
        return float(text.replace("Infinity", "inf"))
    return int(text)


def _parse_date(name: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    try:
        return datetime.fromisoformat(to_text(value))
    except ValueError:
        raise BadRequestError(f"Invalid date for parameter '{name}': {value}", param=name) from None
