"""Value coercion between attribute text and typed field values."""

from __future__ import annotations

import re
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from .types import FieldType

if TYPE_CHECKING:
    from .schema import FieldSpec

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_TICKS_PER_SECOND = 10_000_000

_DURATION_CLOCK = re.compile(
    r"^\s*(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d+):(?P<minutes>\d+)"
    r"(?::(?P<seconds>\d+)(?:\.(?P<fraction>\d{1,7}))?)?\s*$"
)
_DURATION_DAYS = re.compile(r"^\s*(?P<sign>-)?(?P<days>\d+)\s*$")


def _make_duration(text: str, **parts: int) -> timedelta:
    try:
        return timedelta(**parts)
    except OverflowError as exc:
        raise ValueError(f"Duration out of range: {text!r}") from exc


def parse_duration(text: str) -> timedelta:
    """
    Parse duration text of the form ``[-][d.]hh:mm[:ss[.fffffff]]`` or ``[-]d``.

    Raises:
        ValueError: If the text is not a valid duration
    """
    match = _DURATION_DAYS.match(text)
    if match:
        value = _make_duration(text, days=int(match.group("days")))
        return -value if match.group("sign") else value

    match = _DURATION_CLOCK.match(text)
    if not match:
        raise ValueError(f"Invalid duration format: {text!r}")

    days = int(match.group("days") or 0)
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"Duration component out of range: {text!r}")

    fraction = match.group("fraction") or ""
    ticks = int(fraction.ljust(7, "0")) if fraction else 0
    value = _make_duration(
        text,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=ticks // 10,
    )
    return -value if match.group("sign") else value


def format_duration(value: timedelta) -> str:
    """Format a duration as ``[-][d.]hh:mm:ss[.fffffff]``."""
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, remainder = divmod(value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.days:
        text = f"{value.days}.{text}"
    if value.microseconds:
        text += f".{value.microseconds * 10:07d}"
    return sign + text


def _parse_integer(text: str, lower: int, upper: int) -> int:
    value = int(text.strip())
    if value < lower or value > upper:
        raise ValueError(f"Value {value} is outside the range {lower}..{upper}")
    return value


def _parse_boolean(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"Invalid boolean: {text!r}")


def parse_value(text: str, field_type: FieldType) -> Any:
    """
    Convert attribute text into a value of the declared field type.

    Raises:
        ValueError: If the text cannot be converted
    """
    if field_type is FieldType.STRING:
        return text
    if field_type is FieldType.INTEGER:
        return _parse_integer(text, INT32_MIN, INT32_MAX)
    if field_type is FieldType.LONG:
        return _parse_integer(text, INT64_MIN, INT64_MAX)
    if field_type is FieldType.DURATION:
        return parse_duration(text)
    if field_type is FieldType.BOOLEAN:
        return _parse_boolean(text)
    raise ValueError(f"Unsupported field type: {field_type}")


def format_value(value: Any, field_type: FieldType) -> str:
    """Convert a typed field value into attribute text."""
    if field_type is FieldType.DURATION:
        return format_duration(value)
    if field_type is FieldType.BOOLEAN:
        return "true" if value else "false"
    return str(value)


def coerce(raw: Any, field_spec: FieldSpec) -> Any:
    """Coerce raw value to the field's type where possible."""
    if raw is None or not isinstance(raw, str):
        return raw
    if field_spec.type is FieldType.STRING:
        return raw
    try:
        return parse_value(raw, field_spec.type)
    except ValueError:
        return raw
