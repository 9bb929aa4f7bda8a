"""Validation utilities for configuration field values."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Any, List, Optional, Union

from .coercion import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, parse_duration
from .errors import ValidationError
from .types import FieldType

if TYPE_CHECKING:
    from .schema import FieldSpec


@dataclass(frozen=True)
class Violation:
    field: str
    rule: str
    message: str


class Validator:
    """Base class for field validators."""

    rule = "value"

    def check(self, value: Any) -> Optional[str]:
        """Return a description of the violation, or None if the value is valid."""
        raise NotImplementedError


@dataclass(frozen=True)
class StringValidator(Validator):
    min_length: int = 0
    max_length: Optional[int] = None
    invalid_characters: str = ""

    rule = "string"

    def check(self, value: Any) -> Optional[str]:
        if len(value) < self.min_length:
            return f"The string must be at least {self.min_length} characters long."
        if self.max_length is not None and len(value) > self.max_length:
            return f"The string must be no more than {self.max_length} characters long."
        invalid = sorted({char for char in value if char in self.invalid_characters})
        if invalid:
            return (
                "The string cannot contain any of the following characters: "
                f"'{self.invalid_characters}'. Found: {''.join(invalid)!r}."
            )
        return None


@dataclass(frozen=True)
class IntegerValidator(Validator):
    """Inclusive numeric range; with ``exclude_range`` the value must fall outside it."""

    min_value: Optional[int] = None
    max_value: Optional[int] = None
    exclude_range: bool = False

    rule = "range"

    def check(self, value: Any) -> Optional[str]:
        return _check_range(value, self.min_value, self.max_value, self.exclude_range)


@dataclass(frozen=True)
class LongValidator(IntegerValidator):
    pass


@dataclass(frozen=True)
class DurationValidator(Validator):
    """Duration range; bounds accept timedelta values or duration text."""

    min_value: Union[timedelta, str, None] = None
    max_value: Union[timedelta, str, None] = None
    exclude_range: bool = False

    rule = "duration"

    def __post_init__(self) -> None:
        for name in ("min_value", "max_value"):
            bound = getattr(self, name)
            if isinstance(bound, str):
                object.__setattr__(self, name, parse_duration(bound))

    def check(self, value: Any) -> Optional[str]:
        return _check_range(value, self.min_value, self.max_value, self.exclude_range)


@dataclass(frozen=True)
class RegexStringValidator(Validator):
    pattern: str
    _compiled: Any = field(init=False, repr=False, compare=False)

    rule = "regex"

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def check(self, value: Any) -> Optional[str]:
        if not self._compiled.search(value):
            return f"The value does not conform to the regular expression {self.pattern!r}."
        return None


def _check_range(value: Any, lower: Any, upper: Any, exclude_range: bool) -> Optional[str]:
    inside = (lower is None or value >= lower) and (upper is None or value <= upper)
    if exclude_range and inside:
        return f"The value must not be in the range {lower} - {upper}."
    if not exclude_range and not inside:
        return f"The value must be inside the range {lower} - {upper}."
    return None


def _is_valid_type(value: Any, expected_type: FieldType) -> bool:
    if expected_type is FieldType.STRING:
        return isinstance(value, str)
    if expected_type is FieldType.INTEGER:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and INT32_MIN <= value <= INT32_MAX
        )
    if expected_type is FieldType.LONG:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and INT64_MIN <= value <= INT64_MAX
        )
    if expected_type is FieldType.DURATION:
        return isinstance(value, timedelta)
    if expected_type is FieldType.BOOLEAN:
        return isinstance(value, bool)
    return False


def validate(value: Any, field_spec: FieldSpec) -> List[Violation]:
    """Check a typed value against a field's declared type and validator."""
    violations: List[Violation] = []

    if value is None:
        if field_spec.required or field_spec.default is not None:
            violations.append(
                Violation(field_spec.name, "required", "A value is required.")
            )
        return violations

    if not _is_valid_type(value, field_spec.type):
        violations.append(
            Violation(
                field_spec.name,
                "type",
                f"Expected {field_spec.type.value}, got {value!r}.",
            )
        )
        return violations

    if field_spec.validator is not None:
        message = field_spec.validator.check(value)
        if message:
            violations.append(
                Violation(field_spec.name, field_spec.validator.rule, message)
            )
    return violations


def ensure_valid(value: Any, field_spec: FieldSpec) -> None:
    """Raise ValidationError for the first violation found."""
    violations = validate(value, field_spec)
    if violations:
        first = violations[0]
        raise ValidationError(first.field, first.rule, first.message, value=value)
