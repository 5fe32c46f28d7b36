"""
Type-specialized validators for valchain.

Each class adds the chain steps of one kind. Checks are built with
`assert_` and transforms with `compose`, so steps combine in any order.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable

from .core import Kind, Validator, register_facade
from .errors import UsageError, ValidationError, run_and_tag_path
from .lib.type_helpers import TypeTag, classify

MAX_SAFE_INTEGER = 2**53 - 1

EMAIL_PATTERN = re.compile(
    r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}])"
    r"|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))\Z"
)


@register_facade(Kind.STRING)
class StringValidator(Validator):
    """
    Validator for `str` values.

    Usage:
        V.string.to_trimmed.to_lower.min(3).max(40)
        V.string.regexp(r"^[a-z]+$")
        V.email
    """

    __slots__ = ()

    def min(self, min_length: int) -> StringValidator:
        return self.assert_(lambda s: len(s) >= min_length)

    def max(self, max_length: int) -> StringValidator:
        return self.assert_(lambda s: len(s) <= max_length)

    @property
    def trimmed(self) -> StringValidator:
        return self.assert_(lambda s: s.strip() == s)

    @property
    def to_trimmed(self) -> StringValidator:
        return self.compose(str.strip)

    @property
    def lower(self) -> StringValidator:
        return self.assert_(lambda s: s.lower() == s)

    @property
    def upper(self) -> StringValidator:
        return self.assert_(lambda s: s.upper() == s)

    @property
    def to_lower(self) -> StringValidator:
        return self.compose(str.lower)

    @property
    def to_upper(self) -> StringValidator:
        return self.compose(str.upper)

    def regexp(self, pattern: str | re.Pattern) -> StringValidator:
        """Fail unless `pattern` matches somewhere in the string (`re.search`)."""
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern)
            except re.error as e:
                raise UsageError(f"Invalid pattern {pattern!r}: {e}") from e
        elif not isinstance(pattern, re.Pattern):
            raise UsageError(
                f"Pattern must be str or re.Pattern, got {type(pattern).__name__}"
            )

        compiled = pattern
        return self.assert_(lambda s: compiled.search(s) is not None)

    @property
    def email(self) -> StringValidator:
        return self.regexp(EMAIL_PATTERN)

    def assert_every_char(self, predicate: Callable[[str], Any]) -> StringValidator:
        return self.assert_(lambda s: all(predicate(c) for c in s))


def _is_safe_integer(n: Any) -> bool:
    if isinstance(n, int):
        return True
    if isinstance(n, float):
        return n.is_integer() and abs(n) <= MAX_SAFE_INTEGER
    # Bound first: huge Fractions overflow on float conversion.
    return abs(n) <= MAX_SAFE_INTEGER and n == int(n)


def _is_infinite(value: Any) -> bool:
    return classify(value) is TypeTag.NUMBER and value in (math.inf, -math.inf)


@register_facade(Kind.NUMBER)
class NumberValidator(Validator):
    """
    Validator for real numbers (`int`, `float`, ...; never `bool`).

    NaN is always rejected. Infinities are rejected unless `allow_infinity`
    is chained.
    """

    __slots__ = ()

    @property
    def integer(self) -> NumberValidator:
        return self.assert_(_is_safe_integer)

    @property
    def positive(self) -> NumberValidator:
        return self.assert_(lambda n: n > 0)

    @property
    def negative(self) -> NumberValidator:
        return self.assert_(lambda n: n < 0)

    def min(self, minimum: Any) -> NumberValidator:
        return self.assert_(lambda n: n >= minimum)

    def max(self, maximum: Any) -> NumberValidator:
        return self.assert_(lambda n: n <= maximum)

    @property
    def allow_infinity(self) -> NumberValidator:
        return self.set_options(allow_infinity=True)

    def _run(self, value: Any) -> Any:
        if (
            value is not None
            and not self.options.allow_infinity
            and _is_infinite(value)
        ):
            raise ValidationError(lambda subject: f"The {subject} must be finite")

        return super()._run(value)


@register_facade(Kind.ARRAY)
class ArrayValidator(Validator):
    """
    Validator for sequences (`list` or `tuple`).

    Usage:
        V.array.of(V.string.to_trimmed).max(8)
    """

    __slots__ = ()

    def of(self, validator: Validator) -> ArrayValidator:
        """Validate every element; failures are located by element index. Returns a list."""
        if not isinstance(validator, Validator):
            raise UsageError(f"Expected a Validator, got {type(validator).__name__}")

        def validate_items(items: Any) -> list:
            return [
                run_and_tag_path(lambda item=item: validator(item), index)
                for index, item in enumerate(items)
            ]

        return self.compose(validate_items)

    def min(self, min_length: int) -> ArrayValidator:
        return self.assert_(lambda items: len(items) >= min_length)

    def max(self, max_length: int) -> ArrayValidator:
        return self.assert_(lambda items: len(items) <= max_length)
