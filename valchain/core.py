"""
Core validator class for valchain.

Provides the immutable Validator with functional composition, and the root
validator V that every chain starts from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import reduce
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, TypeVar

from .context import is_trimming
from .errors import UsageError, ValidationError, describe
from .lib.type_helpers import (
    TypeTag,
    classify,
    precise_classify,
    same_value,
    to_type_tag,
)
from .types import Err, Ok, Predicate, Step

if TYPE_CHECKING:
    from .shape import ObjectValidator
    from .validators import ArrayValidator, NumberValidator, StringValidator

logger = logging.getLogger(__name__)

_V = TypeVar("_V", bound="Validator")


class Kind(Enum):
    """Active extension of a validator, i.e. which chain steps it offers."""

    GENERIC = "generic"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    FUNCTION = "function"


@dataclass(frozen=True, slots=True)
class Options:
    """Configuration carried along a validator chain."""

    required: bool = True
    allow_infinity: bool = False
    shape: Mapping[str, Validator] | None = None
    shape_step: Step | None = None


_FACADES: dict[Kind, type[Validator]] = {}


def register_facade(*kinds: Kind) -> Callable[[type[_V]], type[_V]]:
    """Bind a Validator class to the kinds it implements."""

    def decorator(cls: type[_V]) -> type[_V]:
        for kind in kinds:
            _FACADES[kind] = cls
        return cls

    return decorator


def _is_not_nan(n: Any) -> bool:
    return n == n


@register_facade(Kind.GENERIC, Kind.BOOLEAN, Kind.FUNCTION)
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Validator:
    """
    Immutable validator node.

    Holds an ordered pipeline of steps (each `value -> value`) and an
    Options record. Every chain step returns a new Validator; the receiver is
    never modified, so validators can be shared and extended freely.

    Usage:
        V.string.to_trimmed.min(3)("  bob ")   # "bob"
        V.number.optional(None)                # None
    """

    pipeline: tuple[Step, ...] = ()
    options: Options = field(default_factory=Options)
    kind: Kind = Kind.GENERIC

    def __call__(self, value: Any) -> Any:
        return self.validate(value)

    def __repr__(self) -> str:
        presence = "required" if self.options.required else "optional"
        return (
            f"<{type(self).__name__} kind={self.kind.value} "
            f"steps={len(self.pipeline)} {presence}>"
        )

    # Building blocks

    def set_options(self: _V, **changes: Any) -> _V:
        """Return a copy with some options replaced."""
        return replace(self, options=replace(self.options, **changes))

    def set_pipeline(self: _V, pipeline: Iterable[Step]) -> _V:
        """Return a copy with a different pipeline."""
        return replace(self, pipeline=tuple(pipeline))

    def narrow(self, kind: Kind) -> Validator:
        """Switch to the extension registered for `kind`, keeping pipeline and options."""
        try:
            facade = _FACADES[kind]
        except KeyError:
            raise UsageError(f"No validator registered for kind {kind!r}") from None
        return facade(pipeline=self.pipeline, options=self.options, kind=kind)

    def compose(self: _V, step: Step) -> _V:
        """Append a step to the pipeline."""
        if not callable(step):
            raise UsageError(f"Pipeline step must be callable, got {type(step).__name__}")
        return self.set_pipeline((*self.pipeline, step))

    # Presence (can be overridden by one another)

    @property
    def required(self: _V) -> _V:
        return self.set_options(required=True)

    @property
    def optional(self: _V) -> _V:
        return self.set_options(required=False)

    # Generic checks

    def assert_(self: _V, predicate: Predicate) -> _V:
        """
        Fail unless `predicate(value)` is truthy; the value passes unchanged.

        Usage:
            V.assert_(lambda v: v % 2 == 0)(4)   # 4
        """

        def check(value: Any) -> Any:
            if not predicate(value):
                shown = describe(value)
                raise ValidationError(
                    lambda subject: f"Assertion failure, the {subject} was `{shown}`"
                )
            return value

        return self.compose(check)

    def exactly(self: _V, expected: Any) -> _V:
        """Accept only `expected` (same object, or equal value of the same type tag)."""
        return self.assert_(lambda value: same_value(value, expected))

    def one_of(self: _V, *choices: Any) -> _V:
        """
        Accept the first choice that validates the value.

        Choices are validators or literal values (compared with `exactly`).
        They are tried in order and the result of the first one that does
        not fail is returned, so order matters when choices transform:

            V.one_of(V.string.to_upper, V.string.to_lower)("hEY")  # "HEY"
            V.one_of(V.string.to_lower, V.string.to_upper)("hEY")  # "hey"

        When every choice fails, the last failure is raised. A single list or
        tuple argument is treated as the list of choices.
        """
        if len(choices) == 1 and isinstance(choices[0], (list, tuple)):
            choices = tuple(choices[0])

        validators = tuple(_to_choice(choice) for choice in choices)

        def match_one(value: Any) -> Any:
            last_error: ValidationError | None = None

            for index, choice in enumerate(validators):
                try:
                    return choice(value)
                except ValidationError as error:
                    logger.debug("one_of choice %d rejected value: %s", index, error)
                    last_error = error

            if last_error is not None:
                raise last_error

            raise ValidationError(lambda subject: f"The {subject} doesn't match")

        return self.compose(match_one)

    def assert_type(self: _V, tag: TypeTag | str) -> _V:
        """Fail unless the value's type tag is `tag`, e.g. "string"."""
        try:
            expected = to_type_tag(tag)
        except ValueError as e:
            raise UsageError(str(e)) from e

        def check_type(value: Any) -> Any:
            if classify(value) is not expected:
                actual = precise_classify(value)
                raise ValidationError(
                    lambda subject: f"The {subject} must be a `{expected}`, got a `{actual}`"
                )
            return value

        return self.compose(check_type)

    # Type narrowing

    @property
    def string(self) -> StringValidator:
        return self.assert_type(TypeTag.STRING).narrow(Kind.STRING)  # type: ignore[return-value]

    @property
    def number(self) -> NumberValidator:
        return (
            self.assert_type(TypeTag.NUMBER)
            .assert_(_is_not_nan)
            .narrow(Kind.NUMBER)  # type: ignore[return-value]
        )

    @property
    def boolean(self) -> Validator:
        return self.assert_type(TypeTag.BOOLEAN).narrow(Kind.BOOLEAN)

    @property
    def object(self) -> ObjectValidator:
        return self.assert_type(TypeTag.OBJECT).narrow(Kind.OBJECT)  # type: ignore[return-value]

    @property
    def array(self) -> ArrayValidator:
        return self.assert_type(TypeTag.ARRAY).narrow(Kind.ARRAY)  # type: ignore[return-value]

    @property
    def func(self) -> Validator:
        return self.assert_type(TypeTag.FUNCTION).narrow(Kind.FUNCTION)

    # Shortcuts

    def shape(self, mapping: Mapping[str, Validator] | None = None) -> Any:
        return self.object.shape(mapping)

    def regexp(self, pattern: Any) -> StringValidator:
        return self.string.regexp(pattern)

    @property
    def email(self) -> StringValidator:
        return self.string.email

    @property
    def integer(self) -> NumberValidator:
        return self.number.integer

    # Entry points

    def _run(self, value: Any) -> Any:
        if value is None:
            if not self.options.required:
                # Don't run the pipeline, its steps assume a value is present.
                return value
            shown = describe(value)
            raise ValidationError(lambda subject: f"Required {subject}, got `{shown}`")

        return reduce(lambda current, step: step(current), self.pipeline, value)

    def validate(self, value: Any) -> Any:
        """
        Validate a value, returning it (possibly transformed).

        Calling the validator directly is equivalent.

        Raises:
            ValidationError: If the value doesn't satisfy the validator
        """
        try:
            return self._run(value)
        except ValidationError as error:
            if not is_trimming():
                raise
            raise error.with_traceback(None) from None

    def try_validate(self, value: Any) -> Ok[Any] | Err:
        """
        Validate without raising.

        Returns:
            Ok(result) if validation passes
            Err(error) if validation fails
        """
        try:
            return Ok(self.validate(value))
        except ValidationError as error:
            return Err(error)


def _to_choice(choice: Any) -> Validator:
    if isinstance(choice, Validator):
        return choice
    return V.exactly(choice)


V = Validator()
