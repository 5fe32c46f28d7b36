"""
Pydantic interop for valchain.

Provides to_pydantic() to compile a shaped validator into a model class.
"""

from __future__ import annotations

from typing import Annotated, Any
from typing import Optional as TypingOptional

from pydantic import BeforeValidator, create_model

from .core import Kind, Validator
from .errors import UsageError
from .shape import ObjectValidator


def to_pydantic(name: str, validator: Validator) -> type:
    """
    Compile a shaped validator to a Pydantic model.

    Every shape child becomes a field whose value is first run through the
    child validator, so transforms (e.g. `to_trimmed`) apply and failures are
    reported by Pydantic as value errors.

    Args:
        name: Name of the generated model class
        validator: A validator with a declared shape

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", V.shape({
            "name": V.string.to_trimmed,
            "email": V.email.optional,
        }))
        user = User(name="  Alice ")  # user.name == "Alice"
    """
    if not isinstance(validator, ObjectValidator) or validator.options.shape is None:
        raise UsageError("to_pydantic() requires a shaped validator")

    fields: dict[str, Any] = {}

    for key, child in validator.shape().items():
        fields[key] = _extract_pydantic_field(child)

    return create_model(name, **fields)


def _type_hint(child: Validator) -> Any:
    match child.kind:
        case Kind.STRING:
            return str
        case Kind.NUMBER:
            return int | float
        case Kind.BOOLEAN:
            return bool
        case Kind.OBJECT:
            return dict[str, Any]
        case Kind.ARRAY:
            return list[Any]

    return Any


def _extract_pydantic_field(child: Validator) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a child validator."""
    hint = _type_hint(child)

    if child.options.required:
        return (Annotated[hint, BeforeValidator(child.validate)], ...)
    return (Annotated[TypingOptional[hint], BeforeValidator(child.validate)], None)
