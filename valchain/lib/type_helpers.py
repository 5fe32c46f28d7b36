"""
Helper functions for classifying runtime values into coarse type tags.
"""

import numbers
import re
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any


class TypeTag(str, Enum):
    """
    Closed set of type tags produced by `classify` and `precise_classify`.

    DATE and REGEXP are only produced by `precise_classify`; `classify`
    reports those values as INSTANCE.
    """

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    OBJECT = "object"
    SET = "set"
    FUNCTION = "function"
    INSTANCE = "instance"
    DATE = "date"
    REGEXP = "regexp"

    def __str__(self) -> str:
        return self.value


def classify(value: Any) -> TypeTag:
    """
    Return the coarse type tag of a value.

    Order matters: bool is checked before numbers (bool subclasses int) and
    data containers before callables.
    """
    if value is None:
        return TypeTag.NULL
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, numbers.Real):
        return TypeTag.NUMBER
    if isinstance(value, str):
        return TypeTag.STRING
    if isinstance(value, (bytes, bytearray)):
        return TypeTag.BYTES
    if isinstance(value, (list, tuple)):
        return TypeTag.ARRAY
    if isinstance(value, Mapping):
        return TypeTag.OBJECT
    if isinstance(value, (set, frozenset)):
        return TypeTag.SET
    if callable(value):
        return TypeTag.FUNCTION
    return TypeTag.INSTANCE


def precise_classify(value: Any) -> TypeTag:
    """Like `classify`, but refines dates and compiled patterns. Only used for error messages."""
    tag = classify(value)
    if tag is TypeTag.INSTANCE:
        if isinstance(value, date):
            return TypeTag.DATE
        if isinstance(value, re.Pattern):
            return TypeTag.REGEXP
    return tag


def to_type_tag(tag: TypeTag | str) -> TypeTag:
    """Coerce a tag name such as "string" to its TypeTag member."""
    if isinstance(tag, TypeTag):
        return tag
    try:
        return TypeTag(tag)
    except ValueError:
        raise ValueError(f"Unknown type tag: {tag!r}") from None


def same_value(left: Any, right: Any) -> bool:
    """
    Strict equality: identical objects, or equal values sharing a coarse tag.

    Keeps True from matching 1 while 1 still matches 1.0.
    """
    if left is right:
        return True
    return classify(left) is classify(right) and bool(left == right)
