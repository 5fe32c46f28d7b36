"""
Object validator and shapes for valchain.

A shape is a fixed mapping of key -> child validator. Validating against it
builds a new dict holding only the declared keys; anything else is dropped.
Structural edits (pick, map_children, ...) always re-declare the shape on a
new validator.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

from .core import Kind, Validator, register_facade
from .errors import UsageError, run_and_tag_path

logger = logging.getLogger(__name__)

ShapeMap = Mapping[str, Validator]


@register_facade(Kind.OBJECT)
class ObjectValidator(Validator):
    """
    Validator for mappings.

    Usage:
        User = V.shape({
            "name": V.string.to_trimmed.min(3),
            "bio": V.string.max(1000).optional,
        })
        User({"name": " john ", "admin": True})  # {"name": "john"}

        Patch = User.optional_children
        Public = User.pick("name")
    """

    __slots__ = ()

    def shape(self, mapping: ShapeMap | None = None) -> Any:
        """
        Declare the shape, or return the declared one when called without arguments.

        Raises:
            UsageError: If a shape is already declared, or a child is not a Validator
        """
        if mapping is None:
            return dict(self.options.shape or {})

        if self.options.shape is not None:
            raise UsageError("Already shaped")

        if not isinstance(mapping, Mapping):
            raise UsageError(f"Shape must be a mapping, got {type(mapping).__name__}")

        shape = dict(mapping)
        for key, child in shape.items():
            if not isinstance(child, Validator):
                raise UsageError(
                    f"Shape child {key!r} must be a Validator, got {type(child).__name__}"
                )

        def validate_shape(value: Mapping) -> dict:
            result = {}

            for key, child in shape.items():
                if not child.options.required and key not in value:
                    continue

                result[key] = run_and_tag_path(
                    lambda child=child, key=key: child.validate(value.get(key)), key
                )

            if logger.isEnabledFor(logging.DEBUG):
                dropped = [key for key in value if key not in shape]
                if dropped:
                    logger.debug("Shape dropped unknown keys: %s", dropped)

            return result

        return self.compose(validate_shape).set_options(
            shape=MappingProxyType(shape), shape_step=validate_shape
        )

    @property
    def unshape(self) -> ObjectValidator:
        """Remove the shape step, leaving every other step in place."""
        if self.options.shape is None:
            raise UsageError("Already unshaped")

        shape_step = self.options.shape_step
        return self.set_pipeline(
            step for step in self.pipeline if step is not shape_step
        ).set_options(shape=None, shape_step=None)

    def reshape(self, func: Callable[[dict], ShapeMap]) -> ObjectValidator:
        """Re-declare the shape as `func(current_shape)`. No-op when unshaped."""
        if self.options.shape is None:
            return self

        new_shape = func(self.shape())
        if not isinstance(new_shape, Mapping):
            raise UsageError(
                f"reshape() function must return a mapping, got {type(new_shape).__name__}"
            )

        return self.unshape.shape(new_shape)

    def map_children(
        self, func: Callable[[Validator, str], Validator]
    ) -> ObjectValidator:
        """Replace each child with `func(child, key)`."""
        return self.reshape(
            lambda old_shape: {
                key: run_and_tag_path(lambda child=child, key=key: func(child, key), key)
                for key, child in old_shape.items()
            }
        )

    def filter_children(self, func: Callable[[Validator, str], Any]) -> ObjectValidator:
        """Keep the children for which `func(child, key)` is truthy."""
        return self.reshape(
            lambda old_shape: {
                key: child
                for key, child in old_shape.items()
                if run_and_tag_path(lambda child=child, key=key: func(child, key), key)
            }
        )

    # Only works with shapes
    @property
    def required_children(self) -> ObjectValidator:
        return self.map_children(lambda child, key: child.required)

    # Only works with shapes
    @property
    def optional_children(self) -> ObjectValidator:
        return self.map_children(lambda child, key: child.optional)

    def pick(self, *keys: str) -> ObjectValidator:
        return self.filter_children(lambda child, key: key in keys)

    def of(self, validator: Validator) -> ObjectValidator:
        """Validate every value; failures are located by key. Returns a new dict."""
        if not isinstance(validator, Validator):
            raise UsageError(f"Expected a Validator, got {type(validator).__name__}")

        def validate_values(mapping: Mapping) -> dict:
            return {
                key: run_and_tag_path(lambda value=value: validator(value), key)
                for key, value in mapping.items()
            }

        return self.compose(validate_values)
