"""
valchain - Composable, immutable runtime validators.

Usage:
    from valchain import V, ValidationError

    User = V.shape({
        "name": V.string.to_trimmed.to_lower.min(3).max(40),
        "email": V.email.max(40),
        "phone_numbers": V.array.of(V.string.to_trimmed.min(2)).max(8),
        "bio": V.string.max(1000).optional,
    })

    user = User(payload)  # raises ValidationError with a dotted path
"""

from .context import validation_context
from .core import Kind, Options, V, Validator
from .errors import UsageError, ValidationError, run_and_tag_path
from .lib.type_helpers import TypeTag, classify, precise_classify
from .schema import to_pydantic
from .shape import ObjectValidator
from .types import Err, Ok
from .validators import ArrayValidator, NumberValidator, StringValidator

__all__ = [
    # Root validator
    "V",
    # Core
    "Validator",
    "Kind",
    "Options",
    "StringValidator",
    "NumberValidator",
    "ObjectValidator",
    "ArrayValidator",
    # Errors
    "ValidationError",
    "UsageError",
    "run_and_tag_path",
    # Result types
    "Ok",
    "Err",
    # Type tags
    "TypeTag",
    "classify",
    "precise_classify",
    # Config
    "validation_context",
    # Schema
    "to_pydantic",
]
