"""
Context manager for validation configuration (e.g., traceback trimming).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for traceback trimming
_trim_traceback: ContextVar[bool] = ContextVar("trim_traceback", default=True)


def is_trimming() -> bool:
    """Check if ValidationError tracebacks are currently trimmed."""
    return _trim_traceback.get()


@contextmanager
def validation_context(*, trim_traceback: bool = True):
    """
    Context manager for validation configuration.

    Args:
        trim_traceback: If True (default), a ValidationError raised by
               `validate()` carries a traceback rooted at the caller, without
               the engine frames it travelled through. Set to False to keep
               the full traceback when debugging a custom step.

    Example:
        from valchain import V, validation_context

        User = V.shape({"name": V.string.min(3)})

        with validation_context(trim_traceback=False):
            User({"name": "al"})  # traceback includes the failing step
    """
    token = _trim_traceback.set(trim_traceback)
    try:
        yield
    finally:
        _trim_traceback.reset(token)
