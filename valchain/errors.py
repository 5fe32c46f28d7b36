"""
Error model for valchain.

A ValidationError carries a message template and the structural path of the
offending value. The message is rendered when it is read, so an error can be
tagged with more path segments while it propagates out of nested validators.
Tagging never mutates an error: `push_path` returns a new one.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .types import MessageTemplate, Path, PathSegment

T = TypeVar("T")


def render_message(template: MessageTemplate, path: Path) -> str:
    """Render a template against a path ("value" or "value at `a.b.0`")."""
    if isinstance(template, str):
        return template

    if path:
        subject = "value at `" + ".".join(str(segment) for segment in path) + "`"
    else:
        subject = "value"

    return template(subject)


class ValidationError(ValueError):
    """
    Raised when a value does not satisfy a validator.

    Usage:
        try:
            User(payload)
        except ValidationError as e:
            e.path     # ["users", 1, "books", 0]
            e.message  # "The value at `users.1.books.0` must be a `string`, ..."
    """

    def __init__(self, template: MessageTemplate, path: Path = ()):
        if not isinstance(template, str) and not callable(template):
            raise TypeError(
                f"Message template must be str or callable, got {type(template).__name__}"
            )
        super().__init__(template, tuple(path))
        self.template = template
        self._path: Path = tuple(path)

    @property
    def path(self) -> list[PathSegment]:
        """Segments from the root value to the offending value, outermost first."""
        return list(self._path)

    @property
    def message(self) -> str:
        return render_message(self.template, self._path)

    def push_path(self, segment: PathSegment) -> ValidationError:
        """Return a new error located one level deeper, under `segment`."""
        return type(self)(self.template, (segment, *self._path))

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, path={self.path!r})"


class UsageError(Exception):
    """
    Raised when the builder API is misused (e.g. shaping twice).

    Not a ValidationError: it is never caught by one_of, shapes or `of`.
    """


def run_and_tag_path(func: Callable[[], T], segment: PathSegment) -> T:
    """
    Call `func`; re-raise a ValidationError from it located under `segment`.

    Any other exception passes through unchanged.
    """
    try:
        return func()
    except ValidationError as error:
        raise error.push_path(segment).with_traceback(error.__traceback__) from None


_MAX_DESCRIBE_LENGTH = 80


def describe(value: Any) -> str:
    """Text used for a value inside error messages, truncated when long."""
    text = str(value)
    if len(text) > _MAX_DESCRIBE_LENGTH:
        return text[: _MAX_DESCRIBE_LENGTH - 3] + "..."
    return text
