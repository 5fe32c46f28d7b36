"""
Tests for valchain.context (traceback trimming).
"""

import traceback

import pytest

from valchain import V, ValidationError, validation_context
from valchain.context import is_trimming


def _frame_names(error: BaseException) -> list[str]:
    return [frame.name for frame in traceback.extract_tb(error.__traceback__)]


class TestValidationContext:
    def test_trimming_is_default(self):
        assert is_trimming() is True

    def test_context_resets(self):
        with validation_context(trim_traceback=False):
            assert is_trimming() is False
        assert is_trimming() is True

    def test_trimmed_traceback_hides_engine_frames(self):
        with pytest.raises(ValidationError) as exc_info:
            V.shape({"name": V.string})({"name": 1})

        names = _frame_names(exc_info.value)
        assert "check_type" not in names
        assert "validate_shape" not in names
        assert names[-1] == "validate"

    def test_full_traceback_when_disabled(self):
        with validation_context(trim_traceback=False):
            with pytest.raises(ValidationError) as exc_info:
                V.string(1)

        assert "check_type" in _frame_names(exc_info.value)

    def test_message_unaffected(self):
        with validation_context(trim_traceback=False):
            with pytest.raises(ValidationError) as exc_info:
                V.shape({"name": V.string})({"name": 1})

        assert exc_info.value.path == ["name"]
        assert str(exc_info.value) == (
            "The value at `name` must be a `string`, got a `number`"
        )
