"""
Tests for valchain.errors.
"""

import copy
import pickle

import pytest

from valchain import UsageError, ValidationError, run_and_tag_path


class TestValidationError:
    def test_string_message(self):
        e = ValidationError("oops")
        assert isinstance(e, ValueError)
        assert e.message == "oops"
        assert str(e) == "oops"
        assert e.path == []

    def test_template_message(self):
        e = ValidationError(lambda name: "Some " + name + " is invalid")
        assert e.message == "Some value is invalid"

        e = e.push_path("users")
        assert e.message == "Some value at `users` is invalid"

        e = e.push_path(123)
        assert e.path == [123, "users"]
        assert e.message == "Some value at `123.users` is invalid"
        assert str(e) == "Some value at `123.users` is invalid"

    def test_push_path_does_not_mutate(self):
        original = ValidationError(lambda name: f"The {name} is invalid")
        tagged = original.push_path("a")

        assert tagged is not original
        assert original.path == []
        assert original.message == "The value is invalid"
        assert tagged.path == ["a"]

    def test_path_is_a_copy(self):
        e = ValidationError("oops", ("a",))
        e.path.append("b")
        assert e.path == ["a"]

    def test_repr(self):
        e = ValidationError(lambda name: f"The {name} is bad", ("x", 0))
        assert repr(e) == "ValidationError('The value at `x.0` is bad', path=['x', 0])"

    def test_invalid_template(self):
        with pytest.raises(TypeError):
            ValidationError(42)

    def test_copy_keeps_path(self):
        e = ValidationError(lambda name: f"The {name} is bad", ("x", 0))
        copied = copy.copy(e)

        assert copied.path == ["x", 0]
        assert copied.message == "The value at `x.0` is bad"

    def test_pickle_keeps_path(self):
        e = ValidationError("Bad row", ("rows", 3))
        restored = pickle.loads(pickle.dumps(e))

        assert restored.path == ["rows", 3]
        assert restored.message == "Bad row"

    def test_usage_error_is_not_a_validation_error(self):
        assert not issubclass(UsageError, ValidationError)


class TestRunAndTagPath:
    def test_nothing_raised(self):
        assert run_and_tag_path(lambda: 123, "prop") == 123

    def test_other_errors_pass_through(self):
        error = RuntimeError("bad")

        def fail():
            raise error

        with pytest.raises(RuntimeError) as exc_info:
            run_and_tag_path(fail, "prop")

        assert exc_info.value is error
        assert not hasattr(exc_info.value, "path")

    def test_tags_validation_errors(self):
        some_error = ValidationError(lambda name: "The " + name + " is invalid")

        def fail():
            raise some_error

        with pytest.raises(ValidationError) as exc_info:
            run_and_tag_path(fail, "prop")

        e = exc_info.value
        assert e is not some_error
        assert e.path == ["prop"]
        assert e.message == "The value at `prop` is invalid"
        assert some_error.path == []

    def test_nested_tagging_reads_root_to_leaf(self):
        def leaf():
            raise ValidationError(lambda name: f"Bad {name}")

        with pytest.raises(ValidationError) as exc_info:
            run_and_tag_path(
                lambda: run_and_tag_path(lambda: run_and_tag_path(leaf, 0), "books"),
                "users",
            )

        assert exc_info.value.path == ["users", "books", 0]
        assert exc_info.value.message == "Bad value at `users.books.0`"
