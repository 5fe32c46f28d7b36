"""Property-based tests for core valchain behaviour."""

from hypothesis import given
from hypothesis import strategies as st

from valchain import V, ValidationError

json_scalars = st.one_of(
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False),
    st.text(),
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=5), children, max_size=4),
    ),
    max_leaves=10,
)

key_names = st.text(alphabet="abcdefghij", min_size=1, max_size=4)


@given(json_values)
def test_root_is_identity(value):
    assert V(value) == value


@given(st.sampled_from([V, V.string, V.number.integer, V.array.of(V.string), V.shape({})]))
def test_optional_accepts_none(validator):
    assert validator.optional(None) is None


@given(st.sampled_from([V, V.string.min(100), V.compose(lambda v: v.missing)]))
def test_required_rejects_none(validator):
    try:
        validator.required(None)
    except ValidationError as e:
        assert e.path == []
    else:
        raise AssertionError("None was accepted")


@given(st.text())
def test_string_transforms_are_idempotent(value):
    for validator in (V.string.to_trimmed, V.string.to_lower, V.string.to_upper):
        once = validator(value)
        assert validator(once) == once


@given(st.text())
def test_trimmed_lowered(value):
    assert V.string.to_trimmed.to_lower(value) == value.strip().lower()


@given(st.dictionaries(key_names, st.integers()), st.sets(key_names, max_size=5))
def test_shape_keeps_only_declared_keys(data, declared):
    schema = V.shape({key: V.number.optional for key in declared})
    result = schema(data)

    assert set(result) == set(data) & declared
    assert all(result[key] == data[key] for key in result)


@given(st.lists(st.integers(), max_size=5), st.lists(st.integers(), max_size=3))
def test_array_failure_path_is_index(prefix, suffix):
    items = [*prefix, "bad", *suffix]

    try:
        V.array.of(V.number)(items)
    except ValidationError as e:
        assert e.path == [len(prefix)]
    else:
        raise AssertionError("invalid element was accepted")


@given(st.text(max_size=10))
def test_one_of_order_sensitive(value):
    assert V.one_of(V.string.to_upper, V.string.to_lower)(value) == value.upper()
    assert V.one_of(V.string.to_lower, V.string.to_upper)(value) == value.lower()
