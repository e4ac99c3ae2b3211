"""Property-based tests for parameter encoding.

Tests the bracket flattening rules over generated parameter shapes.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from moodle_mcp.invoker import encode_params, to_wire_string

# =============================================================================
# Strategies for generating parameter values
# =============================================================================

keys = st.from_regex(r"^[a-z][a-z0-9_]{0,10}$", fullmatch=True)

scalars = st.one_of(
    st.booleans(),
    st.integers(min_value=-(2**31), max_value=2**31),
    st.text(max_size=20),
)

# Absent values mixed in at every level
values = st.recursive(
    st.one_of(scalars, st.none()),
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(keys, children, max_size=4),
    ),
    max_leaves=15,
)

params = st.dictionaries(keys, values, max_size=6)


def count_leaves(value) -> int:
    if value is None:
        return 0
    if isinstance(value, dict):
        return sum(count_leaves(v) for v in value.values())
    if isinstance(value, list):
        return sum(count_leaves(v) for v in value)
    return 1


# =============================================================================
# Property Tests
# =============================================================================


@pytest.mark.property
class TestEncodingProperties:
    """Property tests for encode_params."""

    @given(params)
    @settings(max_examples=100)
    def test_one_field_per_present_leaf(self, data):
        """Every non-None scalar produces exactly one field."""
        assert len(encode_params(data)) == count_leaves(data)

    @given(params)
    @settings(max_examples=100)
    def test_field_keys_unique(self, data):
        fields = encode_params(data)

        assert len({key for key, _ in fields}) == len(fields)

    @given(params)
    @settings(max_examples=100)
    def test_fields_stay_under_their_top_level_key(self, data):
        """Fields are grouped by top-level key, in insertion order."""
        fields = encode_params(data)

        roots = [key.split("[", 1)[0] for key, _ in fields]
        expected_order = [k for k in data if count_leaves(data[k])]
        deduped = [r for i, r in enumerate(roots) if i == 0 or roots[i - 1] != r]
        assert deduped == expected_order

    @given(params)
    @settings(max_examples=100)
    def test_values_are_strings(self, data):
        for key, value in encode_params(data):
            assert isinstance(key, str)
            assert isinstance(value, str)

    @given(keys, st.lists(st.integers(), max_size=10))
    @settings(max_examples=50)
    def test_sequence_indexes(self, key, items):
        fields = encode_params({key: items})

        assert fields == [(f"{key}[{i}]", str(item)) for i, item in enumerate(items)]

    @given(keys, st.dictionaries(keys, scalars, max_size=5))
    @settings(max_examples=50)
    def test_mapping_sub_keys(self, key, mapping):
        fields = encode_params({key: mapping})

        assert fields == [(f"{key}[{k}]", to_wire_string(v)) for k, v in mapping.items()]

    @given(st.booleans())
    def test_booleans_lowercase(self, flag):
        assert to_wire_string(flag) in ("true", "false")
