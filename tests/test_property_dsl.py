"""Property-based tests for fragment joining and document normalization.

Uses hypothesis to check that empty fragments always vanish cleanly and that
normalization never changes what a document means.
"""

from __future__ import annotations

from typing import Any

import orjson
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from esquery.domain.dsl import FRAGMENT_SEPARATOR, compress, interval, join, percentiles, pretty, range_, when
from esquery.domain.errors import InvalidIntervalError

PAIRS = st.from_regex(r'"[a-z]{1,8}": [1-9][0-9]{0,3}', fullmatch=True)
FRAGMENTS = st.lists(st.one_of(PAIRS, st.just("")), max_size=12)
SAFE_TEXT = st.characters(exclude_categories=("Cs",))
I64 = st.integers(min_value=-(2**63), max_value=2**63 - 1)

JSON_SCALARS = st.one_of(
    st.none(),
    st.booleans(),
    I64,
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(alphabet=SAFE_TEXT, max_size=20),
)
JSON_KEYS = st.text(alphabet=SAFE_TEXT, max_size=10)
JSON_VALUES = st.recursive(
    JSON_SCALARS,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(JSON_KEYS, children, max_size=5),
    ),
    max_leaves=25,
)


# ======================== join / when ========================


@pytest.mark.os_agnostic
@given(fragments=FRAGMENTS)
@settings(max_examples=200)
def test_join_equals_joining_only_non_empty_fragments(fragments: list[str]) -> None:
    result = join(fragments)

    assert result == FRAGMENT_SEPARATOR.join(f for f in fragments if f)


@pytest.mark.os_agnostic
@given(fragments=FRAGMENTS)
@settings(max_examples=200)
def test_join_leaves_no_stray_separators(fragments: list[str]) -> None:
    result = join(fragments)

    assert not result.startswith(",")
    assert not result.endswith(",")
    assert "\n\n" not in result
    assert ",\n,\n" not in result


@pytest.mark.os_agnostic
@given(fragments=FRAGMENTS)
def test_joined_key_value_fragments_form_valid_object(fragments: list[str]) -> None:
    orjson.loads("{" + join(fragments) + "}")


@pytest.mark.os_agnostic
@given(cond=st.booleans(), fragments=FRAGMENTS)
def test_when_is_join_or_nothing(cond: bool, fragments: list[str]) -> None:
    expected = join(fragments) if cond else ""

    assert when(cond, *fragments) == expected


# ======================== normalization ========================


@pytest.mark.os_agnostic
@given(value=JSON_VALUES)
@settings(max_examples=200)
def test_compress_preserves_structure(value: Any) -> None:
    text = orjson.dumps(value, option=orjson.OPT_INDENT_2).decode()

    assert orjson.loads(compress(text)) == orjson.loads(text)


@pytest.mark.os_agnostic
@given(value=JSON_VALUES)
@settings(max_examples=200)
def test_pretty_preserves_structure(value: Any) -> None:
    text = orjson.dumps(value).decode()

    assert orjson.loads(pretty(text)) == orjson.loads(text)


@pytest.mark.os_agnostic
@given(value=JSON_VALUES)
def test_compress_is_idempotent(value: Any) -> None:
    once = compress(orjson.dumps(value).decode())

    assert compress(once) == once


# ======================== percentiles / interval ========================


@pytest.mark.os_agnostic
@given(percents=st.lists(st.floats(min_value=0, max_value=100), min_size=1, max_size=8))
def test_percentiles_render_every_break_point_in_order(percents: list[float]) -> None:
    rendered = ", ".join(f"{p:.2f}" for p in percents)

    assert f'"percents": [{rendered}]' in percentiles("latency", *percents)


@pytest.mark.os_agnostic
@given(value=st.one_of(st.floats(), st.none(), st.booleans(), st.lists(st.integers(), max_size=2)))
def test_interval_rejects_everything_but_int_and_str(value: Any) -> None:
    with pytest.raises(InvalidIntervalError):
        interval(value)


@pytest.mark.os_agnostic
@given(value=st.one_of(I64, st.text(alphabet=SAFE_TEXT, max_size=10)))
def test_interval_output_is_a_valid_key_value_fragment(value: int | str) -> None:
    assert orjson.loads("{" + interval(value) + "}") == {"interval": value}


@pytest.mark.os_agnostic
@given(value=st.one_of(st.integers(), st.integers(min_value=2**63), st.integers(max_value=-(2**63) - 1)))
def test_interval_renders_integers_of_any_size_bare(value: int) -> None:
    assert interval(value) == f'"interval": {value}'


@pytest.mark.os_agnostic
@given(gte=st.integers(), lte=st.integers())
def test_range_builds_for_integers_of_any_size(gte: int, lte: int) -> None:
    fragment = range_(gte, lte, field="n")

    assert f'"gte": {gte}' in fragment
    assert f'"lte": {lte}' in fragment
