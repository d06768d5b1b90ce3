import copy
from datetime import datetime

import numpy as np
import pytest
from neo4j.spatial import CartesianPoint, WGS84Point
from neo4j.time import Date, DateTime, Duration

from cypherkit.values.params import normalize_params, normalize_value
from cypherkit.values.temporal import TemporalValue, is_wire_integer


@pytest.mark.parametrize("number", [0, 1, -7, 2**40, -(2**62), np.int32(12), np.int64(-3)])
def test_integers_become_wire_integers(number) -> None:
    normalized = normalize_params({"a": number})

    assert is_wire_integer(normalized["a"])
    assert normalized["a"] == number


def test_normalizing_twice_is_a_noop() -> None:
    once = normalize_params({"a": np.int64(5), "b": [1, {"c": 2}]})
    twice = normalize_params(once)

    assert twice == once
    assert twice["a"] is once["a"]


def test_nan_becomes_none() -> None:
    assert normalize_params({"a": float("nan")}) == {"a": None}


def test_scalars_pass_through() -> None:
    moment = datetime(2020, 1, 2)
    params = {"s": "text", "f": 1.5, "t": True, "n": None, "dt": moment}

    normalized = normalize_params(params)

    assert normalized == params
    assert normalized["t"] is True
    assert normalized["dt"] is moment


def test_recurses_into_every_level() -> None:
    params = {
        "person": {
            "age": np.int64(30),
            "tags": ["a", np.int16(2), {"score": np.int8(9)}],
        },
        "ids": (np.int64(1), np.int64(2)),
    }

    normalized = normalize_params(params)

    assert normalized == {
        "person": {"age": 30, "tags": ["a", 2, {"score": 9}]},
        "ids": [1, 2],
    }
    assert type(normalized["person"]["tags"][2]["score"]) is int
    assert all(type(value) is int for value in normalized["ids"])


def test_wire_temporal_values_are_not_reencoded() -> None:
    day = Date(2020, 1, 2)
    moment = DateTime(2020, 1, 2, 3, 4, 5)

    normalized = normalize_params({"day": day, "nested": {"at": moment}})

    assert normalized["day"] is day
    assert normalized["nested"]["at"] is moment


def test_temporal_wrapper_is_unwrapped() -> None:
    day = Date(2020, 1, 2)
    assert normalize_value(TemporalValue(day)) is day


def test_caller_params_are_left_untouched() -> None:
    params = {"a": [np.int64(1), {"b": float("nan")}], "c": {"d": np.int64(4)}}
    snapshot = copy.deepcopy(params)

    normalized = normalize_params(params)

    assert normalized is not params
    assert normalized["a"] is not params["a"]
    assert normalized["c"] is not params["c"]
    assert type(params["c"]["d"]) is np.int64
    assert repr(params) == repr(snapshot)


def test_none_params() -> None:
    assert normalize_params(None) is None


def test_rejects_non_mapping_params() -> None:
    with pytest.raises(TypeError):
        normalize_params("name")


def test_durations_and_points_pass_through() -> None:
    span = Duration(days=3)
    spot = CartesianPoint((1.0, 2.0))
    globe = WGS84Point((-46.6, -23.5))

    normalized = normalize_params({"span": span, "at": [spot], "where": {"p": globe}})

    assert normalized["span"] is span
    assert normalized["at"][0] is spot
    assert normalized["where"]["p"] is globe
