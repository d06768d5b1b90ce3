from neo4j.time import Date

from cypherkit.values.cypher import (
    clear_string_for_regex,
    obj_to_params,
    obj_to_string,
    parse_date_cypher,
    to_float_or_none,
    to_int_or_none,
)
from cypherkit.values.temporal import TemporalType


def test_obj_to_string_renders_map_literal() -> None:
    assert obj_to_string({"name": "Ana"}, {"age": 30}) == '{name:"Ana",age:30}'


def test_obj_to_string_empty() -> None:
    assert obj_to_string() == ""
    assert obj_to_string({}, None) == ""


def test_obj_to_params_prefixes_keys() -> None:
    assert obj_to_params("n", {"name": "Ana"}) == '{n.name:"Ana"}'
    assert obj_to_params(None, {"name": "Ana"}) == '{name:"Ana"}'


def test_parse_date_cypher() -> None:
    assert parse_date_cypher("02/01/2020", TemporalType.DATE) == 'date("2020-01-02")'
    assert parse_date_cypher(Date(2020, 1, 2)).startswith('localdatetime("2020-01-02T00:00:00')
    assert parse_date_cypher("garbage") is None


def test_number_parsing() -> None:
    assert to_int_or_none(" 42 ") == 42
    assert to_int_or_none("4.2") is None
    assert to_int_or_none(None) is None
    assert to_float_or_none("4.5") == 4.5
    assert to_float_or_none("abc") is None


def test_clear_string_for_regex() -> None:
    assert clear_string_for_regex(None) is None
    assert clear_string_for_regex("") is None
    assert clear_string_for_regex("**ana") == "ana"
    assert clear_string_for_regex("a|b") == "a\\|b"
    assert clear_string_for_regex("(x)[y]{z}") == "\\(x\\)\\[y\\]\\{z\\}"
    assert clear_string_for_regex("c:\\dir") == "c:\\\\dir"
