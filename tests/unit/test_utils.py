"""Tests for text helpers."""

from datetime import UTC, datetime

import pytest

from route_client_core.utils import encode_uri_component, is_blank, is_true, to_camel_case, to_text, trim


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("get-all", "getAll"),
        ("repos", "repos"),
        ("Pull-Requests", "pullRequests"),
        ("collaborators-add", "collaboratorsAdd"),
        ("render raw", "renderRaw"),
        ("", ""),
    ],
)
def test_to_camel_case(value, expected):
    assert to_camel_case(value) == expected


@pytest.mark.unit
def test_to_camel_case_upper():
    assert to_camel_case("get-all", upper=True) == "GetAll"


@pytest.mark.unit
def test_trim_only_touches_strings():
    assert trim("  \t value \n") == "value"
    assert trim(42) == 42
    assert trim(None) is None


@pytest.mark.unit
def test_is_blank_follows_schema_falsiness():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank(0)
    assert is_blank(float("nan"))
    assert not is_blank(False)
    assert not is_blank("0")
    assert not is_blank({})
    assert not is_blank([])


@pytest.mark.unit
def test_is_true():
    assert is_true("true")
    assert is_true("ON")
    assert is_true(True)
    assert not is_true("false")
    assert not is_true("")
    assert not is_true(None)


@pytest.mark.unit
def test_to_text():
    assert to_text(True) == "true"
    assert to_text(3.0) == "3"
    assert to_text(2.5) == "2.5"
    assert to_text({"a": 1}) == '{"a":1}'
    assert to_text(datetime(2024, 1, 2, tzinfo=UTC)) == "2024-01-02T00:00:00+00:00"


@pytest.mark.unit
def test_encode_uri_component_matches_javascript():
    assert encode_uri_component("a b&c=d/é") == "a%20b%26c%3Dd%2F%C3%A9"
    assert encode_uri_component("it's (ok)!*~") == "it's%20(ok)!*~"
    assert encode_uri_component(False) == "false"
