"""Tests for parameter validation and coercion."""

from datetime import UTC, datetime

import pytest

from route_client_core.errors.exceptions import BadRequestError
from route_client_core.schema.models import ParamRule
from route_client_core.schema.validator import validate_params


def rules(**kwargs):
    return {name: ParamRule(**rule) for name, rule in kwargs.items()}


class TestRequired:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_missing_required_value_raises(self, value):
        message = {} if value is None else {"user": value}

        with pytest.raises(BadRequestError) as exc_info:
            validate_params(message, rules(user={"required": True}))

        assert exc_info.value.param == "user"
        assert exc_info.value.status_code == 400
        assert "Empty value for parameter 'user'" in str(exc_info.value)

    @pytest.mark.unit
    def test_optional_blank_value_is_skipped_untouched(self):
        message = {"sort": "  "}

        validate_params(message, rules(sort={}))

        assert message == {"sort": "  "}

    @pytest.mark.unit
    def test_allow_empty_accepts_empty_string(self):
        message = {"body": "   "}

        validate_params(message, rules(body={"required": True, "allow_empty": True}))

        assert message == {"body": "   "}

    @pytest.mark.unit
    def test_allow_empty_still_requires_presence(self):
        with pytest.raises(BadRequestError):
            validate_params({}, rules(body={"required": True, "allow_empty": True}))

    @pytest.mark.unit
    def test_false_is_a_value(self):
        message = {"private": False}

        validate_params(message, rules(private={"required": True}))

        assert message["private"] is False

    @pytest.mark.unit
    def test_zero_counts_as_blank(self):
        with pytest.raises(BadRequestError):
            validate_params({"id": 0}, rules(id={"required": True, "type": "number"}))


class TestValidationPattern:
    @pytest.mark.unit
    def test_value_is_trimmed_and_written_back(self):
        message = {"user": "  octocat\n"}

        validate_params(message, rules(user={"required": True, "validation": "^[a-z]+$"}))

        assert message["user"] == "octocat"

    @pytest.mark.unit
    def test_pattern_mismatch_raises(self):
        with pytest.raises(BadRequestError) as exc_info:
            validate_params({"page": "two"}, rules(page={"validation": "^[0-9]+$"}))

        assert "Invalid value for parameter 'page': two" in str(exc_info.value)

    @pytest.mark.unit
    def test_pattern_is_not_anchored(self):
        message = {"state": "is-open-now"}

        validate_params(message, rules(state={"validation": "open|closed"}))

        assert message["state"] == "is-open-now"

    @pytest.mark.unit
    def test_booleans_match_as_lowercase_text(self):
        message = {"flag": True}

        validate_params(message, rules(flag={"validation": "^(true|false)$"}))

        assert message["flag"] is True


class TestCoercion:
    @pytest.mark.unit
    def test_number(self):
        message = {"page": "42"}

        validate_params(message, rules(page={"type": "number"}))

        assert message["page"] == 42
        assert isinstance(message["page"], int)

    @pytest.mark.unit
    def test_number_parses_leading_digits(self):
        message = {"page": "7 apples"}

        validate_params(message, rules(page={"type": "number"}))

        assert message["page"] == 7

    @pytest.mark.unit
    def test_number_truncates_floats(self):
        message = {"page": 3.9}

        validate_params(message, rules(page={"type": "number"}))

        assert message["page"] == 3

    @pytest.mark.unit
    @pytest.mark.parametrize("param_type", ["number", "float"])
    def test_not_a_number_raises(self, param_type):
        with pytest.raises(BadRequestError) as exc_info:
            validate_params({"value": "abc"}, rules(value={"type": param_type}))

        assert "abc is NaN" in str(exc_info.value)

    @pytest.mark.unit
    def test_float(self):
        message = {"ratio": " 0.25 "}

        validate_params(message, rules(ratio={"type": "float"}))

        assert message["ratio"] == 0.25

    @pytest.mark.unit
    def test_float_exponent(self):
        message = {"ratio": "1.5e3x"}

        validate_params(message, rules(ratio={"type": "float"}))

        assert message["ratio"] == 1500.0

    @pytest.mark.unit
    def test_json_string_is_parsed(self):
        message = {"config": '{"a":1}'}

        validate_params(message, rules(config={"type": "json"}))

        assert message["config"] == {"a": 1}

    @pytest.mark.unit
    def test_json_object_passes_through(self):
        value = {"url": "https://example.com/hook"}
        message = {"config": value}

        validate_params(message, rules(config={"type": "json"}))

        assert message["config"] is value

    @pytest.mark.unit
    def test_malformed_json_raises(self):
        with pytest.raises(BadRequestError) as exc_info:
            validate_params({"config": "{a:1"}, rules(config={"type": "json"}))

        assert "JSON parse error" in str(exc_info.value)

    @pytest.mark.unit
    def test_date_from_iso_string(self):
        message = {"since": "2024-03-01T12:00:00Z"}

        validate_params(message, rules(since={"type": "date"}))

        assert message["since"] == datetime(2024, 3, 1, 12, tzinfo=UTC)

    @pytest.mark.unit
    def test_date_from_epoch_milliseconds(self):
        message = {"since": 1_700_000_000_000}

        validate_params(message, rules(since={"type": "date"}))

        assert message["since"] == datetime.fromtimestamp(1_700_000_000, tz=UTC)

    @pytest.mark.unit
    def test_invalid_date_raises(self):
        with pytest.raises(BadRequestError):
            validate_params({"since": "yesterday"}, rules(since={"type": "date"}))

    @pytest.mark.unit
    def test_untyped_value_stays_trimmed_original(self):
        message = {"q": "  hello  "}

        validate_params(message, rules(q={"required": True}))

        assert message["q"] == "hello"


@pytest.mark.unit
def test_undeclared_keys_are_left_alone():
    message = {"page": "2", "headers": {"If-None-Match": "abc"}}

    validate_params(message, rules(page={"type": "number"}))

    assert message == {"page": 2, "headers": {"If-None-Match": "abc"}}
