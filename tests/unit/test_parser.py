"""Unit tests for magicline.parser — interpretation of argument tokens."""
from __future__ import annotations

import json

import pytest

from magicline.parser import (
    ArgumentSplitError,
    MalformedJsonArgumentError,
    ParameterParser,
    decode_parameter,
    json_to_dict,
    parse_input_parameters,
)


# ---------------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------------


class TestEmptyInput:
    def test_empty_input_without_positional_name(self) -> None:
        assert parse_input_parameters("") == {}

    def test_empty_input_with_positional_name(self) -> None:
        assert parse_input_parameters("", "operation") == {}

    def test_whitespace_input(self) -> None:
        assert parse_input_parameters("   ") == {}

    def test_each_call_returns_a_fresh_map(self) -> None:
        parser = ParameterParser()
        first = parser.parse("a=1")
        second = parser.parse("a=1")
        assert first == second
        assert first is not second


# ---------------------------------------------------------------------------
# Positional parameter
# ---------------------------------------------------------------------------


class TestPositionalParameter:
    def test_first_bare_token_is_captured(self) -> None:
        assert parse_input_parameters("Foo", "operation") == {"operation": '"Foo"'}

    def test_remaining_pairs_are_parsed(self) -> None:
        params = parse_input_parameters("Foo shots=100 name=x", "operation")
        assert params == {"operation": '"Foo"', "shots": '"100"', "name": '"x"'}

    def test_remaining_bare_tokens_become_flags(self) -> None:
        assert parse_input_parameters("Foo bar", "operation") == {
            "operation": '"Foo"',
            "bar": "true",
        }

    def test_positional_keeps_raw_text_including_quotes(self) -> None:
        params = parse_input_parameters('"my op" a=1', "operation")
        assert params["operation"] == json.dumps('"my op"')
        assert params["a"] == '"1"'

    def test_pair_first_is_not_positional(self) -> None:
        assert parse_input_parameters("a=1 Foo", "operation") == {"a": '"1"', "Foo": "true"}

    def test_no_positional_without_a_name(self) -> None:
        assert parse_input_parameters("Foo") == {"Foo": "true"}

    def test_positional_name_is_listed_first(self) -> None:
        params = parse_input_parameters("Foo b=1 a=2", "operation")
        assert list(params) == ["operation", "b", "a"]

    def test_parser_exposes_positional_name(self) -> None:
        assert ParameterParser("operation").first_parameter_name == "operation"


# ---------------------------------------------------------------------------
# JSON object payloads
# ---------------------------------------------------------------------------


class TestJsonPayload:
    def test_json_object_entries_are_copied(self) -> None:
        params = parse_input_parameters('{"a": 1, "b": "x", "c": true}')
        assert params == {"a": "1", "b": '"x"', "c": "true"}

    def test_json_object_wins_over_positional_name(self) -> None:
        params = parse_input_parameters('{"a": 1}', "operation")
        assert params == {"a": "1"}

    def test_json_object_after_positional(self) -> None:
        params = parse_input_parameters('Foo {"shots": 10}', "operation")
        assert params == {"operation": '"Foo"', "shots": "10"}

    def test_tokens_after_json_object_are_ignored(self) -> None:
        assert parse_input_parameters('{"a": 1} b=2') == {"a": "1"}

    def test_json_object_later_in_input_is_not_special(self) -> None:
        params = parse_input_parameters('Foo {"a": 1}')
        assert params == {"Foo": "true", '{"a": 1}': "true"}

    def test_nested_values_stay_json(self) -> None:
        params = parse_input_parameters('{"list": [1, 2], "obj": {"k": null}}')
        assert json.loads(params["list"]) == [1, 2]
        assert json.loads(params["obj"]) == {"k": None}

    def test_greedy_span_over_two_objects_is_malformed(self) -> None:
        with pytest.raises(MalformedJsonArgumentError):
            parse_input_parameters('{"a": 1} b=2 {"c": 3}')

    def test_unclosed_brace_is_malformed(self) -> None:
        with pytest.raises(MalformedJsonArgumentError):
            parse_input_parameters("{abc", "operation")

    def test_multiline_json_object(self) -> None:
        assert parse_input_parameters('{\n  "shots": 5\n}') == {"shots": "5"}


# ---------------------------------------------------------------------------
# key=value pairs
# ---------------------------------------------------------------------------


class TestKeyValuePairs:
    def test_numbers_are_encoded_as_strings(self) -> None:
        assert parse_input_parameters("foo=1") == {"foo": '"1"'}

    def test_boolean_words_are_encoded_as_strings(self) -> None:
        assert parse_input_parameters("flag=true") == {"flag": '"true"'}

    def test_bare_word_is_true(self) -> None:
        assert parse_input_parameters("verbose") == {"verbose": "true"}

    def test_double_quoted_value(self) -> None:
        assert parse_input_parameters('name="hello world"') == {"name": '"hello world"'}

    def test_single_quoted_value(self) -> None:
        assert parse_input_parameters("name='x'") == {"name": '"x"'}

    def test_only_one_layer_of_quotes_is_removed(self) -> None:
        assert parse_input_parameters("name=''x''") == {"name": json.dumps("'x'")}

    def test_mixed_quotes_are_removed(self) -> None:
        assert parse_input_parameters("name='x\"") == {"name": '"x"'}

    def test_quote_at_one_end_is_removed(self) -> None:
        assert parse_input_parameters("a='x") == {"a": '"x"'}
        assert parse_input_parameters("a=x'") == {"a": '"x"'}

    def test_lone_quote_value_is_empty(self) -> None:
        assert parse_input_parameters("a='") == {"a": '""'}

    def test_whitespace_around_equals_is_trimmed(self) -> None:
        assert parse_input_parameters("key = value") == {"key": '"value"'}

    def test_split_on_first_equals_only(self) -> None:
        assert parse_input_parameters("a=b=c") == {"a": '"b=c"'}

    def test_empty_value(self) -> None:
        assert parse_input_parameters("a=") == {"a": '""'}

    def test_empty_key(self) -> None:
        assert parse_input_parameters("=foo") == {"": '"foo"'}

    def test_repeated_key_last_write_wins(self) -> None:
        params = parse_input_parameters("a=1 a=2")
        assert params == {"a": '"2"'}

    def test_non_ascii_is_not_escaped(self) -> None:
        assert parse_input_parameters("name=héllo") == {"name": '"héllo"'}

    def test_insertion_order_is_preserved(self) -> None:
        assert list(parse_input_parameters("z=1 a=2 m")) == ["z", "a", "m"]


# ---------------------------------------------------------------------------
# Round trip through the JSON layer
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", ["hello", "1", "3.14", "true", "with-dash", "a.b.c"])
def test_plain_values_decode_to_their_text(value: str) -> None:
    params = parse_input_parameters(f"k={value}")
    assert decode_parameter(params, "k") == value


def test_bare_flag_decodes_to_true() -> None:
    assert decode_parameter(parse_input_parameters("verbose"), "verbose") is True


# ---------------------------------------------------------------------------
# json_to_dict
# ---------------------------------------------------------------------------


class TestJsonToDict:
    def test_empty_string_is_empty_map(self) -> None:
        assert json_to_dict("") == {}

    def test_values_are_re_encoded_compactly(self) -> None:
        assert json_to_dict('{"a": [1, 2], "b": {"c": null}, "d": "x"}') == {
            "a": "[1,2]",
            "b": '{"c":null}',
            "d": '"x"',
        }

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(MalformedJsonArgumentError) as exc_info:
            json_to_dict("{not json}")
        assert exc_info.value.text == "{not json}"
        assert "Invalid JSON argument" in str(exc_info.value)

    def test_non_object_raises(self) -> None:
        with pytest.raises(MalformedJsonArgumentError, match="found array"):
            json_to_dict("[1, 2]")

    def test_whitespace_only_is_not_empty(self) -> None:
        with pytest.raises(MalformedJsonArgumentError):
            json_to_dict("   ")

    def test_malformed_json_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            json_to_dict("{")


# ---------------------------------------------------------------------------
# decode_parameter
# ---------------------------------------------------------------------------


class TestDecodeParameter:
    def test_missing_key_returns_default(self) -> None:
        assert decode_parameter({}, "shots", 100) == 100

    def test_missing_key_default_is_none(self) -> None:
        assert decode_parameter({}, "shots") is None

    def test_decodes_json_value(self) -> None:
        assert decode_parameter({"shots": "100"}, "shots") == 100

    def test_malformed_value_raises(self) -> None:
        with pytest.raises(MalformedJsonArgumentError):
            decode_parameter({"shots": "not json"}, "shots")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_argument_split_error_attributes(self) -> None:
        error = ArgumentSplitError("a=b=c", 3)
        assert error.argument == "a=b=c"
        assert error.parts == 3
        assert isinstance(error, RuntimeError)

    def test_long_json_text_is_truncated_in_message(self) -> None:
        text = "{" + "x" * 100
        error = MalformedJsonArgumentError(text, "bad")
        assert "..." in str(error)
        assert error.text == text
        assert error.reason == "bad"
