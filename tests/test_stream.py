"""Tests for stream.py: decoding the append_message streaming body."""

import json

import pytest

from claudeai_cli.exceptions import MalformedChunkError
from claudeai_cli.stream import decode_completion_stream, iter_completion_chunks


def _line(fragment, **extra):
    return "data: " + json.dumps({"completion": fragment, **extra})


class TestDecodeCompletionStream:
    def test_joins_fragments_in_order(self):
        body = 'data: {"completion":"Hel"}\n\ndata: {"completion":"lo!"}\n'
        assert decode_completion_stream(body) == "Hello!"

    def test_outer_trim_only(self):
        assert decode_completion_stream('data: {"completion":" padded "}') == "padded"

    def test_internal_whitespace_preserved(self):
        body = "\n".join([_line("  one "), _line(" two  ")])
        assert decode_completion_stream(body) == "one  two"

    def test_no_separator_between_fragments(self):
        body = "\n".join(_line(f) for f in ["a", "b", "c"])
        assert decode_completion_stream(body) == "abc"

    def test_crlf_and_runs_of_line_breaks(self):
        body = _line("x") + "\r\n\r\n\r\n" + _line("y") + "\r" + _line("z") + "\r\n"
        assert decode_completion_stream(body) == "xyz"

    def test_extra_fields_ignored(self):
        body = "\n".join(
            [
                _line("Hi", stop_reason=None, model="claude-2.1"),
                _line(" there", stop_reason="stop_sequence", log_id="abc"),
            ]
        )
        assert decode_completion_stream(body) == "Hi there"

    def test_empty_fragments_contribute_nothing(self):
        body = "\n".join([_line("a"), _line(""), _line("b")])
        assert decode_completion_stream(body) == "ab"

    def test_empty_input(self):
        assert decode_completion_stream("") == ""

    def test_blank_lines_only(self):
        assert decode_completion_stream("\n\n   \r\n\t\n") == ""

    def test_trailing_empty_line_adds_no_fragment(self):
        chunks = list(iter_completion_chunks(_line("x") + "\n"))
        assert len(chunks) == 1

    def test_rewrapped_output_decodes_to_itself(self):
        body = "\n".join([_line("  Hello"), _line(", world  ")])
        decoded = decode_completion_stream(body)
        assert decode_completion_stream(_line(decoded)) == decoded

    def test_unicode_fragments(self):
        body = "\n".join([_line("Grüße "), _line("👋")])
        assert decode_completion_stream(body) == "Grüße 👋"


class TestMalformedChunks:
    def test_missing_prefix(self):
        with pytest.raises(MalformedChunkError) as exc_info:
            decode_completion_stream('{"completion": "x"}')
        assert "does not start with" in str(exc_info.value)

    def test_prefix_without_space(self):
        with pytest.raises(MalformedChunkError):
            decode_completion_stream('data:{"completion": "x"}')

    def test_invalid_json(self):
        with pytest.raises(MalformedChunkError) as exc_info:
            decode_completion_stream("data: {not json")
        assert "Invalid JSON" in str(exc_info.value)

    def test_missing_completion_field(self):
        with pytest.raises(MalformedChunkError) as exc_info:
            decode_completion_stream('data: {"stop_reason": "stop"}')
        assert "completion" in str(exc_info.value)

    def test_non_string_completion(self):
        with pytest.raises(MalformedChunkError):
            decode_completion_stream('data: {"completion": 42}')

    def test_non_object_json(self):
        with pytest.raises(MalformedChunkError):
            decode_completion_stream('data: ["completion"]')

    def test_bad_line_after_good_ones_fails_whole_decode(self):
        body = "\n".join([_line("good"), "event: ping"])
        with pytest.raises(MalformedChunkError):
            decode_completion_stream(body)

    def test_is_cli_error(self):
        from claudeai_cli.exceptions import CliError

        with pytest.raises(CliError):
            decode_completion_stream("garbage")
