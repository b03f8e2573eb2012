"""
Decoder for the streaming body returned by the append_message endpoint.

The body is a sequence of ``data: {...}`` lines. Each JSON object carries a
``completion`` fragment; the full reply is the fragments joined in arrival
order. Decoding runs over the fully buffered body, never incrementally.
"""

import json
import re

from claudeai_cli.exceptions import MalformedChunkError

CHUNK_PREFIX = "data: "

_LINE_BREAKS = re.compile(r"[\r\n]+")


def _preview(line, max_len=80):
    return line if len(line) <= max_len else line[:max_len] + "..."


def _parse_chunk(line):
    """Parse one ``data: {...}`` line into its JSON object."""
    if not line.startswith(CHUNK_PREFIX):
        raise MalformedChunkError(
            f"[ERROR] Stream line does not start with '{CHUNK_PREFIX.strip()}': "
            f"{_preview(line)!r}"
        )
    try:
        chunk = json.loads(line[len(CHUNK_PREFIX) :])
    except json.JSONDecodeError as e:
        raise MalformedChunkError(
            f"[ERROR] Invalid JSON in stream chunk: {e.msg} at position {e.pos}"
        ) from None
    if not isinstance(chunk, dict):
        raise MalformedChunkError(
            f"[ERROR] Stream chunk must be a JSON object, got {type(chunk).__name__}."
        )
    if not isinstance(chunk.get("completion"), str):
        raise MalformedChunkError(
            f"[ERROR] Stream chunk has no 'completion' string (keys: {sorted(chunk)})."
        )
    return chunk


def iter_completion_chunks(body):
    """Yield parsed chunk objects in line order, skipping blank lines."""
    for line in _LINE_BREAKS.split(body):
        if not line.strip():
            continue
        yield _parse_chunk(line)


def join_completion_chunks(chunks):
    """Concatenate the completion fragments of parsed chunks and trim the result."""
    return "".join(chunk["completion"] for chunk in chunks).strip()


def decode_completion_stream(body):
    """Return the whole generated message carried by a streaming body.

    Fragments are concatenated without a separator and the result is
    stripped of outer whitespace. Blank input gives ``""``. Any malformed
    line raises MalformedChunkError and no partial text is returned.
    """
    return join_completion_chunks(list(iter_completion_chunks(body)))
