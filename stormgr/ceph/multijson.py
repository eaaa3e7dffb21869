import json
from typing import Any, Dict, List

from stormgr.errors import MalformedStateError

_decoder = json.JSONDecoder()
_WHITESPACE = " \t\r\n"


def decode_json_objects(buffer) -> List[Any]:
    """
    Decode back-to-back JSON values with no separator, e.g. the output of
    'osd pool get <pool> all': {"size":1}{"min_size":1}...

    Raises:
        MalformedStateError: on truncated or non-JSON input
    """
    if isinstance(buffer, (bytes, bytearray)):
        try:
            buffer = buffer.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedStateError(f"response is not valid UTF-8: {e}") from e

    values: List[Any] = []
    pos = 0
    end = len(buffer)
    while True:
        while pos < end and buffer[pos] in _WHITESPACE:
            pos += 1
        if pos >= end:
            return values
        try:
            value, pos = _decoder.raw_decode(buffer, pos)
        except json.JSONDecodeError as e:
            raise MalformedStateError(f"malformed JSON object stream at offset {pos}: {e.msg}") from e
        values.append(value)


def merge_json_objects(buffer) -> Dict[str, Any]:
    """Decode an object stream and merge it into one dict (later keys win)."""
    merged: Dict[str, Any] = {}
    for value in decode_json_objects(buffer):
        if not isinstance(value, dict):
            raise MalformedStateError(f"expected JSON object in stream, got {type(value).__name__}")
        merged.update(value)
    return merged
