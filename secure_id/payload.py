"""
SecID Payload — binary framing of typed id values.

Format (all integers big-endian):

- number: [version=1][type_id 2B][value 4B]
- string: [version=2][type_id 2B][length 2B][utf-8 bytes]

Decoding never raises: an unknown version, a truncated buffer or bad UTF-8
surface as ``None`` and are folded into the envelope integrity check.
"""
import math
import struct
from enum import Enum
from typing import Any, Callable

from .exceptions import IDMalformedError

NUMBER_VERSION = 1
STRING_VERSION = 2
VERSIONS = frozenset({NUMBER_VERSION, STRING_VERSION})

MAX_NUMBER = 2147483647
MAX_STRING_LENGTH = 65535

_HEADER = struct.Struct("!BH")
_NUMBER = struct.Struct("!BHI")
_STRING_HEADER = struct.Struct("!BHH")


class ValueKind(str, Enum):
    """Kind of value carried by a SecID namespace."""

    NUMBER = "number"
    STRING = "string"


def encode_number(value: Any, type_id: int) -> bytes:
    """Frame a non-negative integer id.

    Raises:
        IDMalformedError: If value is not a number, is negative,
            is not integral or exceeds ``MAX_NUMBER``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise IDMalformedError(
            f"Id value and valueType mismatch, got: {value!r}, "
            f"{type(value).__name__}"
        )
    if value < 0:
        raise IDMalformedError("Ids can't be negative!")
    if isinstance(value, float):
        if not (math.isfinite(value) and value.is_integer()):
            raise IDMalformedError("Ids can't be float numbers!")
        value = int(value)
    if value > MAX_NUMBER:
        raise IDMalformedError(
            f"Ids can't be bigger than {MAX_NUMBER}. Got: {value}"
        )
    return _NUMBER.pack(NUMBER_VERSION, type_id, value)


def encode_string(value: Any, type_id: int) -> bytes:
    """Frame a string id.

    Raises:
        IDMalformedError: If value is not a str or its UTF-8 form
            exceeds ``MAX_STRING_LENGTH`` bytes.
    """
    if not isinstance(value, str):
        raise IDMalformedError(
            f"Id value and valueType mismatch, got: {value!r}, "
            f"{type(value).__name__}"
        )
    data = value.encode("utf-8")
    if len(data) > MAX_STRING_LENGTH:
        raise IDMalformedError(
            f"Ids string value length can't be bigger than "
            f"{MAX_STRING_LENGTH}. Got: {len(data)}"
        )
    return _STRING_HEADER.pack(STRING_VERSION, type_id, len(data)) + data


_ENCODERS: dict[ValueKind, Callable[[Any, int], bytes]] = {
    ValueKind.NUMBER: encode_number,
    ValueKind.STRING: encode_string,
}


def encode_payload(kind: ValueKind, value: Any, type_id: int) -> bytes:
    """Frame ``value`` according to the namespace value kind."""
    return _ENCODERS[kind](value, type_id)


def _decode_number(data: bytes) -> int | None:
    if len(data) < _NUMBER.size:
        return None
    return _NUMBER.unpack_from(data)[2]


def _decode_string(data: bytes) -> str | None:
    if len(data) < _STRING_HEADER.size:
        return None
    length = _STRING_HEADER.unpack_from(data)[2]
    body = data[_STRING_HEADER.size:_STRING_HEADER.size + length]
    if len(body) != length:
        return None
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return None


def decode_payload(data: bytes) -> tuple[int, int, int | str | None]:
    """Unframe a decrypted payload.

    Args:
        data: Decrypted payload bytes (at least 3 bytes for a header).

    Returns:
        Tuple of (version, type_id, value). ``value`` is None when the
        version is unknown or the body cannot be read.
    """
    if len(data) < _HEADER.size:
        return 0, 0, None
    version, type_id = _HEADER.unpack_from(data)
    value: int | str | None = None
    if version == NUMBER_VERSION:
        value = _decode_number(data)
    elif version == STRING_VERSION:
        value = _decode_string(data)
    return version, type_id, value
