"""
SecID Styles — external text renderings of the binary envelope.

Three renderings are supported, selected once per factory:

- ``hex``: lowercase hexadecimal, two characters per byte.
- ``base64``: URL-safe base64 without ``=`` padding.
- ``hashids``: opaque alphanumeric string produced by a salted hashids codec.

Every ``decode`` failure is reported as ``InvalidIDError`` so callers never
learn why a rendering was rejected.
"""
import base64
import binascii
import logging

from hashids import Hashids

from .exceptions import InvalidIDError

logger = logging.getLogger("secure_id")

STYLES = ("hex", "base64", "hashids")
DEFAULT_STYLE = "hashids"


class HexStyle:
    """Lowercase hex rendering."""

    name = "hex"

    def encode(self, data: bytes) -> str:
        return data.hex()

    def decode(self, value: str) -> bytes:
        try:
            return bytes.fromhex(value)
        except (TypeError, ValueError) as err:
            raise InvalidIDError(value) from err


class Base64Style:
    """URL-safe base64 rendering with the padding stripped."""

    name = "base64"

    def encode(self, data: bytes) -> str:
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")

    def decode(self, value: str) -> bytes:
        try:
            padded = value + "=" * (-len(value) % 4)
            return base64.urlsafe_b64decode(padded.encode("ascii"))
        except (TypeError, ValueError, binascii.Error) as err:
            raise InvalidIDError(value) from err


class HashidsStyle:
    """Opaque alphanumeric rendering backed by ``hashids``.

    The salt comes from the factory key material, so two factories with
    different secrets render the same envelope differently.
    """

    name = "hashids"

    def __init__(self, salt: str):
        self._hashids = Hashids(salt=salt)

    def encode(self, data: bytes) -> str:
        return self._hashids.encode_hex(data.hex())

    def decode(self, value: str) -> bytes:
        try:
            return bytes.fromhex(self._hashids.decode_hex(value))
        except (TypeError, ValueError) as err:
            raise InvalidIDError(value) from err


def get_style_codec(style: str, hashids_salt: str):
    """Return the codec instance for a style name.

    Args:
        style: One of ``STYLES``.
        hashids_salt: Salt for the hashids codec (ignored by other styles).

    Raises:
        ValueError: If the style is not supported.
    """
    if style == "hex":
        return HexStyle()
    if style == "base64":
        return Base64Style()
    if style == "hashids":
        return HashidsStyle(hashids_salt)
    raise ValueError(f"Unsupported SecID style: {style}")
