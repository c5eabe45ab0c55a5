"""
SecID Crypto Core — Key derivation and envelope encryption/verification.

Every factory derives its key material once from the shared secret:
PBKDF2-HMAC-SHA512(secret, <fixed public salt>) for each of the five keys.

Envelope format: AES-128-CTR(payload) || HMAC-SHA256(ciphertext)[:8]

Security Note:
    Never log the secret, derived keys, plaintext or ciphertext values.
    Key and IV are fixed per factory, so ``serialize`` is deterministic.
"""
import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.constant_time import bytes_eq
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .exceptions import InvalidIDError
from .payload import VERSIONS, ValueKind, decode_payload, encode_payload

logger = logging.getLogger("secure_id")

# Fixed public salts, one per derived key.
TYPE_KEY_SALT = "2773246209f10fc3381f5ca55c67dac5486e27ff1ce3f698b1859008fe0053e3"
ENCRYPTION_KEY_SALT = "a638abdfb70e39476858543b3216b23ca5d1ac773eaf797a130639a76081c3aa"
ENCRYPTION_IV_SALT = "4c66c9e004fb48caaa38aa72dc749f946d0ccfe4edf8f993776388b6349a2895"
HMAC_KEY_SALT = "c15c63b812d78d8e368f2d702e43dd885f3bcf0e446203951b12cf3ab9715716"
HASHIDS_SALT = "11705939e5cad46fa04a6fc838a3fa25c0f50439c946101199b8506ff73a2ebe"

DEFAULT_ITERATIONS = 100000
HMAC_LENGTH = 8  # truncated tag size
MIN_ID_LENGTH = 13  # shortest plausible ciphertext + tag


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, repr=False)
class KeyMaterial:
    """Key material derived from a factory secret.

    Shared by reference between the factory and every SecID it creates.
    """

    type_salt: str
    encryption_key: bytes
    encryption_iv: bytes
    hmac_key: bytes
    hashids_salt: str

    def __repr__(self) -> str:
        return "<KeyMaterial [redacted]>"


def derive_key(
    secret: bytes, salt: str, length: int, iterations: int = DEFAULT_ITERATIONS
) -> bytes:
    """Derive ``length`` bytes from the secret using PBKDF2-HMAC-SHA512.

    Args:
        secret: Shared secret bytes.
        salt: Public salt string (used as UTF-8 bytes).
        length: Number of bytes to derive.
        iterations: PBKDF2 iteration count.

    Returns:
        Derived key bytes.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=length,
        salt=salt.encode("utf-8"),
        iterations=iterations,
    )
    return kdf.derive(secret)


def derive_key_material(
    secret: bytes | str, iterations: int = DEFAULT_ITERATIONS
) -> KeyMaterial:
    """Derive all factory key material from the shared secret.

    Args:
        secret: Shared secret; ``str`` values are UTF-8 encoded.
        iterations: PBKDF2 iteration count.

    Returns:
        Immutable KeyMaterial.
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    material = KeyMaterial(
        type_salt=derive_key(secret, TYPE_KEY_SALT, 32, iterations).hex(),
        encryption_key=derive_key(secret, ENCRYPTION_KEY_SALT, 16, iterations),
        encryption_iv=derive_key(secret, ENCRYPTION_IV_SALT, 16, iterations),
        hmac_key=derive_key(secret, HMAC_KEY_SALT, 64, iterations),
        hashids_salt=derive_key(secret, HASHIDS_SALT, 32, iterations).hex(),
    )
    logger.debug("Derived SecID key material (iterations=%d)", iterations)
    return material


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

def _cipher(keys: KeyMaterial) -> Cipher:
    return Cipher(
        algorithms.AES(keys.encryption_key), modes.CTR(keys.encryption_iv)
    )


def compute_tag(ciphertext: bytes, keys: KeyMaterial) -> bytes:
    """Return the truncated HMAC-SHA256 tag of ``ciphertext``."""
    mac = hmac.HMAC(keys.hmac_key, hashes.SHA256())
    mac.update(ciphertext)
    return mac.finalize()[:HMAC_LENGTH]


def encrypt(
    kind: ValueKind, value: Any, type_id: int, keys: KeyMaterial
) -> bytes:
    """Frame, encrypt and tag an id value.

    Format: [ciphertext][tag 8B]

    Raises:
        IDMalformedError: If the value does not fit the value kind.
    """
    payload = encode_payload(kind, value, type_id)
    encryptor = _cipher(keys).encryptor()
    ciphertext = encryptor.update(payload) + encryptor.finalize()
    return ciphertext + compute_tag(ciphertext, keys)


def decrypt(
    text: str,
    envelope: bytes,
    expected: int | Collection[int],
    keys: KeyMaterial,
) -> tuple[int | str, int]:
    """Decrypt and verify an envelope.

    All checks are computed before the single final branch, so a forged
    id fails the same way whichever check rejected it.

    Args:
        text: Original rendered id, used only in the error message.
        envelope: Style-decoded envelope bytes.
        expected: Required type id, or the collection of accepted type ids.
        keys: Factory key material.

    Returns:
        Tuple of (value, type_id).

    Raises:
        InvalidIDError: If the envelope is not a genuine id of an expected type.
    """
    if len(envelope) < MIN_ID_LENGTH:
        raise InvalidIDError(text)
    data_len = len(envelope) - HMAC_LENGTH
    ciphertext = envelope[:data_len]
    claimed = envelope[data_len:]

    decryptor = _cipher(keys).decryptor()
    decoded = decryptor.update(ciphertext) + decryptor.finalize()

    actual = compute_tag(ciphertext, keys)
    width = max(len(actual), len(claimed))
    tag_ok = bytes_eq(actual.ljust(width, b"\0"), claimed.ljust(width, b"\0"))

    version, type_id, value = decode_payload(decoded)
    version_ok = version in VERSIONS
    if isinstance(expected, int):
        type_ok = type_id == expected
    else:
        type_ok = type_id in expected
    value_ok = value is not None

    if version_ok & type_ok & tag_ok & value_ok:
        return value, type_id
    raise InvalidIDError(text)
