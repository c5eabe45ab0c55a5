"""
SecID — Opaque, tamper-evident identifiers bound to a shared secret.

Provides the public API:
- ``SecIDFactory(secret, style)`` — derives key material once
- ``factory.create_id(name)`` / ``factory.create_string_id(name)`` — namespaces
- ``secid.serialize(value)`` / ``secid.parse(text)`` — per-namespace codec
- ``factory.resolve(text)`` — decode an id of any registered namespace

Security Note:
    The secret is never stored; only derived key material is kept.
    Never log id values or serialized ids.
"""
import logging
from typing import Any, NamedTuple

from .config import SecIDConfig
from .crypto import (
    DEFAULT_ITERATIONS,
    KeyMaterial,
    decrypt,
    derive_key_material,
    encrypt,
)
from .exceptions import InvalidIDError
from .payload import ValueKind
from .registry import TypeRegistry, compute_type_id
from .styles import DEFAULT_STYLE, STYLES, get_style_codec

logger = logging.getLogger("secure_id")


class SecID:
    """Namespace handle for one id type.

    Instances are created only by ``SecIDFactory`` and share the factory
    key material and style codec by reference.
    """

    __slots__ = ("_type_name", "_type_id", "_kind", "_keys", "_codec")

    def __init__(
        self,
        type_name: str,
        type_id: int,
        kind: ValueKind,
        keys: KeyMaterial,
        codec: Any,
    ):
        self._type_name = type_name
        self._type_id = type_id
        self._kind = kind
        self._keys = keys
        self._codec = codec

    def __repr__(self) -> str:
        return (
            f"<SecID [{self._type_name}] type_id={self._type_id} "
            f"kind={self._kind.value}>"
        )

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def type_id(self) -> int:
        return self._type_id

    @property
    def value_kind(self) -> ValueKind:
        return self._kind

    @property
    def style(self) -> str:
        return self._codec.name

    def serialize(self, value: Any) -> str:
        """Encode ``value`` into an opaque id string.

        Args:
            value: Non-negative int for number namespaces, str for string ones.

        Returns:
            Rendered id.

        Raises:
            IDMalformedError: If the value does not fit this namespace.
        """
        envelope = encrypt(self._kind, value, self._type_id, self._keys)
        return self._codec.encode(envelope)

    def parse(self, value: str) -> int | str:
        """Decode an id string produced by this namespace.

        Raises:
            InvalidIDError: If the id is malformed, tampered with or
                belongs to another namespace.
        """
        envelope = self._codec.decode(value)
        return decrypt(value, envelope, self._type_id, self._keys)[0]


class ResolvedID(NamedTuple):
    """Result of ``SecIDFactory.resolve``."""

    id: int | str
    type: SecID


class SecIDFactory:
    """Source of SecID namespaces sharing one secret.

    Key material is derived once at construction with PBKDF2, which is
    slow; create a single factory per secret and reuse it.
    """

    def __init__(
        self,
        secret: bytes | str,
        style: str = DEFAULT_STYLE,
        iterations: int = DEFAULT_ITERATIONS,
    ):
        if style not in STYLES:
            raise ValueError(f"Unsupported SecID style: {style}")
        self._keys = derive_key_material(secret, iterations)
        self._codec = get_style_codec(style, self._keys.hashids_salt)
        self._registry = TypeRegistry(self._keys.type_salt)
        logger.debug("SecID factory created: style=%s", style)

    def __repr__(self) -> str:
        return f"<SecIDFactory [style:{self.style}] types={len(self._registry)}>"

    @classmethod
    def from_config(cls, config: SecIDConfig) -> "SecIDFactory":
        """Create a factory from a validated SecIDConfig."""
        return cls(
            config.secret, style=config.style, iterations=config.iterations
        )

    @classmethod
    def from_env(cls) -> "SecIDFactory":
        """Create a factory from SECID_* environment variables."""
        return cls.from_config(SecIDConfig.from_env())

    @property
    def style(self) -> str:
        return self._codec.name

    @property
    def types(self) -> list[SecID]:
        """Registered namespaces, in registration order."""
        return list(self._registry)

    def get_type(self, type_name: str) -> SecID | None:
        """Return the registered namespace for ``type_name`` (any case)."""
        return self._registry.lookup(
            compute_type_id(self._keys.type_salt, type_name)
        )

    # ------------------------------------------------------------------
    # Namespaces
    # ------------------------------------------------------------------

    def _build(self, type_name: str, type_id: int, kind: ValueKind) -> SecID:
        return SecID(type_name, type_id, kind, self._keys, self._codec)

    def create_id(self, type_name: str) -> SecID:
        """Register a namespace for non-negative integer ids.

        Raises:
            TypeCollisionError: If the type id is already registered.
        """
        return self._registry.register(type_name, ValueKind.NUMBER, self._build)

    def create_string_id(self, type_name: str) -> SecID:
        """Register a namespace for string ids.

        Raises:
            TypeCollisionError: If the type id is already registered.
        """
        return self._registry.register(type_name, ValueKind.STRING, self._build)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, value: str) -> ResolvedID:
        """Decode an id of any namespace registered on this factory.

        Returns:
            ResolvedID with the decoded value and its namespace.

        Raises:
            InvalidIDError: If the id is not a genuine id of a registered type.
        """
        envelope = self._codec.decode(value)
        decoded, type_id = decrypt(
            value, envelope, self._registry.type_ids, self._keys
        )
        secid = self._registry.lookup(type_id)
        if secid is None:
            raise InvalidIDError(value)
        return ResolvedID(decoded, secid)
