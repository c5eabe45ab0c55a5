"""
SecID Type Registry — stable 16-bit type ids for named id namespaces.

A type id is the first two bytes (big-endian) of
SHA-1(type_salt || lowercase(type_name)). The salt is derived from the
factory secret, so the digest only needs to avoid accidental collisions.
Collisions are never merged: registration fails and the caller must pick
another name.
"""
import hashlib
import logging
import threading
from collections.abc import Iterator
from typing import Any, Callable

from .exceptions import TypeCollisionError
from .payload import ValueKind

logger = logging.getLogger("secure_id")


def compute_type_id(type_salt: str, type_name: str) -> int:
    """Return the 16-bit type id of ``type_name`` under ``type_salt``."""
    digest = hashlib.sha1()
    digest.update(type_salt.encode("utf-8"))
    digest.update(type_name.lower().encode("utf-8"))
    return int.from_bytes(digest.digest()[:2], "big")


class TypeRegistry:
    """Per-factory mapping of type ids to SecID namespaces.

    Inserts are serialized with a lock; lookups read a dict that is only
    ever extended.
    """

    def __init__(self, type_salt: str):
        self._type_salt = type_salt
        self._lock = threading.Lock()
        self._known_types: frozenset[int] = frozenset()
        self._secids: dict[int, Any] = {}

    def register(
        self,
        type_name: str,
        kind: ValueKind,
        build: Callable[[str, int, ValueKind], Any],
    ) -> Any:
        """Register a type name and return the namespace built for it.

        Args:
            type_name: Human readable type name (case-insensitive).
            kind: Value kind of the namespace.
            build: Callable creating the namespace from (name, type_id, kind).

        Raises:
            TypeCollisionError: If the computed type id is already registered.
        """
        type_id = compute_type_id(self._type_salt, type_name)
        with self._lock:
            if type_id in self._known_types:
                logger.error(
                    "SecID type collision: name=%s type_id=%d", type_name, type_id
                )
                raise TypeCollisionError(type_name, type_id)
            secid = build(type_name, type_id, kind)
            self._secids[type_id] = secid
            self._known_types = self._known_types | {type_id}
        logger.debug(
            "Registered SecID type: name=%s type_id=%d kind=%s",
            type_name, type_id, kind.value,
        )
        return secid

    def lookup(self, type_id: int) -> Any | None:
        """Return the namespace registered for ``type_id``, if any."""
        return self._secids.get(type_id)

    @property
    def type_ids(self) -> frozenset[int]:
        """Snapshot of the registered type ids."""
        return self._known_types

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._known_types

    def __len__(self) -> int:
        return len(self._known_types)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._secids.values()))
