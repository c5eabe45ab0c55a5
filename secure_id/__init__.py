"""SecID — short, opaque and tamper-evident identifiers.

Security Note (Threat Model):
    Ids are encrypted and authenticated with keys derived from a shared
    secret. Anyone holding the secret can read and forge ids; secret
    distribution and rotation are out of scope.
"""

from .version import __version__
from .secid import SecID, SecIDFactory, ResolvedID
from .payload import ValueKind
from .styles import STYLES
from .config import SecIDConfig, generate_secret
from .exceptions import (
    SecIDError,
    IDMalformedError,
    InvalidIDError,
    TypeCollisionError,
)

__all__ = [
    "__version__",
    "SecID",
    "SecIDFactory",
    "ResolvedID",
    "ValueKind",
    "STYLES",
    "SecIDConfig",
    "generate_secret",
    "SecIDError",
    "IDMalformedError",
    "InvalidIDError",
    "TypeCollisionError",
]
