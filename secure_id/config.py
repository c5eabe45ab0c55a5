"""
SecID Configuration — Validated factory settings.

Reads settings from environment variables:
    SECID_SECRET = <shared secret>
    SECID_STYLE = hex | base64 | hashids (default: hashids)
    SECID_ITERATIONS = <PBKDF2 iterations> (default: 100000)

Security Note:
    Never log the secret. Only log the style and iteration count.
"""
import os
import secrets
import logging

from pydantic import BaseModel, Field, field_validator

from .crypto import DEFAULT_ITERATIONS
from .styles import DEFAULT_STYLE, STYLES

logger = logging.getLogger("secure_id")


def generate_secret() -> str:
    """Generate a random URL-safe secret suitable for SECID_SECRET.

    This is a utility for operators to generate new secrets.

    Returns:
        URL-safe token string (32 random bytes).
    """
    return secrets.token_urlsafe(32)


class SecIDConfig(BaseModel):
    """Validated SecID factory configuration."""

    secret: bytes
    style: str = Field(default=DEFAULT_STYLE)
    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=1)

    model_config = {"frozen": True}

    def __repr__(self) -> str:
        return (
            f"SecIDConfig(secret=<redacted>, style={self.style!r}, "
            f"iterations={self.iterations})"
        )

    __str__ = __repr__

    @field_validator("secret", mode="before")
    @classmethod
    def encode_secret(cls, v):
        """Accept str secrets, stored as UTF-8 bytes."""
        if isinstance(v, str):
            return v.encode("utf-8")
        return v

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: bytes) -> bytes:
        """Reject empty secrets."""
        if not v:
            raise ValueError("SecID secret cannot be empty")
        return v

    @field_validator("style")
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Validate style is supported."""
        if v not in STYLES:
            raise ValueError(f"Unsupported SecID style: {v}")
        return v

    @classmethod
    def from_env(cls) -> "SecIDConfig":
        """Create SecIDConfig by loading values from environment.

        Raises:
            RuntimeError: If SECID_SECRET is not set.

        Returns:
            Populated SecIDConfig instance.
        """
        secret = os.environ.get("SECID_SECRET")
        if not secret:
            raise RuntimeError(
                "SECID_SECRET environment variable is not set"
            )
        style = os.environ.get("SECID_STYLE", DEFAULT_STYLE)
        iterations = int(os.environ.get("SECID_ITERATIONS", DEFAULT_ITERATIONS))
        logger.debug("Loaded SecID config: style=%s iterations=%d", style, iterations)
        return cls(secret=secret, style=style, iterations=iterations)
