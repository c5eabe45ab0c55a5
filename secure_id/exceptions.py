"""SecID exceptions.

Three disjoint kinds are raised by the package:

- ``IDMalformedError``: the value handed to ``serialize`` cannot be encoded.
- ``InvalidIDError``: the text handed to ``parse``/``resolve`` is not a
  genuine id for the expected type. The message never says which check failed.
- ``TypeCollisionError``: a type name maps to an already registered type id.
"""


class SecIDError(Exception):
    """Base class for all SecID errors."""


class IDMalformedError(SecIDError, ValueError):
    """Raised when a value cannot be serialized into an id."""


class InvalidIDError(SecIDError, ValueError):
    """Raised when an id cannot be parsed or fails verification."""

    def __init__(self, value: str = ""):
        self.value = value
        super().__init__(f"Invalid id: {value}")


class TypeCollisionError(SecIDError):
    """Raised when registering a type whose type id is already taken."""

    def __init__(self, type_name: str, type_id: int):
        self.type_name = type_name
        self.type_id = type_id
        super().__init__(
            f'SecID type collision for "{type_name}", '
            "please try to use different name."
        )
