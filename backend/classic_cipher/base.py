from abc import ABC, abstractmethod
from typing import Any, Dict, Type

from .errors import CipherError, ErrorKind


class CipherStrategy(ABC):
    """Abstract base class that all ciphers must implement.

    A cipher instance is built from an already-validated key and is never
    mutated afterwards, so one instance can serve any number of calls.
    """

    # Command/API name, e.g. "caesar"
    name: str = ""
    description: str = ""
    key_description: str = ""

    @classmethod
    @abstractmethod
    def from_key(cls, raw_key: Any) -> "CipherStrategy":
        """Coerce and validate a caller-supplied key, raising CipherError."""

    @abstractmethod
    def encode(self, text: str) -> str:
        pass

    @abstractmethod
    def decode(self, text: str) -> str:
        pass


CIPHER_REGISTRY: Dict[str, Type[CipherStrategy]] = {}


def register_cipher(cls):
    """Decorator to auto-register ciphers."""
    CIPHER_REGISTRY[cls.name] = cls
    return cls


def coerce_int(raw_key: Any, label: str) -> int:
    """Accept ints and integer strings (form fields arrive as text)."""
    if isinstance(raw_key, bool):
        raise CipherError(ErrorKind.INVALID_PARAMETER, f"{label} must be an integer.")
    if isinstance(raw_key, int):
        return raw_key
    if isinstance(raw_key, str):
        try:
            return int(raw_key.strip())
        except ValueError:
            pass
    raise CipherError(ErrorKind.INVALID_PARAMETER, f"{label} must be an integer.")


def coerce_str(raw_key: Any, label: str) -> str:
    if not isinstance(raw_key, str):
        raise CipherError(ErrorKind.INVALID_KEY_FORMAT, f"{label} must be a string.")
    return raw_key
