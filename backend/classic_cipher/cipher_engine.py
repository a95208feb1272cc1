"""
Stateless dispatch from (algorithm, mode, text, key) to a cipher.

Every call builds a fresh cipher from the key, so concurrent calls share
nothing. Key and input validation always complete before any output is
produced.
"""
import logging
from enum import Enum
from typing import Any, List, Union

from .base import CIPHER_REGISTRY, CipherStrategy
from .errors import CipherError, ErrorKind
from .schemas import AlgorithmInfo, CipherRequest, CipherResult, Mode

# Cipher modules register themselves on import
from . import substitution, transposition, polygraphic  # noqa: F401

logger = logging.getLogger(__name__)


def _name(value: Union[str, Enum]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def available_algorithms() -> List[AlgorithmInfo]:
    return [
        AlgorithmInfo(name=name, description=cls.description, key=cls.key_description)
        for name, cls in CIPHER_REGISTRY.items()
    ]


def build_cipher(algorithm: Union[str, Enum], key: Any) -> CipherStrategy:
    name = _name(algorithm)
    cipher_cls = CIPHER_REGISTRY.get(name)
    if cipher_cls is None:
        raise CipherError(ErrorKind.INVALID_PARAMETER, f"Algorithm '{name}' not implemented.")
    return cipher_cls.from_key(key)


def transform(algorithm: Union[str, Enum], mode: Union[str, Enum], text: str, key: Any) -> str:
    mode_name = _name(mode)
    if mode_name not in (Mode.ENCODE.value, Mode.DECODE.value):
        raise CipherError(ErrorKind.INVALID_PARAMETER, f"Mode must be 'encode' or 'decode', got '{mode_name}'.")
    cipher = build_cipher(algorithm, key)
    if mode_name == Mode.ENCODE.value:
        return cipher.encode(text)
    return cipher.decode(text)


def encode(algorithm: Union[str, Enum], text: str, key: Any) -> str:
    return transform(algorithm, Mode.ENCODE, text, key)


def decode(algorithm: Union[str, Enum], text: str, key: Any) -> str:
    return transform(algorithm, Mode.DECODE, text, key)


def run(request: CipherRequest) -> CipherResult:
    """Result-returning entry point: cipher failures come back as data."""
    try:
        output = transform(request.algorithm, request.mode, request.text, request.key)
    except CipherError as e:
        logger.warning(
            f"{_name(request.algorithm)} {_name(request.mode)} rejected: {e.kind.value}: {e.message}"
        )
        return CipherResult.failure(e)
    return CipherResult.success(output)
