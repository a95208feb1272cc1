import numpy as np
from enum import Enum
from typing import List, Optional, Union

from .cipher_math import cipher_math
from .errors import CipherError, ErrorKind

DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
DEFAULT_KEYWORD_LENGTH = 6


class KeyGenerator:
    """
    Random key provider for the service layer.

    The cipher engine never generates keys; callers inject one of these.
    Pass a seeded numpy Generator for reproducible keys.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def caesar(self) -> int:
        # Shift 0 would leave the text unchanged
        return int(self.rng.integers(1, 26))

    def mono(self) -> str:
        # Fisher-Yates shuffle of A-Z
        alphabet = list(cipher_math.UPPERCASE)
        for i in range(len(alphabet) - 1, 0, -1):
            j = int(self.rng.integers(0, i + 1))
            alphabet[i], alphabet[j] = alphabet[j], alphabet[i]
        return "".join(alphabet)

    def keyword(self, length: int = DEFAULT_KEYWORD_LENGTH) -> str:
        if length < 1:
            raise CipherError(ErrorKind.INVALID_PARAMETER, "Key length must be at least 1.")
        return "".join(cipher_math.UPPERCASE[i] for i in self.rng.integers(0, 26, size=length))

    def rails(self) -> int:
        return int(self.rng.integers(2, 7))

    def hill(self) -> List[int]:
        # Loop until the matrix is invertible mod 26
        while True:
            mat = self.rng.integers(0, 26, size=(2, 2))
            if cipher_math.is_invertible(mat):
                return [int(v) for v in mat.flatten()]

    def playfair(self) -> str:
        return "".join(self.rng.permutation(list(cipher_math.PLAYFAIR_ALPHABET)))

    def otp(self, length: int, include_numbers: bool = False, include_symbols: bool = False) -> str:
        if length < 1:
            raise CipherError(ErrorKind.INVALID_PARAMETER, "Key length must be at least 1.")
        characters = cipher_math.UPPERCASE
        if include_numbers:
            characters += DIGITS
        if include_symbols:
            characters += SYMBOLS
        return "".join(characters[i] for i in self.rng.integers(0, len(characters), size=length))

    def generate(
        self,
        algorithm: Union[str, Enum],
        length: Optional[int] = None,
        include_numbers: bool = False,
        include_symbols: bool = False,
    ) -> Union[int, List[int], str]:
        name = algorithm.value if isinstance(algorithm, Enum) else algorithm
        if name == "caesar":
            return self.caesar()
        if name == "mono":
            return self.mono()
        if name in ("poly", "rowcol"):
            return self.keyword(DEFAULT_KEYWORD_LENGTH if length is None else length)
        if name == "rail":
            return self.rails()
        if name == "hill":
            return self.hill()
        if name == "playfair":
            return self.playfair()
        if name == "otp":
            if length is None:
                raise CipherError(ErrorKind.INVALID_PARAMETER, "OTP keys need the text length.")
            return self.otp(length, include_numbers, include_symbols)
        raise CipherError(ErrorKind.INVALID_PARAMETER, f"No key generator for '{name}'.")
