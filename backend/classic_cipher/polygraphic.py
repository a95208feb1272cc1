import re
from typing import Any, Dict, List, Sequence, Tuple

from .base import CipherStrategy, register_cipher, coerce_str
from .cipher_math import cipher_math
from .errors import CipherError, ErrorKind


@register_cipher
class Hill(CipherStrategy):
    """
    Hill cipher with a 2x2 key matrix [[a, b], [c, d]] over Z_26.

    Each pair of letters (p0, p1) is treated as a row vector and multiplied
    by the key matrix. Decoding multiplies by the modular inverse
        K^-1 = det^-1 * [[d, -b], [-c, a]]  (mod 26)
    which only exists when gcd(det, 26) == 1.
    """

    name = "hill"
    description = "Hill cipher using a 2x2 matrix modulo 26."
    key_description = "Four integers a,b,c,d with gcd(ad - bc, 26) == 1."

    PAD = "X"

    def __init__(self, values: Sequence[int]):
        if len(values) != 4:
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Matrix must contain exactly 4 numbers.")
        self.matrix = cipher_math.to_matrix([v % 26 for v in values])
        self.det = cipher_math.determinant(self.matrix)
        self.inverse = cipher_math.inverse_matrix(self.matrix)
        if self.inverse is None:
            raise CipherError(
                ErrorKind.NON_INVERTIBLE_MATRIX,
                f"Matrix is not invertible modulo 26 (determinant {self.det}).",
            )

    @classmethod
    def from_key(cls, raw_key: Any) -> "Hill":
        return cls(cls.parse_matrix(raw_key))

    @staticmethod
    def parse_matrix(raw_key: Any) -> List[int]:
        """Accept [a, b, c, d] or a string like "3,3,2,5" / "3 3 2 5"."""
        if isinstance(raw_key, str):
            parts = [p for p in re.split(r"[,\s]+", raw_key.strip()) if p]
        elif isinstance(raw_key, (list, tuple)):
            parts = list(raw_key)
        else:
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Matrix must contain exactly 4 numbers.")

        values = []
        for part in parts:
            if isinstance(part, bool):
                raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Matrix entries must be integers.")
            try:
                values.append(int(part))
            except (TypeError, ValueError):
                raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Matrix entries must be integers.")
        if len(values) != 4:
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Matrix must contain exactly 4 numbers.")
        return values

    def _prepare(self, text: str) -> List[int]:
        text = "".join(text.split()).upper()
        indices = [ord(c) - ord('A') for c in text if c in cipher_math.UPPERCASE]
        if not indices:
            raise CipherError(ErrorKind.EMPTY_INPUT, "Text must contain at least one letter.")
        if len(indices) % 2 != 0:
            indices.append(ord(self.PAD) - ord('A'))
        return indices

    def encode(self, text: str) -> str:
        out = cipher_math.multiply_pairs(self._prepare(text), self.matrix)
        return "".join(cipher_math.index_to_letter(v) for v in out)

    def decode(self, text: str) -> str:
        out = cipher_math.multiply_pairs(self._prepare(text), self.inverse)
        return "".join(cipher_math.index_to_letter(v) for v in out)


@register_cipher
class Playfair(CipherStrategy):
    """
    Playfair digraph cipher on a 5x5 key square (I and J share a cell).

    Rules per digraph:
      1. Same row: take the letter to the right (left when decoding)
      2. Same column: take the letter below (above when decoding)
      3. Rectangle: each letter keeps its row and takes the other's column

    Repeated letters inside a digraph are split with 'X' ("BALLOON" -> BA LX LO ON).
    """

    name = "playfair"
    description = "Playfair digraph substitution on a 5x5 key square."
    key_description = "Up to 25 unique letters (J counts as I)."

    PAD = "X"

    def __init__(self, key: str):
        normalized = self._normalize(key)
        if len(set(normalized)) != len(normalized) or len(normalized) > 25:
            raise CipherError(
                ErrorKind.INVALID_KEY_FORMAT,
                "Invalid key: must have up to 25 unique alphabetic characters (J treated as I).",
            )
        self.square = self.build_square(normalized)
        self._positions: Dict[str, Tuple[int, int]] = {
            ch: (r, c) for r, row in enumerate(self.square) for c, ch in enumerate(row)
        }

    @classmethod
    def from_key(cls, raw_key: Any) -> "Playfair":
        return cls(coerce_str(raw_key, "Key"))

    @staticmethod
    def _normalize(text: str) -> str:
        text = text.upper().replace("J", "I")
        return "".join(c for c in text if c in cipher_math.UPPERCASE)

    @staticmethod
    def build_square(key: str) -> List[List[str]]:
        cells = []
        for ch in key + cipher_math.PLAYFAIR_ALPHABET:
            if ch not in cells:
                cells.append(ch)
        return [cells[i * 5:(i + 1) * 5] for i in range(5)]

    def _digraphs(self, text: str) -> List[str]:
        text = self._normalize(text)
        if not text:
            raise CipherError(ErrorKind.EMPTY_INPUT, "Text must contain at least one letter.")
        pairs = []
        i = 0
        while i < len(text):
            first = text[i]
            second = text[i + 1] if i + 1 < len(text) else None
            if second is None or second == first:
                pairs.append(first + self.PAD)
                i += 1
            else:
                pairs.append(first + second)
                i += 2
        return pairs

    def _cipher_pairs(self, text: str) -> List[str]:
        # Ciphertext is already in digraphs; only pad a stray last letter
        text = self._normalize(text)
        if not text:
            raise CipherError(ErrorKind.EMPTY_INPUT, "Text must contain at least one letter.")
        if len(text) % 2 != 0:
            text += self.PAD
        return [text[i:i + 2] for i in range(0, len(text), 2)]

    def _substitute(self, pair: str, step: int) -> str:
        r1, c1 = self._positions[pair[0]]
        r2, c2 = self._positions[pair[1]]
        if r1 == r2:
            return self.square[r1][(c1 + step) % 5] + self.square[r2][(c2 + step) % 5]
        if c1 == c2:
            return self.square[(r1 + step) % 5][c1] + self.square[(r2 + step) % 5][c2]
        return self.square[r1][c2] + self.square[r2][c1]

    def encode(self, text: str) -> str:
        return "".join(self._substitute(p, 1) for p in self._digraphs(text))

    def decode(self, text: str) -> str:
        return "".join(self._substitute(p, -1) for p in self._cipher_pairs(text))
