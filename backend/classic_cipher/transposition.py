import math
from collections import Counter
from typing import Any, List

from .base import CipherStrategy, register_cipher, coerce_int, coerce_str
from .errors import CipherError, ErrorKind


@register_cipher
class RailFence(CipherStrategy):
    """
    Zig-zag transposition.

    Characters are written diagonally down and up across `rails` rows, then
    the rows are read top to bottom. Surrounding whitespace is trimmed first.
    """

    name = "rail"
    description = "Rail fence zig-zag transposition."
    key_description = "Number of rails, at least 2."

    def __init__(self, rails: int):
        if rails < 2:
            raise CipherError(ErrorKind.INVALID_PARAMETER, "Number of rails must be at least 2.")
        self.rails = rails

    @classmethod
    def from_key(cls, raw_key: Any) -> "RailFence":
        return cls(coerce_int(raw_key, "Number of rails"))

    def _active_rails(self, length: int) -> int:
        # Rails past the text length never receive a character
        return max(2, min(self.rails, length))

    def _zigzag(self, length: int) -> List[int]:
        """Rail index for each position of a text of the given length."""
        rails = self._active_rails(length)
        pattern = []
        rail, direction = 0, 1
        for _ in range(length):
            pattern.append(rail)
            rail += direction
            if rail == 0 or rail == rails - 1:
                direction = -direction
        return pattern

    def _prepare(self, text: str) -> str:
        text = text.strip()
        if not text:
            raise CipherError(ErrorKind.EMPTY_INPUT, "Text input cannot be empty or just whitespace.")
        return text

    def encode(self, text: str) -> str:
        text = self._prepare(text)
        fence = [[] for _ in range(self._active_rails(len(text)))]
        for char, rail in zip(text, self._zigzag(len(text))):
            fence[rail].append(char)
        return "".join("".join(row) for row in fence)

    def decode(self, text: str) -> str:
        text = self._prepare(text)
        pattern = self._zigzag(len(text))

        rails = self._active_rails(len(text))
        counts = Counter(pattern)

        # Slice the ciphertext into rails using how many cells each rail owns
        fence = []
        pos = 0
        for rail in range(rails):
            fence.append(text[pos:pos + counts[rail]])
            pos += counts[rail]

        cursors = [0] * rails
        result = []
        for rail in pattern:
            result.append(fence[rail][cursors[rail]])
            cursors[rail] += 1
        return "".join(result)


@register_cipher
class RowColumn(CipherStrategy):
    """
    Columnar transposition.

    The text is written row by row under the key and read out column by
    column in the stable-sorted order of the key characters. Encoding pads
    with 'X' to fill the last row; decoding keeps the padding.
    """

    name = "rowcol"
    description = "Row-column (columnar) transposition ordered by the key."
    key_description = "Non-empty keyword of letters or digits."

    PAD = "X"

    def __init__(self, key: str):
        if not key or not all(c.isascii() and c.isalnum() for c in key):
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Key must be a non-empty string of letters or digits.")
        self.key = key.upper()
        self.cols = len(self.key)
        self.order = self.column_order(self.key)

    @classmethod
    def from_key(cls, raw_key: Any) -> "RowColumn":
        return cls(coerce_str(raw_key, "Key"))

    @staticmethod
    def column_order(key: str) -> List[int]:
        # sorted() is stable, so repeated characters keep left-to-right order
        return [i for i, _ in sorted(enumerate(key), key=lambda item: item[1])]

    def encode(self, text: str) -> str:
        rows = math.ceil(len(text) / self.cols)
        text = text.ljust(rows * self.cols, self.PAD)
        grid = [text[r * self.cols:(r + 1) * self.cols] for r in range(rows)]
        return "".join("".join(row[col] for row in grid) for col in self.order)

    def decode(self, text: str) -> str:
        if len(text) % self.cols != 0:
            raise CipherError(
                ErrorKind.INVALID_PARAMETER,
                f"Ciphertext length must be a multiple of the key length ({self.cols}).",
            )
        rows = len(text) // self.cols
        grid = [[""] * self.cols for _ in range(rows)]
        pos = 0
        for col in self.order:
            for r in range(rows):
                grid[r][col] = text[pos]
                pos += 1
        return "".join("".join(row) for row in grid)
