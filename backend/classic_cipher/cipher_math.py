import math
import string
import numpy as np
from typing import List, Optional


class CipherMath:
    def __init__(self):
        self.MODULUS = 26
        self.UPPERCASE = string.ascii_uppercase
        self.LOWERCASE = string.ascii_lowercase
        # 25-letter alphabet with I and J merged (Playfair key square)
        self.PLAYFAIR_ALPHABET = "ABCDEFGHIKLMNOPQRSTUVWXYZ"

    # --- ALPHABET UTILITIES ---

    def is_letter(self, char: str) -> bool:
        """ASCII letters only; other Unicode letters are treated as symbols."""
        return char in self.UPPERCASE or char in self.LOWERCASE

    def is_alpha_string(self, text: str) -> bool:
        return bool(text) and all(self.is_letter(c) for c in text)

    def letter_base(self, char: str) -> int:
        return ord('A') if char in self.UPPERCASE else ord('a')

    def letter_index(self, char: str) -> int:
        """Zero-based position of a letter within its own case (A/a = 0)."""
        return ord(char) - self.letter_base(char)

    def shift(self, char: str, n: int) -> str:
        """
        Shift a letter by n positions mod 26, keeping its case.
        Non-letters pass through unchanged.
        """
        if not self.is_letter(char):
            return char
        base = self.letter_base(char)
        return chr((ord(char) - base + n) % self.MODULUS + base)

    def index_to_letter(self, value: int) -> str:
        return self.UPPERCASE[value % self.MODULUS]

    # --- MODULAR ARITHMETIC ---

    def gcd(self, a: int, b: int) -> int:
        return math.gcd(a, b)

    def mod_inverse(self, a: int, m: int = 26) -> Optional[int]:
        """Multiplicative inverse of a modulo m, or None if it does not exist."""
        a = a % m
        # Extended Euclid is unnecessary here, m is tiny.
        for x in range(1, m):
            if (a * x) % m == 1:
                return x
        return None

    # --- 2x2 MATRIX ALGEBRA MOD 26 ---

    def to_matrix(self, values: List[int]) -> np.ndarray:
        return np.array(values, dtype=np.int64).reshape(2, 2)

    def determinant(self, matrix: np.ndarray) -> int:
        """Determinant normalised into [0, 26)."""
        a, b = int(matrix[0][0]), int(matrix[0][1])
        c, d = int(matrix[1][0]), int(matrix[1][1])
        return (a * d - b * c) % self.MODULUS

    def is_invertible(self, matrix: np.ndarray) -> bool:
        det = self.determinant(matrix)
        return det != 0 and self.gcd(det, self.MODULUS) == 1

    def adjugate(self, matrix: np.ndarray) -> np.ndarray:
        a, b = matrix[0]
        c, d = matrix[1]
        adj = np.array([[d, -b], [-c, a]], dtype=np.int64)
        return np.mod(adj, self.MODULUS)

    def inverse_matrix(self, matrix: np.ndarray) -> Optional[np.ndarray]:
        """
        Inverse of a 2x2 matrix modulo 26:
            inv = det^-1 * [[d, -b], [-c, a]]  (mod 26)
        Returns None when det has no inverse mod 26.
        """
        if not self.is_invertible(matrix):
            return None
        inv_det = self.mod_inverse(self.determinant(matrix), self.MODULUS)
        return np.mod(self.adjugate(matrix) * inv_det, self.MODULUS)

    def multiply_pairs(self, indices: List[int], matrix: np.ndarray) -> List[int]:
        """
        Treat indices as consecutive 1x2 row vectors and multiply each by matrix.
        len(indices) must be even.
        """
        blocks = np.array(indices, dtype=np.int64).reshape(-1, 2)
        result = np.mod(blocks @ matrix, self.MODULUS)
        return [int(v) for v in result.flatten()]


cipher_math = CipherMath()
