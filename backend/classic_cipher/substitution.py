from typing import Any, List

from .base import CipherStrategy, register_cipher, coerce_int, coerce_str
from .cipher_math import cipher_math
from .errors import CipherError, ErrorKind


@register_cipher
class Caesar(CipherStrategy):
    name = "caesar"
    description = "Shifts every letter by a fixed amount, keeping case."
    key_description = "Integer shift between 0 and 25."

    def __init__(self, shift: int):
        if not 0 <= shift <= 25:
            raise CipherError(ErrorKind.INVALID_PARAMETER, "Shift must be between 0 and 25.")
        self.shift = shift

    @classmethod
    def from_key(cls, raw_key: Any) -> "Caesar":
        return cls(coerce_int(raw_key, "Shift"))

    def encode(self, text: str) -> str:
        return "".join(cipher_math.shift(c, self.shift) for c in text)

    def decode(self, text: str) -> str:
        return "".join(cipher_math.shift(c, -self.shift) for c in text)


@register_cipher
class Monoalphabetic(CipherStrategy):
    """
    Substitution through a full 26-letter permutation.

    A partial key is completed by dropping repeated letters and appending the
    unused letters in alphabetical order, so "ZEBRA" becomes
    "ZEBRACDFGHIJKLMNOPQSTUVWXY". Output is always uppercase.
    """

    name = "mono"
    description = "Monoalphabetic substitution with a keyword-completed alphabet."
    key_description = "Up to 26 letters; repeated letters are ignored."

    def __init__(self, key: str):
        if not cipher_math.is_alpha_string(key):
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Key must contain only alphabetic characters.")
        if len(key) > 26:
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Key must not exceed 26 characters.")
        self.alphabet = self.complete_key(key)
        self._enc_table = str.maketrans(cipher_math.UPPERCASE, self.alphabet)
        self._dec_table = str.maketrans(self.alphabet, cipher_math.UPPERCASE)

    @classmethod
    def from_key(cls, raw_key: Any) -> "Monoalphabetic":
        return cls(coerce_str(raw_key, "Key"))

    @staticmethod
    def complete_key(key: str) -> str:
        seen = []
        for ch in key.upper():
            if ch not in seen:
                seen.append(ch)
        remaining = [ch for ch in cipher_math.UPPERCASE if ch not in seen]
        return "".join(seen + remaining)

    def encode(self, text: str) -> str:
        return text.upper().translate(self._enc_table)

    def decode(self, text: str) -> str:
        return text.upper().translate(self._dec_table)


@register_cipher
class Polyalphabetic(CipherStrategy):
    """
    Vigenere-style cipher: position i is shifted by keyword[i % len(keyword)].

    The keyword position advances on every character, letters or not.
    """

    name = "poly"
    description = "Vigenere-style polyalphabetic shift driven by a repeating keyword."
    key_description = "Non-empty alphabetic keyword."

    def __init__(self, keyword: str):
        if not keyword:
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Keyword must not be empty.")
        if not cipher_math.is_alpha_string(keyword):
            raise CipherError(ErrorKind.INVALID_KEY_FORMAT, "Keyword must contain only alphabetic characters.")
        self.keyword = keyword.upper()
        self._rotors: List[Caesar] = [Caesar(cipher_math.letter_index(ch)) for ch in self.keyword]

    @classmethod
    def from_key(cls, raw_key: Any) -> "Polyalphabetic":
        return cls(coerce_str(raw_key, "Keyword"))

    def _check_text(self, text: str):
        if not text:
            raise CipherError(ErrorKind.EMPTY_INPUT, "Text must not be empty.")

    def encode(self, text: str) -> str:
        self._check_text(text)
        n = len(self._rotors)
        return "".join(self._rotors[i % n].encode(c) for i, c in enumerate(text))

    def decode(self, text: str) -> str:
        self._check_text(text)
        n = len(self._rotors)
        return "".join(self._rotors[i % n].decode(c) for i, c in enumerate(text))


@register_cipher
class OneTimePad(CipherStrategy):
    """
    One-time pad over characters.

    An all-letter key adds (encode) or subtracts (decode) letter positions,
    leaving non-letters of the text untouched. Any other key XORs character
    codes, which is its own inverse.
    """

    name = "otp"
    description = "One-time pad: modular letter addition, or XOR for non-alphabetic keys."
    key_description = "Same length as the text; letters only for modular mode."

    def __init__(self, key: str):
        self.key = key
        self.modular = cipher_math.is_alpha_string(key)

    @classmethod
    def from_key(cls, raw_key: Any) -> "OneTimePad":
        return cls(coerce_str(raw_key, "Key"))

    def _check_length(self, text: str):
        if len(text) != len(self.key):
            raise CipherError(
                ErrorKind.LENGTH_MISMATCH,
                f"Text and key must be of the same length ({len(text)} != {len(self.key)}).",
            )

    def _xor(self, text: str) -> str:
        codes = [ord(t) ^ ord(k) for t, k in zip(text, self.key)]
        # Lone surrogates cannot be encoded as UTF-8
        if any(0xD800 <= c <= 0xDFFF for c in codes):
            raise CipherError(
                ErrorKind.INVALID_PARAMETER,
                "XOR of text and key produces a surrogate code point; use a different key.",
            )
        return "".join(chr(c) for c in codes)

    def encode(self, text: str) -> str:
        self._check_length(text)
        if not self.modular:
            return self._xor(text)
        return "".join(cipher_math.shift(t, cipher_math.letter_index(k)) for t, k in zip(text, self.key))

    def decode(self, text: str) -> str:
        self._check_length(text)
        if not self.modular:
            return self._xor(text)
        return "".join(cipher_math.shift(t, -cipher_math.letter_index(k)) for t, k in zip(text, self.key))
