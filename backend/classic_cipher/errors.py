from enum import Enum


class ErrorKind(str, Enum):
    EMPTY_INPUT = "EmptyInput"
    INVALID_PARAMETER = "InvalidParameter"
    INVALID_KEY_FORMAT = "InvalidKeyFormat"
    NON_INVERTIBLE_MATRIX = "NonInvertibleMatrix"
    LENGTH_MISMATCH = "LengthMismatch"


class CipherError(ValueError):
    """Raised by a cipher when its key or input fails validation.

    Validation always runs before any text is transformed, so a CipherError
    never comes with partial output.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}
