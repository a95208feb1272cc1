from enum import Enum
from pydantic import BaseModel
from typing import List, Optional, Union

from .errors import CipherError

KeyValue = Union[int, List[int], str]


class Algorithm(str, Enum):
    CAESAR = "caesar"
    MONO = "mono"
    POLY = "poly"
    RAIL = "rail"
    HILL = "hill"
    PLAYFAIR = "playfair"
    OTP = "otp"
    ROWCOL = "rowcol"


class Mode(str, Enum):
    ENCODE = "encode"
    DECODE = "decode"


class CipherRequest(BaseModel):
    algorithm: Algorithm
    mode: Mode
    text: str
    key: KeyValue


class TransformRequest(BaseModel):
    algorithm: Algorithm
    text: str
    key: KeyValue


class CipherErrorDetail(BaseModel):
    kind: str
    message: str


class CipherResult(BaseModel):
    ok: bool
    output: Optional[str] = None
    error: Optional[CipherErrorDetail] = None

    @classmethod
    def success(cls, output: str) -> "CipherResult":
        return cls(ok=True, output=output)

    @classmethod
    def failure(cls, err: CipherError) -> "CipherResult":
        return cls(ok=False, error=CipherErrorDetail(**err.to_dict()))


class HistoryEntry(BaseModel):
    timestamp: str
    algorithm: str
    mode: str
    input: str
    output: str


class RandomKeyResponse(BaseModel):
    algorithm: Algorithm
    key: KeyValue


class AlgorithmInfo(BaseModel):
    name: str
    description: str
    key: str
