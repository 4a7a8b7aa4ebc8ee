"""
Outcome of the header phase of an archive request, independent of the HTTP
client that produced it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ResponseKind(str, Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    TRANSPORT_FAILURE = "transport_failure"
    HTTP_ERROR = "http_error"


class ResponseStatus(BaseModel):
    """
    Status of a response before its body is consumed.

    ``code`` is 0 when no response was received at all.
    """

    kind: ResponseKind
    code: int = Field(0, ge=0)
    message: Optional[str] = None

    @classmethod
    def from_http(cls, code: int, reason: Optional[str]) -> "ResponseStatus":
        if code == 0:
            return cls(kind=ResponseKind.TRANSPORT_FAILURE, code=0, message=reason)
        if code != 200:
            return cls(kind=ResponseKind.HTTP_ERROR, code=code, message=reason)
        return cls(kind=ResponseKind.SUCCESS, code=code, message=reason)

    @property
    def successful(self) -> bool:
        return self.kind == ResponseKind.SUCCESS
