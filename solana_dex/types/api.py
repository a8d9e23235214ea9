"""
Result types for external HTTP API calls

Every response is decoded right after the network call into either an
ApiSuccess carrying a typed payload or an ApiFailure carrying the
message reported by the API (or by the transport).
"""

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ApiSuccess(Generic[T]):
    """Successful API response with decoded payload"""
    data: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ApiFailure:
    """
    Failed API call

    Attributes:
        message: Message from the API ("msg" field) or transport error text
        status_code: HTTP status code when the server answered
        raw: Undecoded response body, if any
    """
    message: str
    status_code: Optional[int] = None
    raw: Optional[dict] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


ApiResult = Union[ApiSuccess[T], ApiFailure]
