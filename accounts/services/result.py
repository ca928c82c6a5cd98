"""Typed outcome of an internal account-service step: a success value or a tagged failure."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureReason(str, Enum):
    VALIDATION_OR_PERSISTENCE = "validation_or_persistence"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    TOKEN_INVALID = "token_invalid"


# HTTP-style status each failure reason maps to in the response envelope.
FAILURE_STATUS: dict[FailureReason, int] = {
    FailureReason.VALIDATION_OR_PERSISTENCE: 500,
    FailureReason.AUTHENTICATION: 500,
    FailureReason.NOT_FOUND: 404,
    FailureReason.TOKEN_INVALID: 500,
}


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    """
    reason selects the status code; message is human-readable.
    error carries the underlying exception text when there is one.
    """

    reason: FailureReason
    message: str
    error: str | None = None

    @property
    def status_code(self) -> int:
        return FAILURE_STATUS[self.reason]


Result = Union[Success[T], Failure]
