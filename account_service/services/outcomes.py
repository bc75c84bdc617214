"""Result type returned by authentication and policy decisions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class OutcomeKind(str, Enum):
    """Kinds of result a decision can produce."""

    OK = "ok"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_ERROR = "validation_error"
    BAD_REQUEST = "bad_request"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a payload (kind OK) or a failure kind with a message.

    Decision functions return an Outcome instead of raising for expected
    conditions; the route layer maps the kind to a status code.
    """

    kind: OutcomeKind
    payload: T | None = None
    message: str | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        """Check if the decision succeeded."""
        return self.kind == OutcomeKind.OK

    @classmethod
    def ok(cls, payload: T | None = None) -> "Outcome[T]":
        return cls(OutcomeKind.OK, payload=payload)

    @classmethod
    def unauthenticated(cls, message: str = "Invalid authentication credentials") -> "Outcome[T]":
        return cls(OutcomeKind.UNAUTHENTICATED, message=message)

    @classmethod
    def forbidden(cls, message: str = "Not authorized to perform this action") -> "Outcome[T]":
        return cls(OutcomeKind.FORBIDDEN, message=message)

    @classmethod
    def not_found(cls, message: str = "User not found") -> "Outcome[T]":
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def conflict(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeKind.CONFLICT, message=message)

    @classmethod
    def validation_error(cls, errors: dict[str, str]) -> "Outcome[T]":
        return cls(OutcomeKind.VALIDATION_ERROR, message="Validation failed", errors=errors)

    @classmethod
    def bad_request(cls, reason: str) -> "Outcome[T]":
        return cls(OutcomeKind.BAD_REQUEST, message=reason)

    @classmethod
    def server_error(cls, message: str = "Internal server error") -> "Outcome[T]":
        return cls(OutcomeKind.SERVER_ERROR, message=message)
