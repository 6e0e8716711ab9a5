"""Typed failures raised by the ledger and voting service.

Every outcome a caller may need to branch on has its own class and a stable
``code`` string, so a client toggling a vote can tell "already voted" apart
from "feature missing" or a storage fault.
"""

from __future__ import annotations

HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_INTERNAL_SERVER_ERROR = 500


class VotingError(RuntimeError):
    """Base exception for all ledger and voting service failures."""

    code: str = "voting-error"
    http_status: int = HTTP_INTERNAL_SERVER_ERROR
    default_message: str = "Voting operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(VotingError):
    """Raised for bad input before any write is attempted."""

    code = "validation-error"
    http_status = HTTP_BAD_REQUEST
    default_message = "Invalid request"


class UnauthenticatedError(VotingError):
    """Raised when an operation requiring a principal is called without one."""

    code = "unauthenticated"
    http_status = HTTP_UNAUTHORIZED
    default_message = "Authentication required"


class NotFoundError(VotingError):
    """Base for expected lookups against absent rows."""

    code = "not-found"
    http_status = HTTP_NOT_FOUND
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    """Raised by login when no user has the given username."""

    code = "user-not-found"
    # Login failures for unknown accounts are reported as 401.
    http_status = HTTP_UNAUTHORIZED
    default_message = "User not found"


class FeatureNotFoundError(NotFoundError):
    code = "feature-not-found"
    default_message = "Feature not found"


class VoteNotFoundError(NotFoundError):
    code = "vote-not-found"
    default_message = "Vote not found"


class DuplicateVoteError(VotingError):
    """Raised when the (feature, user) uniqueness constraint rejects a vote."""

    code = "duplicate-vote"
    http_status = HTTP_CONFLICT
    default_message = "Already voted for this feature"


class StorageError(VotingError):
    """Infrastructure failure reported by the database.

    Only failures of non-mutating operations are safe to retry blindly; a
    failed write has an unknown outcome.
    """

    code = "storage-error"
    http_status = HTTP_INTERNAL_SERVER_ERROR
    default_message = "Database error"

    def __init__(self, message: str | None = None, *, mutating: bool = True) -> None:
        super().__init__(message)
        self.mutating = mutating

    @property
    def retryable(self) -> bool:
        return not self.mutating


__all__ = [
    "VotingError",
    "ValidationError",
    "UnauthenticatedError",
    "NotFoundError",
    "UserNotFoundError",
    "FeatureNotFoundError",
    "VoteNotFoundError",
    "DuplicateVoteError",
    "StorageError",
]
