"""
Failure classification for the collection core.

No fatal error originates inside the core. Failures fall in three groups:

- Recovered locally: malformed persisted records are logged and treated as
  empty records. Unknown type tags are treated as neutral.
- Collaborator failures: the catalog client wraps transport and HTTP errors
  in a KnownError with kind EXTERNAL_API_ERROR.
- Contract violations: a caller passing a context outside the fixed set, an
  unknown progress field, or a malformed id gets ContractViolationError.
  These are programming errors and are never caught inside the package.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Persistence failures (always recovered)
    MALFORMED_RECORD = "malformed_record"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"


class FailureDetail(BaseModel):
    """Detailed information about a failure, suitable for display."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail for the presentation layer."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class MalformedRecordError(KnownError):
    """Raised when a persisted progress value cannot be decoded."""

    def __init__(self, key: str, detail: str | None = None) -> None:
        self.key = key
        super().__init__(
            kind=FailureKind.MALFORMED_RECORD,
            message=f"Stored progress for '{key}' could not be read",
            detail=detail,
        )


class ContractViolationError(KnownError, ValueError):
    """Raised when a caller passes arguments outside an operation's contract."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
        )
