"""Domain exceptions.

Every failure in the verification workflow is scoped to a single submission
attempt; the API layer maps these to HTTP status codes.
"""


class VerificationServiceError(Exception):
    """Base class for all service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FileValidationError(VerificationServiceError):
    """Local intake rejection: unsupported type or oversized file."""

    def __init__(self, message: str, reason: str, reasons: list[str] | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.reasons = reasons or [reason]


class VerificationTransportError(VerificationServiceError):
    """Network failure or timeout talking to the verification endpoint."""


class VerificationAPIError(VerificationServiceError):
    """Non-2xx response from the verification endpoint."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class VerificationConfigError(VerificationServiceError):
    """Operation requires a configured verification endpoint."""


class SubmissionInProgressError(VerificationServiceError):
    """A verification is already in flight for this submission form."""


class RateLimitExceededError(VerificationServiceError):
    """The rate-limit collaborator refused the request."""

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class PermissionDeniedError(VerificationServiceError):
    """The current session lacks the role required for the operation."""


class PropertyNotFoundError(VerificationServiceError):
    """The referenced property listing does not exist."""


class InvalidReviewActionError(VerificationServiceError):
    """Review action is not one of approve or reject."""
