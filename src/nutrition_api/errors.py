"""Error taxonomy shared by services and the HTTP layer.

Services raise these; the FastAPI exception handlers render them as
``{"error": ..., "details": ..., **extra}`` with the matching status code.
"""

from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors that map to a JSON error response."""

    status_code: int = 500
    default_error: str = "An unexpected error occurred."

    def __init__(
        self,
        details: str | None = None,
        *,
        error: str | None = None,
        extra: dict[str, object] | None = None,
    ) -> None:
        self.error = error or self.default_error
        self.details = details or self.error
        self.extra = extra or {}
        super().__init__(self.details)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body for this error."""
        return {"error": self.error, "details": self.details, **self.extra}


class ValidationError(ApiError):
    """Malformed, missing or out-of-range input."""

    status_code = 400
    default_error = "Invalid request."


class MissingIdentifier(ApiError):
    """No user identifier was supplied."""

    status_code = 400
    default_error = "user_id was not provided."


class NotFound(ApiError):
    """The requested resource does not exist."""

    status_code = 404
    default_error = "Not found."


class UpstreamEmptyResponse(ApiError):
    """The model returned nothing usable."""

    status_code = 500
    default_error = "The analysis could not be completed."


class UpstreamAuthError(ApiError):
    """The model provider rejected our credentials."""

    status_code = 500
    default_error = "Authentication with the model provider failed."


class UpstreamRateLimit(ApiError):
    """The model provider is throttling requests."""

    status_code = 429
    default_error = "Request limit reached."


class UpstreamQuotaExceeded(ApiError):
    """The model provider account has no remaining credits."""

    status_code = 500
    default_error = "Model provider credits exhausted."


class InvalidUpstreamSchema(ApiError):
    """The model response could not be parsed or lacks expected fields."""

    status_code = 500
    default_error = "Invalid analysis response."


class UnknownError(ApiError):
    """Catch-all failure with the original message passed through."""

    status_code = 500
    default_error = "An unexpected error occurred."


class RoutingError(ApiError):
    """Framework-level HTTP failure such as an unknown path or method."""

    def __init__(self, status_code: int, details: str | None = None) -> None:
        super().__init__(details, error=HTTPStatus(status_code).phrase)
        self.status_code = status_code
