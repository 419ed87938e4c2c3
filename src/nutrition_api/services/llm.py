"""Language-model client interface and upstream failure mapping."""

from typing import Protocol

import openai

from nutrition_api.domain.completions import CompletionResult
from nutrition_api.errors import (
    ApiError,
    UnknownError,
    UpstreamAuthError,
    UpstreamQuotaExceeded,
    UpstreamRateLimit,
)

_AUTH_MARKERS = ("401", "Unauthorized")
_QUOTA_MARKERS = ("quota", "insufficient_quota")
_RATE_LIMIT_MARKERS = ("429", "Rate limit")


class CompletionClient(Protocol):
    """Interface for chat-completion calls."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        temperature: float,
        max_tokens: int | None = None,
        json_output: bool = True,
    ) -> CompletionResult:
        """Return the first choice of a chat completion."""


def classify_upstream_error(exc: Exception) -> ApiError:
    """Map a model provider failure to an API error.

    Typed OpenAI errors are checked first; other exceptions fall back to
    markers in their message.
    """
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, openai.AuthenticationError):
        return _auth_error()
    if isinstance(exc, openai.RateLimitError):
        if getattr(exc, "code", None) == "insufficient_quota":
            return _quota_error()
        return _rate_limit_error()

    message = str(exc)
    if any(marker in message for marker in _AUTH_MARKERS):
        return _auth_error()
    if any(marker in message for marker in _QUOTA_MARKERS):
        return _quota_error()
    if any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return _rate_limit_error()
    return UnknownError(
        message or "Unknown error",
        error="An error occurred while analyzing the image.",
    )


def _auth_error() -> UpstreamAuthError:
    return UpstreamAuthError("Invalid or expired API key. Check the configuration.")


def _quota_error() -> UpstreamQuotaExceeded:
    return UpstreamQuotaExceeded(
        "No credits available on the model provider account. "
        "Add credits to continue."
    )


def _rate_limit_error() -> UpstreamRateLimit:
    return UpstreamRateLimit(
        "Too many requests in a short time. Wait a moment and try again."
    )
