"""
Errors raised by the grading core.

Only transport and protocol failures are errors. Malformed response
text is absorbed by the response parser and never raised.
"""


class GradingError(Exception):
    """Base class for hard grading failures."""

    def __init__(self, message: str, provider: str | None = None, cause: Exception | None = None):
        self.provider = provider
        self.cause = cause
        super().__init__(message)


class ProviderRequestError(GradingError):
    """Raised when the upstream call fails (non-2xx, SDK or transport error)."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, provider=provider, cause=cause)


class InvalidResponseKindError(GradingError):
    """Raised when the backend returns a non-text content block."""

    def __init__(self, provider: str, kind: str | None):
        self.kind = kind
        super().__init__(
            f"{provider} returned a non-text response (content type: {kind})",
            provider=provider,
        )


class EmptyResponseError(GradingError):
    """Raised when the backend returns an empty message."""

    def __init__(self, provider: str):
        super().__init__(f"{provider} returned empty content", provider=provider)


class UnsupportedProviderError(GradingError):
    """Raised when no adapter exists for a provider tag."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported provider: {provider}", provider=provider)
