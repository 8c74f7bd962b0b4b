from __future__ import annotations


class TextTuneError(Exception):
    """Base class for every error the service reports to its callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TextTuneError):
    """Bad or missing user input. Never reaches the upstream provider."""


class MissingInputError(ValidationError):
    pass


class WordLimitError(ValidationError):
    pass


class UnsupportedToneError(ValidationError):
    pass


class UpstreamError(TextTuneError):
    """Failure talking to the generative-language provider."""


class UpstreamHttpError(UpstreamError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamEmptyResponseError(UpstreamError):
    def __init__(self, message: str = "No content found in AI response.") -> None:
        super().__init__(message)


class UpstreamTransportError(UpstreamError):
    pass
