"""Exceptions raised by the tldr core."""


class TLDRError(Exception):
    """Base exception for all application-specific errors."""

    error_code = "app:tldr_error"


class InvalidURLError(TLDRError, ValueError):
    """Raised when a destination URL cannot be normalized into a valid http(s) URL."""

    error_code = "input:invalid_url"


class MappingNotFoundError(TLDRError):
    """Raised when no mapping exists for a token."""

    error_code = "lookup:not_found"

    def __init__(self, short: str):
        super().__init__(f"No URL found for short '{short}'.")
        self.short = short


class MappingInvalidError(TLDRError):
    """Raised when a mapping exists but is flagged as not valid."""

    error_code = "lookup:invalid"

    def __init__(self, mapping):
        super().__init__("URL is not valid")
        self.mapping = mapping


class StorageUnavailableError(TLDRError):
    """Raised when the mapping store cannot be reached or queried."""

    error_code = "storage:unavailable"


class UniquenessViolationError(TLDRError):
    """Raised by a store when an insert collides with an existing token."""

    error_code = "storage:uniqueness_violation"


class ExhaustedRetriesError(TLDRError):
    """Raised when no free token was found within the configured attempts."""

    error_code = "app:exhausted_retries"
