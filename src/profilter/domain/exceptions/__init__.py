"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored so the CLI can print it without parsing str(exc).
    # Don't raise this directly - use a subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ConfigurationError(DomainException):
    """Application misconfiguration.

    Raised when required configuration is missing or invalid, always before
    any network activity.

    Example:
        raise ConfigurationError("You must provide a username")
        raise ConfigurationError("You must provide an api key in the API_KEY env var")
    """

    pass


class RequestError(DomainException):
    """A request against the catalog API failed.

    Covers transport failures, non-2xx responses and bodies that are not
    valid JSON. There is no transient/permanent distinction and no retry.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponseError(RequestError):
    """The response was valid JSON but not the shape the resource requires."""

    pass


class AggregationError(DomainException):
    """Aggregating a user's playlists failed; no partial result exists."""

    # Yo, this always wraps the RequestError that killed the run (raise ... from e),
    # so the compact log formatter still shows the HTTP cause underneath.
    def __init__(self, username: str, reason: str) -> None:
        super().__init__(f"Failed to aggregate playlists of {username}: {reason}")
        self.username = username


__all__ = [
    "AggregationError",
    "ConfigurationError",
    "DomainException",
    "MalformedResponseError",
    "RequestError",
]
