"""Exceptions raised while fetching and analyzing the registry."""


class RegistryError(Exception):
    """Base class for failures that abort an analysis run."""


class TransportFailure(RegistryError):
    """The registry could not be reached or answered with a non-success status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponse(RegistryError):
    """A page response did not have the expected shape."""


class ConfigError(RegistryError):
    """The configuration file is missing or invalid."""
