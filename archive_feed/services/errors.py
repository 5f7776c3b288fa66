"""Custom exceptions for service layer operations."""

from archive_feed.core.timeutils import ConversionError


class NetworkError(Exception):
    """Raised when the metadata request cannot be sent or read."""


class DecodeError(Exception):
    """Raised when the metadata response is not the expected JSON document."""


class BuildError(Exception):
    """Raised when the RSS feed cannot be assembled or serialized."""


__all__ = [
    "NetworkError",
    "DecodeError",
    "ConversionError",
    "BuildError",
]
