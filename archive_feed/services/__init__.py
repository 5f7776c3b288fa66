"""Service layer modules (network and external I/O).

Includes the metadata fetcher and the RSS feed builder.
"""

__all__ = [
    "metadata",
    "feed",
    "errors",
]
