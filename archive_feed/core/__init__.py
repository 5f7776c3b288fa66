"""
Core utilities and domain records for the archive feed service.

This package hosts pure, side‑effect‑free logic: duration parsing and the
typed records decoded from the upstream metadata document.
"""

__all__ = [
    "ConversionError",
    "parse_decimal",
    "parse_duration",
    "epoch_to_datetime",
    "SOURCE_ORIGINAL",
    "SOURCE_DERIVATIVE",
    "Descriptor",
    "FileEntry",
    "ArchiveItem",
]

from .timeutils import ConversionError, parse_decimal, parse_duration, epoch_to_datetime
from .models import (
    SOURCE_ORIGINAL,
    SOURCE_DERIVATIVE,
    Descriptor,
    FileEntry,
    ArchiveItem,
)
