"""Pure time utility helpers used by the models and the feed builder."""
from __future__ import annotations

import re
from datetime import datetime, timezone

# Plain decimal numbers only: no spaces, underscores, nan or inf.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class ConversionError(ValueError):
    """Raised when an upstream value cannot be converted."""


def parse_decimal(text: str) -> float:
    """Parse a plain decimal number such as ``"83.2"``.

    Raises ``ConversionError`` for anything else.
    """
    if not _DECIMAL.fullmatch(text):
        raise ConversionError(f"invalid number {text!r}")
    return float(text)


def parse_duration(text: str) -> float:
    """Convert an upstream ``length`` value to seconds.

    Accepts plain seconds (``"83.2"``), ``MM:SS`` (``"3:45"``) and
    ``HH:MM:SS`` (``"1:02:03"``). Values with more than three parts are
    returned as ``0.0``.
    """
    if text == "":
        raise ConversionError("empty length")

    parts = text.split(":")
    if len(parts) > 3:
        return 0.0

    seconds = 0.0
    for index, part in enumerate(parts):
        try:
            value = parse_decimal(part)
        except ConversionError as e:
            raise ConversionError(f"converting {text!r}[{index}]: {e}") from e
        seconds = seconds * 60 + value
    return seconds


def epoch_to_datetime(seconds: int) -> datetime:
    """Return a UTC ``datetime`` for a Unix timestamp.

    Raises ``ConversionError`` when the timestamp is outside the range
    ``datetime`` can represent.
    """
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ConversionError(f"timestamp {seconds!r} out of range: {e}") from e
