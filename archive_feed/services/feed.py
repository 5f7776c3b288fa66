"""RSS feed rendering for archive items.

Pure transformation from an ``ArchiveItem`` to a serialized RSS 2.0 document
with one enclosure per media file. Every date in the output comes from the
item itself, so the same item always renders to the same bytes.
"""
from __future__ import annotations

import logging

from feedgen.feed import FeedGenerator

from archive_feed.core import ArchiveItem, ConversionError, FileEntry, epoch_to_datetime
from .errors import BuildError

logger = logging.getLogger(__name__)

DEFAULT_ITEM_URL = "https://archive.org/details/"

SKIPPED_SUFFIXES = (".xml", ".jpg", ".sqlite")

# Enclosures carry no MIME type; only the byte length is tracked.
ENCLOSURE_TYPE = ""


def is_media_file(entry: FileEntry) -> bool:
    """Return False for item artifacts (metadata, thumbnails, databases)."""
    return not entry.name.endswith(SKIPPED_SUFFIXES)


def _add_entry(feed: FeedGenerator, item: ArchiveItem, entry: FileEntry) -> None:
    title, description = entry.title_description()
    url = item.file_url(entry)

    fe = feed.add_entry(order="append")
    fe.title(title)
    fe.description(description)
    if entry.artist:
        fe.author({"email": entry.artist})
    fe.link(href=url)
    fe.pubDate(epoch_to_datetime(entry.mtime))
    if entry.sha1:
        fe.guid(entry.sha1, permalink=False)
    fe.enclosure(url, str(entry.size), ENCLOSURE_TYPE)


def build_feed(item: ArchiveItem, item_url: str = DEFAULT_ITEM_URL) -> str:
    """Render ``item`` as an RSS document.

    Raises ``BuildError`` if the item date is out of range, an entry cannot
    be added or the feed cannot be serialized; no partial document is ever
    returned.
    """
    descriptor = item.metadata
    title = descriptor.title or descriptor.identifier
    try:
        pub_date = epoch_to_datetime(item.last_updated)
    except ConversionError as e:
        logger.error("Invalid update time for %s: %s", descriptor.identifier, e)
        raise BuildError(f"channel date: {e}") from e

    feed = FeedGenerator()
    feed.title(title)
    feed.link(href=item_url + descriptor.identifier)
    feed.description(descriptor.description or title)
    feed.pubDate(pub_date)
    feed.lastBuildDate(pub_date)

    count = 0
    for entry in item.files:
        if not is_media_file(entry):
            logger.debug("Skipping non-media file %s", entry.name)
            continue
        try:
            _add_entry(feed, item, entry)
        except Exception as e:
            logger.error("Failed to add %s to feed: %s", entry.name, e)
            raise BuildError(f"adding {entry.name!r}: {e}") from e
        count += 1

    try:
        body = feed.rss_str(pretty=True)
    except Exception as e:
        logger.error("Failed to encode feed for %s: %s", descriptor.identifier, e)
        raise BuildError(f"encoding feed: {e}") from e

    logger.info("Built feed for %s with %d items", descriptor.identifier, count)
    return body.decode("utf-8")
