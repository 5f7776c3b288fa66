"""Podcast RSS feeds generated from Internet Archive item metadata."""

__version__ = "0.1.0"
