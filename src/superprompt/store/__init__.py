"""Async SQLite storage for buckets, saved prompts and playground answers."""

from .core import DEFAULT_BUCKET_COLOR, DEFAULT_BUCKET_ICON, AsyncStore

__all__ = ["AsyncStore", "DEFAULT_BUCKET_COLOR", "DEFAULT_BUCKET_ICON"]
