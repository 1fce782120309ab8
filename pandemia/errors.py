"""Exceptions raised by the pandemia pipeline.

Every error is fatal for a run; the CLI reports the message and exits 1.
"""

from __future__ import annotations


class PandemiaError(Exception):
    """Base class for all pipeline failures."""


class CacheInspectionError(PandemiaError):
    """The cache file could not be inspected or read."""


class FetchError(PandemiaError):
    """The dataset download failed or returned a non-200 status."""


class DecodeError(PandemiaError):
    """A payload (network response or cache file) is not valid dataset JSON."""


class IncompleteDataError(PandemiaError):
    """The downloaded data lacks one or more configured countries."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


class PersistenceError(PandemiaError):
    """The filtered dataset could not be written to the cache file."""


class RenderError(PandemiaError):
    """The chart could not be rendered or written."""
