"""Exceptions raised by sigmeta."""

from __future__ import annotations


class SigMFError(Exception):
    """Base class for all sigmeta errors."""


class DecodeError(SigMFError):
    """A structure could not be rebuilt from (or flattened into) JSON fields."""


class MalformedError(DecodeError):
    """The metadata document is not valid JSON or misses required fields."""


class ParseError(SigMFError, ValueError):
    """A datatype token does not match the sample-format grammar."""

    def __init__(self, message: str, text: str = "", position: int = 0) -> None:
        super().__init__(message)
        self.text = text
        self.position = position


class InternalError(SigMFError):
    """Capture byte boundaries are inconsistent with the data."""
