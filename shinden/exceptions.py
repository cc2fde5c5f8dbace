"""
Exception hierarchy of the Shinden client.

Two families are kept apart:

* ``PageStructureChangedError``: a page was fetched fine but did not look
  the way a mapper expected (markup changed, field missing, value not
  parseable).  Its ``code`` names the mapper and the field, e.g.
  ``user.overview.username``.
* ``HttpError`` and subclasses: the request itself failed (not found,
  forbidden, server error) before any mapping was attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from utils.document_mapper import MappingError


class ShindenError(Exception):
    """Base class of every error raised by this package."""


@dataclass(frozen=True)
class ErrorCode:
    """Stable, dotted identifier of a failure."""
    code: str

    def __str__(self) -> str:
        return self.code


class PageStructureChangedError(ShindenError, MappingError):
    """The structure of a page changed and a mapper can no longer read it."""

    def __init__(self, error_code: ErrorCode):
        super().__init__(error_code.code, f'Page structure changed. Error code: {error_code.code}')
        self.error_code = error_code


class HttpError(ShindenError):
    """The site answered with an HTTP error status."""

    def __init__(self, status_code: int, url: str = '', message: Optional[str] = None):
        super().__init__(message or f'HTTP {status_code} for {url}')
        self.status_code = status_code
        self.url = url


class NotFoundError(HttpError):
    """HTTP 404."""


class ForbiddenError(HttpError):
    """HTTP 401 / 403, usually a missing or expired session."""
