"""Import job exception hierarchy.

Every stage raises its own error type and chains the underlying cause with
``raise ... from`` so the full causal chain survives to the log line.
"""

from __future__ import annotations


class BatchError(Exception):
    """Base exception for all import job failures."""


class ParseError(BatchError):
    """Raised when a feed timestamp cannot be normalized and parsed."""


class DecodeError(BatchError):
    """Raised for malformed feed JSON or an undecodable record."""


class FetchError(BatchError):
    """Raised for transport-level failures while retrieving the feed."""


class IndexingError(BatchError):
    """Raised when a bulk upsert against the search index fails."""


def describe(error: BaseException) -> str:
    chain: list[str] = []
    current: BaseException | None = error
    while current is not None:
        chain.append(type(current).__name__)
        current = current.__cause__
    return f"{error} [{' <- '.join(chain)}]"
