"""Streaming row filter — masks rows one at a time as the host reads them.

For cursors that yield rows lazily, so a large result never has to be
materialized before redaction:

    stream = StreamingRowFilter(redactor, max_rows=1000)
    for row in stream.filter(cursor):
        send(row)
    stream.masked_row_count, stream.total_row_count

Or push rows in yourself:

    safe = stream.feed(row)        # None once max_rows is reached
"""

from __future__ import annotations
from typing import Any, Iterable, Iterator, Mapping

import structlog

from .redactor import Redactor

logger = structlog.get_logger()


class StreamingRowFilter:
    """Masks rows incrementally and keeps running counts."""

    __slots__ = ("_redactor", "_max_rows", "masked_row_count", "total_row_count")

    def __init__(self, redactor: Redactor | None = None, *, max_rows: int | None = None) -> None:
        self._redactor = redactor or Redactor()
        self._max_rows = max_rows
        self.masked_row_count = 0
        self.total_row_count = 0

    @property
    def exhausted(self) -> bool:
        return self._max_rows is not None and self.total_row_count >= self._max_rows

    def feed(self, row: Mapping[str, Any]) -> dict[str, Any] | None:
        """Mask one row; returns None once the row cap has been hit."""
        if self.exhausted:
            return None
        filtered, changed = self._redactor.mask_row(row)
        self.total_row_count += 1
        if changed:
            self.masked_row_count += 1
        return filtered

    def filter(self, rows: Iterable[Mapping[str, Any]]) -> Iterator[dict[str, Any]]:
        """Lazily mask an iterable of rows, stopping at max_rows."""
        for row in rows:
            filtered = self.feed(row)
            if filtered is None:
                break
            yield filtered
            if self.exhausted:
                break
        self.flush()

    def flush(self) -> None:
        """Log the running totals (call at end of stream)."""
        if self.masked_row_count:
            logger.info(
                "rows_masked",
                masked_count=self.masked_row_count,
                total_count=self.total_row_count,
            )
