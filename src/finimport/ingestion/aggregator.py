"""Batch tallies and the single end-of-batch write."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from finimport.ingestion.planners import PlannedRow, RowDisposition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionOutcome:
    """Result of one batch import, suitable for direct display."""

    successful_rows: int
    failed_rows: int
    errors: list[str] = field(default_factory=list)

    @classmethod
    def file_failure(cls, cause: Exception) -> "IngestionOutcome":
        """Outcome for a batch aborted by a file-level error; row tallies are discarded."""
        return cls(0, 0, [f"File processing failed: {cause}"])

    @property
    def total_rows(self) -> int:
        return self.successful_rows + self.failed_rows

    @property
    def file_failed(self) -> bool:
        """True for an outcome produced by file_failure."""
        return self.total_rows == 0 and bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "successful_rows": self.successful_rows,
            "failed_rows": self.failed_rows,
            "errors": list(self.errors),
        }


class IngestionResultAggregator:
    """Collects row results for one batch and writes the staged entities once."""

    def __init__(self) -> None:
        self.successful_rows = 0
        self.failed_rows = 0
        self.errors: list[str] = []
        self.staged: list[Any] = []

    def record(self, planned: PlannedRow) -> None:
        if planned.disposition is RowDisposition.REJECT:
            self.record_failure(*planned.errors)
            return
        self.successful_rows += 1
        if planned.disposition is RowDisposition.INSERT:
            self.staged.append(planned.entity)

    def record_failure(self, *errors: str) -> None:
        self.failed_rows += 1
        self.errors.extend(errors)

    def commit(self, bulk_insert: Callable[[list[Any]], None]) -> IngestionOutcome:
        """Write all staged entities in one call (none if nothing is staged).

        A failed write aborts the batch: the outcome carries only the file-level error.
        """
        if self.staged:
            try:
                bulk_insert(self.staged)
            except Exception as e:
                logger.exception("Bulk write of %d entities failed", len(self.staged))
                return IngestionOutcome.file_failure(e)
        return IngestionOutcome(self.successful_rows, self.failed_rows, list(self.errors))
