"""
Report Store - client-side in-memory mirror of a report collection.

Each view owns one store. All operations are synchronous, keyed by report
id and total: they never raise, and unknown ids are a no-op.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional
import logging

from ireporter.models.report import Report

logger = logging.getLogger(__name__)


class ReportStore:
    """Ordered collection of reports keyed by id (insertion order preserved)."""

    def __init__(self, reports: Optional[Iterable[Report]] = None):
        self._reports: Dict[str, Report] = {}
        if reports is not None:
            self.load(reports)

    def load(self, reports: Iterable[Report]) -> None:
        """Replace the whole collection, e.g. after a fetch."""
        loaded: Dict[str, Report] = {}
        for report in reports:
            if report.id is None:
                logger.warning("Skipping report without id during load")
                continue
            loaded[report.id] = report
        self._reports = loaded

    def insert(self, report: Report) -> None:
        """Append a server-confirmed report. An existing id is replaced in place."""
        if report.id is None:
            logger.warning("Ignoring insert of report without server-assigned id")
            return
        self._reports[report.id] = report

    def patch(self, report_id: str, changes: Dict[str, Any]) -> None:
        """Merge partial field changes into the matching report."""
        existing = self._reports.get(report_id)
        if existing is None:
            return
        update = {k: v for k, v in changes.items() if k != "id"}
        self._reports[report_id] = existing.model_copy(update=update)

    def remove(self, report_id: str) -> None:
        self._reports.pop(report_id, None)

    def get(self, report_id: str) -> Optional[Report]:
        return self._reports.get(report_id)

    def ids(self) -> List[str]:
        return list(self._reports)

    def snapshot(self) -> List[Report]:
        """Current reports in store order."""
        return list(self._reports.values())

    def clear(self) -> None:
        self._reports = {}

    def __contains__(self, report_id: object) -> bool:
        return report_id in self._reports

    def __iter__(self) -> Iterator[Report]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._reports)
