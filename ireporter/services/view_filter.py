"""
View Filter - search and status-facet projection over a Report Store.
"""

from typing import Iterable, List, Union

from ireporter.models.report import ALL_STATUSES, Report, ReportStatus, StatusFacet


def _matches_status(report: Report, status_facet: StatusFacet) -> bool:
    if status_facet == ALL_STATUSES:
        return True
    return report.status == ReportStatus(status_facet)


def _matches_term(report: Report, term: str) -> bool:
    if not term:
        return True
    return term in report.title.lower() or term in report.description.lower()


def project(
    store: Iterable[Report],
    search_term: str = "",
    status_facet: Union[StatusFacet, str] = ALL_STATUSES,
) -> List[Report]:
    """
    Reports matching the status facet and a case-insensitive search term
    on title or description, in store order.

    Pure: never mutates the store and keeps no state between calls.
    """
    term = (search_term or "").lower()
    return [
        report
        for report in store
        if _matches_status(report, status_facet) and _matches_term(report, term)
    ]
