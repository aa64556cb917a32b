"""
Triage of incident reports for the admin console.

Pure functions over an in-memory report list: nothing here touches
Firestore.
"""

from collections import defaultdict
from typing import Iterable, List

import models.schemas as schemas
from repositories.collections import ReportStatus

SEARCH_FIELDS = ("name", "email", "brand_name", "category", "issue_description")

UNKNOWN_GROUP = "Unknown"


def is_active(report: schemas.IncidentReport) -> bool:
    """Reports still awaiting triage (not yet linked to a petition)."""
    return report.status != ReportStatus.LINKED


def matches_search(report: schemas.IncidentReport, search: str) -> bool:
    """Case-insensitive substring match over the searchable fields."""
    needle = search.strip().lower()
    if not needle:
        return True
    return any(
        needle in str(getattr(report, field) or "").lower() for field in SEARCH_FIELDS
    )


def group_key(report: schemas.IncidentReport, group_by: schemas.TriageGroupBy) -> str:
    if group_by == schemas.TriageGroupBy.CATEGORY:
        value = report.category
    else:
        value = report.brand_name
    return value.strip() if value and value.strip() else UNKNOWN_GROUP


class TriageService:
    """Builds the grouped triage view."""

    @staticmethod
    def build_triage(
        reports: Iterable[schemas.IncidentReport],
        search: str = "",
        group_by: schemas.TriageGroupBy = schemas.TriageGroupBy.BRAND,
    ) -> schemas.TriageResponse:
        """
        Filter, group and sort incident reports.

        Linked reports are dropped, the rest filtered by `search` and grouped
        by brand or category. Groups are sorted by key; reports keep their
        input order inside a group.

        Args:
            reports: Reports, usually newest first
            search: Case-insensitive search text
            group_by: Grouping field

        Returns:
            Triage groups
        """
        grouped: dict[str, List[schemas.IncidentReport]] = defaultdict(list)
        total = 0
        for report in reports:
            if not is_active(report) or not matches_search(report, search):
                continue
            grouped[group_key(report, group_by)].append(report)
            total += 1

        groups = [
            schemas.TriageGroup(key=key, count=len(grouped[key]), reports=grouped[key])
            for key in sorted(grouped, key=str.lower)
        ]
        return schemas.TriageResponse(
            group_by=group_by, search=search, total=total, groups=groups
        )
