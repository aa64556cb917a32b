"""
Export Service - CSV generation for incident reports.
"""

import csv
from datetime import date
from io import StringIO
from typing import Iterable

import models.schemas as schemas
from helpers.time_utils import export_date_suffix

# Header order expected by the spreadsheet the team imports into
CSV_COLUMNS = (
    ("name", "name"),
    ("email", "email"),
    ("brandName", "brand_name"),
    ("category", "category"),
    ("issueDescription", "issue_description"),
    ("submittedAt", "submitted_at"),
)


class ExportService:
    """Service for exporting incident reports as CSV."""

    @staticmethod
    def reports_to_csv(reports: Iterable[schemas.IncidentReport]) -> str:
        """
        Render incident reports as CSV.

        Every field is quoted and embedded quotes are doubled, so descriptions
        with commas, quotes or newlines survive a round trip through any CSV
        reader.

        Args:
            reports: Reports to export

        Returns:
            CSV content as string.
        """
        output = StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

        writer.writerow([header for header, _ in CSV_COLUMNS])
        for report in reports:
            writer.writerow(
                [getattr(report, attribute) or "" for _, attribute in CSV_COLUMNS]
            )

        return output.getvalue()

    @staticmethod
    def export_filename(today: date | None = None) -> str:
        return f"incident_reports_{export_date_suffix(today)}.csv"
