"""Tests for the incident report triage view."""

import models.schemas as schemas
from services.triage_service import TriageService


def report(id, brand="Acme", category="other", status="New", **fields):
    data = {
        "id": id,
        "name": "Reporter",
        "email": "reporter@example.com",
        "brandName": brand,
        "category": category,
        "issueDescription": "Issue",
        "submittedAt": "2025-01-01T00:00:00+00:00",
        "status": status,
    }
    data.update(fields)
    return schemas.IncidentReport.model_validate(data)


class TestTriageService:
    def test_linked_reports_excluded(self):
        result = TriageService.build_triage(
            [report("r1"), report("r2", status="Linked", petitionId="p1")]
        )

        assert result.total == 1
        assert result.groups[0].reports[0].id == "r1"

    def test_grouped_by_brand_sorted_by_key(self):
        result = TriageService.build_triage(
            [report("r1", brand="Zeta"), report("r2", brand="acme"), report("r3", brand="Mega")]
        )

        assert [g.key for g in result.groups] == ["acme", "Mega", "Zeta"]

    def test_grouped_by_category(self):
        result = TriageService.build_triage(
            [
                report("r1", category="refund-issues"),
                report("r2", category="data-privacy"),
                report("r3", category="refund-issues"),
            ],
            group_by=schemas.TriageGroupBy.CATEGORY,
        )

        assert [(g.key, g.count) for g in result.groups] == [
            ("data-privacy", 1),
            ("refund-issues", 2),
        ]

    def test_group_keeps_input_order(self):
        result = TriageService.build_triage([report("r1"), report("r2"), report("r3")])

        assert [r.id for r in result.groups[0].reports] == ["r1", "r2", "r3"]

    def test_search_is_case_insensitive_substring(self):
        result = TriageService.build_triage(
            [
                report("r1", issueDescription="The blender EXPLODED"),
                report("r2", issueDescription="Late delivery"),
            ],
            search="explod",
        )

        assert result.total == 1
        assert result.groups[0].reports[0].id == "r1"

    def test_search_matches_email(self):
        result = TriageService.build_triage(
            [report("r1", email="jane@example.com"), report("r2")], search="JANE@"
        )

        assert [r.id for g in result.groups for r in g.reports] == ["r1"]

    def test_blank_brand_grouped_as_unknown(self):
        result = TriageService.build_triage([report("r1", brand=" ")])

        assert result.groups[0].key == "Unknown"

    def test_empty_input(self):
        result = TriageService.build_triage([])

        assert result.total == 0
        assert result.groups == []
