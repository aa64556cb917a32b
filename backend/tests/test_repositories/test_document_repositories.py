"""Tests for the top-level collection repositories."""

import pytest
from google.api_core.exceptions import NotFound

from repositories.blog_article_repository import BlogArticleRepository
from repositories.incident_report_repository import IncidentReportRepository
from repositories.petition_repository import PetitionRepository
from repositories.reported_comment_repository import ReportedCommentRepository


class TestBaseRepository:
    def test_get_by_id_missing_returns_none(self, db):
        assert PetitionRepository(db).get_by_id("missing") is None

    def test_get_all_orders_newest_first(self, db):
        repo = BlogArticleRepository(db)
        first = repo.create({"title": "First"})
        second = repo.create({"title": "Second"})

        articles = repo.get_all()

        assert [a["id"] for a in articles] == [second, first]

    def test_timestamp_converted_to_iso_string(self, db):
        repo = BlogArticleRepository(db)
        article_id = repo.create({"title": "Dated"})

        article = repo.get_by_id(article_id)

        assert isinstance(article["publishedAt"], str)
        assert article["publishedAt"].startswith("2025-01-01T")

    def test_update_merges_fields(self, db):
        repo = BlogArticleRepository(db)
        article_id = repo.create({"title": "Old", "excerpt": "Kept"})

        repo.update(article_id, {"title": "New"})

        article = repo.get_by_id(article_id)
        assert article["title"] == "New"
        assert article["excerpt"] == "Kept"

    def test_update_missing_document_propagates_store_error(self, db):
        with pytest.raises(NotFound):
            BlogArticleRepository(db).update("missing", {"title": "x"})

    def test_delete_missing_document_is_noop(self, db):
        BlogArticleRepository(db).delete("missing")


class TestPetitionRepository:
    def test_create_forces_zero_supporters_and_empty_timeline(self, db):
        repo = PetitionRepository(db)
        petition_id = repo.create({"brand": "Acme", "title": "T", "supporters": 99})

        petition = repo.get_by_id(petition_id)

        assert petition["supporters"] == 0
        assert petition["updates"] == []

    def test_missing_counters_default(self, db):
        db.client.put("petitions/legacy", {"brand": "Old", "title": "Legacy"})

        petition = PetitionRepository(db).get_by_id("legacy")

        assert petition["supporters"] == 0
        assert petition["updates"] == []
        assert isinstance(petition["createdAt"], str)

    def test_legacy_embedded_comments_are_dropped(self, db):
        db.client.put(
            "petitions/legacy",
            {"brand": "Old", "title": "Legacy", "comments": [{"author": "a"}]},
        )

        petition = PetitionRepository(db).get_by_id("legacy")

        assert "comments" not in petition

    def test_append_timeline_entry_is_set_union(self, db, test_petition):
        repo = PetitionRepository(db)
        entry = {"id": "u1", "title": "Filed", "content": "Complaint filed", "date": "d"}

        repo.append_timeline_entry(test_petition, entry)
        repo.append_timeline_entry(test_petition, dict(entry))
        repo.append_timeline_entry(test_petition, {**entry, "id": "u2"})

        updates = repo.get_by_id(test_petition)["updates"]
        assert [u["id"] for u in updates] == ["u1", "u2"]


class TestIncidentReportRepository:
    def test_create_starts_new_and_unverified(self, db):
        repo = IncidentReportRepository(db)
        report_id = repo.create({"name": "A", "status": "Linked"})

        report = repo.get_by_id(report_id)

        assert report["status"] == "New"
        assert report["verification_level"] == "Unverified"
        assert "submittedAt" in report

    def test_get_linked_to_petition(self, db, make_report):
        repo = IncidentReportRepository(db)
        linked = make_report()
        make_report()
        repo.update(linked, {"status": "Linked", "petitionId": "p1"})

        reports = repo.get_linked_to_petition("p1")

        assert [r["id"] for r in reports] == [linked]

    def test_revert_to_new_clears_back_reference(self, db, make_report):
        repo = IncidentReportRepository(db)
        report_id = make_report()
        repo.update(report_id, {"status": "Linked", "petitionId": "p1"})

        repo.revert_to_new(report_id)

        report = repo.get_by_id(report_id)
        assert report["status"] == "New"
        assert "petitionId" not in report


class TestReportedCommentRepository:
    def test_create_report_status_new(self, db):
        repo = ReportedCommentRepository(db)
        reported_id = repo.create_report("p1", "c1", "Bob", "Spam")

        reported = repo.get_by_id(reported_id)

        assert reported["status"] == "new"
        assert reported["commentId"] == "c1"
        assert reported["reporterName"] == "Bob"

    def test_get_for_comment_filters_both_ids(self, db):
        repo = ReportedCommentRepository(db)
        wanted = repo.create_report("p1", "c1", "Bob", "Spam")
        repo.create_report("p1", "c2", "Bob", "Spam")
        repo.create_report("p2", "c1", "Bob", "Spam")

        assert [r["id"] for r in repo.get_for_comment("p1", "c1")] == [wanted]
