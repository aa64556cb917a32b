"""Tests for PetitionService."""

import pytest

import models.schemas as schemas
from models.exceptions import DisallowedFieldsException, PetitionNotFoundException
from repositories.claimant_repository import ClaimantRepository
from repositories.comment_repository import CommentRepository
from repositories.incident_report_repository import IncidentReportRepository
from repositories.petition_repository import PetitionRepository
from repositories.reported_comment_repository import ReportedCommentRepository
from services.petition_service import PetitionService


def create(db, brand, title, status="active"):
    return PetitionService.create_petition(
        db,
        schemas.PetitionCreate(
            brand=brand, title=title, description="Description", status=status
        ),
    )


class TestListPetitions:
    def test_newest_first_with_sorted_brands(self, db):
        create(db, "Zeta", "Z issue")
        create(db, "Acme", "A issue")

        result = PetitionService.list_petitions(db)

        assert [p.brand for p in result.petitions] == ["Acme", "Zeta"]
        assert result.brands == ["Acme", "Zeta"]

    def test_search_matches_brand_or_title(self, db):
        create(db, "Acme", "Overheating blenders")
        create(db, "Zeta", "Hidden fees")

        by_title = PetitionService.list_petitions(db, search="BLENDER")
        by_brand = PetitionService.list_petitions(db, search="zet")

        assert [p.brand for p in by_title.petitions] == ["Acme"]
        assert [p.brand for p in by_brand.petitions] == ["Zeta"]

    def test_brand_filter_keeps_full_brand_list(self, db):
        create(db, "Acme", "One")
        create(db, "Zeta", "Two")

        result = PetitionService.list_petitions(db, brand="Zeta")

        assert [p.brand for p in result.petitions] == ["Zeta"]
        assert result.brands == ["Acme", "Zeta"]

    def test_brand_all_keeps_everything(self, db):
        create(db, "Acme", "One")
        create(db, "Zeta", "Two")

        assert len(PetitionService.list_petitions(db, brand="all").petitions) == 2


class TestPetitionWrites:
    def test_create_starts_with_zero_supporters(self, db):
        petition = create(db, "Acme", "Title")

        assert petition.supporters == 0
        assert petition.updates == []
        assert petition.status == "active"

    def test_get_missing_raises(self, db):
        with pytest.raises(PetitionNotFoundException):
            PetitionService.get_petition(db, "missing")

    def test_update_whitelisted_fields(self, db, test_petition):
        petition = PetitionService.update_petition(
            db, test_petition, {"status": "investigating", "blogContent": "Findings"}
        )

        assert petition.status == "investigating"
        assert petition.blog_content == "Findings"

    def test_update_cannot_touch_supporters(self, db, test_petition):
        with pytest.raises(DisallowedFieldsException):
            PetitionService.update_petition(db, test_petition, {"supporters": 100})

        assert PetitionService.get_petition(db, test_petition).supporters == 0

    def test_update_missing_petition(self, db):
        with pytest.raises(PetitionNotFoundException):
            PetitionService.update_petition(db, "missing", {"title": "x"})


class TestTimeline:
    def test_add_timeline_entry_generates_id_and_date(self, db, test_petition):
        entry = PetitionService.add_timeline_entry(
            db,
            test_petition,
            schemas.TimelineEntryCreate(title="Letter sent", content="We wrote to Acme"),
        )

        petition = PetitionService.get_petition(db, test_petition)
        assert [u.id for u in petition.updates] == [entry.id]
        assert entry.date

    def test_same_text_twice_gives_two_entries(self, db, test_petition):
        create_entry = schemas.TimelineEntryCreate(title="Update", content="Same")

        PetitionService.add_timeline_entry(db, test_petition, create_entry)
        PetitionService.add_timeline_entry(db, test_petition, create_entry)

        assert len(PetitionService.get_petition(db, test_petition).updates) == 2

    def test_identical_entry_appended_once(self, db, test_petition):
        entry = schemas.TimelineEntry(id="u1", title="T", content="C", date="2025-01-01")

        PetitionService.append_timeline_entry(db, test_petition, entry)
        PetitionService.append_timeline_entry(db, test_petition, entry)

        assert len(PetitionService.get_petition(db, test_petition).updates) == 1

    def test_append_to_missing_petition(self, db):
        entry = schemas.TimelineEntry(id="u1", title="T", content="C", date="d")

        with pytest.raises(PetitionNotFoundException):
            PetitionService.append_timeline_entry(db, "missing", entry)


class TestDeletePetition:
    def test_delete_removes_comments_and_flags_and_frees_reports(
        self, db, test_petition, test_report
    ):
        ClaimantRepository(db).link_report_to_petition(test_report, test_petition, {})
        comment_id = CommentRepository(db).create(test_petition, "Sam", "Hello")
        ReportedCommentRepository(db).create_report(
            test_petition, comment_id, "Bob", "Rude"
        )

        deleted = PetitionService.delete_petition(db, test_petition)

        assert deleted == 2
        assert PetitionRepository(db).get_by_id(test_petition) is None
        assert CommentRepository(db).get_page(test_petition)[0] == []
        assert ReportedCommentRepository(db).get_all() == []
        report = IncidentReportRepository(db).get_by_id(test_report)
        assert report["status"] == "New"
        assert "petitionId" not in report
