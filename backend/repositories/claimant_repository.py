"""
Claimant repository: the transactional link/unlink operations.

Linking a report to a petition touches three documents (the petition's
supporter counter, a claimant comment in its subcollection and the report
itself). Both operations run inside a single Firestore transaction so the
counter never drifts from the set of linked reports.
"""

from typing import Any

from firebase_admin import firestore
from loguru import logger

from helpers.time_utils import utc_now
from models.exceptions import (
    ClaimantNotFoundException,
    IncidentReportNotFoundException,
    PetitionNotFoundException,
    ReportAlreadyLinkedException,
)
from repositories.collections import (
    COMMENTS,
    INCIDENT_REPORTS,
    PETITIONS,
    ReportStatus,
)
from repositories.database import FirestoreDatabase

CLAIMANT_AUTHOR = "Verified Claimant"


def claimant_excerpt(issue_description: str, length: int = 50) -> str:
    """Quote the start of an issue description for a claimant comment."""
    excerpt = issue_description[:length]
    if len(issue_description) > length:
        excerpt += "..."
    return f"Claimant Report Linked: {excerpt}"


class ClaimantRepository:
    """Atomic claimant operations spanning petitions and incident reports."""

    def __init__(self, db: FirestoreDatabase):
        self.db = db

    def link_report_to_petition(
        self,
        report_id: str,
        petition_id: str,
        report_data: dict[str, Any],
        excerpt_length: int = 50,
    ) -> dict[str, Any]:
        """
        Atomically link an incident report to a petition.

        In one transaction: increment the petition's supporters by one,
        create a claimant comment whose ID is the report ID, and mark the
        report Linked with a back-reference to the petition.

        Args:
            report_id: Incident report ID
            petition_id: Petition ID
            report_data: Report fields as seen by the admin; fields read
                inside the transaction take precedence
            excerpt_length: Characters of the description to quote

        Returns:
            The claimant comment as stored (date as an ISO string)

        Raises:
            PetitionNotFoundException: If the petition does not exist
            IncidentReportNotFoundException: If the report does not exist
            ReportAlreadyLinkedException: If the report is already linked
        """
        petition_ref = self.db.document(PETITIONS, petition_id)
        # Claimant comment ID equals the report ID: one claimant per report
        comment_ref = petition_ref.collection(COMMENTS).document(report_id)
        report_ref = self.db.document(INCIDENT_REPORTS, report_id)

        def _link(transaction: Any) -> dict[str, Any]:
            petition_snap = petition_ref.get(transaction=transaction)
            if not petition_snap.exists:
                raise PetitionNotFoundException(petition_id)

            report_snap = report_ref.get(transaction=transaction)
            if not report_snap.exists:
                raise IncidentReportNotFoundException(report_id)
            report = {**report_data, **(report_snap.to_dict() or {})}
            if report.get("status") == ReportStatus.LINKED.value:
                raise ReportAlreadyLinkedException(report_id, report.get("petitionId"))

            if comment_ref.get(transaction=transaction).exists:
                raise ReportAlreadyLinkedException(report_id, petition_id)

            claimant_comment = {
                "author": CLAIMANT_AUTHOR,
                "content": claimant_excerpt(
                    report.get("issueDescription", ""), excerpt_length
                ),
                "date": firestore.SERVER_TIMESTAMP,
                "isClaimant": True,
                "originalReportId": report_id,
                "petitionId": petition_id,
                "claimantName": report.get("name"),
                "claimantEmail": report.get("email"),
            }

            transaction.update(petition_ref, {"supporters": firestore.Increment(1)})
            transaction.set(comment_ref, claimant_comment)
            transaction.update(
                report_ref,
                {"status": ReportStatus.LINKED.value, "petitionId": petition_id},
            )
            return {
                **claimant_comment,
                "id": report_id,
                "date": utc_now().isoformat(),
            }

        comment = self.db.run_transaction(_link)
        logger.info(f"Linked report {report_id} to petition {petition_id}")
        return comment

    def unlink_claimant_from_petition(
        self,
        petition_id: str,
        claimant_comment_id: str,
        report_id: str,
        delete_report: bool = True,
    ) -> None:
        """
        Atomically remove a claimant from a petition.

        In one transaction: decrement the petition's supporters by one,
        delete the claimant comment (matched by ID) and delete the source
        incident report. With `delete_report=False` the report is reverted
        to New and its petition back-reference cleared instead.

        Raises:
            PetitionNotFoundException: If the petition does not exist
            ClaimantNotFoundException: If the petition has no such claimant
                comment (the counter is left untouched)
        """
        petition_ref = self.db.document(PETITIONS, petition_id)
        comment_ref = petition_ref.collection(COMMENTS).document(claimant_comment_id)
        report_ref = self.db.document(INCIDENT_REPORTS, report_id)

        def _unlink(transaction: Any) -> None:
            petition_snap = petition_ref.get(transaction=transaction)
            if not petition_snap.exists:
                raise PetitionNotFoundException(petition_id)

            comment_snap = comment_ref.get(transaction=transaction)
            if not comment_snap.exists or not (comment_snap.to_dict() or {}).get(
                "isClaimant"
            ):
                raise ClaimantNotFoundException(petition_id, report_id)

            report_exists = report_ref.get(transaction=transaction).exists

            transaction.update(petition_ref, {"supporters": firestore.Increment(-1)})
            transaction.delete(comment_ref)
            if delete_report:
                transaction.delete(report_ref)
            elif report_exists:
                transaction.update(
                    report_ref,
                    {
                        "status": ReportStatus.NEW.value,
                        "petitionId": firestore.DELETE_FIELD,
                    },
                )

        self.db.run_transaction(_unlink)
        logger.info(
            f"Unlinked claimant {claimant_comment_id} from petition {petition_id} "
            f"(report {report_id} {'deleted' if delete_report else 'reverted'})"
        )
