"""
Privileged writes behind the callable endpoints.

Both callables go through the same policy-checked services as the admin API:
there is no second, unchecked write path.
"""

from typing import Any

from pydantic import ValidationError

import models.schemas as schemas
from models.exceptions import ValidationException
from repositories.collections import BLOG_ARTICLES, PETITIONS
from repositories.database import FirestoreDatabase
from services.blog_service import BlogService
from services.petition_service import PetitionService
from services.write_policy import WritePolicy


def _require(data: Any, fields: tuple[str, ...]) -> dict[str, Any]:
    if not isinstance(data, dict) or any(not data.get(f) for f in fields):
        raise ValidationException(
            f"The request is missing required fields ({', '.join(fields)})."
        )
    return data


class AdminWriteService:
    """Handlers for `updateAdminDocument` and `addTimelineLog`."""

    @staticmethod
    def update_document(db: FirestoreDatabase, data: Any) -> schemas.CallableResult:
        """
        Update whitelisted fields of one document.

        Args:
            db: Firestore handle
            data: {collectionName, id, updates}

        Raises:
            ValidationException: If fields are missing, the collection is not
                editable or the update leaves the collection's schema
            NotFoundException: If the document does not exist
        """
        data = _require(data, ("collectionName", "id", "updates"))
        collection_name = str(data["collectionName"])
        document_id = str(data["id"])
        updates = data["updates"]

        # Raises before any lookup for collections outside the policy
        WritePolicy.editable_fields(collection_name)
        if collection_name == PETITIONS:
            PetitionService.update_petition(db, document_id, updates)
        elif collection_name == BLOG_ARTICLES:
            BlogService.update_article(db, document_id, updates)

        return schemas.CallableResult(
            success=True,
            message=f"Document {document_id} updated in {collection_name}.",
        )

    @staticmethod
    def add_timeline_log(db: FirestoreDatabase, data: Any) -> schemas.CallableResult:
        """
        Append one complete entry to a petition's timeline.

        Args:
            db: Firestore handle
            data: {petitionId, updateObject: {id, title, content, date}}

        Raises:
            ValidationException: If fields are missing or the entry is malformed
            PetitionNotFoundException: If the petition does not exist
        """
        data = _require(data, ("petitionId", "updateObject"))
        try:
            entry = schemas.TimelineEntry.model_validate(data["updateObject"])
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "updateObject"
            raise ValidationException(f"Invalid timeline entry '{field}': {first['msg']}")

        PetitionService.append_timeline_entry(db, str(data["petitionId"]), entry)
        return schemas.CallableResult(
            success=True, message="Timeline updated successfully."
        )
