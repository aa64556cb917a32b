"""
Write policy for privileged document updates.

Every admin edit, whether it comes from the admin API or from the
`updateAdminDocument` callable, is validated here against the explicit
update schema of its collection before anything is written.
"""

from typing import Any

from pydantic import ValidationError

from helpers.sanitization import sanitize_url
from models.exceptions import (
    DisallowedFieldsException,
    InvalidCollectionException,
    ValidationException,
)
from models.schemas import (
    PLACEHOLDER_IMAGE,
    BlogArticleUpdate,
    PetitionUpdate,
    UpdateModel,
)
from repositories.collections import BLOG_ARTICLES, PETITIONS

# Editable collections and the fields they accept. Counters, timelines and
# timestamps are absent on purpose: only dedicated operations change them.
EDITABLE_SCHEMAS: dict[str, type[UpdateModel]] = {
    PETITIONS: PetitionUpdate,
    BLOG_ARTICLES: BlogArticleUpdate,
}


class WritePolicy:
    """Validates partial updates against per-collection schemas."""

    @staticmethod
    def editable_fields(collection_name: str) -> list[str]:
        """Stored (camelCase) names of the fields an admin may edit."""
        schema = EDITABLE_SCHEMAS.get(collection_name)
        if schema is None:
            raise InvalidCollectionException(collection_name)
        return [field.alias or name for name, field in schema.model_fields.items()]

    @staticmethod
    def validate_update(collection_name: str, updates: Any) -> dict[str, Any]:
        """
        Validate a partial update and return the document payload to write.

        Args:
            collection_name: Target collection
            updates: Raw field mapping from the caller (camelCase or snake_case)

        Returns:
            Payload keyed by stored field names, with null values dropped

        Raises:
            InvalidCollectionException: If the collection is not editable
            DisallowedFieldsException: If a field is outside the schema
            ValidationException: If a value is invalid or nothing is left to write
        """
        schema = EDITABLE_SCHEMAS.get(collection_name)
        if schema is None:
            raise InvalidCollectionException(collection_name)

        if not isinstance(updates, dict):
            raise ValidationException("Updates must be an object of field values")

        try:
            model = schema.model_validate(updates)
        except ValidationError as e:
            disallowed = [
                ".".join(str(part) for part in error["loc"])
                for error in e.errors()
                if error["type"] == "extra_forbidden"
            ]
            if disallowed:
                raise DisallowedFieldsException(collection_name, disallowed)
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise ValidationException(f"Invalid value for '{field}': {first['msg']}")

        payload = model.model_dump(
            mode="json", by_alias=True, exclude_unset=True, exclude_none=True
        )
        if not payload:
            raise ValidationException(f"No editable fields given for '{collection_name}'")

        if "image" in payload:
            payload["image"] = sanitize_url(payload["image"]) or PLACEHOLDER_IMAGE
        return payload
