"""Ownership-scoped access to user-owned documents.

Every read and write first loads the document by id (NotFoundError if it
does not exist at all), then compares its owner with the authenticated
user (AccessDeniedError if they differ). Mutations are single MongoDB
operations filtered by both id and owner.
"""

from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

import structlog
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from tunebook.core.core import Service
from tunebook.core.modules.owned.models import PROTECTED_FIELDS, OwnedModel
from tunebook.errors import AccessDeniedError, NotFoundError, ValidationError
from tunebook.utils import is_blank, now

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=OwnedModel)


class OwnedResourceService(Service, Generic[T]):
    """Repository of owned documents, parameterized by model type."""

    collection_name: ClassVar[str]
    model: type[T]
    label: ClassVar[str]  # Human-readable name used in error messages
    required_field: ClassVar[str]

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection(self.collection_name)

    async def on_start(self) -> None:
        await self._collection.create_index([("owner_id", 1), ("created_at", -1)])

    async def list_owned(self, user_id: UUID) -> list[T]:
        """List the user's documents, newest first."""
        cursor = self._collection.find({"owner_id": user_id}).sort("created_at", -1)
        return await self.model.list_cursor(cursor)

    async def get_owned(self, user_id: UUID, resource_id: UUID) -> T:
        """Get a document, checking existence before ownership."""
        doc = await self._collection.find_one({"_id": resource_id})
        if doc is None:
            raise NotFoundError(f"{self.label} not found")
        resource = self.model.model_validate(doc)
        if resource.owner_id != user_id:
            logger.warning("ownership_check_failed", resource=self.label, resource_id=str(resource_id), user_id=str(user_id))
            raise AccessDeniedError
        return resource

    async def create_owned(self, user_id: UUID, fields: dict[str, Any]) -> T:
        """Create a document owned by the user, whatever owner the input names."""
        data = self._strip_protected(fields)
        if is_blank(data.get(self.required_field)):
            raise ValidationError(f"{self.required_field.capitalize()} is required")

        resource = self._build({**data, "owner_id": user_id})
        await self._collection.insert_one(resource.to_mongo())
        logger.debug("resource_created", resource=self.label, resource_id=str(resource.id))
        return resource

    async def update_owned(self, user_id: UUID, resource_id: UUID, fields: dict[str, Any]) -> T:
        """Merge the given fields into the document; others keep their values."""
        current = await self.get_owned(user_id, resource_id)
        changes = self._strip_protected(fields)
        if self.required_field in changes and is_blank(changes[self.required_field]):
            raise ValidationError(f"{self.required_field.capitalize()} cannot be empty")
        if not changes:
            return current

        merged = self._build({**current.model_dump(), **changes, "updated_at": now()})
        stored = merged.to_mongo()
        update = {key: stored[key] for key in (*changes, "updated_at")}
        return await self._find_and_update(user_id, resource_id, {"$set": update})

    async def delete_owned(self, user_id: UUID, resource_id: UUID) -> None:
        """Permanently delete the document."""
        await self.get_owned(user_id, resource_id)
        await self._collection.delete_one({"_id": resource_id, "owner_id": user_id})
        logger.debug("resource_deleted", resource=self.label, resource_id=str(resource_id))

    async def _find_and_update(self, user_id: UUID, resource_id: UUID, update: dict[str, Any]) -> T:
        doc = await self._collection.find_one_and_update(
            {"_id": resource_id, "owner_id": user_id}, update, return_document=ReturnDocument.AFTER
        )
        if doc is None:  # Deleted between the ownership check and the update
            raise NotFoundError(f"{self.label} not found")
        return self.model.model_validate(doc)

    def _build(self, data: dict[str, Any]) -> T:
        try:
            return self.model.model_validate(data)
        except PydanticValidationError as e:
            errors = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
            raise ValidationError(f"Invalid {self.label.lower()} data: {errors}") from None

    def _strip_protected(self, fields: dict[str, Any]) -> dict[str, Any]:
        return {
            key: value for key, value in fields.items() if key in self.model.model_fields and key not in PROTECTED_FIELDS
        }
