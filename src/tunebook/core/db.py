from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pymongo.asynchronous.cursor import AsyncCursor


def _camel_choices(name: str) -> AliasChoices:
    return AliasChoices(name, to_camel(name))


class CamelModel(BaseModel):
    """Model rendered with camelCase keys in API responses, accepting both spellings on input."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=_camel_choices, serialization_alias=to_camel),
        json_schema_serialization_defaults_required=True,
    )


class MongoModel(CamelModel):
    """Stored document: `id` is kept as `_id` in MongoDB and exposed as `uid` to clients."""

    id: UUID = Field(
        validation_alias=AliasChoices("_id", "id", "uid"),
        serialization_alias="uid",
        default_factory=uuid4,
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]
