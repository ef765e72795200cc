"""Shared pydantic configuration for domain entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StorefrontModel(BaseModel):
    """Frozen model that reads and writes the Storefront API's camelCase names."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    def to_api(self) -> dict:
        """Serialize with upstream field names, ready for a JSON response."""
        return self.model_dump(by_alias=True, mode="json")
