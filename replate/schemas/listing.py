"""Listing request/response schemas - the stable client-facing contract."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ListingFields(BaseModel):
    """Caller-editable listing fields. Missing or null values read as empty strings."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    role: str = ""
    name: str = ""
    phone: str = ""
    address: str = ""
    type: str = ""
    quantity: str = Field("", validation_alias=AliasChoices("quantity", "qty"))
    notes: str = ""
    safe_by: str = Field(
        "",
        validation_alias=AliasChoices("safeBy", "safeby", "safe_by"),
        serialization_alias="safeBy",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ListingCreate(ListingFields):
    """POST body. createdBy/createdAt are not fields here, so client values are dropped."""


class Listing(ListingFields):
    """Stored listing as returned to clients."""

    id: int
    created_by: str = Field("", alias="createdBy")
    created_at: str = Field("", alias="createdAt")

    def to_document(self) -> dict[str, Any]:
        """Client-facing document (camelCase keys) used for storage and notifications."""
        return self.model_dump(by_alias=True)


class ListingCreatedResponse(BaseModel):
    message: str
    data: Listing
