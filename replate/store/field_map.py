"""Translation between the client-facing field names and a backend's own schema."""

from typing import Any


class FieldMap:
    """Bidirectional rename of record keys. Keys not in the map pass through unchanged."""

    def __init__(self, client_to_external: dict[str, str] | None = None):
        self._to_external = dict(client_to_external or {})
        self._to_client = {ext: cli for cli, ext in self._to_external.items()}

    def external_name(self, client_field: str) -> str:
        return self._to_external.get(client_field, client_field)

    def to_external(self, document: dict[str, Any]) -> dict[str, Any]:
        return {self.external_name(k): v for k, v in document.items()}

    def to_client(self, record: dict[str, Any]) -> dict[str, Any]:
        return {self._to_client.get(k, k): v for k, v in record.items()}


# File store keeps client names as-is
IDENTITY = FieldMap()

# Spreadsheet listing columns
SHEET_LISTING_FIELDS = FieldMap(
    {
        "id": "listId",
        "name": "resname",
        "quantity": "qty",
        "safeBy": "safeby",
    }
)
