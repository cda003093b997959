from collections.abc import Mapping

from pydantic import BaseModel

# Inbound header names consumed by the relay, in the order they are forwarded.
RELAY_HEADERS = (
    "Content-Type",
    "X-UploadType",
    "X-FileName",
    "X-ItemType",
    "X-PendingId",
    "X-ItemId",
)


class UploadMetadata(BaseModel):
    upload_type: str = "raw"
    file_name: str = ""
    item_type: str = "libraryitem"
    content_type: str = "content/unknown"
    pending_id: str = ""
    item_id: str = ""

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "UploadMetadata":
        """Pick the relay headers out of an inbound request.

        A header that is missing or empty keeps the field default.
        """
        fields = {
            "upload_type": headers.get("x-uploadtype"),
            "file_name": headers.get("x-filename"),
            "item_type": headers.get("x-itemtype"),
            "content_type": headers.get("content-type"),
            "pending_id": headers.get("x-pendingid"),
            "item_id": headers.get("x-itemid"),
        }
        return cls(**{name: value for name, value in fields.items() if value})

    def to_upstream_headers(self) -> dict[str, str]:
        return {
            "X-UploadType": self.upload_type,
            "X-FileName": self.file_name,
            "X-ItemType": self.item_type,
            "Content-Type": self.content_type,
            "X-PendingId": self.pending_id,
            "X-ItemId": self.item_id,
        }


class HealthResponse(BaseModel):
    status: str
    service: str
