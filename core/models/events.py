"""
Event Grid Event Models.

Typed view of the Microsoft.Storage.BlobCreated event that triggers the
notifier, plus the blob identity extracted from its subject.

Exports:
    BlobCreatedEventData: The event's data payload (contentLength, url)
    BlobCreatedEvent: Subject, id, type and data of the event
    BlobLocation: Container and blob name parsed from the subject
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class BlobCreatedEventData(BaseModel):
    """
    Data block of a BlobCreated event.

    Only contentLength and url are used; everything else Event Grid sends
    (api, eTag, blobType, ...) is kept as extra fields for verbose logging.
    """
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    content_length: Optional[int] = Field(
        default=None,
        alias="contentLength",
        description="Size of the uploaded blob in bytes"
    )
    url: Optional[str] = Field(default=None, description="Blob URL")


class BlobCreatedEvent(BaseModel):
    """
    Event Grid notification for an uploaded blob.

    Subject format:
        /blobServices/default/containers/{container}/blobs/{blob}
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, description="Event Grid event id")
    subject: str = Field(..., description="Slash-delimited resource path of the blob")
    event_type: Optional[str] = Field(default=None, alias="eventType")
    topic: Optional[str] = None
    data: BlobCreatedEventData = Field(default_factory=BlobCreatedEventData)

    @classmethod
    def from_event_grid(cls, event: Any) -> 'BlobCreatedEvent':
        """
        Build from an azure.functions.EventGridEvent.

        Args:
            event: func.EventGridEvent (or any object with the same attributes)
        """
        data = event.get_json() or {}
        return cls(
            id=event.id,
            subject=event.subject or "",
            event_type=event.event_type,
            topic=event.topic,
            data=BlobCreatedEventData.model_validate(data),
        )

    def to_log_dict(self) -> Dict[str, Any]:
        """Event as a JSON-friendly dict with wire field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BlobLocation(BaseModel):
    """Container and blob name parsed from an event subject."""
    model_config = ConfigDict(frozen=True)

    container_name: str
    blob_name: str
    subject: str
