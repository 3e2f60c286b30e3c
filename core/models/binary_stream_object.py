"""
Binary Stream Object Models.

The descriptor posted to the RDP API's binarystreamobjectservice/create
endpoint, and the header set that accompanies it.

Wire format:
    {
        "clientAttributes": {
            "taskId": {"values": [{"locale": "en-US", "source": "internal", "value": "<taskId>"}]}
        },
        "binaryStreamObject": {
            "id": "<objectId>",
            "type": "binarystreamobject",
            "properties": {
                "objectKey": ..., "originalFileName": ..., "fullObjectPath": ...,
                "contentSize": ..., "user": ..., "role": ..., "ownershipData": ...,
                <pass-through metadata>
            }
        }
    }

Exports:
    RequestHeaders: Outbound HTTP headers
    TaskIdValue, TaskIdAttribute, ClientAttributes: taskId attribute block
    BinaryStreamObject: The object block
    BinaryStreamObjectEnvelope: Complete request body
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from config.defaults import RdpDefaults


class RequestHeaders(BaseModel):
    """
    Headers for the create call.

    Tenant, client, user and roles are always present; ownership data only
    when the blob carries it.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    content_type: str = Field(default=RdpDefaults.CONTENT_TYPE, alias="Content-Type")
    rdp_version: str = Field(default=RdpDefaults.API_VERSION, alias="x-rdp-version")
    client_id: str = Field(..., alias="x-rdp-clientId")
    tenant_id: str = Field(..., alias="x-rdp-tenantId")
    user_id: str = Field(..., alias="x-rdp-userId")
    user_roles: str = Field(..., alias="x-rdp-userRoles")
    ownership_data: Optional[str] = Field(default=None, alias="x-rdp-ownershipData")

    def to_http_headers(self) -> Dict[str, str]:
        """Headers keyed by their HTTP names, absent ones omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TaskIdValue(BaseModel):
    locale: str = RdpDefaults.TASK_ID_LOCALE
    source: str = RdpDefaults.TASK_ID_SOURCE
    value: str


class TaskIdAttribute(BaseModel):
    values: List[TaskIdValue]


class ClientAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_id: TaskIdAttribute = Field(..., alias="taskId")


class BinaryStreamObject(BaseModel):
    """
    Object block of the descriptor.

    `properties` is an open mapping: fixed keys (objectKey, originalFileName,
    ...) plus whatever custom metadata the uploader attached.
    """

    id: str
    type: str = RdpDefaults.OBJECT_TYPE
    properties: Dict[str, Any] = Field(default_factory=dict)


class BinaryStreamObjectEnvelope(BaseModel):
    """Complete request body of the create call."""
    model_config = ConfigDict(populate_by_name=True)

    client_attributes: ClientAttributes = Field(..., alias="clientAttributes")
    binary_stream_object: BinaryStreamObject = Field(..., alias="binaryStreamObject")

    @property
    def task_id(self) -> str:
        return self.client_attributes.task_id.values[0].value

    @property
    def object_id(self) -> str:
        return self.binary_stream_object.id

    def to_payload(self) -> Dict[str, Any]:
        """Body as a dict with wire (camelCase) field names."""
        return self.model_dump(by_alias=True)
