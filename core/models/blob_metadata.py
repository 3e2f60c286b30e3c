"""
Blob Metadata Models.

Exports:
    BlobMetadataResult: Name and raw metadata of one blob
"""

from typing import Dict
from pydantic import BaseModel, Field


class BlobMetadataResult(BaseModel):
    """
    Result of a metadata lookup against Azure Storage.

    `metadata` holds the keys exactly as stored on the blob; normalisation
    happens in services.metadata_normalizer.
    """

    container_name: str
    name: str = Field(..., description="Blob name (object key) within the container")
    metadata: Dict[str, str] = Field(default_factory=dict)
