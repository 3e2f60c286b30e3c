# ============================================================================
# BLOB METADATA REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage metadata access
# PURPOSE: Read the key-value metadata of an uploaded blob
# EXPORTS: IBlobMetadataRepository, BlobMetadataRepository, get_blob_metadata_repository
# DEPENDENCIES: azure-storage-blob, azure-core, core.models
# ============================================================================

"""
Blob Metadata Repository.

Single point of access to the media storage account. The connection string
comes from configuration (ENV_STORAGE_CONNECTION_STRING); no credential is
embedded in code.

Only metadata is read. Blob content is never downloaded.

Usage:
    from infrastructure.blob import get_blob_metadata_repository

    repo = get_blob_metadata_repository(config.storage_connection_string)
    result = repo.get_blob_metadata('media-assets', 'photo.jpg')
    tenant = result.metadata.get('x_rdp_tenantid')
"""

# ============================================================================
# IMPORTS - Top of file for fail-fast behavior
# ============================================================================

from abc import ABC, abstractmethod
from typing import Dict, Optional

# Azure SDK imports - These will fail fast if not installed
from azure.storage.blob import BlobServiceClient, ContainerClient
from azure.core.exceptions import AzureError, ResourceNotFoundError

# Application imports
from core.models import BlobMetadataResult
from exceptions import MetadataFetchError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BlobMetadataRepository")


# ============================================================================
# BLOB METADATA REPOSITORY INTERFACE
# ============================================================================

class IBlobMetadataRepository(ABC):
    """
    Interface for blob metadata lookups.

    Enables dependency injection and testing/mocking of storage access.
    """

    @abstractmethod
    def get_blob_metadata(self, container: str, blob_name: str) -> Optional[BlobMetadataResult]:
        """
        Read blob name and metadata.

        Returns:
            BlobMetadataResult, or None when storage returned no properties

        Raises:
            MetadataFetchError: Blob missing or storage call failed
        """
        pass


# ============================================================================
# BLOB METADATA REPOSITORY IMPLEMENTATION
# ============================================================================

class BlobMetadataRepository(IBlobMetadataRepository):
    """
    Azure Blob Storage implementation of IBlobMetadataRepository.

    Container clients are cached per repository instance. A repository is
    built per invocation from the invocation's configuration.
    """

    def __init__(self, blob_service: BlobServiceClient):
        self.blob_service = blob_service
        self._container_clients: Dict[str, ContainerClient] = {}

    @classmethod
    def from_connection_string(cls, connection_string: str) -> 'BlobMetadataRepository':
        """
        Build from a storage connection string.

        Raises:
            MetadataFetchError: Connection string rejected by the SDK
        """
        try:
            blob_service = BlobServiceClient.from_connection_string(connection_string)
        except ValueError as e:
            # Message is not logged verbatim; it can echo the connection string
            logger.error("Storage connection string rejected by azure-storage-blob")
            raise MetadataFetchError(f"Invalid storage connection string: {type(e).__name__}") from e

        logger.debug(f"BlobMetadataRepository initialized for account: {blob_service.account_name}")
        return cls(blob_service)

    def _get_container_client(self, container: str) -> ContainerClient:
        """Get or create cached container client."""
        if container not in self._container_clients:
            self._container_clients[container] = self.blob_service.get_container_client(container)
        return self._container_clients[container]

    def get_blob_metadata(self, container: str, blob_name: str) -> Optional[BlobMetadataResult]:
        """
        Read blob name and metadata.

        Args:
            container: Container name
            blob_name: Blob name within the container

        Returns:
            BlobMetadataResult, or None when storage returned no properties

        Raises:
            MetadataFetchError: Blob missing or storage call failed
        """
        try:
            blob_client = self._get_container_client(container).get_blob_client(blob_name)

            logger.debug(f"Reading metadata: {container}/{blob_name}")
            props = blob_client.get_blob_properties()

        except ResourceNotFoundError as e:
            logger.error(f"Blob not found: {container}/{blob_name}")
            raise MetadataFetchError(
                f"Blob not found: {container}/{blob_name}",
                container_name=container,
                blob_name=blob_name
            ) from e
        except AzureError as e:
            logger.error(f"Error fetching metadata for {container}/{blob_name}: {e}")
            raise MetadataFetchError(
                f"Error fetching metadata for {container}/{blob_name}: {e}",
                container_name=container,
                blob_name=blob_name
            ) from e

        if props is None:
            logger.warning(f"No properties returned for {container}/{blob_name}")
            return None

        result = BlobMetadataResult(
            container_name=container,
            name=props.name or blob_name,
            metadata=dict(props.metadata or {})
        )
        logger.debug(f"Read {len(result.metadata)} metadata keys from {container}/{blob_name}")
        return result


# ============================================================================
# FACTORY FUNCTION
# ============================================================================

def get_blob_metadata_repository(connection_string: str) -> BlobMetadataRepository:
    """
    Factory function for dependency injection.

    Returns:
        BlobMetadataRepository bound to the given storage account
    """
    return BlobMetadataRepository.from_connection_string(connection_string)
