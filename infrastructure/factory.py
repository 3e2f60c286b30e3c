# ============================================================================
# REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for adapter instances
# PURPOSE: Build the storage repository and REST client for one invocation
# EXPORTS: RepositoryFactory
# DEPENDENCIES: infrastructure.blob, infrastructure.rdp_client, config
# ============================================================================

"""
Repository Factory - Central Creation Point

Single point for instantiating the notifier's external adapters from a
NotifierConfig. Tests bypass it and hand fakes to UploadNotifier directly.
"""

from config import NotifierConfig
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "RepositoryFactory")


class RepositoryFactory:
    """
    Factory for the adapters used by UploadNotifier.

    Example:
        repo = RepositoryFactory.create_blob_metadata_repository(config)
        client = RepositoryFactory.create_rdp_client(config)
    """

    @staticmethod
    def create_blob_metadata_repository(config: NotifierConfig) -> 'BlobMetadataRepository':
        """
        Create the metadata repository for the configured storage account.

        Raises:
            MetadataFetchError: Connection string rejected by the SDK
        """
        from .blob import BlobMetadataRepository

        logger.debug("Creating blob metadata repository")
        return BlobMetadataRepository.from_connection_string(config.storage_connection_string)

    @staticmethod
    def create_rdp_client(config: NotifierConfig) -> 'RdpApiClient':
        """Create the RDP API client for the configured host and port."""
        from .rdp_client import RdpApiClient

        logger.debug(f"Creating RDP API client for {config.rdp_base_url}")
        return RdpApiClient(config, verbose_logging=config.verbose_logging)
