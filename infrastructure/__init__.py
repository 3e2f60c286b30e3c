"""
Infrastructure Package - Lazy Loading Implementation.

Adapters to the notifier's external collaborators:
    - BlobMetadataRepository: Azure Storage metadata lookups
    - RdpApiClient: RDP binary stream object REST API
    - RepositoryFactory: builds both from a NotifierConfig

Imports are deferred until first access so that loading function_app.py
never touches the Azure SDK or reads configuration before the Functions host
has applied app settings.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .blob import BlobMetadataRepository as _BlobMetadataRepository
    from .blob import IBlobMetadataRepository as _IBlobMetadataRepository
    from .rdp_client import RdpApiClient as _RdpApiClient
    from .rdp_client import IRdpApiClient as _IRdpApiClient


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name == "RepositoryFactory":
        from .factory import RepositoryFactory
        return RepositoryFactory
    elif name == "BlobMetadataRepository":
        from .blob import BlobMetadataRepository
        return BlobMetadataRepository
    elif name == "IBlobMetadataRepository":
        from .blob import IBlobMetadataRepository
        return IBlobMetadataRepository
    elif name == "RdpApiClient":
        from .rdp_client import RdpApiClient
        return RdpApiClient
    elif name == "IRdpApiClient":
        from .rdp_client import IRdpApiClient
        return IRdpApiClient
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "RepositoryFactory",
    "BlobMetadataRepository",
    "IBlobMetadataRepository",
    "RdpApiClient",
    "IRdpApiClient",
]
