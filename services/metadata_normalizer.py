"""
Blob Metadata Key Normalization.

Azure metadata keys must be C# identifiers, so uploaders write the RDP
header names with underscores (x_rdp_tenantid). The RDP API and the rest
of the notifier use the canonical, hyphenated, lowercase form.

Contract:
    normalize_metadata_key(key):
        - every occurrence of 'x_rdp_' becomes 'x-rdp-'
        - the result is lowercased
        - pure and idempotent: normalize(normalize(k)) == normalize(k)

    normalize_metadata(metadata):
        - applies normalize_metadata_key to every key, values untouched
        - None or empty input gives {}
        - keys colliding after normalization: the later one wins

Examples:
    >>> normalize_metadata_key('x_rdp_TenantId')
    'x-rdp-tenantid'
    >>> normalize_metadata_key('OriginalFileName')
    'originalfilename'
"""

from typing import Dict, Mapping, Optional

from config.defaults import MetadataDefaults
from exceptions import ContractViolationError


def normalize_metadata_key(key: str) -> str:
    """Rewrite the escaping prefix to the canonical prefix and lowercase."""
    if not isinstance(key, str):
        raise ContractViolationError(f"Metadata key must be str, got {type(key).__name__}")
    # Lowercase first so X_RDP_ is rewritten as well
    return key.lower().replace(MetadataDefaults.ESCAPING_PREFIX, MetadataDefaults.CANONICAL_PREFIX)


def normalize_metadata(metadata: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Normalize every key of a metadata mapping."""
    if not metadata:
        return {}
    return {normalize_metadata_key(key): value for key, value in metadata.items()}
