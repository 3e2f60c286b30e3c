"""
Unit test fixtures — factory-built models.
"""

import pytest

from tests.factories.model_factories import (
    make_config,
    make_raw_metadata,
    make_blob_metadata_result,
    make_blob_created_event,
)


@pytest.fixture
def notifier_config():
    """Return a randomized NotifierConfig (default policies)."""
    return make_config()


@pytest.fixture
def raw_metadata():
    """Return randomized raw blob metadata with a tenant id."""
    return make_raw_metadata()


@pytest.fixture
def blob_metadata_result():
    """Return a randomized BlobMetadataResult."""
    return make_blob_metadata_result()


@pytest.fixture
def blob_created_event():
    """Return a randomized BlobCreatedEvent for a blob at the container root."""
    return make_blob_created_event()
