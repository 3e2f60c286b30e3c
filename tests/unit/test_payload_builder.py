"""
Request header and binary stream object descriptor tests.
"""

import pytest

from config import TaskIdLookupMode
from exceptions import TenantIdMissingError
from services.metadata_normalizer import normalize_metadata
from services.payload_builder import build_binary_stream_object, create_request_headers, resolve_task_id
from tests.factories.model_factories import make_blob_metadata_result, make_raw_metadata


class TestCreateRequestHeaders:

    def test_values_taken_from_metadata(self, notifier_config, raw_metadata):
        headers = create_request_headers(notifier_config, normalize_metadata(raw_metadata))
        assert headers.tenant_id == raw_metadata["x_rdp_TenantId"]
        assert headers.client_id == raw_metadata["x_rdp_clientid"]
        assert headers.user_id == raw_metadata["x_rdp_userid"]
        assert headers.user_roles == raw_metadata["x_rdp_userroles"]

    def test_defaults_used_when_absent(self, notifier_config):
        headers = create_request_headers(notifier_config, {"x-rdp-tenantid": "T1"})
        assert headers.client_id == notifier_config.default_client_id
        assert headers.user_id == notifier_config.default_user_id
        assert headers.user_roles == notifier_config.default_user_roles

    def test_defaults_used_when_empty(self, notifier_config):
        headers = create_request_headers(notifier_config, {"x-rdp-tenantid": "T1", "x-rdp-userid": ""})
        assert headers.user_id == notifier_config.default_user_id

    def test_http_header_names(self, notifier_config):
        headers = create_request_headers(notifier_config, {"x-rdp-tenantid": "T1"})
        assert headers.to_http_headers() == {
            "Content-Type": "application/json",
            "x-rdp-version": notifier_config.rdp_version,
            "x-rdp-clientId": notifier_config.default_client_id,
            "x-rdp-tenantId": "T1",
            "x-rdp-userId": notifier_config.default_user_id,
            "x-rdp-userRoles": notifier_config.default_user_roles,
        }

    def test_ownership_data_sent_when_present(self, notifier_config):
        headers = create_request_headers(
            notifier_config, {"x-rdp-tenantid": "T1", "x-rdp-ownershipdata": "owner-7"}
        )
        assert headers.to_http_headers()["x-rdp-ownershipData"] == "owner-7"

    @pytest.mark.parametrize("metadata", [{}, {"x-rdp-tenantid": ""}, {"x_rdp_tenantid": "not-normalized"}])
    def test_missing_tenant_raises(self, notifier_config, metadata):
        with pytest.raises(TenantIdMissingError, match="TenantId is not present in asset metadata"):
            create_request_headers(notifier_config, metadata)


class TestResolveTaskId:

    def test_literal_mode_reads_literal_key(self, invocation_id):
        metadata = normalize_metadata({"TASK_ID_METADATA_PROPERTY": "task-9", "x_rdp_taskid": "other"})
        assert resolve_task_id(metadata, invocation_id) == "task-9"

    def test_literal_mode_ignores_taskid_property(self, invocation_id):
        metadata = normalize_metadata({"x_rdp_taskid": "task-9"})
        assert resolve_task_id(metadata, invocation_id, TaskIdLookupMode.LITERAL) == invocation_id

    def test_property_value_mode(self, invocation_id):
        metadata = normalize_metadata({"x_rdp_taskid": "task-9"})
        assert resolve_task_id(metadata, invocation_id, TaskIdLookupMode.PROPERTY_VALUE) == "task-9"

    def test_falls_back_to_invocation_id(self, invocation_id):
        assert resolve_task_id({}, invocation_id, TaskIdLookupMode.PROPERTY_VALUE) == invocation_id


class TestBuildBinaryStreamObject:

    def _build(self, config, blob, invocation_id, **kwargs):
        headers = create_request_headers(config, normalize_metadata(blob.metadata))
        return build_binary_stream_object(blob, headers, invocation_id, **kwargs)

    def test_object_id_and_original_filename_from_metadata(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(
            name="upload.jpg",
            metadata=make_raw_metadata(binarystreamobjectid="B1", originalfilename="f.jpg")
        )
        envelope = self._build(notifier_config, blob, invocation_id)
        properties = envelope.binary_stream_object.properties
        assert envelope.object_id == "B1"
        assert properties["originalFileName"] == "f.jpg"
        assert "originalfilename" not in properties

    def test_fallbacks(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(name="folder/sub/pic.png", metadata={"x_rdp_tenantid": "T1"})
        envelope = self._build(notifier_config, blob, invocation_id)
        properties = envelope.binary_stream_object.properties
        assert envelope.object_id == invocation_id
        assert envelope.task_id == invocation_id
        assert properties["originalFileName"] == "pic.png"
        assert properties["objectKey"] == "folder/sub/pic.png"
        assert properties["fullObjectPath"] == "folder/sub/pic.png"

    def test_fixed_properties(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(metadata=make_raw_metadata(x_rdp_ownershipdata="owner-1"))
        envelope = self._build(notifier_config, blob, invocation_id, content_length=2048)
        properties = envelope.binary_stream_object.properties
        assert properties["contentSize"] == 2048
        assert properties["user"] == blob.metadata["x_rdp_userid"]
        assert properties["role"] == blob.metadata["x_rdp_userroles"]
        assert properties["ownershipData"] == "owner-1"
        assert envelope.binary_stream_object.type == "binarystreamobject"

    def test_content_size_omitted_when_unknown(self, notifier_config, blob_metadata_result, invocation_id):
        envelope = self._build(notifier_config, blob_metadata_result, invocation_id)
        assert "contentSize" not in envelope.binary_stream_object.properties

    def test_custom_metadata_passed_through(self, notifier_config, blob_metadata_result, invocation_id):
        envelope = self._build(notifier_config, blob_metadata_result, invocation_id)
        properties = envelope.binary_stream_object.properties
        assert properties["Campaign"] == blob_metadata_result.metadata["Campaign"]
        assert "campaign" not in properties
        assert not any(key.startswith("x-rdp-") or key.startswith("x_rdp_") for key in properties)

    def test_metadata_cannot_override_fixed_properties(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(metadata=make_raw_metadata(user="intruder", objectKey="other"))
        envelope = self._build(notifier_config, blob, invocation_id)
        properties = envelope.binary_stream_object.properties
        assert properties["user"] == blob.metadata["x_rdp_userid"]
        assert properties["objectKey"] == blob.name
        assert "objectkey" not in properties

    def test_case_variants_of_fixed_properties_skipped(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(
            name="a.jpg",
            metadata={"x_rdp_tenantid": "T1", "objectKey": "other", "contentSize": "1", "Campaign": "c"}
        )
        envelope = self._build(notifier_config, blob, invocation_id, content_length=5)
        properties = envelope.binary_stream_object.properties
        assert properties["objectKey"] == "a.jpg"
        assert properties["contentSize"] == 5
        assert properties["Campaign"] == "c"
        assert not {"objectkey", "contentsize", "campaign", "x_rdp_tenantid"} & set(properties)

    def test_original_filename_in_any_case_not_passed_through(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(metadata=make_raw_metadata(OriginalFileName="f.jpg"))
        envelope = self._build(notifier_config, blob, invocation_id)
        properties = envelope.binary_stream_object.properties
        assert properties["originalFileName"] == "f.jpg"
        assert "OriginalFileName" not in properties

    def test_blob_metadata_not_mutated(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(metadata=make_raw_metadata(OriginalFileName="keep.jpg"))
        snapshot = dict(blob.metadata)
        self._build(notifier_config, blob, invocation_id)
        assert blob.metadata == snapshot

    def test_tenant_survives_round_trip_to_headers(self, notifier_config, invocation_id):
        blob = make_blob_metadata_result(metadata=make_raw_metadata(tenant_id="tenant-42"))
        headers = create_request_headers(notifier_config, normalize_metadata(blob.metadata))
        assert headers.to_http_headers()["x-rdp-tenantId"] == "tenant-42"

    def test_wire_format(self, notifier_config, blob_metadata_result, invocation_id):
        envelope = self._build(notifier_config, blob_metadata_result, invocation_id, content_length=10)
        payload = envelope.to_payload()
        assert set(payload) == {"clientAttributes", "binaryStreamObject"}
        assert payload["clientAttributes"]["taskId"]["values"] == [
            {"locale": "en-US", "source": "internal", "value": invocation_id}
        ]
        assert payload["binaryStreamObject"]["id"] == envelope.object_id
        assert list(payload["binaryStreamObject"]["properties"])[:4] == [
            "objectKey", "originalFileName", "fullObjectPath", "contentSize"
        ]
