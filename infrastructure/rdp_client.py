# ============================================================================
# RDP API CLIENT
# ============================================================================
# STATUS: Infrastructure - HTTP client for the RDP binary stream object API
# PURPOSE: Register an uploaded asset with one POST and interpret the answer
# EXPORTS: IRdpApiClient, RdpApiClient
# DEPENDENCIES: httpx, config, core.models
# ============================================================================
"""
RDP API Client.

Handles HTTP communication with the RDP API server. One synchronous POST per
invocation, no retry: redelivery is Event Grid's job.

Success requires BOTH:
    - HTTP 200
    - response.status == "success" (case-insensitive) in the JSON body

Usage:
    from infrastructure.rdp_client import RdpApiClient

    client = RdpApiClient(config)
    result = client.create_binary_stream_object(headers, envelope)
    logger.info(f"Registered: {result.status}")
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from config import NotifierConfig
from config.defaults import RdpDefaults
from core.models import BinaryStreamObjectEnvelope, RdpApiResponse, RequestHeaders
from exceptions import MalformedResponseError, RestCallError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "RdpApiClient")


class IRdpApiClient(ABC):
    """Interface for the create call, so the notifier can be tested without HTTP."""

    @abstractmethod
    def create_binary_stream_object(
        self,
        headers: RequestHeaders,
        envelope: BinaryStreamObjectEnvelope
    ) -> RdpApiResponse:
        """
        Register the descriptor.

        Raises:
            RestCallError: Transport error, non-200, or unsuccessful status
            MalformedResponseError: Body is not the expected JSON
        """
        pass


class RdpApiClient(IRdpApiClient):
    """
    Client for binarystreamobjectservice/create.

    Handles:
    - URL construction from host/port configuration and the tenant id
    - One POST with the descriptor as JSON
    - Response parsing into a typed Pydantic model
    """

    def __init__(
        self,
        config: NotifierConfig,
        transport: Optional[httpx.BaseTransport] = None,
        verbose_logging: bool = False
    ):
        """
        Args:
            config: Invocation configuration
            transport: Optional httpx transport (tests pass httpx.MockTransport)
            verbose_logging: Log request options and response headers
        """
        self._config = config
        self._base_url = config.rdp_base_url
        self._transport = transport
        self._verbose = verbose_logging

    def build_url(self, tenant_id: str) -> str:
        """Create endpoint for a tenant; the tenant id is path-escaped."""
        path = RdpDefaults.CREATE_PATH_TEMPLATE.format(tenant_id=quote(tenant_id, safe=''))
        return f"{self._base_url}{path}"

    def create_binary_stream_object(
        self,
        headers: RequestHeaders,
        envelope: BinaryStreamObjectEnvelope
    ) -> RdpApiResponse:
        """
        POST the descriptor to the tenant's create endpoint.

        Returns:
            RdpApiResponse with a success status

        Raises:
            RestCallError: Transport error, non-200, empty body or unsuccessful status
            MalformedResponseError: Body is not JSON or has no response.status
        """
        url = self.build_url(headers.tenant_id)
        http_headers = headers.to_http_headers()
        body = envelope.to_payload()
        task_id = envelope.task_id

        if self._verbose:
            logger.info(
                f"Http request options: POST {url}",
                extra={'custom_dimensions': {
                    'url': url,
                    'method': 'POST',
                    'headers': http_headers,
                    'task_id': task_id
                }}
            )

        logger.info(f"Calling RDP create endpoint: {url} (taskId {task_id})")

        try:
            with httpx.Client(transport=self._transport) as client:
                response = client.post(url, headers=http_headers, content=json.dumps(body))
        except httpx.HTTPError as e:
            logger.error(f"Error while calling REST API: {e}")
            raise RestCallError(f"Error while calling REST API: {e}") from e

        if self._verbose:
            logger.info(
                f"Status: {response.status_code}",
                extra={'custom_dimensions': {'response_headers': dict(response.headers)}}
            )

        return self._interpret_response(response, task_id)

    def _interpret_response(self, response: httpx.Response, task_id: str) -> RdpApiResponse:
        """Map an HTTP response to RdpApiResponse or raise."""
        response_body = response.text

        if response.status_code != 200:
            raise RestCallError(
                f"RDP API returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response_body
            )

        if not response_body:
            raise RestCallError(
                "RDP API returned HTTP 200 with an empty body",
                status_code=response.status_code,
                body=response_body
            )

        logger.info(f"Using taskId {task_id}, RDP API Response: {response_body}")

        try:
            data: Any = json.loads(response_body)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"RDP API response is not JSON: {e}",
                status_code=response.status_code,
                body=response_body
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"RDP API response is a JSON {type(data).__name__}, expected an object",
                status_code=response.status_code,
                body=response_body
            )

        try:
            result = RdpApiResponse.model_validate(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                f"RDP API response has an unexpected shape: {e.error_count()} validation errors",
                status_code=response.status_code,
                body=response_body
            ) from e

        result.status_code = response.status_code
        result.raw_body = response_body

        if result.status is None:
            raise MalformedResponseError(
                "RDP API response has no response.status",
                status_code=response.status_code,
                body=response_body
            )

        if not result.is_success:
            raise RestCallError(
                f"RDP API reported status '{result.status}'",
                status_code=response.status_code,
                body=response_body
            )

        return result
