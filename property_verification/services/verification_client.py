"""Verification client - talks to the external document verification service."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from property_verification.core.exceptions import (
    VerificationAPIError,
    VerificationConfigError,
    VerificationTransportError,
)
from property_verification.core.settings import VerificationSettings
from property_verification.enums import DocumentType
from property_verification.models import (
    UploadedFile,
    VerificationListResponse,
    VerificationResult,
)
from property_verification.services.mock_verification import MockVerificationGenerator

logger = logging.getLogger(__name__)

VERIFY_PATH = "/api/v1/verify"
LIST_PATH = "/api/v1/verifications"
HEALTH_PATH = "/health"

GENERIC_FAILURE = "Verification request failed"


def _error_message(response: httpx.Response) -> str:
    """
    Build the error message for a non-2xx response.

    Args:
        response (httpx.Response): The failed response.

    Returns:
        str: The server detail when present, otherwise a generic message.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        detail = data.get("detail")
        if isinstance(detail, str) and detail:
            return detail

    return f"HTTP error! status: {response.status_code}"


class VerificationClient:
    """Client for the verification endpoint, with a demo-mode fallback."""

    def __init__(
        self,
        settings: VerificationSettings,
        mock: MockVerificationGenerator | None = None,
    ) -> None:
        """
        Initialize the verification client.

        Args:
            settings (VerificationSettings): Endpoint and timeout configuration.
            mock (MockVerificationGenerator | None): Generator used in demo mode.
        """
        self.settings = settings
        self.mock = mock or MockVerificationGenerator(
            delay_min=settings.mock_delay_min,
            delay_max=settings.mock_delay_max,
        )

    @property
    def base_url(self) -> str | None:
        return self.settings.base_url

    @property
    def demo_mode(self) -> bool:
        """
        Whether submissions are answered by the mock generator.

        Returns:
            bool: True if no endpoint is configured.
        """
        return self.settings.demo_mode

    def _require_base_url(self) -> str:
        if self.base_url is None:
            raise VerificationConfigError("Verification API URL not configured")
        return self.base_url

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send one request, translating transport failures.

        Args:
            method (str): HTTP method.
            url (str): Absolute URL.
            **kwargs: Extra arguments for httpx.

        Returns:
            httpx.Response: A successful response.

        Raises:
            VerificationTransportError: On network failure or timeout.
            VerificationAPIError: On a non-2xx response.
        """
        try:
            async with httpx.AsyncClient(timeout=self.settings.request_timeout) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Verification request to {url} timed out: {e}")
            raise VerificationTransportError(GENERIC_FAILURE) from e
        except httpx.RequestError as e:
            logger.error(f"Verification request to {url} failed: {e}")
            raise VerificationTransportError(GENERIC_FAILURE) from e

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"Verification API error {response.status_code} from {url}: {message}")
            raise VerificationAPIError(message=message, status_code=response.status_code)

        return response

    @staticmethod
    def _parse_result(response: httpx.Response) -> VerificationResult:
        try:
            return VerificationResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Invalid verification result payload: {e}")
            raise VerificationAPIError(
                message="Invalid response from verification service",
                status_code=response.status_code,
            ) from e

    async def verify_document(
        self,
        file: UploadedFile,
        document_type: DocumentType,
    ) -> VerificationResult:
        """
        Submit a document for verification.

        Issues a single multipart POST. There is no automatic retry; a retry is
        a new submission.

        Args:
            file (UploadedFile): An accepted file.
            document_type (DocumentType): Document type tag.

        Returns:
            VerificationResult: The service result, or a demo-mode result.

        Raises:
            VerificationConfigError: If no endpoint is configured and demo mode is disabled.
            VerificationTransportError: On network failure or timeout.
            VerificationAPIError: On a non-2xx response.
        """
        if self.demo_mode:
            if not self.settings.allow_demo_mode:
                raise VerificationConfigError(
                    "Verification API URL not configured and demo mode is disabled"
                )
            logger.warning("Verification API URL not set, using mock response")
            return await self.mock.verify(document_type)

        url = f"{self.base_url}{VERIFY_PATH}"
        logger.info(f"Submitting {document_type} document {file.filename!r} ({file.size} bytes)")

        response = await self._request(
            "POST",
            url,
            files={"file": (file.filename, file.content, file.content_type)},
            data={"document_type": str(document_type)},
        )
        result = self._parse_result(response)
        logger.info(
            f"Verification {result.verification_id} completed: {result.verification_status}"
        )
        return result

    async def get_verification(self, verification_id: str) -> VerificationResult:
        """
        Look up a verification by id.

        Args:
            verification_id (str): Identifier assigned by the service.

        Returns:
            VerificationResult: The stored result.

        Raises:
            VerificationConfigError: If no endpoint is configured.
        """
        base_url = self._require_base_url()
        response = await self._request("GET", f"{base_url}{VERIFY_PATH}/{verification_id}")
        return self._parse_result(response)

    async def list_verifications(self, skip: int = 0, limit: int = 20) -> VerificationListResponse:
        """
        List verifications known to the service.

        Args:
            skip (int): Number of rows to skip.
            limit (int): Maximum rows to return.

        Returns:
            VerificationListResponse: Page of summaries.

        Raises:
            VerificationConfigError: If no endpoint is configured.
        """
        base_url = self._require_base_url()
        response = await self._request(
            "GET",
            f"{base_url}{LIST_PATH}",
            params={"skip": skip, "limit": limit},
        )
        try:
            return VerificationListResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise VerificationAPIError(
                message="Invalid response from verification service",
                status_code=response.status_code,
            ) from e

    async def check_health(self) -> bool:
        """
        Probe the service health endpoint.

        Only used to decide whether to show a "service unavailable" notice.

        Returns:
            bool: True if the probe answered 2xx within the deadline.
        """
        if self.base_url is None:
            return False

        try:
            async with httpx.AsyncClient(timeout=self.settings.health_timeout) as client:
                response = await client.get(f"{self.base_url}{HEALTH_PATH}")
                return response.is_success
        except httpx.HTTPError as e:
            logger.warning(f"Verification service health check failed: {e}")
            return False
