"""Submission service - runs one document through intake, verification and persistence."""

import logging

from property_verification.core.exceptions import (
    RateLimitExceededError,
    SubmissionInProgressError,
)
from property_verification.enums import DocumentType, RateLimitAction, VerificationStatus
from property_verification.models import SubmissionResponse, UploadedFile, UserSession
from property_verification.services.history_service import HistoryService
from property_verification.services.intake_service import IntakeService
from property_verification.services.progress import SimulatedProgress
from property_verification.services.rate_limit_client import RateLimitClient
from property_verification.services.rendering import render_result
from property_verification.services.verification_client import VerificationClient

logger = logging.getLogger(__name__)


class SubmissionService:
    """Orchestrates a single verification submission.

    One instance corresponds to one submission form: it refuses a second
    submission while one is in flight. Separate instances are independent.
    """

    def __init__(
        self,
        intake: IntakeService,
        client: VerificationClient,
        history: HistoryService | None = None,
        rate_limiter: RateLimitClient | None = None,
    ) -> None:
        self.intake = intake
        self.client = client
        self.history = history
        self.rate_limiter = rate_limiter
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def _check_rate_limit(self, session: UserSession) -> None:
        if self.rate_limiter is None:
            return
        result = await self.rate_limiter.check(RateLimitAction.DEFAULT, session.user_id)
        if not result.allowed:
            raise RateLimitExceededError(
                message="Rate limit exceeded. Please try again later.",
                retry_after=result.retry_after or 60,
            )

    async def submit(
        self,
        file: UploadedFile,
        document_type: DocumentType,
        session: UserSession,
        progress: SimulatedProgress | None = None,
    ) -> SubmissionResponse:
        """
        Verify a document and record it in the caller's history.

        The file is validated locally first; a rejected file never reaches
        the network. Image previews are encoded while the request is in
        flight. The history write is best-effort and never hides the result.

        Args:
            file (UploadedFile): Candidate file.
            document_type (DocumentType): Document type tag.
            session (UserSession): Authenticated caller.
            progress (SimulatedProgress | None): Progress indicator to drive.

        Returns:
            SubmissionResponse: Result, display state, persistence flag and preview.

        Raises:
            SubmissionInProgressError: If a submission is already in flight.
            FileValidationError: If intake rejects the file.
            RateLimitExceededError: If the rate limiter refuses the request.
            VerificationTransportError: On network failure or timeout.
            VerificationAPIError: On a non-2xx response.
        """
        if self._in_flight:
            raise SubmissionInProgressError("A verification is already in progress")

        self.intake.ensure_accepted(file)
        preview_task = self.intake.start_preview(file)

        self._in_flight = True
        try:
            await self._check_rate_limit(session)

            if progress is not None:
                progress.start()
            try:
                result = await self.client.verify_document(file, document_type)
            finally:
                if progress is not None:
                    await progress.complete()

            persisted = False
            if self.history is not None:
                persisted = self.history.save(session.user_id, document_type, result)
        except BaseException:
            if preview_task is not None:
                preview_task.cancel()
            raise
        finally:
            self._in_flight = False

        preview = await preview_task if preview_task is not None else None

        if result.verification_status == VerificationStatus.VERIFIED:
            logger.info(f"Document {result.verification_id} verified")
        elif result.verification_status == VerificationStatus.NEEDS_REVIEW:
            logger.info(f"Document {result.verification_id} needs manual review")
        else:
            logger.warning(
                f"Verification {result.verification_id} reported problems: "
                f"{result.verification_status}"
            )

        return SubmissionResponse(
            document_type=document_type,
            result=result,
            display=render_result(result),
            persisted=persisted,
            preview=preview,
        )
