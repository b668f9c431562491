"""Intake service - local validation and preview of uploaded documents."""

import asyncio
import base64
import logging

from property_verification.core.exceptions import FileValidationError
from property_verification.core.settings import VerificationSettings
from property_verification.core.settings.app_settings import DEFAULT_ACCEPTED_TYPES
from property_verification.models import IntakeResult, UploadedFile

logger = logging.getLogger(__name__)

UNSUPPORTED_TYPE = "unsupported_type"
SIZE_EXCEEDED = "size_exceeded"

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

TYPE_LABELS = {
    "image/jpeg": "JPG",
    "image/png": "PNG",
    "image/webp": "WebP",
    "application/pdf": "PDF",
}


def format_file_size(size: int) -> str:
    """
    Format a byte count for display.

    Args:
        size (int): Size in bytes.

    Returns:
        str: Size such as "512 B", "1.5 KB" or "2.0 MB".
    """
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _describe_types(accepted_types: list[str]) -> str:
    labels = [TYPE_LABELS.get(t, t) for t in accepted_types]
    if len(labels) <= 1:
        return "".join(labels)
    return f"{', '.join(labels[:-1])} or {labels[-1]}"


def _describe_limit(max_file_size: int) -> str:
    if max_file_size >= 1024 * 1024 and max_file_size % (1024 * 1024) == 0:
        return f"{max_file_size // (1024 * 1024)}MB"
    return format_file_size(max_file_size)


class IntakeService:
    """Accepts or rejects a candidate document before any network call."""

    def __init__(
        self,
        accepted_types: list[str] | None = None,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        """
        Initialize the intake service.

        Args:
            accepted_types (list[str] | None): Allowed MIME types (default JPEG, PNG, WebP, PDF).
            max_file_size (int): Size ceiling in bytes (default 10MB).
        """
        self.accepted_types = list(accepted_types or DEFAULT_ACCEPTED_TYPES)
        self.max_file_size = max_file_size

    @classmethod
    def from_settings(cls, settings: VerificationSettings) -> "IntakeService":
        return cls(accepted_types=settings.accepted_types, max_file_size=settings.max_file_size)

    def validate(self, file: UploadedFile) -> IntakeResult:
        """
        Validate a file against the allow-list and the size ceiling.

        Both checks always run. The type failure, when present, is the
        primary reason.

        Args:
            file (UploadedFile): Candidate file.

        Returns:
            IntakeResult: Acceptance or the rejection reasons.
        """
        reasons: list[str] = []
        messages: list[str] = []

        if file.content_type not in self.accepted_types:
            reasons.append(UNSUPPORTED_TYPE)
            messages.append(f"Unsupported file type. Use {_describe_types(self.accepted_types)}.")
        if file.size > self.max_file_size:
            reasons.append(SIZE_EXCEEDED)
            messages.append(f"Maximum file size is {_describe_limit(self.max_file_size)}")

        if reasons:
            logger.info(f"Rejected upload {file.filename!r}: {', '.join(reasons)}")

        return IntakeResult(
            accepted=not reasons,
            reason=reasons[0] if reasons else None,
            reasons=reasons,
            message=" ".join(messages) or None,
            filename=file.filename,
            size_display=format_file_size(file.size),
            kind="PDF" if "pdf" in file.content_type else "Image",
        )

    def ensure_accepted(self, file: UploadedFile) -> IntakeResult:
        """
        Validate a file, raising on rejection.

        Args:
            file (UploadedFile): Candidate file.

        Returns:
            IntakeResult: The accepted result.

        Raises:
            FileValidationError: If the file is rejected.
        """
        result = self.validate(file)
        if not result.accepted:
            raise FileValidationError(
                message=result.message or "Invalid file",
                reason=result.reason or "invalid",
                reasons=result.reasons,
            )
        return result

    async def build_preview(self, file: UploadedFile) -> str | None:
        """
        Encode an image as a data URL for preview.

        Preview is best-effort: failures are logged and yield None.

        Args:
            file (UploadedFile): An accepted file.

        Returns:
            str | None: data URL, or None for non-images and failures.
        """
        if not file.is_image:
            return None

        try:
            encoded = await asyncio.to_thread(base64.b64encode, file.content)
        except Exception as e:
            logger.warning(f"Failed to build preview for {file.filename!r}: {e}")
            return None

        return f"data:{file.content_type};base64,{encoded.decode('ascii')}"

    def start_preview(self, file: UploadedFile) -> "asyncio.Task[str | None] | None":
        """
        Schedule preview generation without waiting for it.

        Args:
            file (UploadedFile): An accepted file.

        Returns:
            asyncio.Task[str | None] | None: The preview task, or None for non-images.
        """
        if not file.is_image:
            return None
        return asyncio.create_task(self.build_preview(file))
