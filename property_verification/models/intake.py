"""Intake models for uploaded documents."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """A candidate document as received from the client."""

    filename: str = Field(description="Original file name")
    content_type: str = Field(description="Declared MIME type")
    size: int = Field(ge=0, description="Size in bytes")
    content: bytes = Field(default=b"", repr=False, description="Raw file bytes")

    model_config = ConfigDict(extra="forbid")

    @property
    def is_image(self) -> bool:
        """
        Check whether the declared type is an image.

        Returns:
            bool: True for image/* types.
        """
        return self.content_type.startswith("image/")


class IntakeResult(BaseModel):
    """Outcome of validating an uploaded document."""

    accepted: bool = Field(description="Whether the file may be submitted")
    reason: str | None = Field(
        default=None, description="Primary rejection code: unsupported_type or size_exceeded"
    )
    reasons: list[str] = Field(default_factory=list, description="Every failed check")
    message: str | None = Field(default=None, description="Human readable rejection reason")
    filename: str = Field(description="Original file name")
    size_display: str = Field(description="Formatted file size")
    kind: str = Field(description="PDF or Image")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "accepted": False,
                "reason": "unsupported_type",
                "reasons": ["unsupported_type"],
                "message": "Unsupported file type. Use JPG, PNG, WebP or PDF.",
                "filename": "cert.exe",
                "size_display": "1.2 MB",
                "kind": "Image",
            }
        },
    )
