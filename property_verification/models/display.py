"""Display state produced by the result renderer."""

from pydantic import BaseModel, ConfigDict, Field

from property_verification.enums import Tone


class Badge(BaseModel):
    """A labelled, toned badge."""

    label: str
    tone: Tone

    model_config = ConfigDict(frozen=True)


class BreakdownRow(BaseModel):
    """One factor of the score breakdown, rendered as score/max with a bar."""

    key: str = Field(description="Factor key as returned by the service")
    label: str = Field(description="Humanized factor name")
    score_text: str = Field(description="score/max")
    percent: float = Field(ge=0, le=100, description="Bar fill percentage")
    detail: str = Field(default="", description="Factor explanation")

    model_config = ConfigDict(frozen=True)


class FieldRow(BaseModel):
    """One extracted field with its display label."""

    key: str
    label: str
    value: str

    model_config = ConfigDict(frozen=True)


class DisplayState(BaseModel):
    """Everything needed to show a verification result."""

    verification_id: str
    status: Badge
    risk: Badge
    score_text: str = Field(description="Total score as shown, e.g. 85/100")
    score_percent: float = Field(ge=0, le=100)
    recommendation: str | None = None
    breakdown: tuple[BreakdownRow, ...] | None = Field(
        default=None, description="None when the service returned no breakdown"
    )
    fields: tuple[FieldRow, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    demo_mode: bool = False

    model_config = ConfigDict(frozen=True)
