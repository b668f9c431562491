"""Result renderer - maps a verification result to display state.

Pure functions only. The risk level is taken as returned by the service and
never recomputed from the score.
"""

from property_verification.enums import RiskLevel, Tone, VerificationStatus
from property_verification.models import (
    Badge,
    BreakdownRow,
    DisplayState,
    ExtractedData,
    FieldRow,
    ValidationDetails,
    VerificationResult,
)

STATUS_BADGES: dict[str, Badge] = {
    VerificationStatus.VERIFIED: Badge(label="Verified", tone=Tone.POSITIVE),
    VerificationStatus.NEEDS_REVIEW: Badge(label="Needs review", tone=Tone.CAUTION),
    VerificationStatus.REJECTED: Badge(label="Rejected", tone=Tone.NEGATIVE),
    VerificationStatus.PENDING: Badge(label="Pending", tone=Tone.NEUTRAL),
}
DEFAULT_STATUS_BADGE = STATUS_BADGES[VerificationStatus.PENDING]

RISK_BADGES: dict[str, Badge] = {
    RiskLevel.LOW: Badge(label="Low risk", tone=Tone.POSITIVE),
    RiskLevel.MEDIUM: Badge(label="Medium risk", tone=Tone.CAUTION),
    RiskLevel.HIGH: Badge(label="High risk", tone=Tone.NEGATIVE),
}
DEFAULT_RISK_BADGE = Badge(label="N/A", tone=Tone.NEUTRAL)

# Display order of the fields shown after owner name and document number
FIELD_LABELS: list[tuple[str, str]] = [
    ("address", "Address"),
    ("land_area", "Land area"),
    ("kelurahan", "Kelurahan"),
    ("kecamatan", "Kecamatan"),
    ("kabupaten", "Regency / city"),
    ("provinsi", "Province"),
    ("nib", "Land parcel number (NIB)"),
]


def _key(value: object) -> str:
    return str(value).upper() if value else ""


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _percent(score: float, maximum: float) -> float:
    if maximum <= 0:
        return 0.0
    return max(0.0, min(100.0, score / maximum * 100))


def status_badge(status: object) -> Badge:
    """
    Get the badge for a verification status.

    Args:
        status (object): Status value; unknown values render as pending.

    Returns:
        Badge: Label and tone.
    """
    return STATUS_BADGES.get(_key(status), DEFAULT_STATUS_BADGE)


def risk_badge(level: object) -> Badge:
    """
    Get the badge for a risk level.

    Args:
        level (object): Risk level; unknown values render as neutral.

    Returns:
        Badge: Label and tone.
    """
    return RISK_BADGES.get(_key(level), DEFAULT_RISK_BADGE)


def humanize_factor(key: str) -> str:
    """
    Turn a breakdown key into a label, e.g. ocr_quality -> Ocr quality.

    Args:
        key (str): Factor key.

    Returns:
        str: Human readable label.
    """
    return key.replace("_", " ").capitalize()


def render_fields(data: ExtractedData) -> tuple[FieldRow, ...]:
    """
    Render the extracted fields that are present, in display order.

    Args:
        data (ExtractedData): Sparse extracted record.

    Returns:
        tuple[FieldRow, ...]: Rows for non-empty fields.
    """
    present = data.present_fields()
    rows: list[FieldRow] = []
    owner = present.get("owner_name")
    if owner:
        rows.append(FieldRow(key="owner_name", label="Owner name", value=owner))

    certificate_number = present.get("certificate_number")
    nop = present.get("nop")
    if certificate_number:
        rows.append(
            FieldRow(key="certificate_number", label="Certificate number", value=certificate_number)
        )
    elif nop:
        rows.append(FieldRow(key="nop", label="Tax object number (NOP)", value=nop))

    for key, label in FIELD_LABELS:
        value = present.get(key)
        if value is not None:
            rows.append(FieldRow(key=key, label=label, value=str(value)))
    return tuple(rows)


def _issue_messages(details: ValidationDetails | None) -> tuple[tuple[str, ...], tuple[str, ...]]:
    if details is None:
        return (), ()
    errors = [
        f"{issue.field}: {issue.message}" if issue.field else issue.message
        for issue in [*details.critical_errors, *details.errors]
    ]
    warnings = [
        f"{issue.field}: {issue.message}" if issue.field else issue.message
        for issue in details.warnings
    ]
    return tuple(errors), tuple(warnings)


def render_result(result: VerificationResult) -> DisplayState:
    """
    Map a verification result to its display state.

    Breakdown factors keep the order the service returned them in. A missing
    breakdown yields breakdown=None.

    Args:
        result (VerificationResult): Result to render.

    Returns:
        DisplayState: Immutable display state.
    """
    risk = result.risk_assessment

    breakdown = None
    if risk.breakdown is not None:
        breakdown = tuple(
            BreakdownRow(
                key=key,
                label=humanize_factor(key),
                score_text=f"{_format_number(factor.score)}/{_format_number(factor.max)}",
                percent=_percent(factor.score, factor.max),
                detail=factor.detail,
            )
            for key, factor in risk.breakdown.items()
        )

    errors, warnings = _issue_messages(result.validation_details)

    return DisplayState(
        verification_id=result.verification_id,
        status=status_badge(result.verification_status),
        risk=risk_badge(risk.risk_level),
        score_text=f"{_format_number(risk.total_score)}/100",
        score_percent=_percent(risk.total_score, 100),
        recommendation=risk.recommendation,
        breakdown=breakdown,
        fields=render_fields(result.extracted_data),
        errors=errors,
        warnings=warnings,
        demo_mode=result.demo_mode,
    )
