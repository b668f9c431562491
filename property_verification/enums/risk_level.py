"""Risk level enums."""

from enum import StrEnum


class RiskLevel(StrEnum):
    """Three-tier risk level assigned by the verification service."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class RiskColor(StrEnum):
    """Color hint that accompanies a risk level."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
