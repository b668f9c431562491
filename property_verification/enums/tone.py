"""Display tone enum."""

from enum import StrEnum


class Tone(StrEnum):
    """Presentation tone used for badges and score bars."""

    POSITIVE = "positive"
    CAUTION = "caution"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
