"""Enumerations used by typed configuration values."""

from __future__ import annotations

from enum import Enum


class Side(str, Enum):
    """Canvas side a percentage is measured against.

    Attributes:
        SHORTEST: Shorter of width and height.
        LONGEST: Longer of width and height.
    """

    SHORTEST = "shortest"
    LONGEST = "longest"


class ColorSelectionType(str, Enum):
    """How a color picker chooses its color at render time.

    Attributes:
        SINGLE: Fixed color given by the color value.
        COLOR_BUCKET: Random pick from the project's color bucket.
        NEUTRAL_BUCKET: Random pick from the project's neutral bucket.
    """

    SINGLE = "single"
    COLOR_BUCKET = "color-bucket"
    NEUTRAL_BUCKET = "neutral-bucket"

    @classmethod
    def _missing_(cls, value: object) -> ColorSelectionType | None:
        # Older projects spell the bucket types in camelCase
        if isinstance(value, str):
            normalized = "".join(
                f"-{ch.lower()}" if ch.isupper() else ch for ch in value
            ).strip("-")
            for member in cls:
                if member.value == normalized.lower():
                    return member
        return None
