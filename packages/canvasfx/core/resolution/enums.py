"""Resolution enums."""

from enum import Enum


class ResolutionCategory(str, Enum):
    """Family a resolution profile belongs to.

    Used for grouping profiles in pickers.
    """

    SD = "SD"
    WIDESCREEN_SD = "WSD"
    XGA = "XGA"
    HD = "HD"
    CINEMA = "Cinema"
    QHD = "QHD"
    UHD = "UHD"
    FIVE_K_PLUS = "5K+"
    EIGHT_K_PLUS = "8K+"
    MOBILE = "Mobile"
    SOCIAL = "Social"
