"""Builtin resolution profiles.

Registers the standard video, mobile and social resolutions with the global
registry. Keys are the landscape width, except for mobile profiles (stored
portrait, keyed by their width) and Instagram Square, which uses 1081 so it
does not collide with 1080p.
"""

from canvasfx.core.resolution.catalog import RESOLUTION_REGISTRY
from canvasfx.core.resolution.enums import ResolutionCategory
from canvasfx.core.resolution.models import ResolutionProfile

# (key, width, height, display name, category, legacy aliases)
_PROFILES: tuple[tuple[int, int, int, str, ResolutionCategory, tuple[str, ...]], ...] = (
    # Standard definition
    (160, 160, 120, "QQVGA", ResolutionCategory.SD, ()),
    (240, 240, 180, "HQVGA", ResolutionCategory.SD, ()),
    (320, 320, 240, "QVGA", ResolutionCategory.SD, ("qvga",)),
    (480, 480, 360, "nHD", ResolutionCategory.SD, ()),
    (640, 640, 480, "VGA", ResolutionCategory.SD, ("vga",)),
    (800, 800, 600, "SVGA", ResolutionCategory.SD, ("svga",)),
    # Widescreen SD
    (854, 854, 480, "FWVGA", ResolutionCategory.WIDESCREEN_SD, ()),
    (960, 960, 540, "qHD", ResolutionCategory.WIDESCREEN_SD, ()),
    # 4:3 extended graphics
    (1024, 1024, 768, "XGA", ResolutionCategory.XGA, ("xga",)),
    (1152, 1152, 864, "XGA+", ResolutionCategory.XGA, ()),
    # High definition
    (1280, 1280, 720, "HD", ResolutionCategory.HD, ("hd720", "720p")),
    (1366, 1366, 768, "WXGA", ResolutionCategory.HD, ()),
    (1440, 1440, 900, "WXGA+", ResolutionCategory.HD, ()),
    (1600, 1600, 900, "HD+", ResolutionCategory.HD, ()),
    (1680, 1680, 1050, "WSXGA+", ResolutionCategory.HD, ()),
    (1920, 1920, 1080, "Full HD", ResolutionCategory.HD, ("hd", "fullhd", "fhd", "1080p")),
    # Cinema
    (2048, 2048, 1080, "2K DCI", ResolutionCategory.CINEMA, ()),
    # Quad HD and ultra HD
    (2560, 2560, 1440, "QHD", ResolutionCategory.QHD, ("wqhd", "qhd", "1440p")),
    (2880, 2880, 1620, "QHD+", ResolutionCategory.QHD, ()),
    (3200, 3200, 1800, "QHD+ Wide", ResolutionCategory.QHD, ()),
    (3440, 3440, 1440, "UWQHD", ResolutionCategory.QHD, ()),
    (3840, 3840, 2160, "4K UHD", ResolutionCategory.UHD, ("4k", "uhd", "4kuhd")),
    (4096, 4096, 2160, "DCI 4K", ResolutionCategory.UHD, ()),
    # 5K and 6K
    (5120, 5120, 2880, "5K", ResolutionCategory.FIVE_K_PLUS, ("5k",)),
    (6144, 6144, 3456, "6K", ResolutionCategory.FIVE_K_PLUS, ()),
    # 8K
    (7680, 7680, 4320, "8K UHD", ResolutionCategory.EIGHT_K_PLUS, ("8k",)),
    (8192, 8192, 4320, "8K DCI", ResolutionCategory.EIGHT_K_PLUS, ()),
    # Mobile, stored portrait
    (360, 360, 640, "Mobile SD", ResolutionCategory.MOBILE, ()),
    (375, 375, 667, "iPhone 6/7/8", ResolutionCategory.MOBILE, ()),
    (414, 414, 736, "iPhone Plus", ResolutionCategory.MOBILE, ()),
    # Social
    (1081, 1080, 1080, "Instagram Square", ResolutionCategory.SOCIAL, ("square",)),
)


def _register_profiles() -> None:
    """Register all builtin profiles."""
    for key, width, height, name, category, aliases in _PROFILES:
        if key in RESOLUTION_REGISTRY:
            continue
        RESOLUTION_REGISTRY.register(
            ResolutionProfile(
                key=key,
                width=width,
                height=height,
                display_name=name,
                category=category,
            ),
            aliases=aliases,
        )


# Auto-register on import
_register_profiles()
