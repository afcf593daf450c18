"""Resolution domain - canvas profiles and orientation-aware dimensions.

Usage:
    from canvasfx.core.resolution import get_dimensions

    dims = get_dimensions(1920, is_horizontal=False)  # 1080x1920

Note: Importing this module auto-registers all builtin profiles.
"""

# Auto-register builtins on import
from canvasfx.core.resolution import builtins as _builtins  # noqa: F401
from canvasfx.core.resolution.catalog import (
    DEFAULT_RESOLUTION_KEY,
    RESOLUTION_REGISTRY,
    STANDARD_RESOLUTION_KEYS,
    ResolutionCatalog,
    ResolutionLookup,
    UnknownResolutionError,
    by_category,
    closest_key,
    default_key,
    display_name,
    get_dimensions,
    get_profile,
    has_profile,
    list_profiles,
    make_resolution_key,
    normalize_key,
    parse_alias,
    parse_resolution_key,
    standard_profiles,
)
from canvasfx.core.resolution.enums import ResolutionCategory
from canvasfx.core.resolution.models import CanvasDimensions, ResolutionKey, ResolutionProfile

__all__ = [
    # Global registry
    "RESOLUTION_REGISTRY",
    "DEFAULT_RESOLUTION_KEY",
    "STANDARD_RESOLUTION_KEYS",
    # Catalog
    "ResolutionCatalog",
    "ResolutionLookup",
    "UnknownResolutionError",
    "normalize_key",
    # Convenience functions
    "by_category",
    "closest_key",
    "default_key",
    "display_name",
    "get_dimensions",
    "get_profile",
    "has_profile",
    "list_profiles",
    "make_resolution_key",
    "parse_alias",
    "parse_resolution_key",
    "standard_profiles",
    # Models
    "CanvasDimensions",
    "ResolutionCategory",
    "ResolutionKey",
    "ResolutionProfile",
]
