"""Resolution catalog registry.

Single source of truth for canvas profiles. Lookups by an unknown key fail
loudly; there is no fallback resolution.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging

from canvasfx.core.resolution.enums import ResolutionCategory
from canvasfx.core.resolution.models import CanvasDimensions, ResolutionKey, ResolutionProfile

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION_KEY = 1920
STANDARD_RESOLUTION_KEYS = (640, 854, 1280, 1920, 2560, 3840, 7680)

ResolutionLookup = int | str


def normalize_key(s: str) -> str:
    """Normalize alias for lookup (lowercase, alphanumeric/underscore only)."""
    return "".join(ch.lower() if ch.isalnum() else "_" for ch in s).strip("_")


class UnknownResolutionError(KeyError):
    """Raised when a resolution key or alias is not in the catalog."""

    pass


class ResolutionCatalog:
    """Registry for canvas resolution profiles.

    Example:
        >>> catalog = ResolutionCatalog()
        >>> catalog.register(profile, aliases=("1080p", "fhd"))
        >>> catalog.get_dimensions("1080p", is_horizontal=False)
        CanvasDimensions(width=1080, height=1920)
    """

    def __init__(self) -> None:
        """Initialize empty catalog."""
        self._items: dict[int, ResolutionProfile] = {}
        self._aliases: dict[str, int] = {}  # normalized alias -> key

    def register(
        self,
        item: ResolutionProfile,
        *,
        aliases: Iterable[str] = (),
    ) -> None:
        """Register a profile.

        Args:
            item: Profile to register.
            aliases: Legacy string names that resolve to this profile.

        Raises:
            ValueError: If the key or an alias is already registered.
        """
        if item.key in self._items:
            raise ValueError(f"Resolution already registered: {item.key}")

        normalized = [normalize_key(a) for a in aliases]
        for alias in normalized:
            if alias in self._aliases:
                raise ValueError(
                    f"Resolution alias '{alias}' already maps to {self._aliases[alias]}"
                )

        self._items[item.key] = item
        for alias in normalized:
            self._aliases[alias] = item.key

        logger.debug("Registered resolution %s (%s)", item.key, item.display_name)

    def parse_alias(self, name: str) -> int:
        """Resolve a legacy resolution name or numeric string to a key.

        Args:
            name: Alias such as "hd", "1080p", "4k", or a number like "1280".

        Returns:
            Catalog key.

        Raises:
            UnknownResolutionError: If the name is neither a known alias nor
                a registered numeric key.
        """
        stripped = name.strip()
        alias_key = self._aliases.get(normalize_key(stripped))
        if alias_key is not None:
            return alias_key
        if stripped.isdigit() and int(stripped) in self._items:
            return int(stripped)
        raise UnknownResolutionError(f"Unknown resolution name: {name!r}")

    def _resolve(self, key: ResolutionLookup) -> int:
        if isinstance(key, str):
            return self.parse_alias(key)
        if isinstance(key, bool) or not isinstance(key, int):
            raise UnknownResolutionError(f"Invalid resolution key: {key!r}")
        return key

    def get(self, key: ResolutionLookup) -> ResolutionProfile:
        """Lookup profile by key or alias.

        Args:
            key: Integer key, numeric string, or alias.

        Returns:
            ResolutionProfile (immutable, no copy needed).

        Raises:
            UnknownResolutionError: If profile not found.
        """
        resolved = self._resolve(key)
        item = self._items.get(resolved)

        if item is None:
            raise UnknownResolutionError(f"Resolution {key!r} not found")

        return item

    def has(self, key: ResolutionLookup) -> bool:
        """Check if profile exists."""
        try:
            self.get(key)
        except UnknownResolutionError:
            return False
        return True

    def get_dimensions(self, key: ResolutionLookup, is_horizontal: bool = True) -> CanvasDimensions:
        """Resolve canvas dimensions for a profile and orientation.

        Portrait-stored profiles swap when landscape is requested;
        landscape-stored profiles swap when portrait is requested. The
        two orientations of any key are therefore exact swaps.

        Args:
            key: Integer key, numeric string, or alias.
            is_horizontal: Whether the canvas is landscape.

        Returns:
            CanvasDimensions for the requested orientation.

        Raises:
            UnknownResolutionError: If profile not found.
        """
        profile = self.get(key)
        swap = is_horizontal if profile.is_naturally_portrait else not is_horizontal
        if swap:
            return CanvasDimensions(width=profile.height, height=profile.width)
        return CanvasDimensions(width=profile.width, height=profile.height)

    def closest_key(self, width: float) -> int:
        """Key nearest to a target width (ties resolve to the lower key).

        Raises:
            UnknownResolutionError: If the catalog is empty.
        """
        if not self._items:
            raise UnknownResolutionError("Resolution catalog is empty")
        return min(self._items, key=lambda k: (abs(k - width), k))

    def display_name(self, key: ResolutionLookup) -> str:
        """Label such as "1920x1080 (Full HD)", or "<key>x? (Unknown)"."""
        try:
            profile = self.get(key)
        except UnknownResolutionError:
            return f"{key}x? (Unknown)"
        return f"{profile.width}x{profile.height} ({profile.display_name})"

    def by_category(self, category: ResolutionCategory) -> list[ResolutionProfile]:
        """Profiles in a category, ordered by key."""
        return [p for p in self.list_all() if p.category == category]

    def list_all(self) -> list[ResolutionProfile]:
        """All profiles ordered by key."""
        return [self._items[k] for k in sorted(self._items)]

    def list_keys(self) -> list[int]:
        """All registered keys, ascending."""
        return sorted(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: ResolutionLookup) -> bool:
        return self.has(key)


# ============================================================================
# Global registry and convenience functions
# ============================================================================

RESOLUTION_REGISTRY = ResolutionCatalog()


def get_profile(key: ResolutionLookup) -> ResolutionProfile:
    """Get a profile from the global registry."""
    return RESOLUTION_REGISTRY.get(key)


def get_dimensions(key: ResolutionLookup, is_horizontal: bool = True) -> CanvasDimensions:
    """Resolve canvas dimensions from the global registry."""
    return RESOLUTION_REGISTRY.get_dimensions(key, is_horizontal)


def has_profile(key: ResolutionLookup) -> bool:
    """Check if the global registry knows a key or alias."""
    return RESOLUTION_REGISTRY.has(key)


def list_profiles() -> list[ResolutionProfile]:
    """List all profiles in the global registry."""
    return RESOLUTION_REGISTRY.list_all()


def by_category(category: ResolutionCategory) -> list[ResolutionProfile]:
    """Profiles of one category from the global registry."""
    return RESOLUTION_REGISTRY.by_category(category)


def standard_profiles() -> list[ResolutionProfile]:
    """The most common video resolutions, smallest first."""
    return [
        RESOLUTION_REGISTRY.get(k) for k in STANDARD_RESOLUTION_KEYS if k in RESOLUTION_REGISTRY
    ]


def closest_key(width: float) -> int:
    """Closest registered key to a width."""
    return RESOLUTION_REGISTRY.closest_key(width)


def display_name(key: ResolutionLookup) -> str:
    """Display label for a key."""
    return RESOLUTION_REGISTRY.display_name(key)


def parse_alias(name: str) -> int:
    """Resolve a legacy resolution name to a key."""
    return RESOLUTION_REGISTRY.parse_alias(name)


def default_key() -> int:
    """Key used for new projects (Full HD)."""
    return DEFAULT_RESOLUTION_KEY


def make_resolution_key(key: ResolutionLookup, is_horizontal: bool = True) -> ResolutionKey:
    """Build the project resolution key for a profile and orientation.

    Raises:
        UnknownResolutionError: If profile not found.
    """
    profile = RESOLUTION_REGISTRY.get(key)
    dims = RESOLUTION_REGISTRY.get_dimensions(profile.key, is_horizontal)
    return ResolutionKey(
        resolution=profile.key,
        width=dims.width,
        height=dims.height,
        is_horizontal=is_horizontal,
    )


def parse_resolution_key(value: str) -> ResolutionKey | None:
    """Parse a ``"<key>-<width>x<height>-<h|v>"`` string.

    Returns:
        ResolutionKey, or None if the string is malformed.
    """
    parts = value.split("-")
    if len(parts) != 3:
        logger.debug("Resolution key has %d parts: %r", len(parts), value)
        return None

    resolution, dimensions, orientation = parts
    size = dimensions.split("x")
    if len(size) != 2 or not all(s.isdigit() for s in (resolution, *size)):
        logger.debug("Malformed resolution key: %r", value)
        return None
    if orientation not in ("h", "v"):
        logger.debug("Unknown orientation in resolution key: %r", value)
        return None

    try:
        return ResolutionKey(
            resolution=int(resolution),
            width=int(size[0]),
            height=int(size[1]),
            is_horizontal=orientation == "h",
        )
    except ValueError:
        logger.debug("Resolution key has non-positive values: %r", value)
        return None


__all__ = [
    "DEFAULT_RESOLUTION_KEY",
    "RESOLUTION_REGISTRY",
    "STANDARD_RESOLUTION_KEYS",
    "ResolutionCatalog",
    "ResolutionLookup",
    "UnknownResolutionError",
    "by_category",
    "closest_key",
    "default_key",
    "display_name",
    "get_dimensions",
    "get_profile",
    "has_profile",
    "list_profiles",
    "make_resolution_key",
    "normalize_key",
    "parse_alias",
    "parse_resolution_key",
    "standard_profiles",
]
