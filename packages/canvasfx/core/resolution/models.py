"""Resolution models - named canvas profiles and resolved dimensions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from canvasfx.core.resolution.enums import ResolutionCategory


class ResolutionProfile(BaseModel):
    """Named canvas profile from the resolution catalog.

    Landscape profiles are stored landscape (1920x1080); mobile profiles
    are stored portrait (360x640).

    Attributes:
        key: Catalog key (usually the landscape width).
        width: Stored width in pixels.
        height: Stored height in pixels.
        display_name: Human-readable name (e.g., "Full HD").
        category: Profile family.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: int = Field(gt=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    display_name: str
    category: ResolutionCategory

    @property
    def is_naturally_portrait(self) -> bool:
        """Whether the profile is stored taller than wide."""
        return self.height > self.width


class CanvasDimensions(BaseModel):
    """Pixel size the generation engine renders at.

    Produced by ``get_dimensions``; callers do not build these directly.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)


class ResolutionKey(BaseModel):
    """Resolution plus orientation, as stored alongside a project.

    String form is ``"<key>-<width>x<height>-<h|v>"``, e.g. ``"1920-1920x1080-h"``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    resolution: int = Field(gt=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    is_horizontal: bool

    def __str__(self) -> str:
        orientation = "h" if self.is_horizontal else "v"
        return f"{self.resolution}-{self.width}x{self.height}-{orientation}"
