"""Schema enums."""

from __future__ import annotations

from enum import Enum


class FieldKind(str, Enum):
    """UI-agnostic editor kind for a configuration property."""

    COLOR_PICKER = "colorpicker"
    READ_ONLY = "readonly"
    MULTISTEP = "multistep"
    ALGORITHM_LIST = "algorithm-list"
    MULTI_SELECT = "multiselect"
    SPARSITY_FACTOR = "sparsity-factor"
    JSON = "json"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    RANGE = "range"
    DYNAMIC_RANGE = "dynamic-range"
    POINT = "point"
    POSITION = "position"
    ARC_PATH = "arc-path"
    PERCENTAGE = "percentage"
    PERCENTAGE_RANGE = "percentage-range"
