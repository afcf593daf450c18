"""Property name -> display label."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[_\-\s]+")


def format_label(name: str) -> str:
    """Turn a camelCase, snake_case or kebab-case name into Title Case words.

    Example:
        >>> format_label("strokeColor")
        'Stroke Color'
        >>> format_label("max_step-count")
        'Max Step Count'
    """
    spaced = _SEPARATORS.sub(" ", _CAMEL_BOUNDARY.sub(" ", name)).strip()
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split(" ") if word)
