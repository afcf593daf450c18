"""Shared utilities for canvasfx."""

from canvasfx.core.utils.json import dump_json, read_json, require_object, write_json

__all__ = [
    "dump_json",
    "read_json",
    "require_object",
    "write_json",
]
