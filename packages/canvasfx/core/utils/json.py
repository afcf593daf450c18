"""JSON document helpers for project files and default configurations.

``read_json`` returns whatever the document holds; callers that need a
particular shape check it with ``require_object``.
"""

from __future__ import annotations

from enum import Enum
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def _encode_extra(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, Path):
        return obj.as_posix()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


def dump_json(obj: Any) -> str:
    """Render obj as indented JSON, keeping non-ASCII text readable."""
    return json.dumps(obj, indent=2, ensure_ascii=False, default=_encode_extra)


def write_json(path: str | Path, obj: Any) -> Path:
    """Write obj to path, creating parent directories.

    Returns:
        The path written.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dump_json(obj) + "\n", encoding="utf-8")
    logger.debug("Wrote JSON to %s", target)
    return target


def read_json(path: str | Path) -> Any:
    """Parse a JSON document.

    Raises:
        ValueError: If the file is not valid JSON.
    """
    return json.loads(Path(path).read_text(encoding="utf-8"))


def require_object(data: Any, source: str | Path) -> dict[str, Any]:
    """Return data if it is a JSON object, else raise ValueError naming source."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {source}, got {type(data).__name__}")
    return data
