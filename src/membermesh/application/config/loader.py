"""Settings file loader.

A settings file goes through three stages: reading, JSON decoding and schema
validation. A failure at any stage is reported as ``ConfigError``, whose
``error_type`` names the stage that failed:

- ``file_not_found``, ``permission_denied``, ``file_read_error``: reading
- ``json_parse``: decoding, with the line and column of the syntax error
- ``validation``: schema, with one detail entry per offending field
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from membermesh.application.config.schema import MeshSettings

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A settings file or mapping that cannot be turned into ``MeshSettings``.

    Attributes:
        message: Full, printable description.
        error_type: Failing stage (see module docstring).
        path: Settings file, or None for in-memory data.
        details: Structured information for tools: ``line``/``column``/
            ``message`` for JSON errors, ``path``/``message``/``value``/
            ``error_type`` per field for validation errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Turn a pydantic error location into a dotted JSON path.

    Examples:
        >>> _format_json_path(("meshing", "subdivisions"))
        'meshing.subdivisions'
        >>> _format_json_path(("output", "formats", 1))
        'output.formats[1]'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int) and parts:
            parts[-1] += f"[{segment}]"
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _read(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading settings file: {path}", "permission_denied", path
        ) from None
    except OSError as e:
        raise ConfigError(
            f"Cannot read settings file {path}: {e}", "file_read_error", path
        ) from None


def _decode(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from None


def _validate(data: Any, path: Path | None) -> MeshSettings:
    try:
        return MeshSettings.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in e.errors()
        ]
    source = f" in {path}" if path is not None else ""
    lines = [f"Settings validation failed{source}:"]
    for detail in details:
        got = detail["value"]
        suffix = "" if got is None or isinstance(got, dict) else f" (got: {got!r})"
        lines.append(f"  - {detail['path']}: {detail['message']}{suffix}")
    raise ConfigError("\n".join(lines), "validation", path, details)


def load_settings(path: Path) -> MeshSettings:
    """Load and validate mesh settings from a JSON file.

    Args:
        path: Settings file.

    Returns:
        Validated settings.

    Raises:
        ConfigError: If any stage fails; ``error_type`` tells which.
    """
    path = Path(path)
    settings = _validate(_decode(_read(path), path), path)
    logger.debug("Loaded settings from %s: %s", path, settings.model_dump())
    return settings


def load_settings_from_dict(data: dict[str, Any]) -> MeshSettings:
    """Validate mesh settings supplied as a mapping.

    Raises:
        ConfigError: With ``error_type == "validation"`` and no path.
    """
    return _validate(data, None)
