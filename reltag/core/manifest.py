"""Reading and rewriting the version field of a JSON manifest.

The version is replaced textually so the rest of the file keeps its exact
formatting (indentation, key order, trailing newline).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import as_str_dict

__all__ = [
    "ManifestError",
    "read_manifest",
    "read_version",
    "replace_json_property",
    "replace_json_version_property",
    "write_manifest",
]


@dataclass(frozen=True, slots=True)
class ManifestError:
    message: str
    path: Path


def replace_json_property(content: str, property_name: str, value: str) -> str:
    """Replace the string value of the first `"property_name"` key.

    Returns the content unchanged when the key or its string value is absent.
    """
    key = f'"{property_name}"'
    key_index = content.find(key)
    if key_index < 0:
        return content

    start = content.find('"', key_index + len(key))
    if start < 0:
        return content

    end = content.find('"', start + 1)
    if end < 0:
        return content

    return f"{content[: start + 1]}{value}{content[end:]}"


def replace_json_version_property(content: str, value: str) -> str:
    return replace_json_property(content, "version", value)


def read_version(content: str) -> str | None:
    """Return the top-level `version` string, or None if missing or invalid JSON."""
    try:
        data = as_str_dict(json.loads(content))
    except json.JSONDecodeError:
        return None
    if data is None:
        return None
    version = data.get("version")
    return version if isinstance(version, str) and version else None


def read_manifest(path: Path) -> Result[str, ManifestError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ManifestError(f"Manifest not found: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(f"Cannot read manifest: {e}", path=path))


def write_manifest(path: Path, content: str) -> Result[None, ManifestError]:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        return Err(ManifestError(f"Cannot write manifest: {e}", path=path))
    return Ok(None)
