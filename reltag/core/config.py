"""Typed loading of the `.reltag.toml` rc file.

The rc file lives in the project root and holds the defaults for a release;
command-line options override it field by field.

Example:
    manifest = "package.json"
    commit_label = "chore: release %s"
    tag_label = "v%s"
    push_tags = true
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str

__all__ = [
    "RC_FILENAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

RC_FILENAME = ".reltag.toml"
DEFAULT_MANIFEST = "package.json"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the rc file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Options of a release run.

    Attributes:
        manifest: JSON file holding the project version, relative to the project
        commit_label: Commit message template (`%s` is the version), None for default
        tag_label: Tag name template (`%s` is the version), None for default
        commit: Create a release commit
        tag: Create a release tag
        push: Push the commit once created
        push_tags: Push tags along with the commit
        upstream: Set upstream tracking when the branch has none yet
    """

    manifest: str = DEFAULT_MANIFEST
    commit_label: str | None = None
    tag_label: str | None = None
    commit: bool = True
    tag: bool = True
    push: bool = True
    push_tags: bool = True
    upstream: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from a parsed TOML table."""
        defaults = cls()
        return cls(
            manifest=get_str(data, "manifest") or defaults.manifest,
            commit_label=get_str(data, "commit_label"),
            tag_label=get_str(data, "tag_label"),
            commit=_bool_or(data, "commit", defaults.commit),
            tag=_bool_or(data, "tag", defaults.tag),
            push=_bool_or(data, "push", defaults.push),
            push_tags=_bool_or(data, "push_tags", defaults.push_tags),
            upstream=_bool_or(data, "upstream", defaults.upstream),
        )

    def merged(self, **overrides: object) -> ReleaseConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def _bool_or(data: Mapping[str, object], key: str, default: bool) -> bool:
    value = get_bool(data, key)
    return default if value is None else value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Cannot read config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and validate a release config from a TOML file.

    Args:
        path: Path to the rc file

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> ReleaseConfig:
    """Load the rc file, or return the defaults if it cannot be loaded."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return ReleaseConfig()
