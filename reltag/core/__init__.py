"""Core types: results, exit codes, configuration, manifest and versions."""

from .config import ConfigError, ReleaseConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .manifest import ManifestError, replace_json_property, replace_json_version_property
from .result import Err, Ok, Result, is_err, is_ok
from .semver import SemVer, parse_version, resolve_next_version

__all__ = [
    # config
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # manifest
    "ManifestError",
    "replace_json_property",
    "replace_json_version_property",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # semver
    "SemVer",
    "parse_version",
    "resolve_next_version",
]
