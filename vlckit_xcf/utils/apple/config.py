#
# Copyright 2026 vlckit-xcf Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
Build configuration for vlckit-xcf.

Values are layered from built-in defaults, the VLCKIT.toml project file,
environment variables and finally command line overrides. The result is an
immutable BuildConfig that every pipeline stage receives explicitly.
"""

import os
import re
import shlex
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Any, Tuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from vlckit_xcf.build_scripts.build_errors import ConfigError

CONFIG_FILE_NAME = "VLCKIT.toml"

DEFAULT_REPO_URL = "https://code.videolan.org/videolan/VLCKit.git"
DEFAULT_SOURCE_DIR = "VLCKit-Source"
DEFAULT_BUILD_DIR = "build"
DEFAULT_VERSION = "1.0.0"
DEFAULT_PACKAGE_NAME = "VLCKit"
DEFAULT_FRAMEWORK_NAME = "VLCKit"
DEFAULT_COMPILE_SCRIPT = "compileAndBuildVLCKit.sh"
# all architectures and environments, release mode
DEFAULT_COMMON_FLAGS = ("-a", "all", "-r")

# timeout is 3 hours, same as exec_command
DEFAULT_BUILD_TIMEOUT = 3 * 3600
DEFAULT_GIT_TIMEOUT = 30 * 60

# Environment variables keep the names of the old Makefile variables
ENV_OVERRIDES = {
    "VLCKIT_REPO": "repo_url",
    "VLCKIT_REF": "repo_ref",
    "VLCKIT_DIR": "source_dir",
    "BUILD_DIR": "build_dir",
    "VERSION": "version",
}


@dataclass(frozen=True)
class Platform:
    """One Apple platform built by the upstream script."""
    key: str  # ios, macos, tvos, xros
    display_name: str
    output_dir: str  # directory under the platform build root
    flags: Tuple[str, ...] = ()


DEFAULT_PLATFORMS = (
    Platform("ios", "iOS", "iOS", ("-f",)),
    Platform("macos", "macOS", "macOS", ("-x",)),
    Platform("tvos", "tvOS", "tvOS", ("-f", "-t")),
    Platform("xros", "visionOS", "xrOS", ("-f", "-i")),
)

SUPPORTED_PLATFORMS = tuple(p.key for p in DEFAULT_PLATFORMS)


@dataclass(frozen=True)
class BuildConfig:
    """Immutable settings shared by fetch, build, merge and package."""
    repo_url: str = DEFAULT_REPO_URL
    repo_ref: str = ""
    source_dir: Path = Path(DEFAULT_SOURCE_DIR)
    build_dir: Path = Path(DEFAULT_BUILD_DIR)
    platform_build_root: Optional[Path] = None
    version: str = DEFAULT_VERSION
    package_name: str = DEFAULT_PACKAGE_NAME
    framework_name: str = DEFAULT_FRAMEWORK_NAME
    compile_script: str = DEFAULT_COMPILE_SCRIPT
    common_flags: Tuple[str, ...] = DEFAULT_COMMON_FLAGS
    platforms: Tuple[Platform, ...] = field(default=DEFAULT_PLATFORMS)
    build_timeout: int = DEFAULT_BUILD_TIMEOUT
    git_timeout: int = DEFAULT_GIT_TIMEOUT

    @property
    def artifact_name(self) -> str:
        return f"{self.framework_name}.xcframework"

    @property
    def artifact_path(self) -> Path:
        return self.build_dir / self.artifact_name

    @property
    def inner_bundle_name(self) -> str:
        return f"{self.framework_name}.framework"

    @property
    def package_filename(self) -> str:
        return f"{self.package_name}-{self.version}.xcframework.zip"

    @property
    def package_path(self) -> Path:
        return self.build_dir / self.package_filename

    @property
    def checksum_filename(self) -> str:
        return f"{self.package_name}-{self.version}.sha256"

    @property
    def checksum_path(self) -> Path:
        return self.build_dir / self.checksum_filename

    @property
    def compile_script_path(self) -> Path:
        return self.source_dir / self.compile_script

    def get_platform_build_root(self) -> Path:
        if self.platform_build_root is not None:
            return self.platform_build_root
        return self.source_dir / "build"

    def platform_output_path(self, platform: Platform) -> Path:
        """Where the upstream script leaves the xcframework of a platform."""
        return self.get_platform_build_root() / platform.output_dir / self.artifact_name

    def get_platform(self, key: str) -> Platform:
        for platform in self.platforms:
            if platform.key == key.lower():
                return platform
        raise ConfigError(
            f"Unsupported platform: {key} (supported: {', '.join(self.platform_keys())})"
        )

    def platform_keys(self) -> List[str]:
        return [p.key for p in self.platforms]

    def sorted_platforms(self) -> List[Platform]:
        return sorted(self.platforms, key=lambda p: p.key)

    def get_config_summary(self) -> str:
        """Get a summary of the configuration for display."""
        lines = [
            f"  Repository: {self.repo_url}" + (f" ({self.repo_ref})" if self.repo_ref else ""),
            f"  Source dir: {self.source_dir}",
            f"  Build dir:  {self.build_dir}",
            f"  Version:    {self.version}",
            f"  Platforms:  {', '.join(self.platform_keys())}",
        ]
        return "\n".join(lines)


def expand_env(value: Any, environ: Mapping[str, str]) -> Any:
    """
    Expand environment variables in configuration values.

    Supports ${VAR_NAME} and $VAR_NAME syntax. Unknown variables are kept as is.
    """
    if not isinstance(value, str):
        return value

    # Pattern for ${VAR_NAME}
    pattern1 = re.compile(r'\$\{([^}]+)\}')
    value = pattern1.sub(lambda m: environ.get(m.group(1), m.group(0)), value)

    # Pattern for $VAR_NAME
    pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
    value = pattern2.sub(lambda m: environ.get(m.group(1), m.group(0)), value)

    return value


def _parse_flags(value: Any, environ: Mapping[str, str], where: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return tuple(shlex.split(expand_env(value, environ)))
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(expand_env(v, environ) for v in value)
    raise ConfigError(f"{where} must be a string or a list of strings")


def load_toml_file(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e


def _apply_toml(values: Dict[str, Any], toml_data: Dict[str, Any], environ: Mapping[str, str]):
    section = toml_data.get("vlckit", {})
    if not isinstance(section, dict):
        raise ConfigError("[vlckit] must be a table")

    for key in ("repo_url", "repo_ref", "version", "package_name", "framework_name", "compile_script"):
        if key in section:
            values[key] = str(expand_env(section[key], environ))
    for key in ("source_dir", "build_dir", "platform_build_root"):
        if key in section:
            values[key] = Path(expand_env(section[key], environ))
    for key in ("build_timeout", "git_timeout"):
        if key in section:
            if not isinstance(section[key], int) or section[key] <= 0:
                raise ConfigError(f"vlckit.{key} must be a positive integer")
            values[key] = section[key]
    if "common_flags" in section:
        values["common_flags"] = _parse_flags(section["common_flags"], environ, "vlckit.common_flags")

    platforms_config = section.get("platforms", {})
    if not isinstance(platforms_config, dict):
        raise ConfigError("[vlckit.platforms] must be a table")
    by_key = {p.key: p for p in values["platforms"]}
    for key, overrides in platforms_config.items():
        if key not in by_key:
            raise ConfigError(
                f"Unsupported platform in config: {key} (supported: {', '.join(SUPPORTED_PLATFORMS)})"
            )
        if not isinstance(overrides, dict):
            raise ConfigError(f"[vlckit.platforms.{key}] must be a table")
        platform = by_key[key]
        if "flags" in overrides:
            platform = replace(
                platform,
                flags=_parse_flags(overrides["flags"], environ, f"vlckit.platforms.{key}.flags"),
            )
        if "output_dir" in overrides:
            platform = replace(platform, output_dir=str(expand_env(overrides["output_dir"], environ)))
        by_key[key] = platform
    values["platforms"] = tuple(by_key[p.key] for p in values["platforms"])


def load_config(
    work_dir: str = ".",
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> BuildConfig:
    """
    Build the configuration for a run.

    Args:
        work_dir: Directory relative paths are resolved against
        environ: Environment mapping (default: os.environ)
        config_file: Explicit TOML file; VLCKIT.toml in work_dir is used if present
        overrides: Command line values, None entries are ignored

    Returns:
        BuildConfig with absolute paths
    """
    environ = os.environ if environ is None else environ
    base_dir = Path(work_dir).resolve()
    values: Dict[str, Any] = {"platforms": DEFAULT_PLATFORMS}

    if config_file:
        config_path = Path(config_file)
        if not config_path.is_absolute():
            config_path = base_dir / config_path
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_path = base_dir / CONFIG_FILE_NAME
    if config_path.is_file():
        _apply_toml(values, load_toml_file(config_path), environ)

    for env_name, key in ENV_OVERRIDES.items():
        env_value = environ.get(env_name)
        if env_value:
            values[key] = env_value

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    for key in ("source_dir", "build_dir", "platform_build_root"):
        if values.get(key) is not None:
            path = Path(values[key])
            values[key] = path if path.is_absolute() else base_dir / path
    values.setdefault("source_dir", base_dir / DEFAULT_SOURCE_DIR)
    values.setdefault("build_dir", base_dir / DEFAULT_BUILD_DIR)

    config = BuildConfig(**values)
    if not config.version.strip():
        raise ConfigError("version must not be empty")
    if "/" in config.version or "/" in config.package_name:
        raise ConfigError("version and package_name must not contain '/'")
    return config
