#!/usr/bin/env python3
"""
Tests for the build configuration.

Run with: python3 -m pytest test_config.py
"""

import os
import tempfile
import unittest
from pathlib import Path

from vlckit_xcf.build_scripts.build_errors import ConfigError
from vlckit_xcf.utils.apple.config import (
    BuildConfig,
    DEFAULT_PLATFORMS,
    DEFAULT_REPO_URL,
    expand_env,
    load_config,
)


class TestBuildConfig(unittest.TestCase):
    """Test the derived names and paths."""

    def test_package_names_from_version(self):
        config = BuildConfig(version="3.6.0", build_dir=Path("/tmp/out"))

        self.assertEqual(config.package_filename, "VLCKit-3.6.0.xcframework.zip")
        self.assertEqual(config.checksum_filename, "VLCKit-3.6.0.sha256")
        self.assertEqual(config.package_path, Path("/tmp/out/VLCKit-3.6.0.xcframework.zip"))
        self.assertEqual(config.artifact_path, Path("/tmp/out/VLCKit.xcframework"))

    def test_platform_output_path_defaults_to_checkout_build_dir(self):
        config = BuildConfig(source_dir=Path("/src/VLCKit-Source"))
        ios = config.get_platform("ios")

        self.assertEqual(
            config.platform_output_path(ios),
            Path("/src/VLCKit-Source/build/iOS/VLCKit.xcframework"),
        )

    def test_get_platform_is_case_insensitive(self):
        config = BuildConfig()
        self.assertEqual(config.get_platform("tvOS").output_dir, "tvOS")

    def test_unknown_platform(self):
        with self.assertRaises(ConfigError) as context:
            BuildConfig().get_platform("watchos")
        self.assertIn("Unsupported platform", str(context.exception))

    def test_sorted_platforms(self):
        keys = [p.key for p in BuildConfig().sorted_platforms()]
        self.assertEqual(keys, ["ios", "macos", "tvos", "xros"])


class TestExpandEnv(unittest.TestCase):
    def test_both_syntaxes(self):
        environ = {"HOME": "/home/dev", "TAG": "3.6.0"}
        self.assertEqual(expand_env("${HOME}/src", environ), "/home/dev/src")
        self.assertEqual(expand_env("v$TAG", environ), "v3.6.0")

    def test_unknown_variable_is_kept(self):
        self.assertEqual(expand_env("${NOPE}", {}), "${NOPE}")

    def test_non_string_untouched(self):
        self.assertEqual(expand_env(42, {}), 42)


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.work_dir = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def write_toml(self, content, name="VLCKIT.toml"):
        path = self.work_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_defaults(self):
        config = load_config(str(self.work_dir), environ={})

        self.assertEqual(config.repo_url, DEFAULT_REPO_URL)
        self.assertEqual(config.version, "1.0.0")
        self.assertEqual(config.source_dir, self.work_dir.resolve() / "VLCKit-Source")
        self.assertEqual(config.build_dir, self.work_dir.resolve() / "build")
        self.assertEqual(config.platforms, DEFAULT_PLATFORMS)
        self.assertEqual(config.common_flags, ("-a", "all", "-r"))

    def test_toml_file(self):
        self.write_toml(
            """
[vlckit]
repo_url = "https://example.com/VLCKit.git"
repo_ref = "3.6.0"
version = "3.6.0"
source_dir = "${SRC_ROOT}/vlckit"
common_flags = ["-a", "all"]

[vlckit.platforms.macos]
flags = "-x -y"
output_dir = "macOSX"
"""
        )
        config = load_config(str(self.work_dir), environ={"SRC_ROOT": "/opt/src"})

        self.assertEqual(config.repo_url, "https://example.com/VLCKit.git")
        self.assertEqual(config.repo_ref, "3.6.0")
        self.assertEqual(config.version, "3.6.0")
        self.assertEqual(config.source_dir, Path("/opt/src/vlckit"))
        self.assertEqual(config.common_flags, ("-a", "all"))
        macos = config.get_platform("macos")
        self.assertEqual(macos.flags, ("-x", "-y"))
        self.assertEqual(macos.output_dir, "macOSX")
        # other platforms keep their defaults
        self.assertEqual(config.get_platform("ios").flags, ("-f",))

    def test_precedence(self):
        self.write_toml('[vlckit]\nversion = "1.1.0"\nbuild_dir = "toml-build"\n')

        config = load_config(str(self.work_dir), environ={"VERSION": "2.0.0"})
        self.assertEqual(config.version, "2.0.0")
        self.assertEqual(config.build_dir, self.work_dir.resolve() / "toml-build")

        config = load_config(
            str(self.work_dir),
            environ={"VERSION": "2.0.0", "BUILD_DIR": "env-build"},
            overrides={"version": "3.0.0", "repo_url": None},
        )
        self.assertEqual(config.version, "3.0.0")
        self.assertEqual(config.build_dir, self.work_dir.resolve() / "env-build")
        self.assertEqual(config.repo_url, DEFAULT_REPO_URL)

    def test_explicit_config_file(self):
        path = self.write_toml('[vlckit]\npackage_name = "MobileVLCKit"\n', name="custom.toml")
        config = load_config(str(self.work_dir), environ={}, config_file=str(path))
        self.assertEqual(config.package_filename, "MobileVLCKit-1.0.0.xcframework.zip")

    def test_missing_explicit_config_file(self):
        with self.assertRaises(ConfigError):
            load_config(str(self.work_dir), environ={}, config_file="missing.toml")

    def test_invalid_toml(self):
        self.write_toml("[vlckit\nversion = ")
        with self.assertRaises(ConfigError) as context:
            load_config(str(self.work_dir), environ={})
        self.assertIn("Invalid TOML", str(context.exception))

    def test_unknown_platform_in_toml(self):
        self.write_toml('[vlckit.platforms.watchos]\nflags = "-w"\n')
        with self.assertRaises(ConfigError):
            load_config(str(self.work_dir), environ={})

    def test_bad_flags_type(self):
        self.write_toml("[vlckit]\ncommon_flags = 3\n")
        with self.assertRaises(ConfigError):
            load_config(str(self.work_dir), environ={})

    def test_empty_version(self):
        with self.assertRaises(ConfigError):
            load_config(str(self.work_dir), environ={}, overrides={"version": " "})

    def test_absolute_source_dir_kept(self):
        config = load_config(
            str(self.work_dir), environ={"VLCKIT_DIR": os.path.join(os.sep, "srv", "vlckit")}
        )
        self.assertEqual(config.source_dir, Path(os.sep, "srv", "vlckit"))


if __name__ == '__main__':
    unittest.main()
