#!/usr/bin/env python3
"""
Tests for the per-platform builder.

Run with: python3 -m pytest test_build_platform.py
"""

import tempfile
import threading
import unittest
from pathlib import Path

from vlckit_xcf.build_scripts.build_errors import BuildError
from vlckit_xcf.build_scripts.build_platform import (
    build_platform,
    build_platforms,
    extract_key_error_lines,
    get_build_args,
)
from vlckit_xcf.utils.apple.config import BuildConfig
from vlckit_xcf.utils.cmd.cmd_util import ProcessResult, ProcessRunner
from vlckit_xcf.utils.fs.fs_util import LocalFileSystem


class FakeScriptRunner(ProcessRunner):
    """Fails for the platforms whose first flag set is listed in failing."""

    def __init__(self, failing_flags=()):
        self.calls = []
        self.failing_flags = [list(f) for f in failing_flags]
        self.lock = threading.Lock()

    def run(self, command, args=(), cwd=None, capture=True, timeout=None):
        with self.lock:
            self.calls.append((command, list(args), cwd, capture))
        platform_flags = list(args[:-3])
        if platform_flags in self.failing_flags:
            return ProcessResult(1, "", "xcodebuild: error: SDK \"appletvos\" cannot be located.")
        return ProcessResult(0, "** BUILD SUCCEEDED **", "")


class TestBuildPlatform(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.config = BuildConfig(source_dir=self.root / "VLCKit-Source", build_dir=self.root / "build")
        self.config.source_dir.mkdir()
        (self.config.source_dir / "compileAndBuildVLCKit.sh").write_text("#!/bin/sh\n")
        self.fs = LocalFileSystem()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_build_args(self):
        tvos = self.config.get_platform("tvos")
        self.assertEqual(get_build_args(self.config, tvos), ["-f", "-t", "-a", "all", "-r"])

    def test_runs_upstream_script_in_checkout(self):
        runner = FakeScriptRunner()
        result = build_platform(self.config, self.config.get_platform("ios"), runner, self.fs)

        self.assertTrue(result.success)
        command, args, cwd, capture = runner.calls[0]
        self.assertEqual(command, "./compileAndBuildVLCKit.sh")
        self.assertEqual(args, ["-f", "-a", "all", "-r"])
        self.assertEqual(cwd, str(self.config.source_dir))
        self.assertFalse(capture)

    def test_script_failure_is_a_result(self):
        runner = FakeScriptRunner(failing_flags=[("-f", "-t")])
        result = build_platform(self.config, self.config.get_platform("tvos"), runner, self.fs)

        self.assertFalse(result.success)
        self.assertEqual(result.returncode, 1)
        self.assertIn("cannot be located", result.output)

    def test_missing_checkout(self):
        config = BuildConfig(source_dir=self.root / "nowhere")
        with self.assertRaises(BuildError) as context:
            build_platform(config, config.get_platform("ios"), FakeScriptRunner(), self.fs)
        self.assertIn("fetch", context.exception.message)

    def test_missing_script(self):
        (self.config.source_dir / "compileAndBuildVLCKit.sh").unlink()
        with self.assertRaises(BuildError):
            build_platform(self.config, self.config.get_platform("ios"), FakeScriptRunner(), self.fs)


class TestBuildPlatforms(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.config = BuildConfig(source_dir=self.root / "VLCKit-Source", build_dir=self.root / "build")
        self.config.source_dir.mkdir()
        (self.config.source_dir / "compileAndBuildVLCKit.sh").write_text("#!/bin/sh\n")
        self.fs = LocalFileSystem()
        self.platforms = self.config.sorted_platforms()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_all_succeed(self):
        summary = build_platforms(self.config, self.platforms, FakeScriptRunner(), self.fs)

        self.assertTrue(summary.ok)
        self.assertEqual([p.key for p in summary.succeeded], ["ios", "macos", "tvos", "xros"])

    def test_continue_after_failure(self):
        runner = FakeScriptRunner(failing_flags=[("-f",)])
        summary = build_platforms(self.config, self.platforms, runner, self.fs)

        self.assertFalse(summary.ok)
        self.assertEqual(len(runner.calls), 4)
        self.assertEqual([p.key for p in summary.failed], ["ios"])
        self.assertEqual([p.key for p in summary.succeeded], ["macos", "tvos", "xros"])
        self.assertEqual(summary.skipped, [])

    def test_fail_fast(self):
        runner = FakeScriptRunner(failing_flags=[("-x",)])
        summary = build_platforms(self.config, self.platforms, runner, self.fs, fail_fast=True)

        self.assertEqual(len(runner.calls), 2)
        self.assertEqual([p.key for p in summary.failed], ["macos"])
        self.assertEqual([p.key for p in summary.skipped], ["tvos", "xros"])

    def test_parallel_waits_for_all(self):
        runner = FakeScriptRunner(failing_flags=[("-f", "-i")])
        summary = build_platforms(self.config, self.platforms, runner, self.fs, jobs=3)

        self.assertEqual(len(runner.calls), 4)
        # parallel builds capture output so logs do not interleave
        self.assertTrue(all(call[3] for call in runner.calls))
        self.assertEqual([r.platform.key for r in summary.results], ["ios", "macos", "tvos", "xros"])
        self.assertEqual([p.key for p in summary.failed], ["xros"])

    def test_parallel_fail_fast_accounts_for_every_platform(self):
        runner = FakeScriptRunner(failing_flags=[("-f",)])
        summary = build_platforms(self.config, self.platforms, runner, self.fs, fail_fast=True, jobs=2)

        built = [r.platform.key for r in summary.results]
        skipped = [p.key for p in summary.skipped]
        self.assertEqual(sorted(built + skipped), ["ios", "macos", "tvos", "xros"])
        self.assertEqual(len(runner.calls), len(built))
        self.assertIn("ios", [p.key for p in summary.failed])
        self.assertFalse(summary.ok)


class TestExtractKeyErrorLines(unittest.TestCase):
    def test_keyword_lines(self):
        output = "step 1\nstep 2\nerror: no such module\nstep 3"
        self.assertEqual(extract_key_error_lines(output), ["error: no such module"])

    def test_falls_back_to_tail(self):
        output = "\n".join(f"line {i}" for i in range(20))
        self.assertEqual(extract_key_error_lines(output, max_lines=3), ["line 17", "line 18", "line 19"])


if __name__ == '__main__':
    unittest.main()
