#!/usr/bin/env python3
"""
Tests for the subprocess runner.

Run with: python3 -m pytest test_cmd_util.py
"""

import sys
import tempfile
import unittest

from vlckit_xcf.utils.cmd.cmd_util import (
    NOT_FOUND_RETURN_CODE,
    TIMEOUT_RETURN_CODE,
    ProcessResult,
    SubprocessRunner,
    format_command,
)


class TestSubprocessRunner(unittest.TestCase):
    def setUp(self):
        self.runner = SubprocessRunner()

    def test_captures_output(self):
        result = self.runner.run(sys.executable, ["-c", "print('built')"])
        self.assertTrue(result.success)
        self.assertEqual(result.stdout.strip(), "built")

    def test_nonzero_exit(self):
        result = self.runner.run(
            sys.executable, ["-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        self.assertFalse(result.success)
        self.assertEqual(result.returncode, 3)
        self.assertEqual(result.stderr, "boom")

    def test_cwd(self):
        with tempfile.TemporaryDirectory() as tmp:
            result = self.runner.run(sys.executable, ["-c", "import os; print(os.getcwd())"], cwd=tmp)
        self.assertTrue(result.success)
        self.assertTrue(result.stdout.strip().endswith(tmp.split("/")[-1]))

    def test_missing_executable(self):
        result = self.runner.run("definitely-not-a-real-tool-xcf", ["--version"])
        self.assertEqual(result.returncode, NOT_FOUND_RETURN_CODE)
        self.assertIn("definitely-not-a-real-tool-xcf", result.stderr)

    def test_timeout(self):
        result = self.runner.run(sys.executable, ["-c", "import time; time.sleep(5)"], timeout=1)
        self.assertEqual(result.returncode, TIMEOUT_RETURN_CODE)
        self.assertIn("Failed for timeout", result.stderr)


class TestProcessResult(unittest.TestCase):
    def test_output_joins_streams(self):
        result = ProcessResult(1, "out\n", "err\n")
        self.assertEqual(result.output, "out\nerr")

    def test_output_skips_empty(self):
        self.assertEqual(ProcessResult(1, "", "err").output, "err")


class TestFormatCommand(unittest.TestCase):
    def test_quotes_arguments(self):
        self.assertEqual(
            format_command("./compileAndBuildVLCKit.sh", ["-a", "x86_64 arm64"]),
            "./compileAndBuildVLCKit.sh -a 'x86_64 arm64'",
        )


if __name__ == '__main__':
    unittest.main()
