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

import shlex
import subprocess
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

# timeout is 3 hours
DEFAULT_TIMEOUT_SECOND = 3 * 3600

TIMEOUT_RETURN_CODE = -9
NOT_FOUND_RETURN_CODE = 127


@dataclass
class ProcessResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """stdout and stderr joined, for error reports"""
        parts = [p.strip() for p in (self.stdout, self.stderr) if p and p.strip()]
        return "\n".join(parts)


def format_command(command: str, args: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(x)) for x in [command, *args])


class ProcessRunner:
    """Runs external tools. Pipeline stages only talk to this interface."""

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        cwd: Optional[str] = None,
        capture: bool = True,
        timeout: Optional[int] = None,
    ) -> ProcessResult:
        raise NotImplementedError


class SubprocessRunner(ProcessRunner):
    """
    Run commands with subprocess, without a shell.

    With capture=False the output goes straight to the terminal, which is what
    the multi-hour upstream builds want. Timeouts and missing executables are
    reported through the return code, like exec_command did.
    """

    def run(self, command, args=(), cwd=None, capture=True, timeout=None):
        cmd: List[str] = [str(command)] + [str(a) for a in args]
        timeout_second = timeout or DEFAULT_TIMEOUT_SECOND
        start_mills = int(time.time() * 1000)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                capture_output=capture,
                text=True,
                timeout=timeout_second,
            )
        except subprocess.TimeoutExpired:
            use_time = int(time.time() * 1000) - start_mills
            return ProcessResult(
                TIMEOUT_RETURN_CODE,
                "",
                f"Failed for timeout({TIMEOUT_RETURN_CODE}), use_time: {use_time}ms, cmd: {format_command(command, args)}",
            )
        except (FileNotFoundError, PermissionError) as e:
            return ProcessResult(NOT_FOUND_RETURN_CODE, "", f"Failed to run {command}: {e}")
        return ProcessResult(result.returncode, result.stdout or "", result.stderr or "")
