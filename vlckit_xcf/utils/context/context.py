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

import os

from vlckit_xcf.utils.cmd.cmd_util import SubprocessRunner
from vlckit_xcf.utils.fs.fs_util import LocalFileSystem


# This context data class to save the context of the command
class CliContext:
    def __init__(self, runner=None, fs=None, environ=None, work_dir=None):
        # runner and fs are swapped for fakes in tests
        self.runner = runner or SubprocessRunner()
        self.fs = fs or LocalFileSystem()
        self.environ = os.environ if environ is None else environ
        self.work_dir = work_dir or os.getcwd()
