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

"""Errors raised by the pipeline stages."""


class ConfigError(Exception):
    """Exception raised for invalid configuration"""
    pass


class PipelineError(Exception):
    """
    A fatal failure of one pipeline stage.

    Args:
        message: One-line description of what failed
        stage: Stage label shown to the user (fetch, build, merge, package)
        output: Output of the external tool, shown verbatim
    """

    stage = "pipeline"

    def __init__(self, message: str, output: str = "", stage: str = None):
        super().__init__(message)
        self.message = message
        self.output = output or ""
        if stage:
            self.stage = stage


class FetchError(PipelineError):
    stage = "fetch"


class BuildError(PipelineError):
    stage = "build"


class DiscoveryError(PipelineError):
    """No variant bundle was found for any platform"""
    stage = "merge"


class MergeError(PipelineError):
    stage = "merge"


class PackageError(PipelineError):
    stage = "package"
