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

import sys

from vlckit_xcf.build_scripts.build_errors import ConfigError, PipelineError
from vlckit_xcf.build_scripts.build_platform import build_platform
from vlckit_xcf.utils.apple.config import SUPPORTED_PLATFORMS
from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace


class Build(CliCommand):
    name = "build"

    def description(self) -> str:
        return """Build VLCKit for one platform.

Runs compileAndBuildVLCKit.sh from the checkout with the platform flags plus
`-a all -r`, so every architecture and environment of the platform is built
in release mode in one pass.

SUPPORTED PLATFORMS:
    ios         iOS devices and simulators
    macos       macOS
    tvos        tvOS devices and simulators
    xros        visionOS devices and simulators

EXAMPLES:
    vlckit-xcf build ios
    vlckit-xcf build xros --source-dir ~/src/VLCKit

REQUIREMENTS:
    Xcode and command-line tools, a checkout from 'vlckit-xcf fetch'
        """

    def get_target_list(self) -> list:
        return list(SUPPORTED_PLATFORMS)

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        parser.add_argument(
            "target",
            metavar=f"{self.get_target_list()}",
            type=str.lower,
            choices=self.get_target_list(),
        )
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)
        try:
            platform = config.get_platform(args.target)
        except ConfigError as e:
            print(f"❌ [config] {e}")
            sys.exit(1)

        try:
            result = build_platform(config, platform, context.runner, context.fs)
        except PipelineError as e:
            self.fail(e)
        if not result.success:
            sys.exit(1)
