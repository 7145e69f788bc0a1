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

from vlckit_xcf.build_scripts.build_errors import PipelineError
from vlckit_xcf.build_scripts.build_xcframework import merge_xcframework
from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace


class Merge(CliCommand):
    name = "merge"

    def description(self) -> str:
        return """Merge the per-platform builds into one universal XCFramework.

Looks for variant bundles (ios-arm64, ios-arm64_x86_64-simulator, macos-...,
...) in <source-dir>/build/{iOS,macOS,tvOS,xrOS}/VLCKit.xcframework and hands
every one that contains VLCKit.framework to `xcodebuild -create-xcframework`.

Platforms that were not built are skipped. The command fails if no variant
bundle was found at all.

OUTPUT:
    build/VLCKit.xcframework

EXAMPLES:
    vlckit-xcf merge
    vlckit-xcf merge --build-dir dist
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)
        try:
            merge_xcframework(config, context.runner, context.fs)
        except PipelineError as e:
            self.fail(e)
