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
from vlckit_xcf.build_scripts.package_xcframework import PackageReport, create_package
from vlckit_xcf.utils.apple.config import BuildConfig
from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace


def print_release_summary(config: BuildConfig, report: PackageReport):
    print("")
    print("━" * 40)
    print("🎉 Build Complete!")
    print("━" * 40)
    print(f"Version:   {config.version}")
    print(f"Package:   {report.package_path}")
    print(f"Checksum:  {report.checksum_path}")
    print(f"SHA256:    {report.digest}")
    print("━" * 40)


class Package(CliCommand):
    name = "package"

    def description(self) -> str:
        return """Package the universal XCFramework for distribution.

Creates a reproducible zip of build/VLCKit.xcframework and a SHA-256 record
in the `shasum -a 256` format. Packaging the same XCFramework with the same
version again gives a byte-identical zip.

OUTPUT:
    build/VLCKit-<version>.xcframework.zip
    build/VLCKit-<version>.sha256

EXAMPLES:
    vlckit-xcf package --version 3.6.0
    VERSION=3.6.0 vlckit-xcf package
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)
        try:
            report = create_package(config, context.fs)
        except PipelineError as e:
            self.fail(e)
        print_release_summary(config, report)
