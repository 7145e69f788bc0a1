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

from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace


class Help(CliCommand):
    name = "help"

    def description(self) -> str:
        return """Show detailed help information for vlckit-xcf commands.

Use 'vlckit-xcf <command> --help' for command-specific help.
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)

        print("\n" + "=" * 70)
        print("vlckit-xcf - VLCKit XCFramework Build System")
        print("=" * 70)

        print("\nAvailable commands:")
        print("  all                  - Fetch, build all platforms, merge and package")
        print("  fetch                - Clone the VLCKit repository (removes an old checkout)")
        print("  build <platform>     - Build one platform: ios, macos, tvos, xros")
        print("  build-all            - Build all platforms")
        print("  merge                - Create the universal xcframework")
        print("  package              - Create distributable zip with checksum")
        print("  clean                - Remove the checkout and all build artifacts")
        print("  help                 - Show this help message")

        print("\nExample usage:")
        print("  vlckit-xcf all                        - Build everything and package it")
        print("  vlckit-xcf all --version 3.6.0        - Build with specific version number")
        print("  vlckit-xcf build-all --fail-fast      - Stop at the first failing platform")
        print("  vlckit-xcf package --version 3.6.0    - Package an already merged xcframework")
        print("  vlckit-xcf clean                      - Clean all build artifacts")

        print("\nConfiguration (lowest to highest precedence):")
        print("  VLCKIT.toml          - [vlckit] table, [vlckit.platforms.<key>] flags/output_dir")
        print("  Environment          - VLCKIT_REPO, VLCKIT_REF, VLCKIT_DIR, BUILD_DIR, VERSION")
        print("  Options              - --repo, --ref, --source-dir, --build-dir, --version")

        print("\nCurrent configuration:")
        print(config.get_config_summary())
        print("")
