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
import sys
import importlib
import argparse

from vlckit_xcf.utils.context.namespace import CliNameSpace
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]


def module_name_of(command: str) -> str:
    return command.replace("-", "_")


def class_name_of(command: str) -> str:
    return "".join(part.capitalize() for part in command.split("-"))


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """vlckit-xcf - VLCKit XCFramework Build Tool

Builds VLCKit for iOS, macOS, tvOS and visionOS with the upstream build
script and merges the results into one distributable XCFramework.

USAGE:
    vlckit-xcf <command> [options]

COMMANDS:
    all         Fetch, build all platforms, merge and package
    fetch       Clone the VLCKit repository
    build       Build VLCKit for one platform
    build-all   Build VLCKit for all platforms
    merge       Create the universal xcframework
    package     Zip the xcframework and write its SHA-256 checksum
    clean       Remove the checkout and build artifacts
    help        Show detailed help information

EXAMPLES:
    vlckit-xcf all --version 3.6.0     # Everything, like `make package VERSION=3.6.0`
    vlckit-xcf build ios               # Build iOS only
    vlckit-xcf merge                   # Merge whatever platforms were built
    vlckit-xcf clean                   # Start over

For more information on a specific command:
    vlckit-xcf <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if not command.startswith("_") and command.endswith(".py"):
                arr.append(os.path.splitext(command)[0].replace("_", "-"))
        return sorted(arr)

    def new_root_parser(self, add_help=True) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="vlckit-xcf",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs="?" if not add_help else None,
            choices=self.get_command_list(),
        )
        return parser

    def cli(self, argv=None) -> CliNameSpace:
        argv = sys.argv[1:] if argv is None else argv
        # Only `vlckit-xcf --help` shows the root help, `vlckit-xcf build --help` goes to build
        if len(argv) == 1 and argv[0] in ["--help", "-h"]:
            self.new_root_parser().print_help()
            sys.exit(0)

        parser = self.new_root_parser(add_help=False)
        args, unknown = parser.parse_known_args(argv, namespace=CliNameSpace())
        args.rest = list(argv)
        if args.subcommand:
            args.rest.remove(args.subcommand)
        return args

    def get_subcommand(self, subcommand: str) -> CliCommand:
        module = importlib.import_module(f"vlckit_xcf.commands.{module_name_of(subcommand)}")
        klass = getattr(module, class_name_of(subcommand))
        return klass()

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self.new_root_parser().print_help()
            sys.exit(1)

        sub_cmd = self.get_subcommand(args.subcommand)
        # now execute the subcommand
        sub_cmd.exec(context, sub_cmd.cli(args.rest))


def main(argv=None):
    cmd = Cli()
    try:
        cmd.exec(CliContext(), cmd.cli(argv))
    except KeyboardInterrupt:
        print("\n\n🛑 Build aborted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
