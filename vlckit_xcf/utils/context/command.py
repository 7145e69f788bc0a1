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

import argparse
import sys
from pathlib import Path

from vlckit_xcf.build_scripts.build_errors import ConfigError, PipelineError
from vlckit_xcf.utils.apple.config import BuildConfig, load_config
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace


# Base class of every subcommand
class CliCommand:
    # name typed on the command line, e.g. build-all
    name = ""

    def description(self) -> str:
        raise NotImplementedError

    def cli(self, argv=None) -> CliNameSpace:
        raise NotImplementedError

    def exec(self, context: CliContext, args: CliNameSpace):
        raise NotImplementedError

    def new_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog=f"vlckit-xcf {self.name}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )

    def add_config_arguments(self, parser: argparse.ArgumentParser):
        group = parser.add_argument_group("configuration")
        group.add_argument(
            "--config",
            type=str,
            help="path of the TOML config file (default: ./VLCKIT.toml if present)",
        )
        group.add_argument(
            "--version",
            type=str,
            help="version used in the package and checksum file names (default: $VERSION or 1.0.0)",
        )
        group.add_argument(
            "--repo",
            type=str,
            help="upstream VLCKit git repository URL (default: $VLCKIT_REPO)",
        )
        group.add_argument(
            "--ref",
            type=str,
            help="branch or tag to clone (default: $VLCKIT_REF or the default branch)",
        )
        group.add_argument(
            "--source-dir",
            type=str,
            help="local checkout directory (default: $VLCKIT_DIR or ./VLCKit-Source)",
        )
        group.add_argument(
            "--build-dir",
            type=str,
            help="output directory (default: $BUILD_DIR or ./build)",
        )

    def parse_args(self, parser: argparse.ArgumentParser, argv=None) -> CliNameSpace:
        if argv is None:
            argv = list(sys.argv[1:])
            # drop the subcommand itself
            if self.name in argv:
                argv.remove(self.name)
        args, unknown = parser.parse_known_args(argv, namespace=CliNameSpace())
        if unknown:
            print(f"⚠️  Ignoring unknown arguments: {' '.join(unknown)}")
        return args

    def load_config(self, context: CliContext, args: CliNameSpace) -> BuildConfig:
        overrides = {
            "version": args.get("version"),
            "repo_url": args.get("repo"),
            "repo_ref": args.get("ref"),
            "source_dir": Path(args.source_dir) if args.get("source_dir") else None,
            "build_dir": Path(args.build_dir) if args.get("build_dir") else None,
        }
        try:
            return load_config(
                work_dir=context.work_dir,
                environ=context.environ,
                config_file=args.get("config"),
                overrides=overrides,
            )
        except ConfigError as e:
            print(f"❌ [config] {e}")
            sys.exit(1)

    def fail(self, error: PipelineError):
        """Report a fatal stage error and exit with status 1."""
        print(f"\n❌ [{error.stage}] {error.message}")
        if error.output:
            print(error.output)
        sys.exit(1)
