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
import time

from vlckit_xcf.build_scripts.build_errors import PipelineError
from vlckit_xcf.build_scripts.build_xcframework import merge_xcframework
from vlckit_xcf.build_scripts.fetch_source import fetch_source
from vlckit_xcf.build_scripts.package_xcframework import create_package
from vlckit_xcf.commands.build_all import BuildAll
from vlckit_xcf.commands.package import print_release_summary
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace
from vlckit_xcf.utils.fs.fs_util import format_elapsed_time


class All(BuildAll):
    name = "all"

    def description(self) -> str:
        return """Run the whole pipeline: fetch, build-all, merge and package.

If a platform fails to build, the run stops before merging unless
--allow-partial is given; the universal XCFramework then contains only the
platforms that built.

EXAMPLES:
    vlckit-xcf all --version 3.6.0
    vlckit-xcf all --skip-fetch --platforms ios,macos
    vlckit-xcf all --allow-partial
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        parser.add_argument(
            "--skip-fetch",
            action="store_true",
            help="reuse the existing checkout instead of cloning again",
        )
        parser.add_argument(
            "--allow-partial",
            action="store_true",
            help="merge and package even if some platforms failed to build",
        )
        self.add_build_all_arguments(parser)
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        start_time = time.time()
        config = self.load_config(context, args)
        print("=" * 60)
        print("VLCKit XCFramework build")
        print(config.get_config_summary())
        print("=" * 60)

        try:
            if args.get("skip_fetch"):
                print("⏭️  Skipping fetch, using existing checkout")
            else:
                fetch_source(config, context.runner, context.fs)

            summary = self.run_builds(context, config, args)
            if not summary.ok:
                if not args.get("allow_partial") or not summary.succeeded:
                    print("🛑 Stopping before merge (use --allow-partial to merge the platforms that built)")
                    sys.exit(1)
                print("⚠️  Continuing with the platforms that built")

            merge_xcframework(config, context.runner, context.fs)
            report = create_package(config, context.fs)
        except PipelineError as e:
            self.fail(e)

        print_release_summary(config, report)
        print(f"\n⏱ Completed in {format_elapsed_time(time.time() - start_time)}")
