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
from vlckit_xcf.build_scripts.build_platform import BuildSummary, build_platforms
from vlckit_xcf.utils.apple.config import BuildConfig
from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace
from vlckit_xcf.utils.fs.fs_util import format_elapsed_time


class BuildAll(CliCommand):
    name = "build-all"

    def description(self) -> str:
        return """Build VLCKit for every platform.

By default every platform is attempted even if an earlier one failed, and
the command exits with 1 when any of them failed. Use --fail-fast to stop at
the first failure.

EXAMPLES:
    vlckit-xcf build-all
    vlckit-xcf build-all --platforms ios,macos
    vlckit-xcf build-all --skip-platforms xros
    vlckit-xcf build-all --fail-fast
    vlckit-xcf build-all -j 2      # platforms in parallel, output is captured
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        self.add_build_all_arguments(parser)
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def add_build_all_arguments(self, parser):
        parser.add_argument(
            "--platforms",
            type=str,
            help="Comma-separated list of platforms to build (e.g., ios,macos)",
        )
        parser.add_argument(
            "--skip-platforms",
            type=str,
            help="Comma-separated list of platforms to skip",
        )
        parser.add_argument(
            "--fail-fast",
            action="store_true",
            help="stop after the first platform that fails",
        )
        parser.add_argument(
            "-j", "--jobs",
            type=int,
            default=1,
            help="Number of platforms built at the same time (default: 1)",
        )

    def get_platforms_to_build(self, config: BuildConfig, args: CliNameSpace) -> list:
        """Determine which platforms to build based on arguments"""
        all_platforms = config.platform_keys()
        if args.get("platforms"):
            keys = [p.strip().lower() for p in args.platforms.split(",") if p.strip()]
            invalid = [p for p in keys if p not in all_platforms]
            if invalid:
                print(f"ERROR: Invalid platforms: {', '.join(invalid)}")
                print(f"Valid platforms: {', '.join(all_platforms)}")
                sys.exit(1)
        else:
            keys = all_platforms

        if args.get("skip_platforms"):
            skip = [p.strip().lower() for p in args.skip_platforms.split(",")]
            keys = [p for p in keys if p not in skip]

        return [config.get_platform(key) for key in keys]

    def run_builds(self, context: CliContext, config: BuildConfig, args: CliNameSpace) -> BuildSummary:
        platforms = self.get_platforms_to_build(config, args)
        if not platforms:
            print("\nERROR: No platforms selected for building")
            sys.exit(1)

        jobs = max(1, args.get("jobs") or 1)
        print("=" * 60)
        print(f"Will build {len(platforms)} platforms: {', '.join(p.key for p in platforms)}")
        print(f"Parallel jobs: {jobs}" + (" (sequential)" if jobs == 1 else " (parallel)"))
        print("=" * 60)

        start_time = time.time()
        try:
            summary = build_platforms(
                config,
                platforms,
                context.runner,
                context.fs,
                fail_fast=args.get("fail_fast", False),
                jobs=jobs,
            )
        except PipelineError as e:
            self.fail(e)
        self.print_summary(summary, time.time() - start_time)
        return summary

    def print_summary(self, summary: BuildSummary, elapsed: float):
        print("\n" + "=" * 60)
        print("  Build Summary")
        print("=" * 60)
        for result in summary.results:
            mark = "✅" if result.success else "❌"
            print(f"  {mark} {result.platform.display_name} ({format_elapsed_time(result.elapsed)})")
        for platform in summary.skipped:
            print(f"  ⏭️  {platform.display_name} (skipped)")
        print("=" * 60)
        if summary.ok:
            print(f"✅ All platforms built successfully ({format_elapsed_time(elapsed)})")
        else:
            failed = ", ".join(p.display_name for p in summary.failed)
            print(f"❌ [build] Failed platforms: {failed}")

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)
        summary = self.run_builds(context, config, args)
        if not summary.ok:
            sys.exit(1)
