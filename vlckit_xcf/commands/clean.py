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

from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace
from vlckit_xcf.utils.fs.fs_util import FileSystem, format_size, get_dir_size


class Clean(CliCommand):
    name = "clean"

    def description(self) -> str:
        return """
        Remove the cloned VLCKit source and all build artifacts.

        Cleans the following directories:
        - VLCKit-Source/          # Upstream checkout (--source-dir)
        - build/                  # XCFramework, zip and checksum (--build-dir)

        Examples:
            vlckit-xcf clean                # Clean everything
            vlckit-xcf clean --dry-run      # Preview what will be cleaned
            vlckit-xcf clean --build-only   # Keep the checkout
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        only = parser.add_mutually_exclusive_group()
        only.add_argument(
            "--source-only",
            action="store_true",
            help="Clean only the VLCKit checkout",
        )
        only.add_argument(
            "--build-only",
            action="store_true",
            help="Clean only the build directory",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be cleaned without actually deleting",
        )
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)
        print("🧹 Cleaning build artifacts...")

        cleaner = ProjectCleaner(context.fs, dry_run=args.get("dry_run", False))
        if not args.get("build_only"):
            cleaner.remove_directory(config.source_dir)
        if not args.get("source_only"):
            cleaner.remove_directory(config.build_dir)
        cleaner.print_summary()

        if cleaner.failed_dirs:
            sys.exit(1)


class ProjectCleaner:
    def __init__(self, fs: FileSystem, dry_run=False):
        self.fs = fs
        self.dry_run = dry_run
        self.cleaned_dirs = []
        self.cleaned_size = 0
        self.failed_dirs = []

    def remove_directory(self, dir_path, dir_name=None):
        """Remove a directory and track the result"""
        display_name = dir_name or f"{dir_path.name}/"
        if not self.fs.exists(dir_path):
            print(f"  ℹ️  {display_name} does not exist")
            return False

        size = get_dir_size(dir_path)

        if self.dry_run:
            print(f"  [DRY RUN] Would remove: {display_name} ({format_size(size)})")
            return True

        try:
            self.fs.remove_tree(dir_path)
        except OSError as e:
            self.failed_dirs.append((display_name, str(e)))
            print(f"  ❌ Failed to remove {display_name}: {e}")
            return False
        self.cleaned_dirs.append(display_name)
        self.cleaned_size += size
        print(f"  ✅ Removed: {display_name} ({format_size(size)})")
        return True

    def print_summary(self):
        """Print summary of cleaning operation"""
        print("\n" + "="*60)
        print("  Cleaning Summary")
        print("="*60)

        if self.dry_run:
            print("  [DRY RUN MODE - No files were actually deleted]")

        if self.cleaned_dirs:
            print(f"  ✅ Successfully cleaned {len(self.cleaned_dirs)} directories:")
            for dir_name in self.cleaned_dirs:
                print(f"     - {dir_name}")
            print(f"\n  💾 Total space freed: {format_size(self.cleaned_size)}")
        else:
            print("  ℹ️  No directories were cleaned")

        if self.failed_dirs:
            print(f"\n  ❌ Failed to clean {len(self.failed_dirs)} directories:")
            for dir_name, error in self.failed_dirs:
                print(f"     - {dir_name}: {error}")

        print("="*60 + "\n")

        if self.dry_run:
            print("💡 Tip: Run without --dry-run to actually delete the files")
        elif not self.failed_dirs:
            print("✅ Clean complete")
