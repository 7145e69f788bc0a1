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

"""
Run the upstream compileAndBuildVLCKit.sh once per platform.

The builder only runs the script; whatever tree it leaves behind is checked
later by the merge step.
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from vlckit_xcf.build_scripts.build_errors import BuildError
from vlckit_xcf.utils.apple.config import BuildConfig, Platform
from vlckit_xcf.utils.cmd.cmd_util import ProcessRunner, format_command
from vlckit_xcf.utils.fs.fs_util import FileSystem, format_elapsed_time

# Keywords that indicate important error messages
ERROR_KEYWORDS = [
    "ERROR:", "error:", "FAILED", "failed", "fatal:",
    "not found", "No such file", "Permission denied",
    "xcodebuild: error", "SDK", "undefined reference",
]


@dataclass
class PlatformBuildResult:
    platform: Platform
    success: bool
    returncode: int
    elapsed: float = 0.0
    output: str = ""


@dataclass
class BuildSummary:
    results: List[PlatformBuildResult] = field(default_factory=list)
    skipped: List[Platform] = field(default_factory=list)

    @property
    def succeeded(self) -> List[Platform]:
        return [r.platform for r in self.results if r.success]

    @property
    def failed(self) -> List[Platform]:
        return [r.platform for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failed and not self.skipped


def get_build_args(config: BuildConfig, platform: Platform) -> List[str]:
    return list(platform.flags) + list(config.common_flags)


def extract_key_error_lines(output: str, max_lines: int = 10) -> List[str]:
    """
    Pick the lines of a build log that explain a failure.

    Falls back to the last lines of the log when no keyword matches.
    """
    all_lines = [line.strip() for line in (output or "").strip().split("\n")]
    important_lines = []
    for line in all_lines:
        if not line:
            continue
        if any(kw.lower() in line.lower() for kw in ERROR_KEYWORDS) and line not in important_lines:
            important_lines.append(line)
    if not important_lines:
        important_lines = [line for line in all_lines[-max_lines:] if line]
    return important_lines[:max_lines]


def check_source_tree(config: BuildConfig, fs: FileSystem):
    if not fs.is_dir(config.source_dir):
        raise BuildError(
            f"VLCKit source not found at {config.source_dir}. Run 'vlckit-xcf fetch' first."
        )
    if not fs.exists(config.compile_script_path):
        raise BuildError(f"Build script not found: {config.compile_script_path}")


def build_platform(
    config: BuildConfig,
    platform: Platform,
    runner: ProcessRunner,
    fs: FileSystem,
    capture: bool = False,
) -> PlatformBuildResult:
    """
    Build all architectures and environments of one platform in release mode.

    Args:
        config: Build configuration
        platform: Platform to build
        runner: Process runner used for the upstream script
        fs: Filesystem view
        capture: Capture the script output instead of streaming it

    Returns:
        PlatformBuildResult; a nonzero exit of the script is a failed result

    Raises:
        BuildError: if the checkout or the build script is missing
    """
    check_source_tree(config, fs)

    args = get_build_args(config, platform)
    command = f"./{config.compile_script}"
    print(f"🔨 Building VLCKit for {platform.display_name}...")
    print(f"   {format_command(command, args)}")

    start = time.time()
    result = runner.run(
        command,
        args,
        cwd=str(config.source_dir),
        capture=capture,
        timeout=config.build_timeout,
    )
    elapsed = time.time() - start

    if result.success:
        print(f"✅ {platform.display_name} build complete ({format_elapsed_time(elapsed)})")
    else:
        print(
            f"❌ [build] {platform.display_name} build failed with exit code "
            f"{result.returncode} ({format_elapsed_time(elapsed)})"
        )
        for line in extract_key_error_lines(result.output):
            print(f"   {line}")
    return PlatformBuildResult(platform, result.success, result.returncode, elapsed, result.output)


def build_platforms(
    config: BuildConfig,
    platforms: Sequence[Platform],
    runner: ProcessRunner,
    fs: FileSystem,
    fail_fast: bool = False,
    jobs: int = 1,
) -> BuildSummary:
    """
    Build several platforms.

    Every platform is attempted unless fail_fast is set, in which case the
    platforms after the first failure are skipped. With jobs > 1 the builds
    run in a thread pool and this returns only after all of them finished.
    """
    check_source_tree(config, fs)
    summary = BuildSummary()
    total = len(platforms)

    if jobs <= 1 or total <= 1:
        for index, platform in enumerate(platforms, 1):
            print(f"\n{'=' * 60}")
            print(f"Building platform {index}/{total}: {platform.display_name}")
            print(f"{'=' * 60}")
            result = build_platform(config, platform, runner, fs)
            summary.results.append(result)
            if fail_fast and not result.success:
                summary.skipped.extend(platforms[index:])
                break
        return summary

    print(f"\n🚀 Starting parallel build with {jobs} workers...")
    results: Dict[str, PlatformBuildResult] = {}
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = {
            executor.submit(build_platform, config, platform, runner, fs, True): platform
            for platform in platforms
        }
        for future in as_completed(futures):
            if future.cancelled():
                continue
            platform = futures[future]
            result = future.result()
            results[platform.key] = result
            if fail_fast and not result.success:
                for pending in futures:
                    pending.cancel()

    for platform in platforms:
        if platform.key in results:
            summary.results.append(results[platform.key])
        else:
            summary.skipped.append(platform)
    return summary
