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
Merge the per-platform VLCKit builds into one universal XCFramework.

Every platform build leaves an xcframework under
<platform_build_root>/<output_dir>/VLCKit.xcframework whose subdirectories are
variant bundles like ios-arm64 or ios-arm64_x86_64-simulator. All variant
bundles that contain VLCKit.framework are handed to
`xcodebuild -create-xcframework` in one call.

Platforms without output are skipped, as long as at least one variant bundle
is found in total.
"""

import plistlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from vlckit_xcf.build_scripts.build_errors import DiscoveryError, MergeError
from vlckit_xcf.utils.apple.config import BuildConfig, Platform
from vlckit_xcf.utils.cmd.cmd_util import ProcessRunner
from vlckit_xcf.utils.fs.fs_util import FileSystem, format_size, get_dir_size

# <platform>-<arch and environment tokens>, e.g. ios-arm64_x86_64-simulator
VARIANT_NAME_PATTERN = re.compile(r"^[a-z]+(-[A-Za-z0-9_]+)+$")


@dataclass(frozen=True)
class VariantBundle:
    platform: Platform
    name: str  # directory name, e.g. ios-arm64
    path: Path
    framework_path: Path  # the inner .framework passed to xcodebuild


@dataclass(frozen=True)
class Found:
    platform: Platform
    path: Path
    bundles: Tuple[VariantBundle, ...] = ()


@dataclass(frozen=True)
class Absent:
    platform: Platform
    path: Path


DiscoveryResult = Union[Found, Absent]


@dataclass
class Discovery:
    results: List[DiscoveryResult] = field(default_factory=list)

    @property
    def bundles(self) -> List[VariantBundle]:
        bundles = []
        for result in self.results:
            if isinstance(result, Found):
                bundles.extend(result.bundles)
        return bundles

    @property
    def found_platforms(self) -> List[Platform]:
        return [r.platform for r in self.results if isinstance(r, Found) and r.bundles]

    @property
    def missing(self) -> List[Absent]:
        return [r for r in self.results if isinstance(r, Absent)]

    @property
    def empty(self) -> List[Found]:
        """Output directories that exist but hold no usable variant"""
        return [r for r in self.results if isinstance(r, Found) and not r.bundles]


@dataclass
class MergeReport:
    artifact_path: Path
    bundles: List[VariantBundle]
    missing_platforms: List[Platform]
    size_bytes: int = 0
    slices: List[str] = field(default_factory=list)


def is_variant_name(name: str) -> bool:
    return bool(VARIANT_NAME_PATTERN.match(name))


def discover_platform(config: BuildConfig, platform: Platform, fs: FileSystem) -> DiscoveryResult:
    """Collect the variant bundles one platform build produced."""
    output_path = config.platform_output_path(platform)
    if not fs.is_dir(output_path):
        return Absent(platform, output_path)

    bundles = []
    for name in fs.list_dirs(output_path):
        if not is_variant_name(name):
            continue
        variant_path = output_path / name
        framework_path = variant_path / config.inner_bundle_name
        if not fs.is_dir(framework_path):
            print(f"   ⚠️  Skipping {platform.output_dir}/{name}: no {config.inner_bundle_name}")
            continue
        bundles.append(VariantBundle(platform, name, variant_path, framework_path))
    bundles.sort(key=lambda b: b.name)
    return Found(platform, output_path, tuple(bundles))


def discover_variants(config: BuildConfig, fs: FileSystem) -> Discovery:
    """Run discovery for every configured platform, in platform key order."""
    discovery = Discovery()
    for platform in config.sorted_platforms():
        discovery.results.append(discover_platform(config, platform, fs))
    return discovery


def get_create_xcframework_args(bundles: List[VariantBundle], output_path: Path) -> List[str]:
    args = ["-create-xcframework"]
    for bundle in bundles:
        args.extend(["-framework", str(bundle.framework_path)])
    args.extend(["-output", str(output_path)])
    return args


def read_xcframework_slices(artifact_path: Path) -> List[str]:
    """
    Read the slices listed in an XCFramework's Info.plist.

    Returns:
        Sorted entries like "ios", "ios-simulator" or "macos"; empty if the
        manifest is missing or unreadable
    """
    info_plist = Path(artifact_path) / "Info.plist"
    if not info_plist.is_file():
        return []
    try:
        with open(info_plist, "rb") as f:
            manifest = plistlib.load(f)
    except (plistlib.InvalidFileException, ValueError, OSError) as e:
        print(f"   ⚠️  Warning: Failed to read {info_plist}: {e}")
        return []

    slices = set()
    for library in manifest.get("AvailableLibraries", []):
        platform_name = library.get("SupportedPlatform")
        if not platform_name:
            continue
        variant = library.get("SupportedPlatformVariant")
        slices.add(f"{platform_name}-{variant}" if variant else platform_name)
    return sorted(slices)


def format_missing_diagnostic(discovery: Discovery) -> str:
    lines = ["No variant bundles found for any platform. Expected directories:"]
    for absent in discovery.missing:
        lines.append(f"  - {absent.path} (missing, {absent.platform.display_name})")
    for found in discovery.empty:
        lines.append(f"  - {found.path} (no variant containing the framework, {found.platform.display_name})")
    return "\n".join(lines)


def merge_xcframework(config: BuildConfig, runner: ProcessRunner, fs: FileSystem) -> MergeReport:
    """
    Discover all variant bundles and merge them into config.artifact_path.

    Raises:
        DiscoveryError: if no platform produced a usable variant bundle;
            xcodebuild is not run in that case
        MergeError: if the output directory cannot be prepared or xcodebuild
            fails, with its output attached
    """
    print(f"📦 Creating universal xcframework (version {config.version})...")

    discovery = discover_variants(config, fs)
    bundles = discovery.bundles
    if not bundles:
        raise DiscoveryError(format_missing_diagnostic(discovery))

    for absent in discovery.missing:
        print(f"   ℹ️  {absent.platform.display_name}: no build output, skipped")
    for bundle in bundles:
        print(f"   + {bundle.platform.output_dir}/{bundle.name}")

    artifact_path = config.artifact_path
    try:
        fs.make_dirs(config.build_dir)
        if fs.exists(artifact_path):
            fs.remove_tree(artifact_path)
    except OSError as e:
        raise MergeError(f"Failed to prepare {artifact_path}: {e}") from e

    result = runner.run("xcodebuild", get_create_xcframework_args(bundles, artifact_path))
    if not result.success:
        raise MergeError(
            f"xcodebuild -create-xcframework failed with exit code {result.returncode}",
            output=result.output,
        )

    report = MergeReport(
        artifact_path=artifact_path,
        bundles=bundles,
        missing_platforms=[a.platform for a in discovery.missing],
        size_bytes=get_dir_size(artifact_path),
        slices=read_xcframework_slices(artifact_path),
    )

    print(f"✅ XCFramework created at {artifact_path}")
    print(f"📊 Framework size: {format_size(report.size_bytes)}")
    if report.slices:
        print(f"   Platforms: {', '.join(report.slices)}")
    print(f"\nVersion: {config.version}")
    return report
