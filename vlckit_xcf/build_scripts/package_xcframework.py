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
Package the universal XCFramework as a versioned zip plus a SHA-256 record.

The zip is reproducible: entries are sorted, timestamps are pinned to
1980-01-01 and symlinks inside framework bundles are stored as links, so the
same XCFramework and version always give the same archive bytes.
"""

import hashlib
import os
import shutil
import stat
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from vlckit_xcf.build_scripts.build_errors import PackageError
from vlckit_xcf.utils.apple.config import BuildConfig
from vlckit_xcf.utils.fs.fs_util import FileSystem, format_size

ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)
UNIX_SYSTEM = 3


@dataclass
class PackageReport:
    package_path: Path
    checksum_path: Path
    digest: str
    size_bytes: int


def calculate_checksum(file_path: Path) -> str:
    """
    Calculate SHA256 checksum of a file.

    Args:
        file_path: Path to file

    Returns:
        SHA256 checksum as hex string
    """
    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(4096), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.hexdigest()


def write_checksum_record(checksum_path: Path, digest: str, filename: str):
    """Write `<digest>  <filename>` in the format of `shasum -a 256`."""
    with open(checksum_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(f"{digest}  {filename}\n")


def read_checksum_record(checksum_path: Path) -> Tuple[str, str]:
    with open(checksum_path, "r", encoding="utf-8") as f:
        line = f.readline().rstrip("\n")
    digest, _, filename = line.partition("  ")
    return digest, filename


def _collect_entries(root: Path) -> List[Tuple[str, Path, os.stat_result]]:
    """
    Everything under root as (arcname, path, lstat), sorted by arcname.

    Symlinked directories are kept as links and not descended into.

    Raises:
        PackageError: if root contains something other than a regular file,
            a directory or a symlink (FIFO, socket, device)
    """
    base = root.parent
    paths = [root]
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            paths.append(Path(dirpath) / name)

    entries = []
    for path in paths:
        st = os.lstat(path)
        arcname = path.relative_to(base).as_posix()
        if not (stat.S_ISREG(st.st_mode) or stat.S_ISDIR(st.st_mode) or stat.S_ISLNK(st.st_mode)):
            raise PackageError(f"Unsupported file type in XCFramework: {path}")
        if stat.S_ISDIR(st.st_mode):
            arcname += "/"
        entries.append((arcname, path, st))
    entries.sort(key=lambda entry: entry[0])
    return entries


def _zip_info(arcname: str, mode: int) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(filename=arcname, date_time=ZIP_DATE_TIME)
    info.create_system = UNIX_SYSTEM
    info.external_attr = mode << 16
    return info


def build_zip(xcframework_path: Path, output_zip: Path):
    """
    Write a deterministic zip with xcframework_path as its top-level entry.

    Args:
        xcframework_path: XCFramework directory
        output_zip: Zip file to create
    """
    entries = _collect_entries(xcframework_path)
    with zipfile.ZipFile(output_zip, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for arcname, path, st in entries:
            if stat.S_ISLNK(st.st_mode):
                info = _zip_info(arcname, stat.S_IFLNK | 0o755)
                info.compress_type = zipfile.ZIP_STORED
                archive.writestr(info, os.readlink(path))
            elif stat.S_ISDIR(st.st_mode):
                info = _zip_info(arcname, stat.S_IFDIR | stat.S_IMODE(st.st_mode))
                # MS-DOS directory flag
                info.external_attr |= 0x10
                archive.writestr(info, b"")
            else:
                info = _zip_info(arcname, stat.S_IFREG | stat.S_IMODE(st.st_mode))
                info.compress_type = zipfile.ZIP_DEFLATED
                with open(path, "rb") as src, archive.open(
                    info, "w", force_zip64=st.st_size >= zipfile.ZIP64_LIMIT
                ) as dest:
                    shutil.copyfileobj(src, dest)


def _remove_outputs(*paths: Path):
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError:
            pass


def create_package(config: BuildConfig, fs: FileSystem) -> PackageReport:
    """
    Zip config.artifact_path and write its checksum record.

    Old zip and checksum files of the same version are replaced.

    Raises:
        PackageError: if the XCFramework is missing or archiving/hashing fails
    """
    artifact_path = config.artifact_path
    package_path = config.package_path
    checksum_path = config.checksum_path

    print(f"📦 Creating distributable package (version {config.version})...")
    if not fs.is_dir(artifact_path):
        raise PackageError(
            f"XCFramework not found at {artifact_path}. Run 'vlckit-xcf merge' first."
        )

    # the zip only appears under its release name once it is complete
    partial_path = package_path.with_name(package_path.name + ".tmp")
    try:
        for path in (package_path, checksum_path, partial_path):
            if fs.exists(path):
                fs.remove_tree(path)
        build_zip(artifact_path, partial_path)
        os.replace(partial_path, package_path)
        size_bytes = os.path.getsize(package_path)
        print(f"✅ Package created at {package_path}")
        print(f"📊 Package size: {format_size(size_bytes)}")

        print("🔐 Generating SHA256 checksum...")
        digest = calculate_checksum(package_path)
        write_checksum_record(checksum_path, digest, config.package_filename)
    except PackageError:
        _remove_outputs(package_path, checksum_path, partial_path)
        raise
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        _remove_outputs(package_path, checksum_path, partial_path)
        raise PackageError(f"Failed to create {package_path.name}: {e}") from e

    print(f"{digest}  {config.package_filename}")
    print(f"✅ Checksum saved to {checksum_path}")
    return PackageReport(package_path, checksum_path, digest, size_bytes)
