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
import shutil
from pathlib import Path
from typing import List


class FileSystem:
    """The part of the filesystem the pipeline looks at and changes."""

    def exists(self, path: Path) -> bool:
        raise NotImplementedError

    def is_dir(self, path: Path) -> bool:
        raise NotImplementedError

    def list_dirs(self, path: Path) -> List[str]:
        """Sorted names of the immediate subdirectories of path"""
        raise NotImplementedError

    def remove_tree(self, path: Path):
        raise NotImplementedError

    def make_dirs(self, path: Path):
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    def exists(self, path):
        return os.path.lexists(path)

    def is_dir(self, path):
        return os.path.isdir(path)

    def list_dirs(self, path):
        return sorted(
            entry.name for entry in os.scandir(path) if entry.is_dir()
        )

    def remove_tree(self, path):
        path = Path(path)
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)

    def make_dirs(self, path):
        Path(path).mkdir(parents=True, exist_ok=True)


def get_dir_size(path) -> int:
    """Get total size of directory in bytes, symlinks are not followed"""
    if os.path.isfile(path):
        return os.path.getsize(path)
    total_size = 0
    for dirpath, dirnames, filenames in os.walk(path):
        for filename in filenames:
            filepath = os.path.join(dirpath, filename)
            try:
                total_size += os.lstat(filepath).st_size
            except FileNotFoundError:
                # removed while walking
                continue
    return total_size


def format_size(size_bytes) -> str:
    """Format bytes to human-readable size"""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} TB"


def format_elapsed_time(elapsed: float) -> str:
    """Format elapsed time in a human-readable format."""
    if elapsed < 60:
        return f"{elapsed:.1f}s"
    elif elapsed < 3600:
        minutes = int(elapsed // 60)
        seconds = elapsed % 60
        return f"{minutes}m {seconds:.0f}s"
    else:
        hours = int(elapsed // 3600)
        minutes = int((elapsed % 3600) // 60)
        return f"{hours}h {minutes}m"
