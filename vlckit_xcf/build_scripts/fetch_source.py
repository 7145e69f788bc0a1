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
Fetch the upstream VLCKit source tree.

The checkout is always fresh: an existing source directory is removed before
cloning, there is no incremental pull.
"""

from pathlib import Path

from vlckit_xcf.build_scripts.build_errors import FetchError
from vlckit_xcf.utils.apple.config import BuildConfig
from vlckit_xcf.utils.cmd.cmd_util import ProcessRunner
from vlckit_xcf.utils.fs.fs_util import FileSystem


def get_clone_args(config: BuildConfig) -> list:
    args = ["clone"]
    if config.repo_ref:
        args.extend(["--branch", config.repo_ref])
    args.extend([config.repo_url, str(config.source_dir)])
    return args


def fetch_source(config: BuildConfig, runner: ProcessRunner, fs: FileSystem) -> Path:
    """
    Clone the upstream repository into config.source_dir.

    Args:
        config: Build configuration
        runner: Process runner used for git
        fs: Filesystem view

    Returns:
        Path to the fresh checkout

    Raises:
        FetchError: if the old checkout cannot be removed, the parent
            directory cannot be created or git fails
    """
    source_dir = config.source_dir
    print(f"📦 Cloning VLCKit repository: {config.repo_url}")

    if fs.exists(source_dir):
        print(f"⚠️  {source_dir.name} directory already exists. Removing...")
        try:
            fs.remove_tree(source_dir)
        except OSError as e:
            raise FetchError(f"Failed to remove {source_dir}: {e}") from e

    try:
        fs.make_dirs(source_dir.parent)
    except OSError as e:
        raise FetchError(f"Failed to create {source_dir.parent}: {e}") from e
    result = runner.run(
        "git",
        get_clone_args(config),
        cwd=str(source_dir.parent),
        timeout=config.git_timeout,
    )
    if not result.success:
        raise FetchError(
            f"Failed to clone repository {config.repo_url} (exit code {result.returncode})",
            output=result.output,
        )
    if not fs.is_dir(source_dir):
        raise FetchError(f"git clone succeeded but {source_dir} does not exist")

    print("✅ Clone complete")
    return source_dir
