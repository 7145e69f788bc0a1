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

"""Apple platform configuration for vlckit-xcf."""

from .config import BuildConfig, Platform, load_config

__all__ = ['BuildConfig', 'Platform', 'load_config']
