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

from vlckit_xcf.build_scripts.build_errors import PipelineError
from vlckit_xcf.build_scripts.fetch_source import fetch_source
from vlckit_xcf.utils.context.command import CliCommand
from vlckit_xcf.utils.context.context import CliContext
from vlckit_xcf.utils.context.namespace import CliNameSpace


class Fetch(CliCommand):
    name = "fetch"

    def description(self) -> str:
        return """Clone a fresh copy of the VLCKit source tree.

An existing checkout is removed first; there is no incremental update.

EXAMPLES:
    vlckit-xcf fetch
    vlckit-xcf fetch --ref 3.6.0
    vlckit-xcf fetch --repo https://github.com/videolan/vlckit.git
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = self.new_parser()
        self.add_config_arguments(parser)
        return self.parse_args(parser, argv)

    def exec(self, context: CliContext, args: CliNameSpace):
        config = self.load_config(context, args)
        try:
            fetch_source(config, context.runner, context.fs)
        except PipelineError as e:
            self.fail(e)
