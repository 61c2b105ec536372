"""
bbl entry point: parse the process arguments, then run the resolved command.

Exit codes
- 0: the command ran.
- 1: a fault (bad switch, unknown command, failing command) or an OS error.
"""
import os
import sys

from . import __version__
from .app import App
from .application import CommandLineParser, DEBUG_ENV
from .commands import Help, Version
from .faults import CommandException, report
from .logger import configure
from .usage import Usage
from .utils import *


def main(argv=Unset, /, environ=os.environ):
    commands = {}
    usage = Usage(commands)
    commands["help"] = Help(usage, commands)
    commands["version"] = Version(__version__)

    logger = configure(environ.get(DEBUG_ENV, "") == "true")

    try:
        configuration = CommandLineParser(usage.print, commands, environ).parse(argv)
        configure(configuration.debug)
        App(commands, configuration, usage).run()
    except CommandException as fault:
        report(fault)
        return 1
    except OSError as error:
        logger.error("%s", error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
