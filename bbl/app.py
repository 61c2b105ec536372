"""
bbl application runner: execute the command a CommandLineConfiguration resolved to.

'help' and 'version' run straight away; every other command first gets a chance
to fail fast (check_fast_fails) before execute() runs.
"""
import logging

from .faults import *
from .utils import progname

logger = logging.getLogger(__name__)


class App:
    def __init__(self, commands, configuration, usage, /):
        self.commands = commands
        self.configuration = configuration
        self.usage = usage

    def run(self):
        """
        run the configured command; faults raised by the command propagate.
        """
        name = self.configuration.command
        try:
            command = self.commands[name]
        except KeyError:
            self.usage.print()
            raise UnknownCommandError(
                "unrecognized command %r" % name,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                input=name,
                hint="run '%s --help' to see available commands" % progname(),
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            ) from None

        flags = self.configuration.subcommand_flags
        if name in ("help", "version"):
            logger.debug("running %s", name)
            return command.execute(flags, self.configuration)

        logger.debug("checking fast fails for %s", name)
        command.check_fast_fails(flags, self.configuration)
        logger.debug("running %s with %r in %s", name, flags, self.configuration.state_dir)
        return command.execute(flags, self.configuration)


__all__ = (
    "App",
)
