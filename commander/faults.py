"""
Commander faults (errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing failure.
- CommandError and its subclasses: carry a message plus rendering options and know how to
  draw themselves with rich (header, message, hint).
- abort(): print a fault on the stderr console and terminate with status 1.

Families
- routing: InvalidCommandError (no command matched and no default exists).
- program: ProgramMetadataError (the host never declared required metadata). This one is a
  programming error and is raised, never rendered by the dispatcher.
- flags: FlagParsingError and its subclasses, raised by the argparse adapter.
- handlers: HandlerError, wraps whatever a command handler raised.

Host overrides
- __main__.__styles__ overrides palette entries (see _STYLES).
- __main__.__prog__ overrides the program label shown in fault headers.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)

_STYLES = {
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # cyan fault code
    "error-title": "bold #FF4DA6",  # pink title
    "error-message": "#C8C8D0",  # light gray message
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    - routing (111xx): INVALID_COMMAND
    - program (112xx): MISSING_PROGRAM_METADATA
    - flags   (113xx): INVALID_OPTION, MISSING_ARGUMENT, INVALID_ARGUMENT,
                       AMBIGUOUS_OPTION, NEEDLESS_ARGUMENT
    - handler (114xx): HANDLER_ERROR, COMMAND_ERROR
    """
    INVALID_COMMAND          = 11101

    MISSING_PROGRAM_METADATA = 11201

    INVALID_OPTION           = 11301
    MISSING_ARGUMENT         = 11302
    INVALID_ARGUMENT         = 11303
    AMBIGUOUS_OPTION         = 11304
    NEEDLESS_ARGUMENT        = 11305

    HANDLER_ERROR            = 11401
    COMMAND_ERROR            = 11402


class CommandError(Exception):
    """
    base error of the package.

    options (all optional, merged through copy.replace)
    - prog: program label for the header.
    - hint: one-line advice shown after the message.
    - colorful: apply the palette (default True).
    - fancy: wrap the output in a panel (default False).
    """
    code = FaultCode.COMMAND_ERROR
    title = "command error"
    hint = None

    def __init__(self, message="", /, **options):
        if not isinstance(message, str):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = sys.modules.get("__main__")
        styles = defaultdict(str, _STYLES | getattr(main, "__styles__", {}))
        colorful = self.options.get("colorful", True)

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(main, "__prog__", self.options.get("prog") or "commander")
        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.code.value, "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]",
        )
        renders = [text(self.message, "error-message")]
        if hint := self.options.get("hint", self.hint):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class InvalidCommandError(CommandError):
    code = FaultCode.INVALID_COMMAND
    title = "invalid command"
    hint = "use --help for more information"


class ProgramMetadataError(CommandError):
    code = FaultCode.MISSING_PROGRAM_METADATA
    title = "missing program metadata"


class FlagParsingError(CommandError):
    code = FaultCode.INVALID_OPTION
    title = "invalid option"


class InvalidOptionError(FlagParsingError): ...


class MissingArgumentError(FlagParsingError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"


class InvalidArgumentError(FlagParsingError):
    code = FaultCode.INVALID_ARGUMENT
    title = "invalid argument"


class AmbiguousOptionError(FlagParsingError):
    code = FaultCode.AMBIGUOUS_OPTION
    title = "ambiguous option"


class NeedlessArgumentError(FlagParsingError):
    code = FaultCode.NEEDLESS_ARGUMENT
    title = "needless argument"


class HandlerError(CommandError):
    code = FaultCode.HANDLER_ERROR
    title = "error"
    hint = "use --trace to view backtrace"


def abort(fault, /, **options):
    """
    render a fault on stderr and exit with status 1.

    - fault: a CommandError (rendered with options merged in) or a plain string, printed as-is.
    """
    if isinstance(fault, CommandError):
        console.print(copy.replace(fault, **options))
    else:
        console.print(str(fault), markup=False, highlight=False)
    sys.exit(1)


__all__ = (
    "FaultCode",
    "CommandError",
    "InvalidCommandError",
    "ProgramMetadataError",
    "FlagParsingError",
    "InvalidOptionError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "AmbiguousOptionError",
    "NeedlessArgumentError",
    "HandlerError",
    "abort",
)
