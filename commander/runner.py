"""
Commander runner: the dispatcher and program context.

A Runner is built once at program start, declared against, then run once:

    runner = Runner()                       # tokens from sys.argv[1:]
    runner.program("version", "1.0.0")
    runner.program("description", "Build things.")
    runner.global_option("--verbose", "Talk more")

    @runner.command("build", description="Build the project")
    def build(args, options):
        ...

    build.option("--out FILE", "Write the result to FILE")
    runner.run()

Run phases
1. require the program version and description (ProgramMetadataError otherwise);
2. resolve the active command name from the raw tokens;
3. pre-parse a copy of the tokens with the global flags: fire their handlers and proxy their
   values into the active command;
4. strip global flags (and their heuristic values) from the tokens;
5. strip the command name words, prepend alias tokens, run the active command.

Error boundary
- InvalidCommandError and FlagParsingError are rendered as short messages; any other exception
  from dispatch or the handler is rendered as a HandlerError. Each of them exits with status 1.
- With --trace nothing is caught and the original exception propagates with its traceback.
- ProgramMetadataError is a programming error and is never caught.

Built-in global flags: -h/--help, -v/--version, -t/--trace. A default "help" command exists.
"""
import contextlib
import logging
import os
import shlex
import signal
import sys
import threading
from collections.abc import Iterable

from rich.console import Console

from .commands import Command
from .faults import *
from .help import FORMATTERS
from .parsing import parse
from .resolution import *
from .utils import *

logger = logging.getLogger(__name__)

# Where each program key lives: on the registry root or on the runner itself.
_PROGRAM = {
    "name": "main",
    "version": "main",
    "description": "main",
    "syntax": "main",
    "summary": "main",
    "help": "main",
    "default_command": "main",
    "int_message": "runner",
    "help_formatter": "runner",
}


class _Halt(Exception):
    """Ends a run early (raised by the built-in help and version flags)."""


def _tokenize(args):
    if args is Unset:
        return sys.argv[1:]
    if isinstance(args, str):
        return shlex.split(args)
    if isinstance(args, Iterable):
        tokens = list(args)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("runner arguments must be strings")
        return tokens
    raise TypeError("runner arguments must be a string or an iterable of strings")


class Runner:
    """
    Dispatcher and program context (one per process, passed explicitly, never global).

    Parameters
    - args: Unset (sys.argv[1:]), a shell-like string (split with shlex) or an iterable of strings.
    - colorful: apply palettes to help and fault output.
    - fancy: draw faults inside panels.

    Attributes
    - main: the registry root; its flags are the global flags.
    - args: the token list, mutated in place while dispatching.
    - trace: raw mode, switched on by --trace.
    - int_message: printed when the run is interrupted (SIGINT).
    """

    def __init__(self, args=Unset, /, *, colorful=True, fancy=False):
        self.args = _tokenize(args)
        self.main = Command(os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "commander")
        self.colorful = colorful
        self.fancy = fancy
        self.trace = False
        self.int_message = None
        self.console = Console(highlight=False)
        self._help_formatter = FORMATTERS["default"]
        self._command_name = Unset
        self._builtins = False
        self._create_default_commands()

    # ---- declaration ------------------------------------------------------------------------

    def command(self, name, /, *target, **metadata):
        return self.main.command(name, *target, **metadata)

    def alias_command(self, alias, name, /, *tokens):
        return self.main.alias_command(alias, name, *tokens)

    def global_option(self, *args, handler=Unset):
        return self.main.option(*args, handler=handler)

    def default_command(self, name, /):
        self.main.default_command = name

    def lookup(self, name, /):
        return self.main.lookup(name)

    @property
    def options(self):
        return self.main.options

    @property
    def commands(self):
        return self.main.commands

    @property
    def aliases(self):
        return self.main.aliases

    def program(self, key, /, *values):
        """
        Read or assign program metadata.

            runner.program("name")                          # read
            runner.program("version", "1.0.0")              # assign
            runner.program("help", "Copyright", "2024 ...") # add an extra help section

        Keys: name, version, description, syntax, summary, help, default_command,
        int_message, help_formatter ("default", "compact" or a formatter class).
        """
        if key not in _PROGRAM:
            raise ValueError(f"unknown program key {key!r}")
        target = self.main if _PROGRAM[key] == "main" else self
        match values:
            case ():
                return getattr(target, key)
            case (value,) if key != "help":
                setattr(target, key, value)
                return value
            case (title, body) if key == "help":
                self.main.set_help(title, body)
                return body
            case _:
                raise TypeError(f"program {key!r} takes {'a title and a body' if key == 'help' else 'one value'}")

    @property
    def help_formatter(self):
        return self._help_formatter

    @help_formatter.setter
    def help_formatter(self, formatter):
        if isinstance(formatter, str):
            try:
                formatter = FORMATTERS[formatter]
            except KeyError:
                raise ValueError(f"unknown help formatter {formatter!r}") from None
        if not callable(formatter):
            raise TypeError("help formatter must be a formatter class or a known alias")
        self._help_formatter = formatter

    @property
    def formatter(self):
        return self._help_formatter(self)

    @property
    def version(self):
        return f"{self.main.name} {self.main.version}"

    # ---- resolution -------------------------------------------------------------------------

    @property
    def command_name(self):
        """Name of the active command, resolved once from the raw tokens (None when absent)."""
        if self._command_name is Unset:
            self._command_name = resolve(self.main.names, self.args, default=self.main.default_command)
        return self._command_name

    @property
    def active_command(self):
        return self.main.lookup(self.command_name)

    def require_valid_command(self, command=Unset, /):
        if coalesce(command, self.active_command) is None:
            raise InvalidCommandError("invalid command")

    def require_program(self, *keys):
        for key in keys:
            if not self.program(key):
                raise ProgramMetadataError(f"program {key} required")

    def args_without_command_name(self):
        return remove_command_name(self.command_name, self.args)

    def parse_global_options(self):
        """
        Parse a copy of the tokens with the global flags only.

        Each value found is proxied into the active command (when there is one) under the flag's
        derived name, then handed to the flag's handler unless it is None. Command-local flags
        are left for the active command to parse.
        """
        active = self.active_command

        def sink(flag, value):
            if active is not None:
                active.proxy(flag.name, value)
            if value is not None:
                flag(value)

        parse(self.main.options, list(self.args), sink, strict=False, prog=self.main.name)

    def remove_global_options(self, flags, tokens, /):
        return remove_global_options(flags, tokens)

    # ---- execution --------------------------------------------------------------------------

    def run_active_command(self):
        self.require_valid_command()
        tokens = self.args_without_command_name()
        if self.main.is_alias(self.command_name):
            tokens = self.main.alias_tokens(self.command_name) + tokens
        logger.debug("running %r with %r", self.command_name, tokens)
        return self.active_command.run(*tokens)

    def run(self):
        """
        Resolve, separate and dispatch; return the handler's result.

        Returns None when --help or --version ended the run.
        """
        self.require_program("version", "description")
        self._create_default_options()
        logger.debug("dispatching %r (command %r)", self.args, self.command_name)
        with self._interruptible():
            try:
                self.parse_global_options()
                self.remove_global_options(self.main.options, self.args)
                return self.run_active_command()
            except _Halt:
                return None
            except (InvalidCommandError, FlagParsingError) as fault:
                if self.trace:
                    raise
                self.abort(fault)
            except Exception as error:
                if self.trace:
                    raise
                fault = HandlerError(f"error: {error}")
                fault.__cause__ = error
                self.abort(fault)

    def abort(self, fault, /):
        abort(fault, prog=self.main.name, colorful=self.colorful, fancy=self.fancy)

    @contextlib.contextmanager
    def _interruptible(self):
        # Signal handlers can only be installed from the main thread.
        if threading.current_thread() is not threading.main_thread():
            yield
            return

        def interrupt(signum, frame):
            self.abort(self.int_message or "\nProcess interrupted")

        previous = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, interrupt)
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)

    # ---- built-ins --------------------------------------------------------------------------

    def _create_default_commands(self):
        def help(args, options):
            if not args:
                self.console.print(self.formatter.render())
                return
            command = self.main.lookup(" ".join(args))
            self.require_valid_command(command)
            self.console.print(self.formatter.render_command(command))

        command = self.command(
            "help",
            help,
            syntax="help [command]",
            description="Display global or [command] help documentation.",
        )
        command.example("Display global help", "help")
        command.example("Display help for 'foo'", "help foo")

    def _create_default_options(self):
        if self._builtins:
            return
        self._builtins = True
        self.global_option("-h", "--help", "Display help documentation", handler=self._on_help)
        self.global_option("-v", "--version", "Display version information", handler=self._on_version)
        self.global_option("-t", "--trace", "Display backtrace when an error occurs", handler=self._on_trace)

    def _on_help(self, value):
        names = valid_command_names(self.main.names, self.args)
        if names and (name := max(names)) != "help":
            self.main.lookup("help").run(*name.split())
        else:
            self.main.lookup("help").run()
        raise _Halt

    def _on_version(self, value):
        self.console.print(self.version, markup=False)
        raise _Halt

    def _on_trace(self, value):
        self.trace = True

    def __repr__(self):
        return f"<Runner {self.main.name}>"


__all__ = (
    "Runner",
)
