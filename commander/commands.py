"""
Commander command layer: the nodes of the command tree.

What this module provides
- Command: one node of the tree. It owns
  • its flags (local flags; on the registry root they are the global flags),
  • its children and aliases (an alias is a child key pointing at another Command, plus the
    tokens injected in front of the user's arguments when the alias is used),
  • a single-use handler chain (see commands.handlers),
  • the values proxied into it by global flags during a run,
  • presentation metadata read by help formatters (syntax, description, summary, examples).

Quick start
    root = Command("tool")

    @root.command("build", description="Build the project", syntax="tool build [options] SRC")
    def build(args, options):
        print(args, options)

    build.option("-o", "--out FILE", "Write the result to FILE")
    root.alias_command("b", "build", "--out", "a.out")

    build.run("--out", "x.txt", "src")      # ['src'] <Options out='x.txt'>

Lifecycle
- Nodes and flags are declared once at program start-up.
- run() consumes the handler chain: a command runs at most once per process.
"""
import weakref
from collections import deque

from .arguments import flag
from .faults import CommandError
from .handlers import handler
from .options import Options
from .parsing import parse
from .utils import *


class Command:
    """
    A node of the command tree.

    Attributes
    - name: local key of this node (may contain spaces for multi-word commands).
    - parent: owning Command, or None for the registry root (held weakly).
    - syntax, description, summary, version: free-form presentation strings (or None).
    - default_command: name used when no command matches (meaningful on the root only).
    - options, commands, aliases, examples, help, proxy_options: read-only copies.
    """

    options = mirror("options")
    commands = mirror("commands")
    aliases = mirror("aliases")
    examples = mirror("examples")
    help = mirror("help")
    proxy_options = mirror("proxy_options")

    def __init__(
            self,
            name="",
            /,
            parent=None,
            *,
            syntax=None,
            description=None,
            summary=None,
            version=None,
    ):
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        self.name = name
        self._parent = weakref.ref(parent) if parent is not None else None
        self.syntax = syntax
        self.description = description
        self.summary = summary
        self.version = version
        self.default_command = None
        self._options = []
        self._commands = {}
        self._aliases = {}
        self._examples = []
        self._help = {}
        self._proxy_options = []
        self._handlers = deque()

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @property
    def root(self):
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def path(self):
        """Space-joined names from the root's child down to this node ('' for the root)."""
        names = []
        node = self
        while node.parent is not None:
            names.append(node.name)
            node = node.parent
        return " ".join(reversed(names))

    # ---- tree -------------------------------------------------------------------------------

    def add_command(self, command, /):
        if not isinstance(command, Command):
            raise TypeError("add_command() argument must be a command")
        if self._commands.setdefault(command.name, command) is not command:
            raise ValueError(f"command name {command.name!r} is already in use")
        command._parent = weakref.ref(self)
        return command

    def command(self, name, /, *target, **metadata):
        """
        Create a child command named name and return it.

        - target (optional): forwarded to when_called(), e.g. a function, a class, or a
          class/instance followed by a method name.
        - metadata: syntax, description, summary, version.

        The returned Command is callable with a handler target, so this also works as a
        decorator:

            @root.command("build", description="Build the project")
            def build(args, options): ...
        """
        command = self.add_command(Command(name, self, **metadata))
        if target:
            command.when_called(*target)
        return command

    def alias_command(self, alias, name, /, *tokens):
        """
        Register alias for the command name, injecting tokens before the user's arguments.
        """
        if (command := self.lookup(name)) is None:
            raise ValueError(f"cannot alias unknown command {name!r}")
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("alias tokens must be strings")
        if self._commands.setdefault(alias, command) is not command:
            raise ValueError(f"command name {alias!r} is already in use")
        self._aliases[alias] = list(tokens)
        return command

    def walk(self, prefix="", /):
        """
        Yield (qualified name, command) for the whole subtree, depth first.

        Qualified names join ancestor names with single spaces. Aliases are yielded under their
        own name but not descended into.
        """
        for key, command in self._commands.items():
            name = f"{prefix} {key}" if prefix else key
            yield name, command
            if key not in self._aliases:
                yield from command.walk(name)

    @property
    def names(self):
        return [name for name, _ in self.walk()]

    def lookup(self, name, /):
        """Return the command registered under name (qualified or local), or None."""
        if name is None:
            return None
        if name in self._commands:
            return self._commands[name]
        for qualified, command in self.walk():
            if qualified == name:
                return command
        return None

    def exists(self, name, /):
        return self.lookup(name) is not None

    def alias_tokens(self, name, /):
        """Return the injected tokens of the alias name (qualified or local), or None."""
        if name is None:
            return None
        if name in self._aliases:
            return list(self._aliases[name])
        for key, command in self._commands.items():
            if key in self._aliases or not name.startswith(key + " "):
                continue
            if (tokens := command.alias_tokens(name[len(key) + 1:])) is not None:
                return tokens
        return None

    def is_alias(self, name, /):
        return self.alias_tokens(name) is not None

    # ---- declaration ------------------------------------------------------------------------

    def example(self, description, command, /):
        """Add a usage example shown by help formatters."""
        self._examples.append((description, command))

    def option(self, *args, handler=Unset):
        """
        Declare a flag on this command (global flag when called on the root).

            c.option("--recursive", "Do something recursively")
            c.option("-f", "--file FILE", "Specify a file")
            c.option("--[no-]feature", "With or without feature")
            c.option("--list FILES", list, "List the files specified")
            c.option("--count N", int, "How many", handler=on_count)

        Returns the new Flag.
        """
        self._options.append(declared := flag(*args, handler=handler))
        return declared

    def when_called(self, *target):
        """
        Install the handler: a function, a class (optionally with a method name), or an
        instance with a method name. Returns the first target so it can decorate functions.
        """
        if not target:
            raise TypeError("when_called() must be given a function, class, or object")
        if len(target) > 2:
            raise TypeError("when_called() takes a target and an optional method name")
        self._handlers = deque([handler(*target)])
        return target[0]

    def __call__(self, *target):
        self.when_called(*target)
        return self

    def proxy(self, name, value, /):
        """Record a value produced by a global flag for this command's next run."""
        self._proxy_options.append((name, value))

    def set_help(self, title, body, /):
        self._help[title] = body

    # ---- execution --------------------------------------------------------------------------

    def parse(self, tokens, /):
        """
        Parse this command's flags out of tokens.

        Runs inline flag handlers as their flags are met and returns (remaining tokens,
        ordered (name, value) pairs).
        """
        values = []

        def sink(declared, value):
            values.append((declared.name, value))
            declared(value)

        remaining = parse(self._options, tokens, sink, prog=self.path or self.name)
        return remaining, values

    def options_record(self, values=(), /):
        """Build the Options record: local values first, proxied global values fill the gaps."""
        return Options(values).default(self._proxy_options)

    def run(self, *args):
        """
        Parse flags from args and invoke the handler with (remaining args, Options).

        An empty argument list skips flag parsing entirely.
        """
        values = []
        remaining = list(args)
        if remaining:
            remaining, values = self.parse(remaining)
        return self.call(remaining, self.options_record(values))

    def call(self, args=(), options=Unset, /):
        """Consume the handler chain and invoke it."""
        try:
            target = self._handlers.popleft()
        except IndexError:
            raise CommandError(f"command {self.name!r} has no handler to invoke") from None
        if options is Unset:
            options = self.options_record()
        return target.invoke(list(args), options)

    def __repr__(self):
        return f"<Command {self.name}>"

    def __rich_repr__(self):
        yield "name", self.name
        yield "description", self.description, None
        yield "options", self._options, []
        yield "commands", list(self._commands), []


__all__ = (
    "Command",
)
