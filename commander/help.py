"""
Commander help formatters.

Formatters turn read-only command metadata into rich renderables; they never print. The runner
prints whatever they return.

- Terminal: one titled panel per section (commands, global options, examples, ...).
- TerminalCompact: the same content as plain indented rows, no chrome.

Both read:
- from the runner: program name, version, description, global flags, extra help sections;
- from each command: qualified name, syntax, description, summary, examples, flags.

Palette entries may be overridden by the host through __main__.__styles__, and are dropped
entirely when the runner is not colorful.
"""
import sys
from collections import defaultdict

from rich.console import Group
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

_STYLES = {
    "program-name": "bold #FF4D94",
    "program-version": "bold #00E6FF",
    "section-title": "bold #FFD600",
    "command-name": "bold #36C5F0",
    "switch": "bold #22C55E",
    "description": "#E5E7EB",
    "example-description": "dim",
    "example": "#00E6FF",
}


class Formatter:
    """Base formatter: palette handling and the shared row builders."""

    def __init__(self, runner, /):
        self.runner = runner
        main = sys.modules.get("__main__")
        self.styles = defaultdict(str, _STYLES | getattr(main, "__styles__", {}))

    def text(self, fragment, style="", /):
        if fragment is None:
            return Text("")
        return Text(str(fragment), self.styles[style] if self.runner.colorful else "")

    def section(self, title, body, /):
        raise NotImplementedError

    def _rows(self, rows):
        table = Table.grid(padding=(0, 3))
        table.add_column(no_wrap=True)
        table.add_column()
        for row in rows:
            table.add_row(*row)
        return table

    def _flags(self, flags):
        return self._rows(
            (self.text(", ".join(flag.switches), "switch"), self.text(flag.description, "description"))
            for flag in flags
        )

    def _header(self):
        main = self.runner.main
        return Text.assemble(
            self.text(main.name, "program-name"),
            " ",
            self.text(main.version, "program-version"),
        )

    def render(self):
        """Program help: description, commands, global options and extra sections."""
        main = self.runner.main
        renders = [self._header()]
        if main.description:
            renders.append(self.section("description", self.text(main.description, "description")))

        rows = []
        aliases = main.aliases
        for name, command in sorted(main.walk(), key=lambda x: x[0]):
            if name in aliases:
                about = f"alias for {command.path}"
            else:
                about = command.summary or command.description
            rows.append((self.text(name, "command-name"), self.text(about, "description")))
        if rows:
            renders.append(self.section("commands", self._rows(rows)))

        if main.options:
            renders.append(self.section("global options", self._flags(main.options)))

        for title, body in main.help.items():
            renders.append(self.section(title, self.text(body, "description")))
        return Group(*renders)

    def render_command(self, command, /):
        """Command help: name, syntax, description, examples and flags."""
        renders = [self.text(command.path or command.name, "command-name")]
        if command.syntax:
            renders.append(self.section("usage", self.text(command.syntax)))
        if about := command.description or command.summary:
            renders.append(self.section("description", self.text(about, "description")))
        if examples := command.examples:
            lines = []
            for description, line in examples:
                lines.append(self.text(f"# {description}", "example-description"))
                lines.append(self.text(f"$ {line}", "example"))
            renders.append(self.section("examples", Group(*lines)))
        if command.options:
            renders.append(self.section("options", self._flags(command.options)))
        return Group(*renders)


class Terminal(Formatter):
    def section(self, title, body, /):
        return Panel(body, title=self.text(title.upper(), "section-title"), title_align="left")


class TerminalCompact(Formatter):
    def section(self, title, body, /):
        return Group(Text(""), self.text(f"{title}:", "section-title"), Padding(body, (0, 0, 0, 2)))


FORMATTERS = {
    "default": Terminal,
    "compact": TerminalCompact,
}


__all__ = (
    "Formatter",
    "Terminal",
    "TerminalCompact",
    "FORMATTERS",
)
