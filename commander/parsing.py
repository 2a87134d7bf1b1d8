"""
Commander flag-parsing primitive (argparse adapter).

The engine never tokenizes flags itself: for every flag set (the global flags of the root, or
the local flags of one command) it builds a throw-away argparse parser whose actions relay each
recognised flag and its coerced value to a sink callback, in command-line order.

Contract
- parse(flags, tokens, sink, *, strict=True) -> list[str]
  • sink(flag, value) is called once per occurrence, left to right.
  • Presence-only flags yield True (False for the "--no-" form of a negatable flag).
  • Optional-value flags yield None when the value is omitted.
  • The returned list holds every token argparse did not consume, in original order, minus
    the first "--" marker.
  • strict=True rejects leftover tokens that look like options (InvalidOptionError); the
    global pre-pass runs with strict=False because local flags are parsed later.
- Malformed input is reported through the FlagParsingError family (see faults).
"""
import argparse
import re

from .faults import *

_NEGATIVE_NUMBER = re.compile(r"-\d+$|-\d*\.\d+$")


def _classify(message):
    # argparse reports everything as text; map its wording onto the fault family.
    if "ambiguous option" in message:
        return AmbiguousOptionError(message)
    if "ignored explicit argument" in message:
        return NeedlessArgumentError(message)
    if "expected" in message and "argument" in message:
        return MissingArgumentError(message)
    if "invalid" in message and "value" in message:
        return InvalidArgumentError(message)
    return InvalidOptionError(message)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise _classify(message)


class _Relay(argparse.Action):
    def __init__(self, option_strings, dest, *, flag, sink, **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self.flag = flag
        self.sink = sink

    def __call__(self, parser, namespace, values, option_string=None):
        if self.nargs == 0:
            values = not (self.flag.negatable and option_string.startswith("--no-"))
        self.sink(self.flag, values)


def build(flags, sink, /, *, prog=None):
    """
    Build a parser for flags; an option string already claimed by an earlier flag stays with it.
    """
    parser = _Parser(prog=prog, add_help=False, allow_abbrev=True)
    taken = set()
    for flag in flags:
        if not (strings := [x for x in flag.option_strings if x not in taken]):
            continue
        taken.update(strings)
        extra = {} if flag.nargs == 0 else {"type": flag.converter, "metavar": flag.metavar}
        parser.add_argument(
            *strings,
            action=_Relay,
            dest=flag.name,
            default=argparse.SUPPRESS,
            nargs=flag.nargs,
            flag=flag,
            sink=sink,
            **extra,
        )
    return parser


def leftovers(tokens, /):
    """Yield the tokens that look like unrecognised options (stops at the first '--')."""
    for token in tokens:
        if token == "--":
            return
        if token.startswith("-") and len(token) > 1 and not _NEGATIVE_NUMBER.match(token):
            yield token


def parse(flags, tokens, sink, /, *, strict=True, prog=None):
    parser = build(flags, sink, prog=prog)
    _, remaining = parser.parse_known_args(list(tokens))
    if strict:
        for token in leftovers(remaining):
            raise InvalidOptionError(f"invalid option: {token}")
    # The first "--" only ends option parsing; what follows it stays as given.
    if "--" in remaining:
        remaining.remove("--")
    return remaining


__all__ = (
    "parse",
)
