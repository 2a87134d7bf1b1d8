r"""
Commander flag declarations.

Overview
- Flag: one declared flag (global or command-local) built from switch declarations in the
  familiar OptionParser shape:
    -h, --help           presence-only, value True
    --[no-]feature       presence-only, True or False depending on the form used
    --file FILE          required value
    --date [DATE]        optional value (None when omitted)
    --list WORDS, list   required value split on commas
    --count N, int       required value coerced by the given callable

Derived name
- The option name is computed from the *last* switch (see utils.symbolize). It is the key of
  the value in the Options record and in proxied global values.

Calling
- Flag(value) runs the inline handler bound at declaration time, if any; the return value of
  the handler is ignored by the engine.
"""
import re

from .utils import *

_DECLARATION = re.compile(r"([^\s=]+)[\s=]*(.*)")
_NEGATABLE = re.compile(r"--\[no-\](.+)")


def array(value):
    """Coerce a comma-separated value into a list of strings."""
    return value.split(",")


def _unpack(switch):
    """
    Split one switch declaration into (option strings, shape, metavar).

    shape is None for presence-only switches, "?" for an optional value and 1 for a
    required value.
    """
    if not isinstance(switch, str) or not switch.startswith("-"):
        raise ValueError(f"flag switch must start with '-': {switch!r}")
    head, tail = _DECLARATION.fullmatch(switch.strip()).groups()
    if match := _NEGATABLE.fullmatch(head):
        strings = ("--" + match[1], "--no-" + match[1])
    else:
        strings = (head,)
    if not tail:
        return strings, None, None
    metavar = tail.strip("[]= ") or None
    return strings, "?" if tail.startswith("[") else 1, metavar


class Flag:
    """
    A flag specification: switch forms, description, value type and optional handler.

    Attributes (read-only)
    - switches: tuple of declaration strings as given.
    - description: short help text or None.
    - type: value coercer (Unset means plain strings; list means comma-split).
    - handler: callable(value) or Unset.
    - name: derived option name (from the last switch).
    - option_strings: literal command-line forms ("--[no-]x" expands to "--x" and "--no-x").
    - nargs: 0 for presence-only flags, None for a required value, "?" for an optional value.
    - metavar: placeholder shown in help, or None.
    - negatable: True when declared with the "--[no-]" form.
    """

    __slots__ = (
        "_switches",
        "_description",
        "_type",
        "_handler",
        "_name",
        "_option_strings",
        "_nargs",
        "_metavar",
        "_negatable",
    )

    def __init__(self, *switches, description=None, type=Unset, handler=Unset):
        if not switches:
            raise TypeError("flag requires at least one switch")
        if description is not None and not isinstance(description, str):
            raise TypeError("flag description must be a string")
        if type is not Unset and not callable(type):
            raise TypeError("flag type must be callable")
        if handler is not Unset and not callable(handler):
            raise TypeError("flag handler must be callable")

        strings, shapes, metavars = [], set(), []
        for switch in switches:
            unpacked, shape, metavar = _unpack(switch)
            strings.extend(x for x in unpacked if x not in strings)
            shapes.add(shape)
            if metavar:
                metavars.append(metavar)

        if not (name := symbolize(switches[-1])):
            raise ValueError(f"flag switch {switches[-1]!r} has no usable name")

        self._switches = tuple(switches)
        self._description = description
        self._type = type
        self._handler = handler
        self._name = name
        self._option_strings = tuple(strings)
        # A required value anywhere beats an optional one; no value at all means presence-only.
        self._nargs = None if 1 in shapes else "?" if "?" in shapes else 0
        self._metavar = metavars[0] if metavars else None
        self._negatable = any(_NEGATABLE.fullmatch(x.split()[0]) for x in switches)

    switches = property(lambda self: self._switches)
    description = property(lambda self: self._description)
    type = property(lambda self: self._type)
    handler = property(lambda self: self._handler)
    name = property(lambda self: self._name)
    option_strings = property(lambda self: self._option_strings)
    nargs = property(lambda self: self._nargs)
    metavar = property(lambda self: self._metavar)
    negatable = property(lambda self: self._negatable)

    @property
    def converter(self):
        """The callable argparse applies to raw values (None for presence-only flags)."""
        if self._nargs == 0:
            return None
        if self._type is list:
            return array
        return coalesce(self._type, None)

    def __call__(self, value, /):
        if self._handler is Unset:
            return
        self._handler(value)

    def __repr__(self):
        return f"<Flag {', '.join(self._switches)}>"

    def __rich_repr__(self):
        yield "switches", self._switches
        yield "name", self._name
        yield "description", self._description, None


def flag(*args, handler=Unset):
    """Build a Flag from an OptionParser-style declaration (see utils.separate)."""
    switches, description, type = separate(*args)
    return Flag(*switches, description=description, type=type, handler=handler)


__all__ = (
    "Flag",
    "flag",
    "array",
)
