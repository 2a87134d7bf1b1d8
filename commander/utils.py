"""
Commander utilities (small building blocks shared by every layer).

Overview
- UnsetType / Unset
  • Singleton sentinel meaning “not provided”, distinct from None (None is a valid flag value).
- coalesce(value, default=None)
  • Materialize Unset into a concrete default while preserving legitimate falsey values.
- mirror("attr")
  • Read-only property factory publishing a private backing field as a fresh copy.
- symbolize(switch)
  • Derive the canonical option name of a switch declaration ("--some-switch" → "some_switch").
- separate(*args)
  • Split a flag declaration into switches, description and value type.

Stability
- Names listed in __all__ are re-exported by the package; anything else is internal.
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for “no value was provided”.

    - Falsey, printable as "Unset", one instance per process, sealed against subclassing.
    - Use Unset for parameters where None is a meaningful user value (flag values, defaults).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    None, 0, "" and empty containers are preserved as-is; only the sentinel is replaced.
    """
    return object if object is not Unset else default


def _immortalize(object):
    # Fresh containers all the way down so callers cannot reach the backing field.
    if isinstance(object, tuple):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property exposing self._{name}.

    Containers are copied recursively on every read, so mutating the result never
    touches the command tree. Leaf objects (commands, flags, callables) are shared.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


_SYMBOL = re.compile(r"[-\]](\w+)")


@functools.cache
def symbolize(switch, /):
    """
    Derive the option name of a switch declaration.

    Every word that follows a dash or a closing bracket is kept and joined with an
    underscore; the argument placeholder (separated by a space) never qualifies.

    Examples
    - "-h"               -> "h"
    - "--trace"          -> "trace"
    - "--some-switch"    -> "some_switch"
    - "--[no-]feature"   -> "feature"
    - "--file FILE"      -> "file"
    - "--list of,things" -> "list"

    Returns an empty string when nothing qualifies (e.g. "file").
    """
    if not isinstance(switch, str):
        raise TypeError("symbolize() argument must be a string")
    return "_".join(_SYMBOL.findall(switch))


def separate(*args):
    """
    Split a flag declaration into (switches, description, type).

    - switches: every string argument starting with '-', in order.
    - description: the last argument when it is a string that is not a switch, else None.
    - type: the first non-string argument (a coercer such as int or list), else Unset.
    """
    switches = tuple(arg for arg in args if isinstance(arg, str) and arg.startswith("-"))
    description = None
    if args and isinstance(args[-1], str) and not args[-1].startswith("-"):
        description = args[-1]
    type = next((arg for arg in args if not isinstance(arg, str)), Unset)
    return switches, description, type


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "mirror",
    "symbolize",
    "separate",
)
