"""
Commander option record.

Options is the value record handed to command handlers as their second argument. It is a
plain mutable mapping keyed by derived flag names (see utils.symbolize): values are read and
written by name, never through attribute magic.

    options = Options({"verbose": True})
    options.set("out", "x.txt")
    options.default(out="a.out", jobs=1)   # present values win: out stays "x.txt"
    options["jobs"]                        # 1
"""
from collections.abc import MutableMapping


class Options(MutableMapping):
    """Mapping of derived flag name to parsed value, built fresh for every invocation."""

    __slots__ = ("_table",)

    def __init__(self, values=(), /, **kwargs):
        self._table = {}
        self.update(values, **kwargs)

    def __getitem__(self, name):
        return self._table[name]

    def __setitem__(self, name, value):
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        self._table[name] = value

    def __delitem__(self, name):
        del self._table[name]

    def __iter__(self):
        return iter(self._table)

    def __len__(self):
        return len(self._table)

    def set(self, name, value, /):
        self[name] = value
        return value

    def default(self, defaults=(), /, **kwargs):
        """
        Merge defaults underneath the current values and return self.

        Keys already present keep their value; defaults only fill the missing ones. The
        resulting order lists the defaults first, then the remaining present keys.
        """
        merged = dict(defaults, **kwargs)
        merged.update(self._table)
        self._table = merged
        return self

    def __eq__(self, other):
        if isinstance(other, Options):
            return self._table == other._table
        if isinstance(other, dict):
            return self._table == other
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"<Options {', '.join(f'{k}={v!r}' for k, v in self._table.items())}>"

    def __rich_repr__(self):
        yield from self._table.items()


__all__ = (
    "Options",
)
