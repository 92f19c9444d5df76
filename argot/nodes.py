"""
Argot parser nodes.

A ParserNode is the frozen form of one command level: its options, its
positional slots, its subcommands (child nodes, owned by name) and its
policies. Nodes are produced by App.freeze() and never change afterwards,
so one tree can be shared by any number of concurrent parse calls.

Lookups
- short(char) / long(name): the OptionSchema registered under that name, or None.
- child(name): the subcommand node registered under that name, or None.
"""
from types import MappingProxyType

from .faults import *
from .schema import OptionSchema, PositionalSchema, SchemaType


class ParserNode(metaclass=SchemaType):
    __introspectable__ = (
        "name",
        "description",
        "options",
        "positionals",
        "children",
        "allow_unknown",
        "posix_grouping",
        "require_subcommand",
        "version",
        "footer",
    )

    def __init__(
            self,
            name,
            *,
            description="",
            options=(),
            positionals=(),
            children=(),
            allow_unknown=False,
            posix_grouping=True,
            require_subcommand=False,
            version=None,
            footer=None
    ):
        shorts, longs, keys = {}, {}, set()
        for option in options:
            if not isinstance(option, OptionSchema):
                raise TypeError("node options must be option schemas")
            if option.short is not None and shorts.setdefault(option.short, option) is not option:
                raise DuplicateNameError("short option name %r is already in use in %r" % ("-" + option.short, name))
            if option.long is not None and longs.setdefault(option.long, option) is not option:
                raise DuplicateNameError("long option name %r is already in use in %r" % ("--" + option.long, name))
            keys.add(option.key)

        for positional in positionals:
            if not isinstance(positional, PositionalSchema):
                raise TypeError("node positionals must be positional schemas")
            if positional.key in keys:
                raise DuplicateNameError("name %r is already in use in %r" % (positional.key, name))
            keys.add(positional.key)

        table = {}
        for child in children:
            if not isinstance(child, ParserNode):
                raise TypeError("node children must be parser nodes")
            if table.setdefault(child.name, child) is not child:
                raise DuplicateNameError("subcommand name %r is already in use in %r" % (child.name, name))

        # values are keyed by name across one command path, so a key may not
        # reappear below the node that declares it (siblings may share keys)
        reach = set(keys)
        for child in table.values():
            if clash := keys & child._reach:
                raise DuplicateNameError("name %r of %r is declared again under subcommand %r" % (
                    sorted(clash)[0], name, child.name
                ))
            reach |= child._reach

        self._name = name
        self._description = description or ""
        self._options = tuple(options)
        self._positionals = tuple(positionals)
        self._children = MappingProxyType(table)
        self._allow_unknown = bool(allow_unknown)
        self._posix_grouping = bool(posix_grouping)
        self._require_subcommand = bool(require_subcommand)
        self._version = version
        self._footer = footer
        self._reach = frozenset(reach)
        self._shorts = MappingProxyType(shorts)
        self._longs = MappingProxyType(longs)

    @property
    def longs(self):
        """read-only mapping of long name -> OptionSchema declared on this node."""
        return self._longs

    def __setattr__(self, name, value):
        if hasattr(self, "_longs"):
            raise AttributeError("parser nodes are frozen")
        super().__setattr__(name, value)

    def short(self, char, /):
        return self._shorts.get(char)

    def long(self, name, /):
        return self._longs.get(name)

    def child(self, name, /):
        return self._children.get(name)

    def walk(self):
        """yield this node and every descendant, depth first."""
        yield self
        for child in self._children.values():
            yield from child.walk()


__all__ = (
    "ParserNode",
)
