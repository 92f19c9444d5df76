"""
Argot short-option expander.

expand(cluster, node) resolves a ShortCluster against the active node:

- POSIX grouping (default): walk the characters left to right. Flags are
  recorded and the walk continues; the first value-taking option absorbs the
  rest of the token verbatim as its inline value and stops the walk. An
  unknown character fails the whole cluster (unless the node tolerates
  unknown options, in which case the character is skipped and reported as an
  extra).
- Grouping disabled: a one-character cluster is a short option; a longer one
  is either a value-taking short option followed by its inline value, or a
  long option spelled with a single dash (-abc is looked up as --abc).
"""
from typing import NamedTuple

from .faults import *
from .utils import *


class Reference(NamedTuple):
    """one resolved option occurrence: schema, spelling used, inline value (or None)."""
    schema: object
    name: str
    value: str | None


class Expansion(NamedTuple):
    references: tuple
    error: ParseError | None
    extras: tuple


def _unknown(cluster, char, /):
    return ParseError(
        ErrorKind.UNKNOWN_OPTION,
        "unknown option %r in %r at %s position" % ("-" + char, cluster.text, ordinal(cluster.index + 1)),
        cluster.text,
        "-" + char,
        index=cluster.index,
        hint="check the spelling of each letter in the group or run with --help to see all options",
    )


def _grouped(cluster, node, /):
    references = []
    extras = []
    chars = cluster.chars
    for position, char in enumerate(chars):
        schema = node.short(char)
        if schema is None:
            if node.allow_unknown:
                extras.append("-" + char)
                continue
            return Expansion((), _unknown(cluster, char), ())
        if schema.arity.flag:
            references.append(Reference(schema, "-" + char, None))
            continue
        rest = chars[position + 1:]
        references.append(Reference(schema, "-" + char, rest or None))
        break
    return Expansion(tuple(references), None, tuple(extras))


def _ungrouped(cluster, node, /):
    chars = cluster.chars
    schema = node.short(chars[0])
    if len(chars) == 1:
        if schema is None:
            if node.allow_unknown:
                return Expansion((), None, (cluster.text,))
            return Expansion((), _unknown(cluster, chars), ())
        return Expansion((Reference(schema, cluster.text, None),), None, ())

    if schema is not None and not schema.arity.flag:
        return Expansion((Reference(schema, "-" + chars[0], chars[1:]),), None, ())

    if (schema := node.long(chars)) is not None:
        return Expansion((Reference(schema, cluster.text, None),), None, ())

    if node.allow_unknown:
        return Expansion((), None, (cluster.text,))
    return Expansion((), ParseError(
        ErrorKind.UNKNOWN_OPTION,
        "unknown option %r at %s position" % (cluster.text, ordinal(cluster.index + 1)),
        cluster.text,
        cluster.text,
        index=cluster.index,
        hint="short options cannot be grouped here; pass each one separately",
    ), ())


def expand(cluster, node, /):
    """resolve a ShortCluster into option references (see module docstring)."""
    if node.posix_grouping:
        return _grouped(cluster, node)
    return _ungrouped(cluster, node)


__all__ = (
    "Reference",
    "Expansion",
    "expand",
)
