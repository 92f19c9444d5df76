"""
Small helpers shared by the schema, engine, result and rendering layers.

- Unset: the "nothing was given" marker, for places where None is a real value
  (an option default of None, a missing inline value, an absent callback).
- coalesce(value, default): Unset -> default, anything else passes through.
- mirror("name"): read-only property over self._name that hands out frozen
  views (tuple / frozenset / mapping proxy), used by the frozen node tree.
- ordinal(n) / pluralize(word): wording for position-first fault messages.
"""
import functools
import re
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """The type of Unset; a falsy process-wide singleton that cannot be subclassed."""

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


def coalesce(value, default=None, /):
    """Return default when value is Unset; None, 0 and "" are kept."""
    return default if value is Unset else value


def _immortalize(value):
    # strings are sequences too, keep them whole
    if isinstance(value, str | bytes | tuple):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({key: _immortalize(item) for key, item in value.items()})
    if isinstance(value, Set):
        return frozenset(value)
    if isinstance(value, Sequence):
        return tuple(_immortalize(item) for item in value)
    return value


def mirror(name, /):
    """
    Property reading self._<name> through an immutable view.

    Lists come back as tuples, dicts as mapping proxies (recursively) and sets
    as frozensets, so callers can never reach into a frozen object's state.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() expects an attribute name")

    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


_ORDINALS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number, /):
    """'first' .. 'tenth' in words, then '11th', '22nd', '103rd', ..."""
    if 1 <= number <= len(_ORDINALS):
        return _ORDINALS[number - 1]
    if number % 100 in (11, 12, 13):
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


@functools.cache
def pluralize(text, /):
    """Plural of the last word of a phrase ("unknown option" -> "unknown options")."""
    if not isinstance(text, str):
        raise TypeError("pluralize() expects a string")
    head, word = re.fullmatch(r"(.*?)(\w*)\s*", text, re.DOTALL).groups()
    if not word:
        return text
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return head + word + "es"
    if len(word) > 1 and word.endswith("y") and word[-2] not in "aeiou":
        return head + word[:-1] + "ies"
    return head + word + "s"


Unset = UnsetType()


__all__ = (
    "coalesce",
    "mirror",
    "ordinal",
    "pluralize",
    "UnsetType",
    "Unset",
)
