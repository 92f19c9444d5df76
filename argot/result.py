"""
Argot parse results.

A Result is the immutable snapshot of one finished parse. It owns copies of
everything it exposes and keeps no reference to the parser nodes or to the
parse context it came from.

Reading values
- values(): read-only mapping keyed by canonical name (long name, else short
  name, positional name for positionals); only entries that received a final
  value (input, accumulation, environment or default) are present.
- get(name) / try_get(name, default) / has(name): accept any alias spelling
  ("foo", "--foo", "-f", "f").

Reading outcome
- success() / failed() / bool(result)
- errors / warnings / error_count() / error_message()
- subcommand(): deepest selected subcommand (or None); subcommand_path()
- remaining_args(): the arguments after '--', in order
- extras(): unmatched positionals and tolerated unknown options
"""
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .faults import *
from .utils import *
from .values import freeze


class Result:
    __slots__ = ("_values", "_errors", "_warnings", "_path", "_remaining", "_extras", "_aliases")

    def __init__(self, values, errors=(), warnings=(), path=(), remaining=(), extras=(), aliases=None):
        setter = super().__setattr__
        setter("_values", MappingProxyType({key: freeze(value) for key, value in values.items()}))
        setter("_errors", tuple(errors))
        setter("_warnings", tuple(warnings))
        setter("_path", tuple(path))
        setter("_remaining", tuple(remaining))
        setter("_extras", tuple(extras))
        setter("_aliases", MappingProxyType(dict(aliases or {})))

    def __setattr__(self, name, value):
        raise AttributeError("results are immutable")

    def __delattr__(self, name):
        raise AttributeError("results are immutable")

    def success(self):
        return not self._errors

    def failed(self):
        return bool(self._errors)

    def __bool__(self):
        return self.success()

    @property
    def errors(self):
        return self._errors

    @property
    def warnings(self):
        return self._warnings

    def error_count(self):
        return len(self._errors)

    def error_message(self):
        """one '<kind>: <message>' line per error (empty string on success)."""
        return "\n".join(error.to_string() for error in self._errors)

    def values(self):
        return self._values

    def _resolve(self, name):
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        if name in self._values:
            return name
        return self._aliases.get(name, self._aliases.get(name.lstrip("-"), name))

    def has(self, name, /):
        return self._resolve(name) in self._values

    def get(self, name, /):
        try:
            return self._values[self._resolve(name)]
        except KeyError:
            raise KeyError(name) from None

    def try_get(self, name, default=None, /):
        return self._values.get(self._resolve(name), default)

    def __getitem__(self, name):
        return self.get(name)

    def __contains__(self, name):
        return self.has(name)

    def subcommand(self):
        return self._path[-1] if self._path else None

    def subcommand_path(self):
        return self._path

    def remaining_args(self):
        return self._remaining

    def extras(self):
        return self._extras

    def raise_for_errors(self, **options):
        """raise ParseExit with every error when the parse failed; return self otherwise."""
        if self._errors:
            raise ParseExit(self._errors, **options)
        return self

    def _key(self):
        return (
            dict(self._values),
            self._errors,
            self._warnings,
            self._path,
            self._remaining,
            self._extras,
        )

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None

    def __repr__(self):
        return "Result(success=%r, values=%r, subcommand=%r, remaining=%r, errors=%d)" % (
            self.success(), dict(self._values), self.subcommand(), list(self._remaining), len(self._errors)
        )

    def __rich__(self):
        if not self._errors and not self._warnings:
            return Text("parsed %d %s" % (len(self._values), "value" if len(self._values) == 1 else pluralize("value")))
        return Group(*self._errors, *self._warnings)


__all__ = (
    "Result",
)
