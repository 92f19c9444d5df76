"""
Argot faults (parse errors, parse warnings, configuration errors) and rendering.

Scope
- ErrorKind / WarningKind: canonical, stable numeric identifiers for every
  user-facing issue. The snake-case label (e.g., 'unknown_option') is the
  public name of the kind; the number is what gets printed in fault headers.
- ParseError / ParseWarning: value objects carried inside a Result. The engine
  never raises them; they only know how to render themselves.
- ParseExit: an ExceptionGroup of ParseErrors for callers that want to turn a
  failed Result into an exception (see Result.raise_for_errors()).
- ConfigurationError and subclasses: programmer mistakes detected while a
  schema is being built. These are raised immediately (fail fast).
- trigger(): surface any fault (print in shell mode, raise or warn otherwise).

UX goals
- Position-first messages: every message names the ordinal position of the
  offending argument when there is one (“at second position”).
- Lowercased tone with a single clear hint; colors configurable via a
  __styles__ mapping in __main__, labels via a __codes__ mapping.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import pluralize

console = Console(stderr=True)


class _Kind:
    @property
    def label(self):
        """public snake-case name, e.g. 'unknown_option'."""
        return self.name.lower()

    @property
    def title(self):
        """header wording, e.g. 'unknown option'."""
        return self.label.replace("_", " ")

    def normalize(self):
        """
        code as printed in fault headers.

        a __codes__ mapping in __main__ may rename any kind; the numeric value is
        used otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ErrorKind(_Kind, IntEnum):
    """
    canonical parse error kinds (stable identifiers).

    codes by domain: routing 1110x, options 1111x, values 1112x and broken
    invariants 1119x.
    """
    SUBCOMMAND_ERROR  = 11101

    UNKNOWN_OPTION    = 11111
    INVALID_FORMAT    = 11112
    DUPLICATE_OPTION  = 11113
    MISSING_VALUE     = 11114
    EXTRA_VALUE       = 11115

    TYPE_MISMATCH     = 11121
    VALIDATION_FAILED = 11122
    MISSING_REQUIRED  = 11123

    INTERNAL_ERROR    = 11199


class WarningKind(_Kind, IntEnum):
    """canonical parse warning kinds (non-fatal)."""
    EMPTY_VALUE       = 12111
    DEPRECATED_OPTION = 12112


ERROR_PALETTE = {
    "prog-name": "bold #F1F1F6",
    "code": "bold #38BDF8",
    "title": "bold #F472B6",
    "message": "#CBD5E1",
    "hint-arrow": "dim #86EFAC",
    "hint": "italic #86EFAC",
}

WARNING_PALETTE = ERROR_PALETTE | {
    "code": "bold #FBBF24",
    "title": "bold #FBCFE8",
    "message": "#E2E8F0",
}


def _styles(defaults, /):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class _Finding:
    """
    state and behaviour shared by ParseError and ParseWarning.

    equality is structural over (kind, message, argument, option, index), so
    two parses of the same input compare equal; rendering options are ignored.
    """

    kinds = ()
    palette = {}

    def __init__(self, kind, message, argument=None, option=None, /, *, index=None, hint=None, suggestions=(), **options):
        if not isinstance(kind, self.kinds):
            raise TypeError("%s 'kind' must be a %s" % (type(self).__name__, self.kinds.__name__))
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.argument = argument
        self.option = option
        self.index = index
        self.hint = hint
        self.suggestions = tuple(suggestions)
        self.options = MappingProxyType(options)

    def _key(self):
        return self.kind, self.message, self.argument, self.option, self.index

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "%s(%s, %r, argument=%r, option=%r)" % (type(self).__name__, self.kind.label, self.message, self.argument, self.option)

    def __str__(self):
        return self.to_string()

    def to_string(self):
        """'<kind>: <message>' on one line."""
        return "%s: %s" % (self.kind.label, self.message)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(
            self.kind, self.message, self.argument, self.option,
            index=self.index, hint=self.hint, suggestions=self.suggestions,
            **{**self.options, **overrides}
        )

    def __rich__(self):
        # honored options: prog, colorful, fancy, ratio
        styles = _styles(self.palette)
        colorful = self.options.get("colorful", True)

        def text(fragment, key):
            return Text(str(fragment), styles[key] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "argot"), "prog-name"),
            " — ",
            text(self.kind.normalize(), "code"),
            " | ",
            text(self.kind.title.title(), "title"),
            " ]"
        )
        body = [text(self.message, "message")]
        if self.hint:
            body.append(text(" → ", "hint-arrow") + text(self.hint, "hint"))

        if not self.options.get("fancy", False):
            return Group(header, *body)
        ratio = self.options.get("ratio")
        width = int((console.width - 4) * ratio) if ratio else None
        return Panel(Group(*body), title=header, title_align="left", width=width)


class ParseError(_Finding, Exception):
    """
    one parse-time error: {kind, message, argument?, option?}.

    extra context
    - index: 0-based position of the offending argument (None when not tied to one).
    - hint: one actionable sentence shown under the message.
    - suggestions: close matches for unknown names.

    the engine only collects these into a Result; raising is up to the caller.
    """

    kinds = ErrorKind
    palette = ERROR_PALETTE

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)


class ParseWarning(_Finding, Warning):
    """non-fatal parse finding (deprecated option, empty inline value)."""

    kinds = WarningKind
    palette = WARNING_PALETTE

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class ParseExit(ExceptionGroup):
    """every error of a failed parse, grouped for callers that prefer exceptions."""

    def __new__(cls, errors, **options):
        return super().__new__(cls, "bad arguments", tuple(errors))

    def __init__(self, errors, **options):
        super().__init__("bad arguments", tuple(errors))
        self.options = MappingProxyType(options)

    def derive(self, errors):
        return type(self)(errors, **self.options)

    def __rich__(self):
        styles = _styles(ERROR_PALETTE)
        colorful = self.options.get("colorful", True)
        header = Text.assemble(
            "[ ",
            (self.options.get("prog", "argot"), styles["prog-name"] if colorful else ""),
            " — ",
            ("%d %s" % (len(self.exceptions), "error" if len(self.exceptions) == 1 else pluralize("error")), styles["title"] if colorful else ""),
            " ]"
        )
        renders = [error.__replace__(**{**self.options, "ratio": 2 / 3}) for error in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(2)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    merge runtime options into a fault (via __replace__) and surface it.

    shell=True prints on the stderr console (ParseExit then exits with 2);
    otherwise errors are raised and warnings go through warnings.warn().
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must define __trigger__ and __replace__")
    fault.__replace__(**options).__trigger__()



class ConfigurationError(ValueError):
    """a schema was declared incorrectly (raised while building, never while parsing)."""


class InvalidNameError(ConfigurationError): ...
class DuplicateNameError(ConfigurationError): ...
class DefaultTypeError(ConfigurationError): ...
class ArityError(ConfigurationError): ...
class PolicyError(ConfigurationError): ...
class FrozenSchemaError(ConfigurationError): ...


__all__ = (
    "ErrorKind",
    "WarningKind",
    "ParseError",
    "ParseWarning",
    "ParseExit",
    "ConfigurationError",
    "InvalidNameError",
    "DuplicateNameError",
    "DefaultTypeError",
    "ArityError",
    "PolicyError",
    "FrozenSchemaError",
    "trigger",
)
