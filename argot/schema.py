r"""
Argot option and positional schemas.

Overview
- OptionSchema: one named option (short and/or long name), value-bearing or a flag.
- PositionalSchema: one positional slot, filled in declaration order.
- Arity: how many values an option/positional consumes per occurrence (0 for flags).
- DuplicatePolicy: how repeated occurrences of the same option are resolved.

Schemas are immutable once constructed: every field is exposed through a
read-only property (see SchemaType) and the constructors validate the whole
combination, raising a ConfigurationError subclass on any mistake.

Validation highlights
- Short names are one alphanumeric character; long names match
  r"[A-Za-z0-9][A-Za-z0-9-]*" (alphanumerics plus hyphens, no leading hyphen).
- Flags are BOOLEAN with arity 0; multi-value arities require TEXT_LIST.
- ACCUMULATE is only legal for TEXT_LIST options.
- Defaults must match the declared type (see values.check_default).
"""
import re
from enum import Enum
from typing import NamedTuple

from .faults import *
from .utils import *
from .validators import SupportsValidate
from .values import *

SHORT = re.compile(r"[A-Za-z0-9]")
LONG = re.compile(r"[A-Za-z0-9][A-Za-z0-9-]*")


class DuplicatePolicy(Enum):
    ERROR = "error"
    LAST_WINS = "last_wins"
    ACCUMULATE = "accumulate"


class Arity(NamedTuple):
    """inclusive value-count bounds; max is None when unbounded."""
    min: int
    max: int | None

    @property
    def flag(self):
        return self.max == 0

    @property
    def multiple(self):
        return self.max is None or self.max > 1

    def __str__(self):
        if self.min == self.max:
            return str(self.min)
        return "%d..%s" % (self.min, "" if self.max is None else self.max)


FLAG = Arity(0, 0)
SINGLE = Arity(1, 1)


def arity(count, max=Unset, /):
    """
    Build an Arity from expected(count) or expected(min, max) arguments.

    - arity(n): exactly n values (0 makes a flag).
    - arity(min, max): a range; max None (or 0 together with a positive min) is unbounded.
    """
    if max is Unset:
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise ArityError("expected count must be a non-negative integer")
        return Arity(count, count)

    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise ArityError("expected minimum must be a non-negative integer")
    if max == 0 and count > 0:
        max = None
    if max is not None and (not isinstance(max, int) or isinstance(max, bool)):
        raise ArityError("expected maximum must be an integer or None")
    if max is not None and max < count:
        raise ArityError("expected maximum cannot be lower than the minimum")
    if max == 0:
        raise ArityError("expected range cannot be empty; use expected(0) for flags")
    return Arity(count, max)


def names(declared, /):
    """
    Split a declared option name list ("f,file") into (short, long).

    Accepted forms: "f,foo", "-f,--foo", "foo", "--foo", "f", "-f".
    A one-character name is a short name, anything longer a long name.
    """
    if not isinstance(declared, str):
        raise InvalidNameError("option names must be a string")

    short = long = None
    for part in declared.split(","):
        if not (part := part.strip()):
            raise InvalidNameError("option names cannot contain empty entries: %r" % declared)
        name = part.removeprefix("--") if part.startswith("--") else part.removeprefix("-")
        if len(name) == 1:
            if not SHORT.fullmatch(name):
                raise InvalidNameError("short option name must be alphanumeric: %r" % part)
            if short is not None:
                raise InvalidNameError("option can have at most one short name: %r" % declared)
            short = name
        else:
            if not LONG.fullmatch(name):
                raise InvalidNameError(
                    "long option name must be alphanumerics and hyphens, not starting with a hyphen: %r" % part
                )
            if long is not None:
                raise InvalidNameError("option can have at most one long name: %r" % declared)
            long = name

    if short is None and long is None:
        raise InvalidNameError("option must have a short or a long name")
    return short, long


def _sanitize_value(owner, metadata, /):
    """
    Internal: resolve the value type and validate arity/default/validators/callback.

    The type is inferred when not declared: BOOLEAN for flags, TEXT_LIST for
    multi-value arities, the default's type when one is given, TEXT otherwise.
    """
    arity = metadata["arity"]

    if (type := metadata["type"]) is Unset:
        if arity.flag:
            type = ValueType.BOOLEAN
        elif arity.multiple:
            type = ValueType.TEXT_LIST
        elif metadata["default"] is not Unset:
            try:
                type = typeof(_pytype(metadata["default"]))
            except TypeError:
                raise DefaultTypeError("%s default %r has no matching value type" % (owner, metadata["default"])) from None
        else:
            type = ValueType.TEXT
    metadata["type"] = type = typeof(type)

    if arity.flag and type is not ValueType.BOOLEAN:
        raise ArityError("%s takes no value and must be boolean, not %s" % (owner, type.label))
    if arity.multiple and type is not ValueType.TEXT_LIST:
        raise ArityError("%s takes %s values and must be a text list, not %s" % (owner, arity, type.label))

    if (default := metadata["default"]) is not Unset:
        try:
            metadata["default"] = check_default(default, type)
        except TypeError as exception:
            raise DefaultTypeError("%s %s" % (owner, exception)) from None

    for validator in metadata["validators"]:
        if not isinstance(validator, SupportsValidate):
            raise TypeError("%s validators must provide validate(text)" % owner)
    metadata["validators"] = tuple(metadata["validators"])

    if metadata["callback"] is not Unset and not callable(metadata["callback"]):
        raise TypeError("%s callback must be callable" % owner)


def _pytype(object, /):
    return list if isinstance(object, tuple) else type(object)


class SchemaType(type):
    """
    Metaclass exposing the names in __introspectable__ as read-only properties
    backed by "_<name>" fields, with stable __repr__/__rich_repr__.
    """

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(cls, name, bases, namespace | {
            field: mirror(field) for field in namespace.get("__introspectable__", ())
        })

        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)

        def __repr__(self):
            return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))

        self.__rich_repr__ = __rich_repr__
        self.__repr__ = __repr__
        return self


class OptionSchema(metaclass=SchemaType):
    """
    Named option declaration (frozen).

    Properties
    - short / long: names without dashes (either may be None, not both).
    - key: canonical result key (long name when present, otherwise short name).
    - names: display aliases, e.g. ('-f', '--foo').
    - type, arity, required, default (Unset when none), validators, policy,
      env, callback, description, group, deprecated (Unset or message), suggest,
      hyphen_values.
    """

    __introspectable__ = (
        "short",
        "long",
        "type",
        "arity",
        "required",
        "default",
        "validators",
        "policy",
        "env",
        "callback",
        "description",
        "group",
        "deprecated",
        "suggest",
        "hyphen_values",
    )

    def __init__(
            self,
            short=None,
            long=None,
            *,
            type=Unset,
            arity=SINGLE,
            required=False,
            default=Unset,
            validators=(),
            policy=DuplicatePolicy.ERROR,
            env=None,
            callback=Unset,
            description="",
            group=Unset,
            deprecated=Unset,
            suggest=None,
            hyphen_values=False
    ):
        if short is None and long is None:
            raise InvalidNameError("option must have a short or a long name")
        if short is not None and not SHORT.fullmatch(short):
            raise InvalidNameError("short option name must be one alphanumeric character: %r" % short)
        if long is not None and not LONG.fullmatch(long):
            raise InvalidNameError("invalid long option name: %r" % long)

        owner = "option %r" % ("--" + long if long else "-" + short)

        if not isinstance(arity, Arity):
            raise ArityError("%s arity must be an Arity" % owner)
        if not isinstance(policy, DuplicatePolicy):
            raise PolicyError("%s duplicate policy must be a DuplicatePolicy" % owner)
        if env is not None and (not isinstance(env, str) or not env or "=" in env):
            raise ConfigurationError("%s environment variable name must be a non-empty string without '='" % owner)

        if policy is DuplicatePolicy.ACCUMULATE and type is Unset and not arity.flag:
            type = ValueType.TEXT_LIST

        metadata = {
            "short": short,
            "long": long,
            "type": type,
            "arity": arity,
            "required": bool(required),
            "default": default,
            "validators": validators,
            "policy": policy,
            "env": env,
            "callback": callback,
            "description": description or "",
            "group": coalesce(group, "flags" if arity.flag else "options"),
            "deprecated": deprecated,
            "suggest": suggest,
            "hyphen_values": bool(hyphen_values),
        }
        _sanitize_value(owner, metadata)

        if policy is DuplicatePolicy.ACCUMULATE and metadata["type"] is not ValueType.TEXT_LIST:
            raise PolicyError("%s can only accumulate when it holds a text list" % owner)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __setattr__(self, name, value):
        if hasattr(self, "_long") and hasattr(self, "_hyphen_values"):
            raise AttributeError("option schemas are immutable")
        super().__setattr__(name, value)

    @property
    def key(self):
        return self._long if self._long is not None else self._short

    @property
    def names(self):
        return tuple(name for name in ("-" + self._short if self._short else None, "--" + self._long if self._long else None) if name)

    @property
    def display(self):
        """the preferred spelling in messages ('--foo' over '-f')."""
        return "--" + self._long if self._long else "-" + self._short


class PositionalSchema(metaclass=SchemaType):
    """
    Positional slot declaration (frozen).

    Slots are filled in declaration order; a slot stays open until it holds
    arity.max values (forever when unbounded).
    """

    __introspectable__ = (
        "name",
        "type",
        "arity",
        "required",
        "default",
        "validators",
        "callback",
        "description",
    )

    def __init__(
            self,
            name,
            *,
            type=Unset,
            arity=SINGLE,
            required=False,
            default=Unset,
            validators=(),
            callback=Unset,
            description=""
    ):
        if not isinstance(name, str) or not LONG.fullmatch(name):
            raise InvalidNameError("invalid positional name: %r" % (name,))

        owner = "positional %r" % name

        if not isinstance(arity, Arity):
            raise ArityError("%s arity must be an Arity" % owner)
        if arity.flag:
            raise ArityError("%s must take at least one value" % owner)

        metadata = {
            "name": name,
            "type": type,
            "arity": arity,
            "required": bool(required),
            "default": default,
            "validators": validators,
            "callback": callback,
            "description": description or "",
        }
        _sanitize_value(owner, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __setattr__(self, name, value):
        if hasattr(self, "_description"):
            raise AttributeError("positional schemas are immutable")
        super().__setattr__(name, value)

    @property
    def key(self):
        return self._name

    @property
    def display(self):
        return self._name


__all__ = (
    "DuplicatePolicy",
    "Arity",
    "FLAG",
    "SINGLE",
    "arity",
    "names",
    "OptionSchema",
    "PositionalSchema",
)
