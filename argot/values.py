"""
Argot value model.

Scope
- ValueType: the closed set of value kinds an option or positional can hold.
- convert(text, type): raw text → typed value (total for BOOLEAN/TEXT, partial for INTEGER/FLOAT).
- check_default(value, type): configuration-time validation of declared defaults.
- typeof(object): map Python types (bool, int, float, str, list) onto ValueType.

Notes
- TEXT_LIST values are lists while a parse is in flight and tuples once they
  reach a Result; convert() on a TEXT_LIST returns the single-item list that the
  engine extends with further occurrences.
"""
import re
from collections.abc import Iterable
from enum import Enum

from .utils import *


class ValueType(Enum):
    """
    closed variant of supported value kinds.

    the value of each member is the python type produced by convert().
    """
    BOOLEAN = bool
    INTEGER = int
    FLOAT = float
    TEXT = str
    TEXT_LIST = list

    @property
    def label(self):
        """lower-case label used in messages and help output (e.g., 'integer')."""
        return self.name.lower().replace("_", " ")

    @property
    def metavar(self):
        """placeholder shown in help (e.g., 'INT')."""
        return {
            ValueType.BOOLEAN: "BOOL",
            ValueType.INTEGER: "INT",
            ValueType.FLOAT: "FLOAT",
            ValueType.TEXT: "TEXT",
            ValueType.TEXT_LIST: "TEXT",
        }[self]


class ConversionError(ValueError):
    """raised by convert() when text cannot be turned into the requested type."""

    def __init__(self, text, type, /):
        super().__init__("cannot convert %r to %s" % (text, type.label))
        self.text = text
        self.type = type


FALSY = frozenset({"false", "0", "no", "off", "n", ""})

INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
FLOAT_TEXT = re.compile(r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)", re.IGNORECASE)


def typeof(object, /):
    """
    Normalize a ValueType or a Python type into a ValueType.

    Accepted forms
    - ValueType members are returned unchanged.
    - bool, int, float, str map to BOOLEAN, INTEGER, FLOAT, TEXT.
    - list and tuple map to TEXT_LIST.
    """
    if isinstance(object, ValueType):
        return object
    try:
        return {
            bool: ValueType.BOOLEAN,
            int: ValueType.INTEGER,
            float: ValueType.FLOAT,
            str: ValueType.TEXT,
            list: ValueType.TEXT_LIST,
            tuple: ValueType.TEXT_LIST,
        }[object]
    except (KeyError, TypeError):
        raise TypeError("typeof() argument must be a value type or one of bool, int, float, str, list") from None


def convert(text, type, /):
    """
    Convert raw text into a typed value.

    Behavior per type
    - BOOLEAN: total; 'false', '0', 'no', 'off', 'n' and '' (any casing) are False, the rest True.
    - INTEGER: optional sign and ascii digits; raises ConversionError otherwise.
    - FLOAT: decimal or exponent notation, inf or nan; raises ConversionError otherwise.
    - TEXT: identity.
    - TEXT_LIST: a single-item list holding the text.
    """
    if not isinstance(text, str):
        raise TypeError("convert() first argument must be a string")

    match type:
        case ValueType.BOOLEAN:
            return text.strip().lower() not in FALSY
        case ValueType.TEXT:
            return text
        case ValueType.TEXT_LIST:
            return [text]
        case ValueType.INTEGER:
            # plain ascii digits only: no whitespace, underscores or other scripts
            if not INTEGER_TEXT.fullmatch(text):
                raise ConversionError(text, type)
            try:
                return int(text, 10)
            except ValueError:
                raise ConversionError(text, type) from None
        case ValueType.FLOAT:
            if not FLOAT_TEXT.fullmatch(text):
                raise ConversionError(text, type)
            return float(text)
        case _:
            raise TypeError("convert() second argument must be a value type")


def check_default(value, type, /):
    """
    Validate a default value against a declared type and return its normalized form.

    Normalization
    - FLOAT accepts int defaults and widens them.
    - TEXT_LIST accepts any non-string iterable of strings and stores a tuple.

    Raises
    - TypeError: when the value does not match the declared type.
    """
    match type:
        case ValueType.BOOLEAN:
            if isinstance(value, bool):
                return value
        case ValueType.INTEGER:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        case ValueType.FLOAT:
            if isinstance(value, int | float) and not isinstance(value, bool):
                return float(value)
        case ValueType.TEXT:
            if isinstance(value, str):
                return value
        case ValueType.TEXT_LIST:
            if isinstance(value, Iterable) and not isinstance(value, str | bytes):
                items = tuple(value)
                if all(isinstance(item, str) for item in items):
                    return items
    raise TypeError("default %r does not match declared type %s" % (value, type.label))


def freeze(value, /):
    """snapshot a parsed value for a Result (lists become tuples)."""
    return tuple(value) if isinstance(value, list) else value


__all__ = (
    "ValueType",
    "ConversionError",
    "typeof",
    "convert",
    "check_default",
    "freeze",
)
