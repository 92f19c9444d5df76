"""
Argot validators.

A validator is any object with `validate(text) -> (valid, message)` and
`describe() -> str`. Validators see the raw text of a value after its type
conversion succeeded, in declaration order; the first failure wins.

Shipped validators
- RangeValidator(min, max): inclusive numeric bounds.
- PatternValidator(pattern, description): full-match regular expression.
- ChoiceValidator(choices): membership in a fixed set of strings.
- CustomValidator(function, description): wraps a predicate.

Factories: range_of, pattern, choice, custom.
"""
import re
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class SupportsValidate(Protocol):
    def validate(self, text: str, /) -> tuple[bool, str]: ...


class Validator(ABC):
    """base class for shipped validators."""

    @abstractmethod
    def validate(self, text, /):
        """return (True, "") when text is acceptable, (False, message) otherwise."""

    @abstractmethod
    def describe(self):
        """short human-readable description of the rule (used in help output)."""

    def __repr__(self):
        return f"{type(self).__name__}({self.describe()!r})"


class RangeValidator(Validator):
    def __init__(self, min, max, /):
        if not isinstance(min, int | float) or not isinstance(max, int | float):
            raise TypeError("RangeValidator bounds must be numbers")
        if min > max:
            raise ValueError("RangeValidator 'min' cannot be greater than 'max'")
        self.min = min
        self.max = max

    def validate(self, text, /):
        try:
            number = float(text)
        except ValueError:
            return False, "value %r is not a number" % text
        if self.min <= number <= self.max:
            return True, ""
        return False, "value %s is not in range [%s, %s]" % (text, self.min, self.max)

    def describe(self):
        return "range [%s, %s]" % (self.min, self.max)


class PatternValidator(Validator):
    def __init__(self, pattern, description="", /):
        self.pattern = re.compile(pattern)
        self.description = description or "pattern %r" % self.pattern.pattern

    def validate(self, text, /):
        if self.pattern.fullmatch(text):
            return True, ""
        return False, "value %r does not match %s" % (text, self.description)

    def describe(self):
        return self.description


class ChoiceValidator(Validator):
    def __init__(self, choices, /):
        choices = tuple(choices)
        if not choices:
            raise ValueError("ChoiceValidator requires at least one choice")
        if not all(isinstance(choice, str) for choice in choices):
            raise TypeError("ChoiceValidator choices must be strings")
        if len(set(choices)) != len(choices):
            raise ValueError("ChoiceValidator choices cannot contain duplicates")
        self.choices = choices

    def validate(self, text, /):
        if text in self.choices:
            return True, ""
        return False, "value %r is not one of %s" % (text, ", ".join(map(repr, self.choices)))

    def describe(self):
        return "one of {%s}" % ",".join(self.choices)


class CustomValidator(Validator):
    """
    wraps a predicate; message (when given) replaces the generated failure message.
    """

    def __init__(self, function, description="", /, *, message=None):
        if not callable(function):
            raise TypeError("CustomValidator function must be callable")
        self.function = function
        self.description = description or getattr(function, "__name__", "custom check")
        self.message = message

    def validate(self, text, /):
        if self.function(text):
            return True, ""
        return False, self.message or "value %r failed %s" % (text, self.description)

    def describe(self):
        return self.description


def range_of(min, max, /):
    return RangeValidator(min, max)


def pattern(pattern, description="", /):
    return PatternValidator(pattern, description)


def choice(choices, /):
    return ChoiceValidator(choices)


def custom(function, description="", /):
    return CustomValidator(function, description)


__all__ = (
    "SupportsValidate",
    "Validator",
    "RangeValidator",
    "PatternValidator",
    "ChoiceValidator",
    "CustomValidator",
    "range_of",
    "pattern",
    "choice",
    "custom",
)
