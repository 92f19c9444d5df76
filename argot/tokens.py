"""
Argot tokenizer/classifier.

classify(arguments) lazily turns raw arguments (program name excluded) into
classified tokens, applying these rules in order:

1. '--' exactly → EndOfOptions; every later argument is a Positional.
2. '--<rest>' → LongOption, split at the first '=' into name and inline value.
3. '-<rest>' → ShortCluster (its inline value is resolved by the expander).
4. anything else (including a bare '-') → Positional.

Every token remembers its raw text and its 0-based index in the argument list.
"""
import re
from typing import NamedTuple


class ShortCluster(NamedTuple):
    chars: str
    text: str
    index: int


class LongOption(NamedTuple):
    name: str
    value: str | None
    text: str
    index: int


class EndOfOptions(NamedTuple):
    text: str
    index: int


class Positional(NamedTuple):
    text: str
    index: int


NUMBER = re.compile(r"-\d")


def looks_like_option(text, /):
    """
    heuristic used when deciding whether a token can be consumed as a value:
    a leading '-' followed by a non-digit (so '-5' and '-' are values, '-x' is not).
    """
    return text.startswith("-") and len(text) > 1 and not NUMBER.match(text)


def classify(arguments, /):
    """
    Yield classified tokens for the given arguments.

    The generator is finite and not restartable; the end-of-options state is
    internal to one iteration.
    """
    ended = False
    for index, text in enumerate(arguments):
        if not isinstance(text, str):
            raise TypeError("arguments must be strings")
        if ended:
            yield Positional(text, index)
        elif text == "--":
            ended = True
            yield EndOfOptions(text, index)
        elif text.startswith("--"):
            name, separator, value = text[2:].partition("=")
            yield LongOption(name, value if separator else None, text, index)
        elif text.startswith("-") and len(text) > 1:
            yield ShortCluster(text[1:], text, index)
        else:
            yield Positional(text, index)


__all__ = (
    "ShortCluster",
    "LongOption",
    "EndOfOptions",
    "Positional",
    "looks_like_option",
    "classify",
)
