"""
Environment lookup capability.

The parse engine never reads process globals; options configured with an
environment variable name ask an injected EnvironmentLookup instead, exactly
once per option and only when the command line did not supply the option.
"""
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable


@runtime_checkable
class EnvironmentLookup(Protocol):
    def lookup(self, name: str, /) -> str | None: ...


class MappingEnvironment:
    """lookup backed by a fixed mapping (snapshotted at construction)."""

    def __init__(self, mapping=(), /, **variables):
        self._variables = MappingProxyType(dict(mapping, **variables))

    def lookup(self, name, /):
        return self._variables.get(name)

    def __repr__(self):
        return f"MappingEnvironment({dict(self._variables)!r})"


class ProcessEnvironment:
    """lookup backed by os.environ, read at lookup time."""

    def lookup(self, name, /):
        return os.environ.get(name)

    def __repr__(self):
        return "ProcessEnvironment()"


def environment(source=None, /):
    """
    Normalize the environment argument of parse().

    - None: an empty environment (no fallback values).
    - Mapping: wrapped in a MappingEnvironment.
    - EnvironmentLookup: used as-is.
    """
    if source is None:
        return MappingEnvironment()
    if isinstance(source, Mapping):
        return MappingEnvironment(source)
    if isinstance(source, EnvironmentLookup):
        return source
    raise TypeError("environment must be a mapping or provide lookup(name)")


__all__ = (
    "EnvironmentLookup",
    "MappingEnvironment",
    "ProcessEnvironment",
)
