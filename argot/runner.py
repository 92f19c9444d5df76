"""
Argot process-level runner.

invoke() is the thin layer between a process and the pure parse engine: it
turns a prompt into an argument list, supplies the process environment,
answers --help / --version, and decides what happens to faults.

Prompt forms
- Unset: sys.argv[1:].
- str: shell-like string, split with shlex.split.
- Iterable[str]: used as-is (each item must be a string).

Fault handling
- shell=True: warnings and errors are rendered on stderr with rich; a failed
  parse exits the process with status 2.
- shell=False: warnings go through warnings.warn; a failed parse raises
  ParseExit (an ExceptionGroup of the ParseErrors).
"""
import shlex
import sys
from collections.abc import Iterable

from .engine import parse
from .environment import ProcessEnvironment
from .faults import *
from .rendering import print_help, print_version
from .utils import *


def _arguments(prompt, /):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        arguments = list(prompt)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("invoke() prompt must be a string or an iterable of strings")
        return arguments
    raise TypeError("invoke() prompt must be a string or an iterable of strings")


def _intercept(root, arguments, /):
    """
    find a help or version request before '--', following subcommand names.

    returns ("help", node, route), ("version", node, route) or None. Names the
    node itself declares (-h, --help, --version) are left to the parser.
    """
    node = root
    route = [root.name]
    for argument in arguments:
        if argument == "--":
            break
        if argument in ("-h", "--help") and node.long("help") is None and node.short("h") is None:
            return "help", node, " ".join(route)
        if argument == "--version" and node is root and root.version is not None and root.long("version") is None:
            return "version", node, " ".join(route)
        if (child := node.child(argument)) is not None:
            node = child
            route.append(argument)
    return None


def invoke(app, prompt=Unset, /, *, shell=False, fancy=False, colorful=True):
    """
    Parse a prompt against an App (or a frozen ParserNode) the way a program would.

    Returns the Result of a successful parse, or None when help/version was
    printed outside shell mode (in shell mode the process exits with 0).
    """
    if hasattr(app, "freeze") and callable(app.freeze):
        node = app.freeze()
    elif hasattr(app, "walk") and hasattr(app, "child"):
        node = app
    else:
        raise TypeError("invoke() argument must be an App or a parser node")

    arguments = _arguments(prompt)

    if (request := _intercept(node, arguments)) is not None:
        match request:
            case "help", target, route:
                print_help(target, route=route, colorful=colorful, fancy=fancy)
            case "version", target, _:
                print_version(target, colorful=colorful, fancy=fancy)
        if shell:
            sys.exit(0)
        return None

    result = parse(node, arguments, ProcessEnvironment())
    options = {"prog": node.name, "shell": shell, "fancy": fancy, "colorful": colorful}

    for warning in result.warnings:
        trigger(warning, **options)
    if result.failed():
        trigger(ParseExit(result.errors), **options)
    return result


__all__ = (
    "invoke",
)
