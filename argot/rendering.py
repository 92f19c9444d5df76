"""
Argot help and version rendering.

Everything here reads a frozen ParserNode; nothing feeds back into parsing.

- render_help(node, ...) / render_version(node, ...): rich renderables.
- print_help / print_version: print them on a console.
- format_help(node, ...): the help text as a plain string (what App.help() returns).

Palette keys
- usage-label, program-name, usage-section, description-section, footer-section
- group-label, argument-description, argument-details
- option-name, flag-name, deprecated-name, metavar, positional
- children-title, children-table, children, children-description
- program-version, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed; deprecated names keep strike.
"""
import io
from collections import defaultdict, deque

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.containers import Lines
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .schema import DuplicatePolicy
from .utils import *

PALETTE = {
    # === Head sections ===
    "usage-label": "bold #00E6FF",
    "program-name": "bold #FF4D94",
    "usage-section": "bold #36C5F0",
    "description-section": "italic #A3A3A3",
    "footer-section": "#737373",

    # === Groups / arguments ===
    "group-label": "bold #FFFFFF",
    "argument-description": "#9CA3AF",
    "argument-details": "dim #9CA3AF",

    # === Names / metavars ===
    "option-name": "bold #00E6FF",
    "flag-name": "bold #22C55E",
    "deprecated-name": "bold #F97316 strike",
    "metavar": "bold #FFD600",
    "positional": "bold #FFD600",

    # === Children table ===
    "children-title": "bold #FFFFFF",
    "children-table": "#4B5563",
    "children": "bold #36C5F0",
    "children-description": "#9CA3AF",

    # === Version / panel ===
    "program-version": "bold #00E6FF",
    "panel-title": "bold #FF4D94",
}


class _Painter:
    """palette lookups honoring the colorful switch (see module docstring)."""

    def __init__(self, colorful):
        self.colorful = colorful
        self.styles = defaultdict(str, PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def style(self, name):
        if "deprecated" in name and not self.colorful:
            return "strike"
        return self.styles[name] if self.colorful else ""

    def text(self, fragment, name=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), self.style(name))


def _metavar(schema, painter):
    placeholder = painter.text("<%s>" % (getattr(schema, "name", None) or schema.type.metavar.lower()), "metavar")
    arity = schema.arity
    if arity.max is None:
        return Text.assemble(placeholder, " ...")
    if arity.min == arity.max:
        return Text(" ").join(placeholder for _ in range(arity.min))
    return Text.assemble(placeholder, " [", placeholder, " ...]")


def _option_names(option, painter, spellings=None):
    name = "deprecated-name" if option.deprecated is not Unset else "flag-name" if option.arity.flag else "option-name"
    return Text(", ").join(painter.text(spelling, name) for spelling in spellings or option.names)


def _details(schema):
    details = []
    if schema.required:
        details.append("required")
    if schema.default is not Unset:
        default = schema.default
        details.append("default: %s" % (",".join(default) if isinstance(default, tuple) else default))
    if getattr(schema, "env", None):
        details.append("env: %s" % schema.env)
    for validator in schema.validators:
        if callable(describe := getattr(validator, "describe", None)):
            details.append(describe())
    if getattr(schema, "policy", None) is DuplicatePolicy.ACCUMULATE:
        details.append("repeatable")
    deprecated = getattr(schema, "deprecated", Unset)
    if deprecated is not Unset:
        details.append("deprecated" + (": %s" % deprecated if deprecated else ""))
        if schema.suggest:
            details.append("use %s" % schema.suggest)
    return details


def _usage(node, route, painter, width):
    usage = Text()
    usage.append("usage", painter.style("usage-label")).append(": ")
    usage.append(painter.text(route, "program-name")).append(" ")
    offset = len(usage)

    inputs = deque()
    for option in node.options:
        segment = _option_names(option, painter, (option.display,))
        if not option.arity.flag:
            segment.append(" ").append(_metavar(option, painter))
        inputs.append(segment if option.required else Text.assemble("[", segment, "]"))
    for positional in node.positionals:
        segment = _metavar(positional, painter)
        inputs.append(segment if positional.required else Text.assemble("[", segment, "]"))
    if node.children:
        inputs.append(painter.text("<command>" if node.require_subcommand else "[command]", "usage-section"))

    try:
        lines = Lines([inputs.popleft()])
    except IndexError:
        lines = Lines()
    while inputs:
        if len(lines[-1]) + 1 + len(segment := inputs.popleft()) > width - offset:
            lines.append(segment)
        else:
            lines[-1].append(Text(" ") + segment)

    try:
        usage.append(lines.pop(0))
    except IndexError:
        pass
    for line in lines:
        usage.append("\n").append(" " * offset).append(line)
    return usage


def _groups(node):
    groups = {}
    if node.positionals:
        groups["arguments"] = list(node.positionals)
    for option in node.options:
        groups.setdefault(option.group, []).append(option)
    return groups


def render_help(node, /, *, route=None, colorful=True, fancy=False, width=80):
    """
    Build the help renderable for a frozen node.

    route is the command line leading to the node (e.g., "tool create");
    defaults to the node's name.
    """
    painter = _Painter(colorful)
    route = route or node.name
    width = width - 4 * fancy
    console = Console(width=width)
    renders = [_usage(node, route, painter, width).append("\n")]

    if node.description:
        renders.append(painter.text(node.description, "description-section").append("\n"))

    if node.children:
        table = Table(
            "name", "help",
            title=painter.text("subcommands" if " " in route else "commands", "children-title"),
            width=int(width * (2 / 3)),
            box=ROUNDED,
            style=painter.style("children-table"),
            header_style=painter.style("children-title"),
        )
        for name, child in node.children.items():
            if child.description:
                help = painter.text(child.description, "children-description")
            else:
                help = painter.text("run '%s %s --help' for details" % (route, name), "children-description")
            table.add_row(painter.text(name, "children"), help)
        renders.append(table)

    padding = 2
    indent = 24
    for group, arguments in _groups(node).items():
        section = Text()
        section.append(painter.text(group, "group-label")).append(":\n")
        for argument in arguments:
            if hasattr(argument, "names"):
                names = _option_names(argument, painter)
                if not argument.arity.flag:
                    names.append(" ").append(_metavar(argument, painter))
            else:
                names = painter.text(argument.name, "positional")

            line = Text(" " * padding).append(names)
            description = painter.text(argument.description, "argument-description")
            if details := _details(argument):
                description.append(" " if description else "")
                description.append(painter.text("[%s]" % "; ".join(details), "argument-details"))

            if description:
                if len(line) >= indent:
                    line.append("\n").append(" " * indent)
                else:
                    line.append(" " * (indent - len(line)))
                wrapped = description.wrap(console, max(width - indent, 16))
                try:
                    line.append(wrapped.pop(0))
                except IndexError:
                    pass
                for segment in wrapped:
                    line.append("\n").append(" " * indent).append(segment)
            section.append(line).append("\n")
        renders.append(section)

    if node.footer:
        renders.append(painter.text(node.footer, "footer-section").append("\n"))

    if isinstance(renders[-1], Text):
        renders[-1].rstrip()
    renderable = Group(*renders)

    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", "%s HELP" % route.upper(), " ]", style=painter.style("panel-title")),
            title_align="left",
            width=width + 4,
        )
    return renderable


def render_version(node, /, *, colorful=True, fancy=False):
    """'<name> — <version>' (version defaults to 1.0.0)."""
    painter = _Painter(colorful)
    renderable = Text(" — ").join((
        painter.text(node.name, "program-name"),
        painter.text(node.version or "1.0.0", "program-version"),
    ))
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", "%s VERSION" % node.name.upper(), " ]", style=painter.style("panel-title")),
            title_align="left",
        )
    return renderable


def print_help(node, /, *, route=None, colorful=True, fancy=False, stderr=False):
    console = Console(stderr=stderr)
    console.print(render_help(node, route=route, colorful=colorful, fancy=fancy, width=console.width))


def print_version(node, /, *, colorful=True, fancy=False):
    Console().print(render_version(node, colorful=colorful, fancy=fancy))


def format_help(node, /, *, route=None, colorful=False, width=80):
    """help text as a string; ANSI styling only when colorful is True."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        force_terminal=colorful,
        color_system="truecolor" if colorful else None,
        legacy_windows=False,
    )
    console.print(render_help(node, route=route, colorful=colorful, width=width))
    return buffer.getvalue()


__all__ = (
    "render_help",
    "render_version",
    "print_help",
    "print_version",
    "format_help",
)
