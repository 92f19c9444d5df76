"""
Argot parse engine.

parse(node, arguments, environment=None) walks the classified tokens of one
argument list against a frozen ParserNode tree and returns a Result.

states
- AWAITING_TOKEN: the next token decides what happens (option, cluster,
  positional, subcommand, end of options).
- RESOLVING_OPTION: a value-taking option without an inline value is pulling
  its value(s) from the following tokens. A token that looks like an option
  ('-' followed by a non-digit) is never pulled unless the option allows
  hyphen-led values.
- DONE: tokens are exhausted; environment fallbacks, defaults and
  required checks run over every node visited along the subcommand path.

error policy
- parse errors are recorded, never raised; scanning continues so one pass
  reports everything it can. A cluster with an unknown character is dropped as
  a whole, the following tokens are still processed.
- values are committed only after conversion and every validator succeed.

subcommands
- a positional token equal to a child's name selects that child when no
  positional slot of the active node is open. From then on only the child's
  schema is consulted, so a later sibling name is just another positional.
"""
import difflib
import os
from enum import Enum

from .environment import environment as _environment
from .expander import Reference, expand
from .faults import *
from .result import Result
from .schema import LONG, DuplicatePolicy, OptionSchema
from .tokens import *
from .tokens import NUMBER
from .utils import *
from .values import *


class State(Enum):
    AWAITING_TOKEN = "awaiting-token"
    RESOLVING_OPTION = "resolving-option"
    DONE = "done"


class ParseContext:
    """
    mutable state of one parse call (never shared, discarded once the Result exists).
    """
    __slots__ = (
        "cursor",
        "state",
        "node",
        "visited",
        "path",
        "values",
        "errors",
        "warnings",
        "remaining",
        "extras",
        "seen",
        "assigned",
        "slot",
        "filled",
        "counts",
        "pending",
    )

    def __init__(self, root, /):
        self.cursor = 0
        self.state = State.AWAITING_TOKEN
        self.node = root
        self.visited = [root]
        self.path = []
        self.values = {}
        self.errors = []
        self.warnings = []
        self.remaining = []
        self.extras = []
        self.seen = {}       # schema -> command-line occurrences
        self.assigned = set()  # schemas holding a final value
        self.slot = 0        # current positional slot of the active node
        self.filled = 0      # values taken by the current slot
        self.counts = {}     # positional schema -> values taken
        self.pending = None  # reference being resolved in RESOLVING_OPTION


class _Stream:
    """one-token lookahead over the lazy classifier."""

    def __init__(self, tokens, /):
        self._tokens = iter(tokens)
        self._peeked = Unset

    def peek(self):
        if self._peeked is Unset:
            self._peeked = next(self._tokens, None)
        return self._peeked

    def next(self):
        token = self.peek()
        self._peeked = Unset
        return token


def _split(text, /):
    """split an inline multi-value on the strongest separator present."""
    return text.split(os.pathsep if os.pathsep in text else ":" if ":" in text else ",")


class Engine:
    """
    one parse pass over one argument list.

    an Engine is created per parse() call; it owns its ParseContext and only
    reads the node tree.
    """

    def __init__(self, root, environment, /):
        self._root = root
        self._environment = environment
        self._context = ParseContext(root)

    # -- reporting ---------------------------------------------------------

    def _error(self, kind, message, argument=None, option=None, /, **context):
        self._context.errors.append(ParseError(kind, message, argument, option, **context))

    def _warn(self, kind, message, argument=None, option=None, /, **context):
        self._context.warnings.append(ParseWarning(kind, message, argument, option, **context))

    def _route(self):
        return " ".join([self._root.name, *self._context.path])

    # -- main loop ---------------------------------------------------------

    def run(self, arguments):
        context = self._context
        stream = _Stream(classify(arguments))

        while (token := stream.next()) is not None:
            context.cursor = token.index
            match token:
                case EndOfOptions():
                    while (token := stream.next()) is not None:
                        context.remaining.append(token.text)
                case LongOption():
                    self._long(token, stream)
                case ShortCluster():
                    self._cluster(token, stream)
                case Positional():
                    self._positional(token)
                case _:
                    self._error(
                        ErrorKind.INTERNAL_ERROR,
                        "unclassified argument %r at %s position" % (token, ordinal(context.cursor + 1)),
                    )

        context.state = State.DONE
        self._finalize()

        aliases = {}
        for node in context.visited:
            for option in node.options:
                for alias in (option.short, option.long, *option.names):
                    if alias is not None:
                        aliases.setdefault(alias, option.key)

        return Result(
            context.values,
            context.errors,
            context.warnings,
            context.path,
            context.remaining,
            context.extras,
            aliases,
        )

    # -- tokens ------------------------------------------------------------

    def _long(self, token, stream):
        context = self._context
        node = context.node

        if not LONG.fullmatch(token.name):
            return self._error(
                ErrorKind.INVALID_FORMAT,
                "bad form of option %r at %s position" % (token.text, ordinal(token.index + 1)),
                token.text,
                index=token.index,
                hint="long options are spelled --name or --name=value (letters, digits and hyphens)",
            )

        if (schema := node.long(token.name)) is None:
            if node.allow_unknown:
                context.extras.append(token.text)
                return
            spelled = "--" + token.name
            suggestions = difflib.get_close_matches(spelled, ["--" + name for name in node.longs], 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self._route())
            except IndexError:
                hint = "try '%s --help' to see all available options" % self._route()
            return self._error(
                ErrorKind.UNKNOWN_OPTION,
                "unknown option %r at %s position" % (spelled, ordinal(token.index + 1)),
                token.text,
                spelled,
                index=token.index,
                hint=hint,
                suggestions=suggestions,
            )

        self._occurrence(Reference(schema, "--" + token.name, token.value), token, stream)

    def _cluster(self, token, stream):
        context = self._context
        node = context.node

        # '-5' is a negative number unless '5' names a short option
        if NUMBER.match(token.text) and node.short(token.chars[0]) is None:
            return self._positional(Positional(token.text, token.index))

        expansion = expand(token, node)
        context.extras.extend(expansion.extras)
        if expansion.error is not None:
            context.errors.append(expansion.error)
            return
        for reference in expansion.references:
            self._occurrence(reference, token, stream)

    def _positional(self, token):
        context = self._context
        node = context.node
        slots = node.positionals

        while (
            context.slot < len(slots) and
            slots[context.slot].arity.max is not None and
            context.filled >= slots[context.slot].arity.max
        ):
            context.slot += 1
            context.filled = 0

        available = context.slot < len(slots)

        if not available and (child := node.child(token.text)) is not None:
            context.node = child
            context.visited.append(child)
            context.path.append(child.name)
            context.slot = context.filled = 0
            return

        if available:
            slot = slots[context.slot]
            context.filled += 1
            context.counts[slot] = context.counts.get(slot, 0) + 1
            if (value := self._convert(slot, [token.text], token.text, token.index)) is not Unset:
                self._commit(slot, value, token.text, token.index)
            return

        context.extras.append(token.text)
        if node.allow_unknown:
            return
        if node.children:
            suggestions = difflib.get_close_matches(token.text, list(node.children), 5)
            kind = "subcommand" if context.path else "command"
            try:
                hint = "did you mean %r? you can also run '%s --help' to see available %ss" % (suggestions[0], self._route(), kind)
            except IndexError:
                hint = "run '%s --help' to see available %ss" % (self._route(), kind)
            return self._error(
                ErrorKind.SUBCOMMAND_ERROR,
                "unknown %s %r at %s position" % (kind, token.text, ordinal(token.index + 1)),
                token.text,
                index=token.index,
                hint=hint,
                suggestions=suggestions,
            )
        self._error(
            ErrorKind.EXTRA_VALUE,
            "unexpected positional argument %r at %s position" % (token.text, ordinal(token.index + 1)),
            token.text,
            index=token.index,
            hint="remove this extra value or run '%s --help' to see the expected usage" % self._route(),
        )

    # -- options -----------------------------------------------------------

    def _consumable(self, schema, token):
        match token:
            case None | EndOfOptions():
                return False
            case Positional():
                return True
            case _:
                return schema.hyphen_values or not looks_like_option(token.text)

    def _duplicate(self, schema, name, token):
        self._error(
            ErrorKind.DUPLICATE_OPTION,
            "option %r at %s position was already provided" % (name, ordinal(token.index + 1)),
            token.text,
            schema.display,
            index=token.index,
            hint="keep a single %s; it can be specified only once" % schema.display,
        )

    def _occurrence(self, reference, token, stream):
        context = self._context
        schema, name, inline = reference

        if schema.deprecated is not Unset:
            message = "option %r at %s position is deprecated" % (name, ordinal(token.index + 1))
            if schema.deprecated:
                message += ": %s" % schema.deprecated
            self._warn(
                WarningKind.DEPRECATED_OPTION,
                message,
                token.text,
                schema.display,
                index=token.index,
                hint=("use %r instead" % schema.suggest) if schema.suggest else "run '%s --help' to see current usage" % self._route(),
            )

        context.seen[schema] = context.seen.get(schema, 0) + 1
        duplicate = context.seen[schema] > 1 and schema.policy is DuplicatePolicy.ERROR

        if schema.arity.flag:
            if duplicate:
                return self._duplicate(schema, name, token)
            if inline is None:
                value = True
            elif inline in ("true", "false"):
                value = inline == "true"
            else:
                return self._error(
                    ErrorKind.EXTRA_VALUE,
                    "flag %r at %s position cannot have an inline value" % (name, ordinal(token.index + 1)),
                    token.text,
                    schema.display,
                    index=token.index,
                    hint="remove everything from '=' (for example: %s), or use =true / =false" % name,
                )
            return self._commit(schema, value, token.text, token.index)

        if inline is not None:
            if not inline:
                self._warn(
                    WarningKind.EMPTY_VALUE,
                    "empty inline value for option %r at %s position" % (name, ordinal(token.index + 1)),
                    token.text,
                    schema.display,
                    index=token.index,
                    hint="add a value after '=' (for example: %s=<value>)" % name,
                )
            texts = _split(inline) if schema.arity.multiple else [inline]
        else:
            context.state = State.RESOLVING_OPTION
            context.pending = reference
            texts = []
            while (
                (schema.arity.max is None or len(texts) < schema.arity.max) and
                self._consumable(schema, stream.peek())
            ):
                texts.append(stream.next().text)
            context.state = State.AWAITING_TOKEN
            context.pending = None

        # the repeated occurrence still owns the values it consumed
        if duplicate:
            return self._duplicate(schema, name, token)

        if len(texts) < schema.arity.min:
            if schema.arity.min == 1:
                message = "option %r at %s position requires a value" % (name, ordinal(token.index + 1))
            else:
                message = "option %r at %s position requires at least %d values" % (name, ordinal(token.index + 1), schema.arity.min)
            return self._error(
                ErrorKind.MISSING_VALUE,
                message,
                token.text,
                schema.display,
                index=token.index,
                hint="provide a value (for example: %s=<%s>)" % (name, schema.type.metavar.lower()),
            )
        if schema.arity.max is not None and len(texts) > schema.arity.max:
            return self._error(
                ErrorKind.EXTRA_VALUE,
                "option %r at %s position takes at most %d values but got %d" % (
                    name, ordinal(token.index + 1), schema.arity.max, len(texts)
                ),
                token.text,
                schema.display,
                index=token.index,
                hint="drop the extra values",
            )

        if (value := self._convert(schema, texts, token.text, token.index)) is not Unset:
            self._commit(schema, value, token.text, token.index)

    # -- values ------------------------------------------------------------

    def _convert(self, schema, texts, argument, index, /, *, source=None):
        """
        convert and validate raw texts for a schema; return the value or Unset.

        source names where the texts came from when it is not the command line
        (e.g., an environment variable), for the messages.
        """
        where = ("from %s" % source) if source else "at %s position" % ordinal(index + 1)

        if schema.type is ValueType.TEXT_LIST:
            value = list(texts)
        else:
            try:
                value = convert(texts[0], schema.type)
            except ConversionError:
                return self._error(
                    ErrorKind.TYPE_MISMATCH,
                    "value %r for %r %s is not a valid %s" % (texts[0], schema.display, where, schema.type.label),
                    argument,
                    schema.display,
                    index=index,
                    hint="use a valid %s for %r" % (schema.type.label, schema.display),
                ) or Unset

        for text in texts:
            for validator in schema.validators:
                try:
                    valid, message = validator.validate(text)
                except Exception as exception:
                    valid, message = False, "value %r for %r %s was rejected: %s" % (text, schema.display, where, exception)
                if not valid:
                    return self._error(
                        ErrorKind.VALIDATION_FAILED,
                        message or "value %r for %r %s is not valid" % (text, schema.display, where),
                        argument,
                        schema.display,
                        index=index,
                        hint=getattr(validator, "describe", lambda: None)(),
                    ) or Unset
        return value

    def _commit(self, schema, value, argument, index, /):
        context = self._context
        key = schema.key

        if isinstance(schema, OptionSchema) and schema.policy is DuplicatePolicy.ACCUMULATE and schema in context.assigned:
            stored = context.values.get(key)
            if not isinstance(stored, list):
                return self._error(
                    ErrorKind.INTERNAL_ERROR,
                    "cannot accumulate into %r: stored value is not a list" % schema.display,
                    argument,
                    schema.display,
                    index=index,
                )
            stored.extend(value)
        elif schema in context.assigned and schema.type is ValueType.TEXT_LIST and not isinstance(schema, OptionSchema):
            # positional slots collect one value per token
            context.values[key].extend(value)
        else:
            context.values[key] = list(value) if isinstance(value, list) else value
        context.assigned.add(schema)

        if schema.callback is not Unset:
            try:
                schema.callback(freeze(value))
            except Exception as exception:
                self._error(
                    ErrorKind.VALIDATION_FAILED,
                    "value for %r was rejected: %s" % (schema.display, exception),
                    argument,
                    schema.display,
                    index=index,
                    hint="check the value against what %r expects" % schema.display,
                )

    # -- finalization ------------------------------------------------------

    def _finalize(self):
        context = self._context

        for position, node in enumerate(context.visited):
            for option in node.options:
                self._settle_option(option)

            for slot in node.positionals:
                self._settle_positional(slot)

            if node.require_subcommand and node.children and position == len(context.visited) - 1:
                self._error(
                    ErrorKind.SUBCOMMAND_ERROR,
                    "a subcommand is required after %r" % " ".join([self._root.name, *context.path]),
                    hint="choose one of: %s" % ", ".join(node.children),
                )

    def _settle_option(self, option):
        context = self._context

        if option in context.seen:
            return

        if option.env is not None:
            text = self._environment.lookup(option.env)
            if text is not None:
                if option.arity.flag:
                    value = convert(text, ValueType.BOOLEAN)
                else:
                    texts = _split(text) if option.arity.multiple else [text]
                    value = self._convert(option, texts, text, None, source="environment variable %s" % option.env)
                if value is not Unset:
                    self._commit(option, value, text, None)
                return

        if option.default is not Unset:
            if option.key not in context.values:
                context.values[option.key] = option.default
            context.assigned.add(option)
            return

        if option.required:
            self._error(
                ErrorKind.MISSING_REQUIRED,
                "option %r is required" % option.display,
                None,
                option.display,
                hint="add %s to the command line" % option.display,
            )

    def _settle_positional(self, slot):
        context = self._context
        count = context.counts.get(slot, 0)

        if count:
            if count < slot.arity.min:
                self._error(
                    ErrorKind.MISSING_VALUE,
                    "positional %r requires at least %d values but got %d" % (slot.name, slot.arity.min, count),
                    None,
                    slot.name,
                    hint="add the missing values",
                )
            return

        if slot.default is not Unset:
            context.values.setdefault(slot.key, slot.default)
            context.assigned.add(slot)
        elif slot.required:
            self._error(
                ErrorKind.MISSING_REQUIRED,
                "positional %r is required" % slot.name,
                None,
                slot.name,
                hint="run '%s --help' to see the expected order" % self._route(),
            )


def parse(node, arguments, environment=None, /):
    """
    Parse an argument list (program name excluded) against a frozen node tree.

    environment
    - None: no environment fallback values.
    - a mapping, or any object with lookup(name) -> str | None.
    """
    if isinstance(arguments, str | bytes):
        raise TypeError("parse() arguments must be a sequence of strings, not a single string")
    arguments = list(arguments)
    if not all(isinstance(argument, str) for argument in arguments):
        raise TypeError("parse() arguments must be strings")
    return Engine(node, _environment(environment)).run(arguments)


__all__ = (
    "State",
    "ParseContext",
    "Engine",
    "parse",
)
