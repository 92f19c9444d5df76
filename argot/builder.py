"""
Argot configuration surface.

An App is the mutable, fluent description of one command level. Options,
flags and positionals are added through add_option / add_flag /
add_positional, each returning an OptionBuilder whose setters chain:

    app = App("tool", "does things")
    app.add_option("c,count", "how many").type(int).check(range_of(1, 100)).default_value(1)
    app.add_flag("v,verbose")

    create = app.add_subcommand("create", "create a project")
    create.add_option("n,name").required()

    result = app.parse(["-v", "create", "--name", "p1"])
    result.subcommand()  # 'create'

Configuration mistakes are raised immediately by the call that makes them
(ConfigurationError subclasses); every setter rebuilds and re-validates the
underlying schema so a bad combination never survives the call.

freeze() turns the App tree into an immutable ParserNode tree. It is called
implicitly by parse() and help(); after it, every mutating call raises
FrozenSchemaError.
"""
from .engine import parse
from .faults import *
from .nodes import ParserNode
from .rendering import format_help
from .schema import *
from .schema import LONG
from .utils import *
from .validators import CustomValidator, SupportsValidate
from .values import typeof


class OptionBuilder:
    """
    chainable configuration handle for one option, flag or positional.

    The handle owns the keyword arguments of its schema; each setter merges
    its change, rebuilds the schema (raising on any inconsistency) and only
    then keeps the change.
    """

    # setters that only make sense for named options
    _named = frozenset({"env", "policy", "deprecated", "suggest", "group", "hyphen_values"})

    def __init__(self, app, factory, metadata, /):
        self._app = app
        self._factory = factory
        self._metadata = {}
        self._schema = None
        self._update(**metadata)

    @property
    def schema(self):
        """the current (validated) schema."""
        return self._schema

    def _update(self, **fields):
        self._app._check()
        if self._factory is PositionalSchema and (unsupported := fields.keys() & self._named):
            raise ConfigurationError("positional %r does not support %s" % (
                self._metadata.get("name", fields.get("name")), ", ".join(sorted(unsupported))
            ))
        metadata = self._metadata | fields
        self._schema = self._factory(**metadata)
        self._metadata = metadata
        return self

    def required(self, required=True, /):
        return self._update(required=required)

    def default_value(self, value, /):
        return self._update(default=value)

    def check(self, validator, message="", /):
        """
        append a validator; a plain callable (text -> bool) is wrapped, with
        message (when given) used as its failure message.
        """
        if not isinstance(validator, SupportsValidate):
            if not callable(validator):
                raise TypeError("check() expects a validator or a callable")
            validator = CustomValidator(validator, message, message=message or None)
        return self._update(validators=(*self._metadata.get("validators", ()), validator))

    def env(self, name, /):
        return self._update(env=name)

    def expected(self, count, max=Unset, /):
        """expected(n) for exactly n values, expected(min, max) for a range (max 0 or None: unbounded)."""
        return self._update(arity=arity(count, max))

    def callback(self, function, /):
        return self._update(callback=function)

    def duplicate_policy(self, policy, /):
        if isinstance(policy, str):
            try:
                policy = DuplicatePolicy(policy)
            except ValueError:
                raise PolicyError("unknown duplicate policy: %r" % policy) from None
        return self._update(policy=policy)

    def type(self, type, /):
        try:
            type = typeof(type)
        except TypeError as exception:
            raise ConfigurationError(str(exception)) from None
        return self._update(type=type)

    def group(self, name, /):
        return self._update(group=name)

    def deprecated(self, message="", /):
        return self._update(deprecated=message)

    def suggest(self, alternative, /):
        return self._update(suggest=alternative)

    def allow_hyphen_values(self, allow=True, /):
        return self._update(hyphen_values=allow)

    def description(self, text, /):
        return self._update(description=text)

    def __repr__(self):
        return "OptionBuilder(%r)" % (self._schema,)


class App:
    """
    Fluent builder for a command (and, through add_subcommand, its subcommands).
    """

    def __init__(self, name, description="", /):
        if not isinstance(name, str) or not name or any(char.isspace() for char in name):
            raise InvalidNameError("program name must be a non-empty string without whitespace: %r" % (name,))
        self._name = name
        self._description = description or ""
        self._options = []
        self._positionals = []
        self._children = {}
        self._allow_unknown = False
        self._posix_grouping = True
        self._require_subcommand = False
        self._version = None
        self._footer = None
        self._frozen = None

    name = property(lambda self: self._name)
    description = property(lambda self: self._description)

    def _check(self):
        if self._frozen is not None:
            raise FrozenSchemaError("%r is frozen; it cannot be changed after the first parse" % self._name)

    def _claimed(self, short, long, /):
        for builder in self._options:
            schema = builder.schema
            if short is not None and schema.short == short:
                raise DuplicateNameError("short option name %r is already in use in %r" % ("-" + short, self._name))
            if long is not None and schema.long == long:
                raise DuplicateNameError("long option name %r is already in use in %r" % ("--" + long, self._name))
        key = long if long is not None else short
        if any(builder.schema.name == key for builder in self._positionals):
            raise DuplicateNameError("name %r is already in use in %r" % (key, self._name))

    def _add(self, declared, description, flag, /):
        self._check()
        short, long = names(declared)
        self._claimed(short, long)
        builder = OptionBuilder(self, OptionSchema, {
            "short": short,
            "long": long,
            "description": description,
            "arity": FLAG if flag else SINGLE,
        })
        self._options.append(builder)
        return builder

    def add_option(self, names, description="", /):
        """add a value-taking option ("f,foo", "foo" or "f")."""
        return self._add(names, description, False)

    def add_flag(self, names, description="", /):
        """add a boolean flag (no value)."""
        return self._add(names, description, True)

    def add_positional(self, name, description="", /):
        """add the next positional slot (filled in declaration order)."""
        self._check()
        if not isinstance(name, str) or not LONG.fullmatch(name):
            raise InvalidNameError("invalid positional name: %r" % (name,))
        if any(builder.schema.key == name for builder in (*self._options, *self._positionals)):
            raise DuplicateNameError("name %r is already in use in %r" % (name, self._name))
        builder = OptionBuilder(self, PositionalSchema, {"name": name, "description": description})
        self._positionals.append(builder)
        return builder

    def add_subcommand(self, name, description="", /):
        """add a subcommand and return its App."""
        self._check()
        if not isinstance(name, str) or not LONG.fullmatch(name):
            raise InvalidNameError("invalid subcommand name: %r" % (name,))
        if name in self._children:
            raise DuplicateNameError("subcommand name %r is already in use in %r" % (name, self._name))
        self._children[name] = child = App(name, description)
        return child

    def version(self, version, /):
        self._check()
        self._version = version
        return self

    def footer(self, footer, /):
        self._check()
        self._footer = footer
        return self

    def allow_unknown_options(self, allow=True, /):
        self._check()
        self._allow_unknown = bool(allow)
        return self

    def enable_posix_grouping(self, enable=True, /):
        self._check()
        self._posix_grouping = bool(enable)
        return self

    def require_subcommand(self, require=True, /):
        self._check()
        self._require_subcommand = bool(require)
        return self

    def freeze(self):
        """build (once) and return the immutable ParserNode tree rooted here."""
        if self._frozen is None:
            self._frozen = ParserNode(
                self._name,
                description=self._description,
                options=[builder.schema for builder in self._options],
                positionals=[builder.schema for builder in self._positionals],
                children=[child.freeze() for child in self._children.values()],
                allow_unknown=self._allow_unknown,
                posix_grouping=self._posix_grouping,
                require_subcommand=self._require_subcommand,
                version=self._version,
                footer=self._footer,
            )
        return self._frozen

    def parse(self, arguments, environment=None, /):
        """parse an argument list (program name excluded); see engine.parse."""
        return parse(self.freeze(), arguments, environment)

    def help(self, *, colorful=False):
        """help text of this command as a string (plain by default)."""
        return format_help(self.freeze(), colorful=colorful)

    def __repr__(self):
        return "App(%r, options=%d, positionals=%d, subcommands=%r)" % (
            self._name, len(self._options), len(self._positionals), list(self._children)
        )


__all__ = (
    "OptionBuilder",
    "App",
)
