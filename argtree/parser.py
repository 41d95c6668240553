
import itertools

from boltons.typeutils import make_sentinel

from argtree.errors import (DuplicateKeyword,
                            ConflictingKeyword,
                            SubcommandNotFound,
                            UnknownKeyword,
                            ValueConversionError,
                            ArgumentParseError,
                            UnknownArguments,
                            MissingPositional,
                            MissingMandatory,
                            MissingValue)
from argtree.utils import log, convert_value, format_exp_repr, format_nonexp_repr


FLAG = make_sentinel('FLAG', var_name='FLAG')
OPTIONAL = make_sentinel('OPTIONAL', var_name='OPTIONAL')
MANDATORY = make_sentinel('MANDATORY', var_name='MANDATORY')
POSITIONAL = make_sentinel('POSITIONAL', var_name='POSITIONAL')
SUBCOMMAND = make_sentinel('SUBCOMMAND', var_name='SUBCOMMAND')

ARG_KINDS = (FLAG, OPTIONAL, MANDATORY, POSITIONAL, SUBCOMMAND)
KEYED_KINDS = (OPTIONAL, MANDATORY)


class Keyword(object):
    """The identity of a registered argument: a *primary* name and an
    optional *abbreviation*.

    Keywords compare equal when any name of one matches any name of
    the other, so ``Keyword('output', 'o') == Keyword('o')`` and
    ``Keyword('output', 'o') == 'o'`` are both True. This is what
    lets a short form stand in for the full name in lookups,
    duplicate checks, and argument matching alike.

    Args:
       primary (str): The full name.
       abbreviation (str): The short form. Defaults to None.

    Because that equality is not transitive, Keywords are unhashable.
    """
    def __init__(self, primary, abbreviation=None):
        if not primary or not isinstance(primary, str):
            raise ValueError('expected non-zero length string for keyword, not: %r' % (primary,))
        if abbreviation is not None:
            if not abbreviation or not isinstance(abbreviation, str):
                raise ValueError('expected non-zero length string or None for'
                                 ' abbreviation, not: %r' % (abbreviation,))
        self.primary = primary
        self.abbreviation = abbreviation

    @property
    def names(self):
        if self.abbreviation is None:
            return (self.primary,)
        return (self.primary, self.abbreviation)

    def __eq__(self, other):
        if isinstance(other, str):
            return other == self.primary or other == self.abbreviation
        if not isinstance(other, Keyword):
            return NotImplemented
        return (self.primary == other.primary
                or self.primary == other.abbreviation
                or self.abbreviation == other.primary
                or (self.abbreviation is not None
                    and self.abbreviation == other.abbreviation))

    __hash__ = None

    def __str__(self):
        return ', '.join(self.names)

    def __repr__(self):
        return format_exp_repr(self, ['primary'], opt_names=['abbreviation'])


def normalize_option_key(key):
    """Give a keyed argument's primary name a ``--`` prefix and its
    abbreviation a ``-`` prefix, leaving names which already have
    them alone.

    Flags keep their names exactly as declared, and positionals have
    no dash semantics, so this only applies to optional and mandatory
    arguments.
    """
    primary = key.primary
    if not primary.startswith('--'):
        primary = '--' + primary.lstrip('-')
    abbr = key.abbreviation
    if abbr is not None and not abbr.startswith('-'):
        abbr = '-' + abbr
    return Keyword(primary, abbr)


def _ensure_keyword(key, abbreviation=None):
    if isinstance(key, tuple):
        if abbreviation is not None:
            raise TypeError('pass abbreviation in the key tuple or as'
                            ' abbreviation, not both: %r' % (key,))
        return Keyword(*key)
    if isinstance(key, Keyword):
        if abbreviation is not None:
            return Keyword(key.primary, abbreviation)
        return Keyword(key.primary, key.abbreviation)
    if isinstance(key, str):
        return Keyword(key, abbreviation)
    raise TypeError('expected Keyword, string, or (name, abbreviation)'
                    ' tuple for key, not: %r' % (key,))


def _get_default_value(kind):
    if kind is OPTIONAL:
        return None
    if kind in (MANDATORY, POSITIONAL):
        return ''
    return None


class Argument(object):
    """A single declaration registered on a :class:`Parser`. The
    *kind* tag is one of FLAG, OPTIONAL, MANDATORY, POSITIONAL, or
    SUBCOMMAND, and decides what lives in the *value* slot:

    * FLAG: nothing, ``parsed`` is its value (see :attr:`is_set`)
    * OPTIONAL: the text passed, or None if absent
    * MANDATORY and POSITIONAL: the text passed, ``''`` until parsed
    * SUBCOMMAND: the nested :class:`Parser`

    Args:
       kind: The kind tag.
       key (Keyword): The keyword as declared. OPTIONAL and MANDATORY
          arguments match against the dash-normalized form of it,
          see :func:`normalize_option_key`.
       description (str): A summary of the argument, used in help.
       value: The nested Parser, for SUBCOMMAND arguments only.

    Values are always stored as text. Typed access goes through
    :meth:`get_value`.
    """
    def __init__(self, kind, key, description='', value=None):
        if kind not in ARG_KINDS:
            raise ValueError('expected one of %r for kind, not: %r' % (ARG_KINDS, kind))
        if kind is SUBCOMMAND and value is None:
            raise ValueError('subcommand arguments require a parser value')
        self.kind = kind
        self.declared_key = key
        self.key = normalize_option_key(key) if kind in KEYED_KINDS else key
        self.description = description or ''
        self.parsed = False
        self.value = value if kind is SUBCOMMAND else _get_default_value(kind)

    @property
    def required(self):
        return self.kind is MANDATORY

    @property
    def is_set(self):
        return self.parsed

    @property
    def parser(self):
        if self.kind is not SUBCOMMAND:
            raise TypeError('only subcommand arguments have a parser, not: %r' % self)
        return self.value

    def matches(self, key):
        "True if *key* (a Keyword or string) names this argument."
        if self.kind in KEYED_KINDS and self.declared_key == key:
            return True
        return self.key == key

    def mark_parsed(self):
        self.parsed = True

    def update_value(self, value):
        if self.kind in (FLAG, SUBCOMMAND):
            raise TypeError('%r arguments do not take a value' % self.kind)
        self.value = value

    def reset(self):
        self.parsed = False
        if self.kind is not SUBCOMMAND:
            self.value = _get_default_value(self.kind)

    def get_value(self, as_type=str):
        """Get the stored value converted to *as_type*, ``str`` by
        default. See :func:`~argtree.utils.convert_value` for
        supported types.

        Optional arguments return None if they were not passed, or
        if their value does not convert. Check :attr:`parsed` to tell
        the two apart.

        Mandatory and positional arguments raise
        :exc:`ValueConversionError` when the value does not convert.
        """
        if self.kind in (FLAG, SUBCOMMAND):
            raise TypeError('%r arguments carry no value, check is_set instead' % self.kind)
        if self.kind is OPTIONAL:
            if self.value is None:
                return None
            try:
                return convert_value(self.value, as_type)
            except ValueConversionError as vce:
                log.debug('no value for %s: %s', self.key.primary, vce)
                return None
        return convert_value(self.value, as_type)

    def __repr__(self):
        return format_nonexp_repr(self, ['kind', 'key', 'parsed'])


def _get_prefix_conflict(keyed_arg, other):
    for name in keyed_arg.key.names:
        for other_name in other.key.names:
            if other_name.startswith(name):
                return name, other_name
    return None


class Parser(object):
    """The Parser holds every declaration of one command, and turns a
    list of argument strings into populated declarations.

    Args:
       name (str): A name used to identify this parser. Set to the
          subcommand name for nested parsers.
       doc (str): An optional summary description, used in help.

    Declarations are added with the ``add_*()`` methods, which all
    return the Parser to enable chaining, except for
    :meth:`add_subcommand`, which returns the nested Parser so that
    chained calls build out the subcommand::

      prs = Parser('tool')
      prs.add_flag(('verbose', 'v'), 'more output')
      prs.add_subcommand('build', 'build things').add_flag('release')

    Once configured, call :meth:`parse` with a list of strings
    (without the program name), then read results with
    :meth:`get_value` and :meth:`get_flag`. A Parser can be reused
    for any number of parses, each one starts from a clean state.
    """
    def __init__(self, name=None, doc=None):
        self.name = name
        self.doc = doc

        self.subcommands = []
        self.flags = []
        self.mandatories = []
        self.optionals = []
        self.positionals = []

        # every keyword registered here, as declared, positionals excluded
        self._keywords = []

    def __repr__(self):
        return format_nonexp_repr(self, ['name'])

    def iter_arguments(self):
        return itertools.chain(self.subcommands, self.flags, self.mandatories,
                               self.optionals, self.positionals)

    def _make_subparser(self, name, doc):
        return Parser(name, doc)

    def _register(self, key, arg=None):
        """Check that *key* is not already in use at this level, and for
        keyed arguments, that prefix matching cannot mistake one
        declaration for another.
        """
        for existing in self._keywords:
            if existing == key:
                raise DuplicateKeyword.from_parse(key, existing)

        if arg is not None:
            for other in self.flags + self.mandatories + self.optionals:
                conflict = None
                if arg.kind in KEYED_KINDS:
                    conflict = _get_prefix_conflict(arg, other)
                if conflict is None and other.kind in KEYED_KINDS:
                    conflict = _get_prefix_conflict(other, arg)
                if conflict:
                    raise ConflictingKeyword.from_parse(*conflict)

        self._keywords.append(key)

    def add_subcommand(self, name, description=''):
        """Add a subcommand called *name*, returning the new nested
        Parser for further configuration.

        Subcommand names share a namespace with the flags and keyed
        arguments at this level, but the nested Parser has its own, so
        it is free to redefine flags from its parent.
        """
        if not isinstance(name, str):
            raise TypeError('expected string for subcommand name, not: %r' % (name,))
        key = Keyword(name)
        self._register(key)
        subprs = self._make_subparser(name, description)
        self.subcommands.append(Argument(SUBCOMMAND, key, description, value=subprs))
        return subprs

    def add_flag(self, key, description='', abbreviation=None):
        """Add a flag, an argument which takes no value and is matched by
        its exact name. Flag names are used as-is, no dashes are
        added.

        *key* may be a :class:`Keyword`, a string, or a ``(name,
        abbreviation)`` tuple.
        """
        key = _ensure_keyword(key, abbreviation)
        arg = Argument(FLAG, key, description)
        self._register(key, arg)
        self.flags.append(arg)
        return self

    def add_optional_argument(self, key, description='', abbreviation=None):
        """Add a keyed argument which may be omitted. The name is
        prefixed with ``--`` and the abbreviation with ``-``, and the
        value can be passed in any of these forms::

          --name value    -n value
          --namevalue     -nvalue
          --name=value    -n=value
          --name:value    -n:value
        """
        key = _ensure_keyword(key, abbreviation)
        arg = Argument(OPTIONAL, key, description)
        self._register(key, arg)
        self.optionals.append(arg)
        return self

    def add_mandatory_argument(self, key, description='', abbreviation=None):
        """Add a keyed argument which must be passed, otherwise parsing
        raises :exc:`MissingMandatory`. Accepts the same forms as
        :meth:`add_optional_argument`.
        """
        key = _ensure_keyword(key, abbreviation)
        arg = Argument(MANDATORY, key, description)
        self._register(key, arg)
        self.mandatories.append(arg)
        return self

    def add_argument(self, key, description='', optional=True, abbreviation=None):
        if optional:
            return self.add_optional_argument(key, description, abbreviation)
        return self.add_mandatory_argument(key, description, abbreviation)

    def add_positional(self, name, description=''):
        """Add a positional argument. Positionals are filled in the order
        they were added, from the arguments left over after
        subcommands, keyed arguments, and flags are matched. Names need
        not be unique.
        """
        if not isinstance(name, str):
            raise TypeError('expected string for positional name, not: %r' % (name,))
        self.positionals.append(Argument(POSITIONAL, Keyword(name), description))
        return self

    def get_subcommand(self, key):
        for subcmd in self.subcommands:
            if subcmd.key == key:
                return subcmd
        raise SubcommandNotFound.from_parse(self, key)

    def get_subcommand_parser(self, key):
        return self.get_subcommand(key).parser

    @property
    def parsed_subcommand(self):
        "The subcommand Argument matched by the last parse, or None."
        for subcmd in self.subcommands:
            if subcmd.parsed:
                return subcmd
        return None

    def _find_argument(self, key, *arg_lists):
        for arg in itertools.chain(*arg_lists):
            if arg.matches(key):
                return arg
        return None

    def get_argument(self, key):
        """Look up the declaration named by *key*. Keyed arguments match
        their names both as declared and dash-prefixed, so ``'output'``,
        ``'--output'``, and ``'o'`` all find the same argument.

        Positional names live apart from keywords, so a positional may
        share its name with a flag or keyed argument. Here the keyword
        wins. Use :meth:`get_value` or :meth:`get_flag`, which only
        look at the kinds they can read.

        Raises :exc:`UnknownKeyword` if nothing matches.
        """
        arg = self._find_argument(key, self.flags, self.mandatories, self.optionals,
                                  self.positionals, self.subcommands)
        if arg is None:
            raise UnknownKeyword('no argument registered for keyword: %r' % (key,))
        return arg

    def get_value(self, key, as_type=str, default=None):
        """Get the value of the keyed or positional argument named
        *key*, converted to *as_type*. Keyed arguments are searched
        before positionals. Returns *default* if the argument was not
        passed, or, for optional arguments, if the value does not
        convert.
        """
        arg = self._find_argument(key, self.mandatories, self.optionals, self.positionals)
        if arg is None:
            arg = self.get_argument(key)
            raise TypeError('%r is a %r, use get_flag() instead' % (key, arg.kind))
        if not arg.parsed:
            return default
        ret = arg.get_value(as_type)
        if ret is None:
            return default
        return ret

    def get_flag(self, key):
        "True if the flag (or subcommand) named *key* was passed."
        arg = self._find_argument(key, self.flags, self.subcommands)
        if arg is None:
            arg = self.get_argument(key)
            raise TypeError('%r is a %r, use get_value() instead' % (key, arg.kind))
        return arg.is_set

    def reset(self):
        "Clear the parse state of every declaration at this level."
        for arg in self.iter_arguments():
            arg.reset()

    def parse(self, args):
        """Match a list of strings against the registered declarations,
        updating their state. Returns the Parser itself.

        Args:
           args (list): The arguments to parse, not including the
              program name (i.e., ``sys.argv[1:]``). The list is not
              modified.

        If the first argument names a subcommand, all remaining
        arguments go to that subcommand's parser, and nothing else is
        matched at this level. Otherwise, arguments are matched in
        three passes: keyed arguments, flags, and finally positional
        arguments, which must account for everything left over.

        Raises :exc:`ArgumentParseError` (or one of its subtypes) if
        the arguments fail to parse. State is reset before parsing
        begins, so values from earlier parses never survive a failed
        one.
        """
        if isinstance(args, str):
            raise TypeError('expected list of string arguments, not string: %r' % args)
        args = list(args)
        for arg in args:
            if not isinstance(arg, str):
                raise TypeError('expected string arguments, not: %r' % (arg,))

        self.reset()

        if args:
            subcmd = self._find_subcommand(args[0])
            if subcmd is not None:
                log.debug('dispatching %r to subcommand %s', args[1:], subcmd.key.primary)
                try:
                    subcmd.parser.parse(args[1:])
                except ArgumentParseError as ape:
                    ape.subcmds = (subcmd.key.primary,) + tuple(ape.subcmds)
                    raise
                subcmd.mark_parsed()
                return self

        try:
            args = self._parse_keyed(args)
            args = self._parse_flags(args)
            self._parse_positionals(args)
        except ArgumentParseError as ape:
            ape.parser = self
            raise
        return self

    def _find_subcommand(self, token):
        try:
            return self.get_subcommand(token)
        except SubcommandNotFound:
            return None

    def _match_keyed(self, token):
        """Returns a tuple of (argument, form, value), where form is one
        of 'whitespace' (value is the next argument), 'equal_sign',
        'colon', or 'glued'. All three are None if no keyed argument
        matches.
        """
        for arg in self.mandatories + self.optionals:
            names = arg.key.names
            if token in names:
                return arg, 'whitespace', None
            for name in names:
                if len(token) > len(name) and token.startswith(name):
                    value = token[len(name):]
                    if value[0] == '=':
                        return arg, 'equal_sign', value[1:]
                    if value[0] == ':':
                        return arg, 'colon', value[1:]
                    return arg, 'glued', value
        return None, None, None

    def _parse_keyed(self, args):
        "Returns the list of arguments not consumed by keyed arguments"
        ret = []
        idx = 0
        while idx < len(args):
            token = args[idx]
            idx += 1
            arg, form, value = self._match_keyed(token)
            if arg is None:
                ret.append(token)
                continue
            if form == 'whitespace':
                if idx >= len(args):
                    raise MissingValue.from_parse(arg, token)
                value = args[idx]
                idx += 1
            if arg.parsed:
                log.debug('overwriting %s value %r with %r', arg.key.primary, arg.value, value)
            log.debug('matched %s (%s form) with value %r', arg.key.primary, form, value)
            arg.update_value(value)
            arg.mark_parsed()

        missing = [arg for arg in self.mandatories if not arg.parsed]
        if missing:
            raise MissingMandatory.from_parse(missing)
        return ret

    def _parse_flags(self, args):
        "Returns the list of arguments which are not flags"
        ret = []
        for token in args:
            for flag in self.flags:
                if flag.key == token:
                    flag.mark_parsed()
                    break
            else:
                ret.append(token)
        return ret

    def _parse_positionals(self, args):
        if len(args) > len(self.positionals):
            raise UnknownArguments.from_parse(self, args)
        if len(args) < len(self.positionals):
            raise MissingPositional.from_parse(self, args)
        for arg, token in zip(self.positionals, args):
            arg.update_value(token)
            arg.mark_parsed()
        return
