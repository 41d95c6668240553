
from boltons.iterutils import unique


class ArgTreeException(Exception):
    """The basest base exception argtree has. Rarely directly
    instantiated if ever, but useful for catching.
    """
    pass


class DuplicateKeyword(ArgTreeException, ValueError):
    """Raised at registration time when a flag, keyed argument, or
    subcommand is added with a keyword equal to one already
    registered on the same Parser. Positional arguments never
    collide.
    """
    @classmethod
    def from_parse(cls, key, existing):
        return cls('keyword already used: %s (conflicts with %s)' % (key, existing))


class ConflictingKeyword(DuplicateKeyword):
    """Raised at registration time when the name of a keyed argument
    is a prefix of another flag or keyed argument name on the same
    Parser, which would make glued values like ``-ovalue``
    ambiguous.
    """
    @classmethod
    def from_parse(cls, name, other_name):
        return cls('keyword %r is ambiguous with %r, option keys may not'
                   ' prefix other flag or option names' % (name, other_name))


class SubcommandNotFound(ArgTreeException, LookupError):
    """Raised by subcommand lookups when no registered subcommand
    matches. Parser.parse() uses the same lookup to decide whether the
    first argument is a subcommand, so this never escapes parsing.
    """
    @classmethod
    def from_parse(cls, prs, name):
        valid_names = unique([sc.key.primary for sc in prs.subcommands])
        if not valid_names:
            return cls('subcommand not found: %r (no subcommands registered)' % name)
        return cls('subcommand not found: %r, choose from: %s'
                   % (name, ', '.join(valid_names)))


class UnknownKeyword(ArgTreeException, LookupError):
    "Raised when reading a value for a keyword that was never registered."
    pass


class ValueConversionError(ArgTreeException, ValueError):
    """Raised when a stored argument value cannot be converted to the
    requested type. Optional arguments report conversion failures as a
    missing value instead.
    """
    @classmethod
    def from_parse(cls, text, as_type, exc=None):
        type_name = getattr(as_type, 'display_name', None) or getattr(as_type, '__name__', None)
        if type_name is None:
            type_name = repr(as_type)
        msg = 'expected a valid %s value, not %r' % (type_name, text)
        if exc:
            msg += ' (got error: %r)' % exc
        return cls(msg)


class ArgumentParseError(ArgTreeException):
    """A base exception used for all errors raised during argument
    parsing.

    Instances carry the ``parser`` which failed and ``subcmds``, the
    tuple of subcommand names leading to it from the parser where
    parsing began.
    """
    parser = None
    subcmds = ()


class UnknownArguments(ArgumentParseError):
    """Raised when arguments remain after subcommands, keyed
    arguments, flags, and all positional arguments have been matched.
    """
    @classmethod
    def from_parse(cls, prs, args):
        extra = args[len(prs.positionals):]
        return cls('found unknown arguments: %s' % ', '.join([repr(a) for a in extra]))


class MissingPositional(ArgumentParseError):
    """Raised when fewer arguments remain than positional arguments are
    registered.
    """
    @classmethod
    def from_parse(cls, prs, args):
        missing = [pa.key.primary for pa in prs.positionals[len(args):]]
        return cls('missing positional arguments: %s' % ', '.join(missing))


MissingPositionals = MissingPositional


class MissingMandatory(ArgumentParseError):
    "Raised when a mandatory keyed argument is not passed."
    @classmethod
    def from_parse(cls, missing_args):
        names = [str(arg.key.primary) for arg in missing_args]
        return cls('missing mandatory arguments: %s' % ', '.join(names))


class MissingValue(ArgumentParseError):
    """Raised when a keyed argument is the last argument, leaving
    nothing to take as its value.
    """
    @classmethod
    def from_parse(cls, arg, token):
        return cls('expected value for argument %s after %r'
                   % (arg.key.primary, token))
