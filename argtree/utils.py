
import logging

from argtree.errors import ValueConversionError


log = logging.getLogger('argtree')


_BOOL_TEXT_MAP = {'true': True, 'yes': True, 'on': True, '1': True,
                  'false': False, 'no': False, 'off': False, '0': False}


def parse_bool(text):
    """Parse the usual textual spellings of a boolean, case-insensitive:
    true/false, yes/no, on/off, and 1/0.
    """
    try:
        return _BOOL_TEXT_MAP[text.strip().lower()]
    except KeyError:
        raise ValueError('expected one of %s, not: %r'
                         % ('/'.join(sorted(_BOOL_TEXT_MAP)), text))


parse_bool.display_name = 'boolean'


def convert_value(text, as_type=str):
    """Convert the stored text of an argument to *as_type*.

    Conversion to ``str`` is the identity and never fails. ``bool``
    uses :func:`parse_bool`, since ``bool('false')`` is True. Any other
    callable (``int``, ``float``, ``IntParam`` and friends) is called
    with the text.

    Raises :exc:`ValueConversionError` if the text is not a valid
    representation.
    """
    if as_type is str:
        return text
    if text is None:
        raise ValueConversionError.from_parse(text, as_type)
    if as_type is bool:
        as_type = parse_bool
    if not callable(as_type):
        raise TypeError('expected callable for as_type, not %r' % as_type)
    try:
        return as_type(text)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ValueConversionError.from_parse(text, as_type, exc)


def get_value_name(arg):
    "The placeholder for a keyed argument's value in help, e.g., OUTPUT"
    return arg.key.primary.lstrip('-').upper().replace('-', '_')


def format_keyword_label(key):
    "The default keyword label formatter, used in help and error formatting"
    return ' / '.join(key.names)


def format_option_label(arg):
    "Keyword label plus value placeholder, for keyed arguments"
    return format_keyword_label(arg.key) + ' ' + get_value_name(arg)


def format_option_post_doc(arg):
    if arg.required:
        return '(required)'
    return '(optional)'


def unwrap_text(text):
    "Join the hard-wrapped lines of each paragraph in *text*."
    grafs = [[]]
    for line in text.splitlines():
        line = line.strip()
        if line:
            grafs[-1].append(line)
        elif grafs[-1]:
            grafs.append([])
    return '\n'.join([' '.join(graf) for graf in grafs if graf])


def format_nonexp_repr(obj, names):
    """Format a repr in Python's default angle-bracket style, for objects
    holding parse state that doesn't roundtrip through a constructor:

    <Argument kind=FLAG key=Keyword('verbose', abbreviation='v') parsed=False>
    """
    labels = ['%s=%r' % (name, getattr(obj, name, None)) for name in names]
    return '<%s %s>' % (obj.__class__.__name__, ' '.join(labels))


def format_exp_repr(obj, pos_names, opt_names=()):
    "Format a constructor-style repr, leaving out optional names set to None."
    args = [repr(getattr(obj, name)) for name in pos_names]
    for name in opt_names:
        val = getattr(obj, name, None)
        if val is not None:
            args.append('%s=%r' % (name, val))
    return '%s(%s)' % (obj.__class__.__name__, ', '.join(args))
