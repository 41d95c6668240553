
import os
import sys
import array
import textwrap

from argtree.parser import Keyword
from argtree.utils import (format_keyword_label,
                           format_option_label,
                           format_option_post_doc,
                           get_value_name)


def _get_termios_winsize():
    # TLPI, 62.9 (p. 1319)
    import fcntl
    import termios

    winsize = array.array('H', [0, 0, 0, 0])
    fcntl.ioctl(sys.stdout, termios.TIOCGWINSZ, winsize)
    return winsize[0], winsize[1]


def _get_environ_int(name):
    try:
        return int(os.environ[name])
    except (KeyError, ValueError):
        return None


def _get_environ_winsize():
    # LINES and COLUMNS are set by most shells, each may be missing
    return _get_environ_int('LINES'), _get_environ_int('COLUMNS')


def get_winsize():
    """Returns (rows, columns) of the terminal. Either may be None if it
    can't be determined, from the tty or from the environment.
    """
    try:
        rows, cols = _get_termios_winsize()
    except Exception:
        rows, cols = None, None
    if not cols:
        rows, cols = _get_environ_winsize()
    return rows, cols


def _wrap_pair(indent, label, sep, doc, doc_start, max_doc_width):
    lhs = indent + label
    if not doc:
        return [lhs]

    doc_lines = textwrap.wrap(doc, max_doc_width)
    label_width = doc_start - len(sep)
    if len(lhs) <= label_width:
        ret = [lhs.ljust(label_width) + sep + doc_lines[0]]
    else:
        # label too long, doc starts on the next line
        ret = [lhs, ' ' * label_width + sep + doc_lines[0]]
    ret.extend([' ' * doc_start + line for line in doc_lines[1:]])
    return ret


DEFAULT_HELP_KEY = Keyword('--help', '-h')


class HelpHandler(object):
    """Renders usage lines and help text for any Parser in a command
    tree, and provides the flag used to request help.

    Args:
       key (Keyword): The flag keyword requesting help. Defaults to
          ``--help`` / ``-h``. Pass None to disable the help flag.
       doc (str): The help flag's description.

    Any key of ``default_context`` may also be passed to override
    labels, headings, and layout.
    """
    default_context = {
        'usage_label': 'Usage:',
        'subcmd_section_heading': 'Subcommands: ',
        'flags_section_heading': 'Flags: ',
        'options_section_heading': 'Options: ',
        'posargs_section_heading': 'Positional arguments: ',
        'section_break': '\n',
        'group_break': '',
        'subcmd_example': 'subcommand',
        'width': None,
        'max_width': 120,
        'min_doc_width': 50,
        'doc_separator': '   ',
        'section_indent': '  ',
        'pre_doc': '',
        'post_doc': '\n',
    }

    def __init__(self, key=DEFAULT_HELP_KEY, doc='show this help message and exit', **kwargs):
        ctx = {}
        for k, val in self.default_context.items():
            ctx[k] = kwargs.pop(k, val)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r' % list(kwargs.keys()))
        self.ctx = ctx
        self.key = key
        self.doc = doc

    def _get_layout(self, labels):
        ctx = self.ctx
        return get_layout(labels=labels,
                          indent=ctx['section_indent'],
                          sep=ctx['doc_separator'],
                          width=ctx['width'],
                          max_width=ctx['max_width'],
                          min_doc_width=ctx['min_doc_width'])

    def _get_section(self, heading, label_doc_pairs):
        ctx = self.ctx
        layout = self._get_layout(labels=[label for label, _ in label_doc_pairs])
        ret = [heading, ctx['group_break']]
        for label, doc in label_doc_pairs:
            ret.extend(_wrap_pair(indent=ctx['section_indent'],
                                  label=label,
                                  sep=ctx['doc_separator'],
                                  doc=doc,
                                  doc_start=layout['doc_start'],
                                  max_doc_width=layout['doc_width']))
        ret.append(ctx['section_break'])
        return ret

    def get_help_text(self, parser, subcmds=(), program_name=None):
        """Get the full help text for *parser*, or if *subcmds* is
        passed, for the subcommand at that path.
        """
        ctx = self.ctx

        ret = [self.get_usage_line(parser, subcmds=subcmds, program_name=program_name)]
        append = ret.append
        append(ctx['group_break'])

        for name in subcmds:
            parser = parser.get_subcommand_parser(name)

        if parser.doc:
            append(parser.doc)
            append(ctx['section_break'])

        if parser.subcommands:
            ret.extend(self._get_section(ctx['subcmd_section_heading'],
                                         [(sc.key.primary, sc.description)
                                          for sc in parser.subcommands]))
        if parser.flags:
            ret.extend(self._get_section(ctx['flags_section_heading'],
                                         [(format_keyword_label(f.key), f.description)
                                          for f in parser.flags]))
        keyed_args = parser.mandatories + parser.optionals
        if keyed_args:
            pairs = []
            for arg in keyed_args:
                doc = ' '.join([d for d in (arg.description, format_option_post_doc(arg)) if d])
                pairs.append((format_option_label(arg), doc))
            ret.extend(self._get_section(ctx['options_section_heading'], pairs))
        if parser.positionals:
            ret.extend(self._get_section(ctx['posargs_section_heading'],
                                         [(pa.key.primary, pa.description)
                                          for pa in parser.positionals]))

        return ctx['pre_doc'] + '\n'.join(ret).rstrip('\n') + ctx['post_doc']

    def get_usage_line(self, parser, subcmds=(), program_name=None):
        ctx = self.ctx
        subcmds = tuple(subcmds or ())
        parts = [ctx['usage_label']] if ctx['usage_label'] else []
        append = parts.append

        program_name = program_name or parser.name or ''
        append(' '.join((program_name,) + subcmds).strip())

        for name in subcmds:
            parser = parser.get_subcommand_parser(name)

        if parser.subcommands:
            append('[%s]' % ctx['subcmd_example'])
        if parser.flags:
            append('[FLAGS]')
        for arg in parser.mandatories:
            append(arg.key.primary + ' ' + get_value_name(arg))
        if parser.optionals:
            append('[OPTIONS]')
        for pa in parser.positionals:
            append(pa.key.primary)

        return ' '.join([p for p in parts if p])


def get_layout(labels, indent, sep, width=None, max_width=120, min_doc_width=40):
    """Compute the label and doc columns for a help section. The doc
    column starts after the longest label, unless that would leave
    less than *min_doc_width* for docs, in which case long labels get
    their docs on the following line.
    """
    if width is None:
        width = min(get_winsize()[1] or 80, max_width) - 2

    label_width = max([len(label) for label in labels] or [0])
    doc_start = len(indent) + label_width + len(sep)
    if width - doc_start < min_doc_width:
        doc_start = max(width - min_doc_width, len(indent) + len(sep))
    doc_width = max(width - doc_start, min_doc_width)

    return {'width': width,
            'label_width': label_width,
            'doc_width': doc_width,
            'doc_start': doc_start}
