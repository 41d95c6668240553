
import sys
from functools import partial

from boltons.strutils import camel2under

from argtree.parser import Parser
from argtree.errors import ArgTreeException, ArgumentParseError
from argtree.helpers import HelpHandler
from argtree.utils import log, unwrap_text


class CommandLineError(ArgTreeException, SystemExit):
    def __init__(self, msg, code=1):
        SystemExit.__init__(self, msg)
        self.code = code


def _get_default_name(func):
    if isinstance(func, partial):
        func = func.func  # just one level of partial for now
    try:
        return func.__name__  # most functions hit this
    except AttributeError:
        pass
    return camel2under(func.__class__.__name__).lower()  # callable instances, etc.


def _docstring_to_doc(func):
    doc = func.__doc__
    if not doc:
        return ''

    unwrapped = unwrap_text(doc)
    try:
        ret = [g for g in unwrapped.splitlines() if g][0]
    except IndexError:
        ret = ''

    return ret


def default_print_error(msg):
    return sys.stderr.write(msg + '\n')


DEFAULT_HELP_HANDLER = HelpHandler()


class Command(Parser):
    def __init__(self, func=None, name=None, doc=None, help=DEFAULT_HELP_HANDLER):
        """A Parser bound to a handler function. Build up a Command
        with flags, arguments, and subcommands, then call
        :meth:`Command.run` to parse ``sys.argv`` and dispatch.

        Args:
           func (callable): Called with the parsed Command (or
              subcommand) as its only argument when this command is
              run. Commands without a handler print their help.
           name (str): The name of this command, used as the program
              name in help. (Defaults to name of function)
           doc (str): A description that appears in help
              output. (Defaults to the first line of the function's
              docstring)
           help (HelpHandler): Pass None to disable the automatically
              added ``--help`` / ``-h`` flag. Also accepts a
              HelpHandler instance to customize the flag and output.

        Subcommands added to a Command are Commands too, sharing its
        HelpHandler.
        """
        if func is not None:
            name = name if name is not None else _get_default_name(func)
            if doc is None:
                doc = _docstring_to_doc(func)

        super(Command, self).__init__(name, doc)
        self.func = func
        self.help_handler = help
        if help is not None and help.key is not None:
            self.add_flag(help.key, help.doc)

    def _make_subparser(self, name, doc):
        return Command(None, name, doc, help=self.help_handler)

    def add_subcommand(self, name, description='', func=None):
        """Add a subcommand, handled by *func*. Returns the new
        subcommand's Command for further configuration.
        """
        subcmd = super(Command, self).add_subcommand(name, description)
        subcmd.func = func
        return subcmd

    def _get_subcmd_path(self, args):
        "Returns a tuple of (list_of_subcmd_names, innermost_command)"
        prs, ret = self, []
        for token in args:
            subcmd = prs._find_subcommand(token)
            if subcmd is None:
                break
            ret.append(subcmd.key.primary)
            prs = subcmd.parser
        return ret, prs

    def _is_help_requested(self, args):
        if not self.help_handler or self.help_handler.key is None:
            return False
        return any([self.help_handler.key == a for a in args])

    def _is_help_flag_set(self, prs):
        if not self.help_handler or self.help_handler.key is None:
            return False
        return prs.get_flag(self.help_handler.key)

    def print_help(self, subcmds=(), program_name=None):
        text = self.help_handler.get_help_text(self, subcmds=subcmds,
                                               program_name=program_name)
        sys.stdout.write(text)
        sys.exit(0)

    def run(self, argv=None, print_error=None):
        """Parses arguments and dispatches to the appropriate subcommand
        handler. If there is a parse error due to invalid user input,
        an error is printed and a CommandLineError is raised. If not
        caught, a CommandLineError will exit the process, typically
        with status code 1.

        Defaults to handling the arguments on the command line
        (``sys.argv``), but can also be explicitly passed arguments
        via the *argv* parameter. Either way, the first item is taken
        to be the program name.

        Args:
           argv (list): A sequence of strings representing the
              command-line arguments. Defaults to ``sys.argv``.
           print_error (callable): The function that formats/prints
               error messages before program exit on CLI errors.

        Returns the return value of the handler function.
        """
        if print_error is None or print_error is True:
            print_error = default_print_error
        elif print_error and not callable(print_error):
            raise TypeError('expected callable for print_error, not %r'
                            % print_error)

        if argv is None:
            argv = sys.argv
        argv = list(argv)
        program_name = argv[0] if argv else (self.name or '')
        args = argv[1:]

        subcmds, prs = self._get_subcmd_path(args)

        try:
            self.parse(args)
        except ArgumentParseError as ape:
            # help is still shown when required arguments are missing
            if self._is_help_requested(args[len(subcmds):]):
                return self.print_help(subcmds, program_name=program_name)
            msg = 'error: ' + program_name
            if ape.subcmds:
                msg += ' ' + ' '.join(ape.subcmds)
            try:
                e_msg = ape.args[0]
            except (AttributeError, IndexError):
                e_msg = ''
            if e_msg:
                msg += ': ' + e_msg
            cle = CommandLineError(msg)
            if print_error:
                print_error(msg)
            raise cle

        if self._is_help_flag_set(prs):
            return self.print_help(subcmds, program_name=program_name)

        func = getattr(prs, 'func', None)
        if not func:
            if self.help_handler:
                return self.print_help(subcmds, program_name=program_name)
            return None

        log.debug('dispatching %s to %r', ' '.join([program_name] + subcmds), func)
        return func(prs)
