
import sys
import logging

from argtree import Command


def show(cmd):
    """Print what was parsed.

    Try running with: f1 -m=mandatory -ooptional first second
    """
    print('flag1:', cmd.get_flag('flag1'))
    print('flag2:', cmd.get_flag('flag2'))
    print('option:', cmd.get_value('option'))
    print('mandatory:', cmd.get_value('mandatory'))
    print('positionals:', cmd.get_value('pos1'), cmd.get_value('pos2'))


def show_sub1(cmd):
    print('sub1 flag1:', cmd.get_flag('flag1'))


def main(argv=None):
    logging.basicConfig(level=logging.DEBUG if '--debug' in (argv or sys.argv) else logging.WARNING)

    cmd = Command(show, 'example')

    cmd.add_subcommand('sub1', 'first subcommand', func=show_sub1) \
       .add_flag(('flag1', 'f1'), 'subcommand flag')
    cmd.add_subcommand('sub2', 'second subcommand')

    cmd.add_flag(('flag1', 'f1'), 'first flag') \
       .add_flag(('flag2', 'f2'), 'second flag') \
       .add_flag('--debug', 'log parsing steps') \
       .add_optional_argument(('option', 'o'), 'optional value') \
       .add_mandatory_argument(('mandatory', 'm'), 'mandatory value') \
       .add_positional('pos1', 'first positional') \
       .add_positional('pos2', 'second positional')

    return cmd.run(argv)  # execute


if __name__ == '__main__':
    sys.exit(main())
