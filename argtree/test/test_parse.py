
import pytest

from argtree import (Parser,
                     ArgumentParseError,
                     UnknownArguments,
                     MissingPositional,
                     MissingPositionals,
                     MissingMandatory,
                     MissingValue)


KEY = 'my_key'
ABBR = 'my_abbr'
DESC = 'my_desc'
ANOTHER_KEY = 'another_key'


def get_basic_parser():
    prs = Parser('basic')
    prs.add_flag(('flag', 'f'), 'a flag')
    prs.add_mandatory_argument(('output', 'o'), 'output path')
    prs.add_positional('file', 'input path')
    return prs


def test_parse_basic():
    prs = get_basic_parser()

    res = prs.parse(['f', '-o=result.txt', 'input.txt'])
    assert res is prs
    assert prs.get_flag('flag') is True
    assert prs.get_flag('f') is True
    assert prs.get_value('output') == 'result.txt'
    assert prs.get_value('--output') == 'result.txt'
    assert prs.get_value('-o') == 'result.txt'
    assert prs.get_value('file') == 'input.txt'
    assert prs.positionals[0].parsed


def test_parse_missing_mandatory():
    prs = get_basic_parser()
    with pytest.raises(MissingMandatory, match='--output') as exc_info:
        prs.parse(['input.txt'])
    assert exc_info.value.parser is prs
    assert exc_info.value.subcmds == ()

    # no arguments at all still checks mandatories
    with pytest.raises(MissingMandatory):
        prs.parse([])


def test_parse_does_not_modify_args():
    prs = get_basic_parser()
    args = ['f', '-o', 'result.txt', 'input.txt']
    prs.parse(args)
    assert args == ['f', '-o', 'result.txt', 'input.txt']


def test_parse_bad_input():
    prs = get_basic_parser()
    with pytest.raises(TypeError):
        prs.parse('f -o x input.txt')
    with pytest.raises(TypeError):
        prs.parse(['-o', 'x', 3])


@pytest.mark.parametrize('args', [
    ['--output', 'value'],
    ['-o', 'value'],
    ['--outputvalue'],
    ['-ovalue'],
    ['--output=value'],
    ['-o=value'],
    ['--output:value'],
    ['-o:value'],
])
def test_option_forms(args):
    prs = Parser()
    prs.add_optional_argument(('output', 'o'))
    prs.parse(args)
    assert prs.get_value('output') == 'value'
    assert prs.optionals[0].parsed


def test_option_values_keep_later_separators():
    prs = Parser()
    prs.add_optional_argument(('define', 'D'))

    prs.parse(['-Dkey=val'])
    assert prs.get_value('define') == 'key=val'

    prs.parse(['--define=a:b'])
    assert prs.get_value('define') == 'a:b'

    prs.parse(['-D='])
    assert prs.get_value('define') == ''
    assert prs.optionals[0].parsed

    # the value after a whitespace key is taken as-is
    prs.parse(['--define', '--define'])
    assert prs.get_value('define') == '--define'


def test_optional_absent():
    prs = Parser()
    prs.add_optional_argument(('output', 'o'))
    prs.parse([])
    assert prs.get_value('output') is None
    assert prs.get_value('output', default='out.txt') == 'out.txt'
    assert not prs.optionals[0].parsed


def test_repeated_option_last_wins():
    prs = Parser()
    prs.add_optional_argument(('level', 'l'))
    prs.parse(['-l', '1', '--level=2'])
    assert prs.get_value('level', int) == 2


def test_missing_value():
    prs = Parser()
    prs.add_optional_argument(('output', 'o'))
    with pytest.raises(MissingValue, match='--output'):
        prs.parse(['-o'])
    with pytest.raises(ArgumentParseError):
        prs.parse(['x', '--output'])


def test_parse_subcommand():
    prs = Parser()
    prs.add_subcommand(KEY, DESC).add_flag((ANOTHER_KEY, ABBR), DESC)

    with pytest.raises(UnknownArguments):
        prs.parse([ANOTHER_KEY])

    prs.parse([KEY, ANOTHER_KEY])
    assert prs.get_flag(KEY)
    assert prs.parsed_subcommand.key == KEY
    assert prs.get_subcommand_parser(KEY).get_flag(ABBR)

    prs.parse([])
    assert not prs.get_flag(KEY)
    assert prs.parsed_subcommand is None


def test_subcommand_shadows_parent_flag():
    prs = Parser('tool')
    prs.add_flag('release')
    build_prs = prs.add_subcommand('build')
    build_prs.add_flag('release')

    prs.parse(['build', 'release'])
    assert prs.subcommands[0].parsed
    assert build_prs.get_flag('release')
    assert not prs.get_flag('release')

    # subcommands are only matched as the first argument
    with pytest.raises(UnknownArguments):
        prs.parse(['release', 'build'])


def test_subcommand_error_path():
    prs = Parser('tool')
    remote = prs.add_subcommand('remote')
    add = remote.add_subcommand('add')
    add.add_positional('name').add_positional('url')

    with pytest.raises(MissingPositional) as exc_info:
        prs.parse(['remote', 'add', 'origin'])
    assert exc_info.value.subcmds == ('remote', 'add')
    assert exc_info.value.parser is add
    assert 'url' in str(exc_info.value)

    prs.parse(['remote', 'add', 'origin', 'https://example.com/repo.git'])
    assert prs.get_flag('remote')
    assert remote.get_flag('add')
    assert add.get_value('url') == 'https://example.com/repo.git'


def test_nested_reset_is_lazy():
    prs = Parser()
    sub = prs.add_subcommand('sub')
    sub.add_flag('x')

    prs.parse(['sub', 'x'])
    assert sub.get_flag('x')

    # the root no longer matches 'sub', but the nested parser is untouched
    prs.parse([])
    assert not prs.get_flag('sub')
    assert sub.get_flag('x')


def test_parse_optionals_and_flags():
    opt, abbr, flag = 'OPT', 'O', 'OVERLOAD'
    prs = Parser()
    prs.add_optional_argument((opt, abbr), DESC).add_flag(flag, DESC)

    for args in ([flag, '--' + opt + 'value'],
                 ['--' + opt + 'value', flag],
                 [flag, '-' + abbr + 'value'],
                 ['-' + abbr + 'value', flag]):
        prs.parse(args)
        assert prs.get_flag(flag)
        assert prs.get_value(opt) == 'value'

    prs.parse([flag])
    assert prs.get_flag(flag)
    assert prs.get_value(opt) is None


def test_parse_mandatories_and_flags():
    opt, abbr, flag = 'OPT', 'O', 'OVERLOAD'
    prs = Parser()
    prs.add_mandatory_argument((opt, abbr), DESC).add_flag(flag, DESC)

    prs.parse([flag, '--' + opt + 'value'])
    prs.parse(['-' + abbr + 'value', flag])
    assert prs.get_value(abbr) == 'value'

    with pytest.raises(MissingMandatory):
        prs.parse([flag])


def test_parse_flags():
    prs = Parser()
    prs.add_flag((KEY, ABBR), DESC)

    prs.parse([KEY])
    assert prs.get_flag(KEY)
    prs.parse([ABBR, KEY])
    assert prs.get_flag(ABBR)
    prs.parse([])
    assert not prs.get_flag(KEY)

    with pytest.raises(UnknownArguments, match=ANOTHER_KEY):
        prs.parse([KEY, ANOTHER_KEY])


def test_parse_positionals():
    prs = Parser()
    prs.add_positional(KEY, DESC).add_positional(ANOTHER_KEY, DESC)

    prs.parse([KEY, ANOTHER_KEY])
    assert prs.get_value(KEY) == KEY

    with pytest.raises(MissingPositional):
        prs.parse([ANOTHER_KEY])
    with pytest.raises(UnknownArguments):
        prs.parse([ABBR, KEY, ANOTHER_KEY])

    prs.add_flag(ABBR, DESC)
    prs.parse([ABBR, KEY, ANOTHER_KEY])
    assert prs.get_flag(ABBR)
    assert prs.get_value(ANOTHER_KEY) == ANOTHER_KEY


def test_positional_counts():
    prs = Parser()
    prs.add_positional('a').add_positional('b')

    with pytest.raises(UnknownArguments):
        prs.parse(['x', 'y', 'z'])
    with pytest.raises(MissingPositional):
        prs.parse(['x'])
    assert MissingPositionals is MissingPositional


def test_positionals_after_options():
    prs = Parser()
    prs.add_optional_argument(('output', 'o')).add_positional('src').add_positional('dst')
    prs.parse(['a.txt', '-o', 'log.txt', 'b.txt'])
    assert prs.get_value('src') == 'a.txt'
    assert prs.get_value('dst') == 'b.txt'
    assert prs.get_value('o') == 'log.txt'


def test_failed_parse_clears_state():
    prs = get_basic_parser()
    prs.parse(['f', '-o', 'result.txt', 'input.txt'])
    assert prs.get_flag('flag')

    with pytest.raises(MissingMandatory):
        prs.parse(['f', 'input.txt'])
    assert not prs.get_flag('flag')
    assert prs.get_value('output') is None
    assert prs.get_value('file') is None


@pytest.mark.parametrize('args', [
    ['f', '-o=result.txt', 'input.txt'],
    ['input.txt', '--outputresult.txt'],
    ['--output', 'f', 'f', 'input.txt'],
])
def test_parse_idempotent(args):
    prs = get_basic_parser()
    prs.parse(args)
    first = [(arg.parsed, arg.value) for arg in prs.iter_arguments()]
    prs.parse(args)
    second = [(arg.parsed, arg.value) for arg in prs.iter_arguments()]
    assert first == second
