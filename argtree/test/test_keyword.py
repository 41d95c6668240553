
import pytest

from argtree import Keyword, Argument, normalize_option_key, FLAG, OPTIONAL, MANDATORY, POSITIONAL


KEY = 'my_key'
ABBR = 'my_abbr'
ANOTHER_KEY = 'another_key'


def test_keyword_basic():
    kw = Keyword(KEY)
    assert kw.primary == KEY
    assert kw.abbreviation is None
    assert kw.names == (KEY,)

    kw = Keyword(KEY, ABBR)
    assert kw.names == (KEY, ABBR)
    assert str(kw) == 'my_key, my_abbr'
    assert repr(kw) == "Keyword('my_key', abbreviation='my_abbr')"

    for bad in ('', None, 5):
        with pytest.raises(ValueError, match='non-zero length string'):
            Keyword(bad)
    with pytest.raises(ValueError, match='abbreviation'):
        Keyword(KEY, '')


def test_keyword_eq_keyword():
    kw = Keyword(KEY, ABBR)

    assert kw == Keyword(KEY)
    assert kw == Keyword(ABBR)
    assert kw == Keyword(ANOTHER_KEY, ABBR)
    assert kw != Keyword(ANOTHER_KEY)
    # two missing abbreviations are not a match
    assert Keyword(KEY) != Keyword(ANOTHER_KEY)


def test_keyword_eq_string():
    kw = Keyword(KEY, ABBR)
    assert kw == KEY
    assert kw == ABBR
    assert kw != ANOTHER_KEY
    assert KEY == kw
    assert kw != 5


@pytest.mark.parametrize('left', [Keyword('a'), Keyword('a', 'b'), Keyword('b', 'a'),
                                  Keyword('c', 'b'), Keyword('c'), Keyword('c', 'd')])
@pytest.mark.parametrize('right', [Keyword('a'), Keyword('a', 'b'), Keyword('b'),
                                   Keyword('d', 'c'), Keyword('e')])
def test_keyword_eq_symmetric(left, right):
    assert (left == right) == (right == left)


def test_keyword_unhashable():
    with pytest.raises(TypeError):
        {Keyword(KEY): 1}


def test_normalize_option_key():
    kw = normalize_option_key(Keyword('output', 'o'))
    assert kw.names == ('--output', '-o')

    assert normalize_option_key(Keyword('--output', '-o')).names == ('--output', '-o')
    assert normalize_option_key(Keyword('-output')).names == ('--output',)

    once = normalize_option_key(Keyword('output', 'o'))
    twice = normalize_option_key(once)
    assert twice.names == once.names


def test_argument_keys():
    assert Argument(FLAG, Keyword(KEY, ABBR)).key.names == (KEY, ABBR)
    assert Argument(POSITIONAL, Keyword(KEY)).key.names == (KEY,)

    for kind in (OPTIONAL, MANDATORY):
        arg = Argument(kind, Keyword(KEY, ABBR), 'desc')
        assert arg.key.names == ('--' + KEY, '-' + ABBR)
        assert arg.declared_key.names == (KEY, ABBR)
        assert arg.description == 'desc'
        assert arg.matches(KEY)
        assert arg.matches('-' + ABBR)
        assert not arg.matches(ANOTHER_KEY)


def test_argument_state():
    flag = Argument(FLAG, Keyword(KEY, ABBR))
    assert not flag.parsed
    assert not flag.is_set
    flag.mark_parsed()
    assert flag.is_set
    flag.reset()
    assert not flag.is_set
    with pytest.raises(TypeError):
        flag.update_value('x')

    opt = Argument(OPTIONAL, Keyword(KEY, ABBR))
    assert opt.value is None
    assert opt.get_value() is None
    opt.update_value('my_value')
    assert opt.get_value() == 'my_value'
    opt.reset()
    assert opt.value is None

    for kind in (MANDATORY, POSITIONAL):
        arg = Argument(kind, Keyword(KEY))
        assert arg.value == ''
        arg.update_value('my_value')
        assert arg.get_value() == 'my_value'
        arg.reset()
        assert arg.value == ''

    assert 'parsed=False' in repr(opt)

    with pytest.raises(ValueError):
        Argument('flag', Keyword(KEY))
