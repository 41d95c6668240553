
class IntParam(object):
    """Parses a single integer, optionally limited to the range of a
    fixed-width integer type::

      prs.get_value('--port', as_type=IntParam(16, signed=False))

    Args:
       bits (int): Width of the integer in bits. Defaults to None,
          meaning no range limit.
       signed (bool): Whether the range includes negative
          values. Defaults to True.

    Text is parsed with ``int()``, so only base-10 digits with an
    optional sign are accepted.
    """
    def __init__(self, bits=None, signed=True):
        if bits is not None and int(bits) <= 0:
            raise ValueError('expected positive bit width, not: %r' % bits)
        self.bits = int(bits) if bits is not None else None
        self.signed = bool(signed)
        if self.bits is None:
            self.min_value = None if signed else 0
            self.max_value = None
        elif signed:
            self.min_value = -(2 ** (self.bits - 1))
            self.max_value = 2 ** (self.bits - 1) - 1
        else:
            self.min_value = 0
            self.max_value = 2 ** self.bits - 1

    @property
    def display_name(self):
        if self.bits is None:
            return 'integer' if self.signed else 'unsigned integer'
        return '%s-bit %sinteger' % (self.bits, '' if self.signed else 'unsigned ')

    def parse(self, text):
        val = int(text)
        if self.min_value is not None and val < self.min_value:
            raise ValueError('expected %s >= %s, not: %r' % (self.display_name, self.min_value, text))
        if self.max_value is not None and val > self.max_value:
            raise ValueError('expected %s <= %s, not: %r' % (self.display_name, self.max_value, text))
        return val

    __call__ = parse

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r, signed=%r)' % (cn, self.bits, self.signed)


INT8, INT16, INT32, INT64 = [IntParam(b) for b in (8, 16, 32, 64)]
UINT8, UINT16, UINT32, UINT64 = [IntParam(b, signed=False) for b in (8, 16, 32, 64)]


class ChoicesParam(object):
    """Parses a single value, limited to a set of *choices*. The actual
    converter used to parse is inferred from *choices* by default, but
    an explicit one can be set *parse_as*.
    """
    def __init__(self, choices, parse_as=None):
        if not choices:
            raise ValueError('expected at least one choice, not: %r' % choices)
        try:
            self.choices = sorted(choices)
        except Exception:
            # in case choices aren't sortable
            self.choices = list(choices)
        if parse_as is None:
            parse_as = type(self.choices[0])
        self.parse_as = parse_as

    @property
    def display_name(self):
        return 'choice of %s' % ', '.join([str(c) for c in self.choices])

    def parse(self, text):
        choice = self.parse_as(text)
        if choice not in self.choices:
            raise ValueError('expected one of %r, not: %r' % (self.choices, text))
        return choice

    __call__ = parse

    def __repr__(self):
        cn = self.__class__.__name__
        return "%s(%r, parse_as=%r)" % (cn, self.choices, self.parse_as)
