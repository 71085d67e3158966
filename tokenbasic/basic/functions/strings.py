"""
tokenbasic - strings.py
String builtin functions; lengths and offsets count code points

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import math

from ..base import error
from .. import values


def typed(*types):
    """Decorator that checks argument types and passes on Error arguments."""
    def decorator(fn):
        def wrapped_fn(env, args):
            for arg, typ in zip(args, types):
                if isinstance(arg, values.Error):
                    return arg
                if typ is not None and arg.type != typ:
                    return values.new_error(error.TYPE_MISMATCH, 'expected a %s' % typ.lower())
            return fn(env, *args)
        wrapped_fn.__name__ = fn.__name__
        wrapped_fn.__doc__ = fn.__doc__
        return wrapped_fn
    return decorator

def _count(num):
    """Convert a Number argument to a non-negative integer count, or None."""
    if not math.isfinite(num.value):
        return None
    n = int(num.value)
    if n < 0:
        return None
    return n

def _negative():
    return values.new_error(error.IFC, 'finite positive argument only')


@typed(values.STRING)
def len_(env, s):
    """LEN: length in code points."""
    return values.Number(len(s.value))

@typed(values.NUMBER)
def chr_(env, num):
    """CHR$: character with the given code point."""
    n = _count(num)
    if n is None:
        return _negative()
    try:
        return values.String(chr(n))
    except (ValueError, OverflowError) as e:
        return values.new_error(error.IFC, str(e))

@typed(values.STRING)
def code_(env, s):
    """CODE: code point of the first character, 0 for the empty string."""
    if not s.value:
        return values.Number(0)
    return values.Number(ord(s.value[0]))

@typed(values.STRING, values.NUMBER)
def left_(env, s, num):
    """LEFT$: leftmost characters."""
    n = _count(num)
    if n is None:
        return _negative()
    return values.String(s.value[:n])

@typed(values.STRING, values.NUMBER)
def right_(env, s, num):
    """RIGHT$: rightmost characters."""
    n = _count(num)
    if n is None:
        return _negative()
    if n == 0:
        return values.String('')
    return values.String(s.value[-n:])

@typed(values.STRING, values.NUMBER, values.NUMBER)
def mid_(env, s, start, num):
    """MID$: substring from a zero-based offset."""
    offset, n = _count(start), _count(num)
    if offset is None or n is None:
        return _negative()
    return values.String(s.value[offset:offset+n])

@typed(values.STRING)
def tl_(env, s):
    """TL$: all but the first character."""
    return values.String(s.value[1:])

@typed(values.NUMBER)
def spc_(env, num):
    """SPC: string of spaces."""
    n = _count(num)
    if n is None:
        return _negative()
    return values.String(' ' * n)

@typed(None)
def val_(env, x):
    """VAL: parse a string as a number; numbers are passed unchanged."""
    if isinstance(x, values.Number):
        return x
    if not isinstance(x, values.String):
        return values.new_error(error.TYPE_MISMATCH, 'expected a string')
    num = values.parse_number(x.value)
    if num is None:
        return values.Error('VAL: invalid number %r' % (x.value,), error.TYPE_MISMATCH)
    return values.Number(num)

@typed(None)
def str_(env, x):
    """STR$: number representation; strings are passed unchanged."""
    if isinstance(x, values.String):
        return x
    if not isinstance(x, values.Number):
        return values.new_error(error.TYPE_MISMATCH, 'expected a number')
    return values.String(values.format_number(x.value))


FUNCTIONS = (
    ('LEN', 1, len_),
    ('CHR$', 1, chr_),
    ('CODE', 1, code_),
    ('LEFT$', 2, left_),
    ('RIGHT$', 2, right_),
    ('MID$', 3, mid_),
    ('TL$', 1, tl_),
    ('SPC', 1, spc_),
    ('VAL', 1, val_),
    ('STR$', 1, str_),
)
