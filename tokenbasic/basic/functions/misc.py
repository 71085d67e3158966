"""
tokenbasic - misc.py
Output builtins

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .. import values
from . import VARIADIC


def print_(env, args):
    """PRINT: write all arguments followed by the line ending; returns the count."""
    for arg in args:
        if isinstance(arg, values.Error):
            return arg
    env.write(''.join(values.to_repr(_arg) for _arg in args))
    env.write(env.line_ending)
    return values.Number(len(args))

def dump_(env, args):
    """DUMP: write a typed representation of the argument."""
    x, = args
    if isinstance(x, values.Number):
        env.write('NUMBER: %f' % (x.value,))
    elif isinstance(x, values.String):
        env.write('STRING: %s' % (x.value,))
    elif isinstance(x, values.Array):
        env.write('ARRAY: %dx%d' % (x.rows, x.cols))
    else:
        env.write('Error: %s' % (x.message,))
    env.write(env.line_ending)
    return values.Number(0)


FUNCTIONS = (
    ('PRINT', VARIADIC, print_),
    ('DUMP', 1, dump_),
)
