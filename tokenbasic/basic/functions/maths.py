"""
tokenbasic - maths.py
Numeric builtin functions

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import math

from ..base import error
from .. import values
from ..values import randomiser


def number_function(fn):
    """Decorator for builtins of numeric arguments; handles errors and domain failures."""
    def wrapped_fn(env, args):
        for arg in args:
            if isinstance(arg, values.Error):
                return arg
            if not isinstance(arg, values.Number):
                return values.new_error(error.TYPE_MISMATCH, 'expected a number')
        try:
            return fn(env, *(_arg.value for _arg in args))
        except (ValueError, ArithmeticError) as e:
            return values.new_error(error.IFC, str(e))
    wrapped_fn.__name__ = fn.__name__
    wrapped_fn.__doc__ = fn.__doc__
    return wrapped_fn


@number_function
def abs_(env, x):
    """ABS: absolute value."""
    return values.Number(abs(x))

@number_function
def int_(env, x):
    """INT: truncate towards zero."""
    return values.Number(int(x))

@number_function
def sgn_(env, x):
    """SGN: sign."""
    return values.Number((x > 0) - (x < 0))

@number_function
def sin_(env, x):
    """SIN: sine."""
    return values.Number(math.sin(x))

@number_function
def cos_(env, x):
    """COS: cosine."""
    return values.Number(math.cos(x))

@number_function
def tan_(env, x):
    """TAN: tangent."""
    return values.Number(math.tan(x))

@number_function
def asn_(env, x):
    """ASN: arcsine."""
    return values.Number(math.asin(x))

@number_function
def acs_(env, x):
    """ACS: arccosine."""
    return values.Number(math.acos(x))

@number_function
def atn_(env, x):
    """ATN: arctangent."""
    return values.Number(math.atan(x))

@number_function
def log_(env, x):
    """LN, LOG: natural logarithm."""
    return values.Number(math.log(x))

@number_function
def exp_(env, x):
    """EXP: exponential."""
    return values.Number(math.exp(x))

@number_function
def sqr_(env, x):
    """SQR: square root."""
    if x < 0:
        return values.new_error(error.IFC, 'argument to SQR must be >= 0')
    return values.Number(math.sqrt(x))

@number_function
def pi_(env):
    """PI: the constant."""
    return values.Number(math.pi)

@number_function
def rnd_(env, x):
    """RND: random integer in [0, x)."""
    if x < 1:
        return values.new_error(error.IFC, 'argument to RND must be >= 1')
    return values.Number(randomiser.RANDOMISER.randint_below(int(x)))

@number_function
def bin_(env, x):
    """BIN: read the decimal digits of the argument as a binary number."""
    return values.Number(int('%d' % int(x), 2))


FUNCTIONS = (
    ('ABS', 1, abs_),
    ('INT', 1, int_),
    ('SGN', 1, sgn_),
    ('SIN', 1, sin_),
    ('COS', 1, cos_),
    ('TAN', 1, tan_),
    ('ASN', 1, asn_),
    ('ACS', 1, acs_),
    ('ATN', 1, atn_),
    ('LN', 1, log_),
    ('LOG', 1, log_),
    ('EXP', 1, exp_),
    ('SQR', 1, sqr_),
    ('PI', 0, pi_),
    (u'π', 0, pi_),
    ('RND', 1, rnd_),
    ('BIN', 1, bin_),
)
