"""
tokenbasic - values.py
Types, values and operators

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import math
import re

from ..base import error


# value type names
NUMBER = 'NUMBER'
STRING = 'STRING'
ARRAY = 'ARRAY'
ERROR = 'ERROR'

# upper bound on each array dimension
MAX_DIMENSION = 1024

# bitwise operators work on signed 64-bit integers
_INT_BITS = 64

# decimal number text: no underscores, infinities or NaN
_NUMBER_PATTERN = re.compile(r'\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*\Z')


class Number(object):
    """Numeric value, stored as a float."""

    type = NUMBER
    __slots__ = ('value',)

    def __init__(self, value=0.):
        self.value = float(value)

    def __repr__(self):
        return 'Number(%r)' % (self.value,)

    def __eq__(self, other):
        return isinstance(other, Number) and self.value == other.value

    def __ne__(self, other):
        return not self == other

    def to_value(self):
        """Convert to Python float."""
        return self.value

    def is_true(self):
        """Truth value for conditions."""
        return self.value != 0


class String(object):
    """String value; lengths and indices count code points."""

    type = STRING
    __slots__ = ('value',)

    def __init__(self, value=''):
        self.value = value

    def __repr__(self):
        return 'String(%r)' % (self.value,)

    def __eq__(self, other):
        return isinstance(other, String) and self.value == other.value

    def __ne__(self, other):
        return not self == other

    def to_value(self):
        """Convert to Python str."""
        return self.value

    def is_true(self):
        """Truth value for conditions."""
        return self.value != ''


# values are never changed in place, so array slots can share one zero
ZERO = Number(0)


class Array(object):
    """One- or two-dimensional array with inclusive bounds.

    A one-dimensional array of size N has rows == 0 and cols == N
    and is addressed by column only.
    """

    type = ARRAY
    __slots__ = ('rows', 'cols', '_slots')

    def __init__(self, rows, cols):
        """Create an array with all elements Number(0)."""
        error.throw_if(rows > MAX_DIMENSION or cols > MAX_DIMENSION, error.DIMENSION_TOO_LARGE)
        error.range_check(0, MAX_DIMENSION, rows, cols)
        self.rows = rows
        self.cols = cols
        self._slots = [[ZERO] * (cols + 1) for _ in range(rows + 1)]

    def __repr__(self):
        return 'Array(%d, %d)' % (self.rows, self.cols)

    def _check(self, row, col):
        """Check the element position is within bounds."""
        if not (0 <= row <= self.rows and 0 <= col <= self.cols):
            return Error(
                'index out of range: [%d, %d] in array of size [%d, %d]'
                % (row, col, self.rows, self.cols),
                error.SUBSCRIPT_OUT_OF_RANGE
            )
        return None

    def get(self, row, col):
        """Retrieve an element, or an Error if out of bounds."""
        return self._check(row, col) or self._slots[row][col]

    def set(self, row, col, value):
        """Store an element; returns an Error if out of bounds, None otherwise."""
        err = self._check(row, col)
        if err is None:
            self._slots[row][col] = value
        return err

    def to_value(self):
        """Convert to nested Python lists (a flat list for one dimension)."""
        rows = [[_v.to_value() for _v in _row] for _row in self._slots]
        if self.rows == 0:
            return rows[0]
        return rows

    def is_true(self):
        return True


class Error(object):
    """Evaluation failure, passed along through expressions."""

    type = ERROR
    __slots__ = ('message', 'err')

    def __init__(self, message, err=error.EXPRESSION_ERROR):
        self.message = message
        self.err = err

    def __repr__(self):
        return 'Error(%r)' % (self.message,)

    def __eq__(self, other):
        return isinstance(other, Error) and self.message == other.message

    def __ne__(self, other):
        return not self == other

    def to_value(self):
        return self.message

    def to_exception(self):
        """Convert to a fatal BASICError with the same message."""
        return error.BASICError(self.err, message=self.message)

    def is_true(self):
        return False


def new_error(err, *args):
    """Create an Error value from an error constant."""
    return Error(error.format_message(err, *args), err)


###############################################################################
# conversions

def from_value(python_val):
    """Convert a Python value to a BASIC value."""
    if isinstance(python_val, (Number, String, Array, Error)):
        return python_val
    if isinstance(python_val, bool):
        return Number(1 if python_val else 0)
    if isinstance(python_val, (int, float)):
        return Number(python_val)
    if isinstance(python_val, str):
        return String(python_val)
    raise TypeError('Cannot convert %s to a BASIC value' % type(python_val))

def parse_number(text):
    """Convert decimal number text to float; None if it is not a number."""
    if not _NUMBER_PATTERN.match(text):
        return None
    return float(text)

def from_literal(literal):
    """Convert a numeric token literal to a Number."""
    num = parse_number(literal)
    if num is None:
        raise error.BASICError(error.STX, 'invalid number %s' % (literal,))
    return Number(num)

def from_bool(boo):
    """Convert Python boolean to Number 1/0."""
    return Number(1 if boo else 0)

def pass_value(value):
    """Raise the Error if the value is one, otherwise return it."""
    if isinstance(value, Error):
        raise value.to_exception()
    return value

def pass_number(value, err=error.TYPE_MISMATCH):
    """Check if value is numeric, raise BASICError otherwise."""
    pass_value(value)
    if not isinstance(value, Number):
        raise error.BASICError(err, 'expected a number')
    return value

def pass_string(value, err=error.TYPE_MISMATCH):
    """Check if value is a string, raise BASICError otherwise."""
    pass_value(value)
    if not isinstance(value, String):
        raise error.BASICError(err, 'expected a string')
    return value

def format_number(num):
    """Representation of a number: integer form if integral, else fixed fraction."""
    if math.isfinite(num) and num == int(num):
        return '%d' % int(num)
    return '%f' % num

def to_repr(value):
    """Printed representation of a value."""
    if isinstance(value, Number):
        return format_number(value.value)
    elif isinstance(value, (String, Error)):
        return value.to_value()
    elif isinstance(value, Array):
        return 'ARRAY: %dx%d' % (value.rows, value.cols)
    raise TypeError('%s is not of class Value' % type(value))

def to_int(num, err=error.IFC):
    """Truncate a float to integer; raise BASICError if it is not finite."""
    error.throw_if(not math.isfinite(num), err, 'not a finite number')
    return int(num)

def quantise(num):
    """Truncate to two decimal places to suppress floating-point drift."""
    return to_int(num * 100) / 100.


###############################################################################
# operators

def _numeric(fn):
    """Decorator for binary operators defined only on two numbers."""
    def wrapped_fn(left, right):
        if isinstance(left, Error):
            return left
        if isinstance(right, Error):
            return right
        if not isinstance(left, Number) or not isinstance(right, Number):
            return new_error(error.TYPE_MISMATCH)
        try:
            return fn(left.value, right.value)
        except (ValueError, ArithmeticError) as e:
            return new_error(error.IFC, str(e))
    wrapped_fn.__name__ = fn.__name__
    wrapped_fn.__doc__ = fn.__doc__
    return wrapped_fn

def _to_int64(num):
    """Truncate to integer and wrap to the signed 64-bit range."""
    i = int(num) & ((1 << _INT_BITS) - 1)
    if i >= 1 << (_INT_BITS - 1):
        i -= 1 << _INT_BITS
    return i

def add(left, right):
    """Add two numbers or concatenate two strings."""
    if isinstance(left, Error):
        return left
    if isinstance(right, Error):
        return right
    if isinstance(left, String) and isinstance(right, String):
        return String(left.value + right.value)
    return _add(left, right)

@_numeric
def _add(left, right):
    """Add two numbers."""
    return Number(left + right)

@_numeric
def sub(left, right):
    """Subtract two numbers."""
    return Number(left - right)

@_numeric
def mul(left, right):
    """Multiply two numbers."""
    return Number(left * right)

@_numeric
def div(left, right):
    """Divide two numbers."""
    if right == 0:
        return new_error(error.DIVISION_BY_ZERO)
    return Number(left / right)

@_numeric
def pow(left, right):
    """Raise to a power."""
    return Number(math.pow(left, right))

@_numeric
def mod_(left, right):
    """Remainder after integer division, truncating both operands."""
    left, right = int(left), int(right)
    if right == 0:
        return new_error(error.MOD_BY_ZERO)
    return Number(int(math.fmod(left, right)))

@_numeric
def and_(left, right):
    """Bitwise AND."""
    return Number(_to_int64(_to_int64(left) & _to_int64(right)))

@_numeric
def or_(left, right):
    """Bitwise OR."""
    return Number(_to_int64(_to_int64(left) | _to_int64(right)))

@_numeric
def xor_(left, right):
    """Bitwise XOR."""
    return Number(_to_int64(_to_int64(left) ^ _to_int64(right)))

def neg(value):
    """Negation."""
    if isinstance(value, Error):
        return value
    if not isinstance(value, Number):
        return new_error(error.TYPE_MISMATCH)
    return Number(-value.value)


###############################################################################
# comparisons

def _comparison(fn):
    """Decorator for comparisons of two numbers or two strings."""
    def wrapped_fn(left, right):
        if isinstance(left, Error):
            return left
        if isinstance(right, Error):
            return right
        if (
                not (isinstance(left, Number) and isinstance(right, Number))
                and not (isinstance(left, String) and isinstance(right, String))
            ):
            return new_error(error.TYPE_MISMATCH)
        return from_bool(fn(left.value, right.value))
    wrapped_fn.__name__ = fn.__name__
    wrapped_fn.__doc__ = fn.__doc__
    return wrapped_fn

@_comparison
def eq(left, right):
    """Return 1 if left == right, 0 otherwise."""
    return left == right

@_comparison
def neq(left, right):
    """Return 1 if left != right, 0 otherwise."""
    return left != right

@_comparison
def gt(left, right):
    """Return 1 if left > right, 0 otherwise."""
    return left > right

@_comparison
def gte(left, right):
    """Return 1 if left >= right, 0 otherwise."""
    return left >= right

@_comparison
def lt(left, right):
    """Return 1 if left < right, 0 otherwise."""
    return left < right

@_comparison
def lte(left, right):
    """Return 1 if left <= right, 0 otherwise."""
    return left <= right
