"""
tokenbasic - memory.py
Variable environment, GOSUB stack and FOR loop table

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .base import error
from . import values


class Memory(object):
    """Variable environment: name to value, arrays in the same namespace."""

    def __init__(self):
        """Initialise an empty environment."""
        self.clear()

    def __contains__(self, name):
        """Check if a variable has been defined."""
        return name in self._vars

    def __iter__(self):
        """Iterate over variable names."""
        return iter(self._vars)

    def __repr__(self):
        """Debugging representation of variable dictionary."""
        return '\n'.join('%s: %r' % (_n, _v) for _n, _v in self._vars.items())

    def clear(self):
        """Clear all variables."""
        self._vars = {}

    def set(self, name, value):
        """Assign a value to a variable."""
        self._vars[name] = value

    def get(self, name):
        """Retrieve the value of a variable, or an Error if it is undefined."""
        try:
            return self._vars[name]
        except KeyError:
            return values.new_error(error.UNDEFINED_VARIABLE, name)

    def get_or_default(self, name):
        """Retrieve a variable; unassigned names read as 0, or "" for $ names."""
        try:
            return self._vars[name]
        except KeyError:
            if name.endswith('$'):
                return values.String('')
            return values.Number(0)

    def dim(self, name, rows, cols):
        """Create an array and store it under the given name."""
        array = values.Array(rows, cols)
        self._vars[name] = array
        return array

    def _get_array(self, name):
        """Retrieve an existing array, or an Error."""
        array = self.get(name)
        if isinstance(array, values.Error):
            return array
        if not isinstance(array, values.Array):
            return values.Error("'%s' is not an array" % (name,), error.TYPE_MISMATCH)
        return array

    def get_array_value(self, name, indices):
        """Retrieve an array element; one index for 1-D access, two for 2-D."""
        array = self._get_array(name)
        if isinstance(array, values.Error):
            return array
        row, col = _position(indices)
        return array.get(row, col)

    def set_array_value(self, name, indices, value):
        """Store an array element; returns an Error on failure, None otherwise."""
        array = self._get_array(name)
        if isinstance(array, values.Error):
            return array
        row, col = _position(indices)
        return array.set(row, col, value)


def _position(indices):
    """Convert a list of one or two integer indices to (row, col)."""
    if len(indices) == 1:
        return 0, int(indices[0])
    elif len(indices) == 2:
        return int(indices[0]), int(indices[1])
    raise error.BASICError(error.SUBSCRIPT_OUT_OF_RANGE, 'arrays have one or two dimensions')


class Stack(object):
    """GOSUB return stack of token offsets."""

    def __init__(self):
        self._stack = []

    def __len__(self):
        return len(self._stack)

    def push(self, offset):
        """Push a return address."""
        self._stack.append(offset)

    def pop(self):
        """Pop a return address; empty stack is an error."""
        try:
            return self._stack.pop()
        except IndexError:
            raise error.BASICError(error.RETURN_WITHOUT_GOSUB)

    def empty(self):
        """True if there are no return addresses."""
        return not self._stack


class ForLoop(object):
    """State of an open FOR loop."""

    def __init__(self, name, start, end, step, body):
        """Record the loop bounds and the offset of the loop body."""
        self.name = name
        self.start = start
        self.end = end
        self.step = step
        self.body = body
        self.finished = False

    def __repr__(self):
        return 'ForLoop(%r, %r, %r, %r, %r)' % (
            self.name, self.start, self.end, self.step, self.body
        )


class ForLoops(object):
    """Open FOR loops, keyed by induction variable."""

    def __init__(self):
        self._loops = {}

    def __len__(self):
        return len(self._loops)

    def __contains__(self, name):
        return name in self._loops

    def add(self, loop):
        """Record a loop, replacing any loop on the same variable."""
        self._loops[loop.name] = loop

    def get(self, name):
        """Retrieve the loop on a variable."""
        try:
            return self._loops[name]
        except KeyError:
            raise error.BASICError(error.NEXT_WITHOUT_FOR)

    def remove(self, name):
        """Forget the loop on a variable."""
        self._loops.pop(name, None)

    def empty(self):
        """True if no loops are open."""
        return not self._loops
