"""
tokenbasic - api.py
Session API

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io

from . import values
from . import interpreter


class Session(object):
    """Public API to a BASIC session."""

    def __init__(self, source=None, **kwargs):
        """Set up session object; keyword arguments are passed to the Interpreter."""
        self._kwargs = kwargs
        self._impl = None
        self._builtins = []
        self._trace = False
        if source is not None:
            self.load(source)

    def __enter__(self):
        """Context guard."""
        return self

    def __exit__(self, ex_type, ex_val, tb):
        """Context guard."""
        self.close()

    def start(self):
        """Start the session with an empty program, if none is loaded."""
        if not self._impl:
            self.load('')
            return True
        return False

    def load(self, source):
        """Load a new program; variables, registered builtins and trace mode carry over."""
        variables = self._impl.variables if self._impl else None
        self._impl = interpreter.Interpreter(source, variables=variables, **self._kwargs)
        for name, arity, fn in self._builtins:
            self._impl.register_builtin(name, arity, fn)
        self._impl.set_trace(self._trace)
        return self

    @property
    def interpreter(self):
        """The underlying interpreter."""
        self.start()
        return self._impl

    def run(self, timeout=None, cancel=None):
        """Run the loaded program."""
        self.start()
        self._impl.run(timeout=timeout, cancel=cancel)

    def execute(self, source, timeout=None, cancel=None):
        """Load and run a program; returns the text it printed."""
        self.load(source)
        output = io.StringIO()
        with self._impl.echo(output):
            self._impl.run(timeout=timeout, cancel=cancel)
        return output.getvalue()

    def evaluate(self, expression):
        """Evaluate a BASIC expression and return a Python value."""
        self.start()
        return values.pass_value(self._impl.evaluate(expression)).to_value()

    def set_variable(self, name, value):
        """Set a variable from a Python value."""
        self.start()
        self._impl.set_variable(name, value)

    def get_variable(self, name):
        """Get a variable as a Python value; None if it is undefined."""
        self.start()
        value = self._impl.get_variable(name)
        if isinstance(value, values.Error):
            return None
        return value.to_value()

    def set_array_variable(self, name, index, value):
        """Set an array element from a Python value."""
        self.start()
        self._impl.set_array_variable(name, index, value)

    def get_array_variable(self, name, index):
        """Get an array element as a Python value."""
        self.start()
        return values.pass_value(self._impl.get_array_variable(name, index)).to_value()

    def register_builtin(self, name, arity, fn):
        """Register an extra builtin for this and later programs."""
        self.start()
        self._builtins.append((name, arity, fn))
        self._impl.register_builtin(name, arity, fn)

    def set_trace(self, trace):
        """Switch line number tracing on or off."""
        self._trace = bool(trace)
        if self._impl:
            self._impl.set_trace(self._trace)

    def close(self):
        """Close the session."""
        if self._impl:
            self._impl.flush()
