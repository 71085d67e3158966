"""
tokenbasic tests.utils
Shared testing utilities

(c) 2020--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import unittest
from unittest import main as run_tests

from tokenbasic.basic import Interpreter
from tokenbasic.basic import values


class TestCase(unittest.TestCase):
    """Base class for test cases."""

    tag = None

    def load_program(self, source, input=u''):
        """Load a program on captured streams; output goes to self.output."""
        self.output = io.StringIO()
        self.errors = io.StringIO()
        return Interpreter(
            source, input=io.StringIO(input), output=self.output, errors=self.errors
        )

    def run_program(self, source, input=u''):
        """Load and run a program; returns the interpreter and the text it printed."""
        interpreter = self.load_program(source, input)
        interpreter.run()
        return interpreter, self.output.getvalue()

    def get_number(self, interpreter, name):
        """Retrieve a numeric variable as a float."""
        value = interpreter.get_variable(name)
        assert isinstance(value, values.Number), value
        return value.value

    def get_string(self, interpreter, name):
        """Retrieve a string variable as a str."""
        value = interpreter.get_variable(name)
        assert isinstance(value, values.String), value
        return value.value
