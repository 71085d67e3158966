"""
tokenbasic - userfunctions.py
User-defined functions.

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging

from ..base import error
from ..base import codestream
from .. import values
from .. import tokeniser
from .. import memory


class UserFunction(object):
    """User-defined function."""

    def __init__(self, definition, builtins):
        """Define function."""
        self.name = definition.name
        self.params = list(definition.params)
        self.body = definition.body
        self._builtins = builtins
        # tokenised body, built on first call
        self._tokens = None

    def number_arguments(self):
        """Retrieve number of arguments."""
        return len(self.params)

    def invalidate(self):
        """Drop the cached body tokens, e.g. after a new builtin is registered."""
        self._tokens = None

    def _get_tokens(self):
        """Tokenise the body; numbers at the start of the body are not line numbers."""
        if self._tokens is None:
            self._tokens = self._builtins.retokenise(
                tokeniser.tokenise(self.body + '\n', number_lines=False)
            )
        return self._tokens

    def evaluate(self, args, parser):
        """Evaluate the body in a fresh environment with the parameters bound."""
        if len(args) != len(self.params):
            return values.Error(
                'FN %s: expected %d arguments, got %d' % (self.name, len(self.params), len(args)),
                error.ARITY_MISMATCH
            )
        scope = memory.Memory()
        for name, value in zip(self.params, args):
            scope.set(name, value)
        child = parser.spawn(scope)
        ins = codestream.TokenStream(self._get_tokens())
        try:
            return child.parse_expression(ins)
        except RecursionError:
            logging.debug('Recursion limit reached in FN %s', self.name)
            return values.new_error(error.OUT_OF_MEMORY)


class UserFunctionManager(object):
    """User-defined function table."""

    def __init__(self, builtins):
        """Initialise functions."""
        self._fn_dict = {}
        self._builtins = builtins

    def __contains__(self, name):
        return name in self._fn_dict

    def __iter__(self):
        return iter(self._fn_dict)

    def define(self, definition):
        """Define a function from its parsed definition."""
        self._fn_dict[definition.name] = UserFunction(definition, self._builtins)

    def get(self, name):
        """Retrieve function by name; None if undefined."""
        return self._fn_dict.get(name)

    def invalidate(self):
        """Drop cached function bodies."""
        for fn in self._fn_dict.values():
            fn.invalidate()

    def call(self, name, args, parser):
        """Evaluate a user-defined function; failures are Error values."""
        fn = self.get(name)
        if fn is None:
            return values.new_error(error.UNDEFINED_USER_FUNCTION, name)
        return fn.evaluate(args, parser)
