"""
tokenbasic - functions
Builtin function registry

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
from collections import namedtuple

from ..base import tokens as tk
from ..base.tokens import Token


# arity of a builtin that takes all arguments up to the end of the statement
VARIADIC = -1


Builtin = namedtuple('Builtin', ['name', 'arity', 'fn'])


class Builtins(object):
    """Registry of builtin functions: name to arity and callable.

    Callables take (env, args) where env is the interpreter and args a list of values;
    they return a single value, which is an Error value on failure.
    """

    def __init__(self):
        """Initialise an empty registry."""
        self._functions = {}

    def __contains__(self, name):
        """Check if a name is a registered builtin."""
        return name in self._functions

    def __iter__(self):
        """Iterate over registered names."""
        return iter(self._functions)

    def register(self, name, arity, fn):
        """Register a builtin under the upper- and lower-case forms of its name."""
        if name in self._functions:
            logging.debug('Redefining builtin %s', name)
        builtin = Builtin(name, arity, fn)
        for key in (name, name.lower(), name.upper()):
            self._functions[key] = builtin
        return builtin

    def get(self, name):
        """Retrieve a builtin by name; None if unknown."""
        return self._functions.get(name)

    def retokenise(self, tokens):
        """Rewrite IDENT tokens naming a builtin as BUILTIN, in place."""
        for i, token in enumerate(tokens):
            if token.kind == tk.IDENT and token.literal in self._functions:
                tokens[i] = Token(tk.BUILTIN, token.literal)
        return tokens


def register_standard(builtins):
    """Register the standard function set."""
    from . import maths, strings, misc
    for module in (maths, strings, misc):
        for name, arity, fn in module.FUNCTIONS:
            builtins.register(name, arity, fn)
    return builtins
