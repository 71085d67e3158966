"""
tokenbasic - expressions.py
Expression parser

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging

from ..base import error
from ..base import tokens as tk
from ..base.codestream import unexpected
from .. import values
from ..functions import VARIADIC
from . import operators as op
from . import userfunctions


# tokens that end the argument list of a variadic builtin
END_VARIADIC = tk.END_STATEMENT + (tk.ELSE,)


class ExpressionParser(object):
    """Precedence parser and evaluator over a token stream."""

    def __init__(self, memory, builtins, user_functions=None, env=None):
        """Initialise the parser on a variable environment and function tables."""
        self._memory = memory
        self._builtins = builtins
        # user-defined functions, shared with child parsers
        if user_functions is None:
            user_functions = userfunctions.UserFunctionManager(builtins)
        self.user_functions = user_functions
        # interpreter passed to builtin callbacks
        self._env = env
        # nesting depth of aborted expressions being skipped
        self._skipping = 0

    def spawn(self, memory):
        """Child parser on a fresh environment, sharing functions and builtins."""
        return ExpressionParser(memory, self._builtins, self.user_functions, self._env)

    def parse_expression(self, ins, allow_bitwise=True):
        """Parse and evaluate an additive expression: term ((+|-|AND|OR|XOR) term)*."""
        value = self._parse_term(ins)
        while True:
            kind = ins.peek_kind()
            if kind in op.EXPRESSION:
                fn = op.EXPRESSION[kind]
            elif allow_bitwise and kind in op.BITWISE:
                fn = op.BITWISE[kind]
            else:
                return value
            ins.read()
            if isinstance(value, values.Error):
                self._skip(self._parse_term, ins)
            else:
                value = fn(value, self._parse_term(ins))

    def parse_compare(self, ins, allow_bitwise=False):
        """Parse a comparison; without a comparator, test the truth of the value."""
        left = self.parse_expression(ins, allow_bitwise)
        kind = ins.peek_kind()
        if kind in op.COMPARISON:
            ins.read()
            if isinstance(left, values.Error):
                self._skip(self.parse_expression, ins, allow_bitwise)
                return left
            right = self.parse_expression(ins, allow_bitwise)
            return op.COMPARISON[kind](left, right)
        if isinstance(left, values.Error):
            return left
        return values.from_bool(left.is_true())

    def parse_indices(self, ins):
        """Parse an index list [i] or [r, c]; returns a list of integers."""
        ins.require(tk.LINDEX)
        indices = []
        while True:
            index = self.parse_expression(ins)
            if self._skipping:
                indices.append(0)
            else:
                index = values.pass_number(index)
                indices.append(values.to_int(index.value, error.SUBSCRIPT_OUT_OF_RANGE))
            if ins.require(tk.COMMA, tk.RINDEX).kind == tk.RINDEX:
                return indices

    def _skip(self, parse_fn, *args):
        """Parse the rest of an aborted expression without evaluating calls."""
        self._skipping += 1
        try:
            return parse_fn(*args)
        finally:
            self._skipping -= 1

    def _parse_term(self, ins):
        """Parse a multiplicative expression: factor ((*|/|^|MOD) factor)*."""
        value = self._parse_factor(ins)
        while ins.peek_kind() in op.TERM:
            fn = op.TERM[ins.read().kind]
            if isinstance(value, values.Error):
                self._skip(self._parse_factor, ins)
            else:
                value = fn(value, self._parse_factor(ins))
        return value

    def _parse_factor(self, ins):
        """Parse a single operand."""
        token = ins.read()
        kind = token.kind
        if kind == tk.LBRACKET:
            value = self.parse_expression(ins)
            ins.require(tk.RBRACKET)
            return value
        elif kind in op.UNARY:
            return op.UNARY[kind](self._parse_factor(ins))
        elif kind == tk.INT:
            return values.from_literal(token.literal)
        elif kind == tk.STRING:
            return values.String(token.literal)
        elif kind == tk.IDENT:
            if ins.peek_kind() == tk.LINDEX:
                indices = self.parse_indices(ins)
                return self._memory.get_array_value(token.literal, indices)
            return self._memory.get_or_default(token.literal)
        elif kind == tk.BUILTIN:
            return self._call_builtin(ins, token.literal)
        elif kind == tk.FN:
            return self._call_user_function(ins)
        raise unexpected(token)

    def _call_builtin(self, ins, name):
        """Collect arguments and call a builtin function."""
        builtin = self._builtins.get(name)
        if builtin is None:
            return values.new_error(error.UNDEFINED_VARIABLE, name)
        if builtin.arity == VARIADIC:
            args = self._parse_variadic(ins)
        elif builtin.arity == 0:
            if ins.peek_kind() == tk.LBRACKET and ins.peek_kind(1) == tk.RBRACKET:
                ins.read()
                ins.read()
            args = []
        elif ins.peek_kind() == tk.LBRACKET:
            ins.read()
            args = self._parse_arguments(ins, builtin.arity)
            ins.require(tk.RBRACKET)
        else:
            args = self._parse_arguments(ins, builtin.arity)
        if self._skipping:
            return values.ZERO
        logging.debug('Calling builtin %s with %d arguments', name, len(args))
        return builtin.fn(self._env, args)

    def _parse_arguments(self, ins, count):
        """Parse a fixed number of comma-separated argument expressions."""
        args = []
        for i in range(count):
            if i:
                ins.require(tk.COMMA)
            args.append(self._parse_argument(ins, args))
        return args

    def _parse_argument(self, ins, args):
        """Parse one argument; arguments after an Error are not evaluated."""
        if any(isinstance(_arg, values.Error) for _arg in args):
            return self._skip(self.parse_expression, ins)
        return self.parse_expression(ins)

    def _parse_variadic(self, ins):
        """Parse arguments up to the end of the statement; semicolons insert a space."""
        args = []
        while ins.peek_kind() not in END_VARIADIC:
            if ins.read_if(tk.COMMA):
                continue
            if ins.read_if(tk.SEMICOLON):
                args.append(values.String(' '))
                continue
            args.append(self._parse_argument(ins, args))
        return args

    def _call_user_function(self, ins):
        """Parse FN name(args) and evaluate the user-defined function."""
        name = ins.require(tk.IDENT, tk.BUILTIN).literal
        args = []
        ins.require(tk.LBRACKET)
        if not ins.read_if(tk.RBRACKET):
            while True:
                args.append(self._parse_argument(ins, args))
                if ins.require(tk.COMMA, tk.RBRACKET).kind == tk.RBRACKET:
                    break
        if self._skipping:
            return values.ZERO
        for arg in args:
            if isinstance(arg, values.Error):
                return arg
        return self.user_functions.call(name, args, self)
