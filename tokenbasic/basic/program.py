"""
tokenbasic - program.py
Program buffer: load pass over the token stream

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
from collections import namedtuple

from .base import error
from .base import tokens as tk
from .base.tokens import Token
from . import values
from . import tokeniser


# user-defined function: parameter names and body text
FunctionDefinition = namedtuple('FunctionDefinition', ['name', 'params', 'body'])


def insert_implicit_goto(tokens):
    """Canonicalise THEN 100 and ELSE 100 to THEN GOTO 100 and ELSE GOTO 100."""
    out = []
    for i, token in enumerate(tokens):
        out.append(token)
        if (
                token.kind in (tk.THEN, tk.ELSE)
                and i + 1 < len(tokens) and tokens[i+1].kind == tk.INT
            ):
            out.append(Token(tk.GOTO, 'GOTO'))
    return out


class Program(object):
    """Tokenised BASIC program with its line index, DATA items and function definitions."""

    def __init__(self, tokens, warn=None):
        """Take ownership of the token buffer and run the load pass."""
        self.tokens = insert_implicit_goto(list(tokens))
        if not self.tokens or self.tokens[-1].kind != tk.EOF:
            self.tokens.append(Token(tk.EOF, ''))
        # callback for load-time warnings
        self._warn = warn
        self.rebuild()

    def rebuild(self):
        """Scan the buffer to build the line index, DATA vector and function table."""
        self.line_numbers = {}
        self.data = []
        self.functions = {}
        tokens = self.tokens
        line = None
        comment = False
        pos = 0
        while pos < len(tokens):
            token = tokens[pos]
            if comment:
                comment = token.kind != tk.NEWLINE
            elif token.kind == tk.LINENO:
                line = token.literal
                if line in self.line_numbers:
                    self._duplicate(line)
                self.line_numbers[line] = pos
                if pos + 1 < len(tokens) and tokens[pos+1].kind == tk.DEF:
                    pos = self._define(pos + 2, line)
                    continue
            elif token.kind == tk.REM:
                comment = True
            elif token.kind == tk.DATA:
                pos = self._read_data(pos + 1, line)
                continue
            pos += 1

    def _duplicate(self, line):
        """Report a duplicated line number; the later definition wins."""
        message = 'WARN: Line %s is duplicated - GOTO/GOSUB behaviour is undefined' % (line,)
        logging.warning(message)
        if self._warn:
            self._warn(message)

    def _read_data(self, pos, line):
        """Collect DATA items up to the end of the line; returns the position after them."""
        tokens = self.tokens
        while pos < len(tokens) and tokens[pos].kind not in tk.END_LINE:
            token = tokens[pos]
            if token.kind == tk.INT:
                self.data.append(values.from_literal(token.literal))
            elif token.kind == tk.STRING:
                self.data.append(values.String(token.literal))
            elif token.kind != tk.COMMA:
                raise error.BASICError(
                    error.STX, 'unhandled token in DATA statement: %s' % (token.literal,),
                    line=line
                )
            pos += 1
        return pos

    def _expect(self, pos, kind, what, line):
        """Check the token at pos is of the given kind."""
        if pos >= len(self.tokens) or self.tokens[pos].kind != kind:
            raise error.BASICError(error.STX, 'DEF FN: expected %s' % (what,), line=line)
        return self.tokens[pos]

    def _define(self, pos, line):
        """Parse DEF FN NAME(params) = body; returns the position of the end of line."""
        tokens = self.tokens
        self._expect(pos, tk.FN, 'FN', line)
        name = self._expect(pos + 1, tk.IDENT, 'function name', line).literal
        self._expect(pos + 2, tk.LBRACKET, '(', line)
        pos += 3
        params = []
        while pos < len(tokens) and tokens[pos].kind != tk.RBRACKET:
            token = tokens[pos]
            if token.kind == tk.IDENT:
                params.append(token.literal)
            elif token.kind != tk.COMMA:
                raise error.BASICError(
                    error.STX, 'DEF FN: unexpected %s in parameter list' % (token.literal,),
                    line=line
                )
            pos += 1
        self._expect(pos, tk.RBRACKET, ')', line)
        self._expect(pos + 1, tk.ASSIGN, '=', line)
        pos += 2
        start = pos
        while pos < len(tokens) and tokens[pos].kind not in tk.END_LINE:
            pos += 1
        if pos == start:
            raise error.BASICError(error.STX, 'DEF FN: function %s has no body' % (name,), line=line)
        body = tokeniser.detokenise(tokens[start:pos])
        self.functions[name] = FunctionDefinition(name, params, body)
        return pos

    def get_offset(self, line):
        """Token offset of a line; fails for unknown line numbers."""
        try:
            return self.line_numbers[line]
        except KeyError:
            raise error.BASICError(error.UNDEFINED_LINE_NUMBER, line)
