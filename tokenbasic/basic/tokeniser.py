"""
tokenbasic - tokeniser.py
Convert BASIC program text to a stream of tokens

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io

from .base import tokens as tk
from .base.tokens import Token, DIGITS, WHITESPACE


# characters that end an identifier
_NOT_NAME_CHARS = (
    WHITESPACE + '\n' + tk.OPERATOR_CHARS + tk.COMPARISON_CHARS
    + tk.COMPOUND_CHARS + tk.BRACKET_CHARS
)

# characters after which a minus sign followed by a digit starts a negative literal
_BEFORE_NEGATIVE = (
    WHITESPACE + '\n' + tk.OPERATOR_CHARS + tk.COMPARISON_CHARS + ',:;([{'
)

# escape sequences in string literals
_ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', '"': '"', '\\': '\\'}


def _peek(ins):
    """Peek next char in stream."""
    pos = ins.tell()
    c = ins.read(1)
    ins.seek(pos)
    return c


class Tokeniser(object):
    """BASIC tokeniser: produces one token per call from program text."""

    def __init__(self, text, number_lines=True):
        """Initialise tokeniser on a program text."""
        self._ins = io.StringIO(text)
        self._text = text
        # integer following a newline is a line number
        # the start of input counts as following a newline
        self._number_lines = number_lines
        self._previous = tk.NEWLINE
        self._done = False

    def __iter__(self):
        """Iterate over all tokens up to and including EOF."""
        while not self._done:
            yield self.next_token()

    def next_token(self):
        """Read and return the next token, skipping whitespace."""
        ins = self._ins
        c = ins.read(1)
        while c and c in WHITESPACE:
            c = ins.read(1)
        # character directly before this one
        before = self._text[ins.tell()-2:ins.tell()-1] if c else ''
        if not c:
            token = Token(tk.EOF, '')
            self._done = True
        elif c == '\n':
            token = Token(tk.NEWLINE, '\n')
        elif c == '"':
            token = Token(tk.STRING, self._read_string())
        elif c == '-' and _peek(ins) in tuple(DIGITS) and (not before or before in _BEFORE_NEGATIVE):
            # negative literal: -3 and the -4 in 3 -4, but not in 3-4 or 3 - 4
            token = Token(tk.INT, '-' + self._read_number(ins.read(1)))
        elif c in '<>':
            nxt = _peek(ins)
            if c == '<' and nxt in ('>', '='):
                token = Token(tk.NOTEQUALS if nxt == '>' else tk.LTEQUALS, c + ins.read(1))
            elif c == '>' and nxt == '=':
                token = Token(tk.GTEQUALS, c + ins.read(1))
            else:
                token = Token(c, c)
        elif c in tk.SINGLE:
            token = Token(tk.SINGLE[c], c)
        elif c in DIGITS:
            token = Token(tk.INT, self._read_number(c))
        else:
            name = self._read_identifier(c)
            token = Token(tk.lookup_identifier(name), name)
        # an integer at the start of a line is its line number
        if self._number_lines and self._previous == tk.NEWLINE and token.kind == tk.INT:
            token = Token(tk.LINENO, token.literal)
        self._previous = token.kind
        return token

    def _read_number(self, first):
        """Read digits with an optional fractional part."""
        out = [first]
        while True:
            c = _peek(self._ins)
            if not c or c not in DIGITS + '.':
                break
            out.append(self._ins.read(1))
        return ''.join(out)

    def _read_identifier(self, first):
        """Read a name; sigils and digits may follow the first character."""
        out = [first]
        while True:
            c = _peek(self._ins)
            if not c or c in _NOT_NAME_CHARS:
                break
            out.append(self._ins.read(1))
        return ''.join(out)

    def _read_string(self):
        """Read a string literal up to the closing quote, handling escapes."""
        out = []
        while True:
            c = self._ins.read(1)
            if not c or c == '"':
                break
            if c == '\\':
                c = self._ins.read(1)
                if not c:
                    break
                c = _ESCAPES.get(c, c)
            out.append(c)
        return ''.join(out)


def tokenise(text, number_lines=True):
    """Tokenise a complete program text; the list ends with an EOF token."""
    return list(Tokeniser(text, number_lines))

def detokenise(tokens):
    """Serialise tokens back to source text, separated by single spaces."""
    return ' '.join(_token_text(_t) for _t in tokens)

def _token_text(token):
    """Source text for a single token."""
    if token.kind == tk.STRING:
        literal = token.literal.replace('\\', '\\\\').replace('"', '\\"')
        for escape, char in (('n', '\n'), ('r', '\r'), ('t', '\t')):
            literal = literal.replace(char, '\\' + escape)
        return '"%s"' % (literal,)
    return token.literal
