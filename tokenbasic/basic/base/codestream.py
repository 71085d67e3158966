"""
tokenbasic - codestream.py
Token stream utilities

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from . import error
from . import tokens as tk


class TokenStream(object):
    """Seekable stream over a flat token buffer."""

    def __init__(self, tokens):
        """Initialise the stream."""
        self._tokens = tokens
        self._pos = 0

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, pos):
        return self._tokens[pos]

    @property
    def tokens(self):
        """The underlying token buffer."""
        return self._tokens

    def tell(self):
        """Current offset into the buffer."""
        return self._pos

    def seek(self, pos):
        """Move to an absolute offset."""
        self._pos = pos

    def at_end(self):
        """True if no tokens remain to be executed."""
        return self._pos >= len(self._tokens) or self._tokens[self._pos].kind == tk.EOF

    def peek(self, offset=0):
        """Look at a token without consuming it."""
        pos = self._pos + offset
        if pos >= len(self._tokens):
            raise error.BASICError(error.END_OF_PROGRAM)
        return self._tokens[pos]

    def peek_kind(self, offset=0):
        """Kind of the token at the given lookahead, EOF beyond the buffer."""
        pos = self._pos + offset
        if pos >= len(self._tokens):
            return tk.EOF
        return self._tokens[pos].kind

    def read(self):
        """Consume and return the next token."""
        token = self.peek()
        self._pos += 1
        return token

    def read_if(self, *kinds):
        """Consume the next token if it is of one of the given kinds."""
        if self.peek_kind() in kinds:
            return self.read()
        return None

    def require(self, *kinds):
        """Consume the next token, which must be of one of the given kinds."""
        token = self.read()
        if token.kind not in kinds:
            raise error.BASICError(
                error.STX, 'expected %s, got %s' % (' or '.join(kinds), _describe(token))
            )
        return token

    def skip_to(self, kinds):
        """Advance up to (not past) the next token of the given kinds."""
        while self._pos < len(self._tokens) and self._tokens[self._pos].kind not in kinds:
            self._pos += 1

    def skip_line(self):
        """Advance to the newline that ends the current line."""
        self.skip_to(tk.END_LINE)


def _describe(token):
    """Describe a token for error messages."""
    if token.kind == tk.NEWLINE:
        return 'end of line'
    if token.kind == tk.EOF:
        return 'end of program'
    return "%s '%s'" % (token.kind, token.literal)

def unexpected(token):
    """Syntax error for an unexpected token."""
    return error.BASICError(error.STX, 'unexpected token %s' % _describe(token))
