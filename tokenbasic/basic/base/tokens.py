"""
tokenbasic - tokens.py
BASIC token kinds and keywords

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from collections import namedtuple


# core
EOF = 'EOF'
NEWLINE = 'NEWLINE'
LINENO = 'LINENO'

# literals and names
IDENT = 'IDENT'
INT = 'INT'
STRING = 'STRING'
BUILTIN = 'BUILTIN'

# keyword tokens
LET = 'LET'
IF = 'IF'
THEN = 'THEN'
ELSE = 'ELSE'
FOR = 'FOR'
TO = 'TO'
STEP = 'STEP'
NEXT = 'NEXT'
GOSUB = 'GOSUB'
GOTO = 'GOTO'
RETURN = 'RETURN'
END = 'END'
REM = 'REM'
DEF = 'DEF'
FN = 'FN'
DIM = 'DIM'
DATA = 'DATA'
READ = 'READ'
INPUT = 'INPUT'
SWAP = 'SWAP'
AND = 'AND'
OR = 'OR'
XOR = 'XOR'
MOD = 'MOD'

# operators and punctuation
ASSIGN = '='
PLUS = '+'
MINUS = '-'
ASTERISK = '*'
SLASH = '/'
POW = '^'
LBRACKET = '('
RBRACKET = ')'
LINDEX = '['
RINDEX = ']'
COMMA = ','
COLON = ':'
SEMICOLON = ';'

# comparisons
GT = '>'
GTEQUALS = '>='
LT = '<'
LTEQUALS = '<='
NOTEQUALS = '<>'


# keywords are matched case-insensitively
KEYWORDS = {
    'let': LET,
    'if': IF,
    'then': THEN,
    'else': ELSE,
    'for': FOR,
    'to': TO,
    'step': STEP,
    'next': NEXT,
    'gosub': GOSUB,
    'goto': GOTO,
    'return': RETURN,
    'end': END,
    'rem': REM,
    'def': DEF,
    'fn': FN,
    'dim': DIM,
    'data': DATA,
    'read': READ,
    'input': INPUT,
    'swap': SWAP,
    'and': AND,
    'or': OR,
    'xor': XOR,
    'mod': MOD,
}

# single-character tokens
SINGLE = {
    '=': ASSIGN,
    '+': PLUS,
    '-': MINUS,
    '*': ASTERISK,
    '/': SLASH,
    '^': POW,
    '%': MOD,
    '(': LBRACKET,
    ')': RBRACKET,
    '[': LINDEX,
    ']': RINDEX,
    ',': COMMA,
    ':': COLON,
    ';': SEMICOLON,
}

COMPARISONS = (ASSIGN, NOTEQUALS, LT, LTEQUALS, GT, GTEQUALS)

# tokens that end a line or the whole program
END_LINE = (NEWLINE, EOF)
# tokens that end a statement
END_STATEMENT = (NEWLINE, COLON, EOF)

# character classes for the tokeniser
DIGITS = '0123456789'
WHITESPACE = ' \t\r'
OPERATOR_CHARS = '+-*/^%'
COMPARISON_CHARS = '=!<>'
COMPOUND_CHARS = ',:;"'
BRACKET_CHARS = '()[]{}'


def lookup_identifier(name):
    """Return the keyword kind for a name, or IDENT."""
    return KEYWORDS.get(name.lower(), IDENT)


class Token(namedtuple('Token', ['kind', 'literal'])):
    """A single token: kind plus literal text."""

    __slots__ = ()

    def __str__(self):
        """Token representation as shown by --lex."""
        literal = self.literal
        if self.kind == NEWLINE:
            literal = '\\n'
        return 'Token{Type:%s Value:%s}' % (self.kind, literal)
