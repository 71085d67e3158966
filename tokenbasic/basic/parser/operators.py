"""
tokenbasic - operators.py
Operator tables for the expression parser

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..base import tokens as tk
from .. import values


# multiplicative level: binds tighter than additive
TERM = {
    tk.ASTERISK: values.mul,
    tk.SLASH: values.div,
    tk.POW: values.pow,
    tk.MOD: values.mod_,
}

# additive level
EXPRESSION = {
    tk.PLUS: values.add,
    tk.MINUS: values.sub,
}

# bitwise operators share the additive level; IF conditions keep them for combining tests
BITWISE = {
    tk.AND: values.and_,
    tk.OR: values.or_,
    tk.XOR: values.xor_,
}

# comparisons
COMPARISON = {
    tk.ASSIGN: values.eq,
    tk.NOTEQUALS: values.neq,
    tk.GT: values.gt,
    tk.GTEQUALS: values.gte,
    tk.LT: values.lt,
    tk.LTEQUALS: values.lte,
}

# unary operators
UNARY = {
    tk.MINUS: values.neg,
}
