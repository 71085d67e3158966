"""
tokenbasic - parser package
Expression parser and user-defined functions

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .expressions import ExpressionParser
