"""
tokenbasic - values package
Types, values and operators

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from . import values
from . import randomiser

from .values import *
from .randomiser import RANDOMISER, seed
