"""
tokenbasic - token-walking BASIC interpreter core

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from ..data import NAME, VERSION, AUTHOR, COPYRIGHT
from .api import Session
from .interpreter import Interpreter
from .base.error import *
from .base import tokens
from . import tokeniser

__version__ = VERSION
