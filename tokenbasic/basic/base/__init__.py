"""
tokenbasic - base package
Tokens, errors and token streams

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""
