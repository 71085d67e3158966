"""
tokenbasic - error.py
Error constants and exceptions

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

# error constants
SYNTAX_ERROR = 1
UNDEFINED_VARIABLE = 2
TYPE_MISMATCH = 3
DIVISION_BY_ZERO = 4
MOD_BY_ZERO = 5
SUBSCRIPT_OUT_OF_RANGE = 6
DIMENSION_TOO_LARGE = 7
UNDEFINED_LINE_NUMBER = 8
RETURN_WITHOUT_GOSUB = 9
NEXT_WITHOUT_FOR = 10
FOR_WITHOUT_NEXT = 11
OUT_OF_DATA = 12
ARITY_MISMATCH = 13
END_OF_PROGRAM = 14
TIMEOUT = 15
INPUT_ERROR = 16
ILLEGAL_FUNCTION_CALL = 17
UNDEFINED_USER_FUNCTION = 18
OUT_OF_MEMORY = 19
# error value surfacing from an expression, message is carried verbatim
EXPRESSION_ERROR = 20

# shorthand
STX = SYNTAX_ERROR
IFC = ILLEGAL_FUNCTION_CALL


MESSAGES = {
    SYNTAX_ERROR: 'syntax error',
    UNDEFINED_VARIABLE: "undefined '%s'",
    TYPE_MISMATCH: 'type mismatch',
    DIVISION_BY_ZERO: 'division by zero',
    MOD_BY_ZERO: 'mod by zero',
    SUBSCRIPT_OUT_OF_RANGE: 'index out of range',
    DIMENSION_TOO_LARGE: 'dimension too large',
    UNDEFINED_LINE_NUMBER: 'line %s does not exist',
    RETURN_WITHOUT_GOSUB: 'RETURN without GOSUB',
    NEXT_WITHOUT_FOR: 'NEXT without FOR',
    FOR_WITHOUT_NEXT: 'unclosed FOR loop',
    OUT_OF_DATA: 'out of DATA',
    ARITY_MISMATCH: 'wrong number of arguments',
    END_OF_PROGRAM: 'read past end of program',
    TIMEOUT: 'timeout during execution',
    INPUT_ERROR: 'error reading input',
    ILLEGAL_FUNCTION_CALL: 'illegal function call',
    UNDEFINED_USER_FUNCTION: 'undefined function FN %s',
    OUT_OF_MEMORY: 'out of memory',
    EXPRESSION_ERROR: 'error',
}


def format_message(err, *args):
    """Build the message for an error constant."""
    try:
        message = MESSAGES[err]
    except KeyError:
        return 'unprintable error'
    if args:
        if '%' in message:
            return message % args
        # free-text detail appended to the generic message
        return '%s: %s' % (message, ' '.join(str(_arg) for _arg in args))
    return message.replace(' %s', '').replace(" '%s'", '')


class Interrupt(Exception):
    """Base type for exceptions."""

    message = ''

    def __repr__(self):
        """String representation of exception."""
        return '%s(%r)' % (self.__class__.__name__, self.message)

    def __str__(self):
        return self.get_message()

    def get_message(self):
        """Error message."""
        return self.message


class BASICError(Interrupt):
    """Runtime error."""

    def __init__(self, err, *args, **kwargs):
        """Initialise error; a message keyword overrides the standard text."""
        Interrupt.__init__(self)
        self.err = err
        self.args = args
        self.message = kwargs.get('message') or format_message(err, *args)
        # line-number literal of the line being executed
        self.line = kwargs.get('line')

    def get_message(self):
        """Error message, prefixed with the line number if known."""
        if self.line is not None:
            return 'line %s : %s' % (self.line, self.message)
        return self.message


class Timeout(BASICError):
    """Execution cancelled or past its deadline."""

    def __init__(self, line=None):
        BASICError.__init__(self, TIMEOUT, line=line)


def throw_if(condition, err=IFC, *args):
    """Raise BASICError if condition is met."""
    if condition:
        raise BASICError(err, *args)

def range_check(lower, upper, *allvars):
    """Check if all variables in list are within the given inclusive range."""
    for v in allvars:
        if v is not None and not (lower <= v <= upper):
            raise BASICError(SUBSCRIPT_OUT_OF_RANGE)
