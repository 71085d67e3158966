"""
tokenbasic - token-walking BASIC interpreter

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import sys
import logging
from contextlib import contextmanager

from . import config
from .basic import Interpreter, BASICError, tokeniser
from .basic.values import randomiser
from .basic import NAME, VERSION, COPYRIGHT


# exit codes
EXIT_VERSION = 1
EXIT_USAGE = 2
EXIT_READ_ERROR = 3
EXIT_RUN_ERROR = 4

USAGE = u"""\
Usage: tokenbasic [options] program.bas

Options:
  --lex               show the program's tokens and exit
  -t, --trace         show line numbers as they are executed
  -v, --version       show version and exit
  -h, --help          show this message and exit
  --debug             log debugging messages
  --logfile=FILE      write log messages to FILE
  --config=FILE       read options from FILE instead of TOKENBASIC.INI
  --timeout=SECONDS   stop a program that runs for longer than SECONDS
  --seed=N            seed the random number generator used by RND
  --line-ending=EOL   line terminator for PRINT and DUMP, e.g. \\r\\n
"""


def main(*arguments):
    """Initialise, parse arguments and perform requested operations."""
    settings = config.Settings(arguments)
    if settings.version:
        # print version and exit
        sys.stdout.write(u'%s %s\n' % (NAME, VERSION))
        sys.exit(EXIT_VERSION)
    elif settings.help or not settings.program:
        # print usage and exit
        sys.stdout.write(USAGE)
        sys.exit(EXIT_USAGE)
    source = _read_program(settings.program)
    if settings.lex:
        _show_tokens(source)
    else:
        _run_program(source, **settings.run_params)

def _read_program(name):
    """Read the program text; exit on failure."""
    try:
        with io.open(name, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except EnvironmentError as e:
        sys.stdout.write(u'Error reading %s: %s\n' % (name, e))
        sys.exit(EXIT_READ_ERROR)

def _show_tokens(source):
    """Print the token stream, one token per line."""
    for token in tokeniser.Tokeniser(source):
        sys.stdout.write(u'%s\n' % (token,))

def _run_program(source, trace, timeout, seed, line_ending):
    """Load and run a program; exit with an error code on failure."""
    if seed is not None:
        randomiser.seed(seed)
    try:
        interpreter = Interpreter(source, line_ending=line_ending)
        interpreter.set_trace(trace)
        interpreter.run(timeout=timeout)
    except BASICError as e:
        logging.debug('Program stopped: %r', e)
        sys.stderr.write(u'Error running program: %s\n' % (e,))
        sys.exit(EXIT_RUN_ERROR)


@contextmanager
def script_entry_point_guard():
    """Wrapper for entry points, to deal with Ctrl-C and sigpipe."""
    try:
        yield
    except KeyboardInterrupt:
        pass
    except BrokenPipeError:
        # stdout was closed under us, e.g. piped into head
        sys.stderr.close()
