"""
tokenbasic - iostreams.py
Input/output streams

(c) 2014--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import sys
from contextlib import contextmanager

from .base import error


# default line terminator for PRINT and DUMP
LINE_ENDING = '\n'


class IOStreams(object):
    """Manage the input, output and error streams of an interpreter."""

    def __init__(self, input=u'stdio', output=u'stdio', errors=u'stdio', line_ending=LINE_ENDING):
        """Initialise I/O streams; "stdio" picks the standard streams at use time."""
        self.set_input(input)
        self.set_output(output)
        self.set_error(errors)
        self.line_ending = line_ending
        # additional output copies, e.g. for capturing
        self._echoes = []

    def set_input(self, stream):
        """Attach the input stream."""
        self._input = _check_stream(stream, 'readline', 'input')

    def set_output(self, stream):
        """Attach the output stream."""
        self._output = _check_stream(stream, 'write', 'output')

    def set_error(self, stream):
        """Attach the error stream."""
        self._error = _check_stream(stream, 'write', 'error')

    @property
    def input(self):
        if self._input == u'stdio':
            return sys.stdin
        return self._input

    @property
    def output(self):
        if self._output == u'stdio':
            return sys.stdout
        return self._output

    @property
    def errors(self):
        if self._error == u'stdio':
            return sys.stderr
        return self._error

    def write(self, s):
        """Write text to the output stream and any echoes."""
        self.output.write(s)
        for echo in self._echoes:
            echo.write(s)

    def write_error(self, s):
        """Write a line to the error stream."""
        self.errors.write(s + self.line_ending)

    def flush(self):
        """Flush output streams."""
        for stream in [self.output, self.errors] + self._echoes:
            stream.flush()

    def read_line(self):
        """Read one line of input with the line terminator removed."""
        self.flush()
        try:
            line = self.input.readline()
        except (OSError, ValueError) as e:
            raise error.BASICError(error.INPUT_ERROR, str(e))
        return line.rstrip('\r\n')

    @contextmanager
    def echo(self, stream):
        """Copy all output to the given stream for the duration."""
        self._echoes.append(stream)
        try:
            yield stream
        finally:
            self._echoes.remove(stream)


def _check_stream(stream, method, role):
    """Accept a file-like object or the "stdio" sentinel."""
    if stream == u'stdio':
        return u'stdio'
    if not hasattr(stream, method):
        raise TypeError(
            '%s stream must be file-like or "stdio", not `%s`' % (role, type(stream))
        )
    return stream
