"""
tokenbasic - interpreter.py
BASIC interpreter

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
import math
import time

from .base import error
from .base import tokens as tk
from .base import codestream
from . import values
from . import tokeniser
from . import program
from . import memory
from . import functions
from . import iostreams
from .parser import expressions


class Interpreter(object):
    """BASIC interpreter."""

    def __init__(
            self, source, input=u'stdio', output=u'stdio', errors=u'stdio',
            line_ending=iostreams.LINE_ENDING, variables=None
        ):
        """Load a program from source text, a Tokeniser or a list of tokens.

        variables: an existing variable environment to continue with.
        """
        if isinstance(source, str):
            tokens = tokeniser.tokenise(source)
        else:
            tokens = list(source)
        self._streams = iostreams.IOStreams(input, output, errors, line_ending)
        # variables, GOSUB stack and open FOR loops
        self._memory = variables if variables is not None else memory.Memory()
        self._gosub_stack = memory.Stack()
        self._for_loops = memory.ForLoops()
        # load pass: line index, DATA and DEF FN; duplicate lines are reported on the error stream
        self._program = program.Program(tokens, warn=self._streams.write_error)
        self._builtins = functions.register_standard(functions.Builtins())
        self._builtins.retokenise(self._program.tokens)
        self.parser = expressions.ExpressionParser(self._memory, self._builtins, env=self)
        for definition in self._program.functions.values():
            self.parser.user_functions.define(definition)
        self._ins = codestream.TokenStream(self._program.tokens)
        self._data_pos = 0
        # line-number literal of the line being executed
        self._line = None
        self._finished = False
        self._jumped = False
        # line number tracing
        self._trace = False
        # cancellation
        self._deadline = None
        self._cancel = None
        self._init_statements()

    def _init_statements(self):
        """Initialise statement dispatch table."""
        self._statements = {
            tk.LINENO: self._exec_lineno,
            tk.NEWLINE: self._exec_nothing,
            tk.COLON: self._exec_nothing,
            tk.EOF: self._exec_eof,
            tk.REM: self._exec_skip_line,
            tk.DATA: self._exec_skip_line,
            tk.DEF: self._exec_skip_line,
            tk.ELSE: self._exec_skip_line,
            tk.LET: self._exec_let,
            tk.IDENT: self._exec_assignment,
            tk.DIM: self._exec_dim,
            tk.GOTO: self._exec_goto,
            tk.GOSUB: self._exec_gosub,
            tk.RETURN: self._exec_return,
            tk.END: self._exec_end,
            tk.IF: self._exec_if,
            tk.FOR: self._exec_for,
            tk.NEXT: self._exec_next,
            tk.INPUT: self._exec_input,
            tk.READ: self._exec_read,
            tk.SWAP: self._exec_swap,
        }

    ###########################################################################
    # run loop

    def run(self, timeout=None, cancel=None):
        """Run the program until it ends, fails or is cancelled.

        timeout: seconds of wall-clock time allowed.
        cancel: object with is_set(), e.g. threading.Event.
        """
        if timeout is not None:
            self._deadline = time.monotonic() + timeout
        self._cancel = cancel
        try:
            while not self._finished and not self._ins.at_end():
                self.run_once()
            if not self._for_loops.empty():
                raise error.BASICError(error.FOR_WITHOUT_NEXT)
        except error.BASICError as e:
            if e.line is None:
                e.line = self._line
            raise
        finally:
            self._deadline = None
            self._cancel = None
            self._streams.flush()

    def run_once(self):
        """Execute a single statement."""
        self._check_cancel()
        self._jumped = False
        self._dispatch(self._ins)

    def _dispatch(self, ins):
        """Dispatch on the current token."""
        token = ins.peek()
        if self._trace:
            logging.debug('Executing %s', token)
        self._statements.get(token.kind, self._exec_expression)(ins)

    def _check_cancel(self):
        """Raise Timeout if cancelled or past the deadline."""
        if (
                (self._cancel is not None and self._cancel.is_set())
                or (self._deadline is not None and time.monotonic() > self._deadline)
            ):
            raise error.Timeout(line=self._line)

    def _jump(self, pos):
        """Set the program counter."""
        self._ins.seek(pos)
        self._jumped = True

    @property
    def finished(self):
        """True once END has been executed or the program has run off its end."""
        return self._finished or self._ins.at_end()

    ###########################################################################
    # embedding interface

    @property
    def data(self):
        """DATA items collected at load."""
        return list(self._program.data)

    @property
    def lines(self):
        """Line index: line-number literal to token offset."""
        return dict(self._program.line_numbers)

    @property
    def functions(self):
        """User-defined function definitions."""
        return dict(self._program.functions)

    @property
    def variables(self):
        """The variable environment."""
        return self._memory

    @property
    def tokens(self):
        """The program token buffer."""
        return self._program.tokens

    @property
    def line_ending(self):
        """Line terminator written by PRINT and DUMP."""
        return self._streams.line_ending

    def write(self, s):
        """Write text to the output stream."""
        self._streams.write(s)

    def flush(self):
        """Flush the output streams."""
        self._streams.flush()

    def echo(self, stream):
        """Context manager copying output to a stream."""
        return self._streams.echo(stream)

    def set_variable(self, name, value):
        """Set a variable; Python numbers and strings are converted."""
        self._memory.set(name, values.from_value(value))

    def get_variable(self, name):
        """Retrieve a variable's value; an Error value if it is undefined."""
        return self._memory.get(name)

    def set_array_variable(self, name, index, value):
        """Set an array element; index is an integer or a (row, col) pair."""
        err = self._memory.set_array_value(name, _indices(index), values.from_value(value))
        if err is not None:
            raise err.to_exception()

    def get_array_variable(self, name, index):
        """Retrieve an array element; an Error value on failure."""
        return self._memory.get_array_value(name, _indices(index))

    def register_builtin(self, name, arity, fn):
        """Register a builtin with signature fn(interpreter, args) -> value."""
        self._builtins.register(name, arity, fn)
        self._builtins.retokenise(self._program.tokens)
        self.parser.user_functions.invalidate()

    def set_trace(self, trace):
        """Switch line number tracing on or off."""
        self._trace = bool(trace)

    def set_input(self, stream):
        """Attach the input stream."""
        self._streams.set_input(stream)

    def set_output(self, stream):
        """Attach the output stream."""
        self._streams.set_output(stream)

    def set_error(self, stream):
        """Attach the error stream."""
        self._streams.set_error(stream)

    def set_line_ending(self, line_ending):
        """Set the line terminator."""
        self._streams.line_ending = line_ending

    def evaluate(self, expression):
        """Evaluate an expression in the program's environment; returns a value."""
        tokens = self._builtins.retokenise(tokeniser.tokenise(expression, number_lines=False))
        return self.parser.parse_expression(codestream.TokenStream(tokens))

    ###########################################################################
    # statements

    def _exec_lineno(self, ins):
        """Line number: remember it for error messages, trace if on."""
        self._line = ins.read().literal
        if self._trace:
            self._streams.write('[%s]' % (self._line,))

    def _exec_nothing(self, ins):
        """NEWLINE or statement separator."""
        ins.read()

    def _exec_eof(self, ins):
        """End of the token buffer."""
        self._finished = True

    def _exec_skip_line(self, ins):
        """REM, DATA, DEF and stray ELSE: skip to the end of the line."""
        ins.skip_line()

    def _exec_end(self, ins):
        """END: stop the program."""
        ins.read()
        self._finished = True

    def _exec_let(self, ins):
        """LET: assignment with explicit keyword."""
        ins.read()
        self._exec_assignment(ins)

    def _exec_assignment(self, ins):
        """Assign to a scalar or an array element."""
        dest = self._parse_destination(ins)
        ins.require(tk.ASSIGN)
        value = values.pass_value(self.parser.parse_expression(ins))
        self._store(dest, value)

    def _exec_dim(self, ins):
        """DIM: create one or more arrays."""
        ins.read()
        while True:
            name = ins.require(tk.IDENT).literal
            ins.require(tk.LBRACKET)
            dims = []
            while True:
                dim = values.pass_number(self.parser.parse_expression(ins))
                dims.append(values.to_int(dim.value, error.DIMENSION_TOO_LARGE))
                if ins.require(tk.COMMA, tk.RBRACKET).kind == tk.RBRACKET:
                    break
            if len(dims) == 1:
                self._memory.dim(name, 0, dims[0])
            elif len(dims) == 2:
                self._memory.dim(name, dims[0], dims[1])
            else:
                raise error.BASICError(error.STX, 'arrays have one or two dimensions')
            if not ins.read_if(tk.COMMA):
                break

    def _exec_goto(self, ins):
        """GOTO: jump to a line."""
        ins.read()
        target = ins.require(tk.INT).literal
        self._jump(self._program.get_offset(target))

    def _exec_gosub(self, ins):
        """GOSUB: jump to a line, return to the statement after the target literal."""
        ins.read()
        target = ins.require(tk.INT).literal
        offset = self._program.get_offset(target)
        self._gosub_stack.push(ins.tell())
        self._jump(offset)

    def _exec_return(self, ins):
        """RETURN: jump back to the last GOSUB."""
        ins.read()
        self._jump(self._gosub_stack.pop())

    def _exec_if(self, ins):
        """IF: conditional execution of a single statement."""
        ins.read()
        condition = self._parse_condition(ins)
        ins.require(tk.THEN)
        if condition:
            self._exec_branch(ins)
        else:
            ins.skip_to((tk.ELSE,) + tk.END_LINE)
            if ins.read_if(tk.ELSE):
                self._exec_branch(ins)

    def _parse_condition(self, ins):
        """Parse comparisons combined with AND, OR, XOR; returns a Python bool."""
        result = values.pass_value(self.parser.parse_compare(ins)).is_true()
        while ins.peek_kind() in (tk.AND, tk.OR, tk.XOR):
            kind = ins.read().kind
            other = values.pass_value(self.parser.parse_compare(ins)).is_true()
            if kind == tk.AND:
                result = result and other
            elif kind == tk.OR:
                result = result or other
            else:
                result = result != other
        return result

    def _exec_branch(self, ins):
        """Execute one statement, then skip the rest of the line unless it jumped."""
        self._jumped = False
        self._dispatch(ins)
        if not self._jumped:
            ins.skip_line()

    def _exec_for(self, ins):
        """FOR: open a loop on an induction variable."""
        ins.read()
        name = ins.require(tk.IDENT).literal
        ins.require(tk.ASSIGN)
        start = values.pass_number(self.parser.parse_expression(ins)).value
        ins.require(tk.TO)
        end = values.pass_number(self.parser.parse_expression(ins)).value
        step = 1.
        if ins.read_if(tk.STEP):
            step = values.pass_number(self.parser.parse_expression(ins)).value
        error.throw_if(
            not all(math.isfinite(_v) for _v in (start, end, step)),
            error.IFC, 'FOR bounds must be finite'
        )
        self._memory.set(name, values.Number(start))
        self._for_loops.add(memory.ForLoop(name, start, end, step, ins.tell()))

    def _exec_next(self, ins):
        """NEXT: advance the induction variable and loop back unless done."""
        ins.read()
        name = ins.require(tk.IDENT).literal
        loop = self._for_loops.get(name)
        current = values.pass_number(self._memory.get(name)).value
        new = values.quantise(current + loop.step)
        self._memory.set(name, values.Number(new))
        if loop.start == loop.end:
            loop.finished = True
        elif loop.step > 0:
            loop.finished = new > loop.end
        elif loop.step < 0:
            loop.finished = new < loop.end
        if loop.finished:
            self._for_loops.remove(name)
        else:
            self._jump(loop.body)

    def _exec_input(self, ins):
        """INPUT: show a prompt and read a line into a variable."""
        ins.read()
        token = ins.require(tk.STRING, tk.IDENT)
        if token.kind == tk.STRING:
            prompt = token.literal
        else:
            prompt = values.pass_string(self._memory.get(token.literal)).value
        ins.require(tk.COMMA)
        dest = self._parse_destination(ins)
        self._streams.write(prompt)
        line = self._streams.read_line()
        if dest[0].endswith('$'):
            value = values.String(line)
        else:
            value = values.Number(values.parse_number(line) or 0)
        self._store(dest, value)

    def _exec_read(self, ins):
        """READ: assign DATA items to variables."""
        ins.read()
        data = self._program.data
        while True:
            dest = self._parse_destination(ins)
            if self._data_pos >= len(data):
                raise error.BASICError(error.OUT_OF_DATA)
            self._store(dest, data[self._data_pos])
            self._data_pos += 1
            if not ins.read_if(tk.COMMA):
                break

    def _exec_swap(self, ins):
        """SWAP: exchange two variables or array elements."""
        ins.read()
        left = self._parse_destination(ins)
        ins.require(tk.COMMA)
        right = self._parse_destination(ins)
        left_value, right_value = self._fetch(left), self._fetch(right)
        self._store(left, right_value)
        self._store(right, left_value)

    def _exec_expression(self, ins):
        """Any other statement: evaluate an expression and discard the result."""
        values.pass_value(self.parser.parse_expression(ins))

    ###########################################################################
    # variable destinations

    def _parse_destination(self, ins):
        """Parse a variable name with an optional index list."""
        name = ins.require(tk.IDENT).literal
        indices = None
        if ins.peek_kind() == tk.LINDEX:
            indices = self.parser.parse_indices(ins)
        return name, indices

    def _store(self, dest, value):
        """Assign to a destination."""
        name, indices = dest
        if indices is None:
            self._memory.set(name, value)
        else:
            values.pass_value(self._memory.set_array_value(name, indices, value))

    def _fetch(self, dest):
        """Retrieve the value at a destination."""
        name, indices = dest
        if indices is None:
            return self._memory.get_or_default(name)
        return values.pass_value(self._memory.get_array_value(name, indices))


def _indices(index):
    """Convert an embedder's index to a list."""
    if isinstance(index, (tuple, list)):
        return list(index)
    return [index]
