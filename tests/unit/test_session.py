"""
tokenbasic tests.test_session
unit tests for session API

(c) 2020--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io

from tokenbasic import Session, Interpreter
from tokenbasic.basic.base import error
from tokenbasic.basic.values import Number
from tests.unit.utils import TestCase, run_tests


def istypeval(val, refval):
    """Check agreement in both type and value."""
    return isinstance(val, type(refval)) and val == refval


class SessionTest(TestCase):
    """Unit tests for Session."""

    tag = u'session'

    def test_session(self):
        """Test basic Session API."""
        with Session(output=io.StringIO()) as s:
            s.execute('a=1')
            assert istypeval(s.evaluate('a+2'), 3.)
            assert s.evaluate('"abc"+"d"') == 'abcd'
            assert s.evaluate('LEFT$("abc", a+1)') == 'ab'
            # string variable
            s.set_variable('B$', 'abcd')
            assert s.get_variable('B$') == 'abcd'
            assert istypeval(s.evaluate('LEN(B$)'), 4.)
            # unset variables
            assert s.evaluate('C') == 0.
            assert s.evaluate('C$') == ''
            assert s.get_variable('D') is None

    def test_start(self):
        """The session starts with an empty program on first use."""
        s = Session(output=io.StringIO())
        assert s.start()
        assert not s.start()
        assert isinstance(s.interpreter, Interpreter)
        assert s.interpreter.finished

    def test_execute_output(self):
        """Execute returns what the program printed."""
        output = io.StringIO()
        with Session(output=output) as s:
            assert s.execute('10 PRINT "hi"\n20 PRINT 1 + 1\n') == 'hi\n2\n'
            assert s.execute('PRINT "again"') == 'again\n'
        # the output stream receives everything
        assert output.getvalue() == 'hi\n2\nagain\n'

    def test_variables_persist(self):
        """Variables carry over from one program to the next."""
        with Session(output=io.StringIO()) as s:
            s.execute('10 A = 1\n')
            s.execute('10 B = A + 1\n')
            assert s.get_variable('B') == 2.

    def test_arrays(self):
        """Array variables through the session."""
        with Session(output=io.StringIO()) as s:
            s.execute('DIM A(2), M(1, 1)')
            s.set_array_variable('A', 1, 5)
            s.set_array_variable('M', (1, 0), 'x')
            assert s.get_array_variable('A', 1) == 5.
            assert s.get_array_variable('M', (1, 0)) == 'x'
            assert s.get_variable('A') == [0., 5., 0.]
            assert s.get_variable('M') == [[0., 0.], ['x', 0.]]
            assert s.evaluate('A[1] * 2') == 10.
            with self.assertRaises(error.BASICError):
                s.get_array_variable('A', 3)

    def test_evaluate_error(self):
        """Error values from evaluation raise."""
        with Session(output=io.StringIO()) as s:
            with self.assertRaises(error.BASICError) as cm:
                s.evaluate('1 / 0')
            assert cm.exception.err == error.DIVISION_BY_ZERO

    def test_run_error(self):
        """Runtime errors raise from run and execute."""
        with Session('10 GOTO 30\n', output=io.StringIO()) as s:
            with self.assertRaises(error.BASICError) as cm:
                s.run()
            assert str(cm.exception) == 'line 10 : line 30 does not exist'
            with self.assertRaises(error.BASICError):
                s.execute('10 RETURN\n')

    def test_register_builtin(self):
        """Registered builtins stay available for later programs."""
        with Session(output=io.StringIO()) as s:
            s.register_builtin('TWICE', 1, lambda env, args: Number(args[0].value * 2))
            s.execute('10 A = TWICE(2)\n')
            s.load('10 B = twice(A)\n')
            s.run()
            assert s.get_variable('B') == 8.
            assert s.evaluate('TWICE(5)') == 10.

    def test_trace(self):
        """Tracing applies to programs loaded later."""
        with Session(output=io.StringIO()) as s:
            s.set_trace(True)
            assert s.execute('10 A = 1\n20 END\n') == '[10][20]'
            s.set_trace(False)
            assert s.execute('10 A = 1\n') == ''

    def test_line_ending(self):
        """Keyword arguments go to the interpreter."""
        with Session(output=io.StringIO(), line_ending='\r\n') as s:
            assert s.execute('PRINT 1') == '1\r\n'

    def test_input(self):
        """Input through the session."""
        with Session(input=io.StringIO('42\n'), output=io.StringIO()) as s:
            assert s.execute('INPUT "n? ", N') == 'n? '
            assert s.get_variable('N') == 42.

    def test_timeout(self):
        """Endless programs stop at the timeout."""
        with Session('10 GOTO 10\n', output=io.StringIO()) as s:
            with self.assertRaises(error.Timeout):
                s.run(timeout=0.05)
            with self.assertRaises(error.Timeout):
                s.execute('10 GOTO 10\n', timeout=0.05)


if __name__ == '__main__':
    run_tests()
