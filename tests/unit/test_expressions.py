"""
tokenbasic tests.test_expressions
unit tests for the expression parser

(c) 2020--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import math

from tokenbasic.basic.parser import ExpressionParser
from tokenbasic.basic.memory import Memory
from tokenbasic.basic import functions
from tokenbasic.basic.tokeniser import tokenise
from tokenbasic.basic.base.codestream import TokenStream
from tokenbasic.basic.base import error
from tokenbasic.basic.base import tokens as tk
from tokenbasic.basic.values import Number, String, Error
from tests.unit.utils import TestCase, run_tests


class ExpressionsTest(TestCase):
    """Unit tests for expression evaluation."""

    tag = u'expressions'

    def setUp(self):
        """Set up an interpreter with an empty program."""
        self.interpreter = self.load_program('')

    def evaluate(self, expression):
        """Evaluate an expression in the interpreter."""
        return self.interpreter.evaluate(expression)

    def test_precedence(self):
        """Multiplicative operators bind tighter than additive ones."""
        assert self.evaluate('3 + 4 * 5') == Number(23)
        assert self.evaluate('(3 + 4) * 5') == Number(35)
        assert self.evaluate('10 - 2 - 3') == Number(5)
        assert self.evaluate('10-2-3') == Number(5)
        assert self.evaluate('12 / 4 / 3') == Number(1)
        # power shares the level of multiplication
        assert self.evaluate('2 ^ 3 * 2') == Number(16)
        assert self.evaluate('2 * 3 ^ 2') == Number(36)

    def test_unary_minus(self):
        """Negation and negative literals."""
        assert self.evaluate('-(2 + 3)') == Number(-5)
        assert self.evaluate('-4 * 2') == Number(-8)
        assert self.evaluate('- 4') == Number(-4)
        self.interpreter.set_variable('X', 3)
        assert self.evaluate('-X') == Number(-3)

    def test_mod(self):
        """MOD in both spellings."""
        assert self.evaluate('7 MOD 3') == Number(1)
        assert self.evaluate('7 % 3') == Number(1)

    def test_bitwise(self):
        """Bitwise operators sit at the additive level."""
        assert self.evaluate('12 AND 10') == Number(8)
        assert self.evaluate('12 OR 10') == Number(14)
        assert self.evaluate('12 XOR 10') == Number(6)
        assert self.evaluate('1 + 2 AND 3') == Number(3)

    def test_strings(self):
        """String literals and concatenation."""
        assert self.evaluate('"a" + "b"') == String('ab')
        assert self.evaluate('"say \\"hi\\""') == String('say "hi"')

    def test_variables(self):
        """Variables, with defaults for unassigned names."""
        self.interpreter.set_variable('A', 2)
        self.interpreter.set_variable('B$', 'x')
        assert self.evaluate('A * A') == Number(4)
        assert self.evaluate('B$ + "y"') == String('xy')
        assert self.evaluate('Q + 1') == Number(1)
        assert self.evaluate('Q$ + "a"') == String('a')

    def test_arrays(self):
        """Array elements with full index expressions."""
        self.interpreter.variables.dim('A', 0, 3)
        self.interpreter.set_array_variable('A', 2, 5)
        assert self.evaluate('A[2] * 2') == Number(10)
        assert self.evaluate('A[1 + 1]') == Number(5)
        self.interpreter.variables.dim('M', 2, 2)
        self.interpreter.set_array_variable('M', (1, 2), 'z')
        assert self.evaluate('M[1, 2]') == String('z')
        assert self.evaluate('A[4]').err == error.SUBSCRIPT_OUT_OF_RANGE
        with self.assertRaises(error.BASICError):
            self.evaluate('A["x"]')

    def test_errors_pass_through(self):
        """An Error value passes through the rest of the expression."""
        result = self.evaluate('1 / 0 + 1')
        assert isinstance(result, Error)
        assert result.err == error.DIVISION_BY_ZERO
        result = self.evaluate('1 + "a" * 2')
        assert result.err == error.TYPE_MISMATCH
        assert self.evaluate('-(1 / 0)').err == error.DIVISION_BY_ZERO

    def test_error_unchanged_through_chain(self):
        """An Error operand keeps its message and kind through later operators."""
        first = self.evaluate('1 / 0')
        result = self.evaluate('(1 / 0) * 2 + 3')
        assert result.err == first.err == error.DIVISION_BY_ZERO
        assert result.message == first.message == 'division by zero'
        result = self.evaluate('7 MOD 0 - 1 / 0')
        assert result.err == error.MOD_BY_ZERO
        assert self.evaluate('1 / 0 < 2').err == error.DIVISION_BY_ZERO

    def test_error_aborts_expression(self):
        """Operands after an Error are parsed but their calls are not made."""
        result = self.evaluate('1 / 0 + PRINT("x")')
        assert result.err == error.DIVISION_BY_ZERO
        result = self.evaluate('"a" * 2 * PRINT("y") + PRINT("z")')
        assert result.err == error.TYPE_MISMATCH
        assert self.output.getvalue() == ''
        # the skipped operands must still be well-formed
        with self.assertRaises(error.BASICError) as cm:
            self.evaluate('1 / 0 + (2')
        assert cm.exception.err == error.STX

    def test_error_aborts_user_function(self):
        """User function calls after an Error are not made."""
        self.interpreter = self.load_program(
            '10 DEF FN F(X) = PRINT("called")\n20 DEF FN G(A, B) = A + B\n'
        )
        self.interpreter.run()
        assert self.evaluate('1 / 0 - FN F(1)').err == error.DIVISION_BY_ZERO
        # arguments after an Error argument are not evaluated either
        assert self.evaluate('FN G(1 / 0, FN F(1))').err == error.DIVISION_BY_ZERO
        assert self.evaluate('LEFT$(1 / 0, FN F(2))').err == error.DIVISION_BY_ZERO
        assert self.output.getvalue() == ''
        assert self.evaluate('FN F(1)') == Number(1)
        assert self.output.getvalue() == 'called\n'

    def test_non_finite_index(self):
        """An infinite index is out of range rather than a crash."""
        self.interpreter.variables.dim('A', 0, 2)
        self.interpreter.set_variable('X', 10. ** 300)
        with self.assertRaises(error.BASICError) as cm:
            self.evaluate('A[X * X]')
        assert cm.exception.err == error.SUBSCRIPT_OUT_OF_RANGE

    def test_syntax_errors(self):
        """Malformed expressions raise syntax errors."""
        for expression in ('(1 + 2', '1 +', ')', '*', 'THEN'):
            with self.assertRaises(error.BASICError) as cm:
                self.evaluate(expression)
            assert cm.exception.err == error.STX, expression

    def test_builtins(self):
        """Builtin calls with and without brackets."""
        assert self.evaluate('LEN("abc") + 1') == Number(4)
        assert self.evaluate('LEN "abc"') == Number(3)
        assert self.evaluate('LEFT$("hello", 2)') == String('he')
        assert self.evaluate('ABS(-3)') == Number(3)
        assert self.evaluate('PI') == Number(math.pi)
        assert self.evaluate('PI() * 2') == Number(2 * math.pi)
        # builtin names are recognised in either case
        assert self.evaluate('len("ab")') == Number(2)

    def test_print_in_expression(self):
        """PRINT returns the number of arguments."""
        assert self.evaluate('PRINT "a", 1') == Number(2)
        assert self.output.getvalue() == 'a1\n'


class ComparisonTest(TestCase):
    """Unit tests for comparisons in conditions."""

    tag = u'comparison'

    def setUp(self):
        """Set up a bare parser."""
        self.memory = Memory()
        self.parser = ExpressionParser(
            self.memory, functions.register_standard(functions.Builtins())
        )

    def compare(self, expression):
        """Parse a comparison."""
        tokens = tokenise(expression, number_lines=False)
        return self.parser.parse_compare(TokenStream(tokens))

    def test_comparisons(self):
        """Comparisons of numbers and strings."""
        assert self.compare('1 < 2') == Number(1)
        assert self.compare('2 <= 1') == Number(0)
        assert self.compare('2 >= 2') == Number(1)
        assert self.compare('3 > 1 + 1') == Number(1)
        assert self.compare('1 <> 1') == Number(0)
        assert self.compare('"a" = "a"') == Number(1)
        assert self.compare('"a" < "b"') == Number(1)
        assert self.compare('1 = "a"').err == error.TYPE_MISMATCH

    def test_truth(self):
        """Without a comparator, the truth of the value is tested."""
        assert self.compare('5') == Number(1)
        assert self.compare('0') == Number(0)
        assert self.compare('A$') == Number(0)
        self.memory.set('A$', String('x'))
        assert self.compare('A$') == Number(1)
        assert isinstance(self.compare('1 / 0'), Error)

    def test_error_skips_right_side(self):
        """An Error on the left returns before the right side is evaluated."""
        ins = TokenStream(tokenise('1 / 0 = PRINT("x")', number_lines=False))
        result = self.parser.parse_compare(ins)
        assert result.err == error.DIVISION_BY_ZERO
        assert ins.peek_kind() in tk.END_LINE

    def test_stops_at_bitwise(self):
        """In conditions, AND and OR are left to the caller."""
        ins = TokenStream(tokenise('1 < 2 AND 3', number_lines=False))
        assert self.parser.parse_compare(ins) == Number(1)
        assert ins.peek_kind() == tk.AND

    def test_indices(self):
        """Index lists of one or two expressions."""
        ins = TokenStream(tokenise('[1, 2 * 2]', number_lines=False))
        assert self.parser.parse_indices(ins) == [1, 4]
        ins = TokenStream(tokenise('[2.7]', number_lines=False))
        assert self.parser.parse_indices(ins) == [2]
        with self.assertRaises(error.BASICError):
            self.parser.parse_indices(TokenStream(tokenise('[1', number_lines=False)))


if __name__ == '__main__':
    run_tests()
