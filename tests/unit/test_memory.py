"""
tokenbasic tests.test_memory
unit tests for variables, GOSUB stack and FOR loops

(c) 2020--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from tokenbasic.basic.memory import Memory, Stack, ForLoop, ForLoops
from tokenbasic.basic.values import Number, String, Array, Error
from tokenbasic.basic.base import error
from tests.unit.utils import TestCase, run_tests


class MemoryTest(TestCase):
    """Unit tests for the variable environment."""

    tag = u'memory'

    def test_set_get(self):
        """Variables hold the last value assigned."""
        memory = Memory()
        memory.set('A', Number(1))
        memory.set('A', Number(2))
        memory.set('B$', String('x'))
        assert memory.get('A') == Number(2)
        assert memory.get('B$') == String('x')
        assert 'A' in memory
        assert 'C' not in memory
        assert sorted(memory) == ['A', 'B$']

    def test_undefined(self):
        """Reading an undefined variable gives an Error."""
        memory = Memory()
        value = memory.get('Q')
        assert isinstance(value, Error)
        assert value.message == "undefined 'Q'"
        assert value.err == error.UNDEFINED_VARIABLE

    def test_names_case_sensitive(self):
        """Variable names are case-sensitive."""
        memory = Memory()
        memory.set('a', Number(1))
        assert 'A' not in memory

    def test_get_or_default(self):
        """Unassigned variables default to zero or the empty string."""
        memory = Memory()
        assert memory.get_or_default('X') == Number(0)
        assert memory.get_or_default('X$') == String('')
        memory.set('X', Number(3))
        assert memory.get_or_default('X') == Number(3)
        # defaults are not stored
        assert 'X$' not in memory

    def test_clear(self):
        """Clearing removes all variables."""
        memory = Memory()
        memory.set('A', Number(1))
        memory.clear()
        assert 'A' not in memory

    def test_arrays(self):
        """Array elements by one or two indices."""
        memory = Memory()
        array = memory.dim('A', 0, 5)
        assert isinstance(array, Array)
        assert memory.get('A') is array
        assert memory.set_array_value('A', [5], Number(2)) is None
        assert memory.get_array_value('A', [5]) == Number(2)
        assert memory.get_array_value('A', [0]) == Number(0)
        memory.dim('M', 2, 3)
        memory.set_array_value('M', [2, 3], String('corner'))
        assert memory.get_array_value('M', [2, 3]) == String('corner')

    def test_array_errors(self):
        """Array access errors."""
        memory = Memory()
        memory.dim('A', 0, 2)
        memory.set('S', Number(1))
        assert memory.get_array_value('A', [3]).err == error.SUBSCRIPT_OUT_OF_RANGE
        assert memory.set_array_value('A', [-1], Number(1)).err == error.SUBSCRIPT_OUT_OF_RANGE
        assert memory.get_array_value('B', [1]).err == error.UNDEFINED_VARIABLE
        assert memory.get_array_value('S', [1]).err == error.TYPE_MISMATCH
        with self.assertRaises(error.BASICError):
            memory.get_array_value('A', [1, 1, 1])

    def test_redim(self):
        """DIM replaces any previous value of the same name."""
        memory = Memory()
        memory.set('A', Number(1))
        memory.dim('A', 0, 1)
        assert isinstance(memory.get('A'), Array)


class StackTest(TestCase):
    """Unit tests for the GOSUB stack."""

    tag = u'stack'

    def test_push_pop(self):
        """Last in, first out."""
        stack = Stack()
        assert stack.empty()
        stack.push(3)
        stack.push(7)
        assert len(stack) == 2
        assert stack.pop() == 7
        assert stack.pop() == 3
        assert stack.empty()

    def test_pop_empty(self):
        """Popping an empty stack is RETURN without GOSUB."""
        with self.assertRaises(error.BASICError) as cm:
            Stack().pop()
        assert cm.exception.err == error.RETURN_WITHOUT_GOSUB


class ForLoopsTest(TestCase):
    """Unit tests for the FOR loop table."""

    tag = u'for'

    def test_add_get_remove(self):
        """Loops are keyed by variable name."""
        loops = ForLoops()
        assert loops.empty()
        loop = ForLoop('I', 1., 10., 1., 5)
        loops.add(loop)
        assert 'I' in loops
        assert loops.get('I') is loop
        assert not loop.finished
        loops.remove('I')
        assert loops.empty()
        # removing twice is harmless
        loops.remove('I')

    def test_replace(self):
        """A new loop on the same variable replaces the old one."""
        loops = ForLoops()
        loops.add(ForLoop('I', 1., 10., 1., 5))
        loops.add(ForLoop('I', 2., 3., 1., 9))
        assert len(loops) == 1
        assert loops.get('I').body == 9

    def test_next_without_for(self):
        """Unknown loop variable is NEXT without FOR."""
        with self.assertRaises(error.BASICError) as cm:
            ForLoops().get('J')
        assert cm.exception.err == error.NEXT_WITHOUT_FOR


if __name__ == '__main__':
    run_tests()
