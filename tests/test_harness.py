import math
import sys

import numpy
import pytest

from fixpoint import ContractViolation, Y
from generators import factorial_generator, fibonacci_generator
from harness import (
    AssertionFailure,
    CheckRun,
    ThunkTally,
    assert_eq,
    counting,
    recursion_headroom,
    recursion_limit,
    stack_depth,
    tabulate,
)


class TestAssertEq:

    def test_pass_returns_actual(self):
        assert assert_eq(Y(factorial_generator)(5), 120) == 120

    def test_mismatch(self):
        with pytest.raises(AssertionFailure) as e:
            assert_eq(Y(factorial_generator)(5), 121, '5!')
        assert e.value.actual == 120
        assert e.value.expected == 121
        assert '5!' in str(e.value)

    def test_is_an_assertion_error(self):
        with pytest.raises(AssertionError):
            assert_eq(1, 2)

    def test_arrays(self):
        assert_eq(numpy.array([1, 2, 6]), [1, 2, 6])
        with pytest.raises(AssertionFailure):
            assert_eq(numpy.array([1, 2, 6]), numpy.array([1, 2, 7]))


class TestCheckRun:

    def test_strict_run_raises(self):
        with pytest.raises(AssertionFailure):
            with CheckRun('strict') as run:
                run.assert_eq(1, 1)
                run.assert_eq(1, 2, 'one is two')
        assert run.passed == 1
        assert run.failed == 1

    def test_lenient_run_records(self):
        with CheckRun('lenient', strict=False) as run:
            run.assert_eq(Y(factorial_generator)(4), 24)
            run.assert_eq(Y(factorial_generator)(4), 25, 'wrong')
            run.assert_eq(Y(fibonacci_generator)(10), 55)
        assert not run.ok
        assert run.summary() == {'run': 'lenient',
                                 'passed': 2,
                                 'failed': 1,
                                 'failures': ['wrong']}

    def test_runs_are_independent(self):
        with CheckRun('a', strict=False) as a:
            a.assert_eq(1, 2)
        with CheckRun('b') as b:
            b.assert_eq(2, 2)
        assert not a.ok
        assert b.ok
        assert b.results == [('b[0]', True)]

    def test_trace(self, capsys):
        with CheckRun('traced', trace=True) as run:
            run.assert_eq(3, 3)
        assert 'traced' in capsys.readouterr().out


class TestCounting:

    def test_results_unchanged(self):
        tally = ThunkTally()
        assert Y(counting(fibonacci_generator, tally))(10) == 55

    def test_fibonacci_unfoldings(self):
        tally = ThunkTally()
        Y(counting(fibonacci_generator, tally))(4)
        # calls at i = 4, 3, 2, 2 each ask self() twice
        assert tally.thunk_calls == 8
        assert tally.derivations == 9

    def test_misused_thunk_still_a_contract_violation(self):
        tally = ThunkTally()
        bad = Y(counting(lambda self:
                         lambda i: 1 if i < 1 else i * self(i - 1),
                         tally))
        with pytest.raises(ContractViolation):
            bad(3)
        assert tally.thunk_calls == 1

    def test_keyword_misuse_reaches_the_thunk(self):
        bad = Y(counting(lambda self:
                         lambda i: 1 if i < 1 else i * self(n=i - 1),
                         ThunkTally()))
        with pytest.raises(ContractViolation):
            bad(2)

    def test_name(self):
        assert 'factorial_generator' in \
               counting(factorial_generator, ThunkTally()).__name__


class TestRecursionLimit:

    def test_restores(self):
        old = sys.getrecursionlimit()
        with recursion_limit(old + 100) as limit:
            assert sys.getrecursionlimit() == limit
        assert sys.getrecursionlimit() == old

    def test_restores_after_exhaustion(self):
        old = sys.getrecursionlimit()
        with pytest.raises(RecursionError):
            with recursion_headroom(100):
                Y(lambda self: lambda i: self()(i))(0)
        assert sys.getrecursionlimit() == old

    def test_stack_depth(self):
        def deeper():
            return stack_depth()

        assert deeper() == stack_depth() + 1


class TestTabulate:

    def test_factorials(self):
        r = tabulate(Y(factorial_generator), range(8))
        assert numpy.array_equal(r, [1, 1, 2, 6, 24, 120, 720, 5040])

    def test_big_ints_stay_exact(self):
        r = tabulate(Y(factorial_generator), numpy.arange(25, 31))
        assert r.dtype == object
        assert list(r) == [math.factorial(n) for n in range(25, 31)]

    def test_shape(self):
        r = tabulate(Y(fibonacci_generator), numpy.array([[0, 1], [9, 10]]))
        assert numpy.array_equal(r, numpy.array([[0, 1], [34, 55]]))
