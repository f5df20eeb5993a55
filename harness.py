"""Assertion harness for fixed points: value equality with pass/fail
bookkeeping scoped to a run, Thunk-call counting, and a recursion
ceiling for provoking stack exhaustion on purpose.

Nothing here is used by the combinators themselves."""

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy

from fixpoint import Fn, Generator, ThunkFn
from schemulator import ECHO


class AssertionFailure(AssertionError):
    def __init__(self, actual: Any, expected: Any, label: str = None):
        self.actual = actual
        self.expected = expected
        self.label = label
        super().__init__(
            f'{label + ": " if label else ""}'
            f'expected {expected!r}, got {actual!r}')


def _equal(actual: Any, expected: Any) -> bool:
    if isinstance(actual, numpy.ndarray) or \
            isinstance(expected, numpy.ndarray):
        return bool(numpy.array_equal(numpy.asarray(actual),
                                      numpy.asarray(expected)))
    return actual == expected


def assert_eq(actual: Any, expected: Any, label: str = None) -> Any:
    """Pass/fail oracle. Returns actual so it can sit inside an
    expression, like ECHO."""
    if not _equal(actual, expected):
        raise AssertionFailure(actual, expected, label)
    return actual


@dataclass
class CheckRun:
    """A scoped run of assertions. Not a singleton: make one per run,
    as in

        with CheckRun('factorial') as run:
            run.assert_eq(Y(factorial_generator)(5), 120)

    A strict run re-raises every AssertionFailure; a lenient run only
    records it, and 'ok' tells the caller how it went."""
    name: str = 'checks'
    strict: bool = True
    trace: bool = False
    results: List[Tuple[str, bool]] = field(default_factory=list)

    def assert_eq(self, actual: Any, expected: Any, label: str = None) -> Any:
        label = label or f'{self.name}[{len(self.results)}]'
        try:
            assert_eq(actual, expected, label)
        except AssertionFailure as e:
            self.results.append((label, False))
            if self.trace:
                ECHO('AssertionFailure', str(e))
            if self.strict:
                raise
            return actual
        self.results.append((label, True))
        return actual

    @property
    def passed(self) -> int:
        return sum(1 for _, ok in self.results if ok)

    @property
    def failed(self) -> int:
        return sum(1 for _, ok in self.results if not ok)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def summary(self) -> Dict[str, Any]:
        return {'run': self.name,
                'passed': self.passed,
                'failed': self.failed,
                'failures': [label for label, ok in self.results if not ok]}

    def __enter__(self) -> "CheckRun":
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.trace:
            ECHO('CheckRun', self.summary())
        return False


@dataclass
class ThunkTally:
    """How much unfolding a fixed point did."""
    derivations: int = 0  # calls of the generator, one per fixed point built
    thunk_calls: int = 0  # calls of self() from inside the generator


def counting(generator: Generator, tally: ThunkTally) -> Generator:
    """Wrap a generator so the tally sees every derivation and every
    Thunk call. Results and errors are unchanged: every call goes on
    to the real Thunk. Pass the wrapped generator to Y;
    Y hands every re-derivation the wrapped one again."""

    def counted(self: ThunkFn) -> Fn:
        tally.derivations += 1

        def thunk(*args, **kwargs) -> Fn:
            tally.thunk_calls += 1
            return self(*args, **kwargs)  # the real Thunk rejects arguments

        return generator(thunk)

    counted.__name__ = f'counting({getattr(generator, "__name__", "g")})'
    return counted


def stack_depth() -> int:
    """Python frames below the caller."""
    depth = 0
    frame = sys._getframe(1)
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


@contextmanager
def recursion_limit(limit: int):
    """Impose a recursion-depth ceiling for the duration; restore the
    old one after, even on RecursionError."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(limit)
    try:
        yield limit
    finally:
        sys.setrecursionlimit(old)


def recursion_headroom(frames: int):
    """A ceiling 'frames' above wherever the caller stands, so the
    same test is bounded the same way under any runner."""
    return recursion_limit(stack_depth() + frames)


def tabulate(fixed_point: Fn[int], ns: Sequence[int]) -> numpy.ndarray:
    """fixed_point over every n. Plain ints and object dtype keep big
    results exact; numpy.int64 arithmetic would wrap."""
    return numpy.vectorize(lambda n: fixed_point(int(n)),
                           otypes=[object])(numpy.asarray(ns))
