# Recursion in a calculus with first-class functions but no way for a
# body to name itself. Run me: python main.py

import sys
from typing import Any, Dict

from fixpoint import Y, yc
from generators import (
    factorial,
    factorial_domain_code,
    factorial_generator,
    fibonacci,
    fibonacci_generator,
)
from harness import (
    AssertionFailure,
    CheckRun,
    ThunkTally,
    counting,
    recursion_headroom,
)
from schemulator import ΓΠ, Λ
from settings import Settings, get_settings


def untyped_factorial(n: int) -> int:
    """No definitions at all: the thunked Y and the factorial generator
    as one pure expression."""
    return ((lambda d:
             (lambda g: g(g))
             (lambda sf:
              d(lambda: sf(sf))))
            (lambda self:
             (lambda i:
              1 if i < 1 else i * self()(i - 1))))(n)


def schemulated_factorial(n: int) -> int:
    """The same generator as a procedure of the closure calculus, fed
    to the global Υ there."""
    generator = Λ(lambda πs:
                  Λ(lambda π:
                    1 if π.i < 1 else π.i * π.self()(π.i - 1),
                    ['i'], πs),
                  ['self'])
    return ΓΠ.Υ(generator)(n)


def run(settings: Settings = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    n = settings.demo_n
    results = {
        f'Y {n}!': Y(factorial_generator)(n),
        'Y fib(20)': Y(fibonacci_generator)(20),
        f'yc {n}!': yc(factorial_domain_code)(n),
        f'Υ {n}!': schemulated_factorial(n),
        f'untyped {n}!': untyped_factorial(n),
    }
    with CheckRun('demo', trace=settings.trace) as checks:
        for key in (f'Y {n}!', f'yc {n}!', f'Υ {n}!', f'untyped {n}!'):
            checks.assert_eq(results[key], factorial(n), key)
        checks.assert_eq(results['Y fib(20)'], fibonacci(20), 'Y fib(20)')
    results['no base case'] = blown_stack(settings.exhaustion_headroom)
    return results


def blown_stack(headroom: int) -> str:
    """A generator that never reaches a base case, unfolded under a
    ceiling. Reports how many unfoldings the stack allowed."""
    tally = ThunkTally()
    forever = Y(counting(lambda self: lambda i: i * self()(i - 1), tally))
    try:
        with recursion_headroom(headroom):
            forever(1)
    except RecursionError:
        return f'RecursionError after {tally.derivations} derivations'
    raise AssertionFailure(None, 'RecursionError', 'no base case')


if __name__ == '__main__':
    settings = get_settings()
    print({"max recursion limit": sys.getrecursionlimit()})
    print({f"setting recursion limit to {settings.recursion_limit}":
           sys.setrecursionlimit(settings.recursion_limit)})
    for key, value in run(settings).items():
        print({key: value})
