"""Example generators. Each thunk-style generator receives a Thunk,
'self', and must call it, self(), to get the recursive function.
The direct-style domain codes receive the recursive function itself,
for yc. The named references are ordinary Python recursion, for
checking the fixed-point law."""

from fixpoint import Fn, ThunkFn


def factorial_generator(self: ThunkFn[int]) -> Fn[int]:
    """Apply a Thunk and return an int -> int."""

    def fn(i: int) -> int:
        """My type is int -> int."""
        return 1 if i < 1 else i * self()(i - 1)

    return fn


def fibonacci_generator(self: ThunkFn[int]) -> Fn[int]:
    def fn(i: int) -> int:
        return i if i < 2 else self()(i - 1) + self()(i - 2)

    return fn


def factorial_domain_code(factorial: Fn[int]) -> Fn[int]:
    """Apply an int -> int factorial and return an int -> int."""

    def fn(n: int) -> int:
        return 1 if n < 1 else n * factorial(n - 1)

    return fn


def fibonacci_domain_code(fib: Fn[int]) -> Fn[int]:
    def fn(n: int) -> int:
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    return fn


# Named recursion, the thing the calculus doesn't have.

def factorial(n: int) -> int:
    return 1 if n < 1 else n * factorial(n - 1)


def fibonacci(n: int) -> int:
    return n if n < 2 else fibonacci(n - 1) + fibonacci(n - 2)
