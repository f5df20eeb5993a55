# Recursion without a recursive binding. A generator's body never
# mentions the function it defines; it gets "itself" by calling a
# parameter. Only the combinator is named: a Thunk recurses through Y.
# Under applicative order (Python's order), that parameter must be a
# zero-argument Thunk, or building the fixed point diverges before the
# generator ever runs.

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

# Types

Fn = Callable[[T], T]  # T -> T, the recursive function itself
ThunkFn = Callable[[], Fn[T]]  # () -> (T -> T)
Generator = Callable[[ThunkFn[T]], Fn[T]]  # (() -> (T -> T)) -> (T -> T)

# Direct-style domain code, as in the classic presentation.
Domain = Callable[[Fn[T]], Fn[T]]  # (T -> T) -> (T -> T)
SqrtFn = Callable[["SqrtFn"], Fn[T]]  # *a -> (T -> T)


class ContractViolation(TypeError):
    """A generator used its Thunk as if it were the fixed point, or
    produced something that cannot be called."""
    pass


class Thunk(Generic[T]):
    """Call me to get the recursive function. I am not the recursive
    function. Every call re-derives the fixed point from the same
    generator; nothing is cached."""

    __slots__ = ["generator"]

    def __init__(self, generator: "Generator[T]"):
        self.generator = generator

    def __call__(self, *args, **kwargs) -> Fn[T]:
        if args or kwargs:
            raise ContractViolation(
                f'Thunk called with arguments {args} {kwargs}; call it '
                f'with none to get the fixed point, then apply that, '
                f'as in self()(n).')
        result_thunk: Fn[T] = Y(self.generator)
        return result_thunk

    def __repr__(self):
        """for the debugger"""
        return f'Thunk({getattr(self.generator, "__name__", self.generator)})'


def Y(generator: Generator[T]) -> Fn[T]:
    """I am the fixed-point combinator for eager evaluation. Give me a
    generator, which takes a Thunk and returns a T -> T, and I'll give
    you the recursive T -> T.
    ex: Y(lambda fact:
          lambda n:
            1 if n < 1 else n * fact()(n - 1))(5)
    gives: 120
    The Thunk recurses through the name Y, not through self-
    application; evaluating Y(generator) never recurses by itself."""
    t: Thunk[T] = Thunk(generator)
    result_y = generator(t)
    if not callable(result_y):
        raise ContractViolation(
            f'Generator {generator} returned {result_y!r}, '
            f'which is not a function.')
    return result_y


def self_apply(g: SqrtFn) -> Fn[T]:
    """Square the square root of a T -> T by self-applying it."""
    result: Fn[T] = g(g)
    return result


def yc(d: Domain[T]) -> Fn[T]:
    """The self-applicative Y of one parameter, for direct-style domain
    code d : (T -> T) -> (T -> T). The delay is an eta-expansion of
    sf(sf) rather than a Thunk, so d sees a plain T -> T."""

    def lsf(sf: SqrtFn) -> Fn[T]:
        """My type is SqrtFn -> Fn, which is the same as SqrtFn!"""

        def delayed(m: T) -> T:
            """sf(sf) only happens when I'm applied."""
            result_delay: T = (sf(sf))(m)
            return result_delay

        result_lsf: Fn[T] = d(delayed)
        return result_lsf

    result_yc: Fn[T] = self_apply(lsf)
    return result_yc


def as_generator(d: Domain[T]) -> Generator[T]:
    """Adapt direct-style domain code to the Thunk-taking contract, so
    one definition can drive both Y and yc."""

    def generator(self: ThunkFn[T]) -> Fn[T]:
        return d(lambda n: self()(n))

    generator.__name__ = f'as_generator({getattr(d, "__name__", "d")})'
    return generator
