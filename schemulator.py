from pprint import pprint, pformat
from typing import Any, Dict, List, Union

import numpy

from fixpoint import ContractViolation


def ECHO(key: str, x: Any) -> Any:
    """In any Lisp, this would be a macro!"""
    print()
    pprint({key: x})
    return x


from dataclasses import dataclass, field


@dataclass(eq=False)  # hashable by identity, so it can be a field default
class Environment:
    """An Environment has a frame ϕ and a pointer π to an enclosing
    Environment. Bindings in the frame are attributes on the object
    ϕ, an empty function chosen as a carrier for attributes. Get the
    value of binding ξ as 'E.ξ' or 'E["ξ"]'; lookup walks up the π
    chain. Set it via 'setattr(E.ϕ, ξ, v)', or DEFINE."""
    ϕ: "() -> None"  # "frame," a nice place to hang attributes
    π: "Environment | None"  # via Greek πηρι, short name for 'enclosing'

    def _is_global(self):
        return self.π is None

    def _get_binding_val(self, var: str) -> Any:
        """Walk the sequence of Environments upward."""
        e = self
        while e is not None:
            try:
                return getattr(e.ϕ, var)
            except AttributeError as _:
                e = e.π
        raise NameError(f'Environment: Name {var} is unbound.')

    def __getattr__(self, key: str) -> Any:
        """recursive lookup by dot notation"""
        if key.startswith('__'):  # copy, pickle, and friends
            raise AttributeError(key)
        return self._get_binding_val(key)

    def __getitem__(self, key: str) -> Any:
        """recursive lookup by bracket notation"""
        return self._get_binding_val(key)

    def __repr__(self):
        """for the debugger"""
        is_global = self._is_global()
        return ("(" + hex(id(self.ϕ))[-4:] +
                (",ΓΠ" if is_global else "") + ") " +
                pformat(str(list(vars(self.ϕ).keys()))) +
                ("" if is_global else ">" + repr(self.π)))


ΓΠ = Environment(lambda: None, None)

Parameters = List[str]  # positional, ordered arguments only


@dataclass
class Procedure:
    """A body, a list of parameters, and the environment the body
    closes over. The body is a Python function of one environment, in
    which the parameters are bound. It has no name for itself."""
    code: Dict
    π: Environment = ΓΠ  # bound in global environment by default

    def __init__(self, code, π: Environment = ΓΠ):
        if len(set(code["parameters"])) != len(code["parameters"]):
            raise ValueError(
                f'Procedure: parameters {code["parameters"]}'
                ' must not contain duplicate symbols.')
        self.code = code
        self.π = π

    def __call__(self, *args):
        return APPLY(self, list(args), self.π)

    def __repr__(self):
        """for the debugger"""
        return pformat({
            'Λ': hex(id(self.code['body']))[-4:],
            'parms': str(self.code['parameters']),
            'env': self.π if self.π.π else 'ΓΠ'
        })


def Λ(body: "(π: Environment) -> Any",
      parameters: Parameters = None,  # default empty
      π: Environment = ΓΠ  # default global
      ) -> Procedure:
    ρ = Procedure(
        code={"body": body,
              "parameters": parameters or []},
        π=π)
    return ρ


@dataclass
class Var:
    sym: str


@dataclass
class Application:
    head: Union[str, Procedure, "Application"]
    args: List[Any] = field(default_factory=list)  # args, not params!
    π: Environment = ΓΠ

    def __call__(self):
        return EVAL_APPLICATION(self, self.π)

    def __repr__(self):
        """for the debugger"""
        return str({
            'Ξ': hex(id(self))[-4:],
            'head': self.head,
            'args': self.args,
            'π': self.π if self.π.π else "ΓΠ"
        })


Ξ = Application


def EVAL(
        expr: Any,
        π: Environment = ΓΠ,
        tag: str = None
) -> Any:
    """Python does a lot of this for us. 'Tag' is included to aid
    debugging."""
    if tag == 'debug':
        pprint({"EVAL": "",
                "expr": expr,
                "type": type(expr),
                "tag": tag,
                "env": π})
    if isinstance(expr, dict):
        ρ = {k: EVAL(v, π) for k, v in expr.items()}
    elif isinstance(expr, tuple):
        ρ = tuple(EVAL(v, π) for v in expr)
    elif isinstance(expr, list):
        ρ = [EVAL(v, π) for v in expr]
    elif isinstance(expr, numpy.ndarray):
        ρ = numpy.vectorize(lambda v: EVAL(v, π), otypes=[object])(expr)
    elif isinstance(expr, Var):
        ρ = π[expr.sym]  # recursive lookup in Environment
    elif isinstance(expr, Application):
        ρ = EVAL_APPLICATION(expr, π)
    else:  # numbers, strings, Procedures
        ρ = expr
    return ρ  # hang a breakpoint here


def EVAL_APPLICATION(
        expr: Application,
        π: Environment = ΓΠ
) -> Any:
    # 1/3. Evaluate the head slot to a procedure ...
    proc = π[expr.head] if isinstance(expr.head, str) \
        else EVAL(expr.head, π)
    # 2/3. ... evaluate all args ...
    eargs = [EVAL(arg, π) for arg in expr.args]
    # 3/3. ... and apply.
    ρ = APPLY(proc, eargs, π)
    return ρ


def APPLY(
        proc: Procedure,
        args: List[Any] = None,
        π: Environment = ΓΠ
) -> Any:
    """Bind parameters to args in a fresh environment whose parent is
    the procedure's own, then run the body there. Args are evaluated
    in the caller's environment π."""
    if not isinstance(proc, Procedure):
        raise ContractViolation(
            f'Call to non-function {proc!r} of type '
            f'{type(proc).__name__}.')
    if args is None:
        args = []
    parameters = proc.code['parameters']
    if len(parameters) != len(args):
        raise ContractViolation(
            f"Wrong number of arguments, "
            f"{len(args)} = len({args}), "
            f"passed to procedure {proc}, "
            f"which expects {len(parameters)} = "
            f"len({parameters}).")
    # A thunk takes no args, so it needs no frame of its own.
    E1 = Environment(lambda: None, proc.π) if parameters else proc.π
    for k, v in zip(parameters, args):
        setattr(E1.ϕ, k, EVAL(v, π))
    ρ = proc.code['body'](E1)
    return ρ


def DEFINE(
        sym: str,
        val: Any,
        π: Environment = ΓΠ  # default
) -> Any:
    """official Scheme"""
    setattr(π.ϕ, sym, val)
    return val


# λ d: (λ g: g(g))(λ sf: d(λ: sf(sf)))
# The innermost λ has no parameters: it is the Thunk. Nothing here
# refers to Υ by name.
DEFINE('Υ',
       Λ(lambda πd:  # function of domain code, d, which takes a Thunk
         Λ(lambda πg: πg.g(πg.g), ['g'], πd)(
             Λ(lambda πsf:
               πd.d(Λ(lambda πt: πt.sf(πt.sf),  # the Thunk
                      [], πsf)),
               ['sf'], πd)),
         ['d']))

# λ d: (λ g: g(g))(λ sf: d(λ m: sf(sf)(m)))
# Direct style: d gets an eta-delayed function of one parameter.
DEFINE('Υ1',
       Λ(lambda πd:
         Λ(lambda πg: πg.g(πg.g), ['g'], πd)(
             Λ(lambda πsf:
               πd.d(Λ(lambda π: π.sf(π.sf)(π.m),
                      ['m'], πsf)),
               ['sf'], πd)),
         ['d']))
