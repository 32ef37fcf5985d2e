"""
Lambda expressions: the target calculus of the translation τ.

    VarExpr(name)                  x
    ConstExpr(value)               p
    LamExpr(param, body)           λx.e
    AppExpr(func, arg)             (e1 e2)
    PairExpr(left, right)          ⟨e1, e2⟩
    ImplExpr(antecedent, conseq)   (e1 → e2)
    PrimOpExpr(op, left, right)    (e1 ⊕ e2)

Operations on expressions are plain functions, the same way unification
works on plain terms: is_value, free_vars, substitute, alpha_equivalent,
expr_type.

Substitution is capture-avoiding. When a binder would capture a free
variable of the substituted expression, the binder is renamed with a
fresh name from a NameSupply (a monotonic counter), so renaming is
deterministic for a given supply.
"""

from dataclasses import dataclass
from itertools import count
from typing import Optional


# ============================================================
# Expressions
# ============================================================

@dataclass(frozen=True)
class VarExpr:
    name: str

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class ConstExpr:
    value: int

    @property
    def name(self):
        return str(self.value)

    def __repr__(self):
        return f"ConstExpr({self.value})"


@dataclass(frozen=True)
class LamExpr:
    param: str
    body: object
    param_type: Optional[object] = None

    @property
    def name(self):
        return f"(λ{self.param}.{self.body.name})"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class AppExpr:
    func: object
    arg: object

    @property
    def name(self):
        return f"({self.func.name} {self.arg.name})"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class PairExpr:
    left: object
    right: object

    @property
    def name(self):
        return f"⟨{self.left.name}, {self.right.name}⟩"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class ImplExpr:
    antecedent: object
    consequent: object

    @property
    def name(self):
        return f"({self.antecedent.name} → {self.consequent.name})"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class PrimOpExpr:
    op: str
    left: object
    right: object

    @property
    def name(self):
        return f"({self.left.name} {self.op} {self.right.name})"

    def __repr__(self):
        return self.name


# ============================================================
# Fresh names
# ============================================================

class NameSupply:
    """Deterministic fresh names: base_0, base_1, ... skipping any in avoid."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix
        self._counter = count()

    def fresh(self, base: str = "x", avoid=frozenset()) -> str:
        stem = base.split("_")[0] if base else "x"
        while True:
            candidate = f"{self.prefix}{stem}_{next(self._counter)}"
            if candidate not in avoid:
                return candidate


# ============================================================
# Structural operations
# ============================================================

def is_value(expr) -> bool:
    """Constants and lambdas are values; pairs and implications when their parts are."""
    if isinstance(expr, (ConstExpr, LamExpr)):
        return True
    if isinstance(expr, PairExpr):
        return is_value(expr.left) and is_value(expr.right)
    if isinstance(expr, ImplExpr):
        return is_value(expr.antecedent) and is_value(expr.consequent)
    return False


def free_vars(expr) -> frozenset:
    if isinstance(expr, VarExpr):
        return frozenset({expr.name})
    if isinstance(expr, ConstExpr):
        return frozenset()
    if isinstance(expr, LamExpr):
        return free_vars(expr.body) - {expr.param}
    if isinstance(expr, AppExpr):
        return free_vars(expr.func) | free_vars(expr.arg)
    if isinstance(expr, (PairExpr, PrimOpExpr)):
        return free_vars(expr.left) | free_vars(expr.right)
    if isinstance(expr, ImplExpr):
        return free_vars(expr.antecedent) | free_vars(expr.consequent)
    raise TypeError(f"Not a lambda expression: {expr!r}")


def substitute(expr, var: str, replacement, names: Optional[NameSupply] = None):
    """
    expr[var := replacement], capture-avoiding.

    A binder λy whose y is free in replacement (and whose body actually
    mentions var) is renamed to a fresh name first.
    """
    if names is None:
        names = NameSupply()
    return _subst(expr, var, replacement, free_vars(replacement), names)


def _subst(expr, var, replacement, replacement_fv, names):
    if isinstance(expr, VarExpr):
        return replacement if expr.name == var else expr
    if isinstance(expr, ConstExpr):
        return expr
    if isinstance(expr, LamExpr):
        if expr.param == var:
            return expr  # var is shadowed here
        if var not in free_vars(expr.body):
            return expr
        param, body = expr.param, expr.body
        if param in replacement_fv:
            avoid = replacement_fv | free_vars(body) | {var}
            fresh = names.fresh(param, avoid)
            body = _subst(body, param, VarExpr(fresh), frozenset({fresh}), names)
            param = fresh
        return LamExpr(param, _subst(body, var, replacement, replacement_fv, names),
                       expr.param_type)
    if isinstance(expr, AppExpr):
        return AppExpr(_subst(expr.func, var, replacement, replacement_fv, names),
                       _subst(expr.arg, var, replacement, replacement_fv, names))
    if isinstance(expr, PairExpr):
        return PairExpr(_subst(expr.left, var, replacement, replacement_fv, names),
                        _subst(expr.right, var, replacement, replacement_fv, names))
    if isinstance(expr, ImplExpr):
        return ImplExpr(_subst(expr.antecedent, var, replacement, replacement_fv, names),
                        _subst(expr.consequent, var, replacement, replacement_fv, names))
    if isinstance(expr, PrimOpExpr):
        return PrimOpExpr(expr.op,
                          _subst(expr.left, var, replacement, replacement_fv, names),
                          _subst(expr.right, var, replacement, replacement_fv, names))
    raise TypeError(f"Not a lambda expression: {expr!r}")


def alpha_equivalent(e1, e2) -> bool:
    """Equal up to consistent renaming of bound variables."""
    return _alpha(e1, e2, {}, {}, 0)


def _alpha(e1, e2, env1, env2, depth):
    # env maps a bound name to the depth of its innermost binder
    if isinstance(e1, VarExpr) and isinstance(e2, VarExpr):
        if e1.name in env1 or e2.name in env2:
            return env1.get(e1.name) == env2.get(e2.name)
        return e1.name == e2.name
    if type(e1) is not type(e2):
        return False
    if isinstance(e1, ConstExpr):
        return e1.value == e2.value
    if isinstance(e1, LamExpr):
        return _alpha(e1.body, e2.body,
                      {**env1, e1.param: depth}, {**env2, e2.param: depth}, depth + 1)
    if isinstance(e1, AppExpr):
        return (_alpha(e1.func, e2.func, env1, env2, depth)
                and _alpha(e1.arg, e2.arg, env1, env2, depth))
    if isinstance(e1, PairExpr):
        return (_alpha(e1.left, e2.left, env1, env2, depth)
                and _alpha(e1.right, e2.right, env1, env2, depth))
    if isinstance(e1, ImplExpr):
        return (_alpha(e1.antecedent, e2.antecedent, env1, env2, depth)
                and _alpha(e1.consequent, e2.consequent, env1, env2, depth))
    if isinstance(e1, PrimOpExpr):
        return (e1.op == e2.op
                and _alpha(e1.left, e2.left, env1, env2, depth)
                and _alpha(e1.right, e2.right, env1, env2, depth))
    return False


# ============================================================
# Types of expressions
# ============================================================

PRIME = "prime"


def expr_type(expr, env: Optional[dict] = None):
    """
    The type of an expression, as a plain value:

        "prime"                      constants and ⊕ results
        ("fun", arg_type, res_type)  lambdas
        ("pair", left, right)        pairs
        ("impl", ante, cons)         implications

    None when the type cannot be determined (an unannotated variable,
    or an application of a non-function).
    """
    env = env or {}
    if isinstance(expr, ConstExpr):
        return PRIME
    if isinstance(expr, VarExpr):
        return env.get(expr.name)
    if isinstance(expr, LamExpr):
        inner = {**env, expr.param: expr.param_type}
        return ("fun", expr.param_type, expr_type(expr.body, inner))
    if isinstance(expr, AppExpr):
        func_type = expr_type(expr.func, env)
        if isinstance(func_type, tuple) and func_type[0] == "fun":
            return func_type[2]
        return None
    if isinstance(expr, PrimOpExpr):
        return PRIME
    if isinstance(expr, PairExpr):
        return ("pair", expr_type(expr.left, env), expr_type(expr.right, env))
    if isinstance(expr, ImplExpr):
        return ("impl", expr_type(expr.antecedent, env), expr_type(expr.consequent, env))
    raise TypeError(f"Not a lambda expression: {expr!r}")
