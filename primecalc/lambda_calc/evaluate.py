"""
Call-by-value small-step evaluation of lambda expressions.

    (λx.e) v         →  e[x := v]                β, capture-avoiding
    (p ⊕ q)          →  combine_primes(⊕, p, q)   both sides constants
    ⟨e1, e2⟩, e1 → e2   left component first

The function position of an application reaches a value before the
argument does. Evaluation stops at a value, at a stuck expression, or
after max_steps steps; in every case the result is returned, never
raised. A result that is not a value means evaluation got stuck or ran
out of steps.
"""

from dataclasses import dataclass
from typing import Optional

from ..reduction.operators import PrimeOperator, ResonancePrimeOperator, combine_primes
from .expr import (
    ConstExpr, LamExpr, AppExpr, PairExpr, ImplExpr, PrimOpExpr,
    NameSupply, is_value, substitute,
)


@dataclass
class EvaluationResult:
    result: object
    steps: int
    is_value: bool

    def to_dict(self) -> dict:
        return {
            "result": self.result.name,
            "steps": self.steps,
            "is_value": self.is_value,
        }

    def __repr__(self):
        tag = "value" if self.is_value else "stuck"
        return f"EvaluationResult({self.result.name}, {self.steps} steps, {tag})"


class LambdaEvaluator:

    def __init__(self, operator: Optional[PrimeOperator] = None, max_steps: int = 1000):
        self.operator = operator if operator is not None else ResonancePrimeOperator()
        self.max_steps = max_steps
        self.names = NameSupply(prefix="β")

    def step(self, expr):
        """One call-by-value step, or None if expr is a value or stuck."""
        if isinstance(expr, AppExpr):
            if not is_value(expr.func):
                inner = self.step(expr.func)
                return AppExpr(inner, expr.arg) if inner is not None else None
            if not is_value(expr.arg):
                inner = self.step(expr.arg)
                return AppExpr(expr.func, inner) if inner is not None else None
            if isinstance(expr.func, LamExpr):
                return substitute(expr.func.body, expr.func.param, expr.arg, self.names)
            return None

        if isinstance(expr, PrimOpExpr):
            if not is_value(expr.left):
                inner = self.step(expr.left)
                return PrimOpExpr(expr.op, inner, expr.right) if inner is not None else None
            if not is_value(expr.right):
                inner = self.step(expr.right)
                return PrimOpExpr(expr.op, expr.left, inner) if inner is not None else None
            if isinstance(expr.left, ConstExpr) and isinstance(expr.right, ConstExpr):
                result, _ = combine_primes(self.operator, expr.left.value, expr.right.value)
                return ConstExpr(result)
            return None

        if isinstance(expr, PairExpr):
            return self._step_components(expr, expr.left, expr.right, PairExpr)

        if isinstance(expr, ImplExpr):
            return self._step_components(expr, expr.antecedent, expr.consequent, ImplExpr)

        return None

    def _step_components(self, expr, left, right, build):
        if not is_value(left):
            inner = self.step(left)
            return build(inner, right) if inner is not None else None
        if not is_value(right):
            inner = self.step(right)
            return build(left, inner) if inner is not None else None
        return None

    def evaluate(self, expr) -> EvaluationResult:
        current = expr
        steps = 0
        while steps < self.max_steps:
            nxt = self.step(current)
            if nxt is None:
                break
            current = nxt
            steps += 1
        return EvaluationResult(result=current, steps=steps, is_value=is_value(current))
