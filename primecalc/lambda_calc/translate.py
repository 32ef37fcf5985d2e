"""
The translation τ from prime-indexed terms to lambda expressions.

    τ(N(p))              = p
    τ(A(p))              = λx. (p ⊕ x)            x fresh per call
    τ(FUSE(p, q, r))     = p + q + r              well-formed only
    τ(A(p1)...A(pk) e)   = (τ(A(p1)) (... (τ(A(pk)) τ(e))))
    τ([e])               = τ(e)
    τ(s1 ∘ s2)           = ⟨τ(s1), τ(s2)⟩
    τ(s1 ⇒ s2)           = (τ(s1) → τ(s2))

τ is compositional: it looks at the shape of a term, never at the
values of its primes.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.errors import UntranslatableTermError
from ..core.terms import (
    NounTerm, AdjTerm, ChainTerm, FusionTerm,
    NounSentence, SeqSentence, ImplSentence,
)
from ..core.types import NounType, AdjType, SentenceType, TypeChecker, TypingContext
from ..reduction.operators import PrimeOperator, ResonancePrimeOperator
from .expr import (
    VarExpr, ConstExpr, LamExpr, AppExpr, PairExpr, ImplExpr, PrimOpExpr,
    NameSupply, PRIME, expr_type,
)


OPLUS = "⊕"


class Translator:
    """τ, with its own supply of fresh variable names."""

    def __init__(self, operator: Optional[PrimeOperator] = None):
        self.operator = operator if operator is not None else ResonancePrimeOperator()
        self.names = NameSupply()

    def fresh_var(self) -> str:
        return self.names.fresh("x")

    def translate(self, term):
        if isinstance(term, NounTerm):
            return ConstExpr(term.prime)

        if isinstance(term, AdjTerm):
            x = self.fresh_var()
            return LamExpr(x, PrimOpExpr(OPLUS, ConstExpr(term.prime), VarExpr(x)),
                           param_type=PRIME)

        if isinstance(term, FusionTerm):
            return ConstExpr(term.fused_prime)

        if isinstance(term, ChainTerm):
            result = self.translate(term.noun)
            for op in reversed(term.operators):
                result = AppExpr(self.translate(op), result)
            return result

        if isinstance(term, NounSentence):
            return self.translate(term.expr)

        if isinstance(term, SeqSentence):
            return PairExpr(self.translate(term.left), self.translate(term.right))

        if isinstance(term, ImplSentence):
            return ImplExpr(self.translate(term.antecedent), self.translate(term.consequent))

        raise UntranslatableTermError(f"Cannot translate: {term!r}")

    def translate_with_trace(self, term) -> dict:
        expr = self.translate(term)
        return {
            "source": term.name,
            "target": expr.name,
            "type": expr_type(expr),
        }

    def translate_typed(self, term, context: Optional[TypingContext] = None) -> "TypedTranslation":
        """
        Type-directed translation: type check the source, translate it,
        and record whether the target has the type the source predicts.
        """
        judgment = TypeChecker().check(term, context)
        expr = self.translate(term)
        expected = target_type(judgment.type)
        actual = expr_type(expr)
        return TypedTranslation(
            expr=expr,
            source_type=judgment.type,
            expected_type=expected,
            target_type=actual,
        )


@dataclass(frozen=True)
class TypedTranslation:
    expr: object
    source_type: object
    expected_type: object
    target_type: object

    @property
    def preserved(self) -> bool:
        return self.expected_type == self.target_type

    def __repr__(self):
        mark = "preserved" if self.preserved else "NOT preserved"
        return f"TypedTranslation({self.expr.name} : {self.target_type} [{mark}])"


def target_type(source_type):
    """What a source type becomes under τ."""
    if isinstance(source_type, NounType):
        return PRIME
    if isinstance(source_type, AdjType):
        return ("fun", PRIME, PRIME)
    if isinstance(source_type, SentenceType):
        if source_type.form == "product":
            return ("pair", target_type(source_type.left), target_type(source_type.right))
        if source_type.form == "function":
            return ("impl", target_type(source_type.left), target_type(source_type.right))
        return PRIME
    raise UntranslatableTermError(f"No target type for {source_type!r}")
