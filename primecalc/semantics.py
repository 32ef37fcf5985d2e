"""
Operational and denotational meaning, side by side.

    operational:   ReductionSystem.evaluate(term)         (normal form)
    denotational:  LambdaEvaluator.evaluate(τ(term))      (lambda value)

The two agree when a term's normal form N(v) and its denotation
ConstExpr(v) carry the same prime. Sequences and implications agree
when they agree component by component.

One operator is shared by the reducer, the translator and the evaluator,
so ⊕ means the same thing on both sides.
"""

from dataclasses import dataclass
from typing import Optional

from .core.terms import NounTerm, NounSentence, SeqSentence, ImplSentence
from .lambda_calc.evaluate import LambdaEvaluator
from .lambda_calc.expr import ConstExpr, PairExpr, ImplExpr, alpha_equivalent
from .lambda_calc.translate import Translator
from .reduction.engine import ReductionSystem
from .reduction.operators import PrimeOperator, ResonancePrimeOperator


@dataclass
class SemanticCheck:
    """The outcome of comparing both meanings of one term."""
    term: str
    operational: object
    denotational: object
    comparable: bool
    equivalent: bool

    def to_dict(self) -> dict:
        return {
            "term": self.term,
            "operational": self.operational,
            "denotational": self.denotational,
            "comparable": self.comparable,
            "equivalent": self.equivalent,
        }

    def __repr__(self):
        if not self.comparable:
            verdict = "not comparable"
        else:
            verdict = "agree" if self.equivalent else "DISAGREE"
        return f"SemanticCheck({self.term}: {self.operational} vs {self.denotational} [{verdict}])"


class Semantics:

    def __init__(self, operator: Optional[PrimeOperator] = None):
        self.operator = operator if operator is not None else ResonancePrimeOperator()
        self.reducer = ReductionSystem(self.operator)
        self.translator = Translator(self.operator)
        self.evaluator = LambdaEvaluator(self.operator)

    def denote(self, term):
        """⟦term⟧ = evaluate(τ(term)), as a lambda expression."""
        return self.evaluator.evaluate(self.translator.translate(term)).result

    def equivalent(self, t1, t2) -> bool:
        """Same denotation: equal constants, otherwise equal up to renaming."""
        d1, d2 = self.denote(t1), self.denote(t2)
        if isinstance(d1, ConstExpr) and isinstance(d2, ConstExpr):
            return d1.value == d2.value
        return alpha_equivalent(d1, d2)

    def verify_semantic_equivalence(self, term) -> SemanticCheck:
        """
        Normalize term, denote term, and compare the two.

        comparable is False when either side did not come out as a prime
        (or a pair or implication of primes), e.g. a bare adjective.
        """
        operational = operational_value(self.reducer.evaluate(term))
        denotational = denotational_value(self.denote(term))
        comparable = _is_ground(operational) and _is_ground(denotational)
        return SemanticCheck(
            term=term.name,
            operational=operational,
            denotational=denotational,
            comparable=comparable,
            equivalent=comparable and operational == denotational,
        )


def operational_value(normal_form):
    """A normal form as a prime, or a ("pair"/"impl", left, right) tuple."""
    if isinstance(normal_form, NounTerm):
        return normal_form.prime
    if isinstance(normal_form, NounSentence):
        return operational_value(normal_form.expr)
    if isinstance(normal_form, SeqSentence):
        return ("pair", operational_value(normal_form.left), operational_value(normal_form.right))
    if isinstance(normal_form, ImplSentence):
        return ("impl", operational_value(normal_form.antecedent),
                operational_value(normal_form.consequent))
    return None


def denotational_value(expr):
    """A lambda result in the same shape as operational_value."""
    if isinstance(expr, ConstExpr):
        return expr.value
    if isinstance(expr, PairExpr):
        return ("pair", denotational_value(expr.left), denotational_value(expr.right))
    if isinstance(expr, ImplExpr):
        return ("impl", denotational_value(expr.antecedent), denotational_value(expr.consequent))
    return None


def _is_ground(value) -> bool:
    if isinstance(value, tuple):
        return all(_is_ground(v) for v in value[1:])
    return value is not None
