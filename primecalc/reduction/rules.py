"""
The two primitive reduction rules.

FUSE:   FUSE(p, q, r)             ->  N(p + q + r)
APPLY:  A(p1)...A(pk) N(q)        ->  A(p1)...A(pk-1) N(pk ⊕ q)

Each rule takes a redex and returns the ReductionStep it produces.
Contextual rules (descending into chains and sentences) live in the
engine; these functions only ever see the redex itself.
"""

from ..core.errors import TypeMismatchError
from ..core.terms import NounTerm, AdjTerm, ChainTerm, FusionTerm
from .operators import PrimeOperator, combine_primes
from .trace import ReductionStep


def fuse(term: FusionTerm) -> ReductionStep:
    """
    Fusion reduction. The sum must be prime.

    An ill-formed fusion is never a redex: asking for its fused prime
    raises IllFormedFusionError.
    """
    result = term.to_noun()
    return ReductionStep(
        rule="FUSE",
        before=term,
        after=result,
        details={"p": term.p, "q": term.q, "r": term.r, "sum": result.prime},
    )


def apply_innermost(term: ChainTerm, operator: PrimeOperator) -> ReductionStep:
    """
    Operator application. Pops the rightmost adjective and folds it into
    the noun with ⊕. Collapses to a bare NounTerm when the chain runs out.
    """
    *remaining, inner = term.operators
    if not isinstance(inner, AdjTerm):
        raise TypeMismatchError("A", inner, term=inner)
    if not isinstance(term.noun, NounTerm):
        raise TypeMismatchError("N", term.noun, term=term.noun)

    p, q = inner.prime, term.noun.prime
    new_prime, how = combine_primes(operator, p, q)
    new_noun = NounTerm(new_prime)
    result = ChainTerm(tuple(remaining), new_noun) if remaining else new_noun

    return ReductionStep(
        rule="APPLY",
        before=term,
        after=result,
        details={"operator": p, "operand": q, "result": new_prime,
                 "ordering": how, "op_name": operator.name},
    )
