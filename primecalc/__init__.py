"""
primecalc: a small typed calculus over prime-indexed terms.

Nouns N(p) are values, adjectives A(p) act on them through a
prime-preserving operator ⊕, and fusions FUSE(p, q, r) collapse three
odd primes into their prime sum. Terms have two meanings that are
checked against each other:

    operational:   ReductionSystem(operator).normalize(term)
    denotational:  Semantics(operator).denote(term), via the λ-translation τ

Usage:
    from primecalc import CHAIN, N, ReductionSystem, Semantics

    ReductionSystem().evaluate(CHAIN([2, 3], N(7)))        # N(47)
    Semantics().verify_semantic_equivalence(CHAIN([2, 3], N(7)))
"""

from .core.primes import is_prime, next_prime, primes_up_to, first_n_primes, nth_prime
from .core.errors import (
    CalculusError, InvalidPrimeError, TypeMismatchError, OperatorDomainError,
    IllFormedFusionError, NonTerminationError, UntranslatableTermError,
)
from .core.terms import (
    NounTerm, AdjTerm, ChainTerm, FusionTerm,
    NounSentence, SeqSentence, ImplSentence,
    N, A, FUSE, CHAIN, SENTENCE, SEQ, IMPL,
    is_normal_form, is_reducible, term_size,
    term_to_dict, term_from_dict,
)
from .core.types import (
    NounType, AdjType, SentenceType, NOUN, ADJ,
    TypingContext, TypingJudgment, TypeChecker,
)
from .reduction.operators import (
    PrimeOperator, NextPrimeOperator, ModularPrimeOperator,
    ResonancePrimeOperator, IdentityPrimeOperator,
    combine_primes, OPERATORS, make_operator,
)
from .reduction.trace import ReductionStep, ReductionTrace
from .reduction.engine import ReductionSystem
from .reduction.canonical import FusionCanonicalizer
from .reduction.verify import (
    NormalFormVerifier, demonstrate_strong_normalization,
    normal_forms, check_local_confluence,
)
from .lambda_calc.expr import (
    VarExpr, ConstExpr, LamExpr, AppExpr, PairExpr, ImplExpr, PrimOpExpr,
    substitute, alpha_equivalent,
)
from .lambda_calc.translate import Translator
from .lambda_calc.evaluate import LambdaEvaluator, EvaluationResult
from .semantics import Semantics, SemanticCheck
from .visualization import (
    print_trace, print_certificate, print_strong_normalization,
    print_confluence, print_semantic_check, trace_to_dot, export_dot,
)

__all__ = [
    "is_prime", "next_prime", "primes_up_to", "first_n_primes", "nth_prime",
    "CalculusError", "InvalidPrimeError", "TypeMismatchError", "OperatorDomainError",
    "IllFormedFusionError", "NonTerminationError", "UntranslatableTermError",
    "NounTerm", "AdjTerm", "ChainTerm", "FusionTerm",
    "NounSentence", "SeqSentence", "ImplSentence",
    "N", "A", "FUSE", "CHAIN", "SENTENCE", "SEQ", "IMPL",
    "is_normal_form", "is_reducible", "term_size",
    "term_to_dict", "term_from_dict",
    "NounType", "AdjType", "SentenceType", "NOUN", "ADJ",
    "TypingContext", "TypingJudgment", "TypeChecker",
    "PrimeOperator", "NextPrimeOperator", "ModularPrimeOperator",
    "ResonancePrimeOperator", "IdentityPrimeOperator",
    "combine_primes", "OPERATORS", "make_operator",
    "ReductionStep", "ReductionTrace", "ReductionSystem", "FusionCanonicalizer",
    "NormalFormVerifier", "demonstrate_strong_normalization",
    "normal_forms", "check_local_confluence",
    "VarExpr", "ConstExpr", "LamExpr", "AppExpr", "PairExpr", "ImplExpr", "PrimOpExpr",
    "substitute", "alpha_equivalent",
    "Translator", "LambdaEvaluator", "EvaluationResult",
    "Semantics", "SemanticCheck",
    "print_trace", "print_certificate", "print_strong_normalization",
    "print_confluence", "print_semantic_check", "trace_to_dot", "export_dot",
]
