from .operators import (
    PrimeOperator, NextPrimeOperator, ModularPrimeOperator,
    ResonancePrimeOperator, IdentityPrimeOperator,
    combine_primes, OPERATORS, DEFAULT_OPERATOR_NAME, make_operator,
)
from .trace import ReductionStep, ReductionTrace
from .rules import fuse, apply_innermost
from .engine import ReductionSystem, DEFAULT_MAX_STEPS
from .canonical import FusionCanonicalizer
from .verify import (
    NormalFormVerifier, StrongNormalizationReport,
    demonstrate_strong_normalization, normal_forms,
    confluence_examples, check_local_confluence,
)

__all__ = [
    "PrimeOperator", "NextPrimeOperator", "ModularPrimeOperator",
    "ResonancePrimeOperator", "IdentityPrimeOperator",
    "combine_primes", "OPERATORS", "DEFAULT_OPERATOR_NAME", "make_operator",
    "ReductionStep", "ReductionTrace",
    "fuse", "apply_innermost",
    "ReductionSystem", "DEFAULT_MAX_STEPS",
    "FusionCanonicalizer",
    "NormalFormVerifier", "StrongNormalizationReport",
    "demonstrate_strong_normalization", "normal_forms",
    "confluence_examples", "check_local_confluence",
]
