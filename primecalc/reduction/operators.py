"""
Prime-preserving operators ⊕.

An operator ⊕ satisfies:
    dom(⊕) = {(p, q) : p and q prime, p < q}
    p ⊕ q is prime for every (p, q) in dom(⊕)

The operator is a strategy chosen when an engine, translator or evaluator
is built. It is passed in explicitly; there is no shared default instance.

OPERATORS is the registry, in the same shape as a domain registry:
    make:        (**kwargs) -> PrimeOperator
    description: str
"""

import math

from ..core.errors import OperatorDomainError
from ..core.primes import is_prime, next_prime


class PrimeOperator:
    """Base ⊕. Subclasses implement _combine(p, q) on in-domain pairs."""

    name = "abstract"

    def can_apply(self, p, q) -> bool:
        return is_prime(p) and is_prime(q) and p < q

    def apply(self, p, q) -> int:
        if not self.can_apply(p, q):
            raise OperatorDomainError(self.name, p, q)
        return self._combine(p, q)

    def _combine(self, p: int, q: int) -> int:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class NextPrimeOperator(PrimeOperator):
    """p ⊕ q = smallest prime >= q + p."""

    name = "next_prime"

    def _combine(self, p, q):
        candidate = q + p
        while not is_prime(candidate):
            candidate += 1
        return candidate


class ModularPrimeOperator(PrimeOperator):
    """p ⊕ q = smallest prime >= (p * q) mod base."""

    name = "modular_prime"

    def __init__(self, base: int = 1000):
        if base < 2:
            raise ValueError(f"ModularPrimeOperator base must be >= 2, got {base}")
        self.base = base

    def _combine(self, p, q):
        candidate = max(2, (p * q) % self.base)
        while not is_prime(candidate):
            candidate += 1
        return candidate

    def __repr__(self):
        return f"ModularPrimeOperator(base={self.base})"


class ResonancePrimeOperator(PrimeOperator):
    """
    p ⊕ q = the prime nearest round(q * log q / log p).

    The search walks outward from the target, trying target + offset
    before target - offset. Past 1000 offsets it gives up and returns
    the next prime after q.
    """

    name = "resonance_prime"
    max_offset = 1000

    def _combine(self, p, q):
        target = int(math.floor(q * math.log(q) / math.log(p) + 0.5))
        for offset in range(self.max_offset + 1):
            if is_prime(target + offset):
                return target + offset
            if offset > 0 and is_prime(target - offset):
                return target - offset
        return next_prime(q)


class IdentityPrimeOperator(PrimeOperator):
    """p ⊕ q = q. Deterministic and inert; for testing."""

    name = "identity"

    def _combine(self, p, q):
        return q


def combine_primes(operator: PrimeOperator, p: int, q: int) -> tuple:
    """
    The ordering rule shared by both semantics.

    Try p ⊕ q; if (p, q) is outside the domain try q ⊕ p; if neither
    ordering is in the domain, keep max(p, q).

    Returns (result, how) with how in {"direct", "swapped", "max"}.
    """
    if operator.can_apply(p, q):
        return operator.apply(p, q), "direct"
    if operator.can_apply(q, p):
        return operator.apply(q, p), "swapped"
    return max(p, q), "max"


OPERATORS = {
    "resonance": {
        "make":        ResonancePrimeOperator,
        "description": "Nearest prime to q * log q / log p (default)",
    },
    "next_prime": {
        "make":        NextPrimeOperator,
        "description": "Smallest prime at or above q + p",
    },
    "modular_prime": {
        "make":        ModularPrimeOperator,
        "description": "Smallest prime at or above (p * q) mod base",
    },
    "identity": {
        "make":        IdentityPrimeOperator,
        "description": "Returns q unchanged",
    },
}

DEFAULT_OPERATOR_NAME = "resonance"


def make_operator(name: str = DEFAULT_OPERATOR_NAME, **kwargs) -> PrimeOperator:
    """Build a fresh operator from the registry."""
    if name not in OPERATORS:
        raise ValueError(
            f"Unknown operator '{name}'. Available: {list(OPERATORS.keys())}"
        )
    return OPERATORS[name]["make"](**kwargs)
