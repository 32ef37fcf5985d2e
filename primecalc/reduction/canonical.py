"""
Canonical fusion routes: d*(P).

A prime P usually has several decompositions into three distinct odd
primes, D(P) = {(p, q, r) : p + q + r = P}. The canonicalizer scores each
triad and picks one, so that a prime has a single preferred fusion.

Score = balance + smallness + harmonic bonus
    balance:    1 / (1 + sqrt(variance of p, q, r))
    smallness:  1 / log(p * q * r)
    harmonic:   +0.1 for each of q/p, r/q, r/p within 0.1 of an integer

Scores within SCORE_TOLERANCE of the best are ties, broken by the
lexicographically smallest (p, q, r).
"""

import math
import threading
from typing import Optional

from ..core.errors import IllFormedFusionError
from ..core.terms import FusionTerm


SCORE_TOLERANCE = 1e-4
HARMONIC_WINDOW = 0.1
HARMONIC_BONUS = 0.1


class FusionCanonicalizer:
    """Selects d*(P). The triad cache is derived data only."""

    def __init__(self):
        self._cache = {}
        self._lock = threading.Lock()

    def triads(self, target: int) -> tuple:
        """D(target), sorted (p, q, r) ascending. Empty when target is not prime."""
        with self._lock:
            cached = self._cache.get(target)
        if cached is not None:
            return cached
        found = tuple(FusionTerm.find_triads(target))
        with self._lock:
            self._cache.setdefault(target, found)
            return self._cache[target]

    def score(self, triad: FusionTerm) -> float:
        p, q, r = sorted((triad.p, triad.q, triad.r))
        mean = (p + q + r) / 3
        variance = ((p - mean) ** 2 + (q - mean) ** 2 + (r - mean) ** 2) / 3
        balance = 1 / (1 + math.sqrt(variance))
        smallness = 1 / math.log(p * q * r)
        harmonic = 0.0
        for ratio in (q / p, r / q, r / p):
            if abs(ratio - round(ratio)) < HARMONIC_WINDOW:
                harmonic += HARMONIC_BONUS
        return balance + smallness + harmonic

    def ranked(self, target: int) -> list:
        """
        (triad, score) pairs, best first.

        Scores within SCORE_TOLERANCE of the top of their group tie, and a
        tied group is listed in lexicographic order. ranked(P)[0] is d*(P).
        """
        scored = [(t, self.score(t)) for t in self.triads(target)]
        scored.sort(key=lambda ts: (-ts[1], (ts[0].p, ts[0].q, ts[0].r)))
        result = []
        i = 0
        while i < len(scored):
            top = scored[i][1]
            j = i
            while j < len(scored) and top - scored[j][1] <= SCORE_TOLERANCE:
                j += 1
            result.extend(sorted(scored[i:j], key=lambda ts: (ts[0].p, ts[0].q, ts[0].r)))
            i = j
        return result

    def select(self, target: int) -> Optional[FusionTerm]:
        """d*(target), or None when D(target) is empty."""
        ranked = self.ranked(target)
        if not ranked:
            return None
        return ranked[0][0]

    def canonical_fusion(self, target: int) -> FusionTerm:
        triad = self.select(target)
        if triad is None:
            raise IllFormedFusionError(f"No valid fusion triad for {target}")
        return triad

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)
