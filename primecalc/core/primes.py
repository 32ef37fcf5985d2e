"""
The prime oracle.

Everything the calculus knows about primes comes through here:
a primality predicate and a few enumerations built on it. Plain trial
division is enough for the sizes the calculus works with.
"""

from functools import lru_cache


def is_prime(n) -> bool:
    """Primality by trial division over 6k +/- 1. Non-integers are never prime."""
    if isinstance(n, bool) or not isinstance(n, int):
        return False
    return _is_prime_int(n)


@lru_cache(maxsize=65536)
def _is_prime_int(n: int) -> bool:
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def next_prime(n: int) -> int:
    """Smallest prime strictly greater than n."""
    candidate = max(2, n + 1)
    while not is_prime(candidate):
        candidate += 1
    return candidate


def primes_up_to(n: int) -> list:
    """All primes p with p <= n, ascending."""
    return [p for p in range(2, n + 1) if is_prime(p)]


def first_n_primes(k: int) -> list:
    """The first k primes: 2, 3, 5, ..."""
    primes = []
    candidate = 2
    while len(primes) < k:
        if is_prime(candidate):
            primes.append(candidate)
        candidate += 1
    return primes


def nth_prime(k: int) -> int:
    """The k-th prime, 1-based: nth_prime(1) == 2."""
    if k < 1:
        raise ValueError(f"nth_prime is 1-based, got {k}")
    return first_n_primes(k)[-1]
