"""
Error taxonomy for the calculus.

Every error is raised at the point of violation and never retried.
Each one also subclasses the builtin it refines, so callers can keep
catching ValueError / TypeError / RuntimeError.
"""


class CalculusError(Exception):
    """Base class for every failure the calculus reports."""


class InvalidPrimeError(CalculusError, ValueError):
    """A term was constructed with a non-prime (or malformed triad) argument."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class TypeMismatchError(CalculusError, TypeError):
    """Type checking failed: the term does not have the expected type."""

    def __init__(self, expected, actual, term=None, message: str = ""):
        self.expected = expected
        self.actual = actual
        self.term = term
        if not message:
            where = f" in {term.name}" if term is not None and hasattr(term, "name") else ""
            message = f"expected {_type_name(expected)}, got {_type_name(actual)}{where}"
        super().__init__(message)


class OperatorDomainError(CalculusError, ValueError):
    """A prime operator was applied outside its domain (both prime, p < q)."""

    def __init__(self, operator_name: str, p, q):
        self.operator_name = operator_name
        self.p = p
        self.q = q
        super().__init__(
            f"{operator_name}: cannot apply to ({p}, {q}); "
            f"need both prime and {p} < {q}"
        )


class IllFormedFusionError(CalculusError, ValueError):
    """A fusion was reduced or translated while not well-formed."""


class NonTerminationError(CalculusError, RuntimeError):
    """Reduction did not reach a normal form within max_steps."""

    def __init__(self, max_steps: int, trace=None):
        self.max_steps = max_steps
        self.trace = trace
        super().__init__(f"Reduction exceeded maximum steps ({max_steps})")


class UntranslatableTermError(CalculusError, TypeError):
    """The translator was handed a shape it has no rule for."""


def _type_name(t) -> str:
    if t is None:
        return "nothing"
    return getattr(t, "name", None) or str(t)
