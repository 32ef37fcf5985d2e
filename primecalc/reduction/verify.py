"""
Checking what the reduction engine claims.

    NormalFormVerifier               NF_ok(term, claimed): does term reduce to claimed?
    demonstrate_strong_normalization term_size falls at every step
    normal_forms                     every normal form reachable by any strategy
    check_local_confluence           every path from each term meets again

Strong normalization plus local confluence gives confluence (Newman's
Lemma). These functions check both on concrete terms; they are evidence,
not a proof.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..core.errors import NonTerminationError
from ..core.terms import N, FUSE, CHAIN, SEQ, IMPL, NounTerm, term_size
from .engine import ReductionSystem


class NormalFormVerifier:
    """NF_ok(term, claimed) = reduce(term) == claimed."""

    def __init__(self, reducer: Optional[ReductionSystem] = None):
        self.reducer = reducer if reducer is not None else ReductionSystem()

    def verify(self, term, claimed) -> bool:
        """claimed may be a prime, a NounTerm, or any term (compared by signature)."""
        actual = self.reducer.evaluate(term)
        if isinstance(claimed, int):
            return isinstance(actual, NounTerm) and actual.prime == claimed
        if isinstance(actual, NounTerm) and isinstance(claimed, NounTerm):
            return actual.prime == claimed.prime
        return actual.name == claimed.name

    def certificate(self, term, claimed) -> dict:
        trace = self.reducer.normalize(term)
        return {
            "term": term.name,
            "claimed": claimed if isinstance(claimed, int) else claimed.name,
            "actual": trace.final.name,
            "verified": self.verify(term, claimed),
            "steps": trace.length,
            "trace": [s.name for s in trace.steps],
        }


@dataclass
class StrongNormalizationReport:
    """Sizes along one reduction, and the steps (if any) that failed to shrink it."""
    term: str
    normal_form: Optional[str]
    sizes: list
    violations: list = field(default_factory=list)

    @property
    def steps(self):
        return len(self.sizes) - 1

    @property
    def strictly_decreasing(self):
        return not self.violations

    @property
    def verified(self):
        return self.strictly_decreasing and self.normal_form is not None

    def __repr__(self):
        status = "SN" if self.verified else f"violations at {self.violations}"
        return f"StrongNormalizationReport({self.term}: {self.sizes} [{status}])"


def demonstrate_strong_normalization(term, reducer: Optional[ReductionSystem] = None,
                                     verbose: bool = False) -> StrongNormalizationReport:
    """
    Lemma: if e → e' then |e'| < |e|.

    Normalizes term and records term_size before and after every step.
    A step whose size does not strictly drop is listed by its 1-based
    index in violations.
    """
    reducer = reducer if reducer is not None else ReductionSystem()
    trace = reducer.normalize(term)
    sizes = [term_size(t) for t in trace.terms]
    violations = [i for i in range(1, len(sizes)) if sizes[i] >= sizes[i - 1]]
    report = StrongNormalizationReport(
        term=term.name,
        normal_form=trace.final.name if trace.final is not None else None,
        sizes=sizes,
        violations=violations,
    )
    if verbose:
        print(f"  [SN] {term.name}: sizes {sizes}"
              f" -> {'strictly decreasing' if report.strictly_decreasing else 'NOT decreasing'}")
    return report


def normal_forms(term, reducer: Optional[ReductionSystem] = None) -> set:
    """
    Every normal form reachable from term, over all redex choices.

    Explores the reduction graph depth-first, visiting each distinct term
    once. Paths longer than reducer.max_steps raise NonTerminationError.
    """
    reducer = reducer if reducer is not None else ReductionSystem()
    found = set()
    visited = set()
    stack = [(term, 0)]
    while stack:
        current, depth = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        successors = reducer.reducts(current)
        if not successors:
            found.add(current)
            continue
        if depth >= reducer.max_steps:
            raise NonTerminationError(reducer.max_steps)
        for s in successors:
            stack.append((s.after, depth + 1))
    return found


def confluence_examples() -> list:
    """Representative terms with more than one redex, or nested redexes."""
    return [
        CHAIN([2], FUSE(3, 5, 11)),
        CHAIN([2, 3], N(7)),
        FUSE(5, 7, 11),
        SEQ(CHAIN([2, 3], N(7)), FUSE(3, 5, 11)),
        IMPL(FUSE(3, 5, 11), CHAIN([3], N(7))),
        SEQ(SEQ(FUSE(3, 5, 11), CHAIN([2], N(5))), CHAIN([3, 5], N(11))),
    ]


def check_local_confluence(reducer: Optional[ReductionSystem] = None,
                           terms: Optional[list] = None,
                           verbose: bool = False) -> dict:
    """
    For each term, explore every reduction path and check that they all
    end at the same normal form.

    Returns {"all_confluent": bool, "cases": [...]}, one case per term.
    """
    reducer = reducer if reducer is not None else ReductionSystem()
    terms = terms if terms is not None else confluence_examples()

    cases = []
    for term in terms:
        forms = normal_forms(term, reducer)
        case = {
            "term": term.name,
            "normal_forms": sorted(f.name for f in forms),
            "confluent": len(forms) == 1,
        }
        cases.append(case)
        if verbose:
            mark = "ok" if case["confluent"] else "DIVERGES"
            print(f"  [{mark}] {case['term']} -> {', '.join(case['normal_forms'])}")

    return {
        "all_confluent": all(c["confluent"] for c in cases),
        "cases": cases,
    }
