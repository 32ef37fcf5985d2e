"""
The reduction engine: small-step operational semantics.

States are terms, transitions are rule applications, and a term with no
applicable rule is terminal. step() finds one redex and fires it;
normalize() iterates step() under a step bound and records the trace.

Redex selection is leftmost by default: a chain reduces its noun (if
that noun is a fusion) before any operator, a sequence reduces its left
sentence to normal form before touching the right, and an implication
its antecedent before its consequent. right_first=True mirrors the
sentence order; confluence checks compare the two.
"""

from typing import Optional

from ..core.errors import NonTerminationError
from ..core.terms import (
    NounTerm, AdjTerm, ChainTerm, FusionTerm,
    NounSentence, SeqSentence, ImplSentence,
)
from .operators import PrimeOperator, ResonancePrimeOperator
from .rules import fuse, apply_innermost
from .trace import ReductionStep, ReductionTrace


DEFAULT_MAX_STEPS = 1000


class ReductionSystem:
    """The reduction relation →, parameterized by an operator ⊕."""

    def __init__(self, operator: Optional[PrimeOperator] = None,
                 max_steps: int = DEFAULT_MAX_STEPS):
        self.operator = operator if operator is not None else ResonancePrimeOperator()
        self.max_steps = max_steps

    # -- one step -------------------------------------------------------

    def step(self, term, right_first: bool = False) -> Optional[ReductionStep]:
        """
        Apply one reduction step. None means term is terminal.

        Raises IllFormedFusionError when the only candidate redex is an
        ill-formed fusion, and TypeMismatchError when a chain holds
        something other than adjectives over a noun.
        """
        if isinstance(term, (NounTerm, AdjTerm)):
            return None

        if isinstance(term, FusionTerm):
            return fuse(term)

        if isinstance(term, ChainTerm):
            if isinstance(term.noun, FusionTerm):
                inner = fuse(term.noun)
                return ReductionStep("CHAIN_NOUN", term,
                                     ChainTerm(term.operators, inner.after),
                                     {"inner_step": inner})
            return apply_innermost(term, self.operator)

        if isinstance(term, NounSentence):
            inner = self.step(term.expr, right_first)
            if inner is None:
                return None
            return ReductionStep("SENTENCE_INNER", term, NounSentence(inner.after),
                                 {"inner_step": inner})

        if isinstance(term, SeqSentence):
            return self._step_pair(term, term.left, term.right, SeqSentence,
                                   ("SEQ_LEFT", "SEQ_RIGHT"), right_first)

        if isinstance(term, ImplSentence):
            return self._step_pair(term, term.antecedent, term.consequent, ImplSentence,
                                   ("IMPL_ANTE", "IMPL_CONS"), right_first)

        return None

    def _step_pair(self, term, left, right, build, rules, right_first):
        order = [(1, right), (0, left)] if right_first else [(0, left), (1, right)]
        for side, child in order:
            inner = self.step(child, right_first)
            if inner is None:
                continue
            if side == 0:
                return ReductionStep(rules[0], term, build(inner.after, right),
                                     {"inner_step": inner})
            return ReductionStep(rules[1], term, build(left, inner.after),
                                 {"inner_step": inner})
        return None

    def reducts(self, term) -> list:
        """
        Every one-step reduct of term, one per redex position.

        Unlike step() this does not commit to an order, so a sequence
        contributes reducts from both of its sides.
        """
        if isinstance(term, (NounTerm, AdjTerm, FusionTerm, ChainTerm)):
            single = self.step(term)
            return [single] if single is not None else []

        if isinstance(term, NounSentence):
            return [ReductionStep("SENTENCE_INNER", term, NounSentence(s.after),
                                  {"inner_step": s})
                    for s in self.reducts(term.expr)]

        if isinstance(term, (SeqSentence, ImplSentence)):
            if isinstance(term, SeqSentence):
                build, left, right, rules = SeqSentence, term.left, term.right, ("SEQ_LEFT", "SEQ_RIGHT")
            else:
                build, left, right, rules = (ImplSentence, term.antecedent, term.consequent,
                                             ("IMPL_ANTE", "IMPL_CONS"))
            results = [ReductionStep(rules[0], term, build(s.after, right), {"inner_step": s})
                       for s in self.reducts(left)]
            results += [ReductionStep(rules[1], term, build(left, s.after), {"inner_step": s})
                        for s in self.reducts(right)]
            return results

        return []

    # -- many steps -----------------------------------------------------

    def normalize(self, term, verbose: bool = False,
                  right_first: bool = False) -> ReductionTrace:
        """
        Reduce term to normal form, recording every step.

        Raises NonTerminationError (carrying the partial trace) when the
        term is still reducible after max_steps steps.
        """
        trace = ReductionTrace(term)
        current = term
        if verbose:
            print(f"\n--- Normalizing {term.name} ---")

        for _ in range(self.max_steps):
            reduction_step = self.step(current, right_first)
            if reduction_step is None:
                trace.final = current
                if verbose:
                    print(f"  [normal form] {current.name} after {trace.length} steps")
                return trace
            trace.add_step(reduction_step)
            if verbose:
                print(f"  [{reduction_step.rule}] {reduction_step.after.name}")
            current = reduction_step.after

        if self.step(current, right_first) is None:
            trace.final = current
            return trace

        if verbose:
            print(f"  [non-terminating] gave up after {self.max_steps} steps")
        raise NonTerminationError(self.max_steps, trace)

    def evaluate(self, term):
        """The normal form of term."""
        return self.normalize(term).final

    def equivalent(self, t1, t2) -> bool:
        """Same normal form: equal primes for nouns, equal signatures otherwise."""
        nf1 = self.evaluate(t1)
        nf2 = self.evaluate(t2)
        if isinstance(nf1, NounTerm) and isinstance(nf2, NounTerm):
            return nf1.prime == nf2.prime
        return nf1.name == nf2.name
