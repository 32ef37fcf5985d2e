"""
Tests for normal-form certificates, strong normalization and confluence.

Claims:
    - NF_ok accepts the actual normal form and rejects anything else
    - every step of every example reduction shrinks term_size
    - every representative term has exactly one reachable normal form
    - a size measure that does not shrink is reported, not hidden
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from primecalc.core.errors import NonTerminationError
from primecalc.core.primes import first_n_primes
from primecalc.core.terms import ChainTerm, N, A, FUSE, CHAIN, SEQ, IMPL
from primecalc.reduction.engine import ReductionSystem
from primecalc.reduction.operators import NextPrimeOperator, IdentityPrimeOperator
from primecalc.reduction.trace import ReductionStep
from primecalc.reduction.verify import (
    NormalFormVerifier, StrongNormalizationReport, demonstrate_strong_normalization,
    normal_forms, confluence_examples, check_local_confluence,
)


primes = st.sampled_from(first_n_primes(20))


# ── Certificates ─────────────────────────────────────────────────────────────

class TestVerifier:
    def test_accepts_prime(self):
        v = NormalFormVerifier(ReductionSystem(NextPrimeOperator()))
        assert v.verify(CHAIN([2, 3], 7), 13)
        assert v.verify(CHAIN([2, 3], 7), N(13))

    def test_rejects_wrong_claim(self):
        v = NormalFormVerifier(ReductionSystem(NextPrimeOperator()))
        assert not v.verify(CHAIN([2, 3], 7), 11)
        assert not v.verify(CHAIN([2, 3], 7), N(11))

    def test_sentence_claim(self):
        v = NormalFormVerifier()
        assert v.verify(SEQ(FUSE(3, 5, 11), N(3)), SEQ(N(19), N(3)))

    def test_certificate(self):
        cert = NormalFormVerifier().certificate(FUSE(3, 5, 11), 19)
        assert cert["verified"]
        assert cert["claimed"] == 19
        assert cert["actual"] == "N(19)"
        assert cert["steps"] == 1
        assert cert["trace"] == ["FUSE(3, 5, 11) →[FUSE] N(19)"]

    def test_default_reducer(self):
        assert isinstance(NormalFormVerifier().reducer, ReductionSystem)


# ── Strong normalization ─────────────────────────────────────────────────────

class TestStrongNormalization:
    def test_fusion_shrinks(self):
        report = demonstrate_strong_normalization(FUSE(3, 5, 11))
        assert report.sizes == [2, 1]
        assert report.verified
        assert report.steps == 1

    def test_chain_over_fusion(self):
        report = demonstrate_strong_normalization(CHAIN([2, 3], FUSE(3, 5, 11)))
        assert report.sizes == [4, 3, 2, 1]
        assert report.strictly_decreasing

    @pytest.mark.parametrize("term", confluence_examples(), ids=lambda t: t.name)
    def test_examples_shrink(self, term):
        assert demonstrate_strong_normalization(term).verified

    @given(st.lists(primes, min_size=0, max_size=10), primes)
    def test_chains_shrink(self, ops, noun):
        report = demonstrate_strong_normalization(CHAIN(ops, noun),
                                                  ReductionSystem(NextPrimeOperator()))
        assert report.verified
        assert report.steps == len(ops)

    def test_violation_reported(self):
        report = StrongNormalizationReport("t", "N(3)", [3, 2, 2, 1], [2])
        assert not report.strictly_decreasing
        assert not report.verified
        assert "violations" in repr(report)

    def test_verbose(self, capsys):
        demonstrate_strong_normalization(FUSE(3, 5, 11), verbose=True)
        assert "strictly decreasing" in capsys.readouterr().out


# ── Confluence ───────────────────────────────────────────────────────────────

class TestConfluence:
    def test_examples_are_confluent(self):
        results = check_local_confluence()
        assert results["all_confluent"]
        assert len(results["cases"]) == len(confluence_examples())
        for case in results["cases"]:
            assert len(case["normal_forms"]) == 1

    def test_confluent_under_every_operator(self):
        for op in (NextPrimeOperator(), IdentityPrimeOperator()):
            assert check_local_confluence(ReductionSystem(op))["all_confluent"]

    def test_custom_terms(self):
        results = check_local_confluence(terms=[SEQ(N(3), N(5))])
        assert results["cases"][0]["normal_forms"] == ["(S(N(3)) ∘ S(N(5)))"]

    def test_overlapping_redexes_explored(self):
        term = SEQ(FUSE(3, 5, 11), FUSE(5, 7, 11))
        assert normal_forms(term) == {SEQ(N(19), N(23))}

    def test_implication(self):
        forms = normal_forms(IMPL(FUSE(3, 5, 11), CHAIN([3], N(7))),
                             ReductionSystem(NextPrimeOperator()))
        assert forms == {IMPL(N(19), N(11))}

    def test_diverging_system_detected(self):
        class Coin(ReductionSystem):
            def reducts(self, term):
                if term == A(3):
                    return [ReductionStep("HEADS", term, N(3)), ReductionStep("TAILS", term, N(5))]
                return super().reducts(term)

        results = check_local_confluence(Coin(), terms=[A(3)])
        assert not results["all_confluent"]
        assert results["cases"][0]["normal_forms"] == ["N(3)", "N(5)"]

    def test_exploration_is_bounded(self):
        class Growing(ReductionSystem):
            def reducts(self, term):
                if isinstance(term, ChainTerm):
                    return [ReductionStep("EXPAND", term,
                                          ChainTerm(term.operators + (A(2),), term.noun))]
                return super().reducts(term)

        with pytest.raises(NonTerminationError):
            normal_forms(CHAIN([2], 7), Growing(max_steps=10))

    def test_verbose(self, capsys):
        check_local_confluence(verbose=True)
        assert "[ok]" in capsys.readouterr().out
