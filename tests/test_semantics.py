"""
Tests for operational / denotational agreement.

Claims:
    - whenever a term normalizes to N(v), its denotation is ConstExpr(v)
    - sequences and implications agree component by component
    - one operator drives both sides; swapping it changes both alike
    - terms without a prime meaning are reported as not comparable
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from primecalc.core.errors import IllFormedFusionError
from primecalc.core.primes import first_n_primes
from primecalc.core.terms import NounTerm, NounSentence, N, A, FUSE, CHAIN, SENTENCE, SEQ, IMPL
from primecalc.lambda_calc.expr import ConstExpr, PairExpr
from primecalc.reduction.operators import (
    NextPrimeOperator, ModularPrimeOperator, IdentityPrimeOperator, make_operator,
)
from primecalc.reduction.verify import confluence_examples
from primecalc.semantics import Semantics, SemanticCheck, operational_value, denotational_value


primes = st.sampled_from(first_n_primes(20))
operators = st.sampled_from(["next_prime", "modular_prime", "identity"])


@st.composite
def noun_terms(draw):
    kind = draw(st.integers(0, 2))
    if kind == 0:
        return N(draw(primes))
    if kind == 1:
        return CHAIN(draw(st.lists(primes, min_size=1, max_size=5)), draw(primes))
    return CHAIN(draw(st.lists(primes, min_size=0, max_size=3)),
                 draw(st.sampled_from([FUSE(3, 5, 11), FUSE(5, 7, 11), FUSE(3, 7, 13)])))


# ── Denotation ───────────────────────────────────────────────────────────────

class TestDenote:
    def test_resonance_chain(self):
        assert Semantics().denote(CHAIN([2, 3], N(7))) == ConstExpr(47)

    def test_fusion(self):
        assert Semantics().denote(FUSE(3, 5, 11)) == ConstExpr(19)

    def test_sequence(self):
        assert Semantics(NextPrimeOperator()).denote(SEQ(CHAIN([2], 5), N(3))) == \
            PairExpr(ConstExpr(7), ConstExpr(3))

    def test_ill_formed_fusion(self):
        with pytest.raises(IllFormedFusionError):
            Semantics().denote(FUSE(3, 5, 7))

    def test_shared_operator(self):
        op = NextPrimeOperator()
        sem = Semantics(op)
        assert sem.reducer.operator is op
        assert sem.translator.operator is op
        assert sem.evaluator.operator is op

    def test_separate_defaults(self):
        assert Semantics().operator is not Semantics().operator


# ── Agreement ────────────────────────────────────────────────────────────────

class TestAgreement:
    @settings(max_examples=60)
    @given(noun_terms(), operators)
    def test_denotation_matches_normal_form(self, term, op_name):
        sem = Semantics(make_operator(op_name))
        nf = sem.reducer.evaluate(term)
        assert isinstance(nf, NounTerm)
        assert sem.denote(term) == ConstExpr(nf.prime)

    @given(noun_terms(), noun_terms())
    def test_sequences_agree(self, t1, t2):
        check = Semantics(NextPrimeOperator()).verify_semantic_equivalence(SEQ(t1, t2))
        assert check.comparable
        assert check.equivalent

    @pytest.mark.parametrize("term", confluence_examples(), ids=lambda t: t.name)
    def test_examples_agree(self, term):
        check = Semantics().verify_semantic_equivalence(term)
        assert check.comparable and check.equivalent

    def test_check_contents(self):
        check = Semantics(NextPrimeOperator()).verify_semantic_equivalence(
            IMPL(FUSE(3, 5, 11), CHAIN([3], N(7))))
        assert check.operational == ("impl", 19, 11)
        assert check.denotational == ("impl", 19, 11)
        assert check.to_dict()["equivalent"]
        assert "agree" in repr(check)

    def test_identity_keeps_noun(self):
        check = Semantics(IdentityPrimeOperator()).verify_semantic_equivalence(
            CHAIN([A(2), A(3)], N(7)))
        assert check.operational == 7 == check.denotational

    def test_modular_operator(self):
        sem = Semantics(ModularPrimeOperator(base=100))
        assert sem.verify_semantic_equivalence(CHAIN([3, 5], N(7))).equivalent

    def test_adjective_not_comparable(self):
        check = Semantics().verify_semantic_equivalence(A(3))
        assert not check.comparable
        assert not check.equivalent
        assert "not comparable" in repr(check)


# ── Equivalence ──────────────────────────────────────────────────────────────

class TestEquivalent:
    def test_same_prime(self):
        sem = Semantics(NextPrimeOperator())
        assert sem.equivalent(CHAIN([2, 3], N(7)), N(13))
        assert not sem.equivalent(CHAIN([2, 3], N(7)), N(11))

    def test_adjectives_up_to_renaming(self):
        sem = Semantics()
        assert sem.equivalent(A(3), A(3))
        assert not sem.equivalent(A(3), A(5))

    def test_pairs(self):
        sem = Semantics()
        assert sem.equivalent(SEQ(FUSE(3, 5, 11), N(3)), SEQ(N(19), N(3)))


# ── Value extraction ─────────────────────────────────────────────────────────

class TestValues:
    def test_operational(self):
        assert operational_value(N(7)) == 7
        assert operational_value(SENTENCE(7)) == 7
        assert operational_value(SEQ(N(3), N(5))) == ("pair", 3, 5)
        assert operational_value(A(3)) is None

    def test_denotational(self):
        assert denotational_value(ConstExpr(7)) == 7
        assert denotational_value(PairExpr(ConstExpr(3), ConstExpr(5))) == ("pair", 3, 5)

    def test_partial_pair_not_comparable(self):
        check = Semantics().verify_semantic_equivalence(SEQ(N(3), NounSentence(A(3))))
        assert isinstance(check, SemanticCheck)
        assert check.operational == ("pair", 3, None)
        assert check.denotational == ("pair", 3, None)
        assert not check.comparable
