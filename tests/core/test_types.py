"""
Tests for the type system.

Claims:
    - nouns, chains and well-formed fusions have type N; adjectives A
    - a chain with a noun where an adjective belongs is a TypeMismatchError
    - sentences get refined types: atom, product (∘), function (⇒)
    - check() with an expected type rejects mismatches
    - contexts are immutable and checkable
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from primecalc.core.errors import TypeMismatchError
from primecalc.core.primes import first_n_primes
from primecalc.core.terms import ChainTerm, NounSentence, SeqSentence, N, A, FUSE, CHAIN, SENTENCE, SEQ, IMPL
from primecalc.core.types import (
    NounType, AdjType, SentenceType, NOUN, ADJ, SENTENCE_ATOM,
    TypingContext, TypingJudgment, TypeChecker,
)


checker = TypeChecker()
primes = st.sampled_from(first_n_primes(20))


# ── Inference ────────────────────────────────────────────────────────────────

class TestInfer:
    def test_ground_types(self):
        assert checker.infer(N(7)) == NOUN
        assert checker.infer(A(7)) == ADJ
        assert checker.infer(FUSE(3, 5, 11)) == NOUN

    def test_ill_formed_fusion_rejected(self):
        with pytest.raises(TypeMismatchError, match="ill-formed"):
            checker.infer(FUSE(3, 5, 7))

    @given(st.lists(primes, min_size=1, max_size=5), primes)
    def test_chains_are_nouns(self, ops, noun):
        assert checker.infer(CHAIN(ops, noun)) == NOUN

    def test_noun_in_operator_position(self):
        bad = ChainTerm((A(2), N(5)), N(7))
        with pytest.raises(TypeMismatchError) as exc_info:
            checker.check(bad)
        assert exc_info.value.expected == ADJ
        assert exc_info.value.actual == NOUN
        assert exc_info.value.term == N(5)

    def test_mismatch_message(self):
        with pytest.raises(TypeMismatchError, match=r"expected A, got N in N\(5\)"):
            checker.infer(ChainTerm((N(5),), N(7)))

    def test_mismatch_is_a_type_error(self):
        with pytest.raises(TypeError):
            checker.infer(ChainTerm((N(5),), N(7)))

    def test_adjective_in_noun_position(self):
        with pytest.raises(TypeMismatchError):
            checker.infer(ChainTerm((A(2),), A(7)))

    def test_chain_in_noun_position(self):
        inner = CHAIN([3], 7)
        nested = object.__new__(ChainTerm)
        object.__setattr__(nested, "operators", (A(2),))
        object.__setattr__(nested, "noun", inner)
        with pytest.raises(TypeMismatchError, match="must be N or FUSE") as exc_info:
            checker.infer(nested)
        assert exc_info.value.expected == NOUN
        assert exc_info.value.term == inner

    def test_fusion_in_noun_position(self):
        assert checker.infer(CHAIN([2], FUSE(3, 5, 11))) == NOUN

    def test_sentence_types(self):
        assert checker.infer(SENTENCE(7)) == SENTENCE_ATOM
        seq = checker.infer(SEQ(N(3), N(5)))
        assert seq == SentenceType("product", SENTENCE_ATOM, SENTENCE_ATOM)
        assert seq.name == "(S × S)"
        impl = checker.infer(IMPL(N(3), SEQ(N(3), N(5))))
        assert impl.name == "(S → (S × S))"

    def test_sentence_of_adjective(self):
        with pytest.raises(TypeMismatchError):
            checker.infer(NounSentence(A(3)))

    def test_seq_of_non_sentences(self):
        with pytest.raises(TypeMismatchError):
            checker.infer(SeqSentence(N(3), SENTENCE(5)))

    def test_not_a_term(self):
        with pytest.raises(TypeMismatchError, match="not a term"):
            checker.infer(42)


# ── Checking ─────────────────────────────────────────────────────────────────

class TestCheck:
    def test_judgment(self):
        j = checker.check(CHAIN([2], 7))
        assert j.type == NOUN
        assert j.name == "Γ = {} ⊢ A(2) N(7) : N"
        assert j.is_valid()

    def test_expected_mismatch(self):
        with pytest.raises(TypeMismatchError):
            checker.check(A(3), expected=NOUN)

    def test_any_sentence_matches_atom(self):
        j = checker.check(SEQ(N(3), N(5)), expected=SENTENCE_ATOM)
        assert j.type.form == "product"

    def test_refined_expectation_is_exact(self):
        with pytest.raises(TypeMismatchError):
            checker.check(SEQ(N(3), N(5)),
                          expected=SentenceType("function", SENTENCE_ATOM, SENTENCE_ATOM))

    def test_invalid_judgment(self):
        assert not TypingJudgment(TypingContext(), A(3), NOUN).is_valid()
        assert not TypingJudgment(TypingContext(), FUSE(3, 5, 7), NOUN).is_valid()

    def test_application(self):
        assert checker.check_application(A(3), N(7))["valid"]
        result = checker.check_application(A(11), N(7))
        assert not result["valid"]
        assert "Ordering" in result["reason"]
        assert not checker.check_application(N(3), N(7))["valid"]

    def test_fusion_check(self):
        assert checker.check_fusion(FUSE(3, 5, 11)) == {"valid": True, "reason": "", "result": 19}
        assert not checker.check_fusion(FUSE(3, 5, 7))["valid"]


# ── Contexts ─────────────────────────────────────────────────────────────────

class TestContext:
    def test_bind_returns_new_context(self):
        empty = TypingContext()
        ctx = empty.bind("x", NOUN, N(7))
        assert len(empty) == 0
        assert "x" in ctx
        assert ctx.get_type("x") == NOUN
        assert ctx.get_term("x") == N(7)
        assert ctx.get_type("y") is None

    def test_rebinding_replaces(self):
        ctx = TypingContext().bind("x", NOUN).bind("x", ADJ)
        assert len(ctx) == 1
        assert ctx.get_type("x") == ADJ

    def test_name(self):
        ctx = TypingContext().bind("x", NOUN).bind("f", ADJ)
        assert ctx.name == "Γ = {x: N, f: A}"

    def test_check_context(self):
        ctx = TypingContext().bind("x", NOUN, CHAIN([2], 7)).bind("f", ADJ, A(3)).bind("y", NOUN)
        judgments = checker.check_context(ctx)
        assert [j.type for j in judgments] == [NOUN, ADJ]

    def test_check_context_catches_bad_binding(self):
        ctx = TypingContext().bind("x", NOUN, A(3))
        with pytest.raises(TypeMismatchError):
            checker.check_context(ctx)

    def test_type_singletons(self):
        assert NounType() == NOUN
        assert AdjType() == ADJ
