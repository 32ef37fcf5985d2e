"""
The type system: Γ ⊢ e : T.

Three ground shapes:
    NounType        N   nouns, chains, well-formed fusions
    AdjType         A   adjectives
    SentenceType    S   with a form: "atom" for [e],
                        "product" for s1 ∘ s2, "function" for s1 ⇒ s2

A TypingContext binds names to types (and optionally to the terms that
witness them). Contexts are immutable; bind() returns a new one.
"""

from dataclasses import dataclass, field
from typing import Optional

from .errors import TypeMismatchError
from .terms import (
    NounTerm, AdjTerm, ChainTerm, FusionTerm,
    NounSentence, SeqSentence, ImplSentence,
    is_sentence,
)


@dataclass(frozen=True)
class NounType:
    @property
    def name(self):
        return "N"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class AdjType:
    @property
    def name(self):
        return "A"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class SentenceType:
    """
    S, refined by how the sentence was built.

    product:  both components are kept side by side (s1 ∘ s2)
    function: the antecedent's meaning maps to the consequent's (s1 ⇒ s2)
    """
    form: str = "atom"
    left: Optional["SentenceType"] = None
    right: Optional["SentenceType"] = None

    @property
    def name(self):
        if self.form == "product":
            return f"({self.left.name} × {self.right.name})"
        if self.form == "function":
            return f"({self.left.name} → {self.right.name})"
        return "S"

    def __repr__(self):
        return self.name


NOUN = NounType()
ADJ = AdjType()
SENTENCE_ATOM = SentenceType()


def same_kind(t1, t2) -> bool:
    """Equal up to sentence refinement: any SentenceType matches any other."""
    if isinstance(t1, SentenceType) and isinstance(t2, SentenceType):
        return True
    return t1 == t2


@dataclass(frozen=True)
class TypingContext:
    """Γ: name -> (type, witnessing term or None)."""
    bindings: tuple = field(default_factory=tuple)

    def bind(self, name: str, type_, term=None) -> "TypingContext":
        kept = tuple(b for b in self.bindings if b[0] != name)
        return TypingContext(kept + ((name, type_, term),))

    def _find(self, name):
        for binding in self.bindings:
            if binding[0] == name:
                return binding
        return None

    def get_type(self, name):
        binding = self._find(name)
        return binding[1] if binding else None

    def get_term(self, name):
        binding = self._find(name)
        return binding[2] if binding else None

    def __contains__(self, name):
        return self._find(name) is not None

    def __len__(self):
        return len(self.bindings)

    @property
    def name(self):
        entries = ", ".join(f"{n}: {t.name}" for n, t, _ in self.bindings)
        return f"Γ = {{{entries}}}"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class TypingJudgment:
    """Γ ⊢ e : T, as derived by the TypeChecker."""
    context: TypingContext
    term: object
    type: object

    @property
    def name(self):
        return f"{self.context.name} ⊢ {self.term.name} : {self.type.name}"

    def is_valid(self) -> bool:
        """Re-derive the type and compare. Never raises."""
        try:
            return TypeChecker().infer(self.term) == self.type
        except TypeMismatchError:
            return False

    def __repr__(self):
        return f"TypingJudgment({self.name})"


class TypeChecker:
    """Typing rules for the prime-indexed calculus."""

    def infer(self, term):
        """The type of term, or TypeMismatchError naming what was expected."""
        if isinstance(term, NounTerm):
            return NOUN
        if isinstance(term, AdjTerm):
            return ADJ
        if isinstance(term, FusionTerm):
            if not term.is_well_formed:
                raise TypeMismatchError(
                    NOUN, "ill-formed fusion", term=term,
                    message=f"expected N, but {term.name} is ill-formed "
                            f"({term.p + term.q + term.r} is not prime)")
            return NOUN
        if isinstance(term, ChainTerm):
            for op in term.operators:
                actual = self._infer_or_none(op)
                if actual != ADJ:
                    raise TypeMismatchError(ADJ, actual, term=op)
            # only N or FUSE can sit under the operators
            if not isinstance(term.noun, (NounTerm, FusionTerm)):
                raise TypeMismatchError(NOUN, self._infer_or_none(term.noun), term=term.noun,
                                        message=f"chain noun must be N or FUSE, got {term.noun!r}")
            noun_type = self.infer(term.noun)
            if noun_type != NOUN:
                raise TypeMismatchError(NOUN, noun_type, term=term.noun)
            return NOUN
        if isinstance(term, NounSentence):
            expr_type = self.infer(term.expr)
            if expr_type != NOUN:
                raise TypeMismatchError(NOUN, expr_type, term=term.expr)
            return SENTENCE_ATOM
        if isinstance(term, SeqSentence):
            return SentenceType("product",
                                self._infer_sentence(term.left),
                                self._infer_sentence(term.right))
        if isinstance(term, ImplSentence):
            return SentenceType("function",
                                self._infer_sentence(term.antecedent),
                                self._infer_sentence(term.consequent))
        raise TypeMismatchError("term", type(term).__name__,
                                message=f"not a term of the calculus: {term!r}")

    def _infer_or_none(self, term):
        if isinstance(term, (NounTerm, AdjTerm, ChainTerm, FusionTerm)) or is_sentence(term):
            return self.infer(term)
        return None

    def _infer_sentence(self, term):
        if not is_sentence(term):
            raise TypeMismatchError(SENTENCE_ATOM, self._infer_or_none(term), term=term)
        return self.infer(term)

    def check(self, term, context: Optional[TypingContext] = None, expected=None) -> TypingJudgment:
        """
        Derive Γ ⊢ term : T.

        With expected given, a different type is a TypeMismatchError.
        Sentence types match each other regardless of form unless the
        expected type is itself refined (product or function).
        """
        if context is None:
            context = TypingContext()
        actual = self.infer(term)
        if expected is not None:
            refined = isinstance(expected, SentenceType) and expected.form != "atom"
            ok = actual == expected if refined else same_kind(expected, actual)
            if not ok:
                raise TypeMismatchError(expected, actual, term=term)
        return TypingJudgment(context, term, actual)

    def check_context(self, context: TypingContext) -> list:
        """Check every binding that carries a term. Returns the judgments."""
        judgments = []
        for name, type_, term in context.bindings:
            if term is not None:
                judgments.append(self.check(term, context, expected=type_))
        return judgments

    def check_application(self, adj, noun) -> dict:
        """Can adj act on noun? Reports the p < q ordering constraint."""
        if self._infer_or_none(adj) != ADJ:
            return {"valid": False, "reason": "Adjective ill-typed"}
        if self._infer_or_none(noun) != NOUN or not isinstance(noun, NounTerm):
            return {"valid": False, "reason": "Noun ill-typed"}
        if not adj.can_apply_to(noun):
            return {"valid": False,
                    "reason": f"Ordering constraint violated: {adj.prime} ≮ {noun.prime}"}
        return {"valid": True, "reason": ""}

    def check_fusion(self, fusion: FusionTerm) -> dict:
        if not fusion.is_well_formed:
            return {"valid": False,
                    "reason": f"Fusion ill-formed: {fusion.p} + {fusion.q} + {fusion.r} "
                              f"= {fusion.p + fusion.q + fusion.r} is not prime"}
        return {"valid": True, "reason": "", "result": fusion.fused_prime}
