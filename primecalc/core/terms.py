"""
Core data structures: the prime-indexed term algebra.

These are the atoms of the whole system. Nothing in here depends on
reduction rules, operators, or the lambda layer.

Terms:
    N(p)                  NounTerm       a value; the only normal form
    A(p)                  AdjTerm        an operator; stuck on its own
    A(p1)...A(pk) N(q)    ChainTerm      operators apply right-to-left
    FUSE(p, q, r)         FusionTerm     reduces to N(p+q+r)

Sentences:
    [e]                   NounSentence   wraps one noun-typed term
    (s1 ∘ s2)             SeqSentence    sequential composition
    (s1 ⇒ s2)             ImplSentence   implication

Every term is a frozen dataclass. Reduction and substitution build new
terms; nothing is mutated. The `name` of a term is its structural
signature and doubles as its identity when comparing non-noun normal forms.
"""

from dataclasses import dataclass

from .errors import InvalidPrimeError, IllFormedFusionError, TypeMismatchError
from .primes import is_prime, primes_up_to


def _require_prime(value, where: str):
    if not is_prime(value):
        raise InvalidPrimeError(f"{where} requires prime number, got {value!r}", value)


# ============================================================
# Noun and adjective terms
# ============================================================

@dataclass(frozen=True)
class NounTerm:
    """N(p): a noun indexed by prime p. Denotes p itself."""
    prime: int

    def __post_init__(self):
        _require_prime(self.prime, "NounTerm")

    @property
    def name(self):
        return f"N({self.prime})"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class AdjTerm:
    """
    A(p): an adjective indexed by prime p.

    Denotes a partial function on primes whose domain is {q : p < q}.
    Standing alone it cannot reduce; it needs a noun to act on.
    """
    prime: int

    def __post_init__(self):
        _require_prime(self.prime, "AdjTerm")

    @property
    def name(self):
        return f"A({self.prime})"

    def can_apply_to(self, noun: NounTerm) -> bool:
        """The ordering constraint p < q."""
        if not isinstance(noun, NounTerm):
            raise TypeMismatchError("N", noun, term=noun)
        return self.prime < noun.prime

    def __repr__(self):
        return self.name


# ============================================================
# Chains and fusions
# ============================================================

@dataclass(frozen=True)
class ChainTerm:
    """
    A(p1) A(p2) ... A(pk) N(q): an operator chain applied to a noun.

    The rightmost operator acts first. The chain always carries at least
    one operator; CHAIN() collapses an empty chain to its bare noun.
    The noun is an N or a FUSE. Operators are not type checked here:
    that is the TypeChecker's job.
    """
    operators: tuple
    noun: object

    def __post_init__(self):
        object.__setattr__(self, "operators", tuple(self.operators))
        if not self.operators:
            raise TypeMismatchError(
                "A", None,
                message="ChainTerm needs at least one operator; use CHAIN() for a bare noun")
        if not isinstance(self.noun, (NounTerm, FusionTerm)):
            raise TypeMismatchError(
                "N", self.noun, term=self.noun,
                message=f"ChainTerm noun must be N or FUSE, got {self.noun!r}")

    @property
    def name(self):
        ops = " ".join(op.name for op in self.operators)
        return f"{ops} {self.noun.name}"

    @property
    def length(self):
        return len(self.operators)

    def is_well_formed(self) -> bool:
        """The innermost operator must be smaller than the noun it meets."""
        if not isinstance(self.noun, NounTerm):
            return False
        return self.operators[-1].prime < self.noun.prime

    def prepend(self, operator: AdjTerm) -> "ChainTerm":
        return ChainTerm((operator,) + self.operators, self.noun)

    def all_primes(self) -> list:
        noun_primes = [self.noun.prime] if hasattr(self.noun, "prime") else []
        return [op.prime for op in self.operators] + noun_primes

    def __repr__(self):
        return f"ChainTerm({self.name})"


@dataclass(frozen=True)
class FusionTerm:
    """
    FUSE(p, q, r): triadic prime fusion.

    Construction requires p, q, r to be distinct odd primes.
    Well-formed when additionally p + q + r is prime.
    """
    p: int
    q: int
    r: int

    def __post_init__(self):
        for value in (self.p, self.q, self.r):
            _require_prime(value, "FusionTerm")
        if 2 in (self.p, self.q, self.r):
            raise InvalidPrimeError(
                f"FusionTerm requires odd primes, got ({self.p}, {self.q}, {self.r})", 2)
        if len({self.p, self.q, self.r}) != 3:
            raise InvalidPrimeError(
                f"FusionTerm requires distinct primes, got ({self.p}, {self.q}, {self.r})")

    @property
    def name(self):
        return f"FUSE({self.p}, {self.q}, {self.r})"

    @property
    def is_well_formed(self) -> bool:
        return is_prime(self.p + self.q + self.r)

    @property
    def fused_prime(self) -> int:
        if not self.is_well_formed:
            raise IllFormedFusionError(
                f"Cannot fuse {self.name}: {self.p + self.q + self.r} is not prime")
        return self.p + self.q + self.r

    def to_noun(self) -> NounTerm:
        return NounTerm(self.fused_prime)

    def canonical(self) -> "FusionTerm":
        """Same triad with primes sorted ascending."""
        return FusionTerm(*sorted((self.p, self.q, self.r)))

    @staticmethod
    def find_triads(target: int) -> list:
        """
        Every triad p < q < r of distinct odd primes with p + q + r == target.

        Returns [] when target is not prime.
        """
        if not is_prime(target):
            return []
        odd = [p for p in primes_up_to(target) if p > 2]
        odd_set = set(odd)
        triads = []
        for i, p in enumerate(odd):
            if 3 * p >= target:
                break
            for q in odd[i + 1:]:
                r = target - p - q
                if r <= q:
                    break
                if r in odd_set:
                    triads.append(FusionTerm(p, q, r))
        return triads

    def __repr__(self):
        return self.name


# ============================================================
# Sentences
# ============================================================

@dataclass(frozen=True)
class NounSentence:
    """[e]: a noun-denoting expression read as a one-token discourse."""
    expr: object

    def __post_init__(self):
        if not isinstance(self.expr, (NounTerm, AdjTerm, ChainTerm, FusionTerm)):
            raise TypeMismatchError(
                "N", self.expr,
                message=f"NounSentence wraps a term, got {self.expr!r}")

    @property
    def name(self):
        return f"S({self.expr.name})"

    def __repr__(self):
        return f"NounSentence({self.expr.name})"


@dataclass(frozen=True)
class SeqSentence:
    """s1 ∘ s2: discourse concatenation."""
    left: object
    right: object

    @property
    def name(self):
        return f"({self.left.name} ∘ {self.right.name})"

    def __repr__(self):
        return f"SeqSentence{self.name}"


@dataclass(frozen=True)
class ImplSentence:
    """
    s1 ⇒ s2: implication.

    Holds when the antecedent's discourse state is a prefix of the
    consequent's.
    """
    antecedent: object
    consequent: object

    @property
    def name(self):
        return f"({self.antecedent.name} ⇒ {self.consequent.name})"

    def holds(self) -> bool:
        ante = discourse_state(self.antecedent)
        cons = discourse_state(self.consequent)
        return cons[:len(ante)] == ante

    def __repr__(self):
        return f"ImplSentence{self.name}"


SENTENCE_TYPES = (NounSentence, SeqSentence, ImplSentence)
TERM_TYPES = (NounTerm, AdjTerm, ChainTerm, FusionTerm) + SENTENCE_TYPES


def is_sentence(term) -> bool:
    return isinstance(term, SENTENCE_TYPES)


def discourse_state(sentence) -> list:
    """
    The sequence of primes a sentence puts into the discourse.

    [N(p)] -> [p];  [chain] -> every prime in the chain;
    [FUSE(p,q,r)] -> [p+q+r];  s1 ∘ s2 -> concatenation.
    Implications assert a relation, not a discourse, so they have none.
    """
    if isinstance(sentence, NounSentence):
        expr = sentence.expr
        if isinstance(expr, NounTerm):
            return [expr.prime]
        if isinstance(expr, ChainTerm):
            return expr.all_primes()
        if isinstance(expr, FusionTerm):
            return [expr.fused_prime]
        raise TypeMismatchError("N", expr, term=expr)
    if isinstance(sentence, SeqSentence):
        return discourse_state(sentence.left) + discourse_state(sentence.right)
    raise TypeMismatchError("S", sentence, term=sentence,
                            message=f"no discourse state for {getattr(sentence, 'name', sentence)}")


# ============================================================
# Term builders
# ============================================================

def N(prime: int) -> NounTerm:
    return NounTerm(prime)


def A(prime: int) -> AdjTerm:
    return AdjTerm(prime)


def FUSE(p: int, q: int, r: int) -> FusionTerm:
    return FusionTerm(p, q, r)


def CHAIN(operators, noun):
    """
    Build A(p1)...A(pk) N(q). Integers are lifted to A(p) / N(q).
    An empty operator list gives back the bare noun.
    """
    ops = tuple(A(p) if isinstance(p, int) else p for p in operators)
    n = N(noun) if isinstance(noun, int) else noun
    if not ops:
        return n
    return ChainTerm(ops, n)


def SENTENCE(expr) -> NounSentence:
    if isinstance(expr, int):
        expr = N(expr)
    return NounSentence(expr)


def _as_sentence(s):
    return s if is_sentence(s) else SENTENCE(s)


def SEQ(s1, s2) -> SeqSentence:
    return SeqSentence(_as_sentence(s1), _as_sentence(s2))


def IMPL(s1, s2) -> ImplSentence:
    return ImplSentence(_as_sentence(s1), _as_sentence(s2))


# ============================================================
# Structural measures
# ============================================================

def is_normal_form(term) -> bool:
    """Normal form = NounTerm. Nothing else is a value."""
    return isinstance(term, NounTerm)


def is_reducible(term) -> bool:
    if isinstance(term, (NounTerm, AdjTerm)):
        return False
    if isinstance(term, ChainTerm):
        # stuck on an ill-formed fusion
        if isinstance(term.noun, FusionTerm):
            return term.noun.is_well_formed
        return True
    if isinstance(term, FusionTerm):
        return term.is_well_formed
    if isinstance(term, NounSentence):
        return is_reducible(term.expr)
    if isinstance(term, SeqSentence):
        return is_reducible(term.left) or is_reducible(term.right)
    if isinstance(term, ImplSentence):
        return is_reducible(term.antecedent) or is_reducible(term.consequent)
    return False


def term_size(term) -> int:
    """
    Termination measure. Every reduction step strictly lowers it.

    A fusion counts 2 so that FUSE(p,q,r) -> N(p+q+r) is a strict decrease.
    """
    if isinstance(term, (NounTerm, AdjTerm)):
        return 1
    if isinstance(term, FusionTerm):
        return 2
    if isinstance(term, ChainTerm):
        return len(term.operators) + term_size(term.noun)
    if isinstance(term, NounSentence):
        return term_size(term.expr)
    if isinstance(term, SeqSentence):
        return term_size(term.left) + term_size(term.right)
    if isinstance(term, ImplSentence):
        return term_size(term.antecedent) + term_size(term.consequent)
    raise TypeMismatchError("term", term, message=f"term_size: not a term: {term!r}")


# ============================================================
# Serialization
# ============================================================

def term_to_dict(term) -> dict:
    """Plain JSON-compatible dict for any term shape."""
    if isinstance(term, NounTerm):
        return {"type": "N", "prime": term.prime}
    if isinstance(term, AdjTerm):
        return {"type": "A", "prime": term.prime}
    if isinstance(term, FusionTerm):
        return {"type": "FUSE", "p": term.p, "q": term.q, "r": term.r}
    if isinstance(term, ChainTerm):
        return {"type": "chain",
                "operators": [term_to_dict(op) for op in term.operators],
                "noun": term_to_dict(term.noun)}
    if isinstance(term, NounSentence):
        return {"type": "sentence", "expr": term_to_dict(term.expr)}
    if isinstance(term, SeqSentence):
        return {"type": "seq", "left": term_to_dict(term.left),
                "right": term_to_dict(term.right)}
    if isinstance(term, ImplSentence):
        return {"type": "impl", "antecedent": term_to_dict(term.antecedent),
                "consequent": term_to_dict(term.consequent)}
    raise TypeMismatchError("term", term, message=f"cannot serialize {term!r}")


def term_from_dict(data: dict):
    """Inverse of term_to_dict. Constructors re-validate every prime."""
    kind = data["type"]
    if kind == "N":
        return NounTerm(data["prime"])
    if kind == "A":
        return AdjTerm(data["prime"])
    if kind == "FUSE":
        return FusionTerm(data["p"], data["q"], data["r"])
    if kind == "chain":
        return ChainTerm(tuple(term_from_dict(op) for op in data["operators"]),
                         term_from_dict(data["noun"]))
    if kind == "sentence":
        return NounSentence(term_from_dict(data["expr"]))
    if kind == "seq":
        return SeqSentence(term_from_dict(data["left"]), term_from_dict(data["right"]))
    if kind == "impl":
        return ImplSentence(term_from_dict(data["antecedent"]),
                            term_from_dict(data["consequent"]))
    raise ValueError(f"Unknown term type: {kind!r}")
