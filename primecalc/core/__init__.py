from .primes import is_prime, next_prime, primes_up_to, first_n_primes, nth_prime
from .errors import (
    CalculusError, InvalidPrimeError, TypeMismatchError, OperatorDomainError,
    IllFormedFusionError, NonTerminationError, UntranslatableTermError,
)
from .terms import (
    NounTerm, AdjTerm, ChainTerm, FusionTerm,
    NounSentence, SeqSentence, ImplSentence,
    N, A, FUSE, CHAIN, SENTENCE, SEQ, IMPL,
    is_sentence, discourse_state,
    is_normal_form, is_reducible, term_size,
    term_to_dict, term_from_dict,
)
from .types import (
    NounType, AdjType, SentenceType, NOUN, ADJ, SENTENCE_ATOM,
    TypingContext, TypingJudgment, TypeChecker,
)

__all__ = [
    "is_prime", "next_prime", "primes_up_to", "first_n_primes", "nth_prime",
    "CalculusError", "InvalidPrimeError", "TypeMismatchError", "OperatorDomainError",
    "IllFormedFusionError", "NonTerminationError", "UntranslatableTermError",
    "NounTerm", "AdjTerm", "ChainTerm", "FusionTerm",
    "NounSentence", "SeqSentence", "ImplSentence",
    "N", "A", "FUSE", "CHAIN", "SENTENCE", "SEQ", "IMPL",
    "is_sentence", "discourse_state",
    "is_normal_form", "is_reducible", "term_size",
    "term_to_dict", "term_from_dict",
    "NounType", "AdjType", "SentenceType", "NOUN", "ADJ", "SENTENCE_ATOM",
    "TypingContext", "TypingJudgment", "TypeChecker",
]
