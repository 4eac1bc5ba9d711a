"""
Core word-level Byte Pair Encoding (BPE) operations.
"""

from collections import Counter
from typing import Final, TYPE_CHECKING
import logging

import regex as re

from .errors import EmptyInputError, NoMergeableContentError
from .types import END_WORD, SPACE_TOKEN, Corpus, Symbol, SymbolPair, TokenSequence

if TYPE_CHECKING:
    from .rules import MergeRuleTable

# maximal runs of non-whitespace
WORD_PATTERN: Final = re.compile(r"\S+")

log = logging.getLogger(__name__)


def build_corpus(text: str) -> Corpus:
    """
    Split text into words and convert each word into symbols.

    Every word becomes the code units of its UTF-8 encoding followed by the
    ``END_WORD`` marker.

    :param text: Raw input text.
    :returns: One symbol list per whitespace-delimited word.
    :raises EmptyInputError: If ``text`` is empty or holds only whitespace.
    """
    if not text:
        raise EmptyInputError("text is empty")

    corpus: Corpus = [
        [*word.encode("utf-8"), END_WORD] for word in WORD_PATTERN.findall(text)
    ]
    if not corpus:
        raise EmptyInputError("text contains no words")

    log.debug(f"built corpus of {len(corpus)} words")
    return corpus


def count_pairs(corpus: Corpus) -> Counter[SymbolPair]:
    """
    Count adjacent symbol pairs within each word.

    Pairs whose second symbol is the word marker are skipped. Keys are inserted
    in the order they are first seen, which ``select_pair`` relies on.
    """
    counts: Counter[SymbolPair] = Counter()
    for word in corpus:
        for pair in zip(word, word[1:]):
            # never merge a real symbol into the boundary
            if pair[1] == END_WORD:
                continue
            counts[pair] += 1
    return counts


def select_pair(counts: Counter[SymbolPair]) -> SymbolPair:
    """
    Return the most frequent pair.

    Ties go to the pair that was discovered first while scanning the corpus.

    :raises NoMergeableContentError: If there are no pairs to choose from.
    """
    if not counts:
        raise NoMergeableContentError("no symbol pairs left to merge")
    # max() keeps the first maximum, and Counter preserves discovery order
    return max(counts, key=counts.__getitem__)


def merge_pair(corpus: Corpus, pair: SymbolPair, rules: "MergeRuleTable") -> Symbol:
    """
    Replace every occurrence of ``pair`` in the corpus with a new symbol.

    The new symbol is registered in ``rules`` before the corpus is rewritten.
    Replacement is a single left-to-right pass without overlaps, so a symbol
    produced by this merge is not merged again in the same pass.

    :param corpus: Corpus to rewrite in place.
    :param pair: Target pair.
    :param rules: Rule table that receives the new rule.
    :returns: The newly allocated symbol.
    """
    new_sym = rules.register(pair)
    first, second = pair

    for idx, word in enumerate(corpus):
        merged: list[Symbol] = []
        i = 0
        n = len(word)
        while i < n:
            if i < n - 1 and word[i] == first and word[i + 1] == second:
                merged.append(new_sym)
                i += 2
            else:
                merged.append(word[i])
                i += 1
        corpus[idx] = merged

    return new_sym


def flatten_corpus(corpus: Corpus) -> TokenSequence:
    """Join all words into one token sequence separated by ``SPACE_TOKEN``."""
    tokens: TokenSequence = []
    for idx, word in enumerate(corpus):
        if idx > 0:
            tokens.append(SPACE_TOKEN)
        tokens.extend(sym for sym in word if sym != END_WORD)
    return tokens


__all__ = [
    "WORD_PATTERN",
    "build_corpus",
    "count_pairs",
    "select_pair",
    "merge_pair",
    "flatten_corpus",
]
