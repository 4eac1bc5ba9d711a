"""Unit tests for the corpus, pair counting, selection, merge and flatten steps."""

from collections import Counter

import pytest

from wordtok._bpe import (
    build_corpus,
    count_pairs,
    flatten_corpus,
    merge_pair,
    select_pair,
)
from wordtok.errors import EmptyInputError, NoMergeableContentError
from wordtok.rules import MergeRuleTable
from wordtok.types import END_WORD, MERGE_ID_START, SPACE_TOKEN


# build_corpus
# ---------------------------------------------------------------------------


def test_build_corpus_appends_word_marker():
    """Each word becomes its code units followed by the marker."""
    assert build_corpus("hi yo") == [[104, 105, END_WORD], [121, 111, END_WORD]]


def test_build_corpus_collapses_whitespace():
    """Leading, trailing and repeated whitespace yields no empty words."""
    assert build_corpus("  a \t\n b  ") == [[97, END_WORD], [98, END_WORD]]


def test_build_corpus_non_ascii_uses_utf8_code_units():
    """Multi-byte characters become one symbol per UTF-8 byte."""
    assert build_corpus("é") == [[0xC3, 0xA9, END_WORD]]


@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_build_corpus_empty_raises(text):
    """Text without words is rejected."""
    with pytest.raises(EmptyInputError):
        build_corpus(text)


# count_pairs
# ---------------------------------------------------------------------------


def test_count_pairs_skips_word_marker():
    """Pairs ending in the marker are never counted."""
    counts = count_pairs(build_corpus("hello"))
    assert counts == Counter({(104, 101): 1, (101, 108): 1, (108, 108): 1, (108, 111): 1})
    assert all(pair[1] != END_WORD for pair in counts)


def test_count_pairs_is_per_word():
    """No pair spans two words."""
    counts = count_pairs(build_corpus("ab ab cd"))
    assert counts == Counter({(97, 98): 2, (99, 100): 1})
    assert (98, 97) not in counts
    assert (98, 99) not in counts


def test_count_pairs_single_characters_have_no_pairs():
    """Words of one symbol contribute nothing."""
    assert count_pairs(build_corpus("a b c")) == Counter()


# select_pair
# ---------------------------------------------------------------------------


def test_select_pair_picks_highest_count():
    """The most frequent pair wins."""
    assert select_pair(count_pairs(build_corpus("aaa bbb aaa"))) == (97, 97)


def test_select_pair_tie_goes_to_first_discovered():
    """On equal counts the pair seen first in the corpus wins."""
    assert select_pair(count_pairs(build_corpus("ab ba"))) == (97, 98)
    assert select_pair(count_pairs(build_corpus("ba ab"))) == (98, 97)


def test_select_pair_empty_raises():
    """An empty table has nothing to merge."""
    with pytest.raises(NoMergeableContentError):
        select_pair(Counter())


# merge_pair
# ---------------------------------------------------------------------------


def test_merge_pair_registers_rule_and_rewrites_corpus():
    """The pair is replaced everywhere and exactly one rule is added."""
    corpus = build_corpus("aaa bbb aaa")
    rules = MergeRuleTable()

    new_sym = merge_pair(corpus, (97, 97), rules)

    assert new_sym == MERGE_ID_START
    assert dict(rules) == {MERGE_ID_START: (97, 97)}
    assert corpus == [
        [new_sym, 97, END_WORD],
        [98, 98, 98, END_WORD],
        [new_sym, 97, END_WORD],
    ]


def test_merge_pair_is_non_overlapping():
    """A run of four symbols becomes two merges, not three."""
    corpus = [[97, 97, 97, 97, END_WORD]]
    new_sym = merge_pair(corpus, (97, 97), MergeRuleTable())
    assert corpus == [[new_sym, new_sym, END_WORD]]


def test_merge_pair_does_not_rescan_new_symbol():
    """A freshly merged symbol is not merged again in the same pass."""
    corpus = [[97, 97, 97, END_WORD]]
    new_sym = merge_pair(corpus, (97, 97), MergeRuleTable())
    assert corpus == [[new_sym, 97, END_WORD]]


def test_merge_pair_allocates_increasing_ids():
    """Successive merges receive consecutive ids."""
    corpus = build_corpus("abcd abcd")
    rules = MergeRuleTable()
    first = merge_pair(corpus, (97, 98), rules)
    second = merge_pair(corpus, (first, 99), rules)
    assert second == first + 1
    assert corpus[0] == [second, 100, END_WORD]


# flatten_corpus
# ---------------------------------------------------------------------------


def test_flatten_corpus_drops_marker_and_inserts_spaces():
    """Words are joined with a single space token."""
    corpus = [[1000, 97, END_WORD], [98, END_WORD], [1000, END_WORD]]
    assert flatten_corpus(corpus) == [1000, 97, SPACE_TOKEN, 98, SPACE_TOKEN, 1000]


def test_flatten_corpus_single_word_has_no_separator():
    """One word produces no space token."""
    assert flatten_corpus(build_corpus("hey")) == [104, 101, 121]
