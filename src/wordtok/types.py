"""
Core types and reserved symbol ids for word-level tokenization.
"""

from typing import Final, TypeAlias

Symbol: TypeAlias = int
SymbolPair: TypeAlias = tuple[Symbol, Symbol]
Word: TypeAlias = list[Symbol]
Corpus: TypeAlias = list[Word]
TokenSequence: TypeAlias = list[Symbol]

# code units 0-255 map to themselves
N_LITERALS: Final[int] = 256
# appended to every word while training, dropped when flattening
END_WORD: Final[Symbol] = 256
# separator emitted between words in the flattened sequence
SPACE_TOKEN: Final[Symbol] = 32
# first id handed out to a merged symbol
MERGE_ID_START: Final[Symbol] = 1000
