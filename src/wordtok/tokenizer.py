"""
Encode text into word-level BPE tokens and decode them back.
"""

from dataclasses import dataclass
import logging

from ._bpe import build_corpus, flatten_corpus
from .errors import EmptyInputError, TrainingError
from .rules import MergeRuleTable
from .trainer import train_bpe, validate_merge_count
from .types import N_LITERALS, TokenSequence

log = logging.getLogger(__name__)


@dataclass
class EncodeResult:
    """Token sequence together with the rules needed to decode it."""

    tokens: TokenSequence
    rules: MergeRuleTable


def encode(text: str, num_merges: int, verbose: bool = False) -> EncodeResult:
    """
    Learn ``num_merges`` merges on ``text`` and return its tokens.

    Words are separated by ``SPACE_TOKEN`` in the output, so runs of whitespace
    collapse to a single space when decoded.

    :param text: Input text.
    :param num_merges: Maximum number of merge rounds.
    :param verbose: Log each learned merge when ``True``.
    :raises InvalidMergeCountError: If ``num_merges`` is not a positive integer.
    :raises EmptyInputError: If ``text`` contains no words.
    """
    validate_merge_count(num_merges)
    corpus = build_corpus(text)

    result = train_bpe(corpus, num_merges, verbose=verbose)
    tokens = flatten_corpus(result.corpus)

    log.debug(
        f"encoded {len(corpus)} words into {len(tokens)} tokens "
        f"with {result.n_merges_completed} merges"
    )
    return EncodeResult(tokens=tokens, rules=result.rules)


def decode(
    tokens: TokenSequence, rules: MergeRuleTable, errors: str = "replace"
) -> str:
    """
    Decode tokens back into text using the rules that produced them.

    :param tokens: Token sequence returned by ``encode``.
    :param rules: Rule table from the same ``encode`` call.
    :param errors: How to handle invalid UTF-8, "strict" or "replace".
    :raises EmptyInputError: If ``tokens`` is empty.
    :raises UnresolvableTokenError: If a token is unknown to ``rules``.
    """
    if not tokens:
        raise EmptyInputError("token sequence is empty")
    # token stream -> byte stream
    txt_bytes = b"".join(rules.expand(tok) for tok in tokens)
    # byte stream -> python string
    return txt_bytes.decode("utf-8", errors=errors)


class WordTokenizer:
    """
    Tokenizer that keeps the merge rules of its most recent ``encode`` call.

    Every call to ``encode`` trains from scratch and replaces the previous
    rules, so rules from earlier texts never leak into later ones.
    """

    def __init__(self) -> None:
        self.rules: MergeRuleTable | None = None

    def encode(
        self, text: str, num_merges: int, verbose: bool = False
    ) -> TokenSequence:
        """Train on ``text`` and return its tokens, keeping the learned rules."""
        result = encode(text, num_merges, verbose=verbose)
        self.rules = result.rules
        return result.tokens

    def decode(self, tokens: TokenSequence) -> str:
        """
        Decode tokens with the rules of the last ``encode`` call.

        :raises TrainingError: If ``encode`` has not been called yet.
        """
        if self.rules is None:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before decoding"
            )
        return decode(tokens, self.rules)

    def vocab_size(self) -> int:
        """Return the number of literal symbols plus learned merges."""
        return N_LITERALS + (len(self.rules) if self.rules is not None else 0)


__all__ = ["EncodeResult", "WordTokenizer", "encode", "decode"]
