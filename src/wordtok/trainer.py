"""Standalone word-level BPE training module."""

from dataclasses import dataclass
from enum import Enum
import logging
import time

from ._bpe import count_pairs, merge_pair, select_pair
from ._verbose import _is_enabled
from .errors import InvalidMergeCountError, NoMergeableContentError
from .rules import MergeRuleTable
from .types import Corpus

log = logging.getLogger(__name__)


class TrainerState(str, Enum):
    """Lifecycle of a ``BPETrainer``."""

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass
class BPETrainingResult:
    """Results from one BPE training run."""

    corpus: Corpus
    rules: MergeRuleTable
    n_merges_completed: int


def validate_merge_count(n_merges: object) -> int:
    """
    Check that ``n_merges`` is a positive integer and return it.

    :raises InvalidMergeCountError: For booleans, non-integers and values below 1.
    """
    # bool is an int subclass but never a meaningful count
    if isinstance(n_merges, bool) or not isinstance(n_merges, int):
        raise InvalidMergeCountError(
            "merge count must be an integer", num_merges=n_merges
        )
    if n_merges <= 0:
        raise InvalidMergeCountError(
            "merge count must be positive", num_merges=n_merges
        )
    return n_merges


class BPETrainer:
    """
    BPE trainer that learns merge rules from a word corpus.

    Each round counts adjacent pairs, picks the most frequent one and merges
    it everywhere. Training stops early once no pairs remain.

    Example:
       >>> corpus = build_corpus("low lower lowest")
       >>> trainer = BPETrainer()
       >>> result = trainer.train(corpus, n_merges=10)
       >>> print(f"Learned {result.n_merges_completed} merges")
    """

    def __init__(self) -> None:
        self.state: TrainerState = TrainerState.IDLE

    def train(
        self, corpus: Corpus, n_merges: int, verbose: bool = False
    ) -> BPETrainingResult:
        """
        Run up to ``n_merges`` merge rounds over ``corpus``.

        The corpus is rewritten in place and a fresh rule table is built for
        this run.

        :param corpus: Word corpus from ``build_corpus``.
        :param n_merges: Maximum number of merge rounds.
        :param verbose: Log each learned merge when ``True``.
        :return: Trained corpus, merge rules and number of merges performed.
        :raises InvalidMergeCountError: If ``n_merges`` is not a positive integer.
        """
        validate_merge_count(n_merges)
        verbose = verbose or _is_enabled()

        rules = MergeRuleTable()
        self.state = TrainerState.RUNNING
        start = time.perf_counter()
        log.debug(f"training on {len(corpus)} words for up to {n_merges} merges")

        try:
            for _ in range(n_merges):
                counts = count_pairs(corpus)
                try:
                    pair = select_pair(counts)
                except NoMergeableContentError:
                    log.warning(
                        f"no more symbol pairs to merge after {len(rules)} merges "
                        f"(requested {n_merges}) stopping early"
                    )
                    break

                new_sym = merge_pair(corpus, pair, rules)

                if verbose:
                    log.info(
                        "merge %d/%d: %s -> %d (%s) had %d occurrences",
                        len(rules),
                        n_merges,
                        pair,
                        new_sym,
                        rules.render_symbol(new_sym),
                        counts[pair],
                    )
        finally:
            self.state = TrainerState.DONE
            elapsed = time.perf_counter() - start
            log.info(
                f"learned {len(rules)} merges over {len(corpus)} words in {elapsed:.4f} s"
            )

        return BPETrainingResult(
            corpus=corpus,
            rules=rules,
            n_merges_completed=len(rules),
        )


def train_bpe(
    corpus: Corpus, n_merges: int, verbose: bool = False
) -> BPETrainingResult:
    """Train a BPE model on ``corpus`` with a one-off ``BPETrainer``."""
    return BPETrainer().train(corpus, n_merges, verbose=verbose)


__all__ = [
    "TrainerState",
    "BPETrainingResult",
    "BPETrainer",
    "train_bpe",
    "validate_merge_count",
]
