"""wordtok: word-level byte pair encoding tokenizer."""

from ._verbose import disable_verbose, enable_verbose
from .errors import (
    EmptyInputError,
    InvalidMergeCountError,
    NoMergeableContentError,
    RuleTableError,
    TrainingError,
    UnresolvableTokenError,
    WordTokError,
)
from .rules import MergeRuleTable
from .tokenizer import EncodeResult, WordTokenizer, decode, encode
from .trainer import BPETrainer, BPETrainingResult, TrainerState, train_bpe

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wordtok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "encode",
    "decode",
    "EncodeResult",
    "WordTokenizer",
    "MergeRuleTable",
    "BPETrainer",
    "BPETrainingResult",
    "TrainerState",
    "train_bpe",
    "enable_verbose",
    "disable_verbose",
    "WordTokError",
    "EmptyInputError",
    "InvalidMergeCountError",
    "NoMergeableContentError",
    "UnresolvableTokenError",
    "RuleTableError",
    "TrainingError",
]
