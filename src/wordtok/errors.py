"""Custom exception hierarchy for wordtok tokenization errors."""

from .types import Symbol


class WordTokError(Exception):
    """Base exception for all wordtok errors."""


class EmptyInputError(WordTokError):
    """Raised when the text or token sequence to process is empty."""


class InvalidMergeCountError(WordTokError):
    """Raised when a non-positive or non-integer merge count is requested."""

    def __init__(self, message: str, *, num_merges: object = None) -> None:
        if num_merges is not None:
            message = f"{message} (got {num_merges!r})"
        super().__init__(message)
        self.num_merges = num_merges


class NoMergeableContentError(WordTokError):
    """Raised when a corpus has no adjacent pairs left to merge."""


class UnresolvableTokenError(WordTokError):
    """Raised when a token is neither a literal, the word marker, nor a merge rule."""

    def __init__(self, message: str, *, token: Symbol | None = None) -> None:
        if token is not None:
            message = f"{message} (invalid token: {token})"
        super().__init__(message)
        self.token = token


class RuleTableError(WordTokError):
    """Raised when merge rules violate the table invariants."""

    def __init__(
        self,
        message: str,
        *,
        rule: tuple[Symbol, Symbol, Symbol] | None = None,
    ) -> None:
        """Initialize with the offending ``(id, first, second)`` rule, if any."""
        if rule is not None:
            message = f"{message} (rule: {rule})"
        super().__init__(message)
        self.rule = rule


class TrainingError(WordTokError):
    """Raised when a tokenizer is used before it has been trained."""
