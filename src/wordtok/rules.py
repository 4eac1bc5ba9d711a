"""
Merge rule bookkeeping shared by training and decoding.
"""

from collections.abc import Iterable, Iterator, Mapping
import logging
import unicodedata

from .errors import RuleTableError, UnresolvableTokenError
from .types import END_WORD, MERGE_ID_START, N_LITERALS, Symbol, SymbolPair

log = logging.getLogger(__name__)


def _is_symbol(value: object) -> bool:
    """Symbols are plain ints; bool subclasses int but is never a symbol."""
    return isinstance(value, int) and not isinstance(value, bool)


class MergeRuleTable(Mapping[Symbol, SymbolPair]):
    """
    Ordered mapping from a merged symbol to the pair it replaced.

    Ids are handed out by a monotonic counter, so keys are strictly increasing
    in registration order and every constituent was defined before the rule
    that uses it. Each training run owns one table.
    """

    def __init__(self, start: Symbol = MERGE_ID_START) -> None:
        if start <= END_WORD:
            raise RuleTableError(f"merge ids must start above {END_WORD}")
        # merged symbol -> (first, second)
        self._rules: dict[Symbol, SymbolPair] = {}
        self._next_id: Symbol = start

    def __getitem__(self, symbol: Symbol) -> SymbolPair:
        return self._rules[symbol]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._rules!r})"

    @property
    def next_id(self) -> Symbol:
        """Id the next registered rule will receive."""
        return self._next_id

    def register(self, pair: SymbolPair) -> Symbol:
        """
        Record a new rule for ``pair`` and return its symbol.

        :raises RuleTableError: If either constituent is undefined.
        """
        new_sym = self._next_id
        self._add(new_sym, pair)
        return new_sym

    def _add(self, new_sym: Symbol, pair: SymbolPair) -> None:
        """Insert a rule after checking ordering and constituents."""
        rule = (new_sym, *pair)
        if new_sym < self._next_id:
            raise RuleTableError(
                f"merge ids must be increasing and at least {self._next_id}",
                rule=rule,
            )
        for sym in pair:
            if not (0 <= sym < N_LITERALS or sym in self._rules):
                raise RuleTableError(f"undefined constituent {sym}", rule=rule)

        self._rules[new_sym] = pair
        self._next_id = new_sym + 1

    def expand(self, symbol: Symbol) -> bytes:
        """
        Resolve a symbol into the code units it stands for.

        Rules expand to their constituents left to right and the word marker
        expands to nothing. Uses an explicit stack, so long merge chains do not
        hit the recursion limit.

        :raises UnresolvableTokenError: If the symbol is not a literal, the word
            marker, or a key of this table.
        """
        out = bytearray()
        stack = [symbol]
        while stack:
            sym = stack.pop()
            if not _is_symbol(sym):
                raise UnresolvableTokenError("token is not an integer", token=sym)
            pair = self._rules.get(sym)
            if pair is not None:
                # push right first so left is expanded first
                stack.append(pair[1])
                stack.append(pair[0])
            elif sym == END_WORD:
                continue
            elif 0 <= sym < N_LITERALS:
                out.append(sym)
            else:
                raise UnresolvableTokenError("token cannot be resolved", token=sym)
        return bytes(out)

    def to_triples(self) -> list[tuple[Symbol, Symbol, Symbol]]:
        """Return rules as ``(id, first, second)`` triples in registration order."""
        return [(sym, first, second) for sym, (first, second) in self._rules.items()]

    @classmethod
    def from_triples(
        cls, triples: Iterable[tuple[Symbol, Symbol, Symbol]]
    ) -> "MergeRuleTable":
        """
        Rebuild a table from ``(id, first, second)`` triples.

        :raises RuleTableError: If a triple is malformed, ids are not strictly
            increasing above the reserved range, or a constituent is used before
            it is defined.
        """
        table = cls(start=END_WORD + 1)
        for triple in triples:
            try:
                new_sym, first, second = triple
            except (TypeError, ValueError):
                raise RuleTableError(f"invalid merge triple: {triple!r}")
            # no coercion: 1000.9 or "97" would silently become another rule
            if not all(_is_symbol(sym) for sym in (new_sym, first, second)):
                raise RuleTableError(f"merge triple must hold integers: {triple!r}")
            table._add(new_sym, (first, second))

        log.debug(f"loaded {len(table)} merge rules")
        return table

    def render_symbol(self, symbol: Symbol) -> str:
        """
        Return the text a symbol stands for, printable on one line.

        Partial UTF-8 sequences show as the replacement character and control
        characters (newline, tab, ...) as ``\\uXXXX`` escapes.
        """
        text = self.expand(symbol).decode("utf-8", errors="replace")
        return "".join(
            f"\\u{ord(c):04x}" if unicodedata.category(c).startswith("C") else c
            for c in text
        )

    def render(self) -> list[str]:
        """Describe every rule as ``[id] [left][right] -> merged``."""
        return [
            f"[{sym}] [{self.render_symbol(first)}][{self.render_symbol(second)}]"
            f" -> {self.render_symbol(sym)}"
            for sym, (first, second) in self._rules.items()
        ]


__all__ = ["MergeRuleTable"]
