"""Command-line entry point: tokenize a line of text and decode it again."""

import argparse
import logging
import sys
from typing import Final

from .errors import WordTokError
from .tokenizer import decode, encode

DEFAULT_MERGES: Final[int] = 20


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``wordtok`` command."""
    parser = argparse.ArgumentParser(
        prog="wordtok", description="Word-level BPE tokenize and detokenize text."
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Text to tokenize. Read from stdin when omitted.",
    )
    parser.add_argument(
        "-n",
        "--merges",
        type=int,
        default=DEFAULT_MERGES,
        help="Number of merge rounds.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every learned merge."
    )
    parser.add_argument(
        "--show-rules", action="store_true", help="Print the learned merge rules."
    )
    return parser


def _read_text() -> str:
    """Read one line from stdin, prompting when attached to a terminal."""
    if sys.stdin.isatty():
        print("Print text: ", end="", flush=True)
    return sys.stdin.readline().rstrip("\n")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    text = args.text if args.text is not None else _read_text()

    try:
        result = encode(text, args.merges, verbose=args.verbose)
        decoded = decode(result.tokens, result.rules)
    except WordTokError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print("Final tokens (as ints):")
    print(" ".join(str(tok) for tok in result.tokens))
    if args.show_rules:
        print("Merge rules:")
        for line in result.rules.render():
            print(line)
    print(f"Detokenized text: {decoded}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
