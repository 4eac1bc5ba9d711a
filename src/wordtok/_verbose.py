import os

_enabled: bool = False


def enable_verbose() -> None:
    """Log every learned merge during training."""
    global _enabled
    _enabled = True


def disable_verbose() -> None:
    """Stop logging individual merges unless a caller asks for them."""
    global _enabled
    _enabled = False


def _is_enabled() -> bool:
    """Check if verbose merge logging is on (respects env var override)."""
    if os.environ.get("WORDTOK_VERBOSE", "").strip() == "1":
        return True
    return _enabled
