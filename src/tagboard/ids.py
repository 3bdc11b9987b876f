"""Node identity and block-reference id generation."""

import itertools
import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits
_BLOCK_ID_CHARS = set(string.ascii_letters + string.digits + "-")

_counter = itertools.count(1)


def new_id() -> str:
    """Return a fresh node identity.

    Identities come from a process-wide counter, so they are never
    reused for the lifetime of the session: "n1", "n2", "n3", ...
    """
    return f"n{next(_counter)}"


def generate_instance_id(length: int = 6) -> str:
    """Return a random lowercase alphanumeric token.

    Used for block references ("^k3x9qa") that must stay stable once
    written into an item's text.
    """
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def is_block_id(s: str) -> bool:
    """Check whether s can be used as a block reference id."""
    return bool(s) and set(s) <= _BLOCK_ID_CHARS
