"""Cache key derivation.

Keys are a literal-content fingerprint of the query plus the retrieved
context, not an embedding. Two requests share a cache slot only when the
query text and the ordered context passages are identical (or when their
fingerprints collide).

The fingerprint is a 32-bit polynomial rolling hash. Collisions are an
accepted limitation: entries whose fingerprints collide share one slot.
Switching to a collision-free digest would change which requests coalesce.

Characters are hashed by Unicode code point, so text outside the Basic
Multilingual Plane (emoji, for example) hashes differently from a UTF-16
code unit hash of the same string.
"""

from collections.abc import Sequence

CONTEXT_SEPARATOR = "\n"

_HASH_MULTIPLIER = 31
_HASH_MASK = 0xFFFFFFFF


def rolling_hash(text: str) -> int:
    """Return the unsigned 32-bit rolling hash of ``text``."""
    value = 0
    for char in text:
        value = (value * _HASH_MULTIPLIER + ord(char)) & _HASH_MASK
    return value


def derive_cache_key(query: str, context: Sequence[str]) -> str:
    """Derive the cache key for a query and its retrieved context.

    Args:
        query: The user query, used verbatim.
        context: Retrieved passages. Order is significant.

    Returns:
        An 8-character lower-case hexadecimal fingerprint.
    """
    text = CONTEXT_SEPARATOR.join([query, *context])
    return f"{rolling_hash(text):08x}"
