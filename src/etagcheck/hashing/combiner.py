"""Multipart tag derivation from ordered block digests."""
from typing import Sequence

from etagcheck.exceptions import InvalidInputError
from .hasher import new_hasher


def combine_digests(digests: Sequence[bytes], algorithm: str = "md5") -> str:
    """
    Build the tag for an ordered list of block digests.

    A single digest is returned as lowercase hex. Several digests are
    concatenated in order, hashed once more, and suffixed with ``-<count>``.

    Args:
        digests: Raw digests, in block order
        algorithm: hashlib algorithm used for the outer hash

    Returns:
        Tag string
    """
    if not digests:
        raise InvalidInputError("Cannot build a tag from zero digests")
    if len(digests) == 1:
        return digests[0].hex()

    hasher = new_hasher(algorithm)
    hasher.update(b"".join(digests))
    return f"{hasher.hexdigest()}-{len(digests)}"
