"""Unit tests for tag derivation from block digests."""
import hashlib

import pytest

from etagcheck.exceptions import InvalidInputError
from etagcheck.hashing.combiner import combine_digests


def test_single_digest_has_no_suffix() -> None:
    digest = hashlib.md5(b"hello").digest()
    assert combine_digests([digest]) == hashlib.md5(b"hello").hexdigest()


def test_multiple_digests_hash_of_concatenation() -> None:
    digests = [hashlib.md5(b"a").digest(), hashlib.md5(b"b").digest()]
    expected = hashlib.md5(digests[0] + digests[1]).hexdigest()
    assert combine_digests(digests) == f"{expected}-2"


def test_digest_order_matters() -> None:
    """Swapping two digests keeps the suffix but changes the hash."""
    a, b = hashlib.md5(b"a").digest(), hashlib.md5(b"b").digest()
    forward = combine_digests([a, b])
    backward = combine_digests([b, a])
    assert forward != backward
    assert forward.endswith("-2") and backward.endswith("-2")


def test_output_is_lowercase_hex() -> None:
    tag = combine_digests([hashlib.md5(b"x").digest()] * 3)
    digest, parts = tag.split("-")
    assert digest == digest.lower()
    assert len(digest) == 32
    assert parts == "3"


def test_empty_digest_list_rejected() -> None:
    with pytest.raises(InvalidInputError):
        combine_digests([])
