"""Recover the block size behind a reference tag."""
import re
from dataclasses import dataclass
from typing import Optional
import logging

from etagcheck.exceptions import InvalidTagError
from .planner import block_count


logger = logging.getLogger(__name__)

DEFAULT_MIN_BLOCK_SIZE = 1024 * 1024  # 1MB

TAG_PATTERN = re.compile(r"^(?P<digest>[0-9a-fA-F]+)(?:-(?P<parts>.*))?$")


@dataclass(frozen=True)
class ParsedTag:
    """Reference tag split into its digest and optional part count."""
    digest: str
    parts: Optional[int] = None

    @property
    def is_multipart(self) -> bool:
        return self.parts is not None

    def __str__(self) -> str:
        if self.parts is None:
            return self.digest
        return f"{self.digest}-{self.parts}"


def parse_tag(tag: str, digest_size: Optional[int] = None) -> ParsedTag:
    """
    Parse a reference tag.

    Surrounding whitespace and one pair of double quotes, as returned in
    object-store response headers, are stripped. The digest is lowercased.

    Args:
        tag: Reference tag string
        digest_size: Expected digest size in bytes; checked when given

    Returns:
        ParsedTag

    Raises:
        InvalidTagError: If the tag is empty or malformed
    """
    if tag is None:
        raise InvalidTagError("Reference tag is empty")
    text = tag.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        text = text[1:-1]
    if not text:
        raise InvalidTagError("Reference tag is empty")

    match = TAG_PATTERN.match(text)
    if match is None:
        raise InvalidTagError(f"Malformed tag: {tag!r}")

    digest = match.group("digest").lower()
    if digest_size is not None and len(digest) != digest_size * 2:
        raise InvalidTagError(
            f"Malformed tag: {tag!r} (expected {digest_size * 2} hex digits, got {len(digest)})"
        )

    parts = match.group("parts")
    if parts is None:
        return ParsedTag(digest)
    if not re.fullmatch(r"[0-9]+", parts):
        raise InvalidTagError(f"Malformed tag: {tag!r} (part count is not an integer)")
    if int(parts) < 1:
        raise InvalidTagError(f"Malformed tag: {tag!r} (part count must be positive)")
    return ParsedTag(digest, int(parts))


def infer_block_size(file_length: int, tag: str | ParsedTag, min_block_size: int = DEFAULT_MIN_BLOCK_SIZE) -> int:
    """
    Find the block size that reproduces the tag's part count.

    Tags without a part count describe a single-block upload; the result is
    then ``file_length + 1`` so the whole file is planned as one block.
    Otherwise block sizes are tried from ``min_block_size`` upward, doubling,
    until the file splits into no more parts than the tag names.

    Args:
        file_length: Local file size in bytes
        tag: Reference tag
        min_block_size: First candidate block size

    Returns:
        Block size in bytes
    """
    parsed = tag if isinstance(tag, ParsedTag) else parse_tag(tag)
    if not parsed.is_multipart:
        return file_length + 1

    block_size = min_block_size
    while block_count(file_length, block_size) > parsed.parts:
        block_size *= 2

    logger.debug(f"Inferred block size {block_size} for {parsed.parts} parts over {file_length} bytes")
    return block_size
