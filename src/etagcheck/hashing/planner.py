"""Byte-range planning for block-wise hashing."""
from dataclasses import dataclass
from typing import Iterator
import logging

from etagcheck.exceptions import InvalidInputError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte range ``[start, end]`` within a file.

    A zero-length file is planned as the single empty range ``(0, -1)``.
    """
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def is_empty(self) -> bool:
        return self.length == 0


def _check_block_size(block_size: int) -> None:
    if block_size <= 0:
        raise InvalidInputError(f"Block size must be positive, got {block_size}")


def block_count(file_length: int, block_size: int) -> int:
    """
    Number of blocks a file of ``file_length`` bytes splits into.

    An empty file still counts as one (empty) block.
    """
    _check_block_size(block_size)
    if file_length < 0:
        raise InvalidInputError(f"File length must not be negative, got {file_length}")
    return max(1, -(-file_length // block_size))


def iter_ranges(start: int, end: int, block_size: int) -> Iterator[ByteRange]:
    """Yield ``block_size`` sub-ranges covering the inclusive span ``[start, end]``."""
    _check_block_size(block_size)
    if end < start:
        yield ByteRange(start, start - 1)
        return
    offset = start
    while offset <= end:
        yield ByteRange(offset, min(offset + block_size, end + 1) - 1)
        offset += block_size


def plan_ranges(file_length: int, block_size: int) -> list[ByteRange]:
    """
    Plan the ordered block ranges for a file.

    Args:
        file_length: Total file size in bytes
        block_size: Target block size in bytes

    Returns:
        ``ceil(file_length / block_size)`` contiguous ranges; every range holds
        ``block_size`` bytes except the last, which holds the remainder

    Raises:
        InvalidInputError: If block_size is not positive
    """
    block_count(file_length, block_size)
    return list(iter_ranges(0, file_length - 1, block_size))


def worker_count(file_length: int, block_size: int, max_workers: int, sequential: bool = False) -> int:
    """Workers worth starting: never more than there are blocks."""
    if max_workers <= 0:
        raise InvalidInputError(f"max_workers must be positive, got {max_workers}")
    if sequential:
        return 1
    return min(max_workers, block_count(file_length, block_size))


def plan_super_ranges(file_length: int, block_size: int, workers: int) -> list[ByteRange]:
    """
    Split a file into at most ``workers`` block-aligned super-ranges.

    Every super-range except the last covers a whole number of blocks, so
    splitting each one with ``iter_ranges`` reproduces ``plan_ranges`` exactly.

    Args:
        file_length: Total file size in bytes
        block_size: Block size in bytes
        workers: Desired number of super-ranges

    Returns:
        Ordered, contiguous super-ranges covering the whole file
    """
    if workers <= 0:
        raise InvalidInputError(f"workers must be positive, got {workers}")
    blocks = block_count(file_length, block_size)
    if file_length == 0:
        return [ByteRange(0, -1)]

    blocks_per_worker = -(-blocks // workers)
    span = blocks_per_worker * block_size
    super_ranges = []
    start = 0
    while start < file_length:
        end = min(start + span, file_length) - 1
        super_ranges.append(ByteRange(start, end))
        start = end + 1

    logger.debug(
        f"Planned {len(super_ranges)} super-ranges of up to {blocks_per_worker} blocks "
        f"({blocks} blocks of {block_size} bytes)"
    )
    return super_ranges
