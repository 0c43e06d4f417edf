"""Unit tests for byte-range planning."""
import pytest

from etagcheck.exceptions import InvalidInputError
from etagcheck.hashing.planner import (
    ByteRange, block_count, iter_ranges, plan_ranges, plan_super_ranges, worker_count,
)


def test_plan_ranges_exact_multiple() -> None:
    """A file of exactly two blocks splits into two full ranges."""
    assert plan_ranges(20, 10) == [ByteRange(0, 9), ByteRange(10, 19)]


def test_plan_ranges_remainder_in_last_block() -> None:
    ranges = plan_ranges(25, 10)
    assert ranges == [ByteRange(0, 9), ByteRange(10, 19), ByteRange(20, 24)]
    assert ranges[-1].length == 5


def test_plan_ranges_smaller_than_block() -> None:
    assert plan_ranges(7, 10) == [ByteRange(0, 6)]


def test_plan_ranges_empty_file() -> None:
    """A zero-length file is planned as one empty range."""
    ranges = plan_ranges(0, 10)
    assert len(ranges) == 1
    assert ranges[0].is_empty


@pytest.mark.parametrize("block_size", [0, -1])
def test_plan_ranges_rejects_non_positive_block_size(block_size: int) -> None:
    with pytest.raises(InvalidInputError):
        plan_ranges(100, block_size)


@pytest.mark.parametrize("length,block_size", [(1, 1), (99, 10), (100, 10), (101, 10), (4096, 1000)])
def test_plan_ranges_cover_file(length: int, block_size: int) -> None:
    """Ranges are contiguous, ordered and cover [0, length - 1]."""
    ranges = plan_ranges(length, block_size)
    assert len(ranges) == block_count(length, block_size)
    assert ranges[0].start == 0
    assert ranges[-1].end == length - 1
    for prev, cur in zip(ranges, ranges[1:]):
        assert cur.start == prev.end + 1
    assert all(r.length == block_size for r in ranges[:-1])


def test_iter_ranges_sub_span() -> None:
    assert list(iter_ranges(30, 54, 10)) == [ByteRange(30, 39), ByteRange(40, 49), ByteRange(50, 54)]


def test_worker_count_bounded_by_blocks() -> None:
    assert worker_count(25, 10, max_workers=8) == 3
    assert worker_count(1000, 10, max_workers=4) == 4


def test_worker_count_sequential_is_one() -> None:
    assert worker_count(1000, 10, max_workers=8, sequential=True) == 1


def test_worker_count_rejects_zero_workers() -> None:
    with pytest.raises(InvalidInputError):
        worker_count(1000, 10, max_workers=0)


@pytest.mark.parametrize("length,block_size,workers", [
    (100, 10, 3), (101, 10, 4), (95, 10, 2), (50, 10, 8), (10, 10, 2), (5, 10, 3),
])
def test_super_ranges_are_block_aligned(length: int, block_size: int, workers: int) -> None:
    """Splitting every super-range into blocks reproduces the flat plan."""
    super_ranges = plan_super_ranges(length, block_size, workers)
    assert len(super_ranges) <= workers
    for r in super_ranges[:-1]:
        assert r.length % block_size == 0
    flattened = [b for r in super_ranges for b in iter_ranges(r.start, r.end, block_size)]
    assert flattened == plan_ranges(length, block_size)


def test_super_ranges_clamped_to_file_end() -> None:
    assert plan_super_ranges(25, 10, 2) == [ByteRange(0, 19), ByteRange(20, 24)]


def test_super_ranges_empty_file() -> None:
    assert plan_super_ranges(0, 10, 4) == [ByteRange(0, -1)]
