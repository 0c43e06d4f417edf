"""Block hashing over positioned file reads."""
import hashlib
import stat
import threading
from pathlib import Path
from typing import BinaryIO, Optional
import logging

from etagcheck.exceptions import InvalidInputError, RangeError, ReadError
from .planner import ByteRange, iter_ranges


logger = logging.getLogger(__name__)

READ_SIZE = 1024 * 1024  # 1MB


def new_hasher(algorithm: str = "md5"):
    """Create a hashlib object, rejecting unknown algorithm names."""
    try:
        return hashlib.new(algorithm)
    except ValueError as e:
        raise InvalidInputError(f"Unsupported hash algorithm: {algorithm}") from e


def digest_size(algorithm: str = "md5") -> int:
    return new_hasher(algorithm).digest_size


def file_length(file_path: Path) -> int:
    """Size of a file in bytes, as a ReadError on failure."""
    try:
        return Path(file_path).stat().st_size
    except OSError as e:
        raise ReadError(f"Cannot stat {file_path}: {e}") from e


def is_regular_file(file_path: Path) -> bool:
    """True for regular files; FIFOs and character devices report no usable size."""
    try:
        return stat.S_ISREG(Path(file_path).stat().st_mode)
    except OSError as e:
        raise ReadError(f"Cannot stat {file_path}: {e}") from e


def open_source(file_path: Path) -> BinaryIO:
    """Open a file read-only in binary mode."""
    try:
        return open(file_path, "rb")
    except OSError as e:
        raise ReadError(f"Cannot open {file_path}: {e}") from e


def hash_range(
    fh: BinaryIO,
    byte_range: ByteRange,
    algorithm: str = "md5",
    read_size: int = READ_SIZE,
) -> bytes:
    """
    Hash exactly the bytes of one range.

    Args:
        fh: Open, seekable binary file
        byte_range: Inclusive range to hash
        algorithm: hashlib algorithm name
        read_size: Maximum bytes per read() call

    Returns:
        Raw digest bytes

    Raises:
        ReadError: If seeking or reading fails
        RangeError: If the file ends before the range does
    """
    hasher = new_hasher(algorithm)
    remaining = byte_range.length
    try:
        fh.seek(byte_range.start)
        while remaining > 0:
            data = fh.read(min(read_size, remaining))
            if not data:
                break
            hasher.update(data)
            remaining -= len(data)
    except OSError as e:
        raise ReadError(f"Read failed at offset {byte_range.start}: {e}") from e

    if remaining:
        raise RangeError(byte_range.start, byte_range.length, byte_range.length - remaining)
    return hasher.digest()


def hash_super_range(
    file_path: Path,
    super_range: ByteRange,
    block_size: int,
    algorithm: str = "md5",
    read_size: int = READ_SIZE,
    stop_event: Optional[threading.Event] = None,
) -> Optional[list[bytes]]:
    """
    Hash every block of a super-range through a private file handle.

    Returns None when ``stop_event`` is set before all blocks are hashed.
    """
    ranges = list(iter_ranges(super_range.start, super_range.end, block_size))
    digests: list[bytes] = [b""] * len(ranges)
    with open_source(file_path) as fh:
        for i, block in enumerate(ranges):
            if stop_event is not None and stop_event.is_set():
                logger.debug(f"Stopped before block at offset {block.start}")
                return None
            digests[i] = hash_range(fh, block, algorithm, read_size)
    return digests


def hash_stream(stream: BinaryIO, block_size: int, algorithm: str = "md5", read_size: int = READ_SIZE) -> list[bytes]:
    """Hash a non-seekable stream block by block, in order."""
    if block_size <= 0:
        raise InvalidInputError(f"Block size must be positive, got {block_size}")

    digests = []
    hasher = new_hasher(algorithm)
    filled = 0
    try:
        while chunk := stream.read(min(read_size, block_size - filled)):
            hasher.update(chunk)
            filled += len(chunk)
            if filled == block_size:
                digests.append(hasher.digest())
                hasher = new_hasher(algorithm)
                filled = 0
    except OSError as e:
        raise ReadError(f"Stream read failed: {e}") from e

    if filled or not digests:
        digests.append(hasher.digest())
    return digests
