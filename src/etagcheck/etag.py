"""Tag computation and verification - coordinates planning, hashing and combining."""
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional
import logging

from etagcheck.config import Config, get_config
from etagcheck.hashing import hasher
from etagcheck.hashing.combiner import combine_digests
from etagcheck.hashing.inference import infer_block_size, parse_tag
from etagcheck.hashing.planner import plan_ranges, plan_super_ranges, worker_count
from etagcheck.workers import WorkerPool


logger = logging.getLogger(__name__)


@dataclass
class TagOptions:
    """Per-call execution options; unset fields fall back to configuration."""
    max_workers: Optional[int] = None
    sequential: Optional[bool] = None


def _resolve(options: Optional[TagOptions], config: Config) -> tuple[int, bool]:
    options = options or TagOptions()
    max_workers = options.max_workers if options.max_workers is not None else config.get_max_workers()
    sequential = options.sequential if options.sequential is not None else config.workers.sequential
    return max_workers, sequential


def _hash_sequential(file_path: Path, length: int, block_size: int, algorithm: str, read_size: int) -> list[bytes]:
    ranges = plan_ranges(length, block_size)
    digests: list[bytes] = [b""] * len(ranges)
    with hasher.open_source(file_path) as fh:
        for i, byte_range in enumerate(ranges):
            digests[i] = hasher.hash_range(fh, byte_range, algorithm, read_size)
    return digests


def compute_tag(
    file_path: Path,
    block_size: Optional[int] = None,
    options: Optional[TagOptions] = None,
    config: Optional[Config] = None,
) -> str:
    """
    Compute the multipart tag of a local file.

    Args:
        file_path: File to hash
        block_size: Part size in bytes (default: configured default_block_size)
        options: Worker limit and sequential switch
        config: Configuration (default: global config)

    Returns:
        ``<hex>`` for single-block files, ``<hex>-<parts>`` otherwise

    Raises:
        InvalidInputError: Non-positive block size or worker count
        ReadError: File cannot be opened or read
        RangeError: File shrank while being hashed (sequential mode)
        WorkerError: A parallel worker failed
    """
    config = config or get_config()
    file_path = Path(file_path)
    if block_size is None:
        block_size = config.hashing.default_block_size
    algorithm = config.hashing.algorithm
    read_size = config.hashing.read_size
    max_workers, sequential = _resolve(options, config)

    if not hasher.is_regular_file(file_path):
        logger.debug(f"{file_path} is not a regular file, reading it as a stream")
        with hasher.open_source(file_path) as fh:
            tag = compute_stream_tag(fh, block_size, config)
        logger.info(f"Computed tag {tag} for {file_path}")
        return tag

    length = hasher.file_length(file_path)
    workers = worker_count(length, block_size, max_workers, sequential)
    logger.debug(f"Hashing {file_path} ({length} bytes) in blocks of {block_size} with {workers} worker(s)")

    if workers == 1:
        digests = _hash_sequential(file_path, length, block_size, algorithm, read_size)
    else:
        super_ranges = plan_super_ranges(length, block_size, workers)
        pool = WorkerPool(file_path, block_size, algorithm=algorithm, read_size=read_size)
        try:
            digests = pool.execute(super_ranges)
        finally:
            logger.debug(f"Worker pool stats: {pool.get_stats()}")

    tag = combine_digests(digests, algorithm)
    logger.info(f"Computed tag {tag} for {file_path}")
    return tag


def compute_stream_tag(stream: BinaryIO, block_size: Optional[int] = None, config: Optional[Config] = None) -> str:
    """Compute the tag of a non-seekable binary stream, reading it once in order."""
    config = config or get_config()
    if block_size is None:
        block_size = config.hashing.default_block_size
    digests = hasher.hash_stream(stream, block_size, config.hashing.algorithm, config.hashing.read_size)
    return combine_digests(digests, config.hashing.algorithm)


def verify_tag(
    file_path: Path,
    reference_tag: str,
    options: Optional[TagOptions] = None,
    config: Optional[Config] = None,
) -> bool:
    """
    Check a local file against a reference tag.

    The block size is inferred from the tag's part count and the file size,
    the tag is recomputed and compared case-insensitively.

    Args:
        file_path: Local file
        reference_tag: Tag reported by the object store, quoted or not
        options: Worker limit and sequential switch
        config: Configuration (default: global config)

    Returns:
        True if the recomputed tag matches, False otherwise

    Raises:
        InvalidTagError: Reference tag is empty or malformed
        ReadError, RangeError, WorkerError: Recomputation failed
    """
    config = config or get_config()
    parsed = parse_tag(reference_tag, hasher.digest_size(config.hashing.algorithm))
    length = hasher.file_length(Path(file_path))
    block_size = infer_block_size(length, parsed, config.hashing.min_inferred_block_size)

    computed = compute_tag(file_path, block_size, options, config)
    matches = computed.lower() == str(parsed)
    if not matches:
        logger.info(f"Tag mismatch for {file_path}: expected {parsed}, computed {computed}")
    return matches
