"""Block hashing, planning and tag derivation."""
from .planner import ByteRange, block_count, plan_ranges, plan_super_ranges, worker_count
from .hasher import hash_range, hash_super_range, hash_stream, file_length
from .combiner import combine_digests
from .inference import ParsedTag, parse_tag, infer_block_size

__all__ = [
    "ByteRange", "block_count", "plan_ranges", "plan_super_ranges", "worker_count",
    "hash_range", "hash_super_range", "hash_stream", "file_length",
    "combine_digests",
    "ParsedTag", "parse_tag", "infer_block_size",
]
