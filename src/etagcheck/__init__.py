"""Compute and verify multipart object-store ETags for local files."""
from .etag import TagOptions, compute_tag, compute_stream_tag, verify_tag
from .exceptions import (
    ETagError, InvalidInputError, InvalidTagError, RangeError, ReadError, WorkerError,
)

__version__ = "0.1.0"

__all__ = [
    "TagOptions", "compute_tag", "compute_stream_tag", "verify_tag",
    "ETagError", "InvalidInputError", "InvalidTagError", "RangeError", "ReadError", "WorkerError",
]
