"""Error kinds raised by etagcheck."""
from typing import Optional


class ETagError(Exception):
    """Base class for every error raised while computing or verifying a tag."""
    pass


class InvalidInputError(ETagError, ValueError):
    # non-positive block size, bad worker count, unknown algorithm
    pass


class InvalidTagError(InvalidInputError):
    # empty or malformed reference tag
    pass


class ReadError(ETagError, OSError):
    # open/seek/read failure on the source file
    pass


class RangeError(ETagError):
    """Fewer bytes were available than a planned range requires.

    Points at a planning bug or at the file changing while it was hashed.
    """

    def __init__(self, start: int, expected: int, actual: int):
        self.start = start
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Short read at offset {start}: expected {expected} bytes, got {actual}"
        )


class WorkerError(ETagError):
    """A parallel hash worker failed."""

    def __init__(self, worker_id: int, original: BaseException, byte_range: Optional[object] = None):
        self.worker_id = worker_id
        self.original = original
        self.byte_range = byte_range
        super().__init__(f"Worker-{worker_id} failed: {original}")
