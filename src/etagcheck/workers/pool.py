"""Worker pool for hashing super-ranges of one file in parallel."""
import threading
import logging
from pathlib import Path
from typing import Optional

from etagcheck.hashing import hasher
from etagcheck.hashing.planner import ByteRange
from etagcheck.exceptions import InvalidInputError, WorkerError


logger = logging.getLogger(__name__)


class HashWorker(threading.Thread):
    """Worker thread hashing the blocks of one super-range."""

    def __init__(
        self,
        worker_id: int,
        file_path: Path,
        super_range: ByteRange,
        block_size: int,
        stop_event: threading.Event,
        algorithm: str = "md5",
        read_size: int = hasher.READ_SIZE,
    ):
        super().__init__(daemon=True)
        self.worker_id = worker_id
        self.file_path = file_path
        self.super_range = super_range
        self.block_size = block_size
        self.stop_event = stop_event
        self.algorithm = algorithm
        self.read_size = read_size
        self.name = f"HashWorker-{worker_id}"
        self.digests: Optional[list[bytes]] = None
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        """Hash the assigned super-range, recording digests or the failure."""
        logger.debug(f"{self.name} started on bytes {self.super_range.start}-{self.super_range.end}")
        try:
            self.digests = hasher.hash_super_range(
                self.file_path,
                self.super_range,
                self.block_size,
                algorithm=self.algorithm,
                read_size=self.read_size,
                stop_event=self.stop_event,
            )
        except Exception as e:
            logger.exception(f"{self.name} failed: {e}")
            self.error = e
            # Remaining workers stop at their next block boundary
            self.stop_event.set()
        logger.debug(f"{self.name} stopped")


class WorkerPool:
    """Static pool: one worker per super-range, results merged in range order."""

    def __init__(
        self,
        file_path: Path,
        block_size: int,
        algorithm: str = "md5",
        read_size: int = hasher.READ_SIZE,
    ):
        if block_size <= 0:
            raise InvalidInputError(f"Block size must be positive, got {block_size}")
        self.file_path = Path(file_path)
        self.block_size = block_size
        self.algorithm = algorithm
        self.read_size = read_size
        self.workers: list[HashWorker] = []
        self.stop_event = threading.Event()

    def execute(self, super_ranges: list[ByteRange]) -> list[bytes]:
        """
        Hash all super-ranges concurrently.

        Args:
            super_ranges: Ordered, block-aligned super-ranges

        Returns:
            Block digests in file order

        Raises:
            WorkerError: First failure in super-range order, after every
                worker has been joined
        """
        self.stop_event.clear()
        self.workers = [
            HashWorker(
                i, self.file_path, super_range, self.block_size,
                self.stop_event, self.algorithm, self.read_size,
            )
            for i, super_range in enumerate(super_ranges)
        ]

        try:
            for worker in self.workers:
                worker.start()
        except BaseException:
            self.stop_event.set()
            raise
        finally:
            self.join()

        logger.debug(f"Worker pool finished {len(self.workers)} super-ranges")

        for worker in self.workers:
            if worker.error is not None:
                raise WorkerError(worker.worker_id, worker.error, worker.super_range) from worker.error

        digests: list[bytes] = []
        for worker in self.workers:
            if worker.digests is None:
                raise WorkerError(
                    worker.worker_id, RuntimeError("stopped before finishing"), worker.super_range
                )
            digests.extend(worker.digests)
        return digests

    def join(self) -> None:
        """Wait for every started worker to exit."""
        for worker in self.workers:
            if worker.ident is not None:
                worker.join()

    def get_stats(self) -> dict:
        """Get worker pool statistics."""
        return {
            "workers": len(self.workers),
            "block_size": self.block_size,
            "failed": sum(1 for w in self.workers if w.error is not None),
            "stopped": self.stop_event.is_set(),
        }
