"""Parallel hashing workers."""
from .pool import HashWorker, WorkerPool

__all__ = ["HashWorker", "WorkerPool"]
