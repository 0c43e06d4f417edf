"""Shared fixtures for etagcheck tests."""
import hashlib
from pathlib import Path

import pytest

from etagcheck.config import Config, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Isolate every test from any user config file."""
    config = Config()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def make_file(tmp_path: Path):
    """Return a factory writing bytes to a file under tmp_path."""
    def _make(data: bytes, name: str = "data.bin") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _make


def _reference_etag(data: bytes, block_size: int) -> str:
    blocks = [data[i:i + block_size] for i in range(0, len(data), block_size)] or [b""]
    if len(blocks) == 1:
        return hashlib.md5(blocks[0]).hexdigest()
    joined = b"".join(hashlib.md5(b).digest() for b in blocks)
    return f"{hashlib.md5(joined).hexdigest()}-{len(blocks)}"


@pytest.fixture
def reference_etag():
    """Straightforward in-memory multipart tag, for comparison."""
    return _reference_etag
