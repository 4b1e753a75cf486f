from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Stream doubles that fail on demand, for read and write error paths.
3. Sample input files on disk.
"""

import io
import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Stream Doubles
# -----------------------------------------------------------------------------
class FailingReader(io.RawIOBase):
    """Readable stream that yields `data` and then raises `error`."""

    def __init__(self, error: BaseException, data: bytes = b"") -> None:
        super().__init__()
        self.error = error
        self._data = data
        self.read_calls = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        self.read_calls += 1
        if self._data:
            n = min(len(buffer), len(self._data))
            buffer[:n] = self._data[:n]
            self._data = self._data[n:]
            return n
        raise self.error


class FailingWriter(io.BytesIO):
    """Binary sink that accepts `limit` bytes, then raises `error` on write."""

    def __init__(self, error: BaseException, limit: int = 0) -> None:
        super().__init__()
        self.error = error
        self.limit = limit

    def write(self, data) -> int:
        if self.tell() + len(data) > self.limit:
            raise self.error
        return super().write(data)


class TrackingBytesIO(io.BytesIO):
    """BytesIO that remembers whether anyone read from it."""

    def __init__(self, data: bytes = b"") -> None:
        super().__init__(data)
        self.was_read = False

    def read(self, size: Optional[int] = -1) -> bytes:
        self.was_read = True
        return super().read(size)

    def read1(self, size: int = -1) -> bytes:
        self.was_read = True
        return super().read1(size)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def failing_reader() -> Callable[..., FailingReader]:
    """Factory for readers that fail after emitting optional data."""
    return FailingReader


@pytest.fixture
def failing_writer() -> Callable[..., FailingWriter]:
    """Factory for output sinks that fail after a byte limit."""
    return FailingWriter


@pytest.fixture
def tracking_stream() -> Callable[..., TrackingBytesIO]:
    """Factory for in-memory inputs that record whether they were read."""
    return TrackingBytesIO


@pytest.fixture
def sample_files(tmp_path: Path) -> Dict[str, Path]:
    """
    Create small input files with distinct contents.

    Returns:
        Dict[str, Path]: 'a', 'b' and 'binary' sample paths.
    """
    a = tmp_path / "a.txt"
    a.write_bytes(b"alpha\n")
    b = tmp_path / "b.txt"
    b.write_bytes(b"bravo\nno trailing newline")
    binary = tmp_path / "blob.bin"
    binary.write_bytes(bytes(range(256)) * 3)
    return {"a": a, "b": b, "binary": binary}
