from __future__ import annotations

"""
Copy Task State Machine.

Represents one step of a concatenation: copying a single input into the
shared output sink. The task tracks which side failed so the engine can
apply its policy (continue after a read failure, stop after a write
failure). The output sink is never closed here.
"""

import logging
from enum import Enum
from typing import Any, BinaryIO, Callable, Optional

from nodecat.domain.sources import InputSource
from nodecat.infra.fs import has_method

logger = logging.getLogger(__name__)


class CopyState(Enum):
    """Lifecycle of a copy step."""
    PENDING = "pending"
    COPYING = "copying"
    ENDED = "ended"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"


class CopyTask:
    """
    Copy the bytes of one input to the output, in source order.

    Attributes:
        source: The input being copied.
        state: Current lifecycle state.
        error: The failure that ended the task, if any.
        bytes_copied: Number of bytes accepted by the output so far.
    """

    def __init__(self, source: InputSource, sink: Any, chunk_size: int) -> None:
        self.source = source
        self.state = CopyState.PENDING
        self.error: Optional[BaseException] = None
        self.bytes_copied = 0
        self._sink = sink
        self._chunk_size = chunk_size
        self._stream: Optional[BinaryIO] = None
        self._released = False

    def run(self) -> CopyState:
        """
        Execute the copy until the input ends or one side fails.

        Returns:
            CopyState: ENDED, READ_FAILED or WRITE_FAILED.

        Raises:
            RuntimeError: If the task has already been run.
        """
        if self.state is not CopyState.PENDING:
            raise RuntimeError(f"Copy task for '{self.source.name}' already ran")

        self.state = CopyState.COPYING
        try:
            try:
                self._stream = self.source.open()
            except Exception as e:
                return self._fail(CopyState.READ_FAILED, e)

            read = self._reader(self._stream)
            while True:
                try:
                    chunk = read(self._chunk_size)
                    if isinstance(chunk, str):
                        raise TypeError("input stream returned text, expected bytes")
                except Exception as e:
                    return self._fail(CopyState.READ_FAILED, e)

                if not chunk:
                    self.state = CopyState.ENDED
                    return self.state

                try:
                    self._write_all(chunk)
                except Exception as e:
                    return self._fail(CopyState.WRITE_FAILED, e)
        finally:
            self.release()

    def release(self) -> None:
        """Detach from the input. Owned inputs are closed; safe to call twice."""
        if self._released:
            return
        self._released = True
        stream, self._stream = self._stream, None
        self.source.release(stream)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _fail(self, state: CopyState, error: BaseException) -> CopyState:
        self.state = state
        self.error = error
        logger.debug(f"Copy of '{self.source.name}' ended in {state.value}: {error!r}")
        return state

    @staticmethod
    def _reader(stream: BinaryIO) -> Callable[[int], bytes]:
        # read1 returns whatever is available instead of waiting for a full chunk
        read1 = getattr(stream, "read1", None)
        if callable(read1):
            return read1
        return stream.read

    def _write_all(self, chunk: bytes) -> None:
        pending = chunk
        while pending:
            written = self._sink.write(pending)
            # Raw sinks may accept only part of the chunk
            if not isinstance(written, int) or written >= len(pending):
                break
            if written <= 0:
                raise OSError(f"short write: output accepted {written} of {len(pending)} bytes")
            pending = pending[written:]
        self.bytes_copied += len(chunk)
        if has_method(self._sink, "flush"):
            self._sink.flush()
