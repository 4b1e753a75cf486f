from __future__ import annotations

"""
Input Source and Sink Definitions.

Models the two kinds of input the engine can copy from: files it opens and
owns for the duration of one copy step, and streams supplied by the caller,
which it only reads. Also declares the minimal protocol a sink must satisfy.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional, Protocol, runtime_checkable

from nodecat.infra.fs import has_method, open_input

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# SINK PROTOCOL
# -----------------------------------------------------------------------------

@runtime_checkable
class Writable(Protocol):
    """Anything with a ``write`` method: an output or error sink."""

    def write(self, data: Any) -> Any:
        ...


def is_writable(obj: Any) -> bool:
    """Check that an object conforms to Writable with a callable write."""
    return isinstance(obj, Writable) and has_method(obj, "write")


def is_readable(obj: Any) -> bool:
    """Check that an object exposes a callable read."""
    return has_method(obj, "read")


# -----------------------------------------------------------------------------
# INPUT SOURCES
# -----------------------------------------------------------------------------

class InputSource(ABC):
    """
    A named byte source for one copy step.

    Attributes:
        name: Identifier of the input as given by the caller.
    """

    owned: bool = False

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def open(self) -> BinaryIO:
        """
        Obtain the readable stream for this input.

        Raises:
            OSError: If the underlying input cannot be opened.
        """

    @abstractmethod
    def release(self, stream: Optional[BinaryIO]) -> None:
        """Give back a stream previously returned by open()."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class OwnedFileSource(InputSource):
    """A file opened freshly for this invocation and closed by the engine."""

    owned = True

    def open(self) -> BinaryIO:
        return open_input(self.name)

    def release(self, stream: Optional[BinaryIO]) -> None:
        if stream is None:
            return
        try:
            stream.close()
        except OSError as e:
            logger.debug(f"Ignoring close failure on '{self.name}': {e}")


class SuppliedSource(InputSource):
    """A caller-managed stream. Read from, never closed."""

    def __init__(self, name: str, stream: BinaryIO) -> None:
        super().__init__(name)
        self.stream = stream

    def open(self) -> BinaryIO:
        return self.stream

    def release(self, stream: Optional[BinaryIO]) -> None:
        return None
