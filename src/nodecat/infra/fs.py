from __future__ import annotations

"""
FileSystem and Stream Infrastructure Layer.

Provides the low-level stream capabilities the engine relies on: opening
named files for binary reading, probing stream shapes, and writing text
lines to sinks that may be either text or binary.
"""

import io
import os
from typing import Any, BinaryIO, Union

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

TEXT_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# FILE ACCESS API
# -----------------------------------------------------------------------------

def open_input(path: Union[str, "os.PathLike[str]"]) -> BinaryIO:
    """
    Open a named file for unbuffered-friendly binary reading.

    Args:
        path: Filesystem path of the input.

    Returns:
        BinaryIO: A buffered binary reader owned by the caller.

    Raises:
        OSError: If the file cannot be opened (missing, directory, denied).
    """
    return open(os.fspath(path), "rb")

# -----------------------------------------------------------------------------
# STREAM CAPABILITY PROBES
# -----------------------------------------------------------------------------

def has_method(obj: Any, name: str) -> bool:
    """Check whether an object exposes a callable attribute."""
    return callable(getattr(obj, name, None))


def is_binary_sink(stream: Any) -> bool:
    """
    Decide whether a sink expects bytes rather than str.

    Args:
        stream: Any object exposing ``write``.

    Returns:
        bool: True for raw/buffered binary streams.
    """
    return isinstance(stream, (io.RawIOBase, io.BufferedIOBase))


def write_line(stream: Any, text: str) -> None:
    """
    Write one newline-terminated line to a text or binary sink and flush it.

    Args:
        stream: Destination sink.
        text: Line content without the trailing newline.
    """
    line = f"{text}\n"
    if is_binary_sink(stream):
        stream.write(line.encode(TEXT_ENCODING, errors="replace"))
    else:
        stream.write(line)
    if has_method(stream, "flush"):
        stream.flush()
