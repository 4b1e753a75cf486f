from __future__ import annotations

"""
Concatenation Options Model.

Defines the immutable option set accepted by the engine and the
normalization that turns caller-provided values (None, a mapping, or an
options instance) into a validated ConcatOptions. Shape checks run at
construction time so a malformed option never reaches the copy loop.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Mapping, Optional

from nodecat.domain.constants import DEFAULT_CHUNK_SIZE
from nodecat.domain.errors import ContractViolationError
from nodecat.domain.sources import Writable, is_readable, is_writable

# Keys accepted when options are given as a plain mapping
_OPTION_KEYS = ("file_streams", "out_stream", "err_stream", "chunk_size")


@dataclass(frozen=True)
class ConcatOptions:
    """
    Options for a single concatenation.

    Attributes:
        file_streams: Caller-supplied readable streams keyed by input name.
            A name found here is read from its stream (at most once) instead
            of being opened as a file.
        out_stream: Binary sink receiving the concatenated bytes.
            Defaults to the process standard output.
        err_stream: Sink receiving one line per failure.
            Defaults to the process standard error.
        chunk_size: Maximum number of bytes read per copy step.
    """
    file_streams: Mapping[str, BinaryIO] = field(default_factory=dict)
    out_stream: Optional[Writable] = None
    err_stream: Optional[Writable] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.file_streams is None:
            object.__setattr__(self, "file_streams", {})
        if not isinstance(self.file_streams, Mapping):
            raise ContractViolationError(
                "options.file_streams",
                "options.file_streams must be a mapping of names to readable streams",
            )
        streams: Dict[str, BinaryIO] = {}
        for name, stream in self.file_streams.items():
            try:
                key = os.fspath(name)
            except TypeError:
                key = None
            if not isinstance(key, str):
                raise ContractViolationError(
                    "options.file_streams",
                    f"options.file_streams keys must be str or path-like, not {type(name).__name__}",
                )
            if not is_readable(stream):
                raise ContractViolationError(
                    "options.file_streams",
                    f"options.file_streams[{key!r}] must be a readable stream",
                )
            streams[key] = stream
        # Keys match the names, which are compared as plain strings
        object.__setattr__(self, "file_streams", streams)

        if self.out_stream is not None and not is_writable(self.out_stream):
            raise ContractViolationError(
                "options.out_stream", "options.out_stream must be a writable stream"
            )
        if self.err_stream is not None and not is_writable(self.err_stream):
            raise ContractViolationError(
                "options.err_stream", "options.err_stream must be a writable stream"
            )

        chunk_size = self.chunk_size
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ContractViolationError(
                "options.chunk_size", "options.chunk_size must be a positive integer"
            )

    # -------------------------------------------------------------------------
    # Resolved sinks
    # -------------------------------------------------------------------------

    def resolve_out_stream(self) -> Any:
        """Return the output sink, falling back to standard output."""
        if self.out_stream is not None:
            return self.out_stream
        return getattr(sys.stdout, "buffer", sys.stdout)

    def resolve_err_stream(self) -> Any:
        """Return the error sink, falling back to standard error."""
        if self.err_stream is not None:
            return self.err_stream
        return sys.stderr

    # -------------------------------------------------------------------------
    # Normalization
    # -------------------------------------------------------------------------

    @classmethod
    def from_value(cls, value: Any) -> "ConcatOptions":
        """
        Build options from whatever the caller passed.

        Args:
            value: None, a ConcatOptions instance, or a mapping using the
                attribute names as keys. Unknown mapping keys are ignored.

        Returns:
            ConcatOptions: Validated options.

        Raises:
            ContractViolationError: If the value or one of its fields is malformed.
        """
        if value is None:
            return cls()
        if isinstance(value, ConcatOptions):
            return value
        if isinstance(value, Mapping):
            kwargs: Dict[str, Any] = {k: value[k] for k in _OPTION_KEYS if k in value}
            return cls(**kwargs)
        raise ContractViolationError("options", "options must be a mapping or ConcatOptions")
