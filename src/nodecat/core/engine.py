from __future__ import annotations

"""
Concatenation Engine.

Drives the ordered copy of every named input into a single output:
1. Validates names and options before any I/O.
2. Copies inputs one at a time, strictly in the given order.
3. Reads each caller-supplied stream at most once, however often its name repeats.
4. Reports each failure on the error sink as soon as it is detected.
5. Continues after read failures and stops after an output failure.
6. Delivers the aggregated result exactly once, via callback or Future.
"""

import logging
import os
import threading
from collections.abc import Sequence
from concurrent.futures import Future
from typing import Any, Callable, List, Optional, Set, Tuple

from nodecat.core.copy_task import CopyState, CopyTask
from nodecat.domain.constants import PROG_NAME
from nodecat.domain.errors import ContractViolationError, combine_errors, error_message
from nodecat.domain.options import ConcatOptions
from nodecat.domain.sources import InputSource, OwnedFileSource, SuppliedSource
from nodecat.infra.fs import write_line

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException]], Any]


# -----------------------------------------------------------------------------
# ENGINE
# -----------------------------------------------------------------------------

class ConcatEngine:
    """
    One-shot state machine for a single concatenation.

    Attributes:
        names: Normalized input names, in copy order.
        options: Validated options.
    """

    def __init__(self, names: Any, options: Any = None) -> None:
        self.names: Tuple[str, ...] = normalize_names(names)
        self.options: ConcatOptions = ConcatOptions.from_value(options)

        self._out = self.options.resolve_out_stream()
        self._err = self.options.resolve_err_stream()
        self._errors: List[BaseException] = []
        self._consumed: Set[str] = set()
        self._cursor = 0
        self._started = False

    @property
    def errors(self) -> Tuple[BaseException, ...]:
        """Failures recorded so far, in occurrence order."""
        return tuple(self._errors)

    def run(self) -> Optional[BaseException]:
        """
        Copy every input and return the aggregated result.

        Returns:
            Optional[BaseException]: None on success, the single failure, or
            an AggregateError when several failures occurred.

        Raises:
            RuntimeError: If the engine has already been run.
        """
        if self._started:
            raise RuntimeError("ConcatEngine instances can only be run once")
        self._started = True

        logger.debug(f"Concatenating {len(self.names)} input(s).")

        while self._cursor < len(self.names):
            name = self.names[self._cursor]
            self._cursor += 1

            source = self._resolve_source(name)
            if source is None:
                logger.debug(f"Skipping '{name}': supplied stream already consumed.")
                continue

            task = CopyTask(source, self._out, self.options.chunk_size)
            state = task.run()

            if state is CopyState.WRITE_FAILED:
                self._on_output_error(task.error)
                break

            if state is CopyState.READ_FAILED:
                self._on_input_error(name, task.error)

            if not source.owned:
                self._consumed.add(name)
            logger.debug(f"Finished '{name}' ({task.bytes_copied} bytes, {state.value}).")

        return self._finalize()

    # -------------------------------------------------------------------------
    # Step handling
    # -------------------------------------------------------------------------

    def _resolve_source(self, name: str) -> Optional[InputSource]:
        stream = self.options.file_streams.get(name)
        if stream is None:
            return OwnedFileSource(name)
        if name in self._consumed:
            return None
        return SuppliedSource(name, stream)

    def _on_input_error(self, name: str, err: Optional[BaseException]) -> None:
        if err is None:
            return
        err.file_name = name  # type: ignore[attr-defined]
        self._errors.append(err)
        self._report(f"{PROG_NAME}: {name}: {error_message(err)}")

    def _on_output_error(self, err: Optional[BaseException]) -> None:
        if err is None:
            return
        self._errors.append(err)
        self._report(f"{PROG_NAME}: {error_message(err)}")
        skipped = len(self.names) - self._cursor
        if skipped:
            logger.debug(f"Output failed; abandoning {skipped} remaining input(s).")

    def _report(self, line: str) -> None:
        # A broken error sink must not prevent completion
        try:
            write_line(self._err, line)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not write to the error sink: {e!r}")

    def _finalize(self) -> Optional[BaseException]:
        result = combine_errors(self._errors)
        logger.debug(f"Concatenation finished with {len(self._errors)} error(s).")
        return result


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def concatenate(
        names: Any,
        options: Any = None,
        callback: Optional[Callback] = None,
) -> Optional["Future[None]"]:
    """
    Concatenate named inputs into the output sink.

    Inputs are copied in order; names may repeat. A name registered in
    ``options.file_streams`` is read from that stream only the first time it
    appears. Concatenation continues after read errors and stops at the first
    output error. Every failure is written to the error sink when detected.

    Args:
        names: Sequence of input names (str or path-like).
        options: None, a ConcatOptions, or a mapping of its fields. May also be
            the callback when no explicit callback is given.
        callback: Called exactly once with the aggregated result (None on
            success). When given, the work runs in the calling thread.

    Returns:
        Optional[Future[None]]: None when a callback was given. Otherwise a
        Future that resolves to None on success or raises the aggregated error.

    Raises:
        TypeError: If callback is given but is not callable.
    """
    if callback is None and callable(options) and not isinstance(options, ConcatOptions):
        callback, options = options, None

    if callback is not None:
        if not callable(callback):
            raise TypeError("callback must be callable")
        callback(_execute(names, options))
        return None

    future: "Future[None]" = Future()
    future.set_running_or_notify_cancel()

    worker = threading.Thread(
        target=_resolve_future,
        args=(future, names, options),
        name="nodecat-concatenate",
        daemon=True,
    )
    worker.start()
    return future


def normalize_names(names: Any) -> Tuple[str, ...]:
    """
    Validate the ordered input names.

    Args:
        names: Candidate sequence of names.

    Returns:
        Tuple[str, ...]: The names as plain strings.

    Raises:
        ContractViolationError: If names is not a sequence of str/path-like.
    """
    if isinstance(names, (str, bytes, bytearray)) or not isinstance(names, Sequence):
        raise ContractViolationError("names", "names must be a sequence of file names")

    normalized: List[str] = []
    for index, name in enumerate(names):
        try:
            value = os.fspath(name)
        except TypeError:
            value = None
        if not isinstance(value, str):
            raise ContractViolationError(
                "names", f"names[{index}] must be a str or path-like, not {type(name).__name__}"
            )
        normalized.append(value)
    return tuple(normalized)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _execute(names: Any, options: Any) -> Optional[BaseException]:
    """Run one invocation, turning contract violations into its result."""
    try:
        engine = ConcatEngine(names, options)
    except ContractViolationError as e:
        logger.debug(f"Rejected concatenation request: {e}")
        return e
    return engine.run()


def _resolve_future(future: "Future[None]", names: Any, options: Any) -> None:
    try:
        err = _execute(names, options)
    except BaseException as e:
        future.set_exception(e)
        return

    if err is None:
        future.set_result(None)
    else:
        future.set_exception(err)
