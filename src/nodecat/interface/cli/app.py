from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates one run of the nodecat command: configuration and logging
bootstrap, argument interpretation, engine execution, and the mapping of
the engine's result to a process exit status. Failure details are already
on stderr by the time the status is computed.
"""

import sys
from typing import Any, List, Optional

from nodecat.core.engine import concatenate
from nodecat.core.validator import validate_config
from nodecat.domain.config import load_config
from nodecat.domain.constants import PROG_NAME, STDIN_NAME
from nodecat.domain.options import ConcatOptions
from nodecat.infra.fs import write_line
from nodecat.infra.logging import LoggingConfig, configure_logging, get_logger
from nodecat.interface.cli.args import IllegalOptionError, parse_args, usage

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        argv: Optional[List[str]] = None,
        *,
        in_stream: Any = None,
        out_stream: Any = None,
        err_stream: Any = None,
) -> int:
    """
    Execute the nodecat command.

    Args:
        argv: Arguments after the program name. Defaults to sys.argv[1:].
        in_stream: Binary stream read for the name '-'. Defaults to stdin.
        out_stream: Binary sink for the concatenated bytes. Defaults to stdout.
        err_stream: Sink for error lines and usage. Defaults to stderr.

    Returns:
        int: 0 if every input was copied, 1 otherwise, 130 on interrupt.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    in_stream = in_stream if in_stream is not None else getattr(sys.stdin, "buffer", sys.stdin)
    out_stream = out_stream if out_stream is not None else getattr(sys.stdout, "buffer", sys.stdout)
    err_stream = err_stream if err_stream is not None else sys.stderr

    # 1. Configuration and logging bootstrap
    config, warnings = validate_config(load_config(), strict=False)
    configure_logging(LoggingConfig(
        level=config["log_level"],
        console=True,
        log_file=config["log_file"] or None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 2. Argument interpretation
    try:
        names = parse_args(args)
    except IllegalOptionError as e:
        write_line(err_stream, f"{PROG_NAME}: {e}")
        write_line(err_stream, usage().rstrip("\n"))
        return EXIT_FAILURE

    if not names:
        names = [STDIN_NAME]

    # 3. Engine execution
    options = ConcatOptions(
        file_streams={STDIN_NAME: in_stream},
        out_stream=out_stream,
        err_stream=err_stream,
        chunk_size=config["chunk_size"],
    )
    outcome: List[Optional[BaseException]] = []

    logger.debug(f"Running with inputs: {names}")
    try:
        concatenate(names, options, outcome.append)
    except KeyboardInterrupt:
        logger.debug("Interrupted by user.")
        return EXIT_INTERRUPTED

    # Error lines were written by the engine as failures occurred
    return EXIT_OK if outcome[0] is None else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
