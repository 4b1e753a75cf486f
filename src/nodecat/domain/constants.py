from __future__ import annotations

"""
Domain Constants.

Provides centralized access to the command name, the reserved input name
for standard input, copy sizing defaults, and configuration identifiers.
"""

PROG_NAME = "nodecat"
STDIN_NAME = "-"
END_OF_OPTIONS = "--"

# Read size per copy step
DEFAULT_CHUNK_SIZE = 64 * 1024

DEFAULT_LOG_LEVEL = "WARNING"

# Configuration sources
CONFIG_DIR_NAME = ".nodecat"
CONFIG_FILE_NAME = "config.json"
ENV_CONFIG_PATH = "NODECAT_CONFIG"
ENV_OVERRIDES = {
    "chunk_size": "NODECAT_CHUNK_SIZE",
    "log_level": "NODECAT_LOG_LEVEL",
    "log_file": "NODECAT_LOG_FILE",
}
