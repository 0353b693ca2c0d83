"""Error code constants for solcbridge compile failures.

Every CompileError carries one of these codes so callers can branch on the
failure kind without matching message text.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Compile failure codes."""

    # Request validation (raised before any process is spawned)
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_OPTIMIZER_RUNS = "INVALID_OPTIMIZER_RUNS"
    INVALID_INPUT_PATH = "INVALID_INPUT_PATH"

    # Process and output failures
    COMPILER_LAUNCH_FAILED = "COMPILER_LAUNCH_FAILED"
    COMPILER_OUTPUT_UNREADABLE = "COMPILER_OUTPUT_UNREADABLE"
    MALFORMED_OUTPUT = "MALFORMED_OUTPUT"
