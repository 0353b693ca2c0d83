"""Exception taxonomy for solcbridge.compile().

All failures of a compile call are subclasses of CompileError. Each one
carries its ErrorCode plus the file (and, when known, the contract) that
was being processed when it happened.
"""

from typing import Optional

from solcbridge.codes import ErrorCode


class CompileError(Exception):
    """Base class for every terminal compile failure."""

    code: ErrorCode

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        contract: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.contract = contract

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "path": self.path,
            "contract": self.contract,
        }


class InvalidRequest(CompileError):
    """The request is not a CompileRequest or a mapping."""
    code = ErrorCode.INVALID_REQUEST


class InvalidOptimizerRuns(CompileError):
    """optimize_runs is not a non-negative integer."""
    code = ErrorCode.INVALID_OPTIMIZER_RUNS


class InvalidInputPath(CompileError):
    """A source path is empty, not a string, or not absolute."""
    code = ErrorCode.INVALID_INPUT_PATH


class CompilerLaunchFailed(CompileError):
    """The compiler executable could not be found or started."""
    code = ErrorCode.COMPILER_LAUNCH_FAILED


class CompilerOutputUnreadable(CompileError):
    """The compiler printed nothing, or something that is not JSON."""
    code = ErrorCode.COMPILER_OUTPUT_UNREADABLE


class MalformedOutput(CompileError):
    """The compiler output (or a contract's metadata) has the wrong shape."""
    code = ErrorCode.MALFORMED_OUTPUT
