"""solcbridge: standard-JSON driver for a native Solidity compiler."""

from importlib.metadata import version as _dist_version, PackageNotFoundError

try:
    __version__ = _dist_version("solcbridge")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: `version` is the compiler version, not the package version (__version__)
from solcbridge.api import Compiler, compile, compile_async, version
from solcbridge.codes import ErrorCode
from solcbridge.config import CompilerConfig
from solcbridge.contracts import (
    CompileRequest,
    CompileResult,
    ContractArtifact,
    Diagnostic,
    DiagnosticSource,
)
from solcbridge.errors import (
    CompileError,
    CompilerLaunchFailed,
    CompilerOutputUnreadable,
    InvalidInputPath,
    InvalidOptimizerRuns,
    InvalidRequest,
    MalformedOutput,
)

__all__ = [
    "__version__",
    "Compiler",
    "compile",
    "compile_async",
    "version",
    "ErrorCode",
    "CompilerConfig",
    "CompileRequest",
    "CompileResult",
    "ContractArtifact",
    "Diagnostic",
    "DiagnosticSource",
    "CompileError",
    "CompilerLaunchFailed",
    "CompilerOutputUnreadable",
    "InvalidInputPath",
    "InvalidOptimizerRuns",
    "InvalidRequest",
    "MalformedOutput",
]
