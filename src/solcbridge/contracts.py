"""Public request/result models for solcbridge."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class CompileRequest(BaseModel):
    """What to compile and how.

    Field types are loose on purpose: validation happens in
    solcbridge.kernel.request so that each bad field maps to its own
    error kind instead of a generic pydantic ValidationError.
    """
    files: Union[str, List[str]]
    optimize: bool = False
    optimize_runs: Optional[Any] = None


class ContractArtifact(BaseModel):
    """Deployable output of compiling one contract."""
    contract_name: str
    source_file: str  # Source identifier as reported by the compiler
    bytecode: str  # Link placeholders replaced with __LibraryName___ symbols
    abi: Union[List[Any], Dict[str, Any]]
    devdoc: Optional[Dict[str, Any]] = None
    userdoc: Optional[Dict[str, Any]] = None
    compiler: Optional[str] = None  # Compiler version recorded in the metadata

    def to_output_dict(self) -> Dict[str, Any]:
        """Legacy per-contract shape: bytecode, abi and docs when present."""
        out: Dict[str, Any] = {"bytecode": self.bytecode, "abi": self.abi}
        if self.devdoc is not None:
            out["devdoc"] = self.devdoc
        if self.userdoc is not None:
            out["userdoc"] = self.userdoc
        return out


class DiagnosticSource(BaseModel):
    """Where a diagnostic points to."""
    file: str
    offset: Optional[Union[int, float]] = None  # Byte offset; only set when the compiler reports a number


class Diagnostic(BaseModel):
    """A compiler error or warning."""
    message: str
    severity: str  # "error" | "warning" | "info"
    source: Optional[DiagnosticSource] = None

    def to_record(self) -> Dict[str, Any]:
        """Normalized record used for content hashing (absent fields omitted)."""
        return self.model_dump(exclude_none=True)


class CompileResult(BaseModel):
    """Aggregated result of one compile call."""
    artifacts: Dict[str, ContractArtifact] = Field(default_factory=dict)
    diagnostics: List[Diagnostic] = Field(default_factory=list)  # First-seen order

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_output_dict(self) -> Dict[str, Any]:
        """JSON envelope written by the CLI."""
        return {
            "contracts": {
                name: artifact.to_output_dict()
                for name, artifact in self.artifacts.items()
            },
            "diagnostics": [d.to_record() for d in self.diagnostics],
        }
