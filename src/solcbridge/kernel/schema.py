"""Pydantic models for the standard-JSON protocol.

Two directions:
- CompilerInputDocument: what we write to the compiler's standard input.
- RawCompilerOutput: what the compiler prints back, decoded strictly so a
  shape mismatch fails fast instead of surfacing as a KeyError deep in
  extraction.
"""

import json
import math
import os
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from solcbridge._internal.canonical_json import canonical_dumps
from solcbridge.errors import CompilerOutputUnreadable, MalformedOutput


DEFAULT_EVM_VERSION = "byzantium"

# Facets requested for every file/contract pair
OUTPUT_FACETS = ("metadata", "evm.bytecode", "evm.bytecode.sourceMap", "legacyAST")


def _default_output_selection() -> Dict[str, Dict[str, List[str]]]:
    return {"*": {"*": list(OUTPUT_FACETS)}}


# ---------------------------------------------------------------------------
# Input document
# ---------------------------------------------------------------------------

class OptimizerSettings(BaseModel):
    """settings.optimizer block."""
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    runs: int = 0


class MetadataSettings(BaseModel):
    """settings.metadata block."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    use_literal_content: bool = Field(True, alias="useLiteralContent")


class CompilerSettings(BaseModel):
    """settings block of the input document."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    optimizer: OptimizerSettings = Field(default_factory=OptimizerSettings)
    evm_version: str = Field(DEFAULT_EVM_VERSION, alias="evmVersion")
    metadata: MetadataSettings = Field(default_factory=MetadataSettings)
    output_selection: Dict[str, Dict[str, List[str]]] = Field(
        default_factory=_default_output_selection,
        alias="outputSelection",
    )


class SourceLocator(BaseModel):
    """Where the compiler should read a source unit from."""
    model_config = ConfigDict(frozen=True)

    urls: List[str]


class CompilerInputDocument(BaseModel):
    """Standard-JSON input for one compiler invocation.

    Built fresh for every invocation and never mutated afterwards.
    Source identifiers are file basenames; the compiler resolves the
    absolute path listed in `urls`.
    """
    model_config = ConfigDict(frozen=True)

    language: str = "Solidity"
    sources: Dict[str, SourceLocator]
    settings: CompilerSettings = Field(default_factory=CompilerSettings)

    @classmethod
    def for_files(
        cls,
        paths: Sequence[str],
        optimizer: OptimizerSettings,
        evm_version: str = DEFAULT_EVM_VERSION,
    ) -> "CompilerInputDocument":
        sources = {
            os.path.basename(path): SourceLocator(urls=[path])
            for path in paths
        }
        settings = CompilerSettings(optimizer=optimizer, evm_version=evm_version)
        return cls(sources=sources, settings=settings)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_stdin(self) -> str:
        """Serialize to the exact text written to the compiler's stdin."""
        return canonical_dumps(self.to_json_dict())


# ---------------------------------------------------------------------------
# Raw output
# ---------------------------------------------------------------------------

class _WireModel(BaseModel):
    # The compiler emits many facets we never read
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LinkOffset(_WireModel):
    """One placeholder position, in bytes."""
    start: int
    length: int


class RawBytecode(_WireModel):
    code: str = Field("", alias="object")
    link_references: Dict[str, Dict[str, List[LinkOffset]]] = Field(
        default_factory=dict,
        alias="linkReferences",
    )

    @field_validator('code', mode='before')
    @classmethod
    def validate_code(cls, v: Any) -> str:
        """Anything but a hex string means the contract has no bytecode."""
        return v if isinstance(v, str) else ""


class RawEvm(_WireModel):
    bytecode: Optional[RawBytecode] = None


class RawContract(_WireModel):
    evm: Optional[RawEvm] = None
    metadata: Optional[str] = None

    @property
    def bytecode(self) -> Optional[RawBytecode]:
        if self.evm is None:
            return None
        return self.evm.bytecode


class RawSourceLocation(_WireModel):
    """Only a string file and a numeric start are kept; other values read as absent."""
    file: Optional[str] = None
    start: Optional[Union[int, float]] = None

    @field_validator('file', mode='before')
    @classmethod
    def validate_file(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator('start', mode='before')
    @classmethod
    def validate_start(cls, v: Any) -> Optional[Union[int, float]]:
        # No coercion: "12" is not an offset
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if isinstance(v, float) and not math.isfinite(v):
            return None
        return v


class RawError(_WireModel):
    """One entry of the compiler's `errors` list (errors and warnings alike)."""
    formatted_message: Optional[str] = Field(None, alias="formattedMessage")
    message: Optional[str] = None
    severity: str = ""
    source_location: Optional[RawSourceLocation] = Field(None, alias="sourceLocation")

    @field_validator('source_location', mode='before')
    @classmethod
    def validate_source_location(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, RawSourceLocation)) else None


class RawCompilerOutput(_WireModel):
    """Decoded standard-JSON output. Both keys may be absent."""
    contracts: Dict[str, Dict[str, RawContract]] = Field(default_factory=dict)
    errors: List[RawError] = Field(default_factory=list)


def decode_compiler_output(text: Optional[str], path: str) -> RawCompilerOutput:
    """Decode the compiler's standard output.

    Raises:
        CompilerOutputUnreadable: output is empty or not JSON
        MalformedOutput: output is JSON but not shaped like compiler output
    """
    if not text or not text.strip():
        raise CompilerOutputUnreadable(
            f"Unexpected output while compiling {path}: compiler printed nothing",
            path=path,
        )
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CompilerOutputUnreadable(
            f"Unexpected output while compiling {path}: {exc}",
            path=path,
        ) from exc
    try:
        return RawCompilerOutput.model_validate(data)
    except ValidationError as exc:
        raise MalformedOutput(
            f"Unexpected output shape while compiling {path}: {exc}",
            path=path,
        ) from exc


# ---------------------------------------------------------------------------
# Contract metadata (a JSON document embedded as a string)
# ---------------------------------------------------------------------------

class MetadataCompiler(_WireModel):
    version: Optional[str] = None


class MetadataOutput(_WireModel):
    abi: Union[List[Any], Dict[str, Any]]
    devdoc: Optional[Dict[str, Any]] = None
    userdoc: Optional[Dict[str, Any]] = None


class ContractMetadata(_WireModel):
    output: MetadataOutput
    compiler: Optional[MetadataCompiler] = None


def parse_contract_metadata(
    metadata: Optional[str],
    path: str,
    contract: str,
) -> ContractMetadata:
    """Decode a contract's metadata string.

    Raises:
        MalformedOutput: metadata is missing, not JSON, or has no output.abi
    """
    if metadata is None:
        raise MalformedOutput(
            f"Contract {contract} in {path} has no metadata",
            path=path,
            contract=contract,
        )
    try:
        return ContractMetadata.model_validate_json(metadata)
    except ValidationError as exc:
        raise MalformedOutput(
            f"Invalid metadata for contract {contract} in {path}: {exc}",
            path=path,
            contract=contract,
        ) from exc
