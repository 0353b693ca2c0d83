"""Compiler configuration."""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from solcbridge._internal.binary import COMPILER_ENV_VAR
from solcbridge.kernel.schema import DEFAULT_EVM_VERSION

EVM_VERSION_ENV_VAR = "SOLCBRIDGE_EVM_VERSION"
MODE_ENV_VAR = "SOLCBRIDGE_MODE"

InvocationMode = Literal["per_file", "batch"]


class CompilerConfig(BaseModel):
    """How to find and drive the compiler.

    mode:
        per_file - one compiler invocation per source file (default)
        batch    - one invocation for all files
    """
    model_config = ConfigDict(frozen=True)

    compiler_path: Optional[Path] = None  # None: discover (see _internal.binary)
    evm_version: str = DEFAULT_EVM_VERSION
    mode: InvocationMode = "per_file"

    @classmethod
    def from_env(cls, **overrides) -> "CompilerConfig":
        """Build a config from SOLCBRIDGE_* environment variables.

        Keyword overrides that are not None win over the environment.
        """
        values = {}
        if os.environ.get(COMPILER_ENV_VAR):
            values["compiler_path"] = os.environ[COMPILER_ENV_VAR]
        if os.environ.get(EVM_VERSION_ENV_VAR):
            values["evm_version"] = os.environ[EVM_VERSION_ENV_VAR]
        if os.environ.get(MODE_ENV_VAR):
            values["mode"] = os.environ[MODE_ENV_VAR]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
