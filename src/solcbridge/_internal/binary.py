"""Compiler executable discovery."""

import os
import shutil
from pathlib import Path
from typing import Optional, Union

from solcbridge.errors import CompilerLaunchFailed


COMPILER_ENV_VAR = "SOLCBRIDGE_COMPILER"
# Directory an installer drops the native binary into, next to the package
BUNDLED_DIR = Path(__file__).resolve().parents[1] / "native_compiler"


def executable_name() -> str:
    return "solc.exe" if os.name == "nt" else "solc"


def bundled_compiler() -> Path:
    return BUNDLED_DIR / executable_name()


def locate_compiler(explicit: Optional[Union[str, os.PathLike]] = None) -> str:
    """Find the compiler executable.

    Lookup order: explicit path, $SOLCBRIDGE_COMPILER, bundled
    native_compiler/ binary, `solc` on PATH.

    Raises:
        CompilerLaunchFailed: no candidate found
    """
    if explicit:
        return os.fspath(explicit)

    from_env = os.environ.get(COMPILER_ENV_VAR)
    if from_env:
        return from_env

    bundled = bundled_compiler()
    if bundled.is_file():
        return str(bundled)

    on_path = shutil.which(executable_name())
    if on_path:
        return on_path

    raise CompilerLaunchFailed(
        f"Unable to find the compiler: set {COMPILER_ENV_VAR}, install it into "
        f"{BUNDLED_DIR}, or put {executable_name()} on PATH"
    )
