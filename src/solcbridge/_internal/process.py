"""Run an external process with a stdin payload and collect its output.

Two drivers, same contract: the payload is written to standard input and
standard input is then closed (the compiler waits for EOF), stdout/stderr
are captured as text, and the exit status is reported but not judged.
Launch failures surface as OSError for the caller to translate.
"""

import asyncio
import os
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class ProcessResult:
    stdout: str
    stderr: str
    returncode: Optional[int]


def _creationflags() -> int:
    # Keep a console window from flashing up on Windows
    if os.name == "nt":
        return getattr(subprocess, "CREATE_NO_WINDOW", 0)
    return 0


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def run_process(
    argv: Sequence[str],
    stdin_text: Optional[str] = None,
    cwd: Optional[str] = None,
) -> ProcessResult:
    """Run argv to completion, blocking the calling thread."""
    process = subprocess.run(
        list(argv),
        input=stdin_text.encode("utf-8") if stdin_text is not None else None,
        stdin=subprocess.DEVNULL if stdin_text is None else None,
        capture_output=True,
        cwd=cwd,
        check=False,
        creationflags=_creationflags(),
    )
    return ProcessResult(
        stdout=_decode(process.stdout),
        stderr=_decode(process.stderr),
        returncode=process.returncode,
    )


async def run_process_async(
    argv: Sequence[str],
    stdin_text: Optional[str] = None,
    cwd: Optional[str] = None,
) -> ProcessResult:
    """Run argv to completion without blocking the event loop."""
    process = await asyncio.create_subprocess_exec(
        *argv,
        stdin=subprocess.PIPE if stdin_text is not None else subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        creationflags=_creationflags(),
    )
    payload = stdin_text.encode("utf-8") if stdin_text is not None else None
    stdout, stderr = await process.communicate(payload)
    return ProcessResult(
        stdout=_decode(stdout),
        stderr=_decode(stderr),
        returncode=process.returncode,
    )
