"""Public API for solcbridge.

High-level functions that validate a request, drive the compiler in
standard-JSON mode and return a complete CompileResult.

The blocking and asyncio entry points share everything except the process
driver: `Compiler.plan()` turns a request into invocations and
`_Accumulator` folds each invocation's output into the result.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Tuple

from solcbridge._internal.binary import locate_compiler
from solcbridge._internal.process import ProcessResult, run_process, run_process_async
from solcbridge.config import CompilerConfig
from solcbridge.contracts import CompileResult, ContractArtifact
from solcbridge.errors import CompilerLaunchFailed, InvalidInputPath
from solcbridge.kernel.artifacts import extract_artifacts
from solcbridge.kernel.diagnostics import DiagnosticDeduplicator
from solcbridge.kernel.hash_utils import hash_text
from solcbridge.kernel.request import ValidatedRequest, validate_request
from solcbridge.kernel.schema import CompilerInputDocument, decode_compiler_output

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")


@dataclass(frozen=True)
class Invocation:
    """One compiler run: what to send and where to run it."""
    label: str  # Source path(s), used in error messages
    argv: Tuple[str, ...]
    cwd: Optional[str]
    document: CompilerInputDocument

    @property
    def stdin(self) -> str:
        return self.document.to_stdin()


def parse_version_output(text: str) -> str:
    """Pick the value of the `Version:` line out of `--version` output."""
    for line in text.split("\n"):
        line = _CONTROL_CHARS.sub("", line)
        if line[:8].lower() == "version:":
            return line[8:].strip()
    return ""


def _allow_paths_root(paths: List[str]) -> str:
    roots = []
    for path in paths:
        anchor = PurePath(path).anchor
        if anchor not in roots:
            roots.append(anchor)
    return ",".join(roots)


def _common_dir(paths: List[str]) -> Optional[str]:
    try:
        return os.path.commonpath([os.path.dirname(p) for p in paths])
    except ValueError:
        # Paths on different drives have no common directory
        return None


class _Accumulator:
    """Merges per-invocation output into one CompileResult."""

    def __init__(self) -> None:
        self.artifacts: Dict[str, ContractArtifact] = {}
        self.diagnostics = DiagnosticDeduplicator()

    def absorb(self, invocation: Invocation, result: ProcessResult) -> None:
        # Exit status is not a failure signal: the compiler exits non-zero on warnings too
        logger.debug(
            "Compiler exited with %s for %s (stdout %d chars, stderr %d chars)",
            result.returncode, invocation.label, len(result.stdout), len(result.stderr),
        )
        if result.stderr:
            logger.debug("Compiler stderr for %s: %s", invocation.label, result.stderr.strip())

        output = decode_compiler_output(result.stdout, invocation.label)
        artifacts = extract_artifacts(output, invocation.label)
        self.artifacts.update(artifacts)
        added = self.diagnostics.add(output.errors)
        logger.info(
            "Compiled %s: %d contract(s), %d new diagnostic(s)",
            invocation.label, len(artifacts), added,
        )

    def result(self) -> CompileResult:
        return CompileResult(
            artifacts=dict(self.artifacts),
            diagnostics=self.diagnostics.diagnostics,
        )


class Compiler:
    """Handle on one compiler executable.

    Holds the configuration and the lazily detected version. Each compile
    call builds its own state, so one instance can serve concurrent calls.
    """

    def __init__(self, config: Optional[CompilerConfig] = None) -> None:
        self.config = config if config is not None else CompilerConfig()
        self._version: Optional[str] = None

    def executable(self) -> str:
        return locate_compiler(self.config.compiler_path)

    def version(self) -> str:
        """Detected compiler version, or "" when it cannot be determined.

        Never raises. The value (including "") is computed once per instance.
        """
        if self._version is None:
            try:
                result = run_process([self.executable(), "--version"])
                detected = parse_version_output(result.stdout)
            except Exception as exc:
                logger.debug("Compiler version detection failed: %s", exc)
                detected = ""
            self._version = detected
        return self._version

    def plan(self, request: Any) -> List[Invocation]:
        """Validate request and build the invocations that will run.

        Raises:
            InvalidRequest, InvalidOptimizerRuns, InvalidInputPath,
            CompilerLaunchFailed (no executable found)
        """
        validated = validate_request(request)
        if self.config.mode == "batch":
            groups = [list(validated.files)]
            self._check_unique_sources(validated)
        else:
            groups = [[path] for path in validated.files]

        executable = self.executable()
        invocations = []
        for paths in groups:
            document = CompilerInputDocument.for_files(
                paths,
                optimizer=validated.optimizer,
                evm_version=self.config.evm_version,
            )
            argv = (executable, "--standard-json", "--allow-paths", _allow_paths_root(paths))
            invocations.append(Invocation(
                label=", ".join(paths),
                argv=argv,
                cwd=os.path.dirname(paths[0]) if len(paths) == 1 else _common_dir(paths),
                document=document,
            ))
        return invocations

    @staticmethod
    def _check_unique_sources(validated: ValidatedRequest) -> None:
        seen: Dict[str, str] = {}
        for path in validated.files:
            name = os.path.basename(path)
            if name in seen and seen[name] != path:
                raise InvalidInputPath(
                    f"Files {seen[name]} and {path} share the source name {name!r}; "
                    f"compile them in per_file mode",
                    path=path,
                )
            seen[name] = path

    def compile(self, request: Any) -> CompileResult:
        """Compile the request, blocking until every invocation finished.

        Raises:
            CompileError: the first failure; no partial result is returned
        """
        accumulator = _Accumulator()
        for invocation in self.plan(request):
            accumulator.absorb(invocation, self._run(invocation))
        return accumulator.result()

    async def compile_async(self, request: Any) -> CompileResult:
        """Same as compile(), but the compiler runs without blocking the event loop."""
        accumulator = _Accumulator()
        for invocation in self.plan(request):
            accumulator.absorb(invocation, await self._run_async(invocation))
        return accumulator.result()

    def _run(self, invocation: Invocation) -> ProcessResult:
        stdin = self._log_start(invocation)
        try:
            return run_process(invocation.argv, stdin_text=stdin, cwd=invocation.cwd)
        except OSError as exc:
            raise _launch_failed(invocation, exc) from exc

    async def _run_async(self, invocation: Invocation) -> ProcessResult:
        stdin = self._log_start(invocation)
        try:
            return await run_process_async(invocation.argv, stdin_text=stdin, cwd=invocation.cwd)
        except OSError as exc:
            raise _launch_failed(invocation, exc) from exc

    @staticmethod
    def _log_start(invocation: Invocation) -> str:
        stdin = invocation.stdin
        logger.debug(
            "Running %s in %s (input %s)",
            " ".join(invocation.argv), invocation.cwd, hash_text(stdin),
        )
        return stdin


def _launch_failed(invocation: Invocation, exc: OSError) -> CompilerLaunchFailed:
    return CompilerLaunchFailed(
        f"Unable to run compiler {invocation.argv[0]} for {invocation.label}: {exc}",
        path=invocation.label,
    )


def version(config: Optional[CompilerConfig] = None) -> str:
    """Compiler version, or "" when unknown. Never raises."""
    return Compiler(config).version()


def compile(request: Any, config: Optional[CompilerConfig] = None) -> CompileResult:
    """Compile source files; see Compiler.compile()."""
    return Compiler(config).compile(request)


async def compile_async(request: Any, config: Optional[CompilerConfig] = None) -> CompileResult:
    """Compile source files without blocking the event loop; see Compiler.compile_async()."""
    return await Compiler(config).compile_async(request)
