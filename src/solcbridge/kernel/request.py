"""Request validation.

Checks run in a fixed order and each maps to its own error kind:
1. the request is a CompileRequest or a mapping
2. optimize_runs, when the optimizer is enabled, is a non-negative integer
3. files are non-empty absolute paths
Nothing is spawned until all three pass.
"""

import os
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from solcbridge.contracts import CompileRequest
from solcbridge.errors import InvalidInputPath, InvalidOptimizerRuns, InvalidRequest
from solcbridge.kernel.schema import OptimizerSettings


@dataclass(frozen=True)
class ValidatedRequest:
    """A request that passed validation. Paths are normalized."""
    files: Tuple[str, ...]
    optimize: bool
    optimize_runs: Optional[int]

    @property
    def optimizer(self) -> OptimizerSettings:
        runs = self.optimize_runs if self.optimize_runs is not None else 0
        return OptimizerSettings(enabled=self.optimize, runs=runs)


def _is_run_count(value: Any) -> bool:
    # bool is an int subclass but never a run count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _normalize_files(files: Any) -> List[str]:
    if isinstance(files, os.PathLike):
        files = os.fspath(files)
    if isinstance(files, str):
        files = [files]
    elif not isinstance(files, (list, tuple)):
        raise InvalidInputPath("Invalid input files: expected a path or a list of paths")

    if not files:
        raise InvalidInputPath("Invalid input files: no files given")

    normalized = []
    for path in files:
        if isinstance(path, os.PathLike):
            path = os.fspath(path)
        if not isinstance(path, str) or not path:
            raise InvalidInputPath(f"Invalid input file: {path!r}")
        if not os.path.isabs(path):
            raise InvalidInputPath(
                f"Input filename must be an absolute path: {path}",
                path=path,
            )
        normalized.append(os.path.normpath(path))
    return normalized


def validate_request(request: Any) -> ValidatedRequest:
    """Validate a CompileRequest (or an equivalent mapping).

    Raises:
        InvalidRequest, InvalidOptimizerRuns, InvalidInputPath
    """
    if isinstance(request, CompileRequest):
        files = request.files
        optimize = request.optimize
        optimize_runs = request.optimize_runs
    elif isinstance(request, Mapping):
        files = request.get("files")
        optimize = request.get("optimize", False)
        optimize_runs = request.get("optimize_runs")
    else:
        raise InvalidRequest(
            f"Supplied options are invalid: expected CompileRequest or mapping, "
            f"got {type(request).__name__}"
        )

    # The run count only matters to an enabled optimizer
    if not optimize:
        optimize_runs = None
    elif optimize_runs is not None and not _is_run_count(optimize_runs):
        raise InvalidOptimizerRuns(
            f"Invalid optimizer run option: {optimize_runs!r} (expected a non-negative integer)"
        )

    return ValidatedRequest(
        files=tuple(_normalize_files(files)),
        optimize=bool(optimize),
        optimize_runs=optimize_runs,
    )
