"""solcbridge CLI: compile Solidity sources through a native compiler."""

import argparse
import json
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import List, Optional

from solcbridge.api import Compiler
from solcbridge.config import CompilerConfig
from solcbridge.contracts import CompileRequest, CompileResult, Diagnostic
from solcbridge.errors import CompileError
from solcbridge.logging_utils import configure_logging


def _format_diagnostic(diagnostic: Diagnostic) -> str:
    where = ""
    if diagnostic.source is not None:
        where = diagnostic.source.file
        if diagnostic.source.offset is not None:
            where += f"@{diagnostic.source.offset}"
        where += ": "
    return f"[{diagnostic.severity.upper() or '?'}] {where}{diagnostic.message.strip()}"


def _write_result(result: CompileResult, output: Optional[Path]) -> None:
    text = json.dumps(result.to_output_dict(), indent=2, ensure_ascii=False)
    if output is None:
        print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")


def _build_parser(package_version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solcbridge",
        description="solcbridge: compile Solidity sources with a native solc in standard-JSON mode"
    )
    parser.add_argument("--version", action="version", version=f"solcbridge {package_version}")

    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--compiler",
        type=Path,
        default=None,
        help="Path to the solc executable (defaults to $SOLCBRIDGE_COMPILER, bundled binary, then PATH)"
    )
    parent_parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR); defaults to $SOLCBRIDGE_LOG_LEVEL or WARNING"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "version",
        help="Print the compiler version",
        parents=[parent_parser]
    )

    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile source files and emit bytecode, ABI and docs as JSON",
        parents=[parent_parser]
    )
    compile_parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Source files (relative paths are resolved against the current directory)"
    )
    compile_parser.add_argument(
        "--optimize",
        action="store_true",
        help="Enable the optimizer"
    )
    compile_parser.add_argument(
        "--optimize-runs",
        dest="optimize_runs",
        type=int,
        default=None,
        help="Optimizer run count (used with --optimize)"
    )
    compile_parser.add_argument(
        "--batch",
        action="store_true",
        help="Compile all files in one compiler invocation instead of one per file"
    )
    compile_parser.add_argument(
        "--evm-version",
        dest="evm_version",
        default=None,
        help="Target EVM version (defaults to $SOLCBRIDGE_EVM_VERSION or byzantium)"
    )
    compile_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON result here instead of stdout"
    )
    compile_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print diagnostics to stderr."
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point for solcbridge commands."""
    try:
        package_version = get_version("solcbridge")
    except PackageNotFoundError:
        package_version = "dev"

    parser = _build_parser(package_version)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)

    if args.command == "version":
        compiler = Compiler(CompilerConfig.from_env(compiler_path=args.compiler))
        print(compiler.version() or "unknown")
        sys.exit(0)

    if args.command == "compile":
        try:
            config = CompilerConfig.from_env(
                compiler_path=args.compiler,
                evm_version=args.evm_version,
                mode="batch" if args.batch else None,
            )
            request = CompileRequest(
                files=[str(path.resolve()) for path in args.files],
                optimize=args.optimize,
                optimize_runs=args.optimize_runs,
            )
            result = Compiler(config).compile(request)
        except CompileError as e:
            print(f"Error [{e.code.value}]: {e}", file=sys.stderr)
            sys.exit(1)

        if not args.quiet:
            for diagnostic in result.diagnostics:
                print(_format_diagnostic(diagnostic), file=sys.stderr)

        _write_result(result, args.output)
        if args.output is not None and not args.quiet:
            print(f"[OK] Compiled {len(result.artifacts)} contract(s)", file=sys.stderr)
            print(f"  Output: {args.output}", file=sys.stderr)
        sys.exit(1 if result.has_errors else 0)


if __name__ == "__main__":
    main()
