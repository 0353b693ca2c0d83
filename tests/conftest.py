"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed solcbridge package.

Two compiler doubles are provided:
- scripted_compiler: replaces the process runner in solcbridge.api, no
  subprocess involved.
- fake_solc: a real executable script, for exercising process plumbing
  (POSIX only).
"""

import json
import os
import stat
import sys
import textwrap
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from solcbridge._internal.process import ProcessResult
from solcbridge.api import Compiler
from solcbridge.config import CompilerConfig

FAKE_VERSION_OUTPUT = (
    "solc, the solidity compiler commandline interface\n"
    "Version: 0.4.24+commit.e67f0147.Linux.g++\n"
)


def make_metadata(abi: Any = None, devdoc=None, userdoc=None, compiler_version="0.4.24+commit.e67f0147") -> str:
    output: Dict[str, Any] = {"abi": abi if abi is not None else [{"type": "constructor", "inputs": []}]}
    if devdoc is not None:
        output["devdoc"] = devdoc
    if userdoc is not None:
        output["userdoc"] = userdoc
    return json.dumps({"compiler": {"version": compiler_version}, "language": "Solidity", "output": output})


def make_contract(bytecode: str = "6080604052", link_references=None, metadata: Optional[str] = None) -> Dict[str, Any]:
    return {
        "evm": {
            "bytecode": {
                "object": bytecode,
                "linkReferences": link_references or {},
                "sourceMap": "",
            }
        },
        "metadata": metadata if metadata is not None else make_metadata(),
    }


def make_error(message: str, severity: str = "warning", file: Optional[str] = None, start: Optional[int] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {
        "component": "general",
        "formattedMessage": message,
        "message": message.split(":")[-1].strip(),
        "severity": severity,
        "type": "Warning" if severity == "warning" else "TypeError",
    }
    if file is not None:
        location: Dict[str, Any] = {"file": file, "end": (start or 0) + 10}
        if start is not None:
            location["start"] = start
        error["sourceLocation"] = location
    return error


@pytest.fixture
def metadata_factory():
    return make_metadata


@pytest.fixture
def contract_factory():
    return make_contract


@pytest.fixture
def error_factory():
    return make_error


class ScriptedCompiler:
    """Stands in for the compiler process inside solcbridge.api.

    Responses are keyed by the comma-joined, sorted source names of the
    input document. Exit status is always 1 to prove it is ignored.
    """

    def __init__(self) -> None:
        self.responses: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self.version_output = FAKE_VERSION_OUTPUT
        self.launch_error: Optional[OSError] = None

    def respond(self, sources: str, payload: Any) -> None:
        self.responses[sources] = payload if isinstance(payload, str) else json.dumps(payload)

    def __call__(self, argv, stdin_text=None, cwd=None) -> ProcessResult:
        if self.launch_error is not None:
            raise self.launch_error
        if "--version" in argv:
            self.calls.append({"argv": list(argv), "cwd": cwd, "document": None})
            return ProcessResult(stdout=self.version_output, stderr="", returncode=0)
        document = json.loads(stdin_text)
        self.calls.append({"argv": list(argv), "cwd": cwd, "document": document})
        key = ",".join(sorted(document["sources"]))
        return ProcessResult(stdout=self.responses.get(key, ""), stderr="warning noise", returncode=1)

    async def run_async(self, argv, stdin_text=None, cwd=None) -> ProcessResult:
        return self(argv, stdin_text=stdin_text, cwd=cwd)


@pytest.fixture
def scripted_compiler(monkeypatch):
    scripted = ScriptedCompiler()
    monkeypatch.setattr("solcbridge.api.run_process", scripted)
    monkeypatch.setattr("solcbridge.api.run_process_async", scripted.run_async)
    return scripted


@pytest.fixture
def compiler(scripted_compiler):
    """Compiler wired to scripted_compiler."""
    return Compiler(CompilerConfig(compiler_path=Path("/opt/solc/solc")))


@pytest.fixture
def batch_compiler(scripted_compiler):
    return Compiler(CompilerConfig(compiler_path=Path("/opt/solc/solc"), mode="batch"))


class FakeSolc:
    """Executable script that behaves like `solc --standard-json`.

    Records each call (argv, cwd, decoded stdin) to calls.jsonl and prints
    response.json. It reads stdin to EOF, so it hangs if stdin is never
    closed.
    """

    def __init__(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        self.directory = directory
        self.path = directory / "solc"
        self.calls_path = directory / "calls.jsonl"
        self.response_path = directory / "response.json"
        self.path.write_text(textwrap.dedent(f"""\
            #!{sys.executable}
            import json, os, sys
            here = os.path.dirname(os.path.abspath(__file__))
            if "--version" in sys.argv:
                sys.stdout.write({FAKE_VERSION_OUTPUT!r})
                sys.exit(0)
            data = sys.stdin.read()
            with open(os.path.join(here, "calls.jsonl"), "a") as f:
                f.write(json.dumps({{"argv": sys.argv[1:], "cwd": os.getcwd(), "stdin": json.loads(data)}}) + "\\n")
            with open(os.path.join(here, "response.json")) as f:
                sys.stdout.write(f.read())
            sys.exit(1)
            """), encoding="utf-8")
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        self.respond("")

    def respond(self, payload: Any) -> None:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        self.response_path.write_text(text, encoding="utf-8")

    def calls(self) -> List[Dict[str, Any]]:
        if not self.calls_path.exists():
            return []
        lines = self.calls_path.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line.strip()]


@pytest.fixture
def fake_solc(tmp_path):
    if os.name == "nt":
        pytest.skip("fake compiler script needs a POSIX shebang")
    return FakeSolc(tmp_path / "native")


@pytest.fixture
def sources(tmp_path):
    """Two source files in different directories; returns absolute path strings."""
    token = tmp_path / "contracts" / "Token.sol"
    crowdsale = tmp_path / "sale" / "Crowdsale.sol"
    for path in (token, crowdsale):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("pragma solidity ^0.4.24;\n", encoding="utf-8")
    return str(token), str(crowdsale)
