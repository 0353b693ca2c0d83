"""Test public API surface - ensure imports work and names do not collide.

This test verifies:
- solcbridge exposes compile, compile_async, version and the result models
- every error kind is importable from the package root
- the package version and the compiler version are different things
"""

import inspect


def test_root_exports_core_functions():
    import solcbridge

    assert callable(solcbridge.compile)
    assert callable(solcbridge.version)
    assert inspect.iscoroutinefunction(solcbridge.compile_async)
    for name in solcbridge.__all__:
        assert hasattr(solcbridge, name), name


def test_compile_is_not_the_builtin():
    import builtins
    import solcbridge

    assert solcbridge.compile is not builtins.compile
    from solcbridge.api import compile as api_compile
    assert solcbridge.compile is api_compile


def test_package_version_is_not_compiler_version():
    import solcbridge

    assert isinstance(solcbridge.__version__, str)
    assert solcbridge.__version__ in ("1.0.0", "dev")
    assert callable(solcbridge.version)


def test_error_hierarchy():
    import solcbridge

    kinds = [
        solcbridge.InvalidRequest,
        solcbridge.InvalidOptimizerRuns,
        solcbridge.InvalidInputPath,
        solcbridge.CompilerLaunchFailed,
        solcbridge.CompilerOutputUnreadable,
        solcbridge.MalformedOutput,
    ]
    for kind in kinds:
        assert issubclass(kind, solcbridge.CompileError)
    assert {kind.code for kind in kinds} == set(solcbridge.ErrorCode)


def test_error_to_dict():
    from solcbridge import MalformedOutput

    err = MalformedOutput("bad", path="/src/Token.sol", contract="Token")
    assert err.to_dict() == {
        "code": "MALFORMED_OUTPUT",
        "message": "bad",
        "path": "/src/Token.sol",
        "contract": "Token",
    }
