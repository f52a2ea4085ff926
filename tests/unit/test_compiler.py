"""Unit tests for the Go compilation module."""

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger

from mocka.contexts.rendering.compiler import (
    CompilationResult,
    _parse_go_output,
    compile_go_source,
    executable_name,
)
from mocka.contexts.rendering.logger import log_build_result

posix_only = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="fake toolchains are POSIX shell scripts"
)


@pytest.fixture
def source_file(tmp_path) -> Path:
    path = tmp_path / "main.go"
    path.write_text("package main\n\nimport \"os\"\n\nfunc main() {\n\tos.Exit(5)\n}\n")
    return path


@pytest.mark.unit
def test_executable_name_posix():
    with patch.object(sys, "platform", "linux"):
        assert executable_name() == "mocka"


@pytest.mark.unit
def test_executable_name_windows():
    with patch.object(sys, "platform", "win32"):
        assert executable_name() == "mocka.exe"
        assert executable_name("server") == "server.exe"


@pytest.mark.unit
def test_parse_go_output():
    output = (
        "# command-line-arguments\n"
        "./main.go:7:2: undefined: foo\n"
        "./main.go:9:1: syntax error: non-declaration statement outside function body\n"
    )

    errors = _parse_go_output(output)

    assert errors == [
        "./main.go:7:2: undefined: foo",
        "./main.go:9:1: syntax error: non-declaration statement outside function body",
    ]


@pytest.mark.unit
def test_parse_go_output_without_diagnostics():
    assert _parse_go_output("go: cannot find main module\n") == []


@pytest.mark.unit
def test_compile_invokes_go_build(source_file, tmp_path):
    """The toolchain is called with `build -o OUT SRC` from the source directory."""
    output_file = tmp_path / "mocka"
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")

    with patch("mocka.contexts.rendering.compiler.subprocess.run", return_value=completed) as run:
        result = compile_go_source(source_file, output_file, compiler="go")

    cmd = run.call_args.args[0]
    assert cmd == ["go", "build", "-o", str(output_file), str(source_file)]
    assert run.call_args.kwargs["cwd"] == source_file.parent
    assert result.success is True
    assert result.executable_path == output_file
    assert result.returncode == 0
    assert result.errors == []


@pytest.mark.unit
def test_compile_failure_collects_errors(source_file, tmp_path):
    completed = subprocess.CompletedProcess(
        args=[],
        returncode=1,
        stdout="",
        stderr="# command-line-arguments\n./main.go:6:2: undefined: oss\n",
    )

    with patch("mocka.contexts.rendering.compiler.subprocess.run", return_value=completed):
        result = compile_go_source(source_file, tmp_path / "mocka", compiler="go")

    assert result.success is False
    assert result.executable_path is None
    assert result.returncode == 1
    assert result.errors == ["./main.go:6:2: undefined: oss"]
    assert "undefined: oss" in result.stderr


@pytest.mark.unit
def test_compile_failure_without_diagnostics(source_file, tmp_path):
    completed = subprocess.CompletedProcess(args=[], returncode=2, stdout="", stderr="boom\n")

    with patch("mocka.contexts.rendering.compiler.subprocess.run", return_value=completed):
        result = compile_go_source(source_file, tmp_path / "mocka", compiler="go")

    assert result.success is False
    assert result.errors == ["Compiler exited with status 2"]


@pytest.mark.unit
def test_missing_toolchain(source_file, tmp_path):
    result = compile_go_source(
        source_file, tmp_path / "mocka", compiler=str(tmp_path / "no-such-go")
    )

    assert result.success is False
    assert result.returncode is None
    assert "Failed to start compiler" in result.errors[0]


@pytest.mark.unit
@posix_only
def test_compile_with_fake_toolchain(source_file, tmp_path, fake_go):
    output_file = tmp_path / "mocka"

    result = compile_go_source(source_file, output_file, compiler=fake_go)

    assert result.success is True
    assert output_file.exists()
    assert subprocess.run([str(output_file)]).returncode == 5


@pytest.mark.unit
def test_compilation_result_defaults():
    result = CompilationResult(success=False)

    assert result.executable_path is None
    assert result.errors == []
    assert result.elapsed_s == 0.0


@pytest.mark.unit
@pytest.mark.parametrize("success", [True, False])
def test_raw_compiler_output_logged_only_on_failure(success):
    messages = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    result = CompilationResult(
        success=success,
        stdout="",
        stderr="./main.go:3:1: syntax error\n",
        returncode=0 if success else 1,
        errors=[] if success else ["./main.go:3:1: syntax error"],
    )
    try:
        log_build_result("console", result)
    finally:
        logger.remove(sink_id)

    assert any("COMPILER STDERR" in m for m in messages) is not success
