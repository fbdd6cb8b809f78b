"""Tests for botman.services.process against real processes."""

from pathlib import Path

import pytest

from botman.services.process import ProcessError, ProcessSpawnError, run_process


def test_returns_stdout(tmp_path: Path) -> None:
    assert run_process("sh", ["-c", "printf hello"], cwd=tmp_path) == b"hello"


def test_runs_in_cwd(tmp_path: Path) -> None:
    (tmp_path / "marker").write_text("x")
    assert run_process("ls", [], cwd=tmp_path).split() == [b"marker"]


def test_stdin_is_written_and_closed(tmp_path: Path) -> None:
    """cat only exits once its input is closed."""
    assert run_process("cat", [], cwd=tmp_path, stdin=b"line 1\nline 2\n") == b"line 1\nline 2\n"


def test_without_stdin_reads_nothing(tmp_path: Path) -> None:
    assert run_process("cat", [], cwd=tmp_path) == b""


def test_env_overlay(tmp_path: Path) -> None:
    out = run_process("sh", ["-c", 'printf "%s" "$BOTMAN_TEST_VAR"'], cwd=tmp_path, env={"BOTMAN_TEST_VAR": "42"})
    assert out == b"42"


def test_nonzero_exit_raises_with_stderr(tmp_path: Path) -> None:
    with pytest.raises(ProcessError) as exc_info:
        run_process("sh", ["-c", "echo broken >&2; exit 3"], cwd=tmp_path)
    err = exc_info.value
    assert not isinstance(err, ProcessSpawnError)
    assert err.exit_status == 3
    assert err.stderr == "broken"
    assert err.command == "sh"
    assert "broken" in str(err)


def test_missing_binary_raises_spawn_error(tmp_path: Path) -> None:
    with pytest.raises(ProcessSpawnError) as exc_info:
        run_process("botman-no-such-binary", ["--help"], cwd=tmp_path)
    assert exc_info.value.exit_status is None
    assert exc_info.value.arguments == ["--help"]
    assert "could not be started" in str(exc_info.value)
