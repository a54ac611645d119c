"""
Tests for the package-manager adapters and the shell command runner.

Homebrew tests mock subprocess.run and shutil.which — no real `brew`
is needed.
"""

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from unittest.mock import patch

import pytest

from macsetup.adapters.homebrew import HomebrewAdapter
from macsetup.adapters.mock import MockPackageManager
from macsetup.adapters.shell import EXIT_NOT_FOUND, STDERR_FD, run_command
from macsetup.core.models.receipt import Receipt


def _mock_result(stdout: str = "", stderr: str = "", rc: int = 0):
    return subprocess.CompletedProcess(
        args=["brew"], returncode=rc,
        stdout=stdout, stderr=stderr,
    )


# ── Shell runner ─────────────────────────────────────────────────


class TestRunCommand:
    def test_success(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result(stdout="hello\n")):
            r = run_command(["echo", "hello"], adapter="t", operation="echo")
        assert r.ok
        assert r.output == "hello"
        assert r.return_code == 0
        assert r.metadata["command"] == "echo hello"

    def test_failure_uses_stderr(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result(stderr="Error: boom\n", rc=1)):
            r = run_command(["false"], adapter="t", operation="x", target="pkg")
        assert r.failed
        assert r.error == "Error: boom"
        assert r.return_code == 1
        assert r.target == "pkg"

    def test_failure_without_stderr(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result(rc=3)):
            r = run_command(["x"], adapter="t", operation="x")
        assert r.error == "Command exited with code 3"

    def test_missing_executable(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   side_effect=FileNotFoundError("No such file")):
            r = run_command(["brew", "update"], adapter="brew", operation="refresh-index")
        assert r.failed
        assert r.return_code == EXIT_NOT_FOUND
        assert "brew" in r.error

    def test_stream_does_not_capture(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            run_command(["brew", "update"], adapter="brew", operation="u", stream=True)
        assert run.call_args.kwargs["capture_output"] is False

    def test_no_timeout(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            run_command(["brew", "info", "git"], adapter="brew", operation="i")
        assert "timeout" not in run.call_args.kwargs

    def test_stdout_to_stderr_only_when_streaming(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            run_command(["brew", "update"], adapter="brew", operation="u",
                        stream=True, stdout_to_stderr=True)
            assert run.call_args.kwargs["stdout"] == STDERR_FD
            assert run.call_args.kwargs["capture_output"] is False

            run_command(["brew", "info", "git"], adapter="brew", operation="i",
                        stdout_to_stderr=True)
            assert run.call_args.kwargs["stdout"] is None
            assert run.call_args.kwargs["capture_output"] is True

    def test_started_before_command_runs(self):
        seen = {}

        def fake_run(argv, **kw):
            seen["during"] = datetime.now(UTC).isoformat()
            return _mock_result()

        with patch("macsetup.adapters.shell.subprocess.run", side_effect=fake_run):
            r = run_command(["brew", "update"], adapter="brew", operation="u")
        assert r.started_at <= seen["during"] <= r.ended_at

    def test_missing_executable_has_timestamps(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   side_effect=FileNotFoundError("No such file")):
            r = run_command(["brew"], adapter="brew", operation="x")
        assert r.started_at <= r.ended_at

    def test_env_overrides(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            run_command(["x"], adapter="t", operation="x", env={"FOO": "bar"})
        assert run.call_args.kwargs["env"]["FOO"] == "bar"


# ── Homebrew adapter ─────────────────────────────────────────────


class TestHomebrewAdapter:
    def test_name(self):
        assert HomebrewAdapter().name == "brew"

    def test_is_available(self):
        with patch("macsetup.adapters.homebrew.shutil.which", return_value="/opt/homebrew/bin/brew"):
            assert HomebrewAdapter().is_available()
        with patch("macsetup.adapters.homebrew.shutil.which", return_value=None):
            assert not HomebrewAdapter().is_available()

    @pytest.mark.parametrize(
        ("method", "argv"),
        [
            ("is_cask", ["brew", "info", "--cask", "zoom"]),
            ("is_formula", ["brew", "info", "zoom"]),
        ],
    )
    def test_classification_commands(self, method, argv):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            assert getattr(HomebrewAdapter(), method)("zoom") is True
        assert run.call_args.args[0] == argv

    def test_classification_false_on_nonzero(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result(stderr="Error: No available cask", rc=1)):
            assert HomebrewAdapter().is_cask("git") is False

    def test_install_cask(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            r = HomebrewAdapter().install_cask("bitwarden")
        assert r.ok
        assert r.operation == "install-cask"
        assert run.call_args.args[0] == ["brew", "install", "--cask", "bitwarden"]
        assert run.call_args.kwargs["capture_output"] is False

    def test_install_formula_failure(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result(rc=1)) as run:
            r = HomebrewAdapter().install_formula("git")
        assert r.failed
        assert run.call_args.args[0] == ["brew", "install", "git"]

    def test_refresh_index(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            assert HomebrewAdapter().refresh_index().ok
        assert run.call_args.args[0] == ["brew", "update"]

    def test_shellenv_is_evaluated_by_a_shell(self):
        out = "HOMEBREW_PREFIX=/opt/homebrew\nPATH=/opt/homebrew/bin:/usr/bin\n"
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result(stdout=out)) as run:
            r = HomebrewAdapter().shellenv("/opt/homebrew/bin/brew")
        assert run.call_args.args[0] == [
            "/bin/sh", "-c", 'eval "$(/opt/homebrew/bin/brew shellenv)" && env',
        ]
        assert run.call_args.kwargs["capture_output"] is True
        assert r.output == out.strip()

    def test_custom_binary(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            HomebrewAdapter(binary="/usr/local/bin/brew").refresh_index()
        assert run.call_args.args[0] == ["/usr/local/bin/brew", "update"]

    def test_use_binary(self):
        brew = HomebrewAdapter()
        brew.use_binary("/opt/homebrew/bin/brew")
        assert brew.binary == "/opt/homebrew/bin/brew"
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            brew.is_formula("git")
        assert run.call_args.args[0] == ["/opt/homebrew/bin/brew", "info", "git"]

    @pytest.mark.parametrize("method", ["install_cask", "install_formula"])
    def test_stdout_to_stderr(self, method):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            getattr(HomebrewAdapter(stdout_to_stderr=True), method)("zoom")
        assert run.call_args.kwargs["stdout"] == STDERR_FD

    def test_streams_to_stdout_by_default(self):
        with patch("macsetup.adapters.shell.subprocess.run",
                   return_value=_mock_result()) as run:
            HomebrewAdapter().refresh_index()
        assert run.call_args.kwargs["stdout"] is None

    def test_repr(self):
        assert "brew" in repr(HomebrewAdapter())


# ── Mock adapter ─────────────────────────────────────────────────


class TestMockPackageManager:
    def test_classification(self):
        pm = MockPackageManager(casks=["zoom"], formulas=["git"])
        assert pm.is_cask("zoom")
        assert not pm.is_cask("git")
        assert pm.is_formula("git")

    def test_install_failure(self):
        pm = MockPackageManager(casks=["zoom"], failing=["zoom"])
        r = pm.install_cask("zoom")
        assert r.failed
        assert pm.installed == []

    def test_install_wrong_category_fails(self):
        pm = MockPackageManager(formulas=["git"])
        assert pm.install_cask("git").failed

    def test_call_log_and_reset(self):
        pm = MockPackageManager(formulas=["git"])
        pm.is_cask("git")
        pm.install_formula("git")
        assert pm.call_log == [("info-cask", "git"), ("install-formula", "git")]
        pm.reset()
        assert pm.call_log == []

    def test_availability(self):
        pm = MockPackageManager(available=False)
        assert not pm.is_available()
        pm.set_available(True)
        assert pm.is_available()

    def test_refresh_and_shellenv_failures(self):
        pm = MockPackageManager(refresh_fails=True, shellenv_fails=True)
        assert pm.refresh_index().failed
        assert pm.shellenv("/opt/homebrew/bin/brew").failed


class TestReceipt:
    def test_success(self):
        r = Receipt.success(adapter="brew", operation="install-cask", target="zoom")
        assert r.ok and not r.failed
        assert r.error is None

    def test_failure(self):
        r = Receipt.failure(adapter="brew", operation="install-cask", error="boom", target="zoom")
        assert r.failed and not r.ok
        assert r.target == "zoom"
