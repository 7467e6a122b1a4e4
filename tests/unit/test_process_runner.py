"""Unit tests for the resolver process runner.

These spawn the current Python interpreter as a stand-in resolver.
"""

import sys
import time

import pytest

from check_dns.exceptions import SpawnError
from check_dns.models.service_state import ServiceState
from check_dns.services.process_runner import ResolverProcess, build_command, spawn


def python_command(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestBuildCommand:
    """Test build_command() argv construction."""

    def test_host_only(self):
        """Test command without a server."""
        assert build_command("nslookup", "example.com", None) == [
            "nslookup",
            "example.com",
        ]

    def test_host_and_server(self):
        """Test server is appended after the host."""
        assert build_command("nslookup", "example.com", "8.8.8.8") == [
            "nslookup",
            "example.com",
            "8.8.8.8",
        ]

    def test_command_with_flags(self):
        """Test resolver command is split like a shell would."""
        assert build_command("/usr/bin/nslookup -sil", "example.com", None) == [
            "/usr/bin/nslookup",
            "-sil",
            "example.com",
        ]

    def test_empty_command_rejected(self):
        """Test empty resolver command raises ValueError."""
        with pytest.raises(ValueError, match="resolver command cannot be empty"):
            build_command("   ", "example.com", None)


class TestSpawn:
    """Test spawn() and ResolverProcess lifecycle."""

    def test_reads_stdout_and_stderr(self):
        """Test both streams are exposed as lines."""
        code = (
            "import sys; print('Name: example.com'); print('Address: 10.0.0.1'); "
            "print('warn: Format error', file=sys.stderr)"
        )

        with spawn(python_command(code), timeout_seconds=10) as proc:
            stdout = list(proc.stdout_lines())
            stderr = list(proc.stderr_lines())
            status = proc.wait()

        assert stdout == ["Name: example.com\n", "Address: 10.0.0.1\n"]
        assert stderr == ["warn: Format error\n"]
        assert status == 0
        assert proc.timed_out is False

    def test_exit_status_reported(self):
        """Test non-zero exit status is returned by wait()."""
        with spawn(python_command("import sys; sys.exit(1)"), timeout_seconds=10) as proc:
            assert proc.wait() == 1

    def test_spawn_failure_raises(self):
        """Test a missing executable raises SpawnError."""
        with pytest.raises(SpawnError, match="Could not open pipe") as exc:
            spawn(["/nonexistent/nslookup", "example.com"], timeout_seconds=5)

        assert exc.value.state == ServiceState.UNKNOWN

    def test_timeout_kills_child(self):
        """Test the watchdog kills a hung resolver within bounded time."""
        started = time.monotonic()

        with spawn(
            python_command("import time; time.sleep(60)"), timeout_seconds=1
        ) as proc:
            lines = list(proc.stdout_lines())
            status = proc.wait()

        elapsed = time.monotonic() - started
        assert lines == []
        assert proc.timed_out is True
        assert status != 0
        assert elapsed < 30

    def test_close_reaps_running_child(self):
        """Test leaving the context early kills and reaps the child."""
        with spawn(
            python_command("import time; print('x', flush=True); time.sleep(60)"),
            timeout_seconds=30,
        ) as proc:
            assert next(proc.stdout_lines()) == "x\n"

        assert proc._process.returncode is not None
        assert proc.timed_out is False

    def test_close_on_exception_path(self):
        """Test cleanup runs when the body raises."""
        with pytest.raises(RuntimeError, match="scan failed"):
            with spawn(
                python_command("import time; time.sleep(60)"), timeout_seconds=30
            ) as proc:
                raise RuntimeError("scan failed")

        assert proc._process.returncode is not None

    def test_invalid_timeout_rejected(self):
        """Test non-positive timeout raises ValueError."""
        with pytest.raises(ValueError, match="timeout_seconds must be greater than 0"):
            ResolverProcess(["nslookup"], timeout_seconds=0)

    def test_wait_before_start_raises(self):
        """Test wait() on an unstarted process raises RuntimeError."""
        with pytest.raises(RuntimeError, match="never started"):
            ResolverProcess(["nslookup"], timeout_seconds=1).wait()

    def test_command_line(self):
        """Test command_line quotes arguments."""
        proc = ResolverProcess(["nslookup", "a b.example"], timeout_seconds=1)

        assert proc.command_line == "nslookup 'a b.example'"
