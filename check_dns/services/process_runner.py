"""Resolver process runner with a wall-clock watchdog.

The resolver's stdout and stderr are exposed as lazy line iterators. A timer
thread kills the child once the timeout elapses, which closes its pipes and
unblocks any pending read. Cleanup (cancel watchdog, kill, close pipes, reap)
runs on every exit path through the context manager.
"""

import logging
import shlex
import subprocess
import threading
from typing import IO, Iterator, Optional, Sequence

from check_dns.exceptions import SpawnError


logger = logging.getLogger(__name__)


class ResolverProcess:
    """A running resolver command.

    Attributes:
        command: argv of the resolver invocation.
        timeout_seconds: Wall-clock limit before the child is killed.

    Example:
        >>> with spawn(["nslookup", "example.com"], timeout_seconds=10) as proc:
        ...     lines = list(proc.stdout_lines())
        ...     status = proc.wait()
    """

    def __init__(self, command: Sequence[str], timeout_seconds: int):
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than 0")

        self.command = list(command)
        self.timeout_seconds = timeout_seconds
        self._process: Optional[subprocess.Popen] = None
        self._watchdog: Optional[threading.Timer] = None
        self._timed_out = threading.Event()

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)

    @property
    def timed_out(self) -> bool:
        """True if the watchdog fired and killed the child."""
        return self._timed_out.is_set()

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process else None

    def start(self) -> "ResolverProcess":
        """Spawn the child and arm the watchdog.

        Raises:
            SpawnError: If the command cannot be executed.
        """
        try:
            self._process = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise SpawnError(f"Could not open pipe: {self.command_line}") from e

        logger.debug(f"Spawned resolver pid={self._process.pid}: {self.command_line}")

        self._watchdog = threading.Timer(self.timeout_seconds, self._on_timeout)
        self._watchdog.daemon = True
        self._watchdog.start()
        return self

    def _on_timeout(self) -> None:
        self._timed_out.set()
        logger.warning(
            f"Resolver exceeded {self.timeout_seconds}s timeout, killing it",
            extra={"command": self.command_line},
        )
        self._kill()

    def _kill(self) -> None:
        if self._process is not None and self._process.poll() is None:
            try:
                self._process.kill()
            except ProcessLookupError:
                # Exited between poll() and kill()
                pass

    @staticmethod
    def _read_lines(stream: IO[str] | None) -> Iterator[str]:
        if stream is None:
            return
        for line in stream:
            yield line

    def stdout_lines(self) -> Iterator[str]:
        """Yield lines of the child's standard output as they arrive."""
        return self._read_lines(self._process.stdout if self._process else None)

    def stderr_lines(self) -> Iterator[str]:
        """Yield lines of the child's standard error as they arrive."""
        return self._read_lines(self._process.stderr if self._process else None)

    def wait(self) -> int:
        """Wait for the child to exit.

        Bounded by the watchdog: a hung child is killed at the timeout.

        Returns:
            int: Exit status (negative signal number if killed).
        """
        if self._process is None:
            raise RuntimeError("Resolver process was never started")
        return self._process.wait()

    def close(self) -> None:
        """Cancel the watchdog, kill the child if needed, close pipes and reap."""
        if self._watchdog is not None:
            self._watchdog.cancel()

        if self._process is None:
            return

        self._kill()
        for stream in (self._process.stdout, self._process.stderr):
            if stream is not None:
                stream.close()
        self._process.wait()

    def __enter__(self) -> "ResolverProcess":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def build_command(resolver_command: str, host_name: str, server: str | None) -> list[str]:
    """Build the resolver argv.

    Args:
        resolver_command: Resolver executable, optionally with flags
            (e.g. "nslookup -sil").
        host_name: Name or address to look up.
        server: Name server to ask, or None for the system default.

    Returns:
        list[str]: argv for the resolver.

    Examples:
        >>> build_command("nslookup", "example.com", "8.8.8.8")
        ['nslookup', 'example.com', '8.8.8.8']
        >>> build_command("/usr/bin/nslookup -sil", "example.com", None)
        ['/usr/bin/nslookup', '-sil', 'example.com']
    """
    command = shlex.split(resolver_command)
    if not command:
        raise ValueError("resolver command cannot be empty")
    command.append(host_name)
    if server:
        command.append(server)
    return command


def spawn(command: Sequence[str], timeout_seconds: int) -> ResolverProcess:
    """Start a resolver process guarded by a timeout.

    Args:
        command: argv to execute.
        timeout_seconds: Seconds before the child is killed.

    Returns:
        ResolverProcess: Started process; use it as a context manager.

    Raises:
        SpawnError: If the command cannot be executed.
    """
    return ResolverProcess(command, timeout_seconds).start()
