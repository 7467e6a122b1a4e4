"""Configuration module for check_dns.

Defaults come from environment variables; command-line flags override them.
"""

import os
import shlex
from dataclasses import dataclass, replace


DEFAULT_TIMEOUT = 10
DEFAULT_NSLOOKUP_COMMAND = "nslookup"
MAX_TIMEOUT = 300


@dataclass(frozen=True)
class Config:
    """Plugin configuration."""

    timeout: int
    nslookup_command: str
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If a variable is invalid.

        Returns:
            Config: Validated configuration instance.
        """
        timeout_str = os.getenv("CHECK_DNS_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = int(timeout_str)
        except ValueError:
            raise ValueError(
                f"CHECK_DNS_TIMEOUT must be an integer, got {timeout_str!r}"
            ) from None

        nslookup_command = os.getenv("NSLOOKUP_COMMAND", DEFAULT_NSLOOKUP_COMMAND)

        verbose_str = os.getenv("VERBOSE", "false").lower()
        verbose = verbose_str in ("true", "1", "yes")

        config = cls(
            timeout=timeout,
            nslookup_command=nslookup_command,
            verbose=verbose,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If timeout is out of range or the command is empty.
        """
        if not 1 <= self.timeout <= MAX_TIMEOUT:
            raise ValueError(f"Timeout must be between 1 and {MAX_TIMEOUT} seconds")
        if not shlex.split(self.nslookup_command):
            raise ValueError("NSLOOKUP_COMMAND cannot be empty")

    def with_overrides(
        self, timeout: int | None = None, verbose: bool | None = None
    ) -> "Config":
        """Return a copy with command-line values applied.

        Args:
            timeout: Timeout from --timeout, if given.
            verbose: True if --verbose was given.

        Returns:
            Config: Validated configuration.
        """
        config = replace(
            self,
            timeout=self.timeout if timeout is None else timeout,
            verbose=self.verbose or bool(verbose),
        )
        config.validate()
        return config
