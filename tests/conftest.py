"""pytest fixtures for testing."""

import logging

import pytest

from check_dns.config import Config


@pytest.fixture
def sample_query():
    """Query for a host against an explicit name server."""
    from check_dns.models.query import Query

    return Query(
        host_name="example.com",
        dns_server="8.8.8.8",
        reverse_server=None,
        expected_address=None,
        timeout_seconds=10,
    )


@pytest.fixture
def nslookup_success_output():
    """nslookup stdout for a successful forward lookup."""
    return [
        "Server:\t\t8.8.8.8\n",
        "Address:\t8.8.8.8#53\n",
        "\n",
        "Non-authoritative answer:\n",
        "Name:\texample.com\n",
        "Address: 93.184.216.34\n",
        "\n",
    ]


@pytest.fixture
def default_config():
    """Configuration with defaults, independent of the environment."""
    return Config(timeout=10, nslookup_command="nslookup", verbose=False)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove check_dns environment variables."""
    for key in ("CHECK_DNS_TIMEOUT", "NSLOOKUP_COMMAND", "VERBOSE"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
