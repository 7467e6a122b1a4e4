"""Unit tests for configuration validation."""

import pytest

from check_dns.config import DEFAULT_NSLOOKUP_COMMAND, DEFAULT_TIMEOUT, Config


def test_config_from_env_defaults(clean_env):
    """Test defaults when no environment variables are set."""
    config = Config.from_env()

    assert config.timeout == DEFAULT_TIMEOUT
    assert config.nslookup_command == DEFAULT_NSLOOKUP_COMMAND
    assert config.verbose is False


def test_config_from_env_valid(clean_env):
    """Test loading valid configuration from environment variables."""
    clean_env.setenv("CHECK_DNS_TIMEOUT", "30")
    clean_env.setenv("NSLOOKUP_COMMAND", "/usr/bin/nslookup -sil")

    config = Config.from_env()

    assert config.timeout == 30
    assert config.nslookup_command == "/usr/bin/nslookup -sil"


def test_config_timeout_not_integer(clean_env):
    """Test non-integer timeout raises ValueError."""
    clean_env.setenv("CHECK_DNS_TIMEOUT", "ten")

    with pytest.raises(ValueError, match="CHECK_DNS_TIMEOUT must be an integer"):
        Config.from_env()


@pytest.mark.parametrize("timeout", ["0", "-5", "301"])
def test_config_timeout_out_of_range(clean_env, timeout):
    """Test timeout outside 1..300 raises ValueError."""
    clean_env.setenv("CHECK_DNS_TIMEOUT", timeout)

    with pytest.raises(ValueError, match="Timeout must be between 1 and 300 seconds"):
        Config.from_env()


def test_config_empty_command(clean_env):
    """Test blank resolver command raises ValueError."""
    clean_env.setenv("NSLOOKUP_COMMAND", "  ")

    with pytest.raises(ValueError, match="NSLOOKUP_COMMAND cannot be empty"):
        Config.from_env()


def test_config_verbose_parsing(clean_env):
    """Test that VERBOSE boolean parsing works correctly."""
    for verbose_value in ["true", "True", "TRUE", "1", "yes"]:
        clean_env.setenv("VERBOSE", verbose_value)

        config = Config.from_env()
        assert config.verbose is True, f"Expected True for VERBOSE={verbose_value}"

    for verbose_value in ["false", "0", "no", ""]:
        clean_env.setenv("VERBOSE", verbose_value)

        config = Config.from_env()
        assert config.verbose is False, f"Expected False for VERBOSE={verbose_value}"


def test_with_overrides(default_config):
    """Test command-line values replace environment values."""
    config = default_config.with_overrides(timeout=3, verbose=True)

    assert config.timeout == 3
    assert config.verbose is True
    assert config.nslookup_command == "nslookup"


def test_with_overrides_keeps_unset_values(default_config):
    """Test None overrides leave values unchanged."""
    config = default_config.with_overrides(timeout=None, verbose=False)

    assert config == default_config


def test_with_overrides_validates(default_config):
    """Test overridden timeout is range-checked."""
    with pytest.raises(ValueError, match="Timeout must be between"):
        default_config.with_overrides(timeout=0)
