"""Unit tests for configuration loading and the utility parsers."""

from pathlib import Path

import pytest

from pve_dns_sync.cli import (
    ConfigError,
    SyncConfig,
    _parse_bool,
    build_parser,
    load_config,
    load_config_file,
)


def parse(*argv: str):
    return build_parser().parse_args(list(argv))


# =============================================================================
# Boolean Parsing Tests
# =============================================================================


@pytest.mark.parametrize("value", [True, "1", "true", "TRUE", "yes", "y", "on", " On "])
def test_parse_bool_truthy(value) -> None:
    assert _parse_bool(value) is True


@pytest.mark.parametrize("value", [False, "0", "false", "no", "off", "", "maybe"])
def test_parse_bool_falsy(value) -> None:
    assert _parse_bool(value) is False


def test_parse_bool_none_uses_default() -> None:
    assert _parse_bool(None) is False
    assert _parse_bool(None, default=True) is True


# =============================================================================
# CLI Flags
# =============================================================================


def test_load_config_defaults() -> None:
    config = load_config(parse("-u", "admin", "-p", "secret"), environ={})

    assert config == SyncConfig(username="admin", password="secret")
    assert config.host == "adguard"
    assert config.port == "3000"
    assert config.base_url == "http://adguard:3000"
    assert config.dry_run is False
    assert config.domain_suffix == ""


def test_load_config_all_flags() -> None:
    args = parse("-H", "dns.lan", "-P", "80", "-u", "admin", "-p", "MyPass!", "-D", "lan", "-d", "-v")

    config = load_config(args, environ={})

    assert config.base_url == "http://dns.lan:80"
    assert config.password == "MyPass!"
    assert config.domain_suffix == "lan"
    assert config.dry_run is True
    assert config.verbose is True


def test_load_config_long_flags() -> None:
    args = parse("--user", "admin", "--password", "secret", "--dry-run", "--domain", "home.arpa")

    config = load_config(args, environ={})

    assert config.dry_run is True
    assert config.domain_suffix == "home.arpa"


@pytest.mark.parametrize(
    "argv",
    [
        (),
        ("-u", "admin"),
        ("-p", "secret"),
        ("-u", "", "-p", "secret"),
    ],
)
def test_load_config_requires_credentials(argv) -> None:
    with pytest.raises(ConfigError, match="Missing -u user"):
        load_config(parse(*argv), environ={})


def test_base_url_keeps_explicit_scheme() -> None:
    config = SyncConfig(username="a", password="b", host="https://adguard.lan/")

    assert config.base_url == "https://adguard.lan"


def test_config_is_immutable() -> None:
    config = SyncConfig(username="a", password="b")

    with pytest.raises(AttributeError):
        config.dry_run = True  # type: ignore[misc]


# =============================================================================
# Environment
# =============================================================================


def test_load_config_from_environment() -> None:
    environ = {
        "ADGUARD_HOST": "10.0.0.53",
        "ADGUARD_PORT": "8080",
        "ADGUARD_USERNAME": "envuser",
        "ADGUARD_PASSWORD": "envpass",
        "DNS_DOMAIN": "lan",
        "ADGUARD_TIMEOUT": "10",
        "PVE_COMMAND_TIMEOUT": "60",
    }

    config = load_config(parse(), environ=environ)

    assert config.base_url == "http://10.0.0.53:8080"
    assert config.username == "envuser"
    assert config.domain_suffix == "lan"
    assert config.timeout_seconds == 10.0
    assert config.command_timeout_seconds == 60.0


def test_flags_override_environment() -> None:
    environ = {"ADGUARD_USERNAME": "envuser", "ADGUARD_PASSWORD": "envpass", "ADGUARD_HOST": "env"}

    config = load_config(parse("-u", "cli", "-H", "cli-host"), environ=environ)

    assert config.username == "cli"
    assert config.password == "envpass"
    assert config.host == "cli-host"


def test_invalid_timeout_rejected() -> None:
    environ = {"ADGUARD_USERNAME": "u", "ADGUARD_PASSWORD": "p", "ADGUARD_TIMEOUT": "soon"}

    with pytest.raises(ConfigError, match="timeout"):
        load_config(parse(), environ=environ)


# =============================================================================
# Config File
# =============================================================================


def test_load_config_file(tmp_path: Path) -> None:
    config_file = tmp_path / "pve-dns-sync.yaml"
    config_file.write_text(
        """
adguard:
  host: adguard.lan
  port: 80
  username: admin
  password: secret
  timeout: 3
dns_domain: .lan
dry_run: "yes"
command_timeout: 15
"""
    )

    config = load_config(parse("-c", str(config_file)), environ={})

    assert config.base_url == "http://adguard.lan:80"
    assert config.username == "admin"
    assert config.domain_suffix == "lan"
    assert config.dry_run is True
    assert config.timeout_seconds == 3.0
    assert config.command_timeout_seconds == 15.0


def test_environment_overrides_config_file(tmp_path: Path) -> None:
    config_file = tmp_path / "pve-dns-sync.yaml"
    config_file.write_text("adguard:\n  username: fileuser\n  password: filepass\n")

    config = load_config(
        parse("-c", str(config_file)), environ={"ADGUARD_PASSWORD": "envpass"}
    )

    assert config.username == "fileuser"
    assert config.password == "envpass"


def test_load_config_file_empty(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert load_config_file(str(config_file)) == {}


def test_load_config_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_config_file(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize("content", ["- a\n- b\n", "adguard: [1, 2]\n", "adguard: {host: [\n"])
def test_load_config_file_invalid(tmp_path: Path, content: str) -> None:
    config_file = tmp_path / "bad.yaml"
    config_file.write_text(content)

    with pytest.raises(ConfigError):
        load_config_file(str(config_file))
