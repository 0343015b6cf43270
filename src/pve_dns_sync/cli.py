#!/usr/bin/env python3
"""pve-dns-sync - Proxmox VE to AdGuard Home DNS rewrite reconciliation

Builds name -> IPv4 rewrites from the running LXC containers and QEMU VMs of a
Proxmox VE cluster and reconciles them into AdGuard Home DNS rewrites. Each run
is a single pass:

    1. Add rewrites for guests that have none, replace rewrites whose address
       changed (delete old, then add new).
    2. Collect rewrites that no running guest accounts for.
    3. Ask the operator, one record at a time, before deleting any of them.

Manual rewrites are never removed without an explicit "y"/"yes".

Must be run on a Proxmox VE node (uses pvesh, pct and qm).

Options (each also settable from a YAML file via -c, or the environment):

    -H, --host         AdGuard host              ADGUARD_HOST      (default: adguard)
    -P, --port         AdGuard port              ADGUARD_PORT      (default: 3000)
    -u, --user         AdGuard username          ADGUARD_USERNAME  (required)
    -p, --password     AdGuard password          ADGUARD_PASSWORD  (required)
    -D, --domain       DNS suffix, '' disables   DNS_DOMAIN        (default: '')
    -d, --dry-run      Show what would change, no writes
    -v, --verbose      Debug logging
    -c, --config       YAML config file

    ADGUARD_TIMEOUT        HTTP timeout in seconds (default: 5)
    PVE_COMMAND_TIMEOUT    Timeout for pvesh/pct/qm calls in seconds (default: 30)
    LOG_LEVEL              Level used when --verbose is not given (default: INFO)

    Example config file:
        adguard:
          host: adguard.lan
          port: 80
          username: admin
          password: secret
          timeout: 5
        dns_domain: lan
        dry_run: false
        command_timeout: 30
"""

from __future__ import annotations

import argparse
import ipaddress
import json
import logging
import os
import subprocess
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import requests
import yaml
from requests.auth import HTTPBasicAuth

logger = logging.getLogger(__name__)

DEFAULT_HOST = "adguard"
DEFAULT_PORT = "3000"
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_COMMAND_TIMEOUT_SECONDS = 30.0

USAGE_EXAMPLE = "Example:\n  pve-dns-sync -H 'Adguard_Host' -P 80 -u 'MyUser' -p 'MyPass!' -d -v"

# =============================================================================
# Errors
# =============================================================================


class PVEDNSSyncError(Exception):
    """Base class for errors that abort a run."""


class ConfigError(PVEDNSSyncError):
    """Invalid or incomplete configuration."""


class InstanceDirectoryError(PVEDNSSyncError):
    """The list of guests could not be fetched."""


class DNSProviderError(PVEDNSSyncError):
    """The DNS provider could not be read."""


# =============================================================================
# Logging Setup
# =============================================================================


def setup_logging(verbose: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class SyncConfig:
    """Settings for a single run, built once in main() and passed down."""

    username: str
    password: str
    host: str = DEFAULT_HOST
    port: str = DEFAULT_PORT
    domain_suffix: str = ""
    dry_run: bool = False
    verbose: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    command_timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        if self.host.startswith(("http://", "https://")):
            return self.host.rstrip("/")
        return f"http://{self.host}:{self.port}"


def _parse_bool(value: Any, *, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_seconds(value: Any, name: str) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}")
    if seconds <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return seconds


def load_config_file(path: str) -> Dict[str, Any]:
    """Load settings from a YAML file into flat SyncConfig-style keys.

    Args:
        path: Path to the YAML file

    Returns:
        Dict with only the keys present in the file
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    values: Dict[str, Any] = {}
    adguard = data.get("adguard") or {}
    if not isinstance(adguard, dict):
        raise ConfigError(f"Config file {path}: 'adguard' must be a mapping")

    for key, target in (
        ("host", "host"),
        ("port", "port"),
        ("username", "username"),
        ("password", "password"),
        ("timeout", "timeout_seconds"),
    ):
        if adguard.get(key) is not None:
            values[target] = adguard[key]

    if data.get("dns_domain") is not None:
        values["domain_suffix"] = data["dns_domain"]
    if data.get("command_timeout") is not None:
        values["command_timeout_seconds"] = data["command_timeout"]
    if "dry_run" in data:
        values["dry_run"] = _parse_bool(data["dry_run"])
    if "verbose" in data:
        values["verbose"] = _parse_bool(data["verbose"])
    return values


def load_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> SyncConfig:
    """Merge defaults, config file, environment and CLI flags (in that order)."""
    env = os.environ if environ is None else environ

    values: Dict[str, Any] = {
        "host": DEFAULT_HOST,
        "port": DEFAULT_PORT,
        "username": "",
        "password": "",
        "domain_suffix": "",
        "dry_run": False,
        "verbose": False,
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        "command_timeout_seconds": DEFAULT_COMMAND_TIMEOUT_SECONDS,
    }

    if args.config:
        values.update(load_config_file(args.config))

    for env_name, key in (
        ("ADGUARD_HOST", "host"),
        ("ADGUARD_PORT", "port"),
        ("ADGUARD_USERNAME", "username"),
        ("ADGUARD_PASSWORD", "password"),
        ("DNS_DOMAIN", "domain_suffix"),
        ("ADGUARD_TIMEOUT", "timeout_seconds"),
        ("PVE_COMMAND_TIMEOUT", "command_timeout_seconds"),
    ):
        if env.get(env_name):
            values[key] = env[env_name]

    for attr, key in (
        ("host", "host"),
        ("port", "port"),
        ("user", "username"),
        ("password", "password"),
        ("domain", "domain_suffix"),
    ):
        value = getattr(args, attr)
        if value is not None:
            values[key] = value
    if args.dry_run:
        values["dry_run"] = True
    if args.verbose:
        values["verbose"] = True

    username = str(values["username"] or "").strip()
    password = str(values["password"] or "")
    if not username or not password:
        raise ConfigError("Missing -u user or -p 'pass'")

    return SyncConfig(
        username=username,
        password=password,
        host=str(values["host"]).strip(),
        port=str(values["port"]).strip(),
        domain_suffix=str(values["domain_suffix"] or "").strip().strip("."),
        dry_run=bool(values["dry_run"]),
        verbose=bool(values["verbose"]),
        timeout_seconds=_parse_seconds(values["timeout_seconds"], "timeout"),
        command_timeout_seconds=_parse_seconds(
            values["command_timeout_seconds"], "command_timeout"
        ),
    )


# =============================================================================
# Data Classes
# =============================================================================


class GuestKind(Enum):
    """Proxmox VE guest technologies that can carry a rewrite."""

    LXC = "lxc"
    QEMU = "qemu"


@dataclass(frozen=True)
class GuestInstance:
    """A guest reported by the Proxmox cluster resources API."""

    vmid: int
    name: str
    kind: GuestKind


@dataclass(frozen=True)
class DNSRecord:
    """Represents a DNS rewrite."""

    domain: str
    answer: str


@dataclass
class SyncStats:
    added: int = 0
    updated: int = 0
    deleted: int = 0
    skipped: int = 0

    def summary(self) -> str:
        return (
            f"Sync complete. Added: {self.added}, Updated: {self.updated}, "
            f"Deleted: {self.deleted}, Skipped: {self.skipped}. "
            "Manual DNS entries left untouched."
        )


# =============================================================================
# Instance Directory Interface and Implementations
# =============================================================================


class InstanceDirectory(ABC):
    """Abstract base class for sources of running guests."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the directory name for logging."""
        pass

    @abstractmethod
    def list_running_instances(self) -> List[GuestInstance]:
        """Return running guests. Raises InstanceDirectoryError on failure."""
        pass

    @abstractmethod
    def resolve_address(self, instance: GuestInstance) -> Optional[str]:
        """Return the guest's primary IPv4 address, or None if it has none yet."""
        pass


CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]


def _is_usable_ipv4(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        address = ipaddress.IPv4Address(value.strip())
    except ValueError:
        return False
    return not address.is_loopback


def first_ipv4_from_interfaces(payload: Any) -> Optional[str]:
    """Extract the first non-loopback IPv4 from a guest agent interface listing.

    Accepts both the raw agent shape ``{"result": [...]}`` and the bare list that
    ``qm guest cmd`` prints. Anything unexpected yields None rather than an error.
    """
    if isinstance(payload, dict):
        payload = payload.get("result")
    if not isinstance(payload, list):
        return None

    for interface in payload:
        if not isinstance(interface, dict):
            continue
        addresses = interface.get("ip-addresses")
        if not isinstance(addresses, list):
            continue
        for entry in addresses:
            if not isinstance(entry, dict) or entry.get("ip-family") != "ipv4":
                continue
            address = entry.get("ip-address") or entry.get("address")
            if _is_usable_ipv4(address):
                return address.strip()
    return None


def first_ipv4_from_hostname_output(output: str) -> Optional[str]:
    """Pick the first non-loopback IPv4 from ``hostname -I`` output."""
    for token in (output or "").split():
        if _is_usable_ipv4(token):
            return token
    return None


class ProxmoxInstanceDirectory(InstanceDirectory):
    """Proxmox VE directory backed by the pvesh, pct and qm command line tools."""

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
        runner: Optional[CommandRunner] = None,
    ):
        self._timeout = timeout_seconds
        self._runner = runner or subprocess.run

    @property
    def name(self) -> str:
        return "Proxmox VE"

    def _run(self, cmd: List[str]) -> str:
        result = self._runner(
            cmd, check=True, capture_output=True, text=True, timeout=self._timeout
        )
        return result.stdout

    def list_running_instances(self) -> List[GuestInstance]:
        logger.debug("Fetching running containers/VMs from Proxmox...")
        cmd = ["pvesh", "get", "/cluster/resources", "--type", "vm", "--output-format", "json"]
        try:
            data = json.loads(self._run(cmd))
        except (OSError, subprocess.SubprocessError, UnicodeDecodeError) as e:
            raise InstanceDirectoryError(f"pvesh error: {e}") from e
        except json.JSONDecodeError as e:
            raise InstanceDirectoryError(f"json parse error: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise InstanceDirectoryError(f"Unexpected pvesh response: {type(data).__name__}")

        instances: List[GuestInstance] = []
        for item in data:
            if not isinstance(item, dict) or item.get("status") != "running":
                continue
            try:
                kind = GuestKind(item.get("type"))
            except ValueError:
                continue
            name = item.get("name")
            vmid = item.get("vmid")
            if not isinstance(name, str) or not name or isinstance(vmid, bool):
                logger.warning(f"Skipping malformed resource: {item}")
                continue
            try:
                vmid = int(vmid)
            except (TypeError, ValueError):
                logger.warning(f"Skipping malformed resource: {item}")
                continue
            instances.append(GuestInstance(vmid=vmid, name=name, kind=kind))
        return instances

    def resolve_address(self, instance: GuestInstance) -> Optional[str]:
        logger.debug(
            f"Getting IP for VM {instance.vmid} (type: {instance.kind.value})"
        )
        try:
            if instance.kind == GuestKind.LXC:
                output = self._run(["pct", "exec", str(instance.vmid), "--", "hostname", "-I"])
                return first_ipv4_from_hostname_output(output)

            output = self._run(["qm", "guest", "cmd", str(instance.vmid), "network-get-interfaces"])
            return first_ipv4_from_interfaces(json.loads(output))
        except (OSError, subprocess.SubprocessError, UnicodeDecodeError) as e:
            logger.debug(
                f"Failed to get IP for {instance.kind.value} {instance.vmid}: {e}"
            )
        except json.JSONDecodeError as e:
            logger.debug(
                f"Invalid guest agent output for {instance.kind.value} {instance.vmid}: {e}"
            )
        return None


# =============================================================================
# DNS Provider Interface and Implementations
# =============================================================================


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name for logging."""
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """Test connection to the DNS provider."""
        pass

    @abstractmethod
    def get_records(self) -> List[DNSRecord]:
        """Get all DNS records. Raises DNSProviderError when they cannot be read."""
        pass

    @abstractmethod
    def add_record(self, domain: str, answer: str) -> bool:
        """Add a DNS record."""
        pass

    @abstractmethod
    def delete_record(self, domain: str, answer: str) -> bool:
        """Delete the DNS record matching both domain and answer."""
        pass


class AdGuardDNSProvider(DNSProvider):
    """AdGuard Home DNS provider implementation."""

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._url = url.rstrip("/")
        self._timeout = timeout_seconds
        self._auth = HTTPBasicAuth(username, password) if username and password else None
        self._session = requests.Session()
        if self._auth:
            self._session.auth = self._auth

    @classmethod
    def from_config(cls, config: SyncConfig) -> "AdGuardDNSProvider":
        return cls(
            config.base_url,
            config.username,
            config.password,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def name(self) -> str:
        return "AdGuard Home"

    @property
    def url(self) -> str:
        return self._url

    def test_connection(self) -> bool:
        try:
            response = self._session.get(f"{self._url}/control/status", timeout=self._timeout)
            response.raise_for_status()
            logger.debug(f"{self.name} OK at {self._url}")
            return True
        except requests.exceptions.RequestException as e:
            logger.error(f"Cannot reach {self.name} at {self._url}/control/status: {e}")
            return False

    def get_records(self) -> List[DNSRecord]:
        logger.debug(f"Fetching {self.name} rewrites...")
        try:
            response = self._session.get(
                f"{self._url}/control/rewrite/list", timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise DNSProviderError(f"Failed to get records from {self.name}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise DNSProviderError(
                f"Unexpected rewrite list from {self.name}: {type(data).__name__}"
            )

        records = []
        for r in data:
            domain = r.get("domain") if isinstance(r, dict) else None
            answer = r.get("answer") if isinstance(r, dict) else None
            if not isinstance(domain, str) or not isinstance(answer, str):
                logger.warning(f"Skipping malformed record: {r}")
                continue
            records.append(DNSRecord(domain=domain, answer=answer))
        return records

    def add_record(self, domain: str, answer: str) -> bool:
        try:
            data = {"domain": domain, "answer": answer}
            response = self._session.post(
                f"{self._url}/control/rewrite/add", json=data, timeout=self._timeout
            )
            response.raise_for_status()
            return True
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to add record for {domain}: {e}")
            return False

    def delete_record(self, domain: str, answer: str) -> bool:
        try:
            data = {"domain": domain, "answer": answer}
            response = self._session.post(
                f"{self._url}/control/rewrite/delete", json=data, timeout=self._timeout
            )
            response.raise_for_status()
            return True
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to delete record for {domain}: {e}")
            return False


# =============================================================================
# Desired State
# =============================================================================


def make_fqdn(name: str, domain_suffix: str = "") -> str:
    suffix = (domain_suffix or "").strip(".")
    return f"{name}.{suffix}" if suffix else name


def build_desired_state(
    instances: Sequence[GuestInstance],
    directory: InstanceDirectory,
    domain_suffix: str = "",
) -> Dict[str, str]:
    """Map each running guest with an address to its rewrite.

    Guests without an address are skipped. When two guests produce the same
    FQDN the later one wins and a warning is logged.
    """
    desired: Dict[str, str] = {}
    for instance in instances:
        ip = directory.resolve_address(instance)
        if not ip:
            logger.debug(
                f"Skipping {instance.name} (vmid {instance.vmid}, "
                f"type {instance.kind.value}) - no IP"
            )
            continue

        fqdn = make_fqdn(instance.name, domain_suffix)
        previous = desired.get(fqdn)
        if previous is not None and previous != ip:
            logger.warning(
                f"Duplicate name '{fqdn}': vmid {instance.vmid} ({ip}) replaces {previous}"
            )
        desired[fqdn] = ip
        logger.info(f"want: {fqdn} -> {ip}")
    return desired


# =============================================================================
# Confirmation
# =============================================================================


ConfirmCallback = Callable[[str, str], bool]


def is_affirmative(response: Optional[str]) -> bool:
    return (response or "").strip().lower() in {"y", "yes"}


def prompt_confirmation(
    domain: str, answer: str, *, input_func: Optional[Callable[[str], str]] = None
) -> bool:
    """Ask the operator whether to delete one rewrite. Anything but y/yes declines."""
    read = input_func or input
    try:
        response = read(f"Delete {domain} -> {answer}? [y/N] ")
    except EOFError:
        # No terminal input available
        print()
        return False
    return is_affirmative(response)


# =============================================================================
# Core Syncer
# =============================================================================


class RewriteSyncer:
    """Reconciles desired rewrites into a DNS provider.

    Additions and address changes are applied directly. Rewrites with no
    matching guest are only removed after ``confirm(domain, answer)`` returns
    True for that record.
    """

    def __init__(
        self,
        *,
        dns_provider: DNSProvider,
        confirm: ConfirmCallback,
        dry_run: bool = False,
    ):
        self.dns_provider = dns_provider
        self.confirm = confirm
        self.dry_run = dry_run

    def fetch_current(self) -> Dict[str, str]:
        # Duplicate domains collapse to the last listed answer
        return {r.domain: r.answer for r in self.dns_provider.get_records()}

    def _add(self, domain: str, answer: str, stats: SyncStats) -> None:
        if self.dry_run:
            logger.info(f"[DRY] add {domain} -> {answer}")
            stats.added += 1
            return

        logger.debug(f"Adding {domain} -> {answer}")
        if self.dns_provider.add_record(domain, answer):
            logger.info(f"added {domain} -> {answer}")
            stats.added += 1
        else:
            logger.error(f"Failed to add {domain}")

    def _update(self, domain: str, old_answer: str, new_answer: str, stats: SyncStats) -> None:
        if self.dry_run:
            logger.info(f"[DRY] update {domain}: {old_answer} -> {new_answer}")
            stats.updated += 1
            return

        logger.debug(f"Updating {domain}: {old_answer} -> {new_answer}")
        if not self.dns_provider.delete_record(domain, old_answer):
            logger.error(f"Failed to delete old {domain}")
            return
        if not self.dns_provider.add_record(domain, new_answer):
            logger.error(f"Failed to add new {domain}; {domain} now has no rewrite")
            return
        logger.info(f"updated {domain}: {old_answer} -> {new_answer}")
        stats.updated += 1

    def apply_changes(
        self, desired: Dict[str, str], current: Dict[str, str], stats: SyncStats
    ) -> None:
        for domain, new_answer in sorted(desired.items()):
            old_answer = current.get(domain)
            if old_answer is None:
                self._add(domain, new_answer, stats)
            elif old_answer != new_answer:
                self._update(domain, old_answer, new_answer, stats)
            else:
                logger.debug(f"unchanged {domain} -> {old_answer}")

    @staticmethod
    def delete_candidates(desired: Dict[str, str], current: Dict[str, str]) -> List[str]:
        return sorted(domain for domain in current if domain not in desired)

    def confirm_and_delete(
        self, candidates: List[str], current: Dict[str, str], stats: SyncStats
    ) -> None:
        for domain in candidates:
            answer = current[domain]
            if not self.confirm(domain, answer):
                logger.info(f"skipped {domain} -> {answer}")
                stats.skipped += 1
                continue

            if self.dry_run:
                logger.info(f"[DRY] delete {domain} -> {answer}")
                stats.deleted += 1
                continue

            logger.debug(f"Deleting {domain} -> {answer}")
            if self.dns_provider.delete_record(domain, answer):
                logger.info(f"deleted {domain} -> {answer}")
                stats.deleted += 1
            else:
                logger.error(f"Failed to delete {domain}")

    def sync(self, desired: Dict[str, str]) -> SyncStats:
        stats = SyncStats()
        current = self.fetch_current()

        self.apply_changes(desired, current, stats)

        candidates = self.delete_candidates(desired, current)
        if candidates:
            logger.info(
                f"Found {len(candidates)} {self.dns_provider.name} rewrite(s) "
                "not present in Proxmox list"
            )
            self.confirm_and_delete(candidates, current, stats)
        else:
            logger.debug(f"No {self.dns_provider.name} rewrites to delete.")

        return stats


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pve-dns-sync",
        description="Sync running Proxmox containers/VMs into AdGuard Home DNS rewrites.",
        epilog=USAGE_EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-H", "--host", help=f"AdGuard host (default: {DEFAULT_HOST})")
    parser.add_argument("-P", "--port", help=f"AdGuard port (default: {DEFAULT_PORT})")
    parser.add_argument("-u", "--user", help="AdGuard username")
    parser.add_argument("-p", "--password", help="AdGuard password")
    parser.add_argument("-D", "--domain", help="DNS suffix (default: '', to disable)")
    parser.add_argument(
        "-d", "--dry-run", action="store_true", help="Dry-run (show what would change, no writes)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose")
    parser.add_argument("-c", "--config", help="YAML config file")
    return parser


def run(
    config: SyncConfig,
    *,
    dns_provider: DNSProvider,
    directory: InstanceDirectory,
    confirm: ConfirmCallback = prompt_confirmation,
) -> SyncStats:
    """Execute one reconciliation pass. Fatal problems raise PVEDNSSyncError."""
    if not dns_provider.test_connection():
        raise DNSProviderError(f"Cannot connect to {dns_provider.name}")

    logger.info(f"Dry-run: {'yes' if config.dry_run else 'no'}")

    instances = directory.list_running_instances()
    logger.info(f"Found {len(instances)} running containers/VMs")
    if not instances:
        logger.info("Nothing to do.")
        return SyncStats()

    desired = build_desired_state(instances, directory, config.domain_suffix)
    if not desired:
        logger.info("No containers/VMs with IPs found; nothing to sync.")
        return SyncStats()

    syncer = RewriteSyncer(dns_provider=dns_provider, confirm=confirm, dry_run=config.dry_run)
    stats = syncer.sync(desired)
    logger.info(stats.summary())
    return stats


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        setup_logging(args.verbose)
        logger.error(str(e))
        parser.print_usage(sys.stderr)
        sys.exit(1)

    setup_logging(config.verbose)

    dns_provider = AdGuardDNSProvider.from_config(config)
    directory = ProxmoxInstanceDirectory(timeout_seconds=config.command_timeout_seconds)

    try:
        run(config, dns_provider=dns_provider, directory=directory)
    except PVEDNSSyncError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting.")
        sys.exit(130)


if __name__ == "__main__":
    main()
