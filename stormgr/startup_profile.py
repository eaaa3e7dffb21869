from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass
class StartupProfile:
    role: str
    host: str
    port: int


def _require_valid_port(port: int, field_name: str = "port") -> None:
    if int(port) < 1 or int(port) > 65535:
        raise ValueError(f"{field_name} must be in range 1..65535")


def _require_non_empty_host(host: str) -> None:
    if not str(host or "").strip():
        raise ValueError("host is required")


def validate_api_profile(profile: StartupProfile, restful_url: str) -> None:
    _require_non_empty_host(profile.host)
    _require_valid_port(profile.port)

    parsed = urlparse(str(restful_url or "").strip())
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("ceph restful url must be a valid http(s) URL")


def validate_agent_profile(node_id: str, public_ip: str, interval_seconds: int) -> None:
    if not str(node_id or "").strip():
        raise ValueError("node id is required")
    _require_non_empty_host(public_ip)
    if int(interval_seconds) < 1:
        raise ValueError("inventory interval must be at least 1 second")


def validate_monitor_endpoint(address: str, port: int) -> None:
    _require_non_empty_host(address)
    _require_valid_port(port)
