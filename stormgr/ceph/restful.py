"""
Connection over the ceph-mgr restful module.

Monitor commands are posted to /request?wait=1, which blocks until the
command finished and returns its output buffer (outb) and status (outs).
"""

import json
import logging
from typing import Tuple

import requests

from stormgr.ceph.connection import Connection, ConnectionFactory
from stormgr.config import CEPH_RESTFUL_KEY, CEPH_RESTFUL_URL, CEPH_VERIFY_TLS, COMMAND_TIMEOUT_SECONDS
from stormgr.errors import CommandFailedError, ConnectionFailedError, MalformedStateError

logger = logging.getLogger(__name__)


class RestfulConnection(Connection):
    """
    Usage:
        conn = RestfulConnection("https://10.0.1.1:8003", "admin", "<api key>")
        conn.connect()
        buffer, info = conn.mon_command(b'{"prefix": "mon_status", "format": "json"}')
        conn.shutdown()
    """

    def __init__(self, base_url: str, user: str, key: str, verify: bool = True, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.user = user
        self.verify = verify
        self.timeout = timeout
        self.session = requests.Session()
        self.session.auth = (user, key)
        self.session.verify = verify

    def connect(self) -> None:
        try:
            response = self.session.get(f"{self.base_url}/", timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Failed to reach ceph-mgr at {self.base_url}: {e}")
            raise ConnectionFailedError(f"failed to connect to {self.base_url} as {self.user}: {e}") from e

    def mon_command(self, args: bytes) -> Tuple[bytes, str]:
        try:
            command = json.loads(args)
        except ValueError as e:
            raise CommandFailedError(f"invalid mon command: {e}") from e

        try:
            response = self.session.post(
                f"{self.base_url}/request",
                params={"wait": 1},
                json=command,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            raise CommandFailedError(f"mon command {command.get('prefix')} rejected: HTTP {e.response.status_code}") from e
        except requests.RequestException as e:
            raise ConnectionFailedError(f"mon command {command.get('prefix')} failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise MalformedStateError(f"mon command {command.get('prefix')} returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise MalformedStateError(f"mon command {command.get('prefix')} returned a non-object reply")

        if result.get("has_failed") or result.get("failed"):
            failed = result.get("failed") or [{}]
            first = failed[0] if isinstance(failed, list) and failed and isinstance(failed[0], dict) else {}
            status = str(first.get("outs", ""))
            raise CommandFailedError(f"mon command {command.get('prefix')} failed: {status}", status=status)

        finished = result.get("finished") or []
        if not isinstance(finished, list) or not finished or not isinstance(finished[0], dict):
            raise MalformedStateError(f"mon command {command.get('prefix')} returned no result")

        outb = finished[0].get("outb") or ""
        outs = finished[0].get("outs") or ""
        return str(outb).encode("utf-8"), str(outs)

    def shutdown(self) -> None:
        self.session.close()


class RestfulConnectionFactory(ConnectionFactory):
    """Builds restful connections; every user shares the configured API key"""

    def __init__(
        self,
        base_url: str = CEPH_RESTFUL_URL,
        key: str = CEPH_RESTFUL_KEY,
        verify: bool = CEPH_VERIFY_TLS,
        timeout: float = COMMAND_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url
        self.key = key
        self.verify = verify
        self.timeout = timeout

    def new_conn_with_cluster_and_user(self, cluster_name: str, user: str) -> Connection:
        logger.debug(f"New restful connection for cluster={cluster_name} user={user}")
        return RestfulConnection(self.base_url, user, self.key, verify=self.verify, timeout=self.timeout)
