import json
import logging
from typing import Any, Dict, Tuple

from stormgr.ceph.connection import Connection
from stormgr.errors import CommandFailedError, MalformedStateError

logger = logging.getLogger(__name__)


def execute_mon_command(conn: Connection, command: Dict[str, Any], description: str) -> Tuple[bytes, str]:
    """
    Run one monitor command.

    Returns:
        (output buffer, informational status string)
    """
    args = json.dumps(command).encode("utf-8")
    logger.debug(f"mon_command {description}: {args!r}")
    try:
        buffer, info = conn.mon_command(args)
    except CommandFailedError as e:
        logger.error(f"mon_command {description} failed: {e}")
        raise
    return buffer or b"", info or ""


def execute_mon_command_json(conn: Connection, command: Dict[str, Any], description: str) -> Any:
    """Run a command with format=json and decode its buffer as a single JSON document."""
    command = dict(command, format="json")
    buffer, _ = execute_mon_command(conn, command, description)
    if not buffer:
        raise MalformedStateError(f"{description}: empty response")
    try:
        return json.loads(buffer)
    except ValueError as e:
        raise MalformedStateError(f"{description}: invalid JSON response: {e}") from e
