from stormgr.ceph.command import execute_mon_command_json
from stormgr.ceph.connection import Connection
from stormgr.errors import MalformedStateError


def get_auth_key(conn: Connection, user: str) -> str:
    """Secret key of client.<user>."""
    entity = user if "." in user else f"client.{user}"
    response = execute_mon_command_json(conn, {"prefix": "auth get-key", "entity": entity}, f"get key for {entity}")
    if not isinstance(response, dict) or not response.get("key"):
        raise MalformedStateError(f"auth get-key {entity}: no key in response")
    return str(response["key"])
