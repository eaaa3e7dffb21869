"""
Monitor quorum.

Two deliberately separate views:
- desired: monitors declared in the coordination store (name + endpoint),
  which may exist before the daemon does
- status: the live quorum the cluster reports (ranks + monmap)

Nothing here merges them; missing_from_quorum and wait_for_quorum only
compare names.
"""

import logging
from typing import Iterable, List

from stormgr.ceph.command import execute_mon_command_json
from stormgr.ceph.connection import Connection
from stormgr.errors import CommandFailedError, MalformedStateError
from stormgr.retry import retry
from stormgr.schemas import DesiredMonitor, MonitorEntry, MonitorStatus, MonMap
from stormgr.store import DESIRED_MONITORS_KEY, CoordinationStore, get_value_or_default, join_key

logger = logging.getLogger(__name__)


def get_mon_status(conn: Connection) -> MonitorStatus:
    """Query mon_status and keep the quorum ranks and monmap entries."""
    response = execute_mon_command_json(conn, {"prefix": "mon_status"}, "mon_status")
    if not isinstance(response, dict):
        raise MalformedStateError("mon_status: expected a JSON object")

    try:
        quorum = [int(rank) for rank in response.get("quorum") or []]
        mons = [
            MonitorEntry(name=str(m["name"]), rank=int(m["rank"]), addr=strip_nonce(str(m.get("addr", ""))))
            for m in (response.get("monmap") or {}).get("mons") or []
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise MalformedStateError(f"mon_status: unexpected monmap layout: {e}") from e

    return MonitorStatus(quorum=quorum, monmap=MonMap(mons=mons))


def strip_nonce(addr: str) -> str:
    """'10.0.0.1:6789/0' -> '10.0.0.1:6789'"""
    return addr.split("/", 1)[0]


def get_desired_monitors(store: CoordinationStore) -> List[DesiredMonitor]:
    """Monitors declared in the store, in store enumeration order."""
    desired = []
    for key_id in store.get_children(DESIRED_MONITORS_KEY):
        key = join_key(DESIRED_MONITORS_KEY, key_id)
        name = get_value_or_default(store, join_key(key, "id"), key_id)
        address = get_value_or_default(store, join_key(key, "ipaddress"))
        port = get_value_or_default(store, join_key(key, "port"))
        endpoint = f"{address}:{port}" if port else address
        desired.append(DesiredMonitor(name=name, endpoint=endpoint))
    return desired


def set_desired_monitor(store: CoordinationStore, key_id: str, name: str, address: str, port: int) -> None:
    key = join_key(DESIRED_MONITORS_KEY, key_id)
    store.set(join_key(key, "id"), name)
    store.set(join_key(key, "ipaddress"), address)
    store.set(join_key(key, "port"), str(port))
    logger.info(f"Desired monitor {name} recorded at {address}:{port}")


def remove_desired_monitor(store: CoordinationStore, key_id: str) -> None:
    store.delete_tree(join_key(DESIRED_MONITORS_KEY, key_id))


def missing_from_quorum(names: Iterable[str], status: MonitorStatus) -> List[str]:
    """Names that do not (yet) hold a rank in the live quorum."""
    ranks = set(status.quorum)
    in_quorum = {m.name for m in status.monmap.mons if m.rank in ranks}
    return [name for name in names if name not in in_quorum]


def wait_for_quorum(conn: Connection, names: List[str], attempts: int, delay_seconds: float) -> MonitorStatus:
    """
    Poll mon_status until every named monitor is in quorum.

    Raises:
        MalformedStateError: monitors still missing after the attempt budget
        CommandFailedError: mon_status kept failing
    """
    def check() -> MonitorStatus:
        status = get_mon_status(conn)
        missing = missing_from_quorum(names, status)
        if missing:
            raise MalformedStateError(f"monitors not in quorum yet: {missing}")
        return status

    status = retry(
        attempts,
        delay_seconds,
        check,
        "wait for monitor quorum",
        retry_on=(MalformedStateError, CommandFailedError),
    )
    logger.info(f"Monitors {names} in quorum {status.quorum}")
    return status
