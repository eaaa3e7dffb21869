"""
Node inventory read model and writers.

Per-node facts live under /stormgr/nodes/config/<nodeId>/:
    ipaddress/public, ipaddress/private, location, disks (JSON list), heartbeat (unix seconds)

Reading is lenient per field and strict per call: a missing or malformed
field falls back to its zero value (so one bad node cannot hide the
others), but any store round-trip failure fails the whole listing.
"""

import logging
import time
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from stormgr.context import ClusterContext
from stormgr.models import NodeState
from stormgr.schemas import Disk, Node
from stormgr.store import (
    NODES_CONFIG_KEY,
    CoordinationStore,
    get_cluster_name,
    get_value_or_default,
    join_key,
)

logger = logging.getLogger(__name__)

_disk_list = TypeAdapter(List[Disk])


def _node_key(node_id: str, *parts: str) -> str:
    return join_key(NODES_CONFIG_KEY, node_id, *parts)


# ----------------------------------------------------------------------------
# Writers
# ----------------------------------------------------------------------------

def set_ip_address(store: CoordinationStore, node_id: str, public_ip: str, private_ip: str) -> None:
    store.set(_node_key(node_id, "ipaddress", "public"), public_ip)
    store.set(_node_key(node_id, "ipaddress", "private"), private_ip)


def set_location(store: CoordinationStore, node_id: str, location: str) -> None:
    store.set(_node_key(node_id, "location"), location)


def set_disks(store: CoordinationStore, node_id: str, disks: List[Disk]) -> None:
    store.set(_node_key(node_id, "disks"), _disk_list.dump_json(disks).decode("utf-8"))


def set_heartbeat(store: CoordinationStore, node_id: str, timestamp: Optional[int] = None) -> None:
    store.set(_node_key(node_id, "heartbeat"), str(int(timestamp if timestamp is not None else time.time())))


# ----------------------------------------------------------------------------
# Readers
# ----------------------------------------------------------------------------

def load_disks(store: CoordinationStore, node_id: str) -> List[Disk]:
    raw = get_value_or_default(store, _node_key(node_id, "disks"))
    if not raw:
        return []
    try:
        return _disk_list.validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Node {node_id}: ignoring malformed disk list: {e.error_count()} errors")
        return []


def load_heartbeat(store: CoordinationStore, node_id: str) -> int:
    raw = get_value_or_default(store, _node_key(node_id, "heartbeat"))
    if not raw:
        return 0
    try:
        return int(float(raw))
    except ValueError:
        logger.warning(f"Node {node_id}: ignoring malformed heartbeat {raw!r}")
        return 0


def node_state(last_updated: int, heartbeat_timeout: int, now: Optional[float] = None) -> NodeState:
    if last_updated <= 0:
        return NodeState.UNKNOWN
    now = time.time() if now is None else now
    if now - last_updated <= heartbeat_timeout:
        return NodeState.HEALTHY
    return NodeState.UNHEALTHY


def load_node(store: CoordinationStore, node_id: str, cluster_name: str, heartbeat_timeout: int) -> Node:
    disks = load_disks(store, node_id)
    last_updated = load_heartbeat(store, node_id)
    return Node(
        node_id=node_id,
        cluster_name=cluster_name,
        public_ip=get_value_or_default(store, _node_key(node_id, "ipaddress", "public")),
        private_ip=get_value_or_default(store, _node_key(node_id, "ipaddress", "private")),
        storage=sum(disk.size for disk in disks),
        last_updated=last_updated,
        state=node_state(last_updated, heartbeat_timeout),
        location=get_value_or_default(store, _node_key(node_id, "location")),
    )


def list_nodes(context: ClusterContext, heartbeat_timeout: int) -> List[Node]:
    """All nodes in store enumeration order. Raises StoreError on any store failure."""
    store = context.store
    cluster_name = get_cluster_name(store, context.cluster_name)
    nodes = [load_node(store, node_id, cluster_name, heartbeat_timeout) for node_id in store.get_children(NODES_CONFIG_KEY)]
    logger.debug(f"Loaded {len(nodes)} nodes from inventory")
    return nodes
