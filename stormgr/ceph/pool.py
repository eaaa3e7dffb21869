import logging
from dataclasses import dataclass
from typing import List, Optional

from stormgr.ceph.command import execute_mon_command, execute_mon_command_json
from stormgr.ceph.connection import Connection
from stormgr.ceph.multijson import merge_json_objects
from stormgr.errors import MalformedStateError

logger = logging.getLogger(__name__)

ERASURE_CODE_PROFILE_PROPERTY = "erasure_code_profile"


@dataclass
class CephStoragePoolSummary:
    name: str
    number: int


@dataclass
class CephStoragePoolDetails:
    name: str
    size: int = 0
    erasure_code_profile: Optional[str] = None

    @property
    def is_erasure_coded(self) -> bool:
        return self.erasure_code_profile is not None


def list_pool_summaries(conn: Connection) -> List[CephStoragePoolSummary]:
    """Pools in the order the cluster returns them."""
    response = execute_mon_command_json(conn, {"prefix": "osd lspools"}, "list pools")
    if not isinstance(response, list):
        raise MalformedStateError("osd lspools: expected a JSON list")
    try:
        return [CephStoragePoolSummary(name=str(p["poolname"]), number=int(p["poolnum"])) for p in response]
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedStateError(f"osd lspools: unexpected entry: {e}") from e


def get_pool_details(conn: Connection, name: str) -> CephStoragePoolDetails:
    """
    Read every property of a pool. The cluster answers 'osd pool get <pool> all'
    with one JSON object per property, concatenated; the presence of
    erasure_code_profile is what marks the pool as erasure-coded.
    """
    buffer, _ = execute_mon_command(
        conn,
        {"prefix": "osd pool get", "pool": name, "var": "all", "format": "json"},
        f"get properties of pool {name}",
    )
    properties = merge_json_objects(buffer)

    try:
        size = int(properties.get("size", 0))
    except (TypeError, ValueError) as e:
        raise MalformedStateError(f"pool {name}: invalid numeric property: {e}") from e

    profile = properties.get(ERASURE_CODE_PROFILE_PROPERTY)
    return CephStoragePoolDetails(
        name=name,
        size=size,
        erasure_code_profile=str(profile) if profile is not None else None,
    )


def create_replicated_pool(conn: Connection, name: str, pg_count: int, size: int) -> str:
    _, info = execute_mon_command(
        conn,
        {
            "prefix": "osd pool create",
            "pool": name,
            "pg_num": pg_count,
            "pool_type": "replicated",
            "size": size,
        },
        f"create replicated pool {name}",
    )
    logger.info(f"Created replicated pool {name} (size={size}, pg_num={pg_count}): {info}")
    return info


def create_erasure_coded_pool(conn: Connection, name: str, pg_count: int, profile_name: str) -> str:
    _, info = execute_mon_command(
        conn,
        {
            "prefix": "osd pool create",
            "pool": name,
            "pg_num": pg_count,
            "pool_type": "erasure",
            "erasure_code_profile": profile_name,
        },
        f"create erasure coded pool {name}",
    )
    logger.info(f"Created erasure coded pool {name} (profile={profile_name}, pg_num={pg_count}): {info}")
    return info
