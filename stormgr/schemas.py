"""
Wire models shared by the reconciliation code and the API.

Field declaration order is the JSON field order clients see, and the
camelCase aliases are part of the compatibility contract.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stormgr.models import NodeState, PoolType


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----------------------------------------------------------------------------
# Inventory
# ----------------------------------------------------------------------------

class Disk(WireModel):
    """Disk snapshot recorded at inventory scan time"""
    type: str = ""
    size: int = Field(default=0, ge=0)  # bytes
    rotational: bool = False
    empty: bool = False


class Node(WireModel):
    node_id: str
    cluster_name: str = ""
    public_ip: str = ""
    private_ip: str = ""
    storage: int = 0  # sum of disk sizes, bytes
    last_updated: int = 0  # unix seconds of the last inventory report
    state: NodeState = NodeState.UNKNOWN
    location: str = ""


# ----------------------------------------------------------------------------
# Monitors
# ----------------------------------------------------------------------------

class MonitorEntry(WireModel):
    name: str
    rank: int
    addr: str


class MonMap(WireModel):
    mons: List[MonitorEntry] = Field(default_factory=list)


class MonitorStatus(WireModel):
    """Live quorum as reported by the storage cluster"""
    quorum: List[int] = Field(default_factory=list)
    monmap: MonMap = Field(default_factory=MonMap)


class DesiredMonitor(WireModel):
    """Monitor declared in the coordination store"""
    name: str
    endpoint: str


class MonitorsResponse(WireModel):
    status: MonitorStatus = Field(default_factory=MonitorStatus)
    desired: List[DesiredMonitor] = Field(default_factory=list)


# ----------------------------------------------------------------------------
# Pools
# ----------------------------------------------------------------------------

class ReplicationConfig(WireModel):
    size: int = 0


class ErasureCodedConfig(WireModel):
    data_chunk_count: int = 0
    coding_chunk_count: int = 0
    algorithm: str = ""  # "<plugin>::<technique>"


class Pool(WireModel):
    """
    Storage pool. The type decides which config is meaningful; the other one
    stays zero-valued.
    """
    pool_name: str = ""
    pool_num: int = 0
    type: Optional[PoolType] = None
    replication_config: ReplicationConfig = Field(default_factory=ReplicationConfig)
    erasure_coded_config: ErasureCodedConfig = Field(default_factory=ErasureCodedConfig)


# ----------------------------------------------------------------------------
# Client access
# ----------------------------------------------------------------------------

class ClientAccessInfo(WireModel):
    mon_addresses: List[str] = Field(default_factory=list)
    user_name: str = ""
    secret_key: str = ""
