from __future__ import annotations

from dataclasses import dataclass

from stormgr.config import ADMIN_USER, CLUSTER_NAME, DEFAULT_PG_COUNT
from stormgr.store import CoordinationStore


@dataclass(frozen=True)
class ClusterContext:
    """Process-wide handles shared read-only by every component"""
    store: CoordinationStore
    cluster_name: str = CLUSTER_NAME
    admin_user: str = ADMIN_USER
    pg_count: int = DEFAULT_PG_COUNT
