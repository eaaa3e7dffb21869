"""
Pool reconciliation.

Listing walks lspools -> per-pool properties -> erasure-code profile, in
that order, and aborts on the first failure so callers never see a partial
pool list. Creation validates the request completely before the first
command is sent.
"""

import logging
from typing import List

from stormgr.ceph import erasure_code
from stormgr.ceph.connection import Connection
from stormgr.ceph.pool import (
    create_erasure_coded_pool,
    create_replicated_pool,
    get_pool_details,
    list_pool_summaries,
)
from stormgr.errors import InvalidRequestError
from stormgr.models import PoolType
from stormgr.schemas import ErasureCodedConfig, Pool, ReplicationConfig

logger = logging.getLogger(__name__)


def list_pools(conn: Connection) -> List[Pool]:
    pools = []
    for summary in list_pool_summaries(conn):
        details = get_pool_details(conn, summary.name)

        if details.is_erasure_coded:
            profile = erasure_code.get_profile(conn, details.erasure_code_profile)
            pool = Pool(
                pool_name=summary.name,
                pool_num=summary.number,
                type=PoolType.ERASURE_CODED,
                erasure_coded_config=ErasureCodedConfig(
                    data_chunk_count=profile.data_chunks,
                    coding_chunk_count=profile.coding_chunks,
                    algorithm=profile.algorithm,
                ),
            )
        else:
            pool = Pool(
                pool_name=summary.name,
                pool_num=summary.number,
                type=PoolType.REPLICATED,
                replication_config=ReplicationConfig(size=details.size),
            )
        pools.append(pool)

    logger.debug(f"Listed {len(pools)} pools")
    return pools


def validate_pool(pool: Pool) -> None:
    """Reject malformed create requests. Raises InvalidRequestError."""
    if not pool.pool_name or not pool.pool_name.strip():
        raise InvalidRequestError("pool name is required")

    if pool.type is None:
        raise InvalidRequestError(f"pool {pool.pool_name}: type is required")

    if pool.type == PoolType.REPLICATED:
        if pool.replication_config.size <= 0:
            raise InvalidRequestError(f"pool {pool.pool_name}: replicated pools need replicationConfig.size > 0")
        return

    config = pool.erasure_coded_config
    if config.data_chunk_count <= 0 or config.coding_chunk_count <= 0:
        raise InvalidRequestError(
            f"pool {pool.pool_name}: erasure coded pools need dataChunkCount > 0 and codingChunkCount > 0"
        )
    if config.algorithm:
        erasure_code.parse_algorithm(config.algorithm)


def create_pool(conn: Connection, pool: Pool, pg_count: int) -> str:
    """
    Create the pool on the cluster.

    Returns:
        The cluster's status message, verbatim (e.g. "pool 'p1' created")
    """
    validate_pool(pool)

    if pool.type == PoolType.REPLICATED:
        return create_replicated_pool(conn, pool.pool_name, pg_count, pool.replication_config.size)

    config = pool.erasure_coded_config
    profile = erasure_code.resolve_profile(
        conn,
        pool.pool_name,
        config.data_chunk_count,
        config.coding_chunk_count,
        config.algorithm,
    )
    return create_erasure_coded_pool(conn, pool.pool_name, pg_count, profile.name)
