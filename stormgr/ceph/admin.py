import logging

from stormgr.ceph.connection import Connection, ConnectionFactory
from stormgr.context import ClusterContext
from stormgr.errors import ConnectionFailedError, StoreError
from stormgr.retry import retry
from stormgr.store import get_cluster_name

logger = logging.getLogger(__name__)


class AdminConnector:
    """Opens administrative connections for the context's admin identity"""

    def connect_as_admin(self, context: ClusterContext, ceph_factory: ConnectionFactory) -> Connection:
        cluster_name = get_cluster_name(context.store, context.cluster_name)
        conn = ceph_factory.new_conn_with_cluster_and_user(cluster_name, context.admin_user)
        try:
            conn.connect()
        except Exception:
            conn.shutdown()
            raise
        logger.debug(f"Connected to cluster {cluster_name} as {context.admin_user}")
        return conn


def connect_as_admin_with_retry(
    context: ClusterContext,
    connector: AdminConnector,
    ceph_factory: ConnectionFactory,
    attempts: int,
    delay_seconds: float,
) -> Connection:
    """
    Connect as admin, retrying transient failures up to attempts times.

    Raises:
        ConnectionFailedError: every attempt failed
    """
    try:
        return retry(
            attempts,
            delay_seconds,
            lambda: connector.connect_as_admin(context, ceph_factory),
            "connect to ceph cluster as admin",
            retry_on=(ConnectionFailedError, StoreError),
        )
    except StoreError as e:
        raise ConnectionFailedError(f"failed to connect as admin: {e}") from e
