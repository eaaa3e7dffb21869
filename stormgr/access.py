import logging

from stormgr.ceph.auth import get_auth_key
from stormgr.ceph.connection import Connection
from stormgr.ceph.mon import get_mon_status
from stormgr.schemas import ClientAccessInfo

logger = logging.getLogger(__name__)


def get_client_access_info(conn: Connection, user: str) -> ClientAccessInfo:
    """
    Connection bundle a storage client needs: live monitor addresses plus the
    user's secret. Both lookups must succeed; there is no partial bundle.
    """
    status = get_mon_status(conn)
    addresses = [mon.addr for mon in status.monmap.mons]
    secret = get_auth_key(conn, user)
    logger.debug(f"Client access info resolved for {user}: {len(addresses)} monitors")
    return ClientAccessInfo(mon_addresses=addresses, user_name=user, secret_key=secret)
