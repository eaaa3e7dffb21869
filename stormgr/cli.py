"""
stormgr operator commands.

Records desired state in the coordination store and watches the cluster
converge on it:

    stormgr-admin cluster-name cluster5
    stormgr-admin monitor add a mon0 10.0.1.11 6789 --wait
    stormgr-admin monitor remove a
    stormgr-admin monitor wait mon0 mon1
"""
import argparse
import logging
import os
from typing import Callable, List, Optional

from shared.logging_config import setup_logging
from stormgr.ceph.admin import AdminConnector, connect_as_admin_with_retry
from stormgr.ceph.connection import Connection
from stormgr.ceph.mon import remove_desired_monitor, set_desired_monitor, wait_for_quorum
from stormgr.ceph.restful import RestfulConnectionFactory
from stormgr.config import (
    ADMIN_USER,
    CLUSTER_NAME,
    CONNECT_ATTEMPTS,
    CONNECT_RETRY_DELAY_SECONDS,
    DEFAULT_PG_COUNT,
    STORE_URL,
)
from stormgr.context import ClusterContext
from stormgr.database import init_db, make_engine, make_session_factory
from stormgr.errors import StormgrError
from stormgr.startup_profile import validate_monitor_endpoint
from stormgr.store import SqlCoordinationStore, set_cluster_name

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stormgr-admin", description="stormgr operator commands")
    parser.add_argument("--store-url", default=STORE_URL)
    parser.add_argument("--log-level", default=os.getenv("STORMGR_LOG_LEVEL", "INFO"))
    commands = parser.add_subparsers(dest="command", required=True)

    cluster_name = commands.add_parser("cluster-name", help="Record the cluster name")
    cluster_name.add_argument("name")

    monitor = commands.add_parser("monitor", help="Desired monitors")
    monitor_commands = monitor.add_subparsers(dest="monitor_command", required=True)

    add = monitor_commands.add_parser("add", help="Declare a desired monitor")
    add.add_argument("id")
    add.add_argument("name")
    add.add_argument("ip")
    add.add_argument("port", type=int)
    add.add_argument("--wait", action="store_true", help="Block until the monitor is in quorum")

    remove = monitor_commands.add_parser("remove", help="Withdraw a desired monitor")
    remove.add_argument("id")

    wait = monitor_commands.add_parser("wait", help="Block until the named monitors are in quorum")
    wait.add_argument("names", nargs="+")

    for sub in (add, wait):
        sub.add_argument("--attempts", type=int, default=30)
        sub.add_argument("--delay", type=float, default=5.0)

    return parser


def _wait(connect: Callable[[], Connection], names: List[str], attempts: int, delay: float) -> None:
    with connect() as conn:
        status = wait_for_quorum(conn, names, attempts, delay)
    print(f"In quorum: {', '.join(names)} (ranks {status.quorum})")


def run(args: argparse.Namespace, context: ClusterContext, connect: Callable[[], Connection]) -> int:
    """Execute one parsed command. Returns the process exit code."""
    store = context.store
    try:
        if args.command == "cluster-name":
            set_cluster_name(store, args.name)
            logger.info(f"Cluster name set to {args.name}")
        elif args.monitor_command == "add":
            validate_monitor_endpoint(args.ip, args.port)
            set_desired_monitor(store, args.id, args.name, args.ip, args.port)
            if args.wait:
                _wait(connect, [args.name], args.attempts, args.delay)
        elif args.monitor_command == "remove":
            remove_desired_monitor(store, args.id)
            logger.info(f"Desired monitor {args.id} removed")
        else:
            _wait(connect, args.names, args.attempts, args.delay)
    except (StormgrError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("admin", level=args.log_level)

    engine = make_engine(args.store_url)
    init_db(engine)
    store = SqlCoordinationStore(make_session_factory(engine))
    context = ClusterContext(store=store, cluster_name=CLUSTER_NAME, admin_user=ADMIN_USER, pg_count=DEFAULT_PG_COUNT)

    def connect() -> Connection:
        return connect_as_admin_with_retry(
            context, AdminConnector(), RestfulConnectionFactory(), CONNECT_ATTEMPTS, CONNECT_RETRY_DELAY_SECONDS
        )

    try:
        return run(args, context, connect)
    finally:
        engine.dispose()


if __name__ == "__main__":
    raise SystemExit(main())
