"""
stormgr Node Inventory Agent

Runs on each storage node: scans local disks and keeps the node's facts
and heartbeat current in the coordination store.

Usage:
    python scripts/run_inventory_agent.py --node-id node1 --public-ip 10.0.1.10 \
        --private-ip 192.168.0.10 --location "root=default,dc=dc1"
"""
import argparse
import os
import signal
import sys
import threading
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from shared.logging_config import setup_logging
from stormgr.config import INVENTORY_INTERVAL_SECONDS, STORE_URL
from stormgr.database import init_db, make_engine, make_session_factory
from stormgr.inventory.agent import InventoryReporter
from stormgr.startup_profile import validate_agent_profile
from stormgr.store import SqlCoordinationStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Report this node's inventory to the coordination store")
    parser.add_argument("--node-id", default=os.getenv("STORMGR_NODE_ID", ""))
    parser.add_argument("--public-ip", default=os.getenv("STORMGR_PUBLIC_IP", ""))
    parser.add_argument("--private-ip", default=os.getenv("STORMGR_PRIVATE_IP", ""))
    parser.add_argument("--location", default=os.getenv("STORMGR_LOCATION", ""))
    parser.add_argument("--interval", type=int, default=INVENTORY_INTERVAL_SECONDS)
    parser.add_argument("--store-url", default=STORE_URL)
    parser.add_argument("--log-level", default=os.getenv("STORMGR_LOG_LEVEL", "INFO"))
    args = parser.parse_args()

    logger = setup_logging("agent", level=args.log_level)
    validate_agent_profile(args.node_id, args.public_ip, args.interval)

    engine = make_engine(args.store_url)
    init_db(engine)
    store = SqlCoordinationStore(make_session_factory(engine))

    reporter = InventoryReporter(
        store,
        args.node_id,
        args.public_ip,
        args.private_ip or args.public_ip,
        location=args.location,
        interval_seconds=args.interval,
    )

    stopped = threading.Event()
    signal.signal(signal.SIGTERM, lambda *_: stopped.set())
    signal.signal(signal.SIGINT, lambda *_: stopped.set())

    reporter.start()
    logger.info(f"Reporting inventory for {args.node_id} every {args.interval}s")
    stopped.wait()
    reporter.stop()


if __name__ == "__main__":
    main()
