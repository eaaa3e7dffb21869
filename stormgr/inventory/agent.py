"""
Inventory reporter.

Background thread run on each storage node. Every interval it scans the
local disks and writes the node's facts plus a heartbeat to the store,
which is what the control plane's node listing reads back.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from stormgr.inventory.discovery import discover_disks
from stormgr.inventory.nodes import set_disks, set_heartbeat, set_ip_address, set_location
from stormgr.schemas import Disk
from stormgr.store import CoordinationStore

logger = logging.getLogger(__name__)


class InventoryReporter:
    """
    Keeps a node's inventory record current.
    """

    def __init__(
        self,
        store: CoordinationStore,
        node_id: str,
        public_ip: str,
        private_ip: str,
        location: str = "",
        interval_seconds: int = 30,
        disk_scanner: Optional[Callable[[], List[Disk]]] = None,
    ):
        """
        Initialize inventory reporter.

        Args:
            store: Coordination store client
            node_id: Unique node identifier
            public_ip: Address clients reach the node on
            private_ip: Cluster-internal address
            location: Topology location, e.g. "root=default,dc=dc1"
            interval_seconds: Report interval (default: 30 seconds)
            disk_scanner: Disk discovery callable (default: lsblk scan)
        """
        self.store = store
        self.node_id = node_id
        self.public_ip = public_ip
        self.private_ip = private_ip
        self.location = location
        self.interval_seconds = interval_seconds
        self.disk_scanner = disk_scanner or discover_disks

        self.running = False
        self.thread = None

        logger.info(f"Inventory reporter initialized: node={node_id}, interval={interval_seconds}s")

    def start(self):
        """Start reporter thread"""
        if self.running:
            logger.warning("Inventory reporter already running")
            return

        self.running = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()

        logger.info("Inventory reporter started")

    def stop(self):
        """Stop reporter thread"""
        self.running = False
        if self.thread:
            self.thread.join(timeout=5)

        logger.info("Inventory reporter stopped")

    def _run(self):
        while self.running:
            try:
                self.report_once()
            except Exception as e:
                logger.error(f"Inventory report failed: {e}", exc_info=True)

            # Sleep in small increments for responsive shutdown
            for _ in range(int(self.interval_seconds * 10)):
                if not self.running:
                    break
                time.sleep(0.1)

    def report_once(self) -> List[Disk]:
        """Scan disks and write this node's facts and heartbeat."""
        disks = self.disk_scanner()
        set_ip_address(self.store, self.node_id, self.public_ip, self.private_ip)
        set_location(self.store, self.node_id, self.location)
        set_disks(self.store, self.node_id, disks)
        set_heartbeat(self.store, self.node_id)
        logger.debug(f"Inventory reported for {self.node_id}: {len(disks)} disks")
        return disks
