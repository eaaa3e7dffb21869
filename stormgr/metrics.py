"""
Cluster metrics.

ClusterCollector is a prometheus_client custom collector; every scrape
opens one admin connection and reports quorum and pool counts. It is only
registered once the cluster has been reached at least once, which
MetricsRegistrar keeps retrying in the background for the life of the
process.
"""

import logging
import threading
from typing import Callable

from prometheus_client.core import GaugeMetricFamily

from stormgr.ceph.admin import AdminConnector, connect_as_admin_with_retry
from stormgr.ceph.connection import ConnectionFactory
from stormgr.ceph.mon import get_mon_status
from stormgr.ceph.pool import list_pool_summaries
from stormgr.context import ClusterContext
from stormgr.errors import StormgrError

logger = logging.getLogger(__name__)


class ClusterCollector:
    """Prometheus collector backed by live mon commands"""

    def __init__(self, context: ClusterContext, connector: AdminConnector, ceph_factory: ConnectionFactory):
        self.context = context
        self.connector = connector
        self.ceph_factory = ceph_factory

    def describe(self):
        # no samples at registration time, so registering does not hit the cluster
        return []

    def collect(self):
        up = GaugeMetricFamily("stormgr_cluster_up", "Whether the storage cluster answered the last scrape")
        try:
            conn = connect_as_admin_with_retry(self.context, self.connector, self.ceph_factory, 1, 0)
            with conn:
                status = get_mon_status(conn)
                pools = list_pool_summaries(conn)
        except StormgrError as e:
            logger.warning(f"Metrics scrape failed: {e}")
            up.add_metric([], 0)
            yield up
            return

        up.add_metric([], 1)
        yield up
        yield GaugeMetricFamily("stormgr_monitors_total", "Monitors in the monmap", value=len(status.monmap.mons))
        yield GaugeMetricFamily("stormgr_monitors_in_quorum", "Monitors holding a quorum rank", value=len(status.quorum))
        yield GaugeMetricFamily("stormgr_pools_total", "Storage pools", value=len(pools))


class MetricsRegistrar:
    """
    Runs a registration callable in a background thread until it succeeds.
    """

    def __init__(self, register: Callable[[float], None], retry_delay_seconds: float = 10.0):
        """
        Args:
            register: Called with the retry delay; returns on success, raises on failure
            retry_delay_seconds: Pause between registration rounds
        """
        self.register = register
        self.retry_delay = retry_delay_seconds
        self.registered = False
        self._stop = threading.Event()
        self.thread = None

    def start(self):
        if self.thread is not None and self.thread.is_alive():
            logger.warning("Metrics registrar already running")
            return
        self._stop.clear()
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()
        logger.info("Metrics registrar started")

    def stop(self):
        self._stop.set()
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=5)
        logger.info("Metrics registrar stopped")

    def _run(self):
        while not self._stop.is_set():
            try:
                self.register(self.retry_delay)
                self.registered = True
                logger.info("Cluster metrics registered")
                return
            except StormgrError as e:
                logger.warning(f"Metrics registration failed, will retry: {e}")
            except Exception as e:
                logger.error(f"Unexpected metrics registration error, will retry: {e}", exc_info=True)
            self._stop.wait(self.retry_delay)
