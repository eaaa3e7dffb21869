"""
Shared request plumbing for the API routers.

The Handler bundles the cluster context with the connection capabilities
(connector + factory) and the connect retry budget. service.py attaches one
Handler to the app; routes receive it through get_handler, so tests can
build an app around mock factories without touching globals.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from fastapi import Request, Response
from prometheus_client import CollectorRegistry
from pydantic import BaseModel, TypeAdapter

from stormgr.ceph.admin import AdminConnector, connect_as_admin_with_retry
from stormgr.ceph.connection import Connection, ConnectionFactory
from stormgr.config import CONNECT_ATTEMPTS, CONNECT_RETRY_DELAY_SECONDS, HEARTBEAT_TIMEOUT_SECONDS
from stormgr.context import ClusterContext
from stormgr.metrics import ClusterCollector

logger = logging.getLogger(__name__)


@dataclass
class HandlerConfig:
    connector: AdminConnector
    ceph_factory: ConnectionFactory
    connect_attempts: int = CONNECT_ATTEMPTS
    retry_delay_seconds: float = CONNECT_RETRY_DELAY_SECONDS
    heartbeat_timeout_seconds: int = HEARTBEAT_TIMEOUT_SECONDS


class Handler:
    def __init__(self, context: ClusterContext, config: HandlerConfig):
        self.context = context
        self.config = config
        self.registry = CollectorRegistry()
        self.collector = None

    def connect(self) -> Connection:
        """Admin connection for one request. Raises ConnectionFailedError."""
        return connect_as_admin_with_retry(
            self.context,
            self.config.connector,
            self.config.ceph_factory,
            self.config.connect_attempts,
            self.config.retry_delay_seconds,
        )

    def register_metrics(self, retry_delay_seconds: float) -> None:
        """
        Register the cluster collector once the cluster is reachable.

        Raises:
            ConnectionFailedError: the cluster stayed unreachable for the whole attempt budget
        """
        if self.collector is not None:
            return

        conn = connect_as_admin_with_retry(
            self.context,
            self.config.connector,
            self.config.ceph_factory,
            self.config.connect_attempts,
            retry_delay_seconds,
        )
        conn.shutdown()

        self.collector = ClusterCollector(self.context, self.config.connector, self.config.ceph_factory)
        self.registry.register(self.collector)


def get_handler(request: Request) -> Handler:
    return request.app.state.handler


def failure_response() -> Response:
    """Every failure kind looks the same on the wire: 500 with an empty body."""
    return Response(status_code=500)


def model_response(model: BaseModel) -> Response:
    return Response(content=model.model_dump_json(by_alias=True), media_type="application/json")


def list_response(items: Sequence[BaseModel], item_type) -> Response:
    adapter = TypeAdapter(List[item_type])
    return Response(content=adapter.dump_json(list(items), by_alias=True), media_type="application/json")
