"""
Pytest configuration and shared fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from stormgr.api.handler import Handler, HandlerConfig
from stormgr.context import ClusterContext
from stormgr.database import init_db, make_engine, make_session_factory
from stormgr.service import create_app
from stormgr.store import SqlCoordinationStore
from tests.mocks import MockAdminConnector, MockConnectionFactory


@pytest.fixture
def store():
    """Empty in-memory coordination store."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield SqlCoordinationStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def context(store):
    return ClusterContext(store=store, cluster_name="mycluster", admin_user="admin", pg_count=100)


@pytest.fixture
def ceph_factory():
    return MockConnectionFactory()


@pytest.fixture
def connector():
    return MockAdminConnector()


@pytest.fixture
def handler(context, connector, ceph_factory):
    return Handler(
        context,
        HandlerConfig(connector=connector, ceph_factory=ceph_factory, connect_attempts=3, retry_delay_seconds=0),
    )


@pytest.fixture
def client(handler):
    return TestClient(create_app(handler, start_background=False))
