"""
API service entrypoint.

create_app wires the routers around an injected Handler; create_app_from_env
builds the production Handler (SQL-backed store, restful ceph connections)
from environment configuration and is what uvicorn loads.
"""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError

from stormgr.api import image, metrics, mon, node, pool
from stormgr.api.handler import Handler, HandlerConfig
from stormgr.ceph.admin import AdminConnector
from stormgr.ceph.restful import RestfulConnectionFactory
from stormgr.config import (
    ADMIN_USER,
    API_PORT,
    BIND_HOST,
    CEPH_RESTFUL_URL,
    CLUSTER_NAME,
    DEFAULT_PG_COUNT,
    METRICS_RETRY_DELAY_SECONDS,
    STORE_URL,
)
from stormgr.context import ClusterContext
from stormgr.database import init_db, make_engine, make_session_factory
from stormgr.metrics import MetricsRegistrar
from stormgr.startup_profile import StartupProfile, validate_api_profile
from stormgr.store import SqlCoordinationStore

logger = logging.getLogger(__name__)


def create_app(handler: Handler, start_background: bool = True) -> FastAPI:
    app = FastAPI(title="stormgr control plane")
    app.state.handler = handler
    app.state.metrics_registrar = None

    app.include_router(node.router)
    app.include_router(mon.router)
    app.include_router(pool.router)
    app.include_router(image.router)
    app.include_router(metrics.router)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        # malformed bodies fail like every other request: 500, empty body
        logger.error(f"Rejected request to {request.url.path}: {exc.errors()}")
        return Response(status_code=500)

    if start_background:
        @app.on_event("startup")
        def start_metrics_registration():
            registrar = MetricsRegistrar(handler.register_metrics, METRICS_RETRY_DELAY_SECONDS)
            registrar.start()
            app.state.metrics_registrar = registrar

        @app.on_event("shutdown")
        def stop_metrics_registration():
            if app.state.metrics_registrar:
                app.state.metrics_registrar.stop()
            logger.info("stormgr API shutdown complete")

    return app


def create_app_from_env() -> FastAPI:
    validate_api_profile(StartupProfile(role="API", host=BIND_HOST, port=API_PORT), CEPH_RESTFUL_URL)

    engine = make_engine(STORE_URL)
    init_db(engine)
    store = SqlCoordinationStore(make_session_factory(engine))

    context = ClusterContext(store=store, cluster_name=CLUSTER_NAME, admin_user=ADMIN_USER, pg_count=DEFAULT_PG_COUNT)
    handler = Handler(context, HandlerConfig(connector=AdminConnector(), ceph_factory=RestfulConnectionFactory()))

    logger.info(f"stormgr API configured: store={STORE_URL}, ceph={CEPH_RESTFUL_URL}, user={ADMIN_USER}")
    return create_app(handler)
