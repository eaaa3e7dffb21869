import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from stormgr.api.handler import Handler, failure_response, get_handler, list_response
from stormgr.errors import StormgrError
from stormgr.pools import create_pool as create_cluster_pool
from stormgr.pools import list_pools, validate_pool
from stormgr.schemas import Pool

router = APIRouter(tags=["pool"])
logger = logging.getLogger(__name__)


@router.get("/pool")
def get_pools(handler: Handler = Depends(get_handler)):
    """Pools in cluster order; any failing command fails the whole listing."""
    try:
        with handler.connect() as conn:
            pools = list_pools(conn)
    except StormgrError as e:
        logger.error(f"Failed to list pools: {e}")
        return failure_response()

    return list_response(pools, Pool)


def _create(handler: Handler, pool: Pool) -> str:
    with handler.connect() as conn:
        return create_cluster_pool(conn, pool, handler.context.pg_count)


@router.post("/pool")
async def create_pool(request: Request, handler: Handler = Depends(get_handler)):
    """
    Create a pool; responds with the cluster's confirmation text.

    The body is decoded as JSON whatever Content-Type the client sent.
    """
    body = await request.body()
    try:
        pool = Pool.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Rejected pool request: {e.error_count()} errors")
        return failure_response()

    try:
        # reject malformed requests before opening a connection
        validate_pool(pool)
        info = await run_in_threadpool(_create, handler, pool)
    except StormgrError as e:
        logger.error(f"Failed to create pool {pool.pool_name!r}: {e}")
        return failure_response()

    logger.info(f"Pool {pool.pool_name} created: {info}")
    return PlainTextResponse(info)
