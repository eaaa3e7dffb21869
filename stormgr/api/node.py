import logging

from fastapi import APIRouter, Depends

from stormgr.api.handler import Handler, failure_response, get_handler, list_response
from stormgr.errors import StormgrError
from stormgr.inventory.nodes import list_nodes
from stormgr.schemas import Node

router = APIRouter(tags=["node"])
logger = logging.getLogger(__name__)


@router.get("/node")
def get_nodes(handler: Handler = Depends(get_handler)):
    """All discovered nodes with their aggregate storage; [] when none."""
    try:
        nodes = list_nodes(handler.context, handler.config.heartbeat_timeout_seconds)
    except StormgrError as e:
        logger.error(f"Failed to load nodes: {e}")
        return failure_response()

    return list_response(nodes, Node)
