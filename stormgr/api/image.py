import logging

from fastapi import APIRouter, Depends

from stormgr.access import get_client_access_info
from stormgr.api.handler import Handler, failure_response, get_handler, model_response
from stormgr.errors import StormgrError

router = APIRouter(prefix="/image", tags=["image"])
logger = logging.getLogger(__name__)


@router.post("/mapinfo")
def get_image_map_info(handler: Handler = Depends(get_handler)):
    """Monitor addresses, user name and secret a client needs to map an image."""
    try:
        with handler.connect() as conn:
            info = get_client_access_info(conn, handler.context.admin_user)
    except StormgrError as e:
        logger.error(f"Failed to resolve client access info: {e}")
        return failure_response()

    return model_response(info)
