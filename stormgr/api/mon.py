import logging

from fastapi import APIRouter, Depends

from stormgr.api.handler import Handler, failure_response, get_handler, model_response
from stormgr.ceph.mon import get_desired_monitors, get_mon_status
from stormgr.errors import CommandFailedError, ConnectionFailedError, MalformedStateError, StormgrError
from stormgr.schemas import MonitorsResponse, MonitorStatus

router = APIRouter(tags=["mon"])
logger = logging.getLogger(__name__)


def _live_status(handler: Handler) -> MonitorStatus:
    """Live quorum, or an empty status when no usable mon_status reply arrives."""
    try:
        with handler.connect() as conn:
            return get_mon_status(conn)
    except (ConnectionFailedError, CommandFailedError, MalformedStateError) as e:
        logger.warning(f"No usable mon_status, reporting empty quorum: {e}")
        return MonitorStatus()


@router.get("/mon")
def get_monitors(handler: Handler = Depends(get_handler)):
    """
    Live quorum and desired monitors, side by side and never merged.
    An unbootstrapped cluster is a valid state (empty status), not an error.
    """
    try:
        desired = get_desired_monitors(handler.context.store)
    except StormgrError as e:
        logger.error(f"Failed to load monitors: {e}")
        return failure_response()

    status = _live_status(handler)
    return model_response(MonitorsResponse(status=status, desired=desired))
