from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from stormgr.api.handler import Handler, get_handler

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
def get_metrics(handler: Handler = Depends(get_handler)):
    return Response(content=generate_latest(handler.registry), media_type=CONTENT_TYPE_LATEST)
