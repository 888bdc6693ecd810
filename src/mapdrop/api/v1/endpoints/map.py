"""Map view endpoint."""

from fastapi import APIRouter

from mapdrop.schemas.message import MapMessage

from ..dependencies import MessageServiceDep, OptionalUserDep
from ..responses import unwrap

router = APIRouter(prefix="/map", tags=["map"])


@router.get("/messages", response_model=list[MapMessage])
async def map_messages(viewer: OptionalUserDep, service: MessageServiceDep) -> list[MapMessage]:
    """Today's messages with per-viewer read flags and the trending flag."""
    return unwrap(service.map_messages(viewer.id if viewer else None))
