import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from core.converters import hardware_log_to_schema
from core.deps import get_broadcaster, get_store, require_device_key
from core.errors import ValidationError
from core.realtime import HardwareLogBroadcaster
from db.store import StockStore
from schemas.hardware import HardwareLogCreate, HardwareLogCreated, HardwareLogRead

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_log_payload(request: Request) -> HardwareLogCreate:
    # Runs after require_device_key, so a bad key answers 401 whatever the body
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("invalid JSON body")
    if not isinstance(body, dict):
        raise ValidationError("missing fields")
    return HardwareLogCreate.model_validate(body)


@router.post(
    "/logs",
    response_model=HardwareLogCreated,
    dependencies=[Depends(require_device_key)],
)
async def ingest_hardware_log(
    request: Request,
    store: StockStore = Depends(get_store),
    broadcaster: HardwareLogBroadcaster = Depends(get_broadcaster),
):
    """Store one telemetry sample from a device and push it to live viewers"""
    payload = await _read_log_payload(request)
    entry = await store.append_hardware_log(uid=payload.uid, value=payload.value)
    data = hardware_log_to_schema(entry)
    logger.debug("Hardware log %s from %s: %s", entry.id, entry.uid, entry.value)

    # The sample is stored at this point; broadcast problems stay server-side
    await broadcaster.publish_hardware_log(data)
    return {"ok": True, "data": data}


@router.get("/logs", response_model=List[HardwareLogRead])
async def list_hardware_logs(
    limit: Optional[str] = Query(None),
    store: StockStore = Depends(get_store),
):
    entries = await store.list_hardware_logs(limit)
    return [hardware_log_to_schema(e) for e in entries]
