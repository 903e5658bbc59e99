import logging

from fastapi import APIRouter, Depends

from core.converters import as_number, lot_to_schema
from core.deps import get_store
from db.store import StockStore
from schemas.stock import IssueResponse, LotCreate, LotIssue, OkResponse, StockResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/add", response_model=OkResponse, response_model_exclude_none=True)
async def stock_in(payload: LotCreate, store: StockStore = Depends(get_store)):
    """Receive a lot scanned at the warehouse door"""
    lot = await store.record_lot(
        uid=payload.uid,
        lot_code=payload.ma_lo,
        name=payload.ten,
        quantity=payload.so_luong,
        received_by=payload.nguoi,
    )
    logger.info("Stock in: uid=%s lot=%s qty=%s by=%s", lot.uid, lot.lot_code, lot.remaining_quantity, lot.received_by)
    return OkResponse(ok=True)


@router.post("/out", response_model=IssueResponse)
async def stock_out(payload: LotIssue, store: StockStore = Depends(get_store)):
    remain = await store.adjust_lot_quantity(uid=payload.uid, qty=payload.qty, issued_by=payload.nguoi)
    logger.info("Stock out: uid=%s qty=%s remain=%s", payload.uid, payload.qty, remain)
    return IssueResponse(ok=True, remain=as_number(remain))


@router.get("/stock", response_model=StockResponse)
async def list_stock(store: StockStore = Depends(get_store)):
    lots = await store.list_lots()
    return {"ok": True, "data": [lot_to_schema(lot) for lot in lots]}
