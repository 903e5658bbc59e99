import logging
from typing import List, Optional

from sqlalchemy import case, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from core.errors import BackendError, NotFoundError
from core.models import DEPLETED, IN_STOCK, HardwareLogEntry, Lot
from db.database import create_db_and_tables
from db.hardware_log import HardwareLog as HardwareLogModel
from db.lot import Lot as LotModel

from .base import StockStore

logger = logging.getLogger(__name__)

# Dialect-specific INSERT constructs that support ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _row_to_lot(row) -> Lot:
    return Lot(
        uid=row.uid,
        lot_code=row.lot_code,
        name=row.name,
        remaining_quantity=float(row.remaining_quantity),
        received_at=row.received_at,
        status=row.status,
        received_by=row.received_by,
        last_issued_by=row.last_issued_by,
    )


def _row_to_entry(row) -> HardwareLogEntry:
    return HardwareLogEntry(
        id=int(row.id),
        uid=row.uid,
        value=float(row.value) if row.value is not None else None,
        created_at=row.created_at,
    )


class SqlStore(StockStore):
    """Relational store backed by a pooled SQLAlchemy async engine."""

    mode = "sql"

    def __init__(self, engine: AsyncEngine, timeout: Optional[float] = None):
        super().__init__(timeout)
        dialect = engine.dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise ValueError(f"Unsupported database dialect: {dialect}")
        self.engine = engine
        self._upsert_insert = _UPSERT_INSERTS[dialect]

    async def start(self) -> None:
        # CREATE TABLE IF NOT EXISTS for lots and hardware_logs
        await create_db_and_tables(self.engine)

    async def close(self) -> None:
        await self.engine.dispose()

    async def _execute(self, stmt) -> list:
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return result.fetchall() if result.returns_rows else []
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Database statement failed")
            raise BackendError() from e

    async def _save_lot(self, lot: Lot) -> None:
        lot_tbl = LotModel.__table__
        values = {
            "uid": lot.uid,
            "lot_code": lot.lot_code,
            "name": lot.name,
            "remaining_quantity": lot.remaining_quantity,
            "received_at": lot.received_at,
            "status": lot.status,
            "received_by": lot.received_by,
            "last_issued_by": lot.last_issued_by,
        }
        stmt = self._upsert_insert(lot_tbl).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[lot_tbl.c.uid],
            set_={k: stmt.excluded[k] for k in values if k != "uid"},
        )
        await self._execute(stmt)

    async def _issue_from_lot(self, uid: str, qty: float, issued_by: str) -> float:
        # Single statement: decrement and clamp at zero without a read/write race
        lot_tbl = LotModel.__table__
        after = lot_tbl.c.remaining_quantity - qty
        stmt = (
            update(lot_tbl)
            .where(lot_tbl.c.uid == uid)
            .values(
                remaining_quantity=case((after <= 0, 0.0), else_=after),
                status=case((after <= 0, DEPLETED), else_=IN_STOCK),
                last_issued_by=issued_by,
            )
            .returning(lot_tbl.c.remaining_quantity)
        )
        rows = await self._execute(stmt)
        if not rows:
            raise NotFoundError("uid not found")
        return float(rows[0].remaining_quantity)

    async def _all_lots(self) -> List[Lot]:
        lot_tbl = LotModel.__table__
        rows = await self._execute(select(lot_tbl).order_by(lot_tbl.c.uid))
        return [_row_to_lot(r) for r in rows]

    async def _insert_hardware_log(self, uid: str, value: float) -> HardwareLogEntry:
        log_tbl = HardwareLogModel.__table__
        stmt = (
            insert(log_tbl)
            .values(uid=uid, value=value)
            .returning(log_tbl.c.id, log_tbl.c.uid, log_tbl.c.value, log_tbl.c.created_at)
        )
        rows = await self._execute(stmt)
        return _row_to_entry(rows[0])

    async def _recent_hardware_logs(self, limit: int) -> List[HardwareLogEntry]:
        log_tbl = HardwareLogModel.__table__
        stmt = (
            select(log_tbl.c.id, log_tbl.c.uid, log_tbl.c.value, log_tbl.c.created_at)
            .order_by(log_tbl.c.id.desc())
            .limit(limit)
        )
        rows = await self._execute(stmt)
        return [_row_to_entry(r) for r in rows]
