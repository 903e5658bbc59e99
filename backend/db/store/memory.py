import asyncio
from typing import Dict, List, Optional

from core.errors import NotFoundError
from core.models import HardwareLogEntry, Lot, status_for, utcnow

from .base import StockStore


class MemoryStore(StockStore):
    """Process-local store. Everything is lost on restart."""

    mode = "memory"

    def __init__(self, timeout: Optional[float] = None):
        super().__init__(timeout)
        self._lots: Dict[str, Lot] = {}
        self._hardware_logs: List[HardwareLogEntry] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def _save_lot(self, lot: Lot) -> None:
        async with self._lock:
            self._lots[lot.uid] = lot.copy()

    async def _issue_from_lot(self, uid: str, qty: float, issued_by: str) -> float:
        async with self._lock:
            lot = self._lots.get(uid)
            if lot is None:
                raise NotFoundError("uid not found")
            lot.remaining_quantity = max(0.0, lot.remaining_quantity - qty)
            lot.status = status_for(lot.remaining_quantity)
            lot.last_issued_by = issued_by
            return lot.remaining_quantity

    async def _all_lots(self) -> List[Lot]:
        async with self._lock:
            return [lot.copy() for lot in self._lots.values()]

    async def _insert_hardware_log(self, uid: str, value: float) -> HardwareLogEntry:
        async with self._lock:
            entry = HardwareLogEntry(id=self._next_id, uid=uid, value=value, created_at=utcnow())
            self._next_id += 1
            self._hardware_logs.append(entry)
            return entry

    async def _recent_hardware_logs(self, limit: int) -> List[HardwareLogEntry]:
        async with self._lock:
            return list(reversed(self._hardware_logs[-limit:]))
