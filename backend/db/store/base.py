"""
Storage contract shared by the in-memory and SQL stock stores.

Validation, limit clamping and the per-call timeout live here so both
variants apply exactly the same rules. Subclasses only implement the
underscored storage primitives.
"""

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from core.errors import BackendError, ValidationError
from core.models import IN_STOCK, UNKNOWN_PERSON, HardwareLogEntry, Lot, utcnow

logger = logging.getLogger(__name__)

DEFAULT_LOG_LIMIT = 50
MAX_LOG_LIMIT = 500


def _required_text(value: Any, field: str) -> str:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def _number(value: Any, field: str, positive: bool = False) -> float:
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    if positive and number <= 0:
        raise ValidationError(f"{field} must be > 0")
    return number


def _person(value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    return text or UNKNOWN_PERSON


def clamp_limit(limit: Any) -> int:
    """Parse a requested page size; fall back to 50 and clamp into [1, 500]."""
    try:
        n = int(str(limit).strip())
    except (TypeError, ValueError):
        return DEFAULT_LOG_LIMIT
    return max(1, min(n, MAX_LOG_LIMIT))


class StockStore(ABC):
    mode = "abstract"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    async def start(self) -> None:
        """Prepare the backing storage. Called once from the app lifespan."""

    async def close(self) -> None:
        pass

    async def _bounded(self, coro):
        try:
            return await asyncio.wait_for(coro, self.timeout)
        except asyncio.TimeoutError:
            logger.error("%s store call exceeded %ss", self.mode, self.timeout)
            raise BackendError("store call timed out")

    # ------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------
    async def record_lot(self, uid, lot_code, name, quantity, received_by=None) -> Lot:
        """Stock-in: create the lot for uid, replacing any previous one."""
        lot = Lot(
            uid=_required_text(uid, "uid"),
            lot_code=_required_text(lot_code, "ma_lo"),
            name=_required_text(name, "ten"),
            remaining_quantity=_number(quantity, "so_luong", positive=True),
            received_at=utcnow(),
            status=IN_STOCK,
            received_by=_person(received_by),
        )
        await self._bounded(self._save_lot(lot))
        return lot

    async def adjust_lot_quantity(self, uid, qty, issued_by=None) -> float:
        """Stock-out: decrement the lot, floored at zero. Returns what remains."""
        uid = _required_text(uid, "uid")
        qty = _number(qty, "qty", positive=True)
        return await self._bounded(self._issue_from_lot(uid, qty, _person(issued_by)))

    async def list_lots(self) -> List[Lot]:
        return await self._bounded(self._all_lots())

    async def append_hardware_log(self, uid, value) -> HardwareLogEntry:
        uid = _required_text(uid, "uid")
        value = _number(value, "value")
        return await self._bounded(self._insert_hardware_log(uid, value))

    async def list_hardware_logs(self, limit=None) -> List[HardwareLogEntry]:
        """Most recent entries first, at most clamp_limit(limit) of them."""
        return await self._bounded(self._recent_hardware_logs(clamp_limit(limit)))

    # ------------------------------------------------------------
    # Storage primitives
    # ------------------------------------------------------------
    @abstractmethod
    async def _save_lot(self, lot: Lot) -> None:
        ...

    @abstractmethod
    async def _issue_from_lot(self, uid: str, qty: float, issued_by: str) -> float:
        """Must raise NotFoundError for an unknown uid without creating a lot."""

    @abstractmethod
    async def _all_lots(self) -> List[Lot]:
        ...

    @abstractmethod
    async def _insert_hardware_log(self, uid: str, value: float) -> HardwareLogEntry:
        ...

    @abstractmethod
    async def _recent_hardware_logs(self, limit: int) -> List[HardwareLogEntry]:
        ...
