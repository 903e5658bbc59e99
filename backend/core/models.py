"""
Storage-independent records shared by both stock stores.

- Lot: one inventory batch keyed by the uid scanned from its RFID tag
- HardwareLogEntry: one telemetry sample sent by a device
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Literal, Optional

LotStatus = Literal["in-stock", "depleted"]

IN_STOCK: LotStatus = "in-stock"
DEPLETED: LotStatus = "depleted"

UNKNOWN_PERSON = "unknown"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def status_for(remaining_quantity: float) -> LotStatus:
    return DEPLETED if remaining_quantity <= 0 else IN_STOCK


@dataclass
class Lot:
    uid: str
    lot_code: str
    name: str
    remaining_quantity: float
    received_at: datetime
    status: LotStatus = IN_STOCK
    received_by: Optional[str] = None
    last_issued_by: Optional[str] = None

    def copy(self) -> "Lot":
        return replace(self)


@dataclass(frozen=True)
class HardwareLogEntry:
    id: int
    uid: str
    value: float
    created_at: datetime
