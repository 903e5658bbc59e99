from datetime import datetime, timezone
from typing import Dict, Optional

from core.models import DEPLETED, IN_STOCK, HardwareLogEntry, Lot

# Status labels shown to the web client and the scanner firmware
STATUS_LABELS = {
    IN_STOCK: "tồn kho",
    DEPLETED: "đã xuất hết",
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def as_number(value: float):
    """Render whole numbers without a trailing .0, like the JSON the scanners expect"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def lot_to_schema(lot: Lot) -> Dict:
    """Convert a Lot to the wire dict used by /api/stock"""
    return {
        "uid": lot.uid,
        "ma_lo": lot.lot_code,
        "ten": lot.name,
        "so_luong_con_lai": as_number(lot.remaining_quantity),
        "ngay_nhap": _iso(lot.received_at),
        "trang_thai": STATUS_LABELS[lot.status],
        "nguoi_nhap": lot.received_by,
        "nguoi_xuat_cuoi": lot.last_issued_by,
    }


def hardware_log_to_schema(entry: HardwareLogEntry) -> Dict:
    """Convert a HardwareLogEntry to the dict returned over HTTP and WebSocket"""
    return {
        "id": entry.id,
        "uid": entry.uid,
        "value": as_number(entry.value),
        "created_at": _iso(entry.created_at),
    }
