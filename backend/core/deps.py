import hmac
from typing import Optional

from fastapi import Depends, Header, Request

from core.config import Settings
from core.errors import AuthError
from core.realtime import HardwareLogBroadcaster
from db.store import StockStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> StockStore:
    return request.app.state.store


def get_broadcaster(request: Request) -> HardwareLogBroadcaster:
    return request.app.state.broadcaster


async def require_device_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Shared-secret check for devices posting hardware logs"""
    expected = (settings.device_key or "").encode()
    given = (x_api_key or "").encode()
    if not expected or not hmac.compare_digest(given, expected):
        raise AuthError("API key invalid")
