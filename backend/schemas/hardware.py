from typing import Any, Optional, Union

from pydantic import BaseModel


class HardwareLogCreate(BaseModel):
    uid: Optional[Any] = None
    value: Optional[Any] = None


class HardwareLogRead(BaseModel):
    id: int
    uid: str
    value: Union[int, float]
    created_at: str


class HardwareLogCreated(BaseModel):
    ok: bool
    data: HardwareLogRead
