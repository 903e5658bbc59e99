from typing import Any, List, Optional, Union

from pydantic import BaseModel

# Request fields accept any JSON value; the store turns missing or malformed
# values into ValidationError (400).


class LotCreate(BaseModel):
    uid: Optional[Any] = None
    ma_lo: Optional[Any] = None
    ten: Optional[Any] = None
    so_luong: Optional[Any] = None
    nguoi: Optional[Any] = None


class LotIssue(BaseModel):
    uid: Optional[Any] = None
    qty: Optional[Any] = None
    nguoi: Optional[Any] = None


class LotRead(BaseModel):
    uid: str
    ma_lo: str
    ten: str
    so_luong_con_lai: Union[int, float]
    ngay_nhap: str
    trang_thai: str
    nguoi_nhap: Optional[str] = None
    nguoi_xuat_cuoi: Optional[str] = None


class OkResponse(BaseModel):
    ok: bool
    message: Optional[str] = None


class IssueResponse(BaseModel):
    ok: bool
    remain: Union[int, float]


class StockResponse(BaseModel):
    ok: bool
    data: List[LotRead]
