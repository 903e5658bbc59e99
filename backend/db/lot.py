from sqlalchemy import Column, DateTime, Float, String, Text

from .database import Base


class Lot(Base):
    __tablename__ = "lots"

    uid = Column(String, primary_key=True)
    lot_code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    remaining_quantity = Column(Float, nullable=False, default=0)
    received_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(Text, nullable=False, default="in-stock")  # 'in-stock' | 'depleted'
    received_by = Column(String, nullable=True)
    last_issued_by = Column(String, nullable=True)
