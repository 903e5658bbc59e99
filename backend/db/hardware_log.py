from sqlalchemy import Column, DateTime, Float, Integer, Text
from sqlalchemy.sql import func

from .database import Base


class HardwareLog(Base):
    __tablename__ = "hardware_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uid = Column(Text, nullable=False)
    value = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
