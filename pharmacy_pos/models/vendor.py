from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from pharmacy_pos.db.base import Base


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    shop_address = Column(String(1000), default="")
    phone = Column(String(50), default="")
    email = Column(String(255), default="")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    medicines = relationship("Medicine", back_populates="vendor")
