import enum

from sqlalchemy import Column, Integer, String, Boolean, Enum
from pharmacy_pos.db.base import Base


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    BILLER = "biller"


class User(Base):
    __tablename__ = "users"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(120), nullable=False)
    email = Column(String(191), unique=True,
                   nullable=False)  # <= 191 for utf8mb4 unique index
    role = Column(Enum(UserRole,
                       values_callable=lambda e: [m.value for m in e]),
                  nullable=False,
                  default=UserRole.BILLER)
    is_active = Column(Boolean, default=True, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
