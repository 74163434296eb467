from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
from database import Base
import enum

class UserRole(str, enum.Enum):
    CUSTOMER = "customer"
    DRIVER = "driver"

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True, autoincrement=False)
    username: Mapped[str] = mapped_column(String(150), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(SQLEnum(UserRole), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False)

    # Driver profile
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    vehicle: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    license_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    def profile(self) -> dict:
        """Public profile, safe to embed in tokens and responses"""
        data = {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }
        if self.phone is not None:
            data["phone"] = self.phone
        if self.vehicle is not None:
            data["vehicle"] = self.vehicle
        if self.license_number is not None:
            data["licenseNumber"] = self.license_number
        return data
