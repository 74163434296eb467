from sqlalchemy import Column, Integer, Float, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from datetime import datetime
from database import Base
import enum

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    LOADED = "loaded"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls):
        return [s.value for s in cls]

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Forward-only lifecycle; cancelled is reachable from any open state"""
        if target == self:
            return True
        if self.is_terminal:
            return False
        if target == OrderStatus.CANCELLED:
            return True
        return FORWARD_TRANSITIONS.get(self) == target

FORWARD_TRANSITIONS = {
    OrderStatus.PENDING: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.LOADED,
    OrderStatus.LOADED: OrderStatus.DELIVERED,
}

class OrderPriority(str, enum.Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    URGENT = "urgent"

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    status = Column(SQLEnum(OrderStatus), default=OrderStatus.PENDING, nullable=False, index=True)
    priority = Column(SQLEnum(OrderPriority), default=OrderPriority.STANDARD, nullable=False)
    address = Column(String(500), nullable=False, default="")
    coordinate_lat = Column(Float, nullable=False)
    coordinate_lng = Column(Float, nullable=False)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=True)
    assigned_driver_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    estimated_delivery = Column(DateTime, nullable=False)
    actual_delivery = Column(DateTime, nullable=True)
    tracking_number = Column(String(64), unique=True, nullable=False)

    # Descriptive fields captured at creation
    sender_name = Column(String(200), nullable=True)
    sender_address = Column(String(500), nullable=True)
    recipient_name = Column(String(200), nullable=True)
    recipient_phone = Column(String(30), nullable=True)
    package_type = Column(String(100), nullable=True)
    weight = Column(Float, nullable=True)
    dimensions = Column(String(100), nullable=True)
    delivery_notes = Column(Text, nullable=True)
    pickup_location = Column(String(500), nullable=True)

    driver_notes = Column(Text, nullable=True)
