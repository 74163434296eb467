from sqlalchemy import Column, Integer, Float, String, Boolean, ForeignKey
from database import Base

class Route(Base):
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")
    active = Column(Boolean, nullable=False, default=True)

class DriverRoute(Base):
    """Catalog route a driver currently runs"""
    __tablename__ = "driver_routes"

    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)

class DriverStats(Base):
    """Historical delivery figures per driver"""
    __tablename__ = "driver_stats"

    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    estimated_distance = Column(Float, nullable=False, default=0.0)
    total_deliveries = Column(Integer, nullable=False, default=0)
    success_rate = Column(Float, nullable=False, default=0.0)
    average_delivery_time = Column(Float, nullable=False, default=0.0)
