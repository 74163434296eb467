from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional
from models.user import User, UserRole
from models.order import OrderStatus
from models.route import DriverRoute, DriverStats
from services.order_service import OrderService
from utils.distance import path_length
from utils.errors import NotFound

ROUTE_ALGORITHM_LABEL = "nearest_neighbor"

class DriverService:
    @staticmethod
    def get_driver(db: Session, driver_id: int) -> User:
        driver = db.query(User).filter(User.id == driver_id, User.role == UserRole.DRIVER).first()
        if driver is None:
            raise NotFound(f"Driver {driver_id} not found")
        return driver

    @staticmethod
    def route_id_for(db: Session, driver_id: int) -> Optional[int]:
        assignment = db.query(DriverRoute).filter(DriverRoute.driver_id == driver_id).first()
        return assignment.route_id if assignment else None

    @staticmethod
    def open_stops(db: Session, driver_id: int):
        return [
            o for o in OrderService.list_by_driver_and_status(db, driver_id)
            if not o.status.is_terminal
        ]

    @staticmethod
    def route_summary(db: Session, driver_id: int) -> dict:
        """
        Stop list for the driver's remaining deliveries.

        Stops stay in store order; no optimization is performed. The
        distance is the straight-line length of the path through them.
        """
        DriverService.get_driver(db, driver_id)
        stops = DriverService.open_stops(db, driver_id)
        distance = path_length((o.coordinate_lat, o.coordinate_lng) for o in stops)

        return {
            "status": "success",
            "message": f"Route retrieved for driver {driver_id}",
            "optimization_summary": {
                "total_orders": len(stops),
                "total_distance_km": round(distance, 2),
                "algorithm_used": ROUTE_ALGORITHM_LABEL,
            },
            "optimized_route": {
                "orders": [
                    {
                        "order_id": o.id,
                        "address": o.address,
                        "coordinate": {"lat": o.coordinate_lat, "lng": o.coordinate_lng},
                    }
                    for o in stops
                ]
            },
        }

    @staticmethod
    def stats(db: Session, driver_id: int) -> dict:
        """Live order counters merged with the driver's historical figures"""
        DriverService.get_driver(db, driver_id)
        assigned = OrderService.list_by_driver_and_status(db, driver_id)
        today = datetime.utcnow().date()

        history = db.query(DriverStats).filter(DriverStats.driver_id == driver_id).first()

        return {
            "driverId": driver_id,
            "date": today.isoformat(),
            "assignedOrders": sum(1 for o in assigned if not o.status.is_terminal),
            "completedToday": sum(
                1 for o in assigned
                if o.status == OrderStatus.DELIVERED
                and o.actual_delivery is not None
                and o.actual_delivery.date() == today
            ),
            "pendingPickups": sum(1 for o in assigned if o.status == OrderStatus.PENDING),
            "estimatedDistance": history.estimated_distance if history else 0.0,
            "totalDeliveries": history.total_deliveries if history else 0,
            "successRate": history.success_rate if history else 0.0,
            "averageDeliveryTime": history.average_delivery_time if history else 0.0,
        }
