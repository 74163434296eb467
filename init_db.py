from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import Optional
from database import Base
from models.user import User, UserRole
from models.order import Order, OrderStatus, OrderPriority
from models.route import Route, DriverRoute, DriverStats
from services.auth_service import AuthService
from services.order_service import ESTIMATED_DELIVERY_WINDOW, tracking_number
from config import settings
import json
import logging

logger = logging.getLogger(__name__)

def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 string to naive UTC datetime"""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed

def _order_from_seed(record: dict) -> Order:
    coordinate = record["coordinate"]
    if isinstance(coordinate, dict):
        lat, lng = coordinate["lat"], coordinate["lng"]
    else:
        lat, lng = coordinate

    created_at = parse_timestamp(record.get("created_at")) or datetime.utcnow()
    status = OrderStatus(record.get("status", OrderStatus.PENDING.value))
    actual_delivery = parse_timestamp(record.get("actualDelivery"))
    if status == OrderStatus.DELIVERED and actual_delivery is None:
        actual_delivery = created_at
    elif status != OrderStatus.DELIVERED:
        actual_delivery = None

    return Order(
        id=record["id"],
        client_id=record["client_id"],
        product=record.get("product", ""),
        quantity=record.get("quantity", 1),
        status=status,
        priority=OrderPriority(record.get("priority", OrderPriority.STANDARD.value)),
        address=record.get("address", ""),
        coordinate_lat=lat,
        coordinate_lng=lng,
        route_id=record.get("route_id"),
        assigned_driver_id=record.get("assignedDriverId"),
        created_at=created_at,
        estimated_delivery=parse_timestamp(record.get("estimatedDelivery")) or created_at + ESTIMATED_DELIVERY_WINDOW,
        actual_delivery=actual_delivery,
        tracking_number=record.get("trackingNumber") or tracking_number(record["id"], created_at),
        sender_name=record.get("senderName"),
        sender_address=record.get("senderAddress"),
        recipient_name=record.get("recipientName"),
        recipient_phone=record.get("recipientPhone"),
        package_type=record.get("packageType"),
        weight=record.get("weight"),
        dimensions=record.get("dimensions"),
        delivery_notes=record.get("deliveryNotes"),
        pickup_location=record.get("pickupLocation"),
        driver_notes=record.get("driverNotes"),
    )

def load_seed(db: Session, document: dict) -> None:
    """Import a seed document with users, orders, driver_stats, driver_routes and routes arrays"""
    for record in document.get("routes", []):
        db.add(Route(
            id=record["id"],
            name=record["name"],
            description=record.get("description", ""),
            active=record.get("active", True)
        ))

    for record in document.get("users", []):
        AuthService.create_user(
            db=db,
            id=record["id"],
            username=record["username"],
            password=record["password"],
            role=UserRole(record["role"]),
            name=record["name"],
            email=record["email"],
            phone=record.get("phone"),
            vehicle=record.get("vehicle"),
            license_number=record.get("licenseNumber")
        )

    for record in document.get("orders", []):
        db.add(_order_from_seed(record))

    for record in document.get("driver_routes", []):
        db.add(DriverRoute(driver_id=record["driverId"], route_id=record["route_id"]))

    for record in document.get("driver_stats", []):
        db.add(DriverStats(
            driver_id=record["driverId"],
            estimated_distance=record.get("estimatedDistance", 0.0),
            total_deliveries=record.get("totalDeliveries", 0),
            success_rate=record.get("successRate", 0.0),
            average_delivery_time=record.get("averageDeliveryTime", 0.0)
        ))

    db.commit()

def init_database(engine, session_factory, seed_file: Optional[str] = None) -> bool:
    """Create tables and import the seed document into an empty database; True if seeded"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = session_factory()
    try:
        if db.query(User).first() is not None:
            logger.info("Database already seeded")
            return False

        path = seed_file or settings.seed_file
        with open(path, encoding="utf-8") as fh:
            document = json.load(fh)
        load_seed(db, document)
        logger.info(f"Seeded database from {path}")
        return True
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    from database import engine, SessionLocal
    logging.basicConfig(level=logging.INFO)
    init_database(engine, SessionLocal)
