from sqlalchemy.orm import Session
from sqlalchemy import func
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from models.order import Order, OrderStatus
from models.route import Route
from schemas import OrderInput, OrderPatch
from utils.errors import ValidationFailed, NotFound, InvalidStatusValue, InvalidStatusTransition, RoleForbidden
from utils.logger import DatabaseLogger
from config import settings
import threading
import logging

logger = logging.getLogger(__name__)

ESTIMATED_DELIVERY_WINDOW = timedelta(hours=24)
STATUS_FILTER_ALL = "all"

# Single writer for every order mutation in this process
_write_lock = threading.Lock()

@contextmanager
def _writer(db: Session):
    with _write_lock:
        try:
            yield
            db.commit()
        except Exception:
            db.rollback()
            raise

def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatusValue(value, OrderStatus.values())

def tracking_number(order_id: int, created_at: datetime) -> str:
    epoch_ms = int(created_at.replace(tzinfo=timezone.utc).timestamp() * 1000)
    return f"TRK-{order_id:03d}-{epoch_ms}"

class OrderService:
    @staticmethod
    def create_order(db: Session, client_id: int, order_input: Optional[OrderInput]) -> Order:
        """Append a new pending order for the customer"""
        if order_input is None or order_input.coordinate is None:
            raise ValidationFailed("Order data with coordinate is required")

        if order_input.route is not None and db.get(Route, order_input.route) is None:
            raise NotFound(f"Route {order_input.route} not found")

        with _writer(db):
            next_id = (db.query(func.max(Order.id)).scalar() or 0) + 1
            now = datetime.utcnow()
            order = Order(
                id=next_id,
                client_id=client_id,
                product=order_input.product,
                quantity=order_input.quantity,
                status=OrderStatus.PENDING,
                priority=order_input.priority,
                address=order_input.address,
                coordinate_lat=order_input.coordinate.lat,
                coordinate_lng=order_input.coordinate.lng,
                route_id=order_input.route,
                assigned_driver_id=None,
                created_at=now,
                estimated_delivery=now + ESTIMATED_DELIVERY_WINDOW,
                actual_delivery=None,
                tracking_number=tracking_number(next_id, now),
                sender_name=order_input.senderName,
                sender_address=order_input.senderAddress,
                recipient_name=order_input.recipientName,
                recipient_phone=order_input.recipientPhone,
                package_type=order_input.packageType,
                weight=order_input.weight,
                dimensions=order_input.dimensions,
                delivery_notes=order_input.deliveryNotes,
                pickup_location=order_input.pickupLocation,
            )
            db.add(order)
            DatabaseLogger.log_activity(
                db,
                action="order_created",
                user_id=client_id,
                description=f"Order {order.tracking_number} created",
                entity_type="order",
                entity_id=next_id
            )

        db.refresh(order)
        logger.info(f"Order {order.id} created for customer {client_id}")
        return order

    @staticmethod
    def get_order(db: Session, order_id: int) -> Order:
        order = db.query(Order).filter(Order.id == order_id).populate_existing().first()
        if order is None:
            raise NotFound(f"Order {order_id} not found")
        return order

    @staticmethod
    def list_by_customer(db: Session, client_id: int) -> List[Order]:
        return db.query(Order).filter(Order.client_id == client_id).order_by(Order.id).all()

    @staticmethod
    def list_by_driver_and_status(db: Session, driver_id: int, status: Optional[str] = None) -> List[Order]:
        """Orders assigned to the driver, optionally narrowed to one status"""
        query = db.query(Order).filter(Order.assigned_driver_id == driver_id)
        if status and status != STATUS_FILTER_ALL:
            query = query.filter(Order.status == parse_status(status))
        return query.order_by(Order.id).all()

    @staticmethod
    def _apply_status(order: Order, status: OrderStatus) -> bool:
        """Set status and keep actual_delivery in step; True when something changed"""
        current = order.status
        if settings.strict_status_transitions and not current.can_transition_to(status):
            raise InvalidStatusTransition(current.value, status.value)

        if status == OrderStatus.DELIVERED:
            if current == OrderStatus.DELIVERED and order.actual_delivery is not None:
                return False
            order.actual_delivery = datetime.utcnow()
        else:
            order.actual_delivery = None

        order.status = status
        return current != status

    @staticmethod
    def update_status(db: Session, order_id: int, new_status: str, actor_id: Optional[int] = None) -> Order:
        status = parse_status(new_status)

        with _writer(db):
            order = OrderService.get_order(db, order_id)
            previous = order.status
            if OrderService._apply_status(order, status):
                DatabaseLogger.log_activity(
                    db,
                    action="status_updated",
                    user_id=actor_id,
                    description=f"Order {order_id} status {previous.value} -> {status.value}",
                    entity_type="order",
                    entity_id=order_id
                )

        db.refresh(order)
        logger.info(f"Order {order_id} status set to {status.value}")
        return order

    @staticmethod
    def patch_fields(
        db: Session,
        order_id: int,
        patch: OrderPatch,
        actor_id: Optional[int] = None,
        restrict_to_driver: Optional[int] = None
    ) -> Order:
        """Shallow merge of driver-editable fields into an order"""
        status = parse_status(patch.status) if patch.status is not None else None

        with _writer(db):
            order = OrderService.get_order(db, order_id)
            if restrict_to_driver is not None and order.assigned_driver_id != restrict_to_driver:
                raise RoleForbidden("Order is not assigned to this driver")

            changed = []
            if status is not None and OrderService._apply_status(order, status):
                changed.append("status")
            if patch.driverNotes is not None and patch.driverNotes != order.driver_notes:
                order.driver_notes = patch.driverNotes
                changed.append("driverNotes")

            if changed:
                DatabaseLogger.log_activity(
                    db,
                    action="order_patched",
                    user_id=actor_id,
                    description=f"Order {order_id} fields updated",
                    entity_type="order",
                    entity_id=order_id,
                    details={"fields": changed}
                )

        db.refresh(order)
        return order
