from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db
from schemas import OrderPatch, serialize_order
from services.order_service import OrderService
from services.driver_service import DriverService
from utils.auth_dependency import CurrentUser, authorize, ensure_driver_scope
from config import settings

router = APIRouter(prefix="/api/driver", tags=["Driver"])

@router.patch("/orders/{order_id}")
def patch_order(
    order_id: int,
    patch: OrderPatch,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("driver.patch_order"))
):
    restrict_to = current_user.id if settings.bind_driver_identity else None
    order = OrderService.patch_fields(
        db, order_id, patch,
        actor_id=current_user.id,
        restrict_to_driver=restrict_to
    )
    return {
        "status": "success",
        "message": f"Order {order.id} updated",
        "order": serialize_order(order),
    }

@router.get("/stats/{driver_id}")
def get_driver_stats(
    driver_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("driver.stats"))
):
    ensure_driver_scope(current_user, driver_id)
    return DriverService.stats(db, driver_id)
