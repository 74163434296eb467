from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db
from services.order_service import OrderService
from utils.auth_dependency import CurrentUser, authorize

router = APIRouter(prefix="/wms", tags=["Warehouse Management"])

@router.put("/updateOrderStatus/{order_id}/{new_status}")
def update_order_status(
    order_id: int,
    new_status: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("wms.update_order_status"))
):
    order = OrderService.update_status(db, order_id, new_status, actor_id=current_user.id)
    return {
        "status": "success",
        "message": f"Order {order.id} status updated to {order.status.value}",
    }
