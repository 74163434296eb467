from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from database import get_db
from schemas import LoginRequest, NewOrderRequest, serialize_order, serialize_orders
from services.auth_service import AuthService
from services.order_service import OrderService, STATUS_FILTER_ALL
from services.driver_service import DriverService
from utils.auth_dependency import CurrentUser, authorize, ensure_driver_scope
from utils.errors import ValidationFailed

router = APIRouter(prefix="/cms", tags=["Customer Management"])

@router.post("/login")
def login(request: LoginRequest, db: Session = Depends(get_db)):
    if not request.username or not request.password:
        raise ValidationFailed("Username and password are required")

    token, user = AuthService.login(db, request.username, request.password)
    return {
        "status": "success",
        "message": "Login successful",
        "accessToken": token,
        "tokenType": "bearer",
        "expiresIn": AuthService.token_lifetime_seconds(),
        "user": user.profile(),
    }

@router.get("/getOrdersByCustomer")
def get_orders_by_customer(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("cms.orders_by_customer"))
):
    orders = OrderService.list_by_customer(db, current_user.id)
    return {"response": {"status": "success", "orders": serialize_orders(orders)}}

@router.post("/new-order", status_code=201)
def create_order(
    request: NewOrderRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("cms.new_order"))
):
    order = OrderService.create_order(db, current_user.id, request.order)
    return {
        "response": {
            "status": "success",
            "message": "Order created successfully",
            "order": serialize_order(order),
        }
    }

@router.get("/getOrderByDriverAndStatus")
def get_orders_by_driver_and_status(
    driverId: Optional[int] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("cms.orders_by_driver"))
):
    if driverId is None:
        raise ValidationFailed("driverId query parameter is required")
    ensure_driver_scope(current_user, driverId)
    DriverService.get_driver(db, driverId)

    orders = OrderService.list_by_driver_and_status(db, driverId, status)
    return {
        "response": {
            "driver_id": driverId,
            "route_id": DriverService.route_id_for(db, driverId),
            "status": status or STATUS_FILTER_ALL,
            "orders": {"order": serialize_orders(orders)},
        }
    }
