"""
Request and response schemas shared by the ESB routers.

Field names follow the wire format the courier frontend expects, which mixes
snake_case (client_id, created_at) and camelCase (trackingNumber).
"""
from pydantic import BaseModel, ConfigDict, Field, validator
from typing import Optional, List
from datetime import datetime
from models.order import Order, OrderStatus, OrderPriority

class Coordinate(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

class OrderInput(BaseModel):
    product: str = Field(..., min_length=1, max_length=500)
    quantity: int = Field(1, ge=1)
    address: str = Field("", max_length=500)
    coordinate: Optional[Coordinate] = None
    route: Optional[int] = None
    priority: OrderPriority = OrderPriority.STANDARD
    weight: Optional[float] = Field(None, ge=0)
    dimensions: Optional[str] = Field(None, max_length=100)
    deliveryNotes: Optional[str] = None
    senderName: Optional[str] = None
    senderAddress: Optional[str] = None
    recipientName: Optional[str] = None
    recipientPhone: Optional[str] = None
    packageType: Optional[str] = None
    pickupLocation: Optional[str] = None

    @validator('coordinate', pre=True)
    def parse_coordinate(cls, v):
        # The frontend posts [lat, lng]; {lat, lng} is accepted too
        if isinstance(v, (list, tuple)):
            if len(v) != 2:
                raise ValueError('Coordinate must be a [lat, lng] pair')
            return {"lat": v[0], "lng": v[1]}
        return v

class NewOrderRequest(BaseModel):
    order: Optional[OrderInput] = None

class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

class OrderPatch(BaseModel):
    """Driver-editable fields; anything else in the body is ignored"""
    status: Optional[str] = None
    driverNotes: Optional[str] = None

class OrderResponse(BaseModel):
    id: int
    client_id: int
    product: str
    quantity: int
    status: OrderStatus
    priority: OrderPriority
    address: str
    coordinate: Coordinate
    route_id: Optional[int] = None
    assignedDriverId: Optional[int] = None
    created_at: datetime
    estimatedDelivery: datetime
    actualDelivery: Optional[datetime] = None
    trackingNumber: str
    senderName: Optional[str] = None
    senderAddress: Optional[str] = None
    recipientName: Optional[str] = None
    recipientPhone: Optional[str] = None
    packageType: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[str] = None
    deliveryNotes: Optional[str] = None
    pickupLocation: Optional[str] = None
    driverNotes: Optional[str] = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            client_id=order.client_id,
            product=order.product,
            quantity=order.quantity,
            status=order.status,
            priority=order.priority,
            address=order.address,
            coordinate=Coordinate(lat=order.coordinate_lat, lng=order.coordinate_lng),
            route_id=order.route_id,
            assignedDriverId=order.assigned_driver_id,
            created_at=order.created_at,
            estimatedDelivery=order.estimated_delivery,
            actualDelivery=order.actual_delivery,
            trackingNumber=order.tracking_number,
            senderName=order.sender_name,
            senderAddress=order.sender_address,
            recipientName=order.recipient_name,
            recipientPhone=order.recipient_phone,
            packageType=order.package_type,
            weight=order.weight,
            dimensions=order.dimensions,
            deliveryNotes=order.delivery_notes,
            pickupLocation=order.pickup_location,
            driverNotes=order.driver_notes,
        )

class RouteResponse(BaseModel):
    id: int
    name: str
    description: str
    active: bool

    model_config = ConfigDict(from_attributes=True)

def serialize_orders(orders: List[Order]) -> List[dict]:
    return [OrderResponse.from_order(o).model_dump(mode="json") for o in orders]

def serialize_order(order: Order) -> dict:
    return OrderResponse.from_order(order).model_dump(mode="json")
