from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from typing import Optional, Tuple
from models.user import UserRole
from services.auth_service import AuthService
from utils.errors import MissingToken, RoleForbidden
from config import settings

security = HTTPBearer(auto_error=False)

ANY_ROLE: Tuple[UserRole, ...] = (UserRole.CUSTOMER, UserRole.DRIVER)

# Endpoint name -> roles allowed to call it. Endpoints absent here are public.
ENDPOINT_POLICIES = {
    "cms.orders_by_customer": (UserRole.CUSTOMER,),
    "cms.new_order": (UserRole.CUSTOMER,),
    "cms.orders_by_driver": ANY_ROLE,
    "wms.update_order_status": ANY_ROLE,
    "ros.driver_routes": ANY_ROLE,
    "driver.patch_order": (UserRole.DRIVER,),
    "driver.stats": ANY_ROLE,
}

ROLE_MESSAGES = {
    (UserRole.CUSTOMER,): "Access denied. Customer role required.",
    (UserRole.DRIVER,): "Access denied. Driver role required.",
}

class CurrentUser(BaseModel):
    """Identity carried by a verified token"""
    id: int
    username: str
    role: UserRole
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_driver(self) -> bool:
        return self.role == UserRole.DRIVER

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise MissingToken()

    payload = AuthService.verify_token(credentials.credentials)
    return CurrentUser(
        id=payload["user_id"],
        username=payload.get("sub", ""),
        role=UserRole(payload["role"]),
        name=payload.get("name"),
        email=payload.get("email"),
    )

def authorize(endpoint: str):
    """Dependency enforcing ENDPOINT_POLICIES for the named endpoint"""
    allowed = ENDPOINT_POLICIES[endpoint]

    async def dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in allowed:
            raise RoleForbidden(ROLE_MESSAGES.get(allowed, "Access denied"))
        return current_user

    return dependency

def ensure_driver_scope(current_user: CurrentUser, driver_id: int) -> None:
    """Bind a requested driver id to the caller when identity binding is on"""
    if not settings.bind_driver_identity:
        return
    # Customers have no driver identity to bind to
    if not (current_user.is_driver and current_user.id == driver_id):
        raise RoleForbidden("Cannot access another driver's orders")
