from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db
from services.driver_service import DriverService
from utils.auth_dependency import CurrentUser, authorize, ensure_driver_scope

router = APIRouter(prefix="/ros", tags=["Route Optimization"])

@router.get("/driver/routes/{driver_id}")
def get_driver_routes(
    driver_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(authorize("ros.driver_routes"))
):
    """Remaining stops for the driver; the optimization label is a stub"""
    ensure_driver_scope(current_user, driver_id)
    return DriverService.route_summary(db, driver_id)
