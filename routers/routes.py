from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas import RouteResponse
from services.route_service import RouteService

router = APIRouter(prefix="/routes", tags=["Routes"])

@router.get("", response_model=List[RouteResponse])
def list_routes(active: Optional[bool] = None, db: Session = Depends(get_db)):
    """Delivery route catalog, public; `active` narrows to one state when given"""
    if active is None:
        return RouteService.list_routes(db)
    if active:
        return RouteService.list_active_routes(db)
    return RouteService.list_routes_by_state(db, False)
