from sqlalchemy.orm import Session
from typing import List
from models.route import Route

class RouteService:
    @staticmethod
    def list_routes(db: Session) -> List[Route]:
        return db.query(Route).order_by(Route.id).all()

    @staticmethod
    def list_active_routes(db: Session) -> List[Route]:
        return RouteService.list_routes_by_state(db, True)

    @staticmethod
    def list_routes_by_state(db: Session, active: bool) -> List[Route]:
        return db.query(Route).filter(Route.active.is_(active)).order_by(Route.id).all()
