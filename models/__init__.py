from models.user import User, UserRole
from models.order import Order, OrderStatus, OrderPriority
from models.route import Route, DriverRoute, DriverStats
from models.log import ErrorLog, ActivityLog

__all__ = ["User", "UserRole", "Order", "OrderStatus", "OrderPriority", "Route", "DriverRoute", "DriverStats", "ErrorLog", "ActivityLog"]
