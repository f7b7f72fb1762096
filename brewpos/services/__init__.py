"""
Business logic services.
Service layer implementations for the point-of-sale operations.
"""

from .auth_service import AuthService
from .chat_service import ChatService
from .log_service import LogService
from .menu_service import MenuService
from .order_service import OrderService
from .payment_service import PaymentService
from .statistics_service import StatisticsService
from .user_service import UserService

__all__ = [
    "AuthService",
    "ChatService",
    "LogService",
    "MenuService",
    "OrderService",
    "PaymentService",
    "StatisticsService",
    "UserService",
]
