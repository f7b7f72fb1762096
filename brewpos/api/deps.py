"""
Service providers for the routers.
Every service is bound to the DatabaseManager, SessionRegistry, Settings and
SecurityManager attached to the running app, so tests can mount an in-memory
database and their own configuration.
"""

from fastapi import Depends, Request

from ..config.settings import Settings, settings as default_settings
from ..core.database import DatabaseManager, get_db
from ..core.security import SecurityManager, get_security_manager
from ..core.session import SessionRegistry, get_session_registry
from ..services import (
    AuthService,
    ChatService,
    LogService,
    MenuService,
    OrderService,
    PaymentService,
    StatisticsService,
    UserService,
)


def get_app_settings(request: Request) -> Settings:
    """The settings the app was created with, else the global ones"""
    return getattr(request.app.state, "config", None) or default_settings


def get_auth_service(db: DatabaseManager = Depends(get_db),
                     sessions: SessionRegistry = Depends(get_session_registry),
                     security: SecurityManager = Depends(get_security_manager),
                     config: Settings = Depends(get_app_settings)) -> AuthService:
    return AuthService(db, sessions, security, config)


def get_user_service(db: DatabaseManager = Depends(get_db),
                     sessions: SessionRegistry = Depends(get_session_registry)) -> UserService:
    return UserService(db, sessions)


def get_menu_service(db: DatabaseManager = Depends(get_db)) -> MenuService:
    return MenuService(db)


def get_order_service(db: DatabaseManager = Depends(get_db),
                      config: Settings = Depends(get_app_settings)) -> OrderService:
    return OrderService(db, config)


def get_statistics_service(db: DatabaseManager = Depends(get_db),
                           config: Settings = Depends(get_app_settings)) -> StatisticsService:
    return StatisticsService(db, config)


def get_payment_service(db: DatabaseManager = Depends(get_db)) -> PaymentService:
    return PaymentService(db)


def get_log_service(db: DatabaseManager = Depends(get_db)) -> LogService:
    return LogService(db)


def get_chat_service(config: Settings = Depends(get_app_settings)) -> ChatService:
    return ChatService(config)
