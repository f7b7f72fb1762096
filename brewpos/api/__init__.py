"""
API routes and endpoints.
"""

from fastapi import APIRouter
from .v1 import auth, cart, chat, logs, menu, orders, payments, statistics, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
api_router.include_router(payments.router, prefix="/payment-methods", tags=["payments"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
