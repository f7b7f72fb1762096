"""
Order routes
Checkout for every signed-in role; history for the counter and the office.
"""

from fastapi import APIRouter, Depends, Query

from ...core.security import get_current_session, require_admin, require_staff
from ...core.session import Session
from ...models.order import Order
from ...schemas.common import MessageResponse
from ...schemas.order import CheckoutRequest, CheckoutResponse, OrderListResponse
from ...services.order_service import OrderService
from ...services.payment_service import PaymentService
from ..deps import get_order_service

router = APIRouter()


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(req: CheckoutRequest, session: Session = Depends(get_current_session),
             orders: OrderService = Depends(get_order_service)):
    """
    Complete the order for the caller's cart.

    The order, its lines and the day's statistics are written together;
    on any failure nothing is written and the cart is kept for a retry.
    """
    method = PaymentService.parse_method(req.payment_method)
    result = orders.complete_order(session, method, client_token=req.client_token)
    return CheckoutResponse(
        **result,
        message=f"Order placed successfully! Total: {orders.config.currency_symbol}{result['total_amount']:.2f}",
    )


@router.get("", response_model=OrderListResponse)
def list_orders(limit: int = Query(50, ge=1, le=500), offset: int = Query(0, ge=0),
                session: Session = Depends(require_staff),
                orders: OrderService = Depends(get_order_service)):
    return OrderListResponse(
        items=orders.list_transactions(limit=limit, offset=offset),
        total=orders.count_transactions(),
        limit=limit,
        offset=offset,
    )


@router.get("/mine", response_model=OrderListResponse)
def list_my_orders(limit: int = Query(50, ge=1, le=500), offset: int = Query(0, ge=0),
                   session: Session = Depends(get_current_session),
                   orders: OrderService = Depends(get_order_service)):
    """The caller's own orders"""
    return OrderListResponse(
        items=orders.list_transactions(limit=limit, offset=offset, user_id=session.user_id),
        total=orders.count_transactions(user_id=session.user_id),
        limit=limit,
        offset=offset,
    )


@router.get("/recent", response_model=OrderListResponse)
def recent_orders(limit: int = Query(5, ge=1, le=50),
                  session: Session = Depends(require_staff),
                  orders: OrderService = Depends(get_order_service)):
    items = orders.recent_transactions(limit)
    return OrderListResponse(items=items, total=len(items), limit=limit, offset=0)


@router.get("/{transaction_id}", response_model=Order)
def get_order(transaction_id: int, session: Session = Depends(require_staff),
              orders: OrderService = Depends(get_order_service)):
    return orders.get_transaction(transaction_id)


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_order(transaction_id: int, session: Session = Depends(require_admin),
                 orders: OrderService = Depends(get_order_service)):
    orders.delete_transaction(transaction_id, actor_id=session.user_id)
    return MessageResponse(message="Transaction deleted", data={"id": transaction_id})


@router.delete("", response_model=MessageResponse)
def clear_orders(session: Session = Depends(require_admin),
                 orders: OrderService = Depends(get_order_service)):
    deleted = orders.clear_all_transactions(actor_id=session.user_id)
    return MessageResponse(message="All transactions cleared", data={"deleted": deleted})
