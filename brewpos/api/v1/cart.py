"""
Cart routes
The cart lives on the caller's Session; nothing here touches the database
except resolving the menu item being added.
"""

from fastapi import APIRouter, Depends

from ...core.exceptions import ValidationError
from ...core.security import get_current_session
from ...core.session import Session
from ...schemas.cart import AddToCartRequest, CartResponse, SetQuantityRequest
from ...services.menu_service import MenuService
from ..deps import get_menu_service

router = APIRouter()


@router.get("", response_model=CartResponse)
def view_cart(session: Session = Depends(get_current_session)):
    return CartResponse.from_cart(session.cart)


@router.post("/items", response_model=CartResponse)
def add_to_cart(req: AddToCartRequest, session: Session = Depends(get_current_session),
                menu: MenuService = Depends(get_menu_service)):
    """Add one unit; the price shown now is the price charged at checkout"""
    item = menu.get_menu_item(req.menu_item_id)
    if not item.is_active:
        raise ValidationError(f"{item.name} is not available", "MENU_ITEM_INACTIVE")
    session.cart.add_item(item)
    return CartResponse.from_cart(session.cart)


@router.put("/items/{item_id}", response_model=CartResponse)
def set_quantity(item_id: int, req: SetQuantityRequest,
                 session: Session = Depends(get_current_session)):
    session.cart.set_quantity(item_id, req.quantity)
    return CartResponse.from_cart(session.cart)


@router.delete("/items/{item_id}", response_model=CartResponse)
def remove_from_cart(item_id: int, session: Session = Depends(get_current_session)):
    session.cart.remove_item(item_id)
    return CartResponse.from_cart(session.cart)


@router.delete("", response_model=CartResponse)
def clear_cart(session: Session = Depends(get_current_session)):
    session.cart.clear()
    return CartResponse.from_cart(session.cart)
