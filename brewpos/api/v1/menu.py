"""
Menu routes
Everyone signed in reads the active menu; administrators manage it.
"""

from fastapi import APIRouter, Depends

from ...core.security import get_current_session, require_admin
from ...core.session import Session
from ...models.menu import MenuItem
from ...schemas.common import MessageResponse
from ...schemas.menu import MenuItemCreateRequest, MenuItemUpdateRequest, MenuListResponse
from ...services.menu_service import MenuService
from ..deps import get_menu_service

router = APIRouter()


@router.get("", response_model=MenuListResponse)
def list_active_menu(session: Session = Depends(get_current_session),
                     menu: MenuService = Depends(get_menu_service)):
    """Active items, ordered by id"""
    items = menu.list_menu_items(active_only=True)
    return MenuListResponse(items=items, total=len(items))


@router.get("/all", response_model=MenuListResponse)
def list_all_menu(session: Session = Depends(require_admin),
                  menu: MenuService = Depends(get_menu_service)):
    """Every item including inactive ones, newest first"""
    items = menu.list_menu_items(active_only=False)
    return MenuListResponse(items=items, total=len(items))


@router.get("/{item_id}", response_model=MenuItem)
def get_menu_item(item_id: int, session: Session = Depends(get_current_session),
                  menu: MenuService = Depends(get_menu_service)):
    return menu.get_menu_item(item_id)


@router.post("", response_model=MenuItem, status_code=201)
def create_menu_item(req: MenuItemCreateRequest, session: Session = Depends(require_admin),
                     menu: MenuService = Depends(get_menu_service)):
    return menu.create_menu_item(req, actor_id=session.user_id)


@router.put("/{item_id}", response_model=MenuItem)
def update_menu_item(item_id: int, req: MenuItemUpdateRequest,
                     session: Session = Depends(require_admin),
                     menu: MenuService = Depends(get_menu_service)):
    return menu.update_menu_item(item_id, req, actor_id=session.user_id)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_menu_item(item_id: int, session: Session = Depends(require_admin),
                     menu: MenuService = Depends(get_menu_service)):
    menu.delete_menu_item(item_id, actor_id=session.user_id)
    return MessageResponse(message="Item deleted successfully", data={"id": item_id})
