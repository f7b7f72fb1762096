"""
User routes
Role lookup for the caller; role assignment and staff management for admins.
"""

from fastapi import APIRouter, Depends

from ...core.security import get_current_session, require_admin
from ...core.session import Session
from ...models.user import UserRole
from ...schemas.user import RoleResponse, SetRoleRequest, StaffListResponse
from ...services.user_service import UserService
from ..deps import get_user_service

router = APIRouter()


@router.get("/me/role", response_model=RoleResponse)
def my_role(session: Session = Depends(get_current_session),
            users: UserService = Depends(get_user_service)):
    row = users.get_user_role(session.user_id)
    return RoleResponse(user_id=session.user_id, role=row.role if row else None)


@router.put("/{user_id}/role", response_model=UserRole)
def set_role(user_id: int, req: SetRoleRequest, session: Session = Depends(require_admin),
             users: UserService = Depends(get_user_service)):
    return users.set_user_role(user_id, req.role, full_name=req.full_name,
                               actor_id=session.user_id)


@router.get("/staff", response_model=StaffListResponse)
def list_staff(include_inactive: bool = True, session: Session = Depends(require_admin),
               users: UserService = Depends(get_user_service)):
    items = users.list_staff(include_inactive=include_inactive)
    return StaffListResponse(
        items=items,
        total=len(items),
        active=sum(1 for item in items if item.is_active),
    )


@router.post("/staff/{user_id}/deactivate", response_model=UserRole)
def deactivate_staff(user_id: int, session: Session = Depends(require_admin),
                     users: UserService = Depends(get_user_service)):
    """Deactivate a staff account and sign it out everywhere"""
    return users.deactivate_staff(user_id, actor_id=session.user_id)
