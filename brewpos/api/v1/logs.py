"""
Operation log routes
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...core.security import require_admin
from ...core.session import Session
from ...services.log_service import LogService
from ..deps import get_log_service

router = APIRouter()


@router.get("")
def list_logs(page: int = Query(1, ge=1), size: int = Query(20, ge=1, le=200),
              action: Optional[str] = None,
              session: Session = Depends(require_admin),
              logs: LogService = Depends(get_log_service)) -> Dict[str, Any]:
    """Audit trail, newest first"""
    return logs.list_logs(page=page, size=size, action=action)
