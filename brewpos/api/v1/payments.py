"""
Payment method routes
"""

from typing import List

from fastapi import APIRouter, Depends

from ...core.security import get_current_session
from ...core.session import Session
from ...services.payment_service import PaymentMethodInfo, PaymentService
from ..deps import get_payment_service

router = APIRouter()


@router.get("", response_model=List[PaymentMethodInfo])
def list_payment_methods(session: Session = Depends(get_current_session),
                         payments: PaymentService = Depends(get_payment_service)):
    return payments.list_payment_methods()
