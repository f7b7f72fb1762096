"""
Payment method service
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.database import DEFAULT_PAYMENT_METHODS, DatabaseManager, db_manager
from ..core.exceptions import PersistenceError, ValidationError
from ..core.logger import get_logger
from ..models.order import PaymentMethod

logger = get_logger("payments")


class PaymentMethodInfo(BaseModel):
    id: int = Field(..., description="Payment method ID")
    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(None, description="Description")
    icon: Optional[str] = Field(None, description="Icon")
    is_active: bool = Field(True, description="Selectable")

    @property
    def method(self) -> PaymentMethod:
        return PaymentMethod.from_display_name(self.name)


BUILTIN_PAYMENT_METHODS = [
    PaymentMethodInfo(id=index, name=name, description=description, icon=icon)
    for index, (name, description, icon) in enumerate(DEFAULT_PAYMENT_METHODS, start=1)
]


class PaymentService:
    """Lists selectable payment methods"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager

    def list_payment_methods(self) -> List[PaymentMethodInfo]:
        """Active methods by id; the built-in Cash / E-Wallet pair when none can be read"""
        try:
            rows = self.db.fetch_dicts(
                "SELECT id, name, description, icon, is_active FROM payment_methods "
                "WHERE is_active ORDER BY id"
            )
        except PersistenceError as e:
            logger.warning("Falling back to built-in payment methods: %s", e.message)
            return list(BUILTIN_PAYMENT_METHODS)

        methods = [PaymentMethodInfo(**row) for row in rows]
        return methods or list(BUILTIN_PAYMENT_METHODS)

    @staticmethod
    def parse_method(value: str) -> PaymentMethod:
        """Accepts enum values and display names, case-insensitively"""
        try:
            return PaymentMethod.from_display_name(value)
        except (AttributeError, ValueError):
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(f"Unsupported payment method '{value}'. Use one of: {allowed}")
