"""
Order service
Turns a session's cart into a persisted order and serves order history.

Checkout sequence (complete_order):
1. total = sum of cart line subtotals
2. insert the order row, which allocates the order id
3. insert one order line per cart line, prices copied from the cart snapshot
4. add the order to today's daily statistics
5. take the ordered quantities out of the cart; units added meanwhile stay

Steps 2-4 share one database transaction: either all of them are visible or
none is. On failure the cart is left untouched so the user can retry.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..config.settings import Settings, settings as default_settings
from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import (
    CheckoutInProgressError,
    PersistenceError,
    TransactionNotFoundError,
    ValidationError,
)
from ..core.logger import get_logger
from ..core.session import Session
from ..models.cart import CartLine
from ..models.order import Order, OrderLine, OrderStatus, PaymentMethod
from .log_service import LogService
from .payment_service import PaymentService
from .statistics_service import StatisticsService

logger = get_logger("orders")

ORDER_COLUMNS = (
    "id, user_id, transaction_date, transaction_time, total_amount, "
    "payment_method, status, client_token, created_at"
)


class OrderService:
    """Order completion and history"""

    def __init__(self, db: Optional[DatabaseManager] = None,
                 config: Optional[Settings] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.db = db or db_manager
        self.config = config or default_settings
        self.clock = clock
        self.statistics = StatisticsService(self.db, self.config)
        self.logs = LogService(self.db)

    def complete_order(self, session: Session,
                       payment_method: Union[PaymentMethod, str] = PaymentMethod.CASH,
                       client_token: Optional[str] = None) -> Dict[str, Any]:
        """
        Check out the session's cart.

        Args:
            session: the signed-in session owning the cart
            payment_method: cash or e-wallet (display names such as "E-Wallet" accepted)
            client_token: optional idempotency token; a repeated token returns
                the order it already created instead of writing again, and leaves
                the current cart alone

        Returns:
            dict: transaction_id, total_amount, payment_method, status, date,
            time, item_count, replayed

        Raises:
            CheckoutInProgressError: another checkout of this session has not settled
            ValidationError: empty cart, bad payment method, token of another user
            PersistenceError: any database failure; nothing was written
        """
        if not session.checkout_lock.acquire(blocking=False):
            raise CheckoutInProgressError("A checkout is already in progress for this session")
        try:
            if client_token:
                existing = self._find_by_client_token(client_token)
                if existing is not None:
                    return self._replay(session, existing)

            lines = session.cart.snapshot()
            if not lines:
                raise ValidationError("Cart is empty", "CART_EMPTY")

            method = (payment_method if isinstance(payment_method, PaymentMethod)
                      else PaymentService.parse_method(payment_method))
            total = self.calculate_total(lines)
            now = self.clock()

            try:
                with self.db.transaction() as conn:
                    order_id = self._insert_order(conn, session.user_id, total, method, now, client_token)
                    self._insert_order_lines(conn, order_id, lines)
                    self.statistics.record_order(now.date(), total, conn=conn)
                    self.logs.record(
                        "order_complete",
                        actor_id=session.user_id,
                        user_id=session.user_id,
                        detail={
                            "transaction_id": order_id,
                            "total_amount": str(total),
                            "payment_method": method.value,
                            "lines": len(lines),
                        },
                        conn=conn,
                    )
            except PersistenceError as e:
                logger.error("Checkout failed for user %s: %s", session.user_id, e.message)
                raise PersistenceError(
                    f"Failed to complete order: {e.message}",
                    "ORDER_PERSISTENCE_FAILED",
                    details={"cart_preserved": True},
                ) from e

            session.cart.discard(lines)
            logger.info("Order %s completed: %s via %s", order_id, total, method.value)

            return {
                "transaction_id": order_id,
                "total_amount": total,
                "payment_method": method,
                "status": OrderStatus.COMPLETED,
                "transaction_date": now.date(),
                "transaction_time": now.time().replace(microsecond=0),
                "item_count": sum(line.quantity for line in lines),
                "replayed": False,
            }
        finally:
            session.checkout_lock.release()

    @staticmethod
    def calculate_total(lines: Sequence[CartLine]) -> Decimal:
        return sum((line.subtotal for line in lines), Decimal("0"))

    def _insert_order(self, conn, user_id: int, total: Decimal, method: PaymentMethod,
                      now: datetime, client_token: Optional[str]) -> int:
        row = conn.execute(
            """
            INSERT INTO transactions(user_id, transaction_date, transaction_time, total_amount,
                                     payment_method, status, client_token)
            VALUES (?,?,?,?,?,?,?) RETURNING id
            """,
            [user_id, now.date(), now.time().replace(microsecond=0), total,
             method.value, OrderStatus.COMPLETED.value, client_token]
        ).fetchone()
        return row[0]

    def _insert_order_lines(self, conn, order_id: int, lines: Sequence[CartLine]) -> None:
        conn.executemany(
            """
            INSERT INTO transaction_items(transaction_id, menu_item_id, quantity, price_per_unit, subtotal)
            VALUES (?,?,?,?,?)
            """,
            [[order_id, line.menu_item_id, line.quantity, line.unit_price, line.subtotal]
             for line in lines]
        )

    def _find_by_client_token(self, client_token: str) -> Optional[Order]:
        row = self.db.fetch_dict(
            f"SELECT {ORDER_COLUMNS} FROM transactions WHERE client_token = ?", [client_token]
        )
        return self._with_items(row) if row else None

    def _replay(self, session: Session, order: Order) -> Dict[str, Any]:
        if order.user_id != session.user_id:
            raise ValidationError("Checkout token already used", "CLIENT_TOKEN_CONFLICT")

        logger.info("Replaying order %s for token %s", order.id, order.client_token)
        return {
            "transaction_id": order.id,
            "total_amount": order.total_amount,
            "payment_method": order.payment_method,
            "status": order.status,
            "transaction_date": order.transaction_date,
            "transaction_time": order.transaction_time,
            "item_count": sum(line.quantity for line in order.items),
            "replayed": True,
        }

    # ---- history -------------------------------------------------------

    def list_transactions(self, limit: int = 50, offset: int = 0,
                          user_id: Optional[int] = None) -> List[Order]:
        """Newest first, each with its order lines"""
        where, params = "", []
        if user_id is not None:
            where, params = "WHERE user_id = ?", [user_id]
        rows = self.db.fetch_dicts(
            f"""
            SELECT {ORDER_COLUMNS} FROM transactions {where}
            ORDER BY created_at DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            params + [limit, offset]
        )
        return self._attach_items(rows)

    def recent_transactions(self, limit: int = 5) -> List[Order]:
        return self.list_transactions(limit=limit)

    def count_transactions(self, user_id: Optional[int] = None) -> int:
        if user_id is None:
            return self.db.execute_one("SELECT COUNT(*) FROM transactions")[0]
        return self.db.execute_one(
            "SELECT COUNT(*) FROM transactions WHERE user_id = ?", [user_id]
        )[0]

    def get_transaction(self, transaction_id: int) -> Order:
        row = self.db.fetch_dict(
            f"SELECT {ORDER_COLUMNS} FROM transactions WHERE id = ?", [transaction_id]
        )
        if not row:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return self._with_items(row)

    def delete_transaction(self, transaction_id: int, actor_id: Optional[int] = None) -> None:
        """Remove an order and its lines. Daily statistics are left as recorded."""
        order = self.get_transaction(transaction_id)
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM transaction_items WHERE transaction_id = ?", [transaction_id])
            conn.execute("DELETE FROM transactions WHERE id = ?", [transaction_id])
            self.logs.record("transaction_delete", actor_id=actor_id, user_id=order.user_id,
                             detail={"transaction_id": transaction_id,
                                     "total_amount": str(order.total_amount)}, conn=conn)
        logger.info("Transaction %s deleted by %s", transaction_id, actor_id)

    def clear_all_transactions(self, actor_id: Optional[int] = None) -> int:
        with self.db.transaction() as conn:
            deleted = conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]
            conn.execute("DELETE FROM transaction_items")
            conn.execute("DELETE FROM transactions")
            self.logs.record("transactions_clear", actor_id=actor_id,
                             detail={"deleted": deleted}, conn=conn)
        logger.warning("All %s transactions cleared by %s", deleted, actor_id)
        return deleted

    def _with_items(self, row: Dict[str, Any]) -> Order:
        return self._attach_items([row])[0]

    def _attach_items(self, rows: List[Dict[str, Any]]) -> List[Order]:
        if not rows:
            return []
        ids = [row["id"] for row in rows]
        placeholders = ",".join("?" for _ in ids)
        item_rows = self.db.fetch_dicts(
            f"""
            SELECT id, transaction_id, menu_item_id, quantity, price_per_unit, subtotal
            FROM transaction_items
            WHERE transaction_id IN ({placeholders})
            ORDER BY id
            """,
            ids
        )
        items_by_order: Dict[int, List[OrderLine]] = {}
        for item in item_rows:
            items_by_order.setdefault(item["transaction_id"], []).append(OrderLine(**item))

        return [Order(**row, items=items_by_order.get(row["id"], [])) for row in rows]
