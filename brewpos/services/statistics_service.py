"""
Statistics service
One aggregate row per calendar day. Every completed order adds to it with a
single INSERT ... ON CONFLICT DO UPDATE, so concurrent orders never lose an
increment the way a read-then-write from the client would.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from ..config.settings import Settings, settings as default_settings
from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import ValidationError
from ..core.logger import get_logger
from ..models.statistics import DailyStatistic

logger = get_logger("statistics")

STAT_COLUMNS = "stat_date, total_revenue, total_orders, total_customers, total_smiles, updated_at"

UPSERT_SQL = """
INSERT INTO daily_statistics(stat_date, total_revenue, total_orders, total_customers, total_smiles, updated_at)
VALUES (?, ?, 1, ?, ?, now())
ON CONFLICT (stat_date) DO UPDATE SET
  total_revenue = total_revenue + EXCLUDED.total_revenue,
  total_orders = total_orders + 1,
  total_customers = total_customers + EXCLUDED.total_customers,
  total_smiles = total_smiles + EXCLUDED.total_smiles,
  updated_at = now()
"""


class StatisticsService:
    """Daily statistics aggregator"""

    def __init__(self, db: Optional[DatabaseManager] = None, config: Optional[Settings] = None):
        self.db = db or db_manager
        self.config = config or default_settings

    def record_order(self, stat_date: date, amount: Decimal,
                     customers: Optional[int] = None, smiles: Optional[int] = None,
                     conn=None) -> None:
        """
        Add one order to the day's totals, creating the row on the first order.

        Args:
            stat_date: calendar day the order belongs to
            amount: order total
            customers: customers to add; defaults to settings.stats_customers_per_order
            smiles: smiles to add; defaults to settings.stats_smiles_per_order
            conn: an open transaction to join (the checkout sequence passes its own)
        """
        amount = Decimal(amount)
        if amount < 0:
            raise ValidationError("Order amount cannot be negative")

        params = [
            stat_date,
            amount,
            self.config.stats_customers_per_order if customers is None else customers,
            self.config.stats_smiles_per_order if smiles is None else smiles,
        ]
        if conn is not None:
            conn.execute(UPSERT_SQL, params)
        else:
            with self.db.transaction() as tx:
                tx.execute(UPSERT_SQL, params)

        logger.debug("Recorded order of %s on %s", amount, stat_date)

    def get_daily_statistic(self, stat_date: Optional[date] = None) -> DailyStatistic:
        """The day's row, or a zeroed placeholder with exists=False"""
        stat_date = stat_date or date.today()
        row = self.db.fetch_dict(
            f"SELECT {STAT_COLUMNS} FROM daily_statistics WHERE stat_date = ?", [stat_date]
        )
        if not row:
            return DailyStatistic(stat_date=stat_date, exists=False)
        return DailyStatistic(**row)

    def dashboard_summary(self, recent_limit: int = 5) -> Dict[str, Any]:
        """Admin dashboard: today's totals, head counts and the latest orders"""
        from .menu_service import MenuService
        from .order_service import OrderService
        from .user_service import UserService

        today = self.get_daily_statistic()
        menu_count = MenuService(self.db).count_menu_items()
        staff_count = UserService(self.db).count_active_staff()
        recent = OrderService(self.db, config=self.config).recent_transactions(recent_limit)

        return {
            "stat_date": today.stat_date,
            "total_revenue": today.total_revenue,
            "total_orders": today.total_orders,
            "total_customers": today.total_customers,
            "total_smiles": today.total_smiles,
            "staff_count": staff_count,
            "menu_item_count": menu_count,
            "recent_orders": recent,
        }
