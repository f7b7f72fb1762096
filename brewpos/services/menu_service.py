"""
Menu service
Menu item CRUD. Only administrators write; everyone reads active items.
"""

from typing import List, Optional

from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import MenuItemNotFoundError, ValidationError
from ..core.logger import get_logger
from ..models.menu import MenuItem, MenuItemCreate, MenuItemUpdate
from .log_service import LogService

logger = get_logger("menu")

MENU_COLUMNS = "id, name, emoji, price, description, image_url, is_active, created_at, updated_at"


class MenuService:
    """Menu item service"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager
        self.logs = LogService(self.db)

    def list_menu_items(self, active_only: bool = True) -> List[MenuItem]:
        """Active items by id for ordering; all items newest first for management"""
        if active_only:
            query = f"SELECT {MENU_COLUMNS} FROM menu_items WHERE is_active ORDER BY id"
        else:
            query = f"SELECT {MENU_COLUMNS} FROM menu_items ORDER BY created_at DESC, id DESC"
        return [MenuItem(**row) for row in self.db.fetch_dicts(query)]

    def get_menu_item(self, item_id: int) -> MenuItem:
        row = self.db.fetch_dict(
            f"SELECT {MENU_COLUMNS} FROM menu_items WHERE id = ?", [item_id]
        )
        if not row:
            raise MenuItemNotFoundError(f"Menu item {item_id} not found")
        return MenuItem(**row)

    def create_menu_item(self, data: MenuItemCreate, actor_id: Optional[int] = None) -> MenuItem:
        name = data.name.strip()
        if not name:
            raise ValidationError("Please fill in all required fields", details={"field": "name"})

        with self.db.transaction() as conn:
            row = conn.execute(
                """
                INSERT INTO menu_items(name, emoji, price, description, image_url, is_active)
                VALUES (?,?,?,?,?,?) RETURNING id
                """,
                [name, data.emoji or "☕", data.price, data.description,
                 data.image_url, data.is_active]
            ).fetchone()
            item_id = row[0]
            self.logs.record("menu_item_create", actor_id=actor_id,
                             detail={"menu_item_id": item_id, "name": name,
                                     "price": str(data.price)}, conn=conn)

        logger.info("Menu item %s created: %s", item_id, name)
        return self.get_menu_item(item_id)

    def update_menu_item(self, item_id: int, data: MenuItemUpdate,
                         actor_id: Optional[int] = None) -> MenuItem:
        self.get_menu_item(item_id)

        changes = data.model_dump(exclude_unset=True)
        if "name" in changes:
            if changes["name"] is None or not changes["name"].strip():
                raise ValidationError("Name cannot be empty", details={"field": "name"})
            changes["name"] = changes["name"].strip()
        if "price" in changes and changes["price"] is None:
            raise ValidationError("Price cannot be empty", details={"field": "price"})

        if changes:
            assignments = ", ".join(f"{column} = ?" for column in changes)
            with self.db.transaction() as conn:
                conn.execute(
                    f"UPDATE menu_items SET {assignments}, updated_at = now() WHERE id = ?",
                    list(changes.values()) + [item_id]
                )
                self.logs.record("menu_item_update", actor_id=actor_id,
                                 detail={"menu_item_id": item_id, "changes": changes}, conn=conn)

        return self.get_menu_item(item_id)

    def delete_menu_item(self, item_id: int, actor_id: Optional[int] = None) -> None:
        item = self.get_menu_item(item_id)
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM menu_items WHERE id = ?", [item_id])
            self.logs.record("menu_item_delete", actor_id=actor_id,
                             detail={"menu_item_id": item_id, "name": item.name}, conn=conn)
        logger.info("Menu item %s deleted", item_id)

    def count_menu_items(self) -> int:
        return self.db.execute_one("SELECT COUNT(*) FROM menu_items")[0]
