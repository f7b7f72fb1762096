"""
User service
Role assignment and staff management.
"""

from typing import List, Optional

from ..core.database import DatabaseManager, db_manager
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger
from ..core.session import SessionRegistry, session_registry
from ..models.user import Role, User, UserRole
from .log_service import LogService

logger = get_logger("users")

ROLE_COLUMNS = "user_id, email, role, full_name, is_active, created_at"


class UserService:
    """User and role service"""

    def __init__(self, db: Optional[DatabaseManager] = None,
                 sessions: Optional[SessionRegistry] = None):
        self.db = db or db_manager
        self.sessions = sessions or session_registry
        self.logs = LogService(self.db)

    def get_user(self, user_id: int) -> User:
        row = self.db.fetch_dict(
            "SELECT id, email, full_name, created_at FROM users WHERE id = ?", [user_id]
        )
        if not row:
            raise NotFoundError(f"User {user_id} not found", "USER_NOT_FOUND")
        return User(**row)

    def get_user_role(self, user_id: int) -> Optional[UserRole]:
        """None when the user has no role row yet"""
        row = self.db.fetch_dict(
            f"SELECT {ROLE_COLUMNS} FROM user_roles WHERE user_id = ?", [user_id]
        )
        return UserRole(**row) if row else None

    def set_user_role(self, user_id: int, role: Role, email: Optional[str] = None,
                      full_name: Optional[str] = None,
                      actor_id: Optional[int] = None) -> UserRole:
        """Insert or update the user's role row; live sessions pick up the new role"""
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role '{role}'", details={"field": "role"})

        user = self.get_user(user_id)
        email = email or user.email
        full_name = full_name if full_name is not None else user.full_name

        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO user_roles(user_id, email, role, full_name)
                VALUES (?,?,?,?)
                ON CONFLICT (user_id) DO UPDATE SET
                  email = EXCLUDED.email,
                  role = EXCLUDED.role,
                  full_name = EXCLUDED.full_name
                """,
                [user_id, email, role.value, full_name]
            )
            self.logs.record("role_set", actor_id=actor_id, user_id=user_id,
                             detail={"role": role.value}, conn=conn)

        self.sessions.update_user_role(user_id, role)
        return self.get_user_role(user_id)

    def list_staff(self, include_inactive: bool = True) -> List[UserRole]:
        query = f"SELECT {ROLE_COLUMNS} FROM user_roles WHERE role = 'staff'"
        if not include_inactive:
            query += " AND is_active"
        query += " ORDER BY created_at DESC, user_id DESC"
        return [UserRole(**row) for row in self.db.fetch_dicts(query)]

    def count_active_staff(self) -> int:
        return self.db.execute_one(
            "SELECT COUNT(*) FROM user_roles WHERE role = 'staff' AND is_active"
        )[0]

    def deactivate_staff(self, user_id: int, actor_id: Optional[int] = None) -> UserRole:
        """Mark a staff member inactive and end their sessions"""
        role_row = self.get_user_role(user_id)
        if role_row is None or role_row.role != Role.STAFF:
            raise NotFoundError(f"Staff member {user_id} not found", "STAFF_NOT_FOUND")

        with self.db.transaction() as conn:
            conn.execute("UPDATE user_roles SET is_active = FALSE WHERE user_id = ?", [user_id])
            self.logs.record("staff_deactivate", actor_id=actor_id, user_id=user_id, conn=conn)

        ended = self.sessions.destroy_user_sessions(user_id)
        logger.info("Staff %s deactivated, %s session(s) ended", user_id, ended)
        return self.get_user_role(user_id)
