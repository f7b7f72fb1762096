"""
Authentication service
Email + password accounts, sign in / sign out and the Session lifecycle.
"""

from typing import Any, Dict, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.database import DatabaseManager, db_manager
from ..config.settings import Settings
from ..core.exceptions import AuthError, PermissionDeniedError, ValidationError
from ..core.logger import get_logger
from ..core.security import SecurityManager, security_manager
from ..core.session import Session, SessionRegistry, session_registry
from ..models.user import Role, User
from .log_service import LogService
from .user_service import UserService

logger = get_logger("auth")

MIN_PASSWORD_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    try:
        return _email_adapter.validate_python((email or "").strip()).lower()
    except PydanticValidationError:
        raise ValidationError("Please enter a valid email address", details={"field": "email"})


class AuthService:
    """Sign up, sign in, sign out"""

    def __init__(self, db: Optional[DatabaseManager] = None,
                 sessions: Optional[SessionRegistry] = None,
                 security: Optional[SecurityManager] = None,
                 config: Optional[Settings] = None):
        self.db = db or db_manager
        self.sessions = sessions or session_registry
        self.security = security or security_manager
        self.config = config or self.security.config
        self.users = UserService(self.db, self.sessions)
        self.logs = LogService(self.db)

    def sign_up(self, email: str, password: str, full_name: str = "",
                role: Role = Role.CUSTOMER) -> Dict[str, Any]:
        """
        Create an account with its role and open a session for it.

        Only customer and staff accounts can be created this way; the address
        in settings.bootstrap_admin_email is the one exception and may sign up
        as admin. Every other administrator is promoted by an existing one.

        Raises:
            ValidationError: malformed email or too-short password
            PermissionDeniedError: admin requested by any other address
            AuthError: the email is already registered
        """
        email = normalize_email(email)
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters",
                details={"field": "password"}
            )
        role = Role(role)
        if role == Role.ADMIN and not self._is_bootstrap_admin(email):
            raise PermissionDeniedError(
                "Administrator accounts are granted by an existing administrator",
                "ADMIN_SIGNUP_FORBIDDEN"
            )
        full_name = (full_name or "").strip()

        with self.db.transaction() as conn:
            if conn.execute("SELECT 1 FROM users WHERE email = ?", [email]).fetchone():
                raise AuthError("User already registered", "USER_ALREADY_EXISTS")

            user_id = conn.execute(
                "INSERT INTO users(email, password_hash, full_name) VALUES (?,?,?) RETURNING id",
                [email, self.security.hash_password(password), full_name]
            ).fetchone()[0]
            conn.execute(
                "INSERT INTO user_roles(user_id, email, role, full_name) VALUES (?,?,?,?)",
                [user_id, email, role.value, full_name]
            )
            self.logs.record("sign_up", actor_id=user_id, user_id=user_id,
                             detail={"email": email, "role": role.value}, conn=conn)

        logger.info("User %s signed up as %s", user_id, role.value)
        user = User(id=user_id, email=email, full_name=full_name)
        return self._open_session(user, role)

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Raises:
            AuthError: unknown email, wrong password or deactivated account
        """
        try:
            email = normalize_email(email)
        except ValidationError:
            raise AuthError("Invalid login credentials", "INVALID_CREDENTIALS")

        row = self.db.fetch_dict(
            "SELECT id, email, full_name, password_hash FROM users WHERE email = ?", [email]
        )
        if not row or not self.security.verify_password(password or "", row["password_hash"]):
            raise AuthError("Invalid login credentials", "INVALID_CREDENTIALS")

        user = User(id=row["id"], email=row["email"], full_name=row["full_name"])
        role_row = self.users.get_user_role(user.id)
        if role_row is None:
            role_row = self.users.set_user_role(user.id, Role.CUSTOMER, email=user.email,
                                                full_name=user.full_name)
        if not role_row.is_active:
            raise AuthError("This account has been deactivated", "ACCOUNT_DEACTIVATED")

        self.logs.record("sign_in", actor_id=user.id, user_id=user.id)
        return self._open_session(user, role_row.role)

    def sign_out(self, session: Session) -> bool:
        """Destroys the session; its cart goes with it"""
        destroyed = self.sessions.destroy(session.session_id)
        if destroyed:
            self.logs.record("sign_out", actor_id=session.user_id, user_id=session.user_id)
            logger.info("User %s signed out", session.user_id)
        return destroyed

    def _is_bootstrap_admin(self, email: str) -> bool:
        bootstrap = self.config.bootstrap_admin_email
        return bool(bootstrap) and bootstrap.strip().lower() == email

    def _open_session(self, user: User, role: Role) -> Dict[str, Any]:
        session = self.sessions.create(user.id, user.email, Role(role), user.full_name)
        token = self.security.create_jwt_token(user.id, session.session_id, session.role)
        return {
            "token": token,
            "token_type": "Bearer",
            "expires_in": self.security.config.jwt_expire_hours * 3600,
            "session": session,
            "user": user,
            "role": session.role,
        }
