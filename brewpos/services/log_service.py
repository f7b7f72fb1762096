"""
Operation log service
Business actions are appended to the logs table so admins can audit them.
"""

import json
from typing import Any, Dict, List, Optional

from ..core.database import DatabaseManager, db_manager


class LogService:
    """Audit trail reader/writer"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or db_manager

    def record(self, action: str, actor_id: Optional[int] = None,
               user_id: Optional[int] = None, detail: Optional[Dict[str, Any]] = None,
               conn=None) -> None:
        """Append one entry; pass conn to write inside an open transaction"""
        params = [user_id, actor_id, action, json.dumps(detail or {}, default=str)]
        query = "INSERT INTO logs(user_id, actor_id, action, detail_json) VALUES (?,?,?,?)"
        if conn is not None:
            conn.execute(query, params)
        else:
            self.db.execute_query(query, params)

    def list_logs(self, page: int = 1, size: int = 20,
                  action: Optional[str] = None) -> Dict[str, Any]:
        where, params = "", []
        if action:
            where, params = "WHERE action = ?", [action]

        total = self.db.execute_one(f"SELECT COUNT(*) FROM logs {where}", params)[0]
        rows = self.db.fetch_dicts(
            f"""
            SELECT log_id, user_id, actor_id, action, detail_json, created_at
            FROM logs {where}
            ORDER BY log_id DESC
            LIMIT ? OFFSET ?
            """,
            params + [size, (page - 1) * size]
        )

        logs: List[Dict[str, Any]] = []
        for row in rows:
            try:
                row["detail"] = json.loads(row.pop("detail_json") or "{}")
            except json.JSONDecodeError:
                row["detail"] = {}
            logs.append(row)

        return {
            "logs": logs,
            "total": total,
            "page": page,
            "size": size,
            "pages": (total + size - 1) // size
        }
