"""
Credential store: persists user accounts.
"""

from typing import Optional

from backend.database.db_connection import Database
from backend.database.models import User


class UserStore:
    """
    Reads and writes rows of the `users` table.

    Lookups return None when nothing matches; only database failures raise.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    def insert(self, email: str, name: str, password_hash: str) -> User:
        """
        Create a user.

        Raises:
            DuplicateRecord: If the email is already registered.
            StoreError: On any other database failure.
        """
        sql = """
            INSERT INTO users (email, name, password_hash)
            VALUES (%s, %s, %s)
            RETURNING id, email, name, password_hash;
        """
        with self.db.cursor() as cur:
            cur.execute(sql, (email, name, password_hash))
            return User.from_row(cur.fetchone())

    def _get_one(self, sql: str, value) -> Optional[User]:
        with self.db.cursor() as cur:
            cur.execute(sql, (value,))
            row = cur.fetchone()
        return User.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one(
            "SELECT id, email, name, password_hash FROM users WHERE id = %s;", user_id
        )

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one(
            "SELECT id, email, name, password_hash FROM users WHERE email = %s;", email
        )
