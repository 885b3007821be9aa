"""
Membership store: the many-to-many join between users and events.

The `attendees` table carries UNIQUE (event_id, user_id); an insert that
would create a second membership for the same pair raises DuplicateRecord.
"""

from typing import List, Optional

from backend.database.db_connection import Database
from backend.database.models import Attendee, Event, User


class AttendeeStore:
    def __init__(self, db: Database) -> None:
        self.db = db

    def insert(self, event_id: int, user_id: int) -> Attendee:
        """
        Add a user to an event.

        Raises:
            DuplicateRecord: If the user already attends the event.
        """
        sql = """
            INSERT INTO attendees (event_id, user_id)
            VALUES (%s, %s)
            RETURNING id, event_id, user_id;
        """
        with self.db.cursor() as cur:
            cur.execute(sql, (event_id, user_id))
            return Attendee.from_row(cur.fetchone())

    def find(self, event_id: int, user_id: int) -> Optional[Attendee]:
        sql = "SELECT id, event_id, user_id FROM attendees WHERE event_id = %s AND user_id = %s;"
        with self.db.cursor() as cur:
            cur.execute(sql, (event_id, user_id))
            row = cur.fetchone()
        return Attendee.from_row(row) if row else None

    def users_for_event(self, event_id: int) -> List[User]:
        sql = """
            SELECT u.id, u.name, u.email
            FROM users u
            JOIN attendees a ON u.id = a.user_id
            WHERE a.event_id = %s
            ORDER BY a.id;
        """
        with self.db.cursor() as cur:
            cur.execute(sql, (event_id,))
            return [User.from_row(row) for row in cur.fetchall()]

    def events_for_user(self, user_id: int) -> List[Event]:
        sql = """
            SELECT e.id, e.owner_id, e.name, e.description, e.date, e.location
            FROM events e
            JOIN attendees a ON e.id = a.event_id
            WHERE a.user_id = %s
            ORDER BY a.id;
        """
        with self.db.cursor() as cur:
            cur.execute(sql, (user_id,))
            return [Event.from_row(row) for row in cur.fetchall()]

    def delete(self, event_id: int, user_id: int) -> None:
        """
        Remove a membership. Removing one that does not exist is a no-op.
        """
        with self.db.cursor() as cur:
            cur.execute(
                "DELETE FROM attendees WHERE event_id = %s AND user_id = %s;",
                (event_id, user_id),
            )
