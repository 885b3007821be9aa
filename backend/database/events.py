"""
Event store: create, read, update and delete rows of the `events` table.
"""

from datetime import date
from typing import List, Optional

from backend.database.db_connection import Database
from backend.database.models import Event

EVENT_COLUMNS = "id, owner_id, name, description, date, location"


class EventStore:
    def __init__(self, db: Database) -> None:
        self.db = db

    def insert(self, owner_id: int, name: str, description: str,
               event_date: date, location: str) -> Event:
        sql = f"""
            INSERT INTO events (owner_id, name, description, date, location)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {EVENT_COLUMNS};
        """
        with self.db.cursor() as cur:
            cur.execute(sql, (owner_id, name, description, event_date, location))
            return Event.from_row(cur.fetchone())

    def list_all(self) -> List[Event]:
        with self.db.cursor() as cur:
            cur.execute(f"SELECT {EVENT_COLUMNS} FROM events ORDER BY id;")
            return [Event.from_row(row) for row in cur.fetchall()]

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with self.db.cursor() as cur:
            cur.execute(f"SELECT {EVENT_COLUMNS} FROM events WHERE id = %s;", (event_id,))
            row = cur.fetchone()
        return Event.from_row(row) if row else None

    def update(self, event_id: int, name: str, description: str,
               event_date: date, location: str) -> Optional[Event]:
        """
        Overwrite the editable fields of an event. The owner never changes.

        Returns:
            Event: The updated row, or None if no event has that id.
        """
        sql = f"""
            UPDATE events
            SET name = %s, description = %s, date = %s, location = %s
            WHERE id = %s
            RETURNING {EVENT_COLUMNS};
        """
        with self.db.cursor() as cur:
            cur.execute(sql, (name, description, event_date, location, event_id))
            row = cur.fetchone()
        return Event.from_row(row) if row else None

    def delete(self, event_id: int) -> bool:
        """
        Delete an event and, through the foreign key cascade, its attendees.

        Returns:
            bool: False if no event had that id.
        """
        with self.db.cursor() as cur:
            cur.execute("DELETE FROM events WHERE id = %s;", (event_id,))
            return cur.rowcount > 0
