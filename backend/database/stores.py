"""
Bundle of the three stores, attached to the Flask app at startup.
"""

from dataclasses import dataclass

from flask import current_app

from backend.database.attendees import AttendeeStore
from backend.database.db_connection import Database
from backend.database.events import EventStore
from backend.database.users import UserStore


@dataclass
class Stores:
    users: UserStore
    events: EventStore
    attendees: AttendeeStore

    @classmethod
    def from_database(cls, db: Database) -> "Stores":
        return cls(
            users=UserStore(db),
            events=EventStore(db),
            attendees=AttendeeStore(db),
        )


def get_stores() -> Stores:
    """
    Return the stores registered on the running app.
    """
    return current_app.extensions["stores"]
