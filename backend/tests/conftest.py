import itertools

import pytest

from backend.config import Config
from backend.database.db_connection import Database, DuplicateRecord
from backend.database.models import Attendee, Event, User
from backend.database.stores import Stores
from backend.gateway.server import create_app

API = "/api/v1"


# --- IN-MEMORY STORES ---
# Same interface and uniqueness rules as the PostgreSQL stores.

class InMemoryUserStore:
    def __init__(self):
        self.rows = {}
        self._ids = itertools.count(1)

    def insert(self, email, name, password_hash):
        if any(u.email == email for u in self.rows.values()):
            raise DuplicateRecord("duplicate key value violates unique constraint \"users_email_key\"")
        user = User(id=next(self._ids), email=email, name=name, password_hash=password_hash)
        self.rows[user.id] = user
        return user

    def get_by_id(self, user_id):
        return self.rows.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)


class InMemoryEventStore:
    def __init__(self):
        self.rows = {}
        self._ids = itertools.count(1)
        self.on_delete = []

    def insert(self, owner_id, name, description, event_date, location):
        event = Event(next(self._ids), owner_id, name, description, event_date, location)
        self.rows[event.id] = event
        return event

    def list_all(self):
        return [self.rows[k] for k in sorted(self.rows)]

    def get_by_id(self, event_id):
        return self.rows.get(event_id)

    def update(self, event_id, name, description, event_date, location):
        current = self.rows.get(event_id)
        if current is None:
            return None
        updated = Event(current.id, current.owner_id, name, description, event_date, location)
        self.rows[event_id] = updated
        return updated

    def delete(self, event_id):
        if self.rows.pop(event_id, None) is None:
            return False
        for cascade in self.on_delete:
            cascade(event_id)
        return True


class InMemoryAttendeeStore:
    def __init__(self, users, events):
        self.users = users
        self.events = events
        self.rows = []
        self._ids = itertools.count(1)
        events.on_delete.append(self._drop_event)

    def _drop_event(self, event_id):
        self.rows = [a for a in self.rows if a.event_id != event_id]

    def insert(self, event_id, user_id):
        if self.find(event_id, user_id) is not None:
            raise DuplicateRecord("duplicate key value violates unique constraint")
        attendee = Attendee(next(self._ids), event_id, user_id)
        self.rows.append(attendee)
        return attendee

    def find(self, event_id, user_id):
        return next(
            (a for a in self.rows if a.event_id == event_id and a.user_id == user_id), None
        )

    def users_for_event(self, event_id):
        users = [self.users.get_by_id(a.user_id) for a in self.rows if a.event_id == event_id]
        return [User(id=u.id, email=u.email, name=u.name) for u in users]

    def events_for_user(self, user_id):
        return [self.events.get_by_id(a.event_id) for a in self.rows if a.user_id == user_id]

    def delete(self, event_id, user_id):
        self.rows = [
            a for a in self.rows if not (a.event_id == event_id and a.user_id == user_id)
        ]


# --- APP FIXTURES ---

@pytest.fixture
def config():
    return Config(jwt_secret="test_secret", database_url="postgresql://test@localhost/test")


@pytest.fixture
def stores():
    users = InMemoryUserStore()
    events = InMemoryEventStore()
    return Stores(users=users, events=events, attendees=InMemoryAttendeeStore(users, events))


@pytest.fixture
def app(config, stores):
    app = create_app(config, stores=stores)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register_user(client):
    """
    Register and log in a user through the API.

    Returns a function giving (user_id, headers) for the new account.
    """
    def _register(email, name="Test User", password="password1"):
        r = client.post(f"{API}/auth/register", json={
            "email": email, "password": password, "name": name,
        })
        assert r.status_code == 200, r.get_json()
        user_id = r.get_json()["id"]

        r = client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.get_json()
        token = r.get_json()["token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def launch_event():
    return {
        "name": "Launch",
        "description": "Product launch event",
        "date": "2025-01-01",
        "location": "HQ",
    }


# --- DATABASE MOCKS ---

@pytest.fixture
def mock_db(mocker, config):
    """
    A Database whose connections are mocks.

    Returns:
        tuple: (db, mock_conn, mock_cursor)
    """
    mock_conn = mocker.MagicMock()
    mock_cursor = mocker.MagicMock()

    # Setup the context manager for connection
    mock_conn.__enter__.return_value = mock_conn
    mock_conn.__exit__.return_value = None

    # Setup the context manager for cursor
    mock_cursor.__enter__.return_value = mock_cursor
    mock_cursor.__exit__.return_value = None

    mock_conn.cursor.return_value = mock_cursor

    db = Database(config)
    mocker.patch.object(db, "get_db", return_value=mock_conn)

    return db, mock_conn, mock_cursor
