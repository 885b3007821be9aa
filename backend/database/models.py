"""
Record types returned by the stores.

Each dataclass mirrors one table and knows how to build itself from a
DictCursor row and how to render itself for a JSON response.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Optional


@dataclass
class User:
    id: int
    email: str
    name: str
    password_hash: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password_hash=row.get("password_hash"),
        )

    def to_dict(self) -> Dict[str, Any]:
        # The password hash never leaves the service.
        return {"id": self.id, "email": self.email, "name": self.name}


@dataclass
class Event:
    id: int
    owner_id: int
    name: str
    description: str
    date: date
    location: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Event":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            description=row["description"],
            date=row["date"],
            location=row["location"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "location": self.location,
        }


@dataclass
class Attendee:
    id: int
    event_id: int
    user_id: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Attendee":
        return cls(id=row["id"], event_id=row["event_id"], user_id=row["user_id"])

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "event_id": self.event_id, "user_id": self.user_id}
