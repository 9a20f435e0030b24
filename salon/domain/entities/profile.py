from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str | None = None


@dataclass(frozen=True)
class UserProfile:
    name: str | None
    email: str | None
    created_at: datetime | None = None

    @staticmethod
    def from_document(data: dict) -> "UserProfile":
        name = (data.get("name") or "").strip() or None
        return UserProfile(
            name=name,
            email=data.get("email"),
            created_at=data.get("createdAt"),
        )
