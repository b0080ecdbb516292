from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


def _new_user_id() -> str:
    return uuid.uuid4().hex


@dataclass
class User:
    name: str
    phone: str
    id: str = field(default_factory=_new_user_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def public_dict(self) -> dict:
        """Projection returned to clients"""
        return {"id": self.id, "name": self.name, "phone": self.phone}
