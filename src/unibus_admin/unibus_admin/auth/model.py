from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    token: str
    refresh_token: Optional[str] = None
    phone: Optional[str] = None
