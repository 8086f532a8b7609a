from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class AuthRepository(Protocol):
    def login(self, email: str, password: str) -> Optional[Mapping[str, Any]]:
        raise NotImplementedError

    def logout(self) -> None:
        raise NotImplementedError

    def reset_password(self, email: str) -> None:
        raise NotImplementedError

    def change_password(self, current_password: str, new_password: str) -> None:
        raise NotImplementedError

    def update_profile(self, data: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        raise NotImplementedError
