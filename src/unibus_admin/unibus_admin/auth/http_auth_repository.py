from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.client import ApiClient


class HttpAuthRepository:
    endpoint = "/auth"

    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, email: str, password: str) -> Optional[Mapping[str, Any]]:
        body = self._client.post(f"{self.endpoint}/login", json={"Email": email, "Password": password})
        return body if isinstance(body, Mapping) else None

    def logout(self) -> None:
        self._client.post(f"{self.endpoint}/logout")

    def reset_password(self, email: str) -> None:
        self._client.post(f"{self.endpoint}/reset-password", json={"email": email})

    def change_password(self, current_password: str, new_password: str) -> None:
        self._client.post(
            f"{self.endpoint}/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    def update_profile(self, data: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        body = self._client.put(f"{self.endpoint}/profile", json=dict(data))
        return body if isinstance(body, Mapping) else None
