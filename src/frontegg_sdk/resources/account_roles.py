"""Account roles service client."""

from __future__ import annotations

from typing import Any

from ..config import ServiceKey
from .base import AuthenticatedClient


class AccountRolesClient(AuthenticatedClient):
    service = ServiceKey.ACCOUNT_ROLES

    def get_roles(
        self,
        search_params: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Search account roles, sorted by key unless told otherwise."""
        params = {"_sortBy": "key"} if search_params is None else search_params
        return self.request("GET", self.service_url(), params=params)
