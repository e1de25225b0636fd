"""Permissions service client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..config import ServiceKey
from .base import TENANT_HEADER, AuthenticatedClient


class PermissionsClient(AuthenticatedClient):
    """Permission management."""

    service = ServiceKey.PERMISSIONS
    tenant_header = TENANT_HEADER

    def get_permissions(self) -> list[dict[str, Any]] | None:
        """List all permissions."""
        return self.request("GET", self.service_url())

    def create_permission(
        self,
        key: str,
        name: str,
        assignment_type: str,
        description: str = "",
        category_id: str = "",
        tenant_id: str | None = None,
    ) -> list[dict[str, Any]] | None:
        """Create a single permission."""
        params = {
            "key": key,
            "name": name,
            "assignment_type": assignment_type,
            "description": description,
            "categoryId": category_id,
        }
        return self.request(
            "POST", self.service_url(), json_body=[params], tenant_id=tenant_id
        )

    def create_permissions(
        self,
        permissions: list[dict[str, Any]],
        tenant_id: str | None = None,
    ) -> list[dict[str, Any]] | None:
        """Create several permissions from raw permission payloads."""
        return self.request(
            "POST", self.service_url(), json_body=permissions, tenant_id=tenant_id
        )

    def update_permission(
        self,
        permission_id: str,
        key: str,
        name: str,
        description: str = "",
        category_id: str = "",
    ) -> dict[str, Any] | None:
        """Update a permission."""
        params = {
            "key": key,
            "name": name,
            "description": description,
            "categoryId": category_id,
        }
        return self.request(
            "PATCH",
            self.service_url(f"/{quote(permission_id, safe='')}"),
            json_body=params,
        )

    def delete_permission(self, permission_id: str) -> bool:
        """Delete a permission; True when the service answers 204."""
        response = self.send(
            "DELETE", self.service_url(f"/{quote(permission_id, safe='')}")
        )
        return response is not None and response.status_code == httpx.codes.NO_CONTENT
