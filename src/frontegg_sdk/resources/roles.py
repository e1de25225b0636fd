"""Roles service client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..config import ServiceKey
from .base import TENANT_HEADER, AuthenticatedClient


def _role_params(
    key: str,
    name: str,
    level: int,
    description: str,
    is_default: bool,
    migrate_role: bool,
    first_user_role: bool,
) -> dict[str, Any]:
    return {
        "key": key,
        "name": name,
        "level": level,
        "description": description,
        "isDefault": is_default,
        "migrateRole": migrate_role,
        "firstUserRole": first_user_role,
    }


class RolesClient(AuthenticatedClient):
    """Vendor and tenant role management."""

    service = ServiceKey.ROLES
    tenant_header = TENANT_HEADER

    def get_roles(self, tenant_id: str | None = None) -> list[dict[str, Any]] | None:
        """List roles, optionally scoped to a tenant."""
        return self.request("GET", self.service_url(), tenant_id=tenant_id)

    def create_role(
        self,
        key: str,
        name: str,
        level: int,
        description: str = "",
        is_default: bool = False,
        migrate_role: bool = False,
        first_user_role: bool = False,
        tenant_id: str | None = None,
    ) -> list[dict[str, Any]] | None:
        """Create a single role."""
        params = _role_params(
            key, name, level, description, is_default, migrate_role, first_user_role
        )
        return self.request(
            "POST", self.service_url(), json_body=[params], tenant_id=tenant_id
        )

    def create_roles(
        self,
        roles: list[dict[str, Any]],
        tenant_id: str | None = None,
    ) -> list[dict[str, Any]] | None:
        """Create several roles from raw role payloads."""
        return self.request(
            "POST", self.service_url(), json_body=roles, tenant_id=tenant_id
        )

    def update_role(
        self,
        role_id: str,
        key: str,
        name: str,
        level: int,
        description: str = "",
        is_default: bool = False,
        migrate_role: bool = False,
        first_user_role: bool = False,
        tenant_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Update a role."""
        params = _role_params(
            key, name, level, description, is_default, migrate_role, first_user_role
        )
        return self.request(
            "PATCH",
            self.service_url(f"/{quote(role_id, safe='')}"),
            json_body=params,
            tenant_id=tenant_id,
        )

    def assign_permissions(
        self,
        role_id: str,
        permission_ids: list[str],
        tenant_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Replace the permissions assigned to a role."""
        return self.request(
            "PUT",
            self.service_url(f"/{quote(role_id, safe='')}/permissions"),
            json_body={"permissionIds": permission_ids},
            tenant_id=tenant_id,
        )

    def delete_role(self, role_id: str, tenant_id: str | None = None) -> bool:
        """Delete a role; True when the service answers 204."""
        response = self.send(
            "DELETE",
            self.service_url(f"/{quote(role_id, safe='')}"),
            tenant_id=tenant_id,
        )
        return response is not None and response.status_code == httpx.codes.NO_CONTENT
