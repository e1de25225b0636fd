"""Resource clients built on the authenticated request contract."""

from __future__ import annotations

from .account_roles import AccountRolesClient
from .api_auth import ApiAuthClient
from .base import AuthenticatedClient
from .events import EventChannels, EventProperties, EventsClient, TriggerOptions
from .general_auth import GeneralAuthClient
from .permissions import PermissionsClient
from .roles import RolesClient
from .users import UsersClient

__all__ = [
    "AccountRolesClient",
    "ApiAuthClient",
    "AuthenticatedClient",
    "EventChannels",
    "EventProperties",
    "EventsClient",
    "GeneralAuthClient",
    "PermissionsClient",
    "RolesClient",
    "TriggerOptions",
    "UsersClient",
]
