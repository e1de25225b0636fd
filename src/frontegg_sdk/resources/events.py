"""Events service client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config import ServiceKey
from ..errors import InvalidParameterError
from .base import FRONTEGG_TENANT_HEADER, AuthenticatedClient


class EventProperties(BaseModel):
    """Default properties rendered by every channel."""

    model_config = ConfigDict(frozen=True, extra="allow")

    title: str
    description: str


class EventChannels(BaseModel):
    """Delivery channels of an event; each is a bool or channel settings."""

    model_config = ConfigDict(frozen=True)

    webhook: bool | dict[str, Any] | None = None
    audit: bool | dict[str, Any] | None = None
    bell: bool | dict[str, Any] | None = None
    slack: bool | dict[str, Any] | None = None
    email: bool | dict[str, Any] | None = None
    sms: bool | dict[str, Any] | None = None
    webpush: bool | dict[str, Any] | None = None

    def is_configured(self) -> bool:
        """Check that at least one channel is enabled."""
        return any(value for value in self.model_dump().values())

    def to_dict(self) -> dict[str, Any]:
        """Channels as sent to the events service."""
        return {key: value for key, value in self.model_dump().items() if value}


class TriggerOptions(BaseModel):
    """Everything needed to trigger one event for one tenant."""

    model_config = ConfigDict(frozen=True)

    event_key: str = Field(..., min_length=1)
    tenant_id: str = Field(..., min_length=1)
    properties: EventProperties
    channels: EventChannels


class EventsClient(AuthenticatedClient):
    """Triggers notification events."""

    service = ServiceKey.EVENTS
    tenant_header = FRONTEGG_TENANT_HEADER

    def trigger(self, options: TriggerOptions) -> bool:
        """Trigger an event.

        Returns:
            True if the events service accepted the event.

        Raises:
            InvalidParameterError: If no channel is configured.
        """
        if not options.channels.is_configured():
            raise InvalidParameterError(
                "At least one channel should be configured",
                parameter="channels",
            )

        response = self.send(
            "POST",
            self.service_url(),
            json_body={
                "eventKey": options.event_key,
                "properties": options.properties.model_dump(),
                "channels": options.channels.to_dict(),
            },
            tenant_id=options.tenant_id,
        )
        return self.succeeded(response)
