"""Webhook subscription command DTOs."""

from __future__ import annotations

from typing import Annotated
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.models.webhook import WebhookEventType

MIN_SECRET_LENGTH = 16


def _validate_http_url(value: str) -> str:
    url = value.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError("Webhook URL must use http or https")
    if not parsed.netloc:
        raise ValueError("Webhook URL must include a host")
    return url


class CreateWebhookSubscriptionInput(BaseModel):
    """Registration of a webhook endpoint.

    Attributes:
        url: HTTP(S) endpoint to POST events to.
        event_types: Events to receive; at least one.
        secret: Shared HMAC secret, at least 16 characters.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(max_length=2048)
    event_types: list[WebhookEventType] = Field(min_length=1)
    secret: str = Field(min_length=MIN_SECRET_LENGTH, max_length=256, repr=False)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_http_url(v)


class UpdateWebhookSubscriptionInput(BaseModel):
    """Partial update of a webhook subscription. Omitted fields are kept."""

    model_config = ConfigDict(frozen=True)

    url: Annotated[str, Field(max_length=2048)] | None = None
    event_types: Annotated[list[WebhookEventType], Field(min_length=1)] | None = None
    active: bool | None = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        return None if v is None else _validate_http_url(v)
