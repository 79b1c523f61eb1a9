"""Slack incoming-webhook delivery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from gh_mention.logger import get_logger

HTTP_TIMEOUT_SECONDS = 15

logger = get_logger(__name__)

JSONDict = dict[str, Any]


class DeliveryError(RuntimeError):
    """Raised when Slack rejects or never receives a message."""


@dataclass(frozen=True)
class DeliveryOptions:
    webhook_url: str
    icon_url: Optional[str] = None
    bot_name: Optional[str] = None


@dataclass(frozen=True)
class NotificationMessage:
    """Formatted text plus where and how to post it."""

    text: str
    options: DeliveryOptions


def build_payload(
    text: str, *, icon_url: Optional[str] = None, bot_name: Optional[str] = None
) -> JSONDict:
    payload: JSONDict = {"text": text, "link_names": 0}
    if bot_name:
        payload["username"] = bot_name
    if icon_url:
        payload["icon_url"] = icon_url
    return payload


async def post_message(
    webhook_url: str,
    text: str,
    *,
    icon_url: Optional[str] = None,
    bot_name: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> None:
    """POST ``text`` to a Slack incoming webhook."""
    payload = build_payload(text, icon_url=icon_url, bot_name=bot_name)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as own_client:
                resp = await own_client.post(webhook_url, json=payload)
        else:
            resp = await client.post(webhook_url, json=payload)
    except httpx.HTTPError as exc:
        raise DeliveryError(f"Slack delivery failed: {exc}") from exc
    if resp.status_code >= 300:
        raise DeliveryError(f"Slack error: {resp.status_code} {resp.text}")
    logger.info("Posted %d chars to Slack", len(text))


async def deliver(
    message: NotificationMessage, *, client: Optional[httpx.AsyncClient] = None
) -> None:
    options = message.options
    await post_message(
        options.webhook_url,
        message.text,
        icon_url=options.icon_url,
        bot_name=options.bot_name,
        client=client,
    )
