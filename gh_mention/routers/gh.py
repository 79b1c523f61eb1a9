"""Ruter GH"""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse

from gh_mention.config import ConfigError, RepoContext, Settings, get_settings
from gh_mention.logger import get_logger, setup_logging
from gh_mention.services.notifier import notify
from gh_mention.utils import gh_verify

router = APIRouter(prefix="/wh", tags=["github"])

logger = get_logger(__name__)


@router.post("", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    x_hub_signature_256: str | None = Header(None),
    x_github_event: str | None = Header(None),
    settings: Settings = Depends(get_settings),
):
    """
    GitHub webhook endpoint.

    Each delivery is handled as a single, independent notification: the
    payload signature is validated against `X-Hub-Signature-256`, the
    mapping file is read from the repository's default branch and the
    resulting message is posted to the configured Slack webhook.
    """
    body = await request.body()
    if not settings.webhook_secret:
        raise HTTPException(503, "Webhook secret is not configured")
    if not gh_verify(settings.webhook_secret, body, x_hub_signature_256):
        raise HTTPException(401, "Invalid signature")

    try:
        payload = json.loads(body or b"{}")
    except ValueError as exc:
        raise HTTPException(400, "Body is not JSON") from exc
    if not isinstance(payload, dict):
        raise HTTPException(400, "Body is not a JSON object")

    event = x_github_event or "unknown"
    if event == "ping":
        return "pong"

    repository = payload.get("repository") or {}
    try:
        context = RepoContext.from_full_name(
            repository.get("full_name") or "",
            repository.get("default_branch") or "HEAD",
        )
    except ConfigError as exc:
        raise HTTPException(400, str(exc)) from exc

    setup_logging(settings.debug)
    logger.info("GitHub %s delivery for %s/%s", event, context.owner, context.repo)
    try:
        await notify(event, payload, settings, context)
    except Exception as exc:
        raise HTTPException(500, f"{event} event failed: {exc}") from exc
    return f"{event} event forwarded"
