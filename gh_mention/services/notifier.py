"""Top-level flow: one GitHub event in, at most one Slack message out."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

import httpx

from gh_mention.config import DEFAULT_SERVER_URL, RepoContext, Settings
from gh_mention.logger import get_logger
from gh_mention.services.events import classify
from gh_mention.services.github import load_mapping
from gh_mention.services.messages import build_message
from gh_mention.services.pipeline import MentionPipeline
from gh_mention.services.slack import DeliveryOptions, deliver, post_message

JOB_TITLE = "gh-mention"

logger = get_logger(__name__)


def delivery_options(settings: Settings) -> DeliveryOptions:
    return DeliveryOptions(
        webhook_url=settings.slack_webhook_url,
        icon_url=settings.icon_url,
        bot_name=settings.bot_name,
    )


class ErrorReporter:
    """Posts a one-line diagnostic when notification fails."""

    def __init__(
        self,
        options: DeliveryOptions,
        owner: str,
        repo: str,
        run_id: Optional[str] = None,
        *,
        server_url: str = DEFAULT_SERVER_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.options = options
        self.owner = owner
        self.repo = repo
        self.run_id = run_id
        self.server_url = server_url.rstrip("/")
        self._client = client

    @property
    def job_url(self) -> Optional[str]:
        if not self.run_id:
            return None
        return f"{self.server_url}/{self.owner}/{self.repo}/actions/runs/{self.run_id}"

    def build_message(self, error: BaseException) -> str:
        job_url = self.job_url
        job = f"<{job_url}|{JOB_TITLE}>" if job_url else JOB_TITLE
        description = " ".join(str(error).split()) or "no details"
        return f"❗ An internal error occurred in {job}: {type(error).__name__}: {description}"

    async def report(self, error: BaseException) -> bool:
        """Send the diagnostic; returns False instead of raising when that fails too."""
        message = self.build_message(error)
        logger.warning(message)
        try:
            await post_message(
                self.options.webhook_url,
                message,
                icon_url=self.options.icon_url,
                bot_name=self.options.bot_name,
                client=self._client,
            )
        except Exception:
            logger.exception("Could not deliver the error report")
            return False
        return True


def make_pipeline(
    settings: Settings,
    context: RepoContext,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> MentionPipeline:
    async def _load() -> Mapping[str, Any]:
        return await load_mapping(
            settings.repo_token,
            context.owner,
            context.repo,
            settings.configuration_path,
            context.sha,
            api_url=settings.api_url,
            client=client,
        )

    return MentionPipeline(_load, delivery_options(settings))


async def report_error(
    error: BaseException,
    settings: Settings,
    context: RepoContext,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    reporter = ErrorReporter(
        delivery_options(settings),
        context.owner,
        context.repo,
        settings.run_id,
        server_url=settings.server_url,
        client=client,
    )
    return await reporter.report(error)


def _log_event(event_name: str, payload: Mapping[str, Any]) -> None:
    sender = payload.get("sender")
    logger.debug("eventName is <%s>.", event_name)
    logger.debug("action is <%s>.", payload.get("action"))
    logger.debug("actor is <%s>.", sender.get("login") if isinstance(sender, Mapping) else None)
    logger.debug("payload: %s", json.dumps(payload, ensure_ascii=False, default=str))


async def notify(
    event_name: str,
    payload: Mapping[str, Any],
    settings: Settings,
    context: RepoContext,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> None:
    """
    Translate one event into a Slack notification and post it.

    Any failure is reported to Slack once through ErrorReporter and then
    re-raised for the caller to turn into a failed run.
    """
    try:
        if settings.debug:
            _log_event(event_name, payload)
        envelope = classify(event_name, payload)
        pipeline = make_pipeline(settings, context, client=client)
        message = await build_message(envelope, pipeline)
        logger.debug("message: %s", message.text)
        await deliver(message, client=client)
    except Exception as exc:
        logger.error("Notification failed: %s", exc)
        await report_error(exc, settings, context, client=client)
        raise
