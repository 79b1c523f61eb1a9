"""Action entry point: notify Slack about the event that triggered the workflow."""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Mapping, Optional

from dotenv import load_dotenv

from gh_mention.config import ConfigError, load_repo_context, load_settings
from gh_mention.logger import get_logger, setup_logging
from gh_mention.services.notifier import notify, report_error
from gh_mention.utils import read_event_payload

logger = get_logger("gh_mention")


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    if environ is None:
        load_dotenv()
        environ = os.environ
    try:
        settings = load_settings(environ)
        context = load_repo_context(environ)
    except ConfigError as exc:
        setup_logging()
        logger.error("%s", exc)
        return 2
    setup_logging(settings.debug)

    event_name = environ.get("GITHUB_EVENT_NAME") or ""
    event_path = environ.get("GITHUB_EVENT_PATH") or ""
    try:
        payload = read_event_payload(event_path) if event_path else {}
    except (OSError, ValueError) as exc:
        logger.error("Can not read event payload %s: %s", event_path, exc)
        asyncio.run(report_error(exc, settings, context))
        return 1

    try:
        asyncio.run(notify(event_name, payload, settings, context))
    except Exception:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
