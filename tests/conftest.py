"""Shared fixtures."""

from __future__ import annotations

import pytest

from gh_mention.config import RepoContext, Settings
from tests.helpers import SLACK_WEBHOOK_URL


@pytest.fixture
def settings() -> Settings:
    return Settings(
        slack_webhook_url=SLACK_WEBHOOK_URL,
        repo_token="test-token",
        icon_url="https://example.test/icon.png",
        bot_name="mention-bot",
        run_id="4242",
    )


@pytest.fixture
def context() -> RepoContext:
    return RepoContext(owner="octo", repo="reef", sha="abc123")

