"""Process configuration, read once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_CONFIGURATION_PATH = ".github/mention-to-slack.yml"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_SERVER_URL = "https://github.com"


class ConfigError(ValueError):
    """Raised when a required setting is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Action inputs"""

    slack_webhook_url: str
    repo_token: str
    configuration_path: str = DEFAULT_CONFIGURATION_PATH
    icon_url: Optional[str] = None
    bot_name: Optional[str] = None
    run_id: Optional[str] = None
    debug: bool = False
    webhook_secret: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    server_url: str = DEFAULT_SERVER_URL


@dataclass(frozen=True)
class RepoContext:
    """Repository and revision the mapping file is read from."""

    owner: str
    repo: str
    sha: str

    @classmethod
    def from_full_name(cls, full_name: str, sha: str) -> "RepoContext":
        owner, sep, repo = (full_name or "").partition("/")
        if not sep or not owner or not repo:
            raise ConfigError(f"Invalid repository name: {full_name!r}")
        return cls(owner=owner, repo=repo, sha=sha)


def _input(env: Mapping[str, str], name: str, *fallbacks: str) -> str:
    """
    Read an action input.

    GitHub Actions exposes `with:` inputs as ``INPUT_<NAME>`` (upper-cased,
    hyphens kept). Plain environment names are accepted as fallbacks so the
    same code runs outside a workflow.
    """
    for key in (f"INPUT_{name.upper()}", *fallbacks):
        value = (env.get(key) or "").strip()
        if value:
            return value
    return ""


def _parse_debug(raw: str) -> bool:
    if not raw:
        return False
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ConfigError("Unknown input. You should set true or false for a debug flag.")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``environ`` (defaults to ``os.environ`` + ``.env``)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    slack_webhook_url = _input(environ, "slack-webhook-url", "SLACK_WEBHOOK_URL")
    if not slack_webhook_url:
        raise ConfigError("Error! Need to set `slack-webhook-url`.")

    repo_token = _input(environ, "repo-token", "GITHUB_TOKEN")
    if not repo_token:
        raise ConfigError("Error! Need to set `repo-token`.")

    return Settings(
        slack_webhook_url=slack_webhook_url,
        repo_token=repo_token,
        configuration_path=_input(environ, "configuration-path", "CONFIGURATION_PATH")
        or DEFAULT_CONFIGURATION_PATH,
        icon_url=_input(environ, "icon-url", "ICON_URL") or None,
        bot_name=_input(environ, "bot-name", "BOT_NAME") or None,
        run_id=_input(environ, "run-id", "GITHUB_RUN_ID") or None,
        debug=_parse_debug(_input(environ, "debug-flag", "DEBUG_FLAG")),
        webhook_secret=(environ.get("GITHUB_WEBHOOK_SECRET") or "").strip() or None,
        api_url=(environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
        server_url=(environ.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
    )


def load_repo_context(environ: Optional[Mapping[str, str]] = None) -> RepoContext:
    """Repository context of the running workflow (``GITHUB_REPOSITORY``/``GITHUB_SHA``)."""
    env = os.environ if environ is None else environ
    sha = (env.get("GITHUB_SHA") or "").strip()
    if not sha:
        raise ConfigError("GITHUB_SHA is not set.")
    return RepoContext.from_full_name(env.get("GITHUB_REPOSITORY") or "", sha)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for the webhook receiver (FastAPI dependency)."""
    return load_settings()
