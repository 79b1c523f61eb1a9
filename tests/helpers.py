"""Test helpers: payload factories and a stubbed GitHub/Slack."""

from __future__ import annotations

import base64
import json
import typing as typ

import httpx

from gh_mention.services.pipeline import MentionPipeline
from gh_mention.services.slack import DeliveryOptions

SLACK_WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"
MAPPING_YAML = "alice: U111\nbob: U222\n"


class FakeServices:
    """Answers the GitHub contents API and records Slack webhook posts."""

    def __init__(
        self,
        mapping_yaml: str = MAPPING_YAML,
        *,
        mapping_status: int = 200,
        slack_statuses: typ.Sequence[int] = (200,),
    ) -> None:
        self.mapping_yaml = mapping_yaml
        self.mapping_status = mapping_status
        self.slack_statuses = list(slack_statuses)
        self.mapping_requests: list[httpx.Request] = []
        self.slack_posts: list[dict[str, typ.Any]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.github.com":
            self.mapping_requests.append(request)
            if self.mapping_status != 200:
                return httpx.Response(self.mapping_status, json={"message": "Not Found"})
            content = base64.b64encode(self.mapping_yaml.encode("utf-8")).decode("ascii")
            return httpx.Response(
                200,
                json={"type": "file", "encoding": "base64", "content": content},
            )
        self.slack_posts.append(json.loads(request.content.decode("utf-8")))
        index = min(len(self.slack_posts), len(self.slack_statuses)) - 1
        return httpx.Response(self.slack_statuses[index], text="ok")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def make_pipeline(
    mapping: dict[str, str] | None = None,
) -> tuple[MentionPipeline, list[int]]:
    """Pipeline backed by an in-memory mapping; the list counts loads."""
    loads: list[int] = []

    async def _load() -> dict[str, str]:
        loads.append(1)
        return dict(mapping or {})

    return MentionPipeline(_load, DeliveryOptions(webhook_url=SLACK_WEBHOOK_URL)), loads


def user(login: str | None) -> dict[str, typ.Any] | None:
    return {"login": login} if login else None


def pull_request_payload(
    action: str = "opened",
    *,
    author: str | None = "alice",
    body: str | None = "Fixes the reef.",
    changed_files: int = 1,
    commits: int = 1,
    merged: bool = False,
    **extra: typ.Any,
) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "action": action,
        "sender": user(author),
        "repository": {"full_name": "octo/reef", "default_branch": "main"},
        "pull_request": {
            "number": 7,
            "title": "Tidy reef",
            "html_url": "https://github.com/octo/reef/pull/7",
            "body": body,
            "state": "closed" if action == "closed" else "open",
            "merged": merged,
            "changed_files": changed_files,
            "commits": commits,
            "user": user(author),
            "head": {"ref": "feature/tidy"},
            "base": {"ref": "main"},
        },
    }
    payload.update(extra)
    return payload


def issue_payload(
    action: str = "opened",
    *,
    sender: str | None = "alice",
    body: str | None = "It is broken.",
    **extra: typ.Any,
) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "action": action,
        "sender": user(sender),
        "issue": {
            "number": 3,
            "title": "Reef is broken",
            "html_url": "https://github.com/octo/reef/issues/3",
            "body": body,
            "state": "open",
            "user": user("carol"),
        },
    }
    payload.update(extra)
    return payload


def issue_comment_payload(
    body: str = "Looks good",
    *,
    commenter: str | None = "bob",
    on_pull_request: bool = False,
) -> dict[str, typ.Any]:
    payload = issue_payload("created", sender=commenter)
    payload["comment"] = {
        "body": body,
        "html_url": "https://github.com/octo/reef/issues/3#issuecomment-1",
        "user": user(commenter),
    }
    if on_pull_request:
        payload["issue"]["pull_request"] = {
            "html_url": "https://github.com/octo/reef/pull/3"
        }
    return payload


def review_payload(
    state: str = "commented",
    *,
    body: str | None = "Please rename",
    reviewer: str | None = "bob",
) -> dict[str, typ.Any]:
    payload = pull_request_payload("submitted")
    payload["review"] = {
        "state": state,
        "body": body,
        "html_url": "https://github.com/octo/reef/pull/7#pullrequestreview-9",
        "user": user(reviewer),
    }
    return payload
