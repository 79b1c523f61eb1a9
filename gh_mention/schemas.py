"""Webhook payload schemas"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class _Payload(BaseModel):
    class Config:
        extra = "allow"


class GitHubUser(_Payload):
    login: Optional[str] = None


class GitHubTeam(_Payload):
    name: Optional[str] = None
    slug: Optional[str] = None


class GitHubRef(_Payload):
    ref: Optional[str] = None
    sha: Optional[str] = None


class GitHubRepository(_Payload):
    full_name: Optional[str] = None
    default_branch: Optional[str] = None


class PullRequest(_Payload):
    number: Optional[int] = None
    title: Optional[str] = None
    html_url: Optional[str] = None
    body: Optional[str] = None
    state: Optional[str] = None
    merged: Optional[bool] = None
    changed_files: Optional[int] = None
    commits: Optional[int] = None
    user: Optional[GitHubUser] = None
    head: Optional[GitHubRef] = None
    base: Optional[GitHubRef] = None


class Issue(_Payload):
    number: Optional[int] = None
    title: Optional[str] = None
    html_url: Optional[str] = None
    body: Optional[str] = None
    state: Optional[str] = None
    user: Optional[GitHubUser] = None
    # Present (as an object of links) only when the issue is a pull request.
    pull_request: Optional[dict[str, Any]] = None


class Comment(_Payload):
    body: Optional[str] = None
    html_url: Optional[str] = None
    user: Optional[GitHubUser] = None
    path: Optional[str] = None
    diff_hunk: Optional[str] = None


class Review(_Payload):
    body: Optional[str] = None
    html_url: Optional[str] = None
    state: Optional[str] = None
    user: Optional[GitHubUser] = None


class WebhookPayload(_Payload):
    """
    Subset of a GitHub webhook payload.

    Only fields read by the message builders are declared; everything else
    is kept as extra data.
    """

    action: Optional[str] = None
    sender: Optional[GitHubUser] = None
    repository: Optional[GitHubRepository] = None
    pull_request: Optional[PullRequest] = None
    issue: Optional[Issue] = None
    comment: Optional[Comment] = None
    review: Optional[Review] = None
    assignee: Optional[GitHubUser] = None
    requested_reviewer: Optional[GitHubUser] = None
    requested_team: Optional[GitHubTeam] = None
