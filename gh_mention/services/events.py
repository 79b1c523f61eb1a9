"""Event classification: raw webhook payload → typed event envelope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from gh_mention.logger import get_logger
from gh_mention.schemas import GitHubUser, WebhookPayload

logger = get_logger(__name__)

PULL_REQUEST_EVENTS = frozenset({"pull_request", "pull_request_target"})


class UnexpectedEventError(ValueError):
    """Raised when no notification rule matches the incoming event."""


@dataclass(frozen=True)
class PullRequestEvent:
    action: str
    author: Optional[str]
    title: str
    url: str
    number: Optional[int]
    body: Optional[str]
    head_ref: str
    base_ref: str
    changed_files: int
    commits: int
    merged: bool
    assignee: Optional[str]


@dataclass(frozen=True)
class ReviewRequestedEvent:
    reviewer: Optional[str]
    requester: Optional[str]
    title: str
    url: str


@dataclass(frozen=True)
class IssueEvent:
    action: str
    sender: Optional[str]
    title: str
    url: str
    number: Optional[int]
    body: Optional[str]
    assignee: Optional[str]


@dataclass(frozen=True)
class IssueCommentEvent:
    action: str
    commenter: Optional[str]
    issue_author: Optional[str]
    title: str
    url: str
    number: Optional[int]
    state: str
    body: str
    comment_url: str


@dataclass(frozen=True)
class PullRequestCommentEvent:
    """A comment on the conversation tab of a pull request."""

    action: str
    commenter: Optional[str]
    author: Optional[str]
    title: str
    state: str
    body: str
    comment_url: str


@dataclass(frozen=True)
class PullRequestReviewEvent:
    action: str
    reviewer: Optional[str]
    author: Optional[str]
    title: str
    url: str
    state: str
    review_state: str
    body: Optional[str]
    review_url: str


@dataclass(frozen=True)
class PullRequestReviewCommentEvent:
    action: str
    commenter: Optional[str]
    author: Optional[str]
    title: str
    url: str
    state: str
    body: str
    path: str
    diff_hunk: str
    comment_url: str


EventEnvelope = Union[
    PullRequestEvent,
    ReviewRequestedEvent,
    IssueEvent,
    IssueCommentEvent,
    PullRequestCommentEvent,
    PullRequestReviewEvent,
    PullRequestReviewCommentEvent,
]


def _login(user: Optional[GitHubUser]) -> Optional[str]:
    return user.login if user and user.login else None


def _review_requested(p: WebhookPayload) -> ReviewRequestedEvent:
    pr = p.pull_request
    reviewer = _login(p.requested_reviewer)
    if reviewer is None and p.requested_team and p.requested_team.name:
        reviewer = p.requested_team.name
    return ReviewRequestedEvent(
        reviewer=reviewer,
        requester=_login(p.sender),
        title=(pr and pr.title) or "",
        url=(pr and pr.html_url) or "",
    )


def _pull_request(p: WebhookPayload) -> PullRequestEvent:
    if p.pull_request is None:
        raise UnexpectedEventError("pull_request payload without a pull request.")
    pr = p.pull_request
    return PullRequestEvent(
        action=p.action or "",
        author=_login(pr.user),
        title=pr.title or "",
        url=pr.html_url or "",
        number=pr.number,
        body=pr.body,
        head_ref=(pr.head and pr.head.ref) or "",
        base_ref=(pr.base and pr.base.ref) or "",
        changed_files=pr.changed_files or 0,
        commits=pr.commits or 0,
        merged=bool(pr.merged),
        assignee=_login(p.assignee),
    )


def _comment_parts(p: WebhookPayload) -> dict[str, Any]:
    if p.issue is None or p.comment is None:
        raise UnexpectedEventError("issue_comment payload without issue or comment.")
    return {
        "action": p.action or "",
        "commenter": _login(p.comment.user),
        "title": p.issue.title or "",
        "state": p.issue.state or "",
        "body": p.comment.body or "",
        "comment_url": p.comment.html_url or "",
    }


def _issue_comment(p: WebhookPayload) -> IssueCommentEvent:
    parts = _comment_parts(p)
    return IssueCommentEvent(
        issue_author=_login(p.issue.user),
        url=p.issue.html_url or "",
        number=p.issue.number,
        **parts,
    )


def _pull_request_comment(p: WebhookPayload) -> PullRequestCommentEvent:
    parts = _comment_parts(p)
    return PullRequestCommentEvent(author=_login(p.issue.user), **parts)


def _issue(p: WebhookPayload) -> IssueEvent:
    if p.issue is None:
        raise UnexpectedEventError("issues payload without an issue.")
    return IssueEvent(
        action=p.action or "",
        sender=_login(p.sender),
        title=p.issue.title or "",
        url=p.issue.html_url or "",
        number=p.issue.number,
        body=p.issue.body,
        assignee=_login(p.assignee),
    )


def _pull_request_review(p: WebhookPayload) -> PullRequestReviewEvent:
    if p.pull_request is None or p.review is None:
        raise UnexpectedEventError(
            "pull_request_review payload without pull request or review."
        )
    pr, review = p.pull_request, p.review
    return PullRequestReviewEvent(
        action=p.action or "",
        reviewer=_login(review.user),
        author=_login(pr.user),
        title=pr.title or "",
        url=pr.html_url or "",
        state=pr.state or "",
        review_state=review.state or "",
        body=review.body,
        review_url=review.html_url or "",
    )


def _pull_request_review_comment(p: WebhookPayload) -> PullRequestReviewCommentEvent:
    if p.pull_request is None or p.comment is None:
        raise UnexpectedEventError(
            "pull_request_review_comment payload without pull request or comment."
        )
    pr, comment = p.pull_request, p.comment
    return PullRequestReviewCommentEvent(
        action=p.action or "",
        commenter=_login(comment.user),
        author=_login(pr.user),
        title=pr.title or "",
        url=pr.html_url or "",
        state=pr.state or "",
        body=comment.body or "",
        path=comment.path or "",
        diff_hunk=comment.diff_hunk or "",
        comment_url=comment.html_url or "",
    )


Rule = tuple[
    str,
    Callable[[str, WebhookPayload], bool],
    Callable[[WebhookPayload], EventEnvelope],
]

# Checked in order; the first matching rule wins. review_requested must come
# before the generic pull request rule.
RULES: tuple[Rule, ...] = (
    (
        "review requested",
        lambda e, p: e in PULL_REQUEST_EVENTS and p.action == "review_requested",
        _review_requested,
    ),
    ("pull request", lambda e, p: e in PULL_REQUEST_EVENTS, _pull_request),
    (
        "comment on an issue",
        lambda e, p: e == "issue_comment" and (p.issue is None or p.issue.pull_request is None),
        _issue_comment,
    ),
    ("comment on a pull request", lambda e, p: e == "issue_comment", _pull_request_comment),
    ("issue", lambda e, p: e == "issues", _issue),
    ("pull request review", lambda e, p: e == "pull_request_review", _pull_request_review),
    (
        "pull request review comment",
        lambda e, p: e == "pull_request_review_comment",
        _pull_request_review_comment,
    ),
)


def parse_payload(payload: Mapping[str, Any]) -> WebhookPayload:
    try:
        return WebhookPayload.model_validate(dict(payload or {}))
    except ValidationError as exc:
        raise UnexpectedEventError(f"Malformed webhook payload: {exc}") from exc


def classify(event_name: str, payload: Mapping[str, Any]) -> EventEnvelope:
    """Pick the notification rule for ``event_name`` and build its envelope."""
    event_key = (event_name or "").lower()
    parsed = parse_payload(payload)
    for label, matches, build in RULES:
        if matches(event_key, parsed):
            logger.info("%s (%s) handled as %s", event_key, parsed.action, label)
            return build(parsed)
    raise UnexpectedEventError(f"Unexpected event: {event_name or 'unknown'}")

