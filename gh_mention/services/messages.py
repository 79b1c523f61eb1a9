"""Slack message builders, one per event envelope type."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from gh_mention.services.events import (
    EventEnvelope,
    IssueCommentEvent,
    IssueEvent,
    PullRequestCommentEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    ReviewRequestedEvent,
)
from gh_mention.services.markup import CODE_FENCE
from gh_mention.services.pipeline import MentionPipeline
from gh_mention.services.slack import NotificationMessage

NO_DESCRIPTION = "No description provided."

Builder = Callable[[Any, MentionPipeline], Awaitable[NotificationMessage]]


class MissingActorError(ValueError):
    """Raised when an event lacks a login the message needs."""


def _require(login: Optional[str], role: str) -> str:
    if not login:
        raise MissingActorError(f"Can not find {role}.")
    return login


def _counts_line(changed_files: int, commits: int) -> str:
    files_label = "Changed files" if changed_files > 1 else "Changed file"
    commits_label = "Commits" if commits > 1 else "Commit"
    return f">{files_label} : {changed_files}, {commits_label} : {commits}"


async def _assignment_line(
    action: str, assignee: Optional[str], pipeline: MentionPipeline
) -> str:
    login = _require(assignee, "assigned user")
    (target,) = await pipeline.resolve_actors([login])
    verb = "Added" if action == "assigned" else "Removed"
    return f">{verb} : {target}"


async def build_pull_request(
    event: PullRequestEvent, pipeline: MentionPipeline
) -> NotificationMessage:
    author = _require(event.author, "pull requested user")
    (user,) = await pipeline.resolve_actors([author])

    action = event.action
    into = f"into `{event.base_ref}` from `{event.head_ref}` <{event.url}|{event.title}> #{event.number}"
    if action in ("opened", "edited"):
        body = await pipeline.translate_body(event.body or NO_DESCRIPTION)
        counts = _counts_line(event.changed_files, event.commits)
        text = f"*{user} has {action} PULL REQUEST {into}*\n{counts}\n{body}\n{event.url}"
    elif action in ("assigned", "unassigned"):
        line = await _assignment_line(action, event.assignee, pipeline)
        text = f"*{user} has {action} PULL REQUEST {into}*\n{line}\n{event.url}"
    elif action == "closed" and event.merged:
        counts = _counts_line(event.changed_files, event.commits)
        text = f"*{user} has merged PULL REQUEST {into}*\n{counts}\n{event.url}"
    elif action == "closed":
        text = f"*{user} has {action} PULL REQUEST with unmerged commits {into}*\n{event.url}"
    else:
        text = f"*{user} has {action} PULL REQUEST {into}*\n{event.url}"
    return pipeline.message(text)


async def build_review_requested(
    event: ReviewRequestedEvent, pipeline: MentionPipeline
) -> NotificationMessage:
    reviewer = _require(event.reviewer, "review requested user")
    requester = _require(event.requester, "review request user")
    reviewer_id, requester_id = await pipeline.resolve_actors([reviewer, requester])
    return pipeline.message(
        f"*{reviewer_id} has been REQUESTED to REVIEW <{event.url}|{event.title}> by {requester_id}*\n{event.url}"
    )


async def build_pull_request_review(
    event: PullRequestReviewEvent, pipeline: MentionPipeline
) -> NotificationMessage:
    reviewer = _require(event.reviewer, "review user")
    author = _require(event.author, "pull request user")
    reviewer_id, author_id = await pipeline.resolve_actors([reviewer, author])

    link = f"<{event.url}|{event.title}>"
    if event.review_state == "approved":
        text = (
            f"*{reviewer_id} has approved PULL REQUEST {link}, which created by {author_id}*\n"
            f"{event.review_url}"
        )
    else:
        body = await pipeline.translate_body(event.body)
        text = (
            f"*{reviewer_id} has {event.action} a REVIEW on {event.state} PULL REQUEST {link},"
            f" which created by {author_id}*\n{body}\n{event.review_url}"
        )
    return pipeline.message(text)


async def build_pull_request_review_comment(
    event: PullRequestReviewCommentEvent, pipeline: MentionPipeline
) -> NotificationMessage:
    commenter = _require(event.commenter, "review comment user")
    author = _require(event.author, "pull request user")
    commenter_id, author_id = await pipeline.resolve_actors([commenter, author])
    return pipeline.message(
        f"*{commenter_id} has {event.action} a COMMENT REVIEW on {event.state} PULL REQUEST"
        f" <{event.url}|{event.title}>, which created by {author_id}*\n \n"
        f"{CODE_FENCE}{event.path}\n{event.diff_hunk}{CODE_FENCE}\n"
        f"{event.body}\n{event.comment_url}"
    )


async def build_issue(event: IssueEvent, pipeline: MentionPipeline) -> NotificationMessage:
    sender = _require(event.sender, "issue user")
    (user,) = await pipeline.resolve_actors([sender])

    action = event.action
    link = f"<{event.url}|{event.title}>"
    if action in ("opened", "edited"):
        body = await pipeline.translate_body(
            NO_DESCRIPTION if event.body is None else event.body
        )
        text = f"*{user} has {action} an ISSUE {link} #{event.number}*\n{body}\n{event.url}"
    elif action in ("assigned", "unassigned"):
        line = await _assignment_line(action, event.assignee, pipeline)
        text = f"*{user} has {action} an ISSUE {link}* #{event.number}\n{line}\n{event.url}"
    else:
        text = f"*{user} has {action} an ISSUE {link}* #{event.number}\n{event.url}"
    return pipeline.message(text)


async def build_issue_comment(
    event: IssueCommentEvent, pipeline: MentionPipeline
) -> NotificationMessage:
    commenter = _require(event.commenter, "comment user")
    author = _require(event.issue_author, "issue user")
    commenter_id, author_id = await pipeline.resolve_actors([commenter, author])
    quote = await pipeline.quote_comment(event.body)
    return pipeline.message(
        f"*{commenter_id} has {event.action} a COMMENT on a {event.state} ISSUE"
        f" <{event.url}|{event.title}> #{event.number}, which created by {author_id}*\n"
        f"{quote}\n{event.comment_url}"
    )


async def build_pull_request_comment(
    event: PullRequestCommentEvent, pipeline: MentionPipeline
) -> NotificationMessage:
    commenter = _require(event.commenter, "comment user")
    author = _require(event.author, "pull request user")
    commenter_id, author_id = await pipeline.resolve_actors([commenter, author])
    quote = await pipeline.quote_comment(event.body)
    return pipeline.message(
        f"*{commenter_id} has {event.action} a COMMENT on a {event.state} PULL REQUEST,"
        f" which created by {author_id} <{event.comment_url}|{event.title}>*\n"
        f"{quote}\n{event.comment_url}"
    )


BUILDERS: dict[type, Builder] = {
    PullRequestEvent: build_pull_request,
    ReviewRequestedEvent: build_review_requested,
    PullRequestReviewEvent: build_pull_request_review,
    PullRequestReviewCommentEvent: build_pull_request_review_comment,
    IssueEvent: build_issue,
    IssueCommentEvent: build_issue_comment,
    PullRequestCommentEvent: build_pull_request_comment,
}


async def build_message(
    event: EventEnvelope, pipeline: MentionPipeline
) -> NotificationMessage:
    return await BUILDERS[type(event)](event, pipeline)
