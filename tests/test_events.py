"""Unit tests for event classification."""

from __future__ import annotations

import pytest

from gh_mention.services.events import (
    IssueCommentEvent,
    IssueEvent,
    PullRequestCommentEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    ReviewRequestedEvent,
    UnexpectedEventError,
    classify,
)
from tests.helpers import (
    issue_comment_payload,
    issue_payload,
    pull_request_payload,
    review_payload,
)


def test_review_requested_takes_precedence_over_pull_request() -> None:
    payload = pull_request_payload(
        "review_requested",
        requested_reviewer={"login": "bob"},
    )
    envelope = classify("pull_request", payload)
    assert isinstance(envelope, ReviewRequestedEvent)
    assert envelope.reviewer == "bob"
    assert envelope.requester == "alice"


def test_review_requested_falls_back_to_team_name() -> None:
    payload = pull_request_payload("review_requested", requested_team={"name": "core"})
    envelope = classify("pull_request", payload)
    assert isinstance(envelope, ReviewRequestedEvent)
    assert envelope.reviewer == "core"


@pytest.mark.parametrize(
    ("event_name", "payload", "expected"),
    [
        pytest.param("pull_request", pull_request_payload(), PullRequestEvent, id="pull_request"),
        pytest.param(
            "pull_request_target", pull_request_payload("closed"), PullRequestEvent, id="target"
        ),
        pytest.param("issues", issue_payload(), IssueEvent, id="issues"),
        pytest.param(
            "issue_comment", issue_comment_payload(), IssueCommentEvent, id="issue_comment"
        ),
        pytest.param(
            "issue_comment",
            issue_comment_payload(on_pull_request=True),
            PullRequestCommentEvent,
            id="comment_on_pull_request",
        ),
        pytest.param(
            "pull_request_review", review_payload(), PullRequestReviewEvent, id="review"
        ),
        pytest.param(
            "pull_request_review_comment",
            {**pull_request_payload("created"), "comment": {"body": "nit", "path": "a.py"}},
            PullRequestReviewCommentEvent,
            id="review_comment",
        ),
    ],
)
def test_classify_routes_by_event(event_name: str, payload: dict, expected: type) -> None:
    assert isinstance(classify(event_name, payload), expected)


def test_pull_request_fields() -> None:
    envelope = classify("pull_request", pull_request_payload(changed_files=3, commits=2))
    assert envelope == PullRequestEvent(
        action="opened",
        author="alice",
        title="Tidy reef",
        url="https://github.com/octo/reef/pull/7",
        number=7,
        body="Fixes the reef.",
        head_ref="feature/tidy",
        base_ref="main",
        changed_files=3,
        commits=2,
        merged=False,
        assignee=None,
    )


def test_missing_actor_is_kept_as_none() -> None:
    envelope = classify("issues", issue_payload(sender=None))
    assert isinstance(envelope, IssueEvent)
    assert envelope.sender is None


@pytest.mark.parametrize("event_name", ["push", "release", "", "workflow_run"])
def test_unexpected_event(event_name: str) -> None:
    with pytest.raises(UnexpectedEventError, match="Unexpected event"):
        classify(event_name, {"action": "created"})


def test_pull_request_event_without_pull_request_is_rejected() -> None:
    with pytest.raises(UnexpectedEventError):
        classify("pull_request", {"action": "opened"})


def test_malformed_payload_is_rejected() -> None:
    with pytest.raises(UnexpectedEventError, match="Malformed"):
        classify("issues", {"issue": {"number": "not-a-number"}})
