"""@mention extraction and GitHub → Slack identity resolution."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Sequence

IdentityMapping = Mapping[str, Any]

# GitHub logins: alphanumerics with single inner hyphens, at most 39 chars.
# The lookbehind keeps e-mail addresses (``dev@example.com``) out.
MENTION_RE = re.compile(
    r"(?<![A-Za-z0-9])@([A-Za-z0-9](?:-?[A-Za-z0-9]){0,38})(?![A-Za-z0-9-]*[A-Za-z0-9])"
)


def extract_mentions(text: Optional[str]) -> list[str]:
    """
    Return the distinct ``@login`` names in ``text``, first-seen order.

    Example
    -------
    '@alice reviewed @bob's @alice change' → ['alice', 'bob']
    """
    if not text:
        return []
    seen: dict[str, None] = {}
    for match in MENTION_RE.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def resolve_identities(
    identities: Sequence[str], mapping: IdentityMapping
) -> list[str]:
    """Map each login to its Slack ID; unmapped logins pass through unchanged."""
    resolved: list[str] = []
    for identity in identities:
        slack_id = mapping.get(identity)
        resolved.append(identity if slack_id is None else str(slack_id))
    return resolved


def display_identity(identity: str, resolved: str) -> str:
    """``<@ID>`` when a mapping applied, ``@login`` otherwise."""
    if resolved == identity:
        return f"@{identity}"
    return f"<@{resolved}>"
