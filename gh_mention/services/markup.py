"""GitHub markdown → Slack mrkdwn approximation."""

from __future__ import annotations

from typing import Optional, Sequence

from gh_mention.services.mentions import (
    IdentityMapping,
    extract_mentions,
    resolve_identities,
)

CODE_FENCE = "```"

# Plain substring replacements, applied top to bottom. Anything that merely
# looks like markdown gets rewritten too.
MARKUP_TABLE: tuple[tuple[str, str], ...] = (
    ("##### ", ""),  # h5
    ("#### ", ""),  # h4
    ("### ", ""),  # h3
    ("## ", ""),  # h2
    ("# ", ""),  # h1
    ("***", ""),  # horizontal rule
    ("**", ""),  # bold
    ("* ", "● "),  # unordered list
    ("- [ ] ", "- □ "),  # check box
    ("- [x] ", "- ☑ "),  # check box (checked)
    ("*", ""),  # italic
    ("> ", "| "),  # blockquote
)


def apply_markup_table(text: str) -> str:
    for source, target in MARKUP_TABLE:
        text = text.replace(source, target)
    return text


def replace_mentions(
    text: str, identities: Sequence[str], resolved: Sequence[str]
) -> str:
    """Rewrite ``@login`` as ``<@ID>`` wherever resolution changed the login."""
    for identity, slack_id in zip(identities, resolved):
        if identity != slack_id:
            text = text.replace(f"@{identity}", f"<@{slack_id}>")
    return text


def substitute_mentions(text: Optional[str], mapping: IdentityMapping) -> str:
    text = text or ""
    identities = extract_mentions(text)
    if not identities:
        return text
    return replace_mentions(text, identities, resolve_identities(identities, mapping))


def fence(text: str) -> str:
    return f"{CODE_FENCE}{text}{CODE_FENCE}"


def translate_markup(text: Optional[str], mapping: IdentityMapping) -> str:
    """
    Convert a markdown body for Slack.

    Runs the replacement table, resolves mentions in what is left and wraps
    the whole result in a code fence.
    """
    return fence(substitute_mentions(apply_markup_table(text or ""), mapping))


def quote_lines(text: str) -> str:
    """
    Prefix every line with ``>``.

    Lines are joined without a separator, so a multi-line comment renders as
    one quoted run: ``'a\\nb'`` → ``'>a>b'``.
    """
    return "".join(f">{line}" for line in text.split("\n"))
