"""Per-invocation helper shared by the message builders."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, Sequence

from gh_mention.logger import get_logger
from gh_mention.services.markup import (
    apply_markup_table,
    quote_lines,
    substitute_mentions,
    translate_markup,
)
from gh_mention.services.mentions import (
    IdentityMapping,
    display_identity,
    extract_mentions,
    resolve_identities,
)
from gh_mention.services.slack import DeliveryOptions, NotificationMessage

MappingLoader = Callable[[], Awaitable[IdentityMapping]]

logger = get_logger(__name__)


class MentionPipeline:
    """
    Mapping-backed resolution and body translation for one event.

    Every resolution goes back to ``load_mapping``; the mapping is never
    cached between calls.
    """

    def __init__(self, load_mapping: MappingLoader, options: DeliveryOptions) -> None:
        self._load_mapping = load_mapping
        self.options = options

    async def resolve(self, identities: Sequence[str]) -> list[str]:
        mapping = await self._load_mapping()
        return resolve_identities(identities, mapping)

    async def resolve_actors(self, identities: Sequence[str]) -> list[str]:
        """Resolve logins in one batch and return their display forms."""
        resolved = await self.resolve(identities)
        return [display_identity(i, r) for i, r in zip(identities, resolved)]

    async def _mapping_for(self, text: str) -> IdentityMapping:
        """Load the mapping only when ``text`` mentions someone."""
        identities = extract_mentions(text)
        if not identities:
            return {}
        logger.debug("Resolving %d mention(s) in body", len(identities))
        return await self._load_mapping()

    async def translate_body(self, text: Optional[str]) -> str:
        """Markdown body → fenced Slack text with resolved mentions."""
        body = text or ""
        return translate_markup(body, await self._mapping_for(apply_markup_table(body)))

    async def quote_comment(self, text: Optional[str]) -> str:
        """Comment body with mentions resolved, rendered as a quote."""
        body = text or ""
        return quote_lines(substitute_mentions(body, await self._mapping_for(body)))

    def message(self, text: str) -> NotificationMessage:
        return NotificationMessage(text=text, options=self.options)
