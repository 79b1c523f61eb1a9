"""GitHub contents API: loads the login → Slack ID mapping file."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Optional

import httpx
import yaml

from gh_mention.config import DEFAULT_API_URL
from gh_mention.logger import get_logger

HTTP_TIMEOUT_SECONDS = 15

logger = get_logger(__name__)

JSONDict = dict[str, Any]


class MappingLoadError(RuntimeError):
    """Raised when the mapping file cannot be fetched or parsed."""


def parse_mapping(raw: str, path: str = "<mapping>") -> dict[str, str]:
    """
    Parse the YAML mapping document.

    Example
    -------
    'octocat: U0123ABCD' → {'octocat': 'U0123ABCD'}
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MappingLoadError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MappingLoadError(f"{path} must be a mapping of GitHub login to Slack ID.")
    return {str(k): str(v) for k, v in data.items() if v is not None}


def _decode_content(data: Any, path: str) -> str:
    if not isinstance(data, dict) or data.get("type") != "file":
        raise MappingLoadError(f"{path} is not a file.")
    content = data.get("content") or ""
    if data.get("encoding", "base64") != "base64":
        return content
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise MappingLoadError(f"Can not decode {path}: {exc}") from exc


async def load_mapping(
    token: str,
    owner: str,
    repo: str,
    path: str,
    ref: str,
    *,
    api_url: str = DEFAULT_API_URL,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[str, str]:
    """Fetch ``path`` at ``ref`` from ``owner/repo`` and parse it."""
    url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}/contents/{path.lstrip('/')}"
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
    }
    logger.debug("Loading mapping %s@%s from %s/%s", path, ref, owner, repo)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as own_client:
                resp = await own_client.get(url, params={"ref": ref}, headers=headers)
        else:
            resp = await client.get(url, params={"ref": ref}, headers=headers)
    except httpx.HTTPError as exc:
        raise MappingLoadError(f"Can not fetch {path}: {exc}") from exc

    if resp.status_code >= 300:
        raise MappingLoadError(
            f"GitHub error while fetching {path}: {resp.status_code} {resp.text}"
        )
    try:
        data: JSONDict = resp.json()
    except ValueError as exc:
        raise MappingLoadError(f"Unexpected response for {path}: {exc}") from exc
    return parse_mapping(_decode_content(data, path), path)
