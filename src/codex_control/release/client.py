"""GitHub releases client for the codex CLI."""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)

RELEASES_URL = "https://api.github.com/repos/openai/codex/releases"
LATEST_URL = RELEASES_URL + "/latest"
USER_AGENT = "codex-control/1.0"
PER_PAGE = 100
REQUEST_TIMEOUT = 30


class ReleaseError(Exception):
    """GitHub returned something other than a usable release listing."""


@dataclass(frozen=True)
class Asset:
    name: str
    url: str
    size: int = 0


@dataclass(frozen=True)
class Release:
    tag: str
    published_at: datetime | None = None
    assets: tuple[Asset, ...] = field(default_factory=tuple)

    def find_asset(self, name: str) -> Asset | None:
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


def _parse_time(value: object) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_release(payload: dict) -> Release:
    assets = tuple(
        Asset(
            name=str(item.get("name", "")),
            url=str(item.get("browser_download_url", "")),
            size=int(item.get("size", 0) or 0),
        )
        for item in payload.get("assets") or []
        if isinstance(item, dict)
    )
    return Release(
        tag=str(payload.get("tag_name", "")),
        published_at=_parse_time(payload.get("published_at")),
        assets=assets,
    )


class ReleaseClient:
    """Fetches release metadata. Token: explicit, else GITHUB_TOKEN, else GH_TOKEN."""

    def __init__(self, token: str | None = None, timeout: float = REQUEST_TIMEOUT):
        self.token = token or os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN") or ""
        self.timeout = timeout

    def headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
            headers["X-GitHub-Api-Version"] = "2022-11-28"
        return headers

    def open(self, url: str):
        """Open a GET request with the client's headers. Caller closes the response."""
        request = urllib.request.Request(url, headers=self.headers(), method="GET")
        try:
            return urllib.request.urlopen(request, timeout=self.timeout)
        except urllib.error.HTTPError as exc:
            raise ReleaseError(f"unexpected GitHub status: {exc.code} {exc.reason}") from exc

    def _get_json(self, url: str) -> object:
        with self.open(url) as response:
            raw = response.read().decode("utf-8")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ReleaseError(f"invalid JSON from {url}: {exc}") from exc

    def latest(self) -> Release:
        payload = self._get_json(LATEST_URL)
        if not isinstance(payload, dict):
            raise ReleaseError("unexpected payload for latest release")
        return parse_release(payload)

    def list_releases(self, limit: int) -> list[Release]:
        """Releases newest first, up to limit, paging until GitHub runs out."""
        limit = max(1, limit)
        releases: list[Release] = []
        page = 1
        while len(releases) < limit:
            payload = self._get_json(f"{RELEASES_URL}?per_page={PER_PAGE}&page={page}")
            if not isinstance(payload, list):
                raise ReleaseError("unexpected payload for release listing")
            if not payload:
                break
            for item in payload:
                if isinstance(item, dict):
                    releases.append(parse_release(item))
                if len(releases) >= limit:
                    break
            page += 1
        logger.debug("fetched %d releases", len(releases))
        return releases
