"""Last-used timestamps for auth profiles.

Stored as {"<file name>": "<RFC 3339 UTC>"} next to the profiles.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from codex_control.auth.profiles import USAGE_STATE_FILE

logger = logging.getLogger(__name__)


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class UsageTracker:
    """Reads and records when each auth profile was last installed."""

    def __init__(self, path: Path, data: dict[str, datetime] | None = None):
        self.path = path
        self._data: dict[str, datetime] = dict(data or {})

    @classmethod
    def load(cls, directory: Path) -> UsageTracker:
        path = directory / USAGE_STATE_FILE
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return cls(path)
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a JSON object")
        data = {}
        for name, value in raw.items():
            ts = _parse_timestamp(value)
            if ts is None:
                logger.debug("ignoring unparsable timestamp for %s: %r", name, value)
                continue
            data[name] = ts
        return cls(path, data)

    def last_used(self, name: str) -> datetime | None:
        return self._data.get(name)

    def touch(self, name: str, ts: datetime | None = None) -> None:
        self._data[name] = ts if ts is not None else datetime.now(timezone.utc)
        self._save()

    def _save(self) -> None:
        payload = {
            name: ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
            for name, ts in self._data.items()
        }
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix="codex-auth-usage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f)
                f.write("\n")
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
