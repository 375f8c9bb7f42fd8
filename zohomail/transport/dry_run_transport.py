from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from zohomail.logging import get_logger

logger = get_logger(__name__)

_REDACTED_HEADERS = {"authorization"}
_REDACTED_PARAMS = {"refresh_token", "client_secret"}


class DryRunTransport:
    """
    A transport that records requests to disk instead of sending them.

    - Writes one JSON file per request (method, url, params, body, headers)
    - Redacts the Authorization header and OAuth secrets
    - Performs no network calls
    - Returns a synthetic Zoho success envelope
    """

    def __init__(self, out_dir: Path) -> None:
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.recorded: list[Path] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> Any:
        timestamp = datetime.now(timezone.utc)
        uid = uuid.uuid4().hex

        stem = f"{timestamp.strftime('%Y-%m-%dT%H-%M-%S')}_{uid}"
        out_path = self.out_dir / f"{stem}.json"
        out_path.write_text(
            _dumps(self._build_record(method, url, headers, params, json, timestamp)),
            encoding="utf-8",
        )
        self.recorded.append(out_path)

        logger.info("DRY RUN: recorded %s %s to %s", method, url, out_path)
        return self._synthetic_response(url)

    # -------------------------
    # helpers
    # -------------------------

    def _build_record(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None,
        body: Mapping[str, Any] | None,
        timestamp: datetime,
    ) -> dict:
        return {
            "backend": "DRY_RUN",
            "timestamp": timestamp.isoformat(),
            "method": method,
            "url": url,
            "headers": {
                name: ("<redacted>" if name.lower() in _REDACTED_HEADERS else value)
                for name, value in headers.items()
            },
            "params": {
                name: ("<redacted>" if name in _REDACTED_PARAMS else value)
                for name, value in (params or {}).items()
            },
            "body": dict(body or {}),
        }

    def _synthetic_response(self, url: str) -> dict:
        if "/oauth/" in url:
            return {"access_token": "dry-run-token", "expires_in": 3600}
        return {"status": {"code": 200, "description": "success (dry run)"}, "data": {}}


def _dumps(record: dict) -> str:
    return json.dumps(record, indent=2, sort_keys=True, default=str)
