from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from zohomail.common.config import Backend


@dataclass(frozen=True, slots=True)
class ClientSettings:
    backend: Backend = "live"
    timeout: float | None = 30.0
    continue_on_fail: bool = False

    # Body field marking a POST /messages call as a draft.
    draft_field: str = "mode"
    draft_value: Any = "draft"

    dry_run_dir: Path | None = None

DEFAULT_SETTINGS = ClientSettings()
