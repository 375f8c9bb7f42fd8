from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_runtime_dir

APP_NAME = "zohomail"
DRY_RUN_DIR_ENV = "ZOHOMAIL_DRY_RUN_DIR"


def resolve_dry_run_out_dir() -> Path:
    """
    Directory for dry-run request records.

    ZOHOMAIL_DRY_RUN_DIR wins; otherwise platformdirs' per-user runtime dir.
    """
    override = os.environ.get(DRY_RUN_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path(user_runtime_dir(APP_NAME, appauthor=False)) / "dry_run"
