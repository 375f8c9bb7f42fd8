from pathlib import Path

from zohomail.common.config import Backend
from zohomail.runtime.paths import resolve_dry_run_out_dir
from zohomail.transport.dry_run_transport import DryRunTransport
from zohomail.transport.http_transport import DEFAULT_TIMEOUT, HttpTransport, RequestsTransport


def build_transport(
    backend: Backend,
    *,
    out_dir: Path | str | None = None,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> HttpTransport:
    if backend == "live":
        return RequestsTransport(timeout=timeout)
    elif backend == "dry_run":
        out_path = Path(out_dir) if out_dir is not None else resolve_dry_run_out_dir()
        return DryRunTransport(out_path)
    else:
        raise ValueError(f"Unknown backend: {backend}")
