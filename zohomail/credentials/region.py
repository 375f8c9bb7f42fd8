from __future__ import annotations

from dataclasses import dataclass
from typing import get_args

from zohomail.common.config import DataCenter

DEFAULT_DATA_CENTER: DataCenter = "com"
DATA_CENTERS: tuple[str, ...] = get_args(DataCenter)


@dataclass(frozen=True, slots=True)
class RegionEndpoints:
    data_center: DataCenter
    mail_base_url: str
    api_base_url: str
    accounts_url: str
    auth_url: str
    token_url: str


def normalize_data_center(value: object) -> DataCenter:
    """Map a data-center code to one of the known regions.

    Accepts "eu", "EU", " .eu "; anything unrecognised falls back to "com".
    """
    if not isinstance(value, str):
        return DEFAULT_DATA_CENTER
    code = value.strip().lower().lstrip(".")
    if code in DATA_CENTERS:
        return code  # type: ignore[return-value]
    return DEFAULT_DATA_CENTER


def resolve_region(data_center: object = None) -> RegionEndpoints:
    dc = normalize_data_center(data_center)
    mail_base_url = f"https://mail.zoho.{dc}"
    accounts_url = f"https://accounts.zoho.{dc}"
    return RegionEndpoints(
        data_center=dc,
        mail_base_url=mail_base_url,
        api_base_url=f"{mail_base_url}/api",
        accounts_url=accounts_url,
        auth_url=f"{accounts_url}/oauth/v2/auth",
        token_url=f"{accounts_url}/oauth/v2/token",
    )
