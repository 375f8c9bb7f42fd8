from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from zohomail.common.config import DataCenter
from zohomail.credentials.region import DEFAULT_DATA_CENTER, normalize_data_center

DEFAULT_SCOPE = (
    "ZohoMail.messages.ALL,ZohoMail.accounts.READ,ZohoMail.folders.ALL,"
    "ZohoMail.settings.ALL,ZohoContacts.userphoto.READ,ZohoContacts.contactapi.READ"
)


@dataclass(slots=True)
class TokenRecord:
    # Produced by a refresh; never carries a refresh token.
    access_token: str
    expires_in: int
    expires_at: int


@dataclass(frozen=True, slots=True)
class OAuthTokenData:
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    expires_at: int | None = None  # epoch milliseconds

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "OAuthTokenData":
        if not data:
            return cls()
        return cls(
            access_token=_optional_str(data.get("access_token")),
            refresh_token=_optional_str(data.get("refresh_token")),
            expires_in=_optional_int(data.get("expires_in")),
            expires_at=_optional_int(data.get("expires_at")),
        )

    def with_token(self, record: TokenRecord) -> "OAuthTokenData":
        """Swap in a refreshed access token, keeping the original refresh token."""
        return replace(
            self,
            access_token=record.access_token,
            expires_in=record.expires_in,
            expires_at=record.expires_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in (
                ("access_token", self.access_token),
                ("refresh_token", self.refresh_token),
                ("expires_in", self.expires_in),
                ("expires_at", self.expires_at),
            )
            if value is not None
        }


@dataclass(slots=True)
class Credentials:
    # OAuth client registration
    client_id: str | None = None
    client_secret: str | None = None

    # Region
    data_center: DataCenter = DEFAULT_DATA_CENTER
    auth_url: str | None = None
    access_token_url: str | None = None
    scope: str = DEFAULT_SCOPE

    # Token state, owned by the host and swapped by the dispatcher on refresh
    oauth_token_data: OAuthTokenData | None = None

    def __post_init__(self) -> None:
        self.data_center = normalize_data_center(self.data_center)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Credentials":
        """Build from the host's credential mapping (camelCase or snake_case keys)."""

        def pick(*keys: str) -> Any:
            for key in keys:
                value = data.get(key)
                if value not in (None, ""):
                    return value
            return None

        token_value = pick("oauthTokenData", "oauth_token_data")
        if isinstance(token_value, OAuthTokenData):
            token_data: OAuthTokenData | None = token_value
        elif isinstance(token_value, Mapping):
            token_data = OAuthTokenData.from_mapping(token_value)
        else:
            token_data = None

        return cls(
            client_id=_optional_str(pick("clientId", "client_id")),
            client_secret=_optional_str(pick("clientSecret", "client_secret")),
            data_center=pick("dataCenter", "data_center") or DEFAULT_DATA_CENTER,
            auth_url=_optional_str(pick("authUrl", "auth_url")),
            access_token_url=_optional_str(pick("accessTokenUrl", "access_token_url")),
            scope=str(pick("scope") or DEFAULT_SCOPE),
            oauth_token_data=token_data,
        )

    @property
    def access_token(self) -> str | None:
        if self.oauth_token_data is None:
            return None
        return self.oauth_token_data.access_token

    @property
    def refresh_token(self) -> str | None:
        if self.oauth_token_data is None:
            return None
        return self.oauth_token_data.refresh_token

    def apply_token(self, record: TokenRecord) -> OAuthTokenData:
        current = self.oauth_token_data or OAuthTokenData()
        updated = current.with_token(record)
        self.oauth_token_data = updated
        return updated


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
