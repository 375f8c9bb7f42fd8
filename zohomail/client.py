from pathlib import Path
from typing import Any, Iterable, Mapping, get_args

from zohomail.auth.token_refresh import TokenRefresher
from zohomail.common.config import Backend
from zohomail.common.settings import DEFAULT_SETTINGS, ClientSettings
from zohomail.credentials import Credentials, OAuthTokenData
from zohomail.executor import BatchExecutor, OutputRecord
from zohomail.logging import get_logger
from zohomail.operations.router import OperationRouter
from zohomail.options import OptionEntry, OptionProvider
from zohomail.transport.dispatch import RequestDispatcher
from zohomail.transport.factory import build_transport
from zohomail.transport.http_transport import HttpTransport

logger = get_logger(__name__)


class ZohoMailClient:
    def __init__(
        self,
        *,
        credentials: Mapping[str, Any] | Credentials | None = None,
        settings: Mapping[str, Any] | None = None,
        transport: HttpTransport | None = None,
    ) -> None:

        self.credentials: Credentials | None = None
        self.settings: ClientSettings = self.update_settings(settings)
        self._injected_transport = transport
        self._transport = transport

        if credentials is not None:
            self.update_credentials(credentials)

    def update_credentials(
        self, config: Mapping[str, Any] | Credentials | None = None, **kwargs: Any
    ) -> Credentials:
        if isinstance(config, Credentials) and not kwargs:
            self.credentials = config
            return config

        data: dict[str, Any] = {}
        if isinstance(config, Credentials):
            data.update(self._credentials_to_mapping(config))
        elif config:
            data.update(self._camel_case_keys(config))
        data.update(self._camel_case_keys(kwargs))

        if not data.get("clientId"):
            raise ValueError("Missing required credential field: clientId")

        self.credentials = Credentials.from_mapping(data)
        return self.credentials

    def update_settings(
        self, settings: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> ClientSettings:
        data: dict[str, Any] = {}
        if settings:
            data.update(settings)
        data.update(kwargs)

        backend = data.get("backend") or DEFAULT_SETTINGS.backend
        allowed_backends: set[str] = set(get_args(Backend))
        if backend not in allowed_backends:
            raise ValueError(f"Invalid backend: {backend}")

        continue_on_fail = self._coerce_bool(
            data.get("continue_on_fail", data.get("continueOnFail"))
        )
        timeout = self._coerce_timeout(data.get("timeout", DEFAULT_SETTINGS.timeout))
        dry_run_dir = data.get("dry_run_dir")

        self.settings = ClientSettings(
            backend=backend,
            timeout=timeout,
            continue_on_fail=bool(continue_on_fail),
            draft_field=str(data.get("draft_field") or DEFAULT_SETTINGS.draft_field),
            draft_value=data.get("draft_value", DEFAULT_SETTINGS.draft_value),
            dry_run_dir=Path(dry_run_dir) if dry_run_dir else None,
        )
        # Rebuild lazily so a changed backend or timeout takes effect.
        self._dispatcher = None
        self._transport = getattr(self, "_injected_transport", None)
        return self.settings

    # -------------
    # Operations
    # -------------
    def execute(
        self,
        items: Iterable[Mapping[str, Any]],
        *,
        resource: str | None = None,
        operation: str | None = None,
        continue_on_fail: bool | None = None,
    ) -> list[OutputRecord]:
        """Run a batch of items; one routed request per item."""
        if continue_on_fail is None:
            continue_on_fail = self.settings.continue_on_fail
        executor = BatchExecutor(
            self.router(),
            self.dispatcher(),
            continue_on_fail=continue_on_fail,
        )
        return executor.execute(items, resource=resource, operation=operation)

    def request(self, resource: str, operation: str, **params: Any) -> Any:
        """Route and send a single operation, returning the raw response."""
        descriptor = self.router().route(resource, operation, params)
        return self.dispatcher().send(descriptor)

    def list_accounts(self) -> list[OptionEntry]:
        if self.credentials is None:
            return OptionProvider(self._unauthenticated_dispatcher()).list_accounts()
        return OptionProvider(self.dispatcher()).list_accounts()

    def list_folders(self, account_id: Any) -> list[OptionEntry]:
        if self.credentials is None:
            return OptionProvider(self._unauthenticated_dispatcher()).list_folders(account_id)
        return OptionProvider(self.dispatcher()).list_folders(account_id)

    @property
    def token_state(self) -> OAuthTokenData | None:
        """Current token value, for the host to persist after a run."""
        if self.credentials is None:
            return None
        return self.credentials.oauth_token_data

    # -------------
    # Wiring
    # -------------
    def router(self) -> OperationRouter:
        return OperationRouter(
            draft_field=self.settings.draft_field,
            draft_value=self.settings.draft_value,
        )

    def dispatcher(self) -> RequestDispatcher:
        if self.credentials is None:
            raise ValueError("Credentials must be set before sending requests.")
        if self._dispatcher is None or self._dispatcher.credentials is not self.credentials:
            transport = self.transport()
            self._dispatcher = RequestDispatcher(
                self.credentials,
                transport,
                TokenRefresher(transport),
            )
        return self._dispatcher

    def transport(self) -> HttpTransport:
        if self._transport is None:
            self._transport = build_transport(
                self.settings.backend,
                out_dir=self.settings.dry_run_dir,
                timeout=self.settings.timeout,
            )
        return self._transport

    def _unauthenticated_dispatcher(self) -> RequestDispatcher:
        return RequestDispatcher(Credentials(), self.transport())

    def _coerce_bool(self, value: Any) -> bool | None:
        if value is None:
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("1", "true", "yes", "y", "on"):
                return True
            if lowered in ("0", "false", "no", "n", "off", ""):
                return False
        return bool(value)

    def _coerce_timeout(self, value: Any) -> float | None:
        if value is None or value == "":
            return None
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid timeout: {value!r}") from None
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {timeout}")
        return timeout

    def _credentials_to_mapping(self, credentials: Credentials) -> dict[str, Any]:
        return {
            "clientId": credentials.client_id,
            "clientSecret": credentials.client_secret,
            "dataCenter": credentials.data_center,
            "authUrl": credentials.auth_url,
            "accessTokenUrl": credentials.access_token_url,
            "scope": credentials.scope,
            "oauthTokenData": credentials.oauth_token_data,
        }

    def _camel_case_keys(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {_CREDENTIAL_ALIASES.get(key, key): value for key, value in data.items()}


# Snake-case spellings accepted for host credential fields.
_CREDENTIAL_ALIASES = {
    "client_id": "clientId",
    "client_secret": "clientSecret",
    "data_center": "dataCenter",
    "auth_url": "authUrl",
    "access_token_url": "accessTokenUrl",
    "oauth_token_data": "oauthTokenData",
}
