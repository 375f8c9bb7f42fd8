"""Read-only lookups that populate account/folder selection lists.

These feed interactive dropdowns, so every failure becomes a single sentinel
entry instead of an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from zohomail.logging import get_logger
from zohomail.transport.dispatch import RequestDispatcher

logger = get_logger(__name__)

CONNECT_ACCOUNT_FIRST = "Connect Account First"
SELECT_ACCOUNT_FIRST = "Select Account ID First"
ERROR_FETCHING_ACCOUNTS = "Error fetching accounts - check credentials"
ERROR_FETCHING_FOLDERS = "Error fetching folders"
NO_ACCOUNTS_FOUND = "No accounts found"
NO_FOLDERS_FOUND = "No folders found"


@dataclass(frozen=True, slots=True)
class OptionEntry:
    name: str
    value: str


def _sentinel(label: str) -> list[OptionEntry]:
    return [OptionEntry(name=label, value="")]


class OptionProvider:
    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    def list_accounts(self) -> list[OptionEntry]:
        if not self._has_access_token():
            logger.warning("Cannot fetch accounts, OAuth2 token is missing.")
            return _sentinel(CONNECT_ACCOUNT_FIRST)

        try:
            response = self._dispatcher.dispatch("GET", "/accounts")
        except Exception as exc:
            logger.error("Error fetching Zoho Mail accounts: %s", exc)
            return _sentinel(ERROR_FETCHING_ACCOUNTS)

        entries = [
            OptionEntry(name=str(account["mailboxAddress"]), value=str(account["accountId"]))
            for account in _data_list(response)
            if account.get("mailboxAddress") and account.get("accountId")
        ]
        if not entries:
            logger.warning("No accounts found or unexpected API response")
            return _sentinel(NO_ACCOUNTS_FOUND)
        return entries

    def list_folders(self, account_id: Any) -> list[OptionEntry]:
        account = "" if account_id is None else str(account_id).strip()
        if not account:
            return _sentinel(SELECT_ACCOUNT_FIRST)
        if not self._has_access_token():
            logger.warning("Cannot fetch folders, OAuth2 token is missing.")
            return _sentinel(CONNECT_ACCOUNT_FIRST)

        try:
            response = self._dispatcher.dispatch("GET", f"/accounts/{quote(account, safe='')}/folders")
        except Exception as exc:
            logger.error("Error fetching folders for account %s: %s", account, exc)
            return _sentinel(ERROR_FETCHING_FOLDERS)

        entries = [
            OptionEntry(name=str(folder["folderName"]), value=str(folder["folderId"]))
            for folder in _data_list(response)
            if folder.get("folderName") and folder.get("folderId")
        ]
        if not entries:
            logger.warning("No folders found for account %s", account)
            return _sentinel(NO_FOLDERS_FOUND)
        return sorted(entries, key=lambda entry: entry.name.casefold())

    def _has_access_token(self) -> bool:
        return bool(self._dispatcher.credentials.access_token)


def _data_list(response: Any) -> list[dict]:
    data = response.get("data") if isinstance(response, dict) else None
    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, dict)]
