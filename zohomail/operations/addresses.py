from __future__ import annotations

from email.utils import formataddr, getaddresses
from typing import Iterable

from zohomail.errors import InvalidAddressError

AddressInput = str | Iterable[str]


def normalize_address_list(addresses: AddressInput, *, field: str = "address") -> str:
    """
    Normalize a comma-separated (or iterable) recipient list into the
    ``"a@x.com, Name <b@y.com>"`` form Zoho accepts, dropping duplicates.
    """
    normalized = _normalize_addresses(addresses, field=field)
    return ", ".join(normalized)


def normalize_single_address(address: str, *, field: str = "fromAddress") -> str:
    normalized = _normalize_addresses(address, field=field)
    if len(normalized) != 1:
        raise InvalidAddressError(f"Exactly one address must be provided for '{field}'.")
    return normalized[0]


def _normalize_addresses(addresses: AddressInput, *, field: str) -> list[str]:
    if isinstance(addresses, str):
        raw = [addresses]
    else:
        raw = [str(a) for a in addresses]

    parsed = getaddresses(raw)
    normalized: list[str] = []
    seen: set[str] = set()
    for name, addr in parsed:
        addr = addr.strip()
        if not addr:
            continue
        if "@" not in addr:
            raise InvalidAddressError(f"Invalid email address in '{field}': {addr}")
        addr_key = addr.lower()
        if addr_key in seen:
            continue
        seen.add(addr_key)
        normalized.append(formataddr((name, addr)) if name else addr)

    if not normalized:
        raise InvalidAddressError(f"At least one email address is required in '{field}'.")
    return normalized
