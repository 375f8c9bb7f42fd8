from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from zohomail.common.config import HttpMethod


def _freeze(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    method: HttpMethod
    endpoint: str = ""
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)
    uri: str | None = None  # absolute; wins over endpoint

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", _freeze(self.query))
        object.__setattr__(self, "body", _freeze(self.body))

    def url(self, base_url: str) -> str:
        if self.uri:
            return self.uri
        return f"{base_url.rstrip('/')}{self.endpoint}"
