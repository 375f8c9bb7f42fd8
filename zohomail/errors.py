from __future__ import annotations

from typing import Any


class ZohoMailError(Exception):
    """Base class for every error raised by the gateway."""


# -------------------------
# Configuration errors
# -------------------------

class ConfigurationError(ZohoMailError, ValueError):
    """Invalid or incomplete input; reported before any network call."""


class MissingParameterError(ConfigurationError):
    def __init__(self, parameter: str, resource: str, operation: str) -> None:
        self.parameter = parameter
        self.resource = resource
        self.operation = operation
        super().__init__(
            f"Parameter '{parameter}' is required for resource '{resource}' "
            f"and operation '{operation}'."
        )


class UnsupportedOperationError(ConfigurationError):
    def __init__(self, resource: Any, operation: Any) -> None:
        self.resource = resource
        self.operation = operation
        super().__init__(
            f"Unsupported combination of resource '{resource}' and operation '{operation}'."
        )


class InvalidAddressError(ConfigurationError):
    pass


# -------------------------
# Token errors
# -------------------------

class TokenError(ZohoMailError):
    """The access token could not be obtained or renewed."""


class MissingRefreshTokenError(TokenError):
    def __init__(self, message: str = "Refresh token not found. Please reauthorize.") -> None:
        super().__init__(message)


class InvalidTokenResponseError(TokenError):
    def __init__(self, message: str = "Invalid response from Zoho token endpoint: access_token missing.") -> None:
        super().__init__(message)


class TokenRefreshError(TokenError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


# -------------------------
# Remote / transport errors
# -------------------------

class ZohoApiError(ZohoMailError, RuntimeError):
    """Non-2xx response or network failure.

    ``status_code`` is None when no HTTP response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


# -------------------------
# Batch errors
# -------------------------

class BatchItemError(ZohoMailError):
    def __init__(
        self,
        message: str,
        *,
        item_index: int,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.item_index = item_index
        self.status_code = status_code
        self.response_body = response_body
