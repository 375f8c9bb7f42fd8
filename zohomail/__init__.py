from zohomail.client import ZohoMailClient
from zohomail.credentials import Credentials, OAuthTokenData, resolve_region
from zohomail.errors import (
    BatchItemError,
    ConfigurationError,
    MissingParameterError,
    MissingRefreshTokenError,
    TokenError,
    UnsupportedOperationError,
    ZohoApiError,
    ZohoMailError,
)
from zohomail.executor import BatchExecutor, OutputRecord
from zohomail.operations import OperationRouter
from zohomail.options import OptionEntry, OptionProvider
from zohomail.transport.dispatch import RequestDispatcher

__all__ = [
    "BatchExecutor",
    "BatchItemError",
    "ConfigurationError",
    "Credentials",
    "MissingParameterError",
    "MissingRefreshTokenError",
    "OAuthTokenData",
    "OperationRouter",
    "OptionEntry",
    "OptionProvider",
    "OutputRecord",
    "RequestDispatcher",
    "TokenError",
    "UnsupportedOperationError",
    "ZohoApiError",
    "ZohoMailError",
    "ZohoMailClient",
    "resolve_region",
]
