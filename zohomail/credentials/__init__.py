from .models import Credentials, OAuthTokenData, TokenRecord
from .region import RegionEndpoints, normalize_data_center, resolve_region

__all__ = [
    "Credentials",
    "OAuthTokenData",
    "RegionEndpoints",
    "TokenRecord",
    "normalize_data_center",
    "resolve_region",
]
