from .token_refresh import TokenRefresher

__all__ = ["TokenRefresher"]
