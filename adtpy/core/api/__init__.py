"""ADT API module: configuration, request engine and authentication."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .async_client import AsyncAPIClient
from .async_auth import AsyncAuthService

__all__ = [
    'AsyncAPIClient',
    'AsyncAuthService',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
