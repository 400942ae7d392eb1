"""
adtpy - Async Python client for SAP ABAP Development Tools (ADT).

Usage:
    >>> from adtpy import AdtClient
    >>>
    >>> async with AdtClient(host="vhcala4hci", port="50000") as adt:
    ...     await adt.connect("DEVELOPER", "secret")
    ...     for node in await adt.get_root_package_contents("ZTEST"):
    ...         print(node)
"""
import logging
from .client import AdtClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    AsyncAuthService
)

# Models and errors
from .core.models import (
    ClassDetails,
    ConnectionInfo,
    DiscoveryCollection,
    FacetNode,
    RepositoryObject
)
from .core.exceptions import (
    AdtException,
    AuthError,
    ConfigError,
    HttpError,
    PartialCreateError,
    ProtocolError,
    TransportError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for adtpy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'adtpy',
        'adtpy.api',
        'adtpy.auth',
        'adtpy.client',
        'adtpy.navigation',
        'adtpy.packages',
        'adtpy.objects',
        'adtpy.xml',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'AdtClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'ClassDetails',
    'ConnectionInfo',
    'DiscoveryCollection',
    'FacetNode',
    'RepositoryObject',
    'AdtException',
    'AuthError',
    'ConfigError',
    'HttpError',
    'PartialCreateError',
    'ProtocolError',
    'TransportError',
    'setup_logging',
]
