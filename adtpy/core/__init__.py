"""Core components of the ADT client."""
from .exceptions import (
    AdtException,
    AuthError,
    ConfigError,
    HttpError,
    PartialCreateError,
    ProtocolError,
    TransportError,
)
from .models import ClassDetails, ConnectionInfo, DiscoveryCollection, FacetNode, RepositoryObject

__all__ = [
    'AdtException',
    'AuthError',
    'ConfigError',
    'HttpError',
    'PartialCreateError',
    'ProtocolError',
    'TransportError',
    'ClassDetails',
    'ConnectionInfo',
    'DiscoveryCollection',
    'FacetNode',
    'RepositoryObject',
]
