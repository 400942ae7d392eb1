"""
Session module.

Connection state for one ADT system, held in memory for the lifetime of
a client.
"""
from .models import AdtSession, ConnectionState

__all__ = [
    'AdtSession',
    'ConnectionState',
]
