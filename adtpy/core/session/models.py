"""
Session state for one ADT connection.

Holds base URL, credentials, CSRF token and cookie. The session has no
networking logic of its own; it is mutated by the request engine and the
auth service only.
"""
import asyncio
import base64
from enum import Enum
from typing import Optional

from ..models import ConnectionInfo


class ConnectionState(str, Enum):
    """Connection status derived from the session contents."""
    DISCONNECTED = 'disconnected'
    CONNECTED = 'connected'


class AdtSession:
    """
    In-memory session for a single ADT system.

    Attributes:
        base_url: Service root, fixed at construction
        username: User the credentials belong to
        credentials: base64('user:password') or None
        csrf_token: Last token issued by the server or None
        cookie: Session cookie forwarded with requests
        token_lock: Serializes CSRF refresh and non-GET requests

    Example:
        >>> session = AdtSession('http://host:8000/sap/bc/adt')
        >>> session.set_credentials('DEVELOPER', 'secret')
        >>> session.is_connected
        True
    """

    def __init__(self, base_url: str):
        self._base_url = base_url
        self.username: Optional[str] = None
        self.credentials: Optional[str] = None
        self.csrf_token: Optional[str] = None
        self.cookie: Optional[str] = None
        self.token_lock = asyncio.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def is_connected(self) -> bool:
        """True iff credentials are present."""
        return bool(self.credentials)

    @property
    def state(self) -> ConnectionState:
        if self.is_connected:
            return ConnectionState.CONNECTED
        return ConnectionState.DISCONNECTED

    @staticmethod
    def encode_credentials(username: str, password: str) -> str:
        raw = f"{username}:{password}".encode('utf-8')
        return base64.b64encode(raw).decode('ascii')

    def set_credentials(self, username: str, password: str) -> None:
        """Store encoded credentials and drop any token of a previous user."""
        self.username = username
        self.credentials = self.encode_credentials(username, password)
        self.csrf_token = None
        self.cookie = None

    def clear(self) -> None:
        """Forget credentials, token and cookie. Idempotent."""
        self.username = None
        self.credentials = None
        self.csrf_token = None
        self.cookie = None

    def connection_info(self) -> ConnectionInfo:
        """Snapshot of the connection; never performs I/O."""
        return ConnectionInfo(
            url=self._base_url,
            username=self.username,
            is_connected=self.is_connected
        )

    def __repr__(self) -> str:
        return f"AdtSession(url={self._base_url!r}, user={self.username!r}, state={self.state.value})"
