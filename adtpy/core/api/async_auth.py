"""
Async authentication service.

Drives the session state machine: Disconnected -> Connected on a
successful discovery check, back to Disconnected on disconnect or
credential rejection.
"""
from typing import List

from .async_client import AsyncAPIClient, DISCOVERY_PATH
from ..exceptions import AuthError, HttpError
from ..logging import get_logger
from ..models import ConnectionInfo, DiscoveryCollection
from ..xml import parse_discovery


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Handles credential setup, the discovery check and disconnects.
    """

    def __init__(self, client: AsyncAPIClient):
        """
        Initialize auth service.

        Args:
            client: Request engine owning the session
        """
        self._client = client
        self._logger = get_logger('adtpy.auth')

    @property
    def session(self):
        return self._client.session

    async def set_credentials(self, username: str, password: str) -> ConnectionInfo:
        """
        Store credentials and validate them with a discovery request.

        Args:
            username: SAP user
            password: SAP password

        Returns:
            ConnectionInfo of the now connected session

        Raises:
            AuthError: If the discovery request does not succeed
            TransportError: If the system is unreachable
        """
        self.session.set_credentials(username, password)
        self._logger.info(f"Connecting to {self.session.base_url} as {username}")

        try:
            await self._client.request(DISCOVERY_PATH)
        except AuthError:
            self.session.clear()
            raise
        except HttpError as e:
            self.session.clear()
            raise AuthError(
                f"ADT service discovery failed: {e.status_text} ({e.status})",
                e.status,
                e.status_text,
                e.body
            ) from e
        except Exception:
            self.session.clear()
            raise

        self._logger.info("ADT service discovery successful")
        return self.session.connection_info()

    async def discover(self) -> List[DiscoveryCollection]:
        """
        Read the service discovery document.

        Returns:
            Collections advertised by the server
        """
        response = await self._client.request(
            DISCOVERY_PATH,
            headers={'Accept': 'application/atomsvc+xml'}
        )
        return parse_discovery(response)

    def disconnect(self) -> None:
        """Clear credentials and CSRF token. Idempotent."""
        if self.session.is_connected:
            self._logger.info(f"Disconnecting {self.session.username} from {self.session.base_url}")
        self.session.clear()

    def get_connection_info(self) -> ConnectionInfo:
        """Pure read of the connection state."""
        return self.session.connection_info()
