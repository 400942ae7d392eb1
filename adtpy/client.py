"""
AdtClient - High-level async client for SAP ABAP Development Tools.

Example:
    >>> async with AdtClient(host="vhcala4hci", port="50000") as adt:
    ...     await adt.connect("DEVELOPER", "secret")
    ...     for package in await adt.list_root_packages():
    ...         print(package.name)
"""
from typing import List, Optional, Union

import aiohttp

from .core.api import APIConfig, AsyncAPIClient, AsyncAuthService
from .core.logging import get_logger
from .core.models import (
    ClassDetails,
    ConnectionInfo,
    DiscoveryCollection,
    FacetNode,
    RepositoryObject,
)
from .core.navigation import FacetNavigator, PackageBrowser
from .core.objects import ClassCreator, SourceFetcher


class AdtClient:
    """
    High-level async client for one ADT system.

    The client owns one session; create several clients for several
    concurrent sessions.

    Usage:
        >>> client = AdtClient(APIConfig(host="sap.example.com", port="44300"))
        >>> await client.connect("USER", "PASSWORD")
        >>> nodes = await client.list_facet_children("ZTEST", "package", "ZTEST")
        >>> await client.close()

    Configuration is read from SAP_HOST/SAP_PORT/SAP_CLIENT when neither
    a config nor keyword settings are given.
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        *,
        http_session: Optional[aiohttp.ClientSession] = None,
        **settings
    ):
        """
        Initialize ADT client.

        Args:
            config: Connection configuration
            http_session: Optional shared aiohttp session
            **settings: APIConfig fields (host, port, sap_client, ...)
                used when no config is given

        Raises:
            ConfigError: If no host is configured and not in offline mode
        """
        if config is None:
            config = APIConfig(**settings) if settings else APIConfig.from_env()
        self._config = config
        self._logger = get_logger('adtpy.client')

        self._api = AsyncAPIClient(config, http_session=http_session)
        self._auth = AsyncAuthService(self._api)
        self._navigator = FacetNavigator(self._api)
        self._packages = PackageBrowser(self._api)
        self._sources = SourceFetcher(self._api)
        self._creator = ClassCreator(self._api)

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def api(self) -> AsyncAPIClient:
        return self._api

    @property
    def is_connected(self) -> bool:
        return self._api.session.is_connected

    async def __aenter__(self) -> 'AdtClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Disconnect and release the transport."""
        self._auth.disconnect()
        await self._api.close()

    # Session

    async def connect(self, username: str, password: str) -> ConnectionInfo:
        """Set credentials and check them against the discovery service."""
        return await self._auth.set_credentials(username, password)

    def disconnect(self) -> None:
        self._auth.disconnect()

    def get_connection_info(self) -> ConnectionInfo:
        return self._auth.get_connection_info()

    async def discover(self) -> List[DiscoveryCollection]:
        return await self._auth.discover()

    # Browsing

    async def list_root_packages(self, parent: Optional[str] = None) -> List[RepositoryObject]:
        return await self._packages.list_packages(parent)

    async def get_node_structure(self, name: str, object_type: str = 'DEVC/K') -> List[RepositoryObject]:
        return await self._packages.get_node_structure(name, object_type)

    async def list_facet_children(
        self,
        package_uri: str,
        facet_kind: str,
        selected_name: str,
        sibling_hint: Optional[str] = None,
        parent_name: Optional[str] = None
    ) -> List[FacetNode]:
        return await self._navigator.list_facet_children(
            package_uri, facet_kind, selected_name, sibling_hint, parent_name
        )

    async def get_root_package_contents(self, package_name: str) -> List[FacetNode]:
        return await self._navigator.get_root_package_contents(package_name)

    async def expand(
        self,
        node: FacetNode,
        package_uri: str,
        parent: Optional[FacetNode] = None
    ) -> List[FacetNode]:
        return await self._navigator.expand(node, package_uri, parent)

    # Objects

    async def get_source(self, kind: str, name_or_uri: str) -> str:
        return await self._sources.get_source(kind, name_or_uri)

    async def create_class(self, details: Union[ClassDetails, dict]) -> str:
        """
        Create a class.

        Args:
            details: ClassDetails or a dict with its fields

        Returns:
            Service-relative URI of the created class
        """
        if isinstance(details, dict):
            details = ClassDetails(**details)
        return await self._creator.create_class(details)
