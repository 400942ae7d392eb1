"""Flat package listing through the repository node structure."""
from typing import List, Optional

from ..api import AsyncAPIClient
from ..logging import get_logger
from ..models import RepositoryObject
from ..xml import parse_repository_nodes

NODESTRUCTURE_PATH = '/repository/nodestructure'
MAIN_PACKAGES_URI = '/sap/bc/adt/repository/informationsystem/mainpackages'


class PackageBrowser:
    """Lists packages and package contents as flat RepositoryObject lists."""

    def __init__(self, client: AsyncAPIClient):
        self._client = client
        self._logger = get_logger('adtpy.packages')

    async def list_packages(self, parent: Optional[str] = None) -> List[RepositoryObject]:
        """
        List main packages, or the packages below ``parent``.

        Args:
            parent: Parent package name; None for the root level
        """
        parent_uri = f"{MAIN_PACKAGES_URI}/{parent}" if parent else MAIN_PACKAGES_URI
        response = await self._client.request(
            NODESTRUCTURE_PATH, 'POST', params={'parent_uri': parent_uri}
        )
        packages = parse_repository_nodes(response)
        self._logger.debug(f"Found {len(packages)} packages below {parent_uri}")
        return packages

    async def get_node_structure(
        self,
        name: str,
        object_type: str = 'DEVC/K'
    ) -> List[RepositoryObject]:
        """List the direct content of a repository object, e.g. a package."""
        response = await self._client.request(
            NODESTRUCTURE_PATH,
            'POST',
            params={
                'parent_type': object_type,
                'parent_name': name,
                'withShortDescriptions': 'true',
            }
        )
        return parse_repository_nodes(response)
