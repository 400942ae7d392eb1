"""
Facet navigator for the ADT virtual-folders protocol.

Turns a chain of virtual-folder queries into a browsable hierarchy.
Package nodes carrying the indirection marker are resolved here, so
callers only ever receive nodes they can act on directly.
"""
from typing import FrozenSet, List, Optional

from ..api import AsyncAPIClient
from ..exceptions import ProtocolError
from ..logging import get_logger
from ..models import FacetNode
from ..xml import parse_virtual_folders
from .facets import (
    PACKAGE,
    ROOT_PACKAGE,
    TYPE,
    FacetContext,
    build_facet_query,
    package_name_from_uri,
    unwrap,
)

VIRTUAL_FOLDERS_PATH = '/repository/informationsystem/virtualfolders/contents'
REQUEST_CONTENT_TYPE = 'application/vnd.sap.adt.repository.virtualfolders.request.v1+xml'
RESULT_CONTENT_TYPE = 'application/vnd.sap.adt.repository.virtualfolders.result.v1+xml'


class FacetNavigator:
    """
    Navigates repository packages facet by facet.

    Nothing is cached: every call re-fetches from the server.

    Example:
        >>> navigator = FacetNavigator(api_client)
        >>> groups = await navigator.get_root_package_contents('ZTEST')
        >>> types = await navigator.expand(groups[0], 'ZTEST')
    """

    def __init__(self, client: AsyncAPIClient):
        self._client = client
        self._logger = get_logger('adtpy.navigation')

    def _headers(self):
        return {
            'Accept': RESULT_CONTENT_TYPE,
            'Content-Type': REQUEST_CONTENT_TYPE,
            'User-Agent': self._client.config.user_agent,
            'X-sap-adt-profiling': 'server-time',
        }

    async def list_facet_children(
        self,
        package_uri: str,
        facet_kind: str,
        selected_name: str,
        sibling_hint: Optional[str] = None,
        parent_name: Optional[str] = None
    ) -> List[FacetNode]:
        """
        List the next level below a selected facet value.

        Args:
            package_uri: URI or name of the package being browsed
            facet_kind: Facet of the selected node ('package' for the root)
            selected_name: Name of the selected node
            sibling_hint: Type shared by the selected node's siblings
            parent_name: Name of the enclosing TYPE node

        Returns:
            Child nodes in server order, indirections resolved

        Raises:
            HttpError: If the query fails
            ProtocolError: If the result is malformed or indirections loop
        """
        visited: FrozenSet[str] = frozenset()
        if facet_kind == PACKAGE:
            visited = frozenset({unwrap(selected_name)})
        return await self._list(
            package_uri, facet_kind, selected_name, sibling_hint, parent_name, visited
        )

    async def get_root_package_contents(self, package_name: str) -> List[FacetNode]:
        """First level below a package."""
        return await self.list_facet_children(package_name, ROOT_PACKAGE, package_name)

    async def expand(
        self,
        node: FacetNode,
        package_uri: str,
        parent: Optional[FacetNode] = None
    ) -> List[FacetNode]:
        """
        List the children of a node returned by an earlier call.

        Args:
            node: Node to expand
            package_uri: Package the browse started from; nodes listed by
                this navigator carry their own package, which takes precedence
            parent: Node that ``node`` was listed under, if any
        """
        if parent is not None:
            sibling_hint = parent.name
        elif node.object_type:
            sibling_hint = node.object_type.split('/', 1)[0]
        else:
            sibling_hint = node.sibling_facet_kind

        parent_name = node.name if node.facet == TYPE else (parent.name if parent else None)
        return await self.list_facet_children(
            node.package_name or package_uri, node.facet, node.name, sibling_hint, parent_name
        )

    async def _list(
        self,
        package_uri: str,
        facet_kind: str,
        selected_name: str,
        sibling_hint: Optional[str],
        parent_name: Optional[str],
        visited: FrozenSet[str]
    ) -> List[FacetNode]:
        ctx = FacetContext(
            package_name=package_name_from_uri(package_uri),
            selected_name=selected_name,
            sibling_hint=sibling_hint,
            parent_name=parent_name
        )
        query = build_facet_query(facet_kind, ctx)
        self._logger.debug(f"Listing {facet_kind} {selected_name} in {ctx.package_name}")

        response = await self._client.request(
            VIRTUAL_FOLDERS_PATH, 'POST', query.to_xml(), self._headers()
        )
        nodes = parse_virtual_folders(response, facet_kind)
        listed_in = unwrap(selected_name) if facet_kind in (ROOT_PACKAGE, PACKAGE) else ctx.package_name
        for node in nodes:
            node.package_name = listed_in
        return await self._resolve_indirections(package_uri, nodes, visited)

    async def _resolve_indirections(
        self,
        package_uri: str,
        nodes: List[FacetNode],
        visited: FrozenSet[str]
    ) -> List[FacetNode]:
        """Replace each indirection node by its children, in place."""
        resolved: List[FacetNode] = []
        for node in nodes:
            if not node.is_indirection:
                resolved.append(node)
                continue

            target = node.unwrapped_name
            if target in visited:
                self._logger.error(f"Indirection cycle at package {node.name} (visited: {sorted(visited)})")
                raise ProtocolError(f"Self-referential package indirection: {node.name}")

            self._logger.debug(f"Resolving package indirection {node.name}")
            children = await self._list(
                package_uri, PACKAGE, node.name, node.sibling_facet_kind, None,
                visited | {target}
            )
            resolved.extend(children)
        return resolved
