"""
Facet kinds and the virtual-folder query for each of them.

The repository is browsed along the facets package -> group -> type ->
object. Each facet kind has its own query builder; kinds without an
entry in FACET_QUERY_BUILDERS are treated as object facets.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..models import INDIRECTION_MARKER
from ..xml import VirtualFoldersQuery

ROOT_PACKAGE = 'package'
PACKAGE = 'PACKAGE'
GROUP = 'GROUP'
TYPE = 'TYPE'

SOURCE_LIBRARY = 'SOURCE_LIBRARY'


@dataclass(frozen=True)
class FacetContext:
    """
    Ancestor selections needed to build one query.

    Attributes:
        package_name: Actual package the browse started from
        selected_name: Name of the node being expanded
        sibling_hint: Type shared by the node's siblings
        parent_name: Name of the enclosing TYPE node
    """
    package_name: str
    selected_name: str
    sibling_hint: Optional[str] = None
    parent_name: Optional[str] = None


def unwrap(name: str) -> str:
    if name.startswith(INDIRECTION_MARKER):
        return name[len(INDIRECTION_MARKER):]
    return name


def indirect(name: str) -> str:
    """Package selector in '..NAME' form, never double-marked."""
    return f"{INDIRECTION_MARKER}{unwrap(name)}"


def package_name_from_uri(package_uri: str) -> str:
    """Last path segment of a package URI (or the name itself)."""
    return package_uri.rstrip('/').split('/')[-1]


def root_package_query(ctx: FacetContext) -> VirtualFoldersQuery:
    return VirtualFoldersQuery(
        preselections=[('package', ctx.selected_name)],
        facet_order=['package', 'group', 'type']
    )


def package_query(ctx: FacetContext) -> VirtualFoldersQuery:
    return VirtualFoldersQuery(
        preselections=[('package', indirect(ctx.selected_name))],
        facet_order=['group', 'type']
    )


def group_query(ctx: FacetContext) -> VirtualFoldersQuery:
    return VirtualFoldersQuery(
        preselections=[
            ('group', ctx.selected_name),
            ('package', indirect(ctx.package_name)),
        ],
        facet_order=['type']
    )


def type_query(ctx: FacetContext) -> VirtualFoldersQuery:
    return VirtualFoldersQuery(
        preselections=[
            ('group', SOURCE_LIBRARY),
            ('package', indirect(ctx.package_name)),
            ('type', ctx.parent_name or ctx.selected_name),
        ],
        facet_order=[]
    )


def object_query(facet_kind: str, ctx: FacetContext) -> VirtualFoldersQuery:
    return VirtualFoldersQuery(
        preselections=[
            (facet_kind, ctx.selected_name),
            ('package', indirect(ctx.package_name)),
            ('type', ctx.sibling_hint or ''),
        ],
        facet_order=[]
    )


FACET_QUERY_BUILDERS: Dict[str, Callable[[FacetContext], VirtualFoldersQuery]] = {
    ROOT_PACKAGE: root_package_query,
    PACKAGE: package_query,
    GROUP: group_query,
    TYPE: type_query,
}


def build_facet_query(facet_kind: str, ctx: FacetContext) -> VirtualFoldersQuery:
    """Select the query builder for a facet kind."""
    builder = FACET_QUERY_BUILDERS.get(facet_kind)
    if builder is None:
        return object_query(facet_kind, ctx)
    return builder(ctx)
