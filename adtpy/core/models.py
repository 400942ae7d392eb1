"""
Data models for ADT repository objects and navigation results.
"""
from dataclasses import dataclass, field
from typing import List, Optional

# Two-character prefix marking a package node that must be re-resolved
INDIRECTION_MARKER = '..'


@dataclass
class ConnectionInfo:
    """Connection details without the password."""
    url: str
    username: Optional[str]
    is_connected: bool


@dataclass
class RepositoryObject:
    """Entry of the flat package listing (repository node structure)."""
    name: str
    uri: str
    type: str = 'DEVC/K'
    description: Optional[str] = None

    @property
    def kind(self) -> str:
        return self.type


@dataclass
class FacetNode:
    """
    One entry of a virtual-folders (facet) query.

    Attributes:
        name: Value to preselect when drilling into this node
        display_name: Human readable label
        facet: Facet kind (PACKAGE, GROUP, TYPE, CLAS, ...)
        counter: Number of objects below the node
        uri: Resource URI of the object or virtual folder
        is_expandable: Server hint that the node has children
        sibling_facet_kind: Hint shared by nodes at the same level
        object_type: ADT object type, e.g. 'CLAS/OC'
        description: Short text
        package_name: Package the node was listed in (set by the navigator)
    """
    name: str
    display_name: str
    facet: str
    counter: int = 0
    uri: Optional[str] = None
    is_expandable: bool = False
    sibling_facet_kind: Optional[str] = None
    object_type: Optional[str] = None
    description: Optional[str] = None
    package_name: Optional[str] = None

    @property
    def child_count(self) -> int:
        return self.counter

    @property
    def is_indirection(self) -> bool:
        """Package node that must be re-queried before it can be used."""
        return self.facet == 'PACKAGE' and self.name.startswith(INDIRECTION_MARKER)

    @property
    def unwrapped_name(self) -> str:
        """Name without the indirection marker."""
        if self.name.startswith(INDIRECTION_MARKER):
            return self.name[len(INDIRECTION_MARKER):]
        return self.name

    def __str__(self) -> str:
        return f"{self.display_name} [{self.facet}]"


@dataclass
class ClassDetails:
    """Input for class creation."""
    name: str
    description: str
    package: str
    superclass: Optional[str] = None
    interfaces: List[str] = field(default_factory=list)
    language: str = 'EN'

    def __post_init__(self):
        self.name = self.name.strip().upper()
        self.package = self.package.strip().upper()
        self.interfaces = [i.strip().upper() for i in self.interfaces if i and i.strip()]
        if self.superclass:
            self.superclass = self.superclass.strip().upper()


@dataclass
class DiscoveryCollection:
    """A collection advertised by the ADT discovery document."""
    title: str
    href: str
    workspace: Optional[str] = None
    accept: List[str] = field(default_factory=list)
