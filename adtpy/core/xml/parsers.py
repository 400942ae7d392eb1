"""
Parsers for ADT XML payloads.

Pure functions turning response bodies into typed records. Element and
attribute names are matched by local name, so namespace prefixes chosen
by the server do not matter.
"""
from typing import Dict, List, Optional
from xml.etree import ElementTree as et

from ..exceptions import ProtocolError
from ..logging import get_logger
from ..models import DiscoveryCollection, FacetNode, RepositoryObject

logger = get_logger('adtpy.xml')

DEFAULT_OBJECT_TYPE = 'DEVC/K'


def local_name(name: str) -> str:
    """Strip '{namespace}' or 'prefix:' from a tag or attribute name."""
    if '}' in name:
        name = name.split('}', 1)[1]
    if ':' in name:
        name = name.split(':', 1)[1]
    return name


def element_attributes(element: et.Element) -> Dict[str, str]:
    return {local_name(key): value for key, value in element.attrib.items()}


def _children(element: et.Element, name: str) -> List[et.Element]:
    return [child for child in element if local_name(child.tag) == name]


def _child(element: et.Element, name: str) -> Optional[et.Element]:
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def _child_text(element: et.Element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def parse_document(xml_text: str, expected_root: str) -> et.Element:
    """
    Parse a response body and check its root element.

    Raises:
        ProtocolError: If the body is not well-formed or has another root
    """
    if not xml_text or not xml_text.strip():
        raise ProtocolError(f"Empty response, expected <{expected_root}>", xml_text)
    try:
        root = et.fromstring(xml_text)
    except et.ParseError as e:
        logger.error(f"Malformed XML response: {e}\n{xml_text}")
        raise ProtocolError(f"Malformed XML response: {e}", xml_text) from e

    if local_name(root.tag) != expected_root:
        logger.error(f"Unexpected root <{root.tag}>, expected <{expected_root}>")
        raise ProtocolError(
            f"Unexpected root element <{local_name(root.tag)}>, expected <{expected_root}>",
            xml_text
        )
    return root


def parse_repository_nodes(xml_text: str) -> List[RepositoryObject]:
    """
    Parse an asx:abap node structure into repository objects.

    Nodes without name or URI are skipped; a missing type defaults
    to DEVC/K.
    """
    root = parse_document(xml_text, 'abap')
    values = _child(root, 'values')
    data = _child(values, 'DATA') if values is not None else None
    if data is None:
        raise ProtocolError("Node structure response has no asx:values/DATA", xml_text)

    tree = _child(data, 'TREE_CONTENT')
    if tree is None:
        return []

    objects = []
    for node in _children(tree, 'SEU_ADT_REPOSITORY_OBJ_NODE'):
        name = _child_text(node, 'OBJECT_NAME')
        uri = _child_text(node, 'OBJECT_URI')
        if not name or not uri:
            continue
        objects.append(RepositoryObject(
            name=name,
            uri=uri,
            type=_child_text(node, 'OBJECT_TYPE') or DEFAULT_OBJECT_TYPE,
            description=_child_text(node, 'DESCRIPTION') or _child_text(node, 'OBJECT_DESCRIPTION')
        ))
    return objects


def _facet_of(tag: str, attrs: Dict[str, str], queried_facet: str) -> str:
    if attrs.get('facet'):
        return attrs['facet']
    if tag == 'object' and attrs.get('type'):
        return attrs['type'].split('/', 1)[0]
    return queried_facet


def parse_virtual_folders(xml_text: str, queried_facet: str) -> List[FacetNode]:
    """
    Parse a virtualFoldersResult into facet nodes, in document order.

    Args:
        xml_text: Response body
        queried_facet: Facet kind of the query, used when an entry has none

    Raises:
        ProtocolError: If the container is missing or an entry has no name
    """
    root = parse_document(xml_text, 'virtualFoldersResult')

    nodes = []
    for element in root:
        tag = local_name(element.tag)
        if tag not in ('virtualFolder', 'object'):
            continue

        attrs = element_attributes(element)
        name = attrs.get('name')
        if not name:
            raise ProtocolError(f"<{tag}> entry without name attribute", xml_text)

        try:
            counter = int(attrs.get('counter') or 0)
        except ValueError:
            raise ProtocolError(f"Invalid counter {attrs.get('counter')!r} on {name}", xml_text)

        nodes.append(FacetNode(
            name=name,
            display_name=attrs.get('displayName') or name,
            facet=_facet_of(tag, attrs, queried_facet),
            counter=counter,
            uri=attrs.get('uri') or attrs.get('vituri'),
            is_expandable=attrs.get('expandable') == 'true',
            sibling_facet_kind=attrs.get('hasChildrenOfSameFacet'),
            object_type=attrs.get('type'),
            description=attrs.get('text') or attrs.get('description')
        ))
    return nodes


def parse_discovery(xml_text: str) -> List[DiscoveryCollection]:
    """Parse the AtomPub service document returned by /discovery."""
    root = parse_document(xml_text, 'service')

    collections = []
    for workspace in _children(root, 'workspace'):
        workspace_title = _child_text(workspace, 'title')
        for collection in _children(workspace, 'collection'):
            href = collection.attrib.get('href')
            if not href:
                continue
            collections.append(DiscoveryCollection(
                title=_child_text(collection, 'title') or href,
                href=href,
                workspace=workspace_title,
                accept=[a.text.strip() for a in _children(collection, 'accept') if a.text]
            ))
    return collections
