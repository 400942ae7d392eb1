"""
Builders for ADT XML request documents.
"""
from dataclasses import dataclass, field
from typing import List, Tuple
from xml.etree import ElementTree as et

from ..models import ClassDetails

VFS_NS = 'http://www.sap.com/adt/ris/virtualFolders'
CLASS_NS = 'http://www.sap.com/adt/oo/classes'
ADTCORE_NS = 'http://www.sap.com/adt/core'

et.register_namespace('vfs', VFS_NS)
et.register_namespace('class', CLASS_NS)
et.register_namespace('adtcore', ADTCORE_NS)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _vfs(tag: str) -> str:
    return f"{{{VFS_NS}}}{tag}"


def _qname(ns: str, tag: str) -> str:
    return f"{{{ns}}}{tag}"


@dataclass
class VirtualFoldersQuery:
    """
    A virtual-folders request.

    Attributes:
        preselections: (facet, value) pairs narrowing the query, in order
        facet_order: Facets the server should enumerate next
        search_pattern: Object name pattern
    """
    preselections: List[Tuple[str, str]] = field(default_factory=list)
    facet_order: List[str] = field(default_factory=list)
    search_pattern: str = '*'

    def preselection(self, facet: str) -> str:
        for name, value in self.preselections:
            if name == facet:
                return value
        raise KeyError(facet)

    def to_xml(self) -> str:
        root = et.Element(_vfs('virtualFoldersRequest'), {'objectSearchPattern': self.search_pattern})
        for facet, value in self.preselections:
            preselection = et.SubElement(root, _vfs('preselection'), {'facet': facet})
            et.SubElement(preselection, _vfs('value')).text = value
        order = et.SubElement(root, _vfs('facetorder'))
        for facet in self.facet_order:
            et.SubElement(order, _vfs('facet')).text = facet
        return et.tostring(root, encoding='unicode')


def build_class_document(details: ClassDetails) -> str:
    """Build the class:abapClass document posted to /oo/classes."""
    root = et.Element(_qname(CLASS_NS, 'abapClass'), {
        _qname(ADTCORE_NS, 'name'): details.name,
        _qname(ADTCORE_NS, 'description'): details.description,
        _qname(ADTCORE_NS, 'language'): details.language,
        _qname(ADTCORE_NS, 'masterLanguage'): details.language,
        _qname(ADTCORE_NS, 'type'): 'CLAS/OC',
        'abapLanguageVersion': 'standard',
    })
    et.SubElement(root, _qname(ADTCORE_NS, 'packageRef'), {
        _qname(ADTCORE_NS, 'name'): details.package,
    })
    if details.superclass:
        et.SubElement(root, _qname(CLASS_NS, 'superClassRef'), {
            _qname(ADTCORE_NS, 'name'): details.superclass,
        })
    for interface in details.interfaces:
        et.SubElement(root, _qname(CLASS_NS, 'interface')).text = interface
    return XML_DECLARATION + et.tostring(root, encoding='unicode')
