"""
lxml plumbing shared by the pacs.008 / pacs.002 mappers.

Lookups are namespace-agnostic (matched on local name) so the same code
reads every schema version, and namespace-less sandbox documents too.
Repeated elements are always returned as lists; single-valued lookups take
the first match.
"""

from typing import Iterable, Optional
from xml.sax.saxutils import escape as _escape

from lxml import etree

from ..errors import InvalidXmlError

_PARSER_OPTIONS = dict(
    resolve_entities=False,
    no_network=True,
    remove_comments=True,
    remove_pis=True,
    huge_tree=False,
)
# Bytes honour the encoding declared in the XML declaration
_PARSER = etree.XMLParser(**_PARSER_OPTIONS)
# Text is encoded to UTF-8 here, so any declared encoding is overridden
_TEXT_PARSER = etree.XMLParser(encoding="utf-8", **_PARSER_OPTIONS)

_ENTITIES = {'"': "&quot;", "'": "&apos;"}


# =============================================================================
# Parsing
# =============================================================================

def parse_xml(xml_content: str | bytes) -> etree._Element:
    """Parse an XML document and return its root element."""
    if isinstance(xml_content, str):
        xml_content = xml_content.strip().encode("utf-8")
        parser = _TEXT_PARSER
    else:
        xml_content = xml_content.lstrip()
        parser = _PARSER
    if not xml_content:
        raise InvalidXmlError("Empty XML document")
    try:
        return etree.fromstring(xml_content, parser=parser)
    except etree.XMLSyntaxError as e:
        raise InvalidXmlError(f"XML syntax error: {e}") from e


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def namespace_of(element: etree._Element) -> Optional[str]:
    return etree.QName(element).namespace


def children(node: Optional[etree._Element], name: str) -> list[etree._Element]:
    """All direct children of ``node`` named ``name`` (any namespace)."""
    if node is None:
        return []
    return [
        c for c in node
        if isinstance(c.tag, str) and local_name(c) == name
    ]


def child(node: Optional[etree._Element], *path: str) -> Optional[etree._Element]:
    """Follow ``path`` taking the first match at every step."""
    for name in path:
        matches = children(node, name)
        if not matches:
            return None
        node = matches[0]
    return node


def find_all(node: Optional[etree._Element], *path: str) -> list[etree._Element]:
    """Every element matching the last step of ``path``."""
    if not path:
        return []
    parent = child(node, *path[:-1]) if len(path) > 1 else node
    return children(parent, path[-1])


def text(node: Optional[etree._Element], *path: str) -> Optional[str]:
    """Trimmed text of the element at ``path``; ``None`` when absent or blank."""
    el = child(node, *path) if path else node
    if el is None or el.text is None:
        return None
    value = el.text.strip()
    return value or None


def texts(node: Optional[etree._Element], *path: str) -> list[str]:
    values = []
    for el in find_all(node, *path):
        value = text(el)
        if value is not None:
            values.append(value)
    return values


def first_text(node: Optional[etree._Element], *paths: Iterable[str]) -> Optional[str]:
    """Text of the first path (a tuple of element names) that yields a value."""
    for path in paths:
        value = text(node, *path)
        if value is not None:
            return value
    return None


def attr(node: Optional[etree._Element], name: str) -> Optional[str]:
    if node is None:
        return None
    value = node.get(name)
    if value is None:
        return None
    return value.strip() or None


# =============================================================================
# Building
# =============================================================================

def make_document(namespace: str) -> etree._Element:
    """Create an empty ``Document`` root in ``namespace`` (default prefix)."""
    return etree.Element(f"{{{namespace}}}Document", nsmap={None: namespace})


def sub(parent: etree._Element, tag: str, value=None, **attrs: str) -> etree._Element:
    """Append ``tag`` to ``parent`` in the parent's namespace."""
    ns = namespace_of(parent)
    el = etree.SubElement(parent, f"{{{ns}}}{tag}" if ns else tag)
    for key, val in attrs.items():
        el.set(key, val)
    if value is not None:
        el.text = str(value)
    return el


def add(parent: etree._Element, tag: str, value) -> Optional[etree._Element]:
    """Like :func:`sub` but skips ``None`` and empty values."""
    if value is None or value == "":
        return None
    return sub(parent, tag, value)


def prune(element: Optional[etree._Element]) -> None:
    """Remove ``element`` from its parent when it ended up empty."""
    if element is None:
        return
    if len(element) == 0 and not (element.text or "").strip():
        parent = element.getparent()
        if parent is not None:
            parent.remove(element)


def to_string(root: etree._Element, pretty: bool = True) -> str:
    return etree.tostring(
        root,
        pretty_print=pretty,
        xml_declaration=True,
        encoding="UTF-8",
    ).decode("utf-8")


def escape(value) -> str:
    """Escape text for direct inclusion in an XML template."""
    return _escape(str(value), _ENTITIES)
