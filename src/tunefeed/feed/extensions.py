"""Opaque extension elements carried through import and render unchanged."""

import xml.etree.ElementTree as ET  # nosec B405 - only used for the Element type

from tunefeed.feed.escape import escape_xml
from tunefeed.feed.models import ExtensionElement
from tunefeed.feed.namespaces import XML_NS, split_tag

INDENT = "    "


def _stripped(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def from_element(element: ET.Element) -> ExtensionElement:
    """Capture a parsed element (and its subtree) as an ExtensionElement.

    Surrounding whitespace of text and tails is dropped; the tail of the
    captured element itself belongs to its parent and is not kept.
    """
    return ExtensionElement(
        tag=element.tag,
        attributes=dict(element.attrib),
        text=_stripped(element.text),
        children=[_child(child) for child in element if isinstance(child.tag, str)],
    )


def _child(element: ET.Element) -> ExtensionElement:
    captured = from_element(element)
    captured.tail = _stripped(element.tail)
    return captured


class _Scope:
    """Namespace prefixes visible to an element while rendering."""

    def __init__(self, prefixes: dict[str, str]) -> None:
        self.prefixes = dict(prefixes)
        self.declarations: list[str] = []

    def qualify(self, name: str) -> str:
        uri, local = split_tag(name)
        if uri is None:
            return local
        if uri == XML_NS:
            return f"xml:{local}"
        prefix = self.prefixes.get(uri)
        if prefix is None:
            prefix = self._unused_prefix()
            self.prefixes[uri] = prefix
            self.declarations.append(f'xmlns:{prefix}="{escape_xml(uri)}"')
        return f"{prefix}:{local}"

    def _unused_prefix(self) -> str:
        taken = set(self.prefixes.values())
        n = 0
        while f"ns{n}" in taken:
            n += 1
        return f"ns{n}"


def render_extension(element: ExtensionElement, level: int, prefixes: dict[str, str]) -> str:
    """Render an extension element as indented XML lines.

    Args:
        element: Element to render
        level: Indentation level of the opening tag
        prefixes: Namespace uri -> prefix mapping declared by enclosing elements.
            Namespaces missing from it are declared on the element itself.

    Returns:
        The element's XML, one tag per line
    """
    scope = _Scope(prefixes)
    name = scope.qualify(element.tag)
    attrs = [f'{scope.qualify(key)}="{escape_xml(value)}"' for key, value in element.attributes.items()]
    head = " ".join([name, *scope.declarations, *attrs])
    pad = INDENT * level

    if not element.children:
        if element.text is None:
            return f"{pad}<{head} />"
        return f"{pad}<{head}>{escape_xml(element.text)}</{name}>"

    lines = [f"{pad}<{head}>"]
    if element.text is not None:
        lines.append(f"{INDENT * (level + 1)}{escape_xml(element.text)}")
    for child in element.children:
        lines.append(render_extension(child, level + 1, scope.prefixes))
        if child.tail is not None:
            lines.append(f"{INDENT * (level + 1)}{escape_xml(child.tail)}")
    lines.append(f"{pad}</{name}>")
    return "\n".join(lines)
