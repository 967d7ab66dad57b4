"""Appearance-preserving SVG cleanup.

Runs after recoloring and before serialization. Every pass only removes
markup that cannot change the rendered result:

- comments and processing instructions (dropped by the parser)
- ``<title>``, ``<desc>``, ``<metadata>`` and editor-namespace nodes/attributes
- whitespace-only text outside text content elements
- redundant whitespace inside attribute values, and empty attributes
- ``id`` attributes nobody references
- ``<g>`` wrappers whose attributes every child already overrides, unless
  the group is a direct child of ``<switch>``
- empty ``<g>`` and ``<defs>`` containers

The output is deterministic for a given input.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from iconspine.core.errors import MalformedAsset

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

EDITOR_NAMESPACES = frozenset(
    {
        "http://www.inkscape.org/namespaces/inkscape",
        "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
        "http://www.bohemiancoding.com/sketch/ns",
        "http://ns.adobe.com/AdobeIllustrator/10.0/",
        "http://ns.adobe.com/Graphs/1.0/",
        "http://ns.adobe.com/SaveForWeb/1.0/",
        "http://ns.adobe.com/Extensibility/1.0/",
        "http://www.figma.com/figma/ns",
    }
)

NON_RENDERING = frozenset({"title", "desc", "metadata"})
TEXT_CONTENT = frozenset({"text", "tspan", "textPath", "style", "script"})
REMOVABLE_WHEN_EMPTY = frozenset({"g", "defs"})

# Presentation attributes a child inherits from its group.
INHERITABLE = frozenset(
    {
        "fill",
        "fill-opacity",
        "fill-rule",
        "stroke",
        "stroke-dasharray",
        "stroke-dashoffset",
        "stroke-linecap",
        "stroke-linejoin",
        "stroke-miterlimit",
        "stroke-opacity",
        "stroke-width",
        "color",
    }
)

_URL_REF = re.compile(r"url\(\s*['\"]?#([^)'\"\s]+)['\"]?\s*\)")
_CSS_ID = re.compile(r"#([A-Za-z_][\w-]*)")
_WHITESPACE = re.compile(r"\s+")


def local_name(tag: str) -> str:
    """``{ns}path`` → ``path``."""
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def namespace(name: str) -> str | None:
    return name[1:].split("}", 1)[0] if name.startswith("{") else None


def parse_svg(markup: str) -> ET.Element:
    """Parse markup into an element tree, mapping parser errors to ``MalformedAsset``."""
    try:
        root = ET.fromstring(markup)
    except ET.ParseError as e:
        raise MalformedAsset(f"Unparseable SVG: {e}", cause=e) from e
    if local_name(root.tag) != "svg":
        raise MalformedAsset(f"Root element is <{local_name(root.tag)}>, expected <svg>")
    return root


def serialize(root: ET.Element) -> str:
    return ET.tostring(root, encoding="unicode")


def optimize(svg: str | ET.Element) -> str:
    """Run every cleanup pass and return the serialized document."""
    root = parse_svg(svg) if isinstance(svg, str) else svg

    _remove_non_rendering(root)
    _cleanup_attributes(root)
    _strip_whitespace(root)
    _remove_unused_ids(root)
    _collapse_groups(root)
    _remove_empty_containers(root)

    return serialize(root)


def _remove_non_rendering(parent: ET.Element) -> None:
    for child in list(parent):
        if not isinstance(child.tag, str):
            parent.remove(child)
            continue
        if local_name(child.tag) in NON_RENDERING or namespace(child.tag) in EDITOR_NAMESPACES:
            _remove_keeping_tail(parent, child)
            continue
        _remove_non_rendering(child)


def _cleanup_attributes(root: ET.Element) -> None:
    for el in root.iter():
        for key in list(el.attrib):
            if namespace(key) in EDITOR_NAMESPACES:
                del el.attrib[key]
                continue
            value = _WHITESPACE.sub(" ", el.attrib[key]).strip()
            if value:
                el.attrib[key] = value
            else:
                del el.attrib[key]


def _strip_whitespace(root: ET.Element) -> None:
    for el in root.iter():
        if local_name(el.tag) in TEXT_CONTENT:
            continue
        if el.text is not None and not el.text.strip():
            el.text = None
        for child in el:
            if local_name(child.tag) in {"tspan", "textPath"}:
                continue
            if child.tail is not None and not child.tail.strip():
                child.tail = None


def _referenced_ids(root: ET.Element) -> set[str]:
    refs: set[str] = set()
    for el in root.iter():
        for key, value in el.attrib.items():
            if local_name(key) == "href" and value.startswith("#"):
                refs.add(value[1:])
            refs.update(_URL_REF.findall(value))
        if local_name(el.tag) == "style" and el.text:
            refs.update(_CSS_ID.findall(el.text))
    return refs


def _remove_unused_ids(root: ET.Element) -> None:
    refs = _referenced_ids(root)
    for el in root.iter():
        if "id" in el.attrib and el.attrib["id"] not in refs:
            del el.attrib["id"]


def _collapse_groups(parent: ET.Element) -> None:
    # <switch> renders only its first qualifying direct child.
    keep_groups = local_name(parent.tag) == "switch"
    index = 0
    while index < len(parent):
        child = parent[index]
        _collapse_groups(child)
        if not keep_groups and _is_redundant_group(child):
            parent.remove(child)
            for offset, grandchild in enumerate(list(child)):
                parent.insert(index + offset, grandchild)
            # Re-examine the promoted children at this index.
            continue
        index += 1


def _is_redundant_group(el: ET.Element) -> bool:
    if local_name(el.tag) != "g" or len(el) == 0 or (el.text and el.text.strip()):
        return False
    attrs = set(el.attrib)
    if not attrs <= INHERITABLE:
        return False
    # Every child must override each attribute the group would pass down.
    return all(attr in child.attrib for child in el for attr in attrs)


def _remove_empty_containers(parent: ET.Element) -> None:
    for child in list(parent):
        _remove_empty_containers(child)
        if (
            local_name(child.tag) in REMOVABLE_WHEN_EMPTY
            and len(child) == 0
            and not (child.text and child.text.strip())
            and "id" not in child.attrib
        ):
            _remove_keeping_tail(parent, child)


def _remove_keeping_tail(parent: ET.Element, child: ET.Element) -> None:
    if child.tail and child.tail.strip():
        siblings = list(parent)
        position = siblings.index(child)
        if position > 0:
            prev = siblings[position - 1]
            prev.tail = (prev.tail or "") + child.tail
        else:
            parent.text = (parent.text or "") + child.tail
    parent.remove(child)
