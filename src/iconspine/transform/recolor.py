"""Fill recoloring for single-color icons.

Every painted element is repainted with the target color, except regions
that are explicitly unfilled (``fill="none"``, ``style="fill:none"`` or a
class rule such as ``.cls-1 { fill: none; }`` in the document's ``<style>``),
which are the cut-outs and transparent bounding rectangles of an icon.
Children of an unfilled element that have no fill of their own inherit
``none`` and are left alone too. Elements unfilled through a class rule also
get an explicit ``fill="none"``, so the result does not depend on the
stylesheet being honoured.

Recoloring runs on the original attribute set, then :func:`optimize` cleans
the document; the optimizer may merge or drop attributes, so the order
matters.

Examples:
    >>> recolor('<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0h1"/></svg>', "#fff")
    '<svg xmlns="http://www.w3.org/2000/svg" fill="#fff"><path d="M0 0h1" fill="#fff" /></svg>'
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from iconspine.transform.optimize import local_name, optimize, parse_svg

NO_FILL = "none"

# Elements that never paint anything; they keep their attributes untouched.
UNPAINTED = frozenset({"style", "title", "desc", "metadata", "script"})

_CSS_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_CSS_RULE = re.compile(r"([^{}]+)\{([^{}]*)\}")
_CLASS_SELECTOR = re.compile(r"\.([A-Za-z_-][\w-]*)")


def recolor(markup: str, color: str) -> str:
    """Return ``markup`` with every non-``none`` fill set to ``color``.

    Raises ``MalformedAsset`` if the markup cannot be parsed.
    """
    root = parse_svg(markup)
    _recolor_element(root, color, _class_fills(root), inherited_none=False)
    return optimize(root)


def _class_fills(root: ET.Element) -> dict[str, str]:
    """``fill`` declared by single-class rules (``.cls-1 { fill: none; }``) in ``<style>``.

    Later rules win over earlier ones. Selectors other than a bare class are
    ignored.
    """
    fills: dict[str, str] = {}
    for el in root.iter():
        if local_name(el.tag) != "style" or not el.text:
            continue
        for selectors, body in _CSS_RULE.findall(_CSS_COMMENT.sub("", el.text)):
            fill = _style_declarations(body).get("fill")
            if fill is None:
                continue
            for selector in selectors.split(","):
                match = _CLASS_SELECTOR.fullmatch(selector.strip())
                if match:
                    fills.pop(match.group(1), None)
                    fills[match.group(1)] = fill
    return fills


def _recolor_element(el: ET.Element, color: str, class_fills: dict[str, str], *, inherited_none: bool) -> None:
    if local_name(el.tag) in UNPAINTED:
        return

    own, from_class = _own_fill(el, class_fills)
    if own is None:
        # No fill of its own: inherits. Leave inherited "none" alone.
        unfilled = inherited_none
        if not unfilled:
            el.set("fill", color)
    elif own == NO_FILL:
        unfilled = True
        if from_class:
            el.set("fill", NO_FILL)
    else:
        unfilled = False
        el.set("fill", color)
        if from_class:
            # The stylesheet rule outranks the attribute.
            _set_style_fill(el, color)
        else:
            _rewrite_style_fill(el, color)

    for child in el:
        _recolor_element(child, color, class_fills, inherited_none=unfilled)


def _own_fill(el: ET.Element, class_fills: dict[str, str]) -> tuple[str | None, bool]:
    """The element's declared fill and whether it came from a class rule.

    Inline style wins over class rules, which win over the ``fill`` attribute.
    """
    declared = _style_declarations(el.get("style", "")).get("fill")
    if declared is not None:
        return declared.strip().lower(), False
    by_class = _class_fill(el, class_fills)
    if by_class is not None:
        return by_class.strip().lower(), True
    declared = el.get("fill")
    if declared is None:
        return None, False
    return declared.strip().lower(), False


def _class_fill(el: ET.Element, class_fills: dict[str, str]) -> str | None:
    classes = set(el.get("class", "").split())
    if not classes or not class_fills:
        return None
    winner = None
    for name, fill in class_fills.items():
        if name in classes:
            winner = fill
    return winner


def _style_declarations(style: str) -> dict[str, str]:
    result = {}
    for item in style.split(";"):
        if ":" in item:
            key, value = item.split(":", 1)
            result[key.strip().lower()] = value.strip()
    return result


def _set_style_fill(el: ET.Element, color: str) -> None:
    style = el.get("style", "").strip().rstrip(";")
    el.set("style", f"{style};fill:{color}" if style else f"fill:{color}")


def _rewrite_style_fill(el: ET.Element, color: str) -> None:
    style = el.get("style")
    if not style or "fill" not in style:
        return
    parts = []
    for item in style.split(";"):
        if not item.strip():
            continue
        key, sep, value = item.partition(":")
        if sep and key.strip().lower() == "fill":
            parts.append(f"fill:{color}")
        else:
            parts.append(item.strip())
    el.set("style", ";".join(parts))
