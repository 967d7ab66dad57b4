"""Tests for fill recoloring."""

import pytest

from iconspine.core.errors import MalformedAsset
from iconspine.core.models import SIGNATURE_COLOR, WHITE_COLOR
from iconspine.transform import recolor
from tests._support import CHAT_BUBBLE_SVG, MALFORMED_SVG, SINGLE_PATH_SVG, effective_fills


def svg(body: str) -> str:
    return f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 32" data-label="root">{body}</svg>'


class TestFills:
    @pytest.mark.parametrize("color", [SIGNATURE_COLOR, WHITE_COLOR])
    def test_unfilled_paths_get_target_color(self, color):
        markup = svg('<path data-label="a" d="M0 0h8v8z"/><circle data-label="b" cx="16" cy="16" r="4"/>')
        fills = effective_fills(recolor(markup, color))
        assert fills == {"root": color, "a": color, "b": color}

    def test_existing_fill_replaced(self):
        markup = svg('<path data-label="a" fill="#FF0000" d="M0 0h8v8z"/>')
        assert effective_fills(recolor(markup, "#fff"))["a"] == "#fff"

    def test_fill_none_preserved(self):
        markup = svg('<rect data-label="bbox" fill="none" width="32" height="32"/><path data-label="a" d="M0 0h1"/>')
        fills = effective_fills(recolor(markup, SIGNATURE_COLOR))
        assert fills["bbox"] == "none"
        assert fills["a"] == SIGNATURE_COLOR

    def test_fill_none_check_is_case_insensitive(self):
        markup = svg('<rect data-label="bbox" fill="None" width="32" height="32"/>')
        assert effective_fills(recolor(markup, SIGNATURE_COLOR))["bbox"] == "None"

    def test_children_inherit_none(self):
        markup = svg(
            '<g data-label="cutout" fill="none">'
            '<path data-label="inner" d="M0 0h1"/>'
            '<path data-label="explicit" fill="red" d="M1 1h1"/>'
            "</g>"
        )
        fills = effective_fills(recolor(markup, WHITE_COLOR))
        assert fills["cutout"] == "none"
        assert fills["inner"] == "none"
        assert fills["explicit"] == WHITE_COLOR


class TestStyleFills:
    def test_style_fill_none_preserved(self):
        markup = svg('<rect data-label="bbox" style="fill:none" width="32" height="32"/>')
        assert effective_fills(recolor(markup, SIGNATURE_COLOR))["bbox"] == "none"

    def test_style_fill_rewritten(self):
        markup = svg('<path data-label="a" style="fill: #ff0000; stroke: blue" d="M0 0h1"/>')
        out = recolor(markup, WHITE_COLOR)
        assert effective_fills(out)["a"] == WHITE_COLOR
        assert "stroke:blue" in out.replace(" ", "")
        assert "#ff0000" not in out

    def test_class_rule_none_becomes_explicit(self):
        out = recolor(CHAT_BUBBLE_SVG, SIGNATURE_COLOR)
        assert '<rect data-name="&lt;Transparent Rectangle&gt;" class="cls-1" width="32" height="32" fill="none" />' in out

    def test_class_rule_none_survives_attribute(self):
        markup = svg(
            "<defs><style>/* cut-outs */ .cls-1, .cls-2 { fill: none; }</style></defs>"
            '<rect data-label="bbox" class="cls-2" fill="#f00" width="32" height="32"/>'
            '<g data-label="hole" class="cls-1"><path data-label="inner" d="M0 0h1"/></g>'
        )
        fills = effective_fills(recolor(markup, WHITE_COLOR))
        assert fills["bbox"] == "none"
        assert fills["hole"] == "none"
        assert fills["inner"] == "none"

    def test_inline_style_beats_class_rule(self):
        markup = svg(
            "<defs><style>.cls-1{fill:none}</style></defs>"
            '<path data-label="a" class="cls-1" style="fill:#f00" d="M0 0h1"/>'
        )
        assert effective_fills(recolor(markup, WHITE_COLOR))["a"] == WHITE_COLOR

    def test_colored_class_rule_overridden_inline(self):
        markup = svg(
            "<defs><style>.accent{fill:#da1e28}</style></defs>"
            '<path data-label="a" class="accent" d="M0 0h1"/>'
        )
        out = recolor(markup, SIGNATURE_COLOR)
        assert 'style="fill:#002346"' in out
        assert effective_fills(out)["a"] == SIGNATURE_COLOR

    def test_later_class_rule_wins(self):
        markup = svg(
            "<defs><style>.a{fill:none} .b{fill:#000}</style></defs>"
            '<path data-label="x" class="b a" d="M0 0h1"/>'
        )
        assert effective_fills(recolor(markup, WHITE_COLOR))["x"] == WHITE_COLOR

    def test_compound_selectors_ignored(self):
        markup = svg(
            "<defs><style>g .cls-1{fill:none}</style></defs>"
            '<path data-label="a" class="cls-1" d="M0 0h1"/>'
        )
        assert effective_fills(recolor(markup, WHITE_COLOR))["a"] == WHITE_COLOR

    def test_style_element_untouched(self):
        out = recolor(CHAT_BUBBLE_SVG, SIGNATURE_COLOR)
        assert "<style>.cls-1 { fill: none; }</style>" in out


class TestDocument:
    def test_output_is_optimized(self):
        out = recolor(CHAT_BUBBLE_SVG, SIGNATURE_COLOR)
        assert "<title>" not in out
        assert "<?xml" not in out
        assert "\n" not in out

    def test_geometry_unchanged(self):
        out = recolor(SINGLE_PATH_SVG, SIGNATURE_COLOR)
        assert 'd="M4 4h24v24H4z"' in out
        assert 'viewBox="0 0 32 32"' in out

    def test_deterministic(self):
        assert recolor(CHAT_BUBBLE_SVG, WHITE_COLOR) == recolor(CHAT_BUBBLE_SVG, WHITE_COLOR)

    def test_idempotent(self):
        once = recolor(CHAT_BUBBLE_SVG, SIGNATURE_COLOR)
        assert recolor(once, SIGNATURE_COLOR) == once

    def test_variants_differ_only_in_color(self):
        signature = recolor(CHAT_BUBBLE_SVG, SIGNATURE_COLOR)
        white = recolor(CHAT_BUBBLE_SVG, WHITE_COLOR)
        assert signature != white
        assert signature.replace(SIGNATURE_COLOR, WHITE_COLOR) == white

    def test_input_not_modified(self):
        markup = SINGLE_PATH_SVG
        recolor(markup, SIGNATURE_COLOR)
        assert markup == SINGLE_PATH_SVG


class TestErrors:
    def test_malformed_markup(self):
        with pytest.raises(MalformedAsset):
            recolor(MALFORMED_SVG, SIGNATURE_COLOR)

    def test_non_svg_root(self):
        with pytest.raises(MalformedAsset, match="expected <svg>"):
            recolor("<html><body/></html>", SIGNATURE_COLOR)

    def test_empty_markup(self):
        with pytest.raises(MalformedAsset):
            recolor("", SIGNATURE_COLOR)
