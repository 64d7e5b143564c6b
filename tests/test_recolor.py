"""Tests for svg_icons.recolor module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_icons.geometry import BoundingBox
from svg_icons.markup import MarkupNode, parse_markup, serialize_inner
from svg_icons.recolor import (
    is_white_color,
    is_transparent_stroke,
    has_white_colors_for_contrast,
    rewrite_colors,
)

DOCUMENT = BoundingBox(0, 0, 24, 24)


def _rewrite(inner: str, preserve_contrast: bool = False) -> str:
    root = parse_markup(f'<svg viewBox="0 0 24 24">{inner}</svg>')
    return serialize_inner(
        rewrite_colors(root, DOCUMENT, preserve_contrast=preserve_contrast)
    )


class TestIsWhiteColor:
    """Tests for is_white_color function."""

    @pytest.mark.parametrize(
        "color",
        [
            "white",
            "WHITE",
            "#fff",
            "#FFF",
            "#ffffff",
            "rgb(255,255,255)",
            "rgb(255, 255, 255)",
            "rgba(255,255,255,1)",
            " white ",
        ],
    )
    def test_white(self, color):
        assert is_white_color(color) is True

    @pytest.mark.parametrize(
        "color", ["#fefefe", "black", "rgba(255,255,255,0.5)", "none", "currentColor"]
    )
    def test_not_white(self, color):
        assert is_white_color(color) is False


class TestIsTransparentStroke:
    """Tests for is_transparent_stroke function."""

    @pytest.mark.parametrize(
        "color", ["transparent", "Transparent", "rgba(0,0,0,0)", "rgba(0, 0, 0, 0)"]
    )
    def test_transparent(self, color):
        assert is_transparent_stroke(color) is True

    @pytest.mark.parametrize("color", ["none", "#000", "rgba(0,0,0,1)"])
    def test_not_transparent(self, color):
        assert is_transparent_stroke(color) is False


class TestHasWhiteColorsForContrast:
    """Tests for has_white_colors_for_contrast function."""

    def test_white_fill(self):
        root = parse_markup('<svg><path fill="#fff"/></svg>')
        assert has_white_colors_for_contrast(root) is True

    def test_nested_white_stroke(self):
        root = parse_markup('<svg><g><g><path stroke="white"/></g></g></svg>')
        assert has_white_colors_for_contrast(root) is True

    def test_root_white(self):
        root = parse_markup('<svg fill="white"><path/></svg>')
        assert has_white_colors_for_contrast(root) is True

    def test_no_white(self):
        root = parse_markup('<svg><path fill="#000" stroke="red"/></svg>')
        assert has_white_colors_for_contrast(root) is False


class TestRewriteFill:
    """Tests for fill handling in rewrite_colors."""

    def test_primary_fill(self):
        assert _rewrite('<path fill="#000" d="M0 0"/>') == (
            '<path fill="currentColor" d="M0 0"/>'
        )

    def test_secondary_fill_gets_opacity(self):
        assert _rewrite('<rect width="24" height="24" fill="#000"/>') == (
            '<rect width="24" height="24" fill="currentColor" opacity="0.3"/>'
        )

    def test_small_rect_is_primary(self):
        assert _rewrite('<rect x="10" y="10" width="2" height="2" fill="red"/>') == (
            '<rect x="10" y="10" width="2" height="2" fill="currentColor"/>'
        )

    def test_fill_none_unchanged(self):
        assert _rewrite('<path fill="none" d="M0 0"/>') == '<path fill="none" d="M0 0"/>'

    def test_fill_none_case_insensitive(self):
        assert _rewrite('<path fill="None" d="M0 0"/>') == '<path fill="None" d="M0 0"/>'

    def test_white_preserved_with_contrast(self):
        assert _rewrite('<path fill="#ffffff"/>', preserve_contrast=True) == (
            '<path fill="#ffffff"/>'
        )

    def test_white_replaced_without_contrast(self):
        assert _rewrite('<path fill="#ffffff"/>', preserve_contrast=False) == (
            '<path fill="currentColor"/>'
        )

    def test_non_white_replaced_with_contrast(self):
        assert _rewrite('<path fill="#123456"/>', preserve_contrast=True) == (
            '<path fill="currentColor"/>'
        )


class TestImplicitFill:
    """Tests for fill synthesis on elements without a fill attribute."""

    def test_implicit_fill_synthesized(self):
        assert _rewrite('<path d="M0 0"/>') == '<path d="M0 0" fill="currentColor"/>'

    def test_implicit_secondary_fill(self):
        assert _rewrite('<circle cx="12" cy="12" r="12"/>') == (
            '<circle cx="12" cy="12" r="12" fill="currentColor" opacity="0.3"/>'
        )

    def test_no_fill_when_stroked(self):
        assert _rewrite('<path stroke="#000" d="M0 0"/>') == (
            '<path stroke="currentColor" d="M0 0"/>'
        )

    @pytest.mark.parametrize(
        "tag",
        ["defs", "clipPath", "mask", "pattern", "linearGradient", "radialGradient", "filter", "g"],
    )
    def test_non_painting_tags(self, tag):
        assert _rewrite(f"<{tag}/>") == f"<{tag}/>"

    def test_group_children_filled(self):
        assert _rewrite('<g><path d="M0 0"/></g>') == (
            '<g><path d="M0 0" fill="currentColor"/></g>'
        )

    def test_no_fill_under_fill_none_parent(self):
        assert _rewrite('<g fill="none"><path d="M0 0"/></g>') == (
            '<g fill="none"><path d="M0 0"/></g>'
        )

    def test_fill_none_inherited_deeply(self):
        assert _rewrite('<g fill="none"><g><g><path d="M0 0"/></g></g></g>') == (
            '<g fill="none"><g><g><path d="M0 0"/></g></g></g>'
        )

    def test_explicit_fill_under_fill_none_parent(self):
        assert _rewrite('<g fill="none"><path fill="#000" d="M0 0"/></g>') == (
            '<g fill="none"><path fill="currentColor" d="M0 0"/></g>'
        )

    def test_root_fill_none_inherited(self):
        root = parse_markup('<svg viewBox="0 0 24 24" fill="none"><path d="M0 0"/></svg>')
        result = rewrite_colors(root, DOCUMENT)
        assert serialize_inner(result) == '<path d="M0 0"/>'


class TestRewriteStroke:
    """Tests for stroke handling in rewrite_colors."""

    def test_primary_stroke(self):
        assert _rewrite('<path fill="none" stroke="#333"/>') == (
            '<path fill="none" stroke="currentColor"/>'
        )

    @pytest.mark.parametrize("stroke", ["transparent", "rgba(0,0,0,0)", "rgba(0, 0, 0, 0)"])
    def test_transparent_stroke_becomes_none(self, stroke):
        assert _rewrite(f'<circle cx="12" cy="12" r="2" stroke="{stroke}"/>') == (
            '<circle cx="12" cy="12" r="2" stroke="none"/>'
        )

    def test_transparent_stroke_on_secondary(self):
        assert _rewrite('<rect width="24" height="24" fill="none" stroke="transparent"/>') == (
            '<rect width="24" height="24" fill="none" stroke="none"/>'
        )

    def test_stroke_none_unchanged(self):
        assert _rewrite('<path fill="none" stroke="none"/>') == (
            '<path fill="none" stroke="none"/>'
        )

    def test_secondary_stroke_not_recolored(self):
        assert _rewrite('<rect width="24" height="24" stroke="#000"/>') == (
            '<rect width="24" height="24" stroke="#000"/>'
        )

    def test_white_stroke_preserved_with_contrast(self):
        assert _rewrite('<path fill="none" stroke="white"/>', preserve_contrast=True) == (
            '<path fill="none" stroke="white"/>'
        )

    def test_white_stroke_replaced_without_contrast(self):
        assert _rewrite('<path fill="none" stroke="white"/>') == (
            '<path fill="none" stroke="currentColor"/>'
        )


class TestRewriteColors:
    """General tests for rewrite_colors."""

    def test_original_untouched(self):
        root = parse_markup('<svg viewBox="0 0 24 24"><path fill="#000"/></svg>')
        rewrite_colors(root, DOCUMENT)
        assert root.children[0].attributes == {"fill": "#000"}

    def test_idempotent(self):
        root = parse_markup(
            '<svg viewBox="0 0 24 24">'
            '<rect width="24" height="24" fill="#000"/>'
            '<path d="M0 0"/>'
            '<path fill="none" stroke="transparent"/>'
            '<circle cx="12" cy="12" r="3" stroke="red"/>'
            '<g fill="none"><path d="M1 1"/></g>'
            "</svg>"
        )
        once = rewrite_colors(root, DOCUMENT)
        twice = rewrite_colors(once, DOCUMENT)
        assert twice == once

    def test_text_preserved(self):
        root = parse_markup('<svg viewBox="0 0 24 24"><title>Star</title></svg>')
        result = rewrite_colors(root, DOCUMENT)
        assert result.children[0].text == "Star"

    def test_unknown_document_box(self):
        unknown = BoundingBox(0, 0, None, None)
        root = MarkupNode("svg", {}, [MarkupNode("rect", {"width": "24", "height": "24"})])
        result = rewrite_colors(root, unknown)
        assert result.children[0].attributes == {
            "width": "24",
            "height": "24",
            "fill": "currentColor",
        }
