"""Tests for SVG padding/background injection and banner markup."""

import base64
import xml.etree.ElementTree as ET

import pytest

from iconkit.errors import InputError, MarkupError
from iconkit.profiles import GenerationSettings
from iconkit.vector import (
    BACKGROUND_MARKER,
    SVG_NS,
    ViewBox,
    apply_background_and_padding,
    generate_banner_markup,
    generate_line_markup,
    generate_vector_assets,
    merge_style,
    parse_length,
    read_view_box,
    svg_data_uri,
)

NS = {"svg": SVG_NS}


def backgrounds(root):
    return [el for el in root.iter() if el.get(BACKGROUND_MARKER) == "true"]


class TestApplyBackgroundAndPadding:
    """Tests for apply_background_and_padding."""

    def test_padding_scenario(self, simple_svg):
        out = apply_background_and_padding(simple_svg, "#ffffff", 6, 4, "#000000")
        root = ET.fromstring(out)
        assert root.get("viewBox") == "-4 -4 32 32"
        assert root.get("width") == "32"
        assert root.get("height") == "32"

        children = list(root)
        assert len(backgrounds(root)) == 1
        assert children[0].get(BACKGROUND_MARKER) == "true"
        assert children[0].tag == f"{{{SVG_NS}}}path"
        assert children[1].get("d") == "M12 2L2 22h20z"

    def test_background_attributes(self, simple_svg):
        root = ET.fromstring(apply_background_and_padding(simple_svg, "#ABC", 6, 4, "#000"))
        bg = root[0]
        assert bg.get("fill") == "#aabbcc"
        assert bg.get("stroke") == "none"
        assert bg.get("d").startswith("M2,-4 H")
        assert bg.get("d").endswith("Z")

    def test_foreground_colour(self, simple_svg):
        root = ET.fromstring(apply_background_and_padding(simple_svg, "#ffffff", 0, 0, "#FF0000"))
        assert root.get("color") == "#ff0000"
        assert root.get("style") == "color: #ff0000;"

    def test_existing_style_kept(self):
        svg = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10" style="opacity: .5; color: red"/>'
        root = ET.fromstring(apply_background_and_padding(svg, "#fff", 0, 0, "#123456"))
        assert root.get("style") == "opacity: .5; color: #123456;"

    def test_idempotent_background(self, simple_svg):
        once = apply_background_and_padding(simple_svg, "#ffffff", 6, 4, "#000000")
        twice = apply_background_and_padding(once, "#ffffff", 6, 4, "#000000")
        root = ET.fromstring(twice)
        assert len(backgrounds(root)) == 1
        assert len(root.findall("svg:path", NS)) == 2

    def test_nested_marker_removed(self):
        svg = (
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
            '<g><path data-background-path="true" d="M0 0"/><path d="M1 1"/></g></svg>'
        )
        root = ET.fromstring(apply_background_and_padding(svg, "#fff", 0, 0, "#000"))
        assert len(backgrounds(root)) == 1
        assert len(root.find("svg:g", NS)) == 1

    def test_negative_padding_clamped(self, simple_svg):
        root = ET.fromstring(apply_background_and_padding(simple_svg, "#fff", 0, -10, "#000"))
        assert root.get("viewBox") == "0 0 24 24"

    def test_nan_padding_and_radius(self, simple_svg):
        nan = float("nan")
        root = ET.fromstring(apply_background_and_padding(simple_svg, "#fff", nan, nan, "#000"))
        assert root.get("viewBox") == "0 0 24 24"
        assert root[0].get("d") == "M0,0 H24 V24 H0 Z"

    def test_width_height_without_viewbox(self):
        svg = '<svg xmlns="http://www.w3.org/2000/svg" width="24px" height="16"><circle r="2"/></svg>'
        root = ET.fromstring(apply_background_and_padding(svg, "#fff", 2, 2, "#000"))
        assert root.get("viewBox") == "-2 -2 28 20"

    def test_missing_namespace_added(self):
        svg = '<svg viewBox="0 0 24 24"><path d="M0 0"/></svg>'
        out = apply_background_and_padding(svg, "#fff", 2, 0, "#000")
        root = ET.fromstring(out)
        assert root.tag == f"{{{SVG_NS}}}svg"
        assert root[0].get(BACKGROUND_MARKER) == "true"

    def test_xlink_preserved(self):
        svg = (
            '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
            'viewBox="0 0 4 4"><use xlink:href="#a"/></svg>'
        )
        out = apply_background_and_padding(svg, "#fff", 0, 0, "#000")
        assert 'xlink:href="#a"' in out
        assert "ns0" not in out

    def test_unparsable(self):
        with pytest.raises(MarkupError, match="invalid document"):
            apply_background_and_padding("<svg><path></svg>", "#fff", 0, 0, "#000")

    def test_not_svg_root(self):
        with pytest.raises(MarkupError):
            apply_background_and_padding("<html/>", "#fff", 0, 0, "#000")

    def test_missing_dimensions(self):
        with pytest.raises(MarkupError, match="missing dimensions"):
            apply_background_and_padding('<svg width="10"/>', "#fff", 0, 0, "#000")

    def test_non_numeric_dimensions(self):
        with pytest.raises(MarkupError, match="non-numeric"):
            apply_background_and_padding('<svg width="auto" height="10"/>', "#fff", 0, 0, "#000")

    def test_invalid_viewbox(self):
        with pytest.raises(MarkupError, match="invalid viewBox"):
            apply_background_and_padding('<svg viewBox="0 0 24"/>', "#fff", 0, 0, "#000")

    def test_bad_colour(self, simple_svg):
        with pytest.raises(InputError):
            apply_background_and_padding(simple_svg, "blue-ish", 0, 0, "#000")


class TestParsingHelpers:
    """Tests for the attribute parsing helpers."""

    @pytest.mark.parametrize("value,expected", [("24", 24.0), ("24px", 24.0), (" 1.5e1 ", 15.0), ("-3", -3.0)])
    def test_parse_length(self, value, expected):
        assert parse_length(value) == expected

    @pytest.mark.parametrize("value", [None, "", "px", "auto"])
    def test_parse_length_rejects(self, value):
        assert parse_length(value) is None

    def test_viewbox_commas(self):
        root = ET.fromstring('<svg viewBox="0,0, 24,12"/>')
        assert read_view_box(root) == ViewBox(0, 0, 24, 12)

    def test_view_box_str(self):
        assert str(ViewBox(0, 0, 24, 24).expand(4)) == "-4 -4 32 32"

    def test_merge_style_empty(self):
        assert merge_style(None, "color", "#000000") == "color: #000000;"


class TestBannerMarkup:
    """Tests for generate_banner_markup."""

    def test_layout(self):
        markup = generate_banner_markup("data:image/svg+xml;base64,AAAA", "#FFFFFF")
        assert markup.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        root = ET.fromstring(markup)
        assert (root.get("width"), root.get("height")) == ("1500", "600")
        assert root.get("viewBox") == "0 0 1500 600"

        rect = root.find("svg:rect", NS)
        assert rect.get("fill") == "#ffffff"
        image = root.find("svg:image", NS)
        assert (image.get("x"), image.get("y")) == ("686", "236")
        assert (image.get("width"), image.get("height")) == ("128", "128")
        assert image.get("href") == "data:image/svg+xml;base64,AAAA"

    def test_uri_is_escaped(self):
        markup = generate_banner_markup('x"&<', "#000")
        assert ET.fromstring(markup).find("svg:image", NS).get("href") == 'x"&<'


class TestVectorAssets:
    """Tests for generate_vector_assets and data URIs."""

    def test_assets(self, simple_svg):
        assets = generate_vector_assets(simple_svg, GenerationSettings("#384152", 12, 4), "#ffffff")
        assert assets.icon_data_uri == svg_data_uri(assets.icon_markup)
        decoded = base64.b64decode(assets.banner_data_uri.split(",", 1)[1]).decode("utf-8")
        assert decoded == assets.banner_markup
        assert assets.icon_data_uri in assets.banner_markup

    def test_defaults(self, simple_svg):
        assets = generate_vector_assets(simple_svg)
        root = ET.fromstring(assets.icon_markup)
        assert root.get("viewBox") == "-4 -4 32 32"
        assert root.get("color") == "#000000"

    def test_xml_declaration_allowed(self, simple_svg):
        assets = generate_vector_assets('<?xml version="1.0"?>\n' + simple_svg)
        assert assets.icon_markup.startswith("<svg")

    def test_comment_prolog_allowed(self, simple_svg):
        assets = generate_vector_assets("<!-- Generator: Adobe Illustrator 27.0 -->\n" + simple_svg)
        root = ET.fromstring(assets.icon_markup)
        assert root.get("viewBox") == "-4 -4 32 32"

    def test_doctype_prolog_allowed(self, simple_svg):
        markup = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
            '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
        ) + simple_svg
        assets = generate_vector_assets(markup)
        root = ET.fromstring(assets.icon_markup)
        assert len(backgrounds(root)) == 1

    def test_rejects_non_svg_text(self):
        with pytest.raises(MarkupError):
            generate_vector_assets("hello")

    def test_data_uri_utf8(self):
        uri = svg_data_uri("<svg>é</svg>")
        assert base64.b64decode(uri.split(",", 1)[1]).decode("utf-8") == "<svg>é</svg>"


class TestLineMarkup:
    """Tests for generate_line_markup."""

    def test_defaults(self):
        root = ET.fromstring(generate_line_markup())
        rect = root.find("svg:rect", NS)
        assert root.get("viewBox") == "0 0 1600 4"
        assert rect.get("rx") == "2"
        assert rect.get("fill") == "#2463e9"

    def test_invalid_size_falls_back(self):
        root = ET.fromstring(generate_line_markup(-5, float("nan"), 1))
        assert (root.get("width"), root.get("height")) == ("1600", "4")
        assert root.find("svg:rect", NS).get("rx") == "1"
