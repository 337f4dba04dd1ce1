import math

import pytest

from ghg_sunburst.core.application.text_layout import (
    FontTextMeasurer,
    HeuristicTextMeasurer,
    TextLayoutService,
    create_text_measurer,
    is_bottom_half,
    tokenize,
    wrap_text,
    wrap_with_suffix,
)
from ghg_sunburst.core.domain.models import ArcNode
from ghg_sunburst.core.view_models import RadialLabel

def max_chars(limit):
    return lambda line: len(line) <= limit

def arc(depth, mid_deg, span_deg=6.0, name="Road Transport", share=11.9, ring_layout=None):
    mid = math.radians(mid_deg)
    half = math.radians(span_deg) / 2
    inner, outer = ring_layout.ring_bounds(depth)
    return ArcNode(
        id="road-transport",
        name=name,
        share=share,
        depth=depth,
        start_angle=mid - half,
        end_angle=mid + half,
        inner_radius=inner,
        outer_radius=outer,
        ancestor_sector_id="energy",
    )

@pytest.fixture
def layout(settings, ring_layout):
    return TextLayoutService(settings, ring_layout)

def test_tokenize_keeps_separators():
    assert tokenize("Agriculture, Forestry & Land Use") == [
        "Agriculture,", "Forestry", "&", "Land", "Use",
    ]
    assert tokenize("Food &tobacco") == ["Food", "&", "tobacco"]

def test_wrap_packs_greedily():
    lines = wrap_text("Energy use in buildings", max_chars(10))
    assert lines == ["Energy use", "in", "buildings"]

def test_wrap_emits_overlong_token_alone():
    assert wrap_text("Supercalifragilistic x", max_chars(5)) == ["Supercalifragilistic", "x"]

def test_wrap_of_empty_text():
    assert wrap_text("", max_chars(5)) == []

def test_suffix_joins_last_line_when_it_fits():
    assert wrap_with_suffix("Rail", "(0.4%)", max_chars(12)) == ["Rail (0.4%)"]
    assert wrap_with_suffix("Rail", "(0.4%)", max_chars(8)) == ["Rail", "(0.4%)"]

@pytest.mark.parametrize("text", [
    "Fugitive emissions from energy production",
    "Agriculture, Forestry & Land Use",
    "Energy in Agriculture & Fishing",
])
@pytest.mark.parametrize("limit", [6, 10, 15, 24])
def test_wrapped_lines_never_exceed_width(text, limit):
    for line in wrap_with_suffix(text, "(5.8%)", max_chars(limit)):
        assert len(line) <= limit or " " not in line

@pytest.mark.parametrize("angle, expected", [
    (0, False), (90, False), (90.1, True), (180, True),
    (269.9, True), (270, False), (-90, False), (450, False), (-135, True),
])
def test_bottom_half(angle, expected):
    assert is_bottom_half(angle) is expected

def test_heuristic_measurer():
    measurer = HeuristicTextMeasurer(0.6)
    assert measurer.width("abcd", 10) == pytest.approx(24)
    assert measurer.max_chars(30, 10) == 5
    assert measurer.fits("abcde", 30, 10)
    assert not measurer.fits("abcdef", 30, 10)

def test_font_measurer_uses_glyph_outlines():
    measurer = create_text_measurer("font")
    assert isinstance(measurer, FontTextMeasurer)
    assert measurer.width("", 12) == 0
    assert 0 < measurer.width("Rail", 12) < measurer.width("Rail Rail", 12)
    assert isinstance(create_text_measurer("heuristic"), HeuristicTextMeasurer)

def test_horizontal_label_is_centred_block(layout, ring_layout):
    node = arc(1, 90, span_deg=160, name="Agriculture, Forestry & Land Use", share=18.4,
               ring_layout=ring_layout)
    label = layout.layout_horizontal(node, 20, "#FFFFFF")

    assert label.line_texts[-1] == "(18.4%)"
    assert label.rotation == 0
    ys = [line.y for line in label.lines]
    cx, cy = 116, 0
    assert sum(ys) / len(ys) == pytest.approx(cy, abs=1e-9)
    assert all(line.x == pytest.approx(cx) for line in label.lines)

def test_radial_label_in_top_right_reads_outward(layout, ring_layout):
    label = layout.layout_ring_radial(arc(2, 45, ring_layout=ring_layout), 14, "#000")

    assert not label.flipped
    assert label.rotation == pytest.approx(-45)
    assert label.text_anchor == "start"
    assert label.anchor == pytest.approx((322 * math.sin(math.radians(45)), -322 * math.cos(math.radians(45))))

def test_radial_label_in_bottom_left_is_flipped(layout, ring_layout):
    label = layout.layout_ring_radial(arc(2, 225, ring_layout=ring_layout), 14, "#000")

    assert label.flipped
    assert label.base_rotation == pytest.approx(135)
    assert label.rotation == pytest.approx(315)
    assert label.text_anchor == "end"

def test_flipped_radial_lines_stack_in_reverse(layout, ring_layout):
    node = arc(3, 225, name="Chemical & petrochemical", ring_layout=ring_layout)
    upright = layout._build_radial(node, ["a", "b"], 400, 100, 12, "#000", "outward")
    assert upright.flipped
    # reading order runs against the stacking vector once flipped
    px, py = math.cos(node.mid_angle), math.sin(node.mid_angle)
    ax, ay = upright.anchor
    first, second = upright.lines
    assert (first.x - ax) * px + (first.y - ay) * py > 0
    assert (second.x - ax) * px + (second.y - ay) * py < 0

def test_center_radial_label_is_anchored_middle(layout, ring_layout):
    node = arc(1, 200, span_deg=8, name="Waste", share=3.2, ring_layout=ring_layout)
    label = layout.layout_center_radial(node, 14, "#FFF")

    assert isinstance(label, RadialLabel)
    assert label.text_anchor == "middle"
    assert label.line_texts == ["Waste", "(3.2%)"]
    assert label.available_width == pytest.approx(232 * 0.4)

@pytest.mark.parametrize("mid_deg, expected", [
    (0, 430 - 402),
    (90, 430 - 402),
    (45, 430 / math.sin(math.radians(45)) - 402),
])
def test_radial_width_reaches_canvas_margin(layout, mid_deg, expected):
    assert layout.radial_available_width(math.radians(mid_deg), 402) == pytest.approx(expected)

def test_radial_width_never_negative(layout):
    assert layout.radial_available_width(0.0, 1000) == 0

def test_curved_label_in_bottom_half_runs_backwards(layout, ring_layout):
    label = layout.layout_curved(arc(2, 180, span_deg=40, name="Transport", ring_layout=ring_layout),
                                 14, "#000")

    assert label.flipped
    assert label.guide.reversed
    assert label.start_offset == "100%"
    assert label.text_anchor == "end"
    assert label.text == "Transport (11.9%)"

def test_curved_label_in_top_half(layout, ring_layout):
    label = layout.layout_curved(arc(3, 30, span_deg=40, ring_layout=ring_layout), 12, "#000")

    assert not label.flipped
    assert label.start_offset == "0%"
    assert label.text_anchor == "start"
    assert label.guide.radius == pytest.approx(400 + 10)

def test_radial_overflow_detection(layout, ring_layout):
    node = arc(3, 100, name="Supercalifragilisticexpialidocious", ring_layout=ring_layout)
    label = layout.layout_ring_radial(node, 12, "#000")
    assert layout.radial_overflows(label)

    short = layout.layout_ring_radial(arc(3, 45, name="Rail", ring_layout=ring_layout), 12, "#000")
    assert not layout.radial_overflows(short)

def test_long_ring_label_wraps_onto_several_lines(layout, ring_layout, settings):
    node = arc(2, 0, name="Fugitive emissions from energy production", share=5.8,
               ring_layout=ring_layout)
    label = layout.layout_ring_radial(node, 14, "#000")
    measurer = HeuristicTextMeasurer(settings.char_width_factor)

    assert label.available_width == pytest.approx(430 - 322)
    assert measurer.width(f"{node.name} {node.percentage_text}", 14) > label.available_width
    assert len(label.lines) >= 2
    assert label.line_texts[-1].endswith("(5.8%)")
    assert all(measurer.width(text, 14) <= label.available_width for text in label.line_texts)

def test_long_centre_label_wraps_onto_several_lines(layout, ring_layout, settings):
    node = arc(1, 300, span_deg=60, name="Agriculture, Forestry & Land Use", share=18.4,
               ring_layout=ring_layout)
    label = layout.layout_horizontal(node, 12, "#FFFFFF")
    measurer = HeuristicTextMeasurer(settings.char_width_factor)
    available = node.span * 116 * settings.horizontal_width_factor

    assert measurer.width(node.name, 12) > available
    name_lines = label.line_texts[:-1]
    assert len(name_lines) >= 2
    assert all(measurer.width(text, 12) <= available for text in name_lines)
