import math

import pytest

from ghg_sunburst.core.application.arc_geometry import point_to_polar, polar_to_point

def test_polar_to_point_is_clockwise_from_twelve():
    assert polar_to_point(100, 0) == pytest.approx((0, -100))
    assert polar_to_point(100, math.pi / 2) == pytest.approx((100, 0))
    assert polar_to_point(100, math.pi) == pytest.approx((0, 100))

@pytest.mark.parametrize("angle", [0.0, 0.5, math.pi, 4.0, 6.0])
def test_point_to_polar_inverts_polar_to_point(angle):
    radius, back = point_to_polar(*polar_to_point(150, angle))
    assert radius == pytest.approx(150)
    assert back == pytest.approx(angle)

def test_point_to_polar_normalises_left_half():
    _, angle = point_to_polar(-100, 0)
    assert angle == pytest.approx(3 * math.pi / 2)

def test_ring_helpers(ring_layout):
    assert ring_layout.ring_bounds(1) == pytest.approx((0, 232))
    assert ring_layout.label_radius(2) == pytest.approx(312)
    assert ring_layout.arc_length(3, 0.0, 0.5) == pytest.approx(196)
    assert ring_layout.curved_label_radius(2) == pytest.approx(317)
    assert ring_layout.curved_label_radius(3) == pytest.approx(400)

def test_depth_at_radius(ring_layout):
    assert ring_layout.depth_at_radius(100) == 1
    assert ring_layout.depth_at_radius(280) == 2
    assert ring_layout.depth_at_radius(380) == 3
    assert ring_layout.depth_at_radius(250) is None

def test_wedge_is_padded_inside_its_span(ring_layout):
    wedge = ring_layout.build_wedge(0.0, math.pi / 2, 272, 312)

    assert wedge.path_data.startswith("M")
    assert wedge.path_data.endswith("Z")
    assert wedge.path_data.count("A") == 2

    angles = [point_to_polar(x, y)[1] for x, y in wedge.rings[0]]
    assert min(angles) > 0.0
    assert max(angles) < math.pi / 2

def test_padding_is_wider_in_angle_near_the_centre(ring_layout):
    outer = ring_layout._inset(0.0, 1.0, 392)
    inner = ring_layout._inset(0.0, 1.0, 272)
    assert inner[0] > outer[0]

def test_center_wedge_meets_at_origin(ring_layout):
    wedge = ring_layout.build_wedge(0.0, 1.0, 0, 232)
    assert "L0,0" in wedge.path_data
    assert wedge.rings[0][-1] == (0.0, 0.0)

def test_thin_wedge_collapses_to_its_mid_angle(ring_layout):
    wedge = ring_layout.build_wedge(1.0, 1.0001, 272, 312)
    angles = {round(point_to_polar(x, y)[1], 9) for x, y in wedge.rings[0]}
    assert angles == {round(1.00005, 9)}

def test_empty_wedge_has_no_outline(ring_layout):
    wedge = ring_layout.build_wedge(1.0, 1.0, 272, 312)
    assert wedge.is_empty
    assert wedge.path_data == ""

def test_full_circle_ring_is_two_half_arcs_per_edge(ring_layout):
    wedge = ring_layout.build_wedge(0.0, 2 * math.pi, 272, 312)

    assert wedge.path_data.count("A") == 4
    assert wedge.path_data.count("Z") == 2
    assert len(wedge.rings) == 2

def test_guide_arc_runs_backwards_when_reversed(ring_layout):
    guide = ring_layout.build_guide_arc(100, 1.0, 2.0, reversed=True)

    assert guide.from_angle == 2.0
    assert guide.angle_at(10) == pytest.approx(1.9)
    assert guide.length == pytest.approx(100)
    assert " 0 0 0 " in guide.path_data

def test_guide_arc_forward_sweep(ring_layout):
    guide = ring_layout.build_guide_arc(100, 1.0, 2.0)
    assert guide.angle_at(10) == pytest.approx(1.1)
    assert " 0 0 1 " in guide.path_data

def test_full_circle_guide_is_shortened(ring_layout):
    guide = ring_layout.build_guide_arc(100, 0.0, 2 * math.pi)
    assert guide.end_angle < 2 * math.pi
