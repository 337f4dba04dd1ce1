import pytest

from ghg_sunburst.core.application.label_strategy import LabelStrategyService
from ghg_sunburst.core.domain.models import LabelStrategy

@pytest.fixture
def selector(settings):
    return LabelStrategyService(settings)

def text_of(length):
    return "x" * length

@pytest.mark.parametrize("arc_length, expected", [
    (1000, LabelStrategy.HORIZONTAL),
    (80, LabelStrategy.HORIZONTAL),
    (79.9, LabelStrategy.RADIAL),
    (20, LabelStrategy.RADIAL),
    (19.9, LabelStrategy.NONE),
    (0, LabelStrategy.NONE),
])
def test_center_ring_thresholds(selector, arc_length, expected):
    assert selector.select(1, arc_length, "Energy (73.2%)") is expected

@pytest.mark.parametrize("arc_length, text_length, expected", [
    (250, 35, LabelStrategy.CURVED),
    (250, 36, LabelStrategy.RADIAL),
    (150, 25, LabelStrategy.CURVED),
    (150, 26, LabelStrategy.RADIAL),
    (149.9, 10, LabelStrategy.RADIAL),
    (20.5, 10, LabelStrategy.RADIAL),
    (20, 10, LabelStrategy.NONE),
    (0, 5, LabelStrategy.NONE),
])
def test_middle_ring_rules(selector, arc_length, text_length, expected):
    assert selector.select(2, arc_length, text_of(text_length)) is expected

@pytest.mark.parametrize("arc_length, text_length, expected", [
    (200, 20, LabelStrategy.CURVED),
    (199.9, 20, LabelStrategy.RADIAL),
    (400, 21, LabelStrategy.RADIAL),
    (15, 3, LabelStrategy.NONE),
])
def test_outer_ring_rules(selector, arc_length, text_length, expected):
    assert selector.select(3, arc_length, text_of(text_length)) is expected

@pytest.mark.parametrize("depth", [2, 3])
def test_curved_choice_is_monotonic_in_arc_length(selector, depth):
    lengths = [float(n) for n in range(0, 600, 5)]
    for text_length in range(1, 50):
        curved = [selector.use_curved(depth, length, text_length) for length in lengths]
        first = curved.index(True) if True in curved else len(curved)
        assert all(curved[first:]), text_length

def test_zero_share_wedge_gets_no_label(selector):
    for depth in (1, 2, 3):
        assert selector.select(depth, 0.0, "Grassland (0%)") is LabelStrategy.NONE

def test_radial_override_beats_curved_rule(settings):
    selector = LabelStrategyService(settings, {"transport": "radial"})
    assert selector.select(2, 300, "Transport (16.2%)", "transport") is LabelStrategy.RADIAL

def test_curved_override_applies_to_short_arcs(settings):
    selector = LabelStrategyService(settings, {"rail": "curved"})
    assert selector.select(3, 10, "Rail (0.4%)", "rail") is LabelStrategy.CURVED
    assert selector.select(3, 0, "Rail (0%)", "rail") is LabelStrategy.NONE

def test_unknown_override_is_ignored(settings):
    selector = LabelStrategyService(settings, {"rail": "diagonal"})
    assert selector.select(3, 300, "Rail (0.4%)", "rail") is LabelStrategy.CURVED

def test_overrides_do_not_touch_the_center(settings):
    selector = LabelStrategyService(settings, {"energy": "curved"})
    assert selector.select(1, 500, "Energy (73.2%)", "energy") is LabelStrategy.HORIZONTAL

def test_outer_radial_overflow_falls_back_to_curved(selector):
    assert selector.apply_overflow_fallback(3, LabelStrategy.RADIAL, True) is LabelStrategy.CURVED
    assert selector.apply_overflow_fallback(3, LabelStrategy.RADIAL, False) is LabelStrategy.RADIAL
    assert selector.apply_overflow_fallback(2, LabelStrategy.RADIAL, True) is LabelStrategy.RADIAL

def test_overflow_fallback_respects_override_and_setting(settings):
    selector = LabelStrategyService(settings, {"rail": "radial"})
    assert selector.apply_overflow_fallback(3, LabelStrategy.RADIAL, True, "rail") is LabelStrategy.RADIAL

    settings.curved_fallback_on_overflow = False
    selector = LabelStrategyService(settings)
    assert selector.apply_overflow_fallback(3, LabelStrategy.RADIAL, True) is LabelStrategy.RADIAL
