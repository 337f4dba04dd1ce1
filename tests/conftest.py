import math

import matplotlib

matplotlib.use("Agg")

import pytest

from ghg_sunburst.core.application.arc_geometry import RingLayout
from ghg_sunburst.core.application.hierarchy_service import HierarchyService
from ghg_sunburst.core.domain.models import ProportionNode, ShareBasis
from ghg_sunburst.core.settings import ChartSettings

def node(node_id, share, *children, name=None):
    return ProportionNode(
        id=node_id,
        name=name or node_id.replace("-", " ").title(),
        share=share,
        children=tuple(children),
    )

def span_fraction(arc):
    return arc.span / (2 * math.pi)

@pytest.fixture
def settings():
    return ChartSettings()

@pytest.fixture
def absolute_settings():
    return ChartSettings(share_basis=ShareBasis.ABSOLUTE)

@pytest.fixture
def ring_layout(settings):
    return RingLayout(settings.radius, settings)

@pytest.fixture
def ghg_hierarchy():
    return HierarchyService().load_sample()

@pytest.fixture
def ghg_scene(ghg_hierarchy, absolute_settings):
    from ghg_sunburst.core.application.chart_service import ChartService

    return ChartService(absolute_settings).calculate_sunburst_data(ghg_hierarchy.nodes)
