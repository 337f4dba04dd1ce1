"""
Global greenhouse gas emissions by sector, in percent of the world total.

Every share is a percentage of the whole circle, so the document uses the
absolute share basis: subsector shares add up to their sector's share.
"""

from typing import List, Tuple

from ghg_sunburst.core.domain.models import ShareBasis

Row = Tuple[str, str, str, float]

SHARE_BASIS = ShareBasis.ABSOLUTE

GHG_EMISSIONS_ROWS: List[Row] = [
    ("Energy", "", "", 73.2),
    ("Energy", "Energy use in Industry", "", 24.2),
    ("Energy", "Energy use in Industry", "Iron and steel", 7.2),
    ("Energy", "Energy use in Industry", "Non-ferrous metals", 0.7),
    ("Energy", "Energy use in Industry", "Chemical & petrochemical", 3.6),
    ("Energy", "Energy use in Industry", "Food & tobacco", 1.0),
    ("Energy", "Energy use in Industry", "Paper & pulp", 0.6),
    ("Energy", "Energy use in Industry", "Machinery", 0.5),
    ("Energy", "Energy use in Industry", "Other industry", 10.6),
    ("Energy", "Transport", "", 16.2),
    ("Energy", "Transport", "Road Transport", 11.9),
    ("Energy", "Transport", "Aviation", 1.4),
    ("Energy", "Transport", "Shipping", 2.7),
    ("Energy", "Transport", "Rail", 0.4),
    ("Energy", "Transport", "Pipeline", 0.3),
    ("Energy", "Energy use in buildings", "", 17.5),
    ("Energy", "Energy use in buildings", "Residential buildings", 10.9),
    ("Energy", "Energy use in buildings", "Commercial", 6.6),
    ("Energy", "Unallocated fuel combustion", "", 7.8),
    ("Energy", "Fugitive emissions from energy production", "", 5.8),
    ("Energy", "Energy in Agriculture & Fishing", "", 1.7),
    ("Agriculture, Forestry & Land Use", "", "", 18.4),
    ("Agriculture, Forestry & Land Use", "Livestock & manure", "", 5.8),
    ("Agriculture, Forestry & Land Use", "Agricultural soils", "", 4.1),
    ("Agriculture, Forestry & Land Use", "Rice cultivation", "", 1.3),
    ("Agriculture, Forestry & Land Use", "Crop burning", "", 3.5),
    ("Agriculture, Forestry & Land Use", "Deforestation", "", 2.2),
    ("Agriculture, Forestry & Land Use", "Cropland", "", 1.4),
    ("Agriculture, Forestry & Land Use", "Grassland", "", 0.1),
    ("Industry", "", "", 5.2),
    ("Industry", "Cement", "", 3.0),
    ("Industry", "Chemicals", "", 2.2),
    ("Waste", "", "", 3.2),
    ("Waste", "Landfills", "", 1.9),
    ("Waste", "Wastewater", "", 1.3),
]
