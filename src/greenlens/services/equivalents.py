"""Relatable equivalents for an emissions total."""

import math

from greenlens.domain.history import FootprintEquivalents
from greenlens.services.stats import round_half_away

# Average yearly CO2 uptake of one tree, in kg.
TREE_KG_PER_YEAR = 21.77
# Average passenger car emissions per mile, in kg.
CAR_KG_PER_MILE = 0.411


def footprint_equivalents(total_kg: float) -> FootprintEquivalents:
    """Express a CO2e total as tonnes, trees needed and car miles."""
    total = max(total_kg, 0.0)
    return FootprintEquivalents(
        tonnes=round_half_away(total / 1000, places=3),
        trees_per_year=math.ceil(total / TREE_KG_PER_YEAR),
        car_miles=int(round_half_away(total / CAR_KG_PER_MILE, places=0)),
    )
