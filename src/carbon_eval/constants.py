from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

# kgCO2e per unit of consumption
EMISSION_FACTORS: Mapping[str, float] = MappingProxyType(
    {
        "electricity": 0.4,
        "natural-gas": 5.3,
        "fuel": 2.3,
    }
)

UNITS: Mapping[str, str] = MappingProxyType(
    {
        "electricity": "kWh",
        "natural-gas": "therm",
        "fuel": "liter",
    }
)

DEFAULT_EXPORT_FILENAME = "CarbonFootprintResults.csv"

CATEGORY_COLUMN = "EnergySource"
EMISSIONS_COLUMN = "Emissions_kgCO2e"

_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_category(name: str) -> str:
    """Return the lookup key for ``name`` (case-folded, separators removed)."""
    return _SEPARATORS.sub("", name).casefold()
