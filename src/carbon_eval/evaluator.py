"""Evaluate the carbon footprint of a handful of energy sources.

Inputs are (energy source, consumption) pairs. Each consumption figure is
multiplied by the emission factor of its source (kgCO₂e per unit) and the
per-source values are summed into a total. Supported sources and units:
electricity (kWh), natural gas (therms) and fuel (liters).
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Sequence

import numpy as np
import pandas as pd

from .constants import (
    CATEGORY_COLUMN,
    EMISSION_FACTORS,
    EMISSIONS_COLUMN,
    UNITS,
    normalize_category,
)
from .errors import InvalidCategoryType, InvalidQuantity, MalformedInputError, UnknownCategory
from .plotting import plot_emissions
from .writers import export_to_table

LOGGER = logging.getLogger("carbon_eval")
if not LOGGER.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False


@dataclass(frozen=True)
class EvaluationEntry:
    """Emissions of a single energy source."""

    category: str
    quantity: float
    factor: float
    emissions: float


@dataclass(frozen=True)
class EvaluationResult:
    """Per-source breakdown in input order; the total is always derived."""

    entries: tuple[EvaluationEntry, ...] = ()

    @property
    def total_emissions(self) -> float:
        return float(sum(entry.emissions for entry in self.entries))

    @property
    def categories(self) -> list[str]:
        return [entry.category for entry in self.entries]

    @property
    def emissions(self) -> list[float]:
        return [entry.emissions for entry in self.entries]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                CATEGORY_COLUMN: pd.Series(self.categories, dtype=object),
                EMISSIONS_COLUMN: pd.Series(self.emissions, dtype=float),
            }
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[EvaluationEntry]:
        return iter(self.entries)


def coerce_pairs(inputs: Any) -> list[tuple[Any, Any]]:
    """Turn flattened, paired or mapping inputs into a list of 2-tuples.

    ``["Electricity", 500, "Fuel", 50]``, ``[("Electricity", 500), ("Fuel", 50)]``
    and ``{"Electricity": 500, "Fuel": 50}`` are equivalent. The pair form is
    chosen when the first item is a list or tuple.
    """
    if isinstance(inputs, Mapping):
        return list(inputs.items())
    if isinstance(inputs, (str, bytes)) or not isinstance(inputs, Iterable):
        raise MalformedInputError(
            "Inputs must be a sequence of EnergySource and Consumption pairs, "
            f"got {type(inputs).__name__}."
        )

    items = list(inputs)
    if items and isinstance(items[0], (tuple, list)):
        pairs = []
        for index, item in enumerate(items):
            if not isinstance(item, (tuple, list)):
                raise MalformedInputError(
                    "Inputs cannot mix (source, consumption) pairs and flat values."
                )
            if len(item) != 2:
                raise MalformedInputError(
                    f"Pair at position {index} must contain exactly an EnergySource and "
                    f"a Consumption value, got {len(item)} item(s)."
                )
            pairs.append((item[0], item[1]))
        return pairs
    if len(items) % 2 != 0:
        raise MalformedInputError(
            "Inputs must be provided as pairs of EnergySource and Consumption."
        )
    return [(items[i], items[i + 1]) for i in range(0, len(items), 2)]


def build_lookup(factors: Mapping[str, float]) -> dict[str, tuple[str, float]]:
    """Validate a factor table and key it by normalised source name."""
    lookup: dict[str, tuple[str, float]] = {}
    for name, value in factors.items():
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Emission factor names must be non-empty strings, got {name!r}.")
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValueError(f"Emission factor for '{name}' must be a non-negative number.")
        factor = float(value)
        if not np.isfinite(factor) or factor < 0:
            raise ValueError(f"Emission factor for '{name}' must be a non-negative number.")
        key = normalize_category(name)
        if key in lookup:
            raise ValueError(
                f"Emission factors '{lookup[key][0]}' and '{name}' resolve to the same source."
            )
        lookup[key] = (name, factor)
    return lookup


_DEFAULT_LOOKUP = build_lookup(EMISSION_FACTORS)


def _lookup_for(factors: Mapping[str, float]) -> dict[str, tuple[str, float]]:
    if factors is EMISSION_FACTORS:
        return _DEFAULT_LOOKUP
    return build_lookup(factors)


def _resolve(
    category: Any, lookup: Mapping[str, tuple[str, float]], position: int
) -> tuple[str, float]:
    if not isinstance(category, str) or not category.strip():
        raise InvalidCategoryType(category, position)
    match = lookup.get(normalize_category(category))
    if match is None:
        raise UnknownCategory(category, [name for name, _ in lookup.values()])
    return match


def resolve_factor(
    category: Any,
    factors: Mapping[str, float] = EMISSION_FACTORS,
    *,
    position: int = 0,
) -> tuple[str, float]:
    """Return ``(canonical_name, factor)`` for a case-insensitive source name."""
    return _resolve(category, _lookup_for(factors), position)


def validate_quantity(value: Any, category: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidQuantity(category, value)
    quantity = float(value)
    if not np.isfinite(quantity) or quantity < 0:
        raise InvalidQuantity(category, value)
    return quantity


def _evaluate_with(inputs: Any, lookup: Mapping[str, tuple[str, float]]) -> EvaluationResult:
    pairs = coerce_pairs(inputs)

    entries: list[EvaluationEntry] = []
    for position, (category, consumption) in enumerate(pairs):
        canonical, factor = _resolve(category, lookup, position)
        quantity = validate_quantity(consumption, category)

        emissions = quantity * factor
        entries.append(EvaluationEntry(category, quantity, factor, emissions))
        LOGGER.info(
            "Carbon footprint for %s (%.2f %s): %.2f kgCO2e",
            category,
            quantity,
            UNITS.get(canonical, "units"),
            emissions,
        )

    result = EvaluationResult(tuple(entries))
    LOGGER.info("-" * 60)
    LOGGER.info("Total carbon footprint: %.2f kgCO2e", result.total_emissions)
    return result


def evaluate(
    inputs: Any,
    factors: Mapping[str, float] = EMISSION_FACTORS,
) -> EvaluationResult:
    """Calculate the carbon footprint for multiple energy sources.

    Any invalid pair aborts the whole evaluation; no partial result is returned.
    A custom ``factors`` table is validated with ``build_lookup`` first.
    """
    return _evaluate_with(inputs, _lookup_for(factors))


class FootprintEvaluator:
    """Object front-end holding a read-only emission factor table."""

    def __init__(self, factors: Mapping[str, float] = EMISSION_FACTORS) -> None:
        self._lookup = build_lookup(factors)
        self.factors: Mapping[str, float] = MappingProxyType(
            {name: factor for name, factor in self._lookup.values()}
        )

    @property
    def valid_sources(self) -> list[str]:
        return list(self.factors)

    def evaluate(self, inputs: Any) -> EvaluationResult:
        return _evaluate_with(inputs, self._lookup)

    def export_to_table(
        self,
        result: EvaluationResult,
        destination: Path | str | None = None,
        **kwargs: Any,
    ) -> Path | None:
        return export_to_table(result, destination, **kwargs)

    def plot(self, categories: Sequence[str], emissions: Sequence[float], **kwargs: Any):
        return plot_emissions(categories, emissions, **kwargs)
