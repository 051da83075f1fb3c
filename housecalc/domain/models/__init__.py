"""Data models for housecalc."""

from .jurisdiction import (
    CustomTax,
    PortugalTax,
    SpainRegion,
    SpainTax,
    TaxConfiguration,
    UKNation,
    UKTax,
)
from .parameters import SimulationParameters
from .point import NOT_APPLICABLE, MonthlySimulationPoint
from .result import CostPoint, ScenarioSearchResult, SearchOutcome

__all__ = [
    "CustomTax",
    "PortugalTax",
    "SpainRegion",
    "SpainTax",
    "TaxConfiguration",
    "UKNation",
    "UKTax",
    "SimulationParameters",
    "NOT_APPLICABLE",
    "MonthlySimulationPoint",
    "CostPoint",
    "ScenarioSearchResult",
    "SearchOutcome",
]
