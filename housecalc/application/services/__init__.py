"""Application services: point construction and the scenario search."""

from .scenario_search import ScenarioSearch, run_scenario_search
from .simulation import build_simulation_point

__all__ = [
    "ScenarioSearch",
    "run_scenario_search",
    "build_simulation_point",
]
