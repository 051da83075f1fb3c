"""Custom exceptions for housecalc.

Domain-specific exception types for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any


class HouseCalcError(Exception):
    """Base exception for all housecalc errors."""
    pass


# --- Input Errors ---

class InvalidParameterError(HouseCalcError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class UnknownJurisdictionError(InvalidParameterError):
    """Tax jurisdiction key is not in any lookup table."""

    def __init__(self, key: Any):
        super().__init__("jurisdiction", key, "unknown jurisdiction key")


# --- Configuration Errors ---

class ConfigurationError(HouseCalcError):
    """Search or tax table configured in a way that cannot be evaluated."""
    pass


# --- Calculation Errors ---

class SimulationError(HouseCalcError):
    """Error during the scenario search."""
    pass


class SearchBudgetExceededError(SimulationError):
    """Scenario search ran past the configured month budget."""

    def __init__(self, budget: int):
        self.budget = budget
        super().__init__(f"Scenario search exceeded the budget of {budget} months")
