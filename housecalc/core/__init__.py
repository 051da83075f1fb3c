"""Core financial math, errors, logging and settings."""

from .exceptions import (
    ConfigurationError,
    HouseCalcError,
    InvalidParameterError,
    SearchBudgetExceededError,
    SimulationError,
    UnknownJurisdictionError,
)
from .financial import (
    RATE_EPSILON,
    compound_interest,
    payment,
    total_mortgage_interest,
)

__all__ = [
    "compound_interest",
    "payment",
    "total_mortgage_interest",
    "RATE_EPSILON",
    # Exceptions
    "HouseCalcError",
    "InvalidParameterError",
    "UnknownJurisdictionError",
    "ConfigurationError",
    "SimulationError",
    "SearchBudgetExceededError",
]
