"""Progressive (marginal) tax brackets.

A bracket table is an ordered, contiguous run of bands starting at zero.
The top band may be open (``upper_threshold=inf``); a finite top band acts
as a ceiling, with no tax charged on the amount above it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from pydantic import BaseModel, Field, model_validator

from housecalc.core.exceptions import ConfigurationError, InvalidParameterError


class TaxBracket(BaseModel):
    """One marginal-rate band ``(lower, upper]``."""

    lower_threshold: float = Field(..., ge=0, description="Start of the band")
    upper_threshold: float = Field(..., description="End of the band, may be inf")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as a decimal")

    model_config = {
        "frozen": True,
    }

    @model_validator(mode="after")
    def _check_bounds(self) -> TaxBracket:
        if not self.lower_threshold < self.upper_threshold:
            raise ValueError(
                f"lower_threshold ({self.lower_threshold}) must be below "
                f"upper_threshold ({self.upper_threshold})"
            )
        return self

    @property
    def bracket_tax(self) -> float:
        """Tax owed on the full width of the band."""
        if self.rate == 0:
            return 0.0
        return (self.upper_threshold - self.lower_threshold) * self.rate


def progressive_tax(amount: float, brackets: Sequence[TaxBracket]) -> float:
    """Tax due on ``amount`` under a sorted, contiguous bracket sequence.

    An amount exactly on a boundary belongs to the lower band.
    """
    if amount < 0:
        raise InvalidParameterError("amount", amount, "taxable amount cannot be negative")

    tax = 0.0
    for bracket in brackets:
        if amount <= bracket.upper_threshold:
            return tax + (amount - bracket.lower_threshold) * bracket.rate
        tax += bracket.bracket_tax
    return tax


@dataclass(frozen=True)
class ProgressiveTaxTable:
    """Validated, immutable bracket table."""

    brackets: tuple[TaxBracket, ...]

    def __post_init__(self) -> None:
        if not self.brackets:
            raise ConfigurationError("A tax table needs at least one bracket")
        if self.brackets[0].lower_threshold != 0:
            raise ConfigurationError(
                f"First bracket must start at 0, got {self.brackets[0].lower_threshold}"
            )
        for previous, current in zip(self.brackets, self.brackets[1:]):
            if math.isinf(previous.upper_threshold):
                raise ConfigurationError("Only the top bracket may be open-ended")
            if current.lower_threshold != previous.upper_threshold:
                raise ConfigurationError(
                    f"Brackets must be contiguous: {previous.upper_threshold} "
                    f"is followed by {current.lower_threshold}"
                )

    @classmethod
    def from_bands(cls, bands: Iterable[tuple[float, float]]) -> ProgressiveTaxTable:
        """Build a table from ``(upper_threshold, rate)`` pairs in ascending order."""
        brackets = []
        lower = 0.0
        for upper, rate in bands:
            brackets.append(TaxBracket(lower_threshold=lower, upper_threshold=upper, rate=rate))
            lower = upper
        return cls(tuple(brackets))

    @property
    def ceiling(self) -> float:
        return self.brackets[-1].upper_threshold

    def tax(self, amount: float) -> float:
        return progressive_tax(amount, self.brackets)
