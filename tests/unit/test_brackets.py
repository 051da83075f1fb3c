"""Unit tests for housecalc.domain.calculator.brackets module."""

import pytest
from pydantic import ValidationError

from housecalc.core.exceptions import ConfigurationError, InvalidParameterError
from housecalc.domain.calculator.brackets import (
    ProgressiveTaxTable,
    TaxBracket,
    progressive_tax,
)


@pytest.fixture
def table():
    """0% to 10k, 10% to 50k, 20% to 100k, capped there."""
    return ProgressiveTaxTable.from_bands([
        (10_000, 0.0),
        (50_000, 0.10),
        (100_000, 0.20),
    ])


class TestTaxBracket:
    """Tests for TaxBracket model."""

    def test_bracket_tax(self):
        """Full-band tax is width times rate."""
        b = TaxBracket(lower_threshold=10_000, upper_threshold=50_000, rate=0.1)
        assert b.bracket_tax == pytest.approx(4_000)

    def test_open_zero_rate_band(self):
        """An open band at 0% owes nothing."""
        b = TaxBracket(lower_threshold=0, upper_threshold=float("inf"), rate=0.0)
        assert b.bracket_tax == 0.0

    def test_lower_must_be_below_upper(self):
        with pytest.raises(ValidationError):
            TaxBracket(lower_threshold=50_000, upper_threshold=10_000, rate=0.1)

    def test_rate_bounds(self):
        with pytest.raises(ValidationError):
            TaxBracket(lower_threshold=0, upper_threshold=1, rate=1.5)

    def test_frozen(self):
        b = TaxBracket(lower_threshold=0, upper_threshold=1, rate=0.5)
        with pytest.raises(ValidationError):
            b.rate = 0.2


class TestProgressiveTax:
    """Tests for progressive_tax function."""

    def test_inside_first_band(self, table):
        assert table.tax(5_000) == 0.0

    def test_marginal_portion(self, table):
        """Only the part inside the band is taxed at its rate."""
        assert table.tax(30_000) == pytest.approx(2_000)
        assert table.tax(60_000) == pytest.approx(4_000 + 2_000)

    @pytest.mark.parametrize("boundary,expected", [
        (10_000, 0.0),
        (50_000, 4_000.0),
        (100_000, 14_000.0),
    ])
    def test_boundary_equals_enclosed_bands(self, table, boundary, expected):
        """On a boundary the tax is the sum of the enclosed bands."""
        assert table.tax(boundary) == pytest.approx(expected)
        enclosed = sum(b.bracket_tax for b in table.brackets if b.upper_threshold <= boundary)
        assert table.tax(boundary) == pytest.approx(enclosed)

    def test_ceiling_above_top_band(self, table):
        """Above a finite top band the tax stays flat."""
        assert table.tax(250_000) == pytest.approx(14_000)

    def test_monotonic(self, table):
        """Tax never decreases as the amount grows."""
        amounts = range(0, 200_001, 2_500)
        taxes = [table.tax(a) for a in amounts]
        assert all(b >= a for a, b in zip(taxes, taxes[1:]))

    def test_negative_amount_rejected(self, table):
        with pytest.raises(InvalidParameterError):
            progressive_tax(-1, table.brackets)

    def test_open_top_band(self):
        """An open top band taxes everything above its lower bound."""
        t = ProgressiveTaxTable.from_bands([(100, 0.0), (float("inf"), 0.5)])
        assert t.tax(300) == pytest.approx(100)


class TestProgressiveTaxTableValidation:
    """Construction-time checks on bracket tables."""

    def test_empty_rejected(self):
        with pytest.raises(ConfigurationError):
            ProgressiveTaxTable(())

    def test_must_start_at_zero(self):
        with pytest.raises(ConfigurationError):
            ProgressiveTaxTable((TaxBracket(lower_threshold=5, upper_threshold=10, rate=0.1),))

    def test_gap_rejected(self):
        with pytest.raises(ConfigurationError):
            ProgressiveTaxTable((
                TaxBracket(lower_threshold=0, upper_threshold=10, rate=0.0),
                TaxBracket(lower_threshold=20, upper_threshold=30, rate=0.1),
            ))

    def test_overlap_rejected(self):
        with pytest.raises(ConfigurationError):
            ProgressiveTaxTable((
                TaxBracket(lower_threshold=0, upper_threshold=20, rate=0.0),
                TaxBracket(lower_threshold=10, upper_threshold=30, rate=0.1),
            ))

    def test_open_band_must_be_last(self):
        with pytest.raises(ConfigurationError):
            ProgressiveTaxTable((
                TaxBracket(lower_threshold=0, upper_threshold=float("inf"), rate=0.0),
                TaxBracket(lower_threshold=100, upper_threshold=200, rate=0.1),
            ))
