"""Unit tests for housecalc.domain.calculator.taxes module."""

import pytest

from housecalc.core.exceptions import InvalidParameterError, UnknownJurisdictionError
from housecalc.domain.calculator.taxes import (
    PORTUGAL_IMT_TABLE,
    SPAIN_REGIONAL_RATES,
    portugal_imt,
    portugal_tax,
    purchase_tax,
    resolve_purchase_tax,
    spain_tax,
    tax_configuration_from_selector,
    tax_for_configuration,
    uk_stamp_duty_table,
    uk_tax,
)
from housecalc.domain.models import (
    CustomTax,
    PortugalTax,
    SpainRegion,
    SpainTax,
    UKNation,
    UKTax,
)


class TestSpainTax:
    """Tests for the Spanish regional calculator."""

    def test_madrid_resale_with_mortgage(self):
        """Notary 1200 + registry 600 + ITP 18000 + mortgage fees 450."""
        assert purchase_tax("madrid", 300_000, 240_000) == pytest.approx(20_250.0, abs=1e-9)

    def test_madrid_resale_cash(self):
        """No mortgage fees without a mortgage."""
        assert spain_tax(300_000, 0, SpainRegion.MADRID) == pytest.approx(19_800.0)

    def test_madrid_new_build(self):
        """New builds pay VAT + AJD instead of ITP."""
        assert spain_tax(300_000, 1, "madrid", new_build=True) == pytest.approx(34_050.0)

    def test_canarias_uses_igic(self):
        """Canarias charges 6.5% instead of 10% VAT."""
        assert SPAIN_REGIONAL_RATES[SpainRegion.CANARIAS].vat == 0.065
        assert spain_tax(300_000, 0, SpainRegion.CANARIAS, new_build=True) == pytest.approx(23_550.0)

    def test_every_region_has_rates(self):
        """All 19 regions are in the table."""
        assert len(SPAIN_REGIONAL_RATES) == 19
        assert set(SPAIN_REGIONAL_RATES) == set(SpainRegion)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SPAIN_REGIONAL_RATES[SpainRegion.MADRID] = None

    def test_unknown_region(self):
        with pytest.raises(UnknownJurisdictionError):
            spain_tax(300_000, 0, "atlantis")


class TestPortugalTax:
    """Tests for the Portuguese calculator."""

    def test_imt_zero_band(self):
        assert portugal_imt(100_000) == 0.0

    def test_imt_progressive(self):
        """37495*2% + 50674*5% + 9914*7%."""
        assert portugal_imt(200_000) == pytest.approx(749.9 + 2_533.7 + 693.98)

    def test_imt_flat_six_percent(self):
        assert portugal_imt(800_000) == pytest.approx(48_000)

    def test_imt_flat_top_rate(self):
        assert portugal_imt(1_200_000) == pytest.approx(90_000)

    def test_imt_progressive_up_to_table_ceiling(self):
        """The table ceiling itself is still taxed progressively."""
        assert portugal_imt(PORTUGAL_IMT_TABLE.ceiling) == pytest.approx(PORTUGAL_IMT_TABLE.tax(633_453))

    def test_mortgage_stamp_duty(self):
        """0.6% of the principal is added when a mortgage is used."""
        with_mortgage = portugal_tax(200_000, 150_000)
        without = portugal_tax(200_000, 0)
        assert with_mortgage - without == pytest.approx(900)
        assert without == pytest.approx(1_600 + portugal_imt(200_000))


class TestUKTax:
    """Tests for the UK calculator."""

    def test_england_first_time_buyer(self):
        """0% to 425k, 5% on the remainder."""
        assert uk_stamp_duty_table("england", 600_000, True).tax(600_000) == pytest.approx(8_750.0, abs=1e-9)
        assert uk_tax(600_000, 0, UKNation.ENGLAND, first_home=True) == pytest.approx(8_750.0)

    def test_england_first_time_buyer_with_mortgage(self):
        """Arrangement fees are added on top."""
        assert uk_tax(600_000, 480_000, UKNation.ENGLAND, first_home=True) == pytest.approx(13_050.0)

    def test_england_relief_ceiling(self):
        """Above 625k first-time buyers pay the standard rates."""
        assert uk_tax(700_000, 0, "england", first_home=True) == pytest.approx(22_500.0)

    def test_england_relief_stops_at_ceiling(self):
        """A price of exactly 625k no longer qualifies."""
        assert uk_tax(625_000, 0, "england", first_home=True) == pytest.approx(18_750.0)
        assert uk_tax(624_000, 0, "england", first_home=True) == pytest.approx(9_950.0)

    def test_england_standard(self):
        assert uk_tax(1_000_000, 0, "england") == pytest.approx(41_250.0)

    def test_northern_ireland_matches_england(self):
        for price in (200_000, 600_000, 2_000_000):
            assert uk_tax(price, 0, "northern_ireland") == uk_tax(price, 0, "england")

    def test_scotland_first_time_buyer(self):
        assert uk_tax(300_000, 0, UKNation.SCOTLAND, first_home=True) == pytest.approx(4_000.0)
        assert uk_tax(300_000, 0, UKNation.SCOTLAND) == pytest.approx(4_600.0)

    def test_scotland_relief_has_no_ceiling(self):
        """Scottish relief applies at any price."""
        assert uk_tax(800_000, 0, UKNation.SCOTLAND, first_home=True) == pytest.approx(53_750.0)
        assert uk_tax(800_000, 0, UKNation.SCOTLAND) == pytest.approx(54_350.0)

    def test_wales_has_no_first_time_relief(self):
        assert uk_tax(300_000, 0, UKNation.WALES, first_home=True) == pytest.approx(4_500.0)
        assert uk_tax(300_000, 0, UKNation.WALES) == pytest.approx(4_500.0)

    def test_unknown_nation(self):
        with pytest.raises(UnknownJurisdictionError):
            uk_tax(300_000, 0, "mercia")


class TestDispatch:
    """Tests for configuration dispatch and selectors."""

    def test_custom_amount_ignores_price(self):
        config = CustomTax(amount=12_345)
        assert tax_for_configuration(config, 100_000, 0) == 12_345
        assert tax_for_configuration(config, 900_000, 800_000) == 12_345

    @pytest.mark.parametrize("selector,expected", [
        ("madrid", SpainTax(region=SpainRegion.MADRID)),
        ("  Cataluna ", SpainTax(region=SpainRegion.CATALUNA)),
        ("portugal", PortugalTax()),
        ("scotland", UKTax(nation=UKNation.SCOTLAND)),
    ])
    def test_selector(self, selector, expected):
        assert tax_configuration_from_selector(selector) == expected

    def test_selector_modifiers(self):
        config = tax_configuration_from_selector("england", first_home=True)
        assert config == UKTax(nation=UKNation.ENGLAND, first_home=True)
        config = tax_configuration_from_selector("valencia", new_build=True)
        assert config == SpainTax(region=SpainRegion.VALENCIA, new_build=True)

    def test_selector_custom(self):
        assert tax_configuration_from_selector("custom", custom_amount=5_000) == CustomTax(amount=5_000)

    def test_selector_custom_needs_amount(self):
        with pytest.raises(InvalidParameterError):
            tax_configuration_from_selector("custom")

    def test_unknown_selector(self):
        """Unknown keys never fall back to a zero tax."""
        with pytest.raises(UnknownJurisdictionError):
            purchase_tax("atlantis", 300_000, 0)

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidParameterError):
            tax_for_configuration(PortugalTax(), -1, 0)


class TestResolvePurchaseTax:
    """Tests for the two-pass tax/principal approximation."""

    def test_two_pass_portugal(self):
        """Second pass prices the tax for the principal left after pass one."""
        price, savings = 200_000, 50_000
        worst_case = portugal_tax(price, price)
        principal = price - (savings - worst_case)
        assert resolve_purchase_tax(PortugalTax(), price, savings) == pytest.approx(
            portugal_tax(price, principal)
        )

    def test_two_pass_lowers_tax_below_worst_case(self):
        price = 200_000
        assert resolve_purchase_tax(PortugalTax(), price, 50_000) < portugal_tax(price, price)

    def test_cash_purchase_has_no_mortgage_fees(self):
        """Savings covering everything mean no principal on the second pass."""
        config = SpainTax(region=SpainRegion.MADRID)
        assert resolve_purchase_tax(config, 300_000, 1_000_000) == pytest.approx(19_800.0)

    def test_custom_is_constant(self):
        assert resolve_purchase_tax(CustomTax(amount=7_000), 300_000, 0) == 7_000
