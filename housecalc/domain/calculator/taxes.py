"""Purchase tax and fee estimates per jurisdiction.

Approximations of the taxes and fees paid when buying a home in Spain
(per autonomous community), Portugal and the UK (per nation). The figures
are estimates for planning, not tax advice.

Tax owed can depend on the mortgage size, while the mortgage size depends
on the deposit left after tax. ``resolve_purchase_tax`` breaks the cycle
with two passes; it is not iterated to convergence.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from housecalc.core.exceptions import InvalidParameterError, UnknownJurisdictionError
from housecalc.domain.calculator.brackets import ProgressiveTaxTable
from housecalc.domain.models.jurisdiction import (
    CustomTax,
    PortugalTax,
    SpainRegion,
    SpainTax,
    TaxConfiguration,
    UKNation,
    UKTax,
)

INF = float("inf")

# --- Spain ---

SPAIN_NOTARY_RATE = 0.004
SPAIN_LAND_REGISTRY_FEE = 600.0
SPAIN_MORTGAGE_FEES = 450.0
SPAIN_DEFAULT_VAT = 0.10


@dataclass(frozen=True)
class SpainRegionRates:
    """Regional rates: stamp duty (AJD), transfer tax (ITP) and VAT."""

    ajd: float
    itp: float
    vat: float = SPAIN_DEFAULT_VAT


SPAIN_REGIONAL_RATES: Mapping[SpainRegion, SpainRegionRates] = MappingProxyType({
    SpainRegion.ANDALUCIA: SpainRegionRates(ajd=0.012, itp=0.07),
    SpainRegion.ARAGON: SpainRegionRates(ajd=0.015, itp=0.08),
    SpainRegion.ASTURIAS: SpainRegionRates(ajd=0.012, itp=0.08),
    SpainRegion.BALEARES: SpainRegionRates(ajd=0.015, itp=0.08),
    SpainRegion.CANARIAS: SpainRegionRates(ajd=0.0075, itp=0.065, vat=0.065),
    SpainRegion.CANTABRIA: SpainRegionRates(ajd=0.015, itp=0.09),
    SpainRegion.CASTILLA_LA_MANCHA: SpainRegionRates(ajd=0.015, itp=0.09),
    SpainRegion.CASTILLA_Y_LEON: SpainRegionRates(ajd=0.015, itp=0.08),
    SpainRegion.CATALUNA: SpainRegionRates(ajd=0.015, itp=0.10),
    SpainRegion.CEUTA: SpainRegionRates(ajd=0.005, itp=0.06),
    SpainRegion.EXTREMADURA: SpainRegionRates(ajd=0.015, itp=0.08),
    SpainRegion.GALICIA: SpainRegionRates(ajd=0.015, itp=0.08),
    SpainRegion.LA_RIOJA: SpainRegionRates(ajd=0.01, itp=0.07),
    SpainRegion.MADRID: SpainRegionRates(ajd=0.006, itp=0.06),
    SpainRegion.MELILLA: SpainRegionRates(ajd=0.005, itp=0.06),
    SpainRegion.MURCIA: SpainRegionRates(ajd=0.015, itp=0.08),
    SpainRegion.NAVARRA: SpainRegionRates(ajd=0.005, itp=0.06),
    SpainRegion.PAIS_VASCO: SpainRegionRates(ajd=0.005, itp=0.04),
    SpainRegion.VALENCIA: SpainRegionRates(ajd=0.015, itp=0.10),
})

# --- Portugal ---

PORTUGAL_DEED_STAMP_DUTY = 0.008
PORTUGAL_MORTGAGE_STAMP_DUTY = 0.006
PORTUGAL_IMT_TOP_THRESHOLD = 1_102_920.0
PORTUGAL_IMT_TOP_RATE = 0.075
PORTUGAL_IMT_HIGH_RATE = 0.06

PORTUGAL_IMT_TABLE = ProgressiveTaxTable.from_bands([
    (101_917, 0.0),
    (139_412, 0.02),
    (190_086, 0.05),
    (316_772, 0.07),
    (633_453, 0.08),
])

# --- UK ---

UK_MORTGAGE_ARRANGEMENT_FEES = 4_300.0
ENGLAND_FIRST_TIME_BUYER_CEILING = 625_000.0

ENGLAND_TABLE = ProgressiveTaxTable.from_bands([
    (250_000, 0.0),
    (925_000, 0.05),
    (1_500_000, 0.10),
    (INF, 0.12),
])
ENGLAND_FIRST_TIME_BUYER_TABLE = ProgressiveTaxTable.from_bands([
    (425_000, 0.0),
    (ENGLAND_FIRST_TIME_BUYER_CEILING, 0.05),
])
SCOTLAND_TABLE = ProgressiveTaxTable.from_bands([
    (145_000, 0.0),
    (250_000, 0.02),
    (325_000, 0.05),
    (750_000, 0.10),
    (INF, 0.12),
])
SCOTLAND_FIRST_TIME_BUYER_TABLE = ProgressiveTaxTable.from_bands([
    (175_000, 0.0),
    (250_000, 0.02),
    (325_000, 0.05),
    (750_000, 0.10),
    (INF, 0.12),
])
WALES_TABLE = ProgressiveTaxTable.from_bands([
    (225_000, 0.0),
    (400_000, 0.06),
    (750_000, 0.075),
    (1_500_000, 0.10),
    (INF, 0.12),
])

UK_STANDARD_TABLES: Mapping[UKNation, ProgressiveTaxTable] = MappingProxyType({
    UKNation.ENGLAND: ENGLAND_TABLE,
    UKNation.NORTHERN_IRELAND: ENGLAND_TABLE,
    UKNation.SCOTLAND: SCOTLAND_TABLE,
    UKNation.WALES: WALES_TABLE,
})


def spain_region_rates(region: SpainRegion | str) -> SpainRegionRates:
    """Look up the regional rates, rejecting unknown regions."""
    try:
        return SPAIN_REGIONAL_RATES[SpainRegion(region)]
    except (ValueError, KeyError):
        raise UnknownJurisdictionError(region) from None


def spain_tax(
    house_price: float,
    mortgage_principal: float,
    region: SpainRegion | str,
    new_build: bool = False,
) -> float:
    """Notary, land registry, regional tax and mortgage fees for Spain."""
    rates = spain_region_rates(region)
    if new_build:
        regional = house_price * (rates.ajd + rates.vat)
    else:
        regional = house_price * rates.itp

    tax = house_price * SPAIN_NOTARY_RATE + SPAIN_LAND_REGISTRY_FEE + regional
    if mortgage_principal > 0:
        tax += SPAIN_MORTGAGE_FEES
    return tax


def portugal_imt(house_price: float) -> float:
    """Municipal property transfer tax (IMT)."""
    if house_price > PORTUGAL_IMT_TOP_THRESHOLD:
        return house_price * PORTUGAL_IMT_TOP_RATE
    if house_price > PORTUGAL_IMT_TABLE.ceiling:
        return house_price * PORTUGAL_IMT_HIGH_RATE
    return PORTUGAL_IMT_TABLE.tax(house_price)


def portugal_tax(house_price: float, mortgage_principal: float) -> float:
    """Deed stamp duty, mortgage stamp duty and IMT for Portugal."""
    tax = house_price * PORTUGAL_DEED_STAMP_DUTY + portugal_imt(house_price)
    if mortgage_principal > 0:
        tax += mortgage_principal * PORTUGAL_MORTGAGE_STAMP_DUTY
    return tax


def uk_stamp_duty_table(nation: UKNation | str, house_price: float, first_home: bool) -> ProgressiveTaxTable:
    """Pick the bracket table that applies to a UK purchase."""
    try:
        nation = UKNation(nation)
    except ValueError:
        raise UnknownJurisdictionError(nation) from None

    if first_home:
        if nation in (UKNation.ENGLAND, UKNation.NORTHERN_IRELAND):
            if house_price < ENGLAND_FIRST_TIME_BUYER_CEILING:
                return ENGLAND_FIRST_TIME_BUYER_TABLE
        elif nation is UKNation.SCOTLAND:
            return SCOTLAND_FIRST_TIME_BUYER_TABLE
    return UK_STANDARD_TABLES[nation]


def uk_tax(
    house_price: float,
    mortgage_principal: float,
    nation: UKNation | str,
    first_home: bool = False,
) -> float:
    """Stamp duty (or its devolved equivalent) plus mortgage arrangement fees."""
    table = uk_stamp_duty_table(nation, house_price, first_home)
    tax = table.tax(house_price)
    if mortgage_principal > 0:
        tax += UK_MORTGAGE_ARRANGEMENT_FEES
    return tax


def purchase_tax(
    jurisdiction_key: str,
    house_price: float,
    mortgage_principal: float,
    new_build: bool = False,
    first_home: bool = False,
) -> float:
    """Total purchase taxes and fees for a jurisdiction key.

    Args:
        jurisdiction_key: Spain region (``"madrid"``), ``"portugal"`` or a
            UK nation (``"england"``)
        house_price: Purchase price
        mortgage_principal: Loan amount, 0 for a cash purchase
        new_build: New build property (Spain)
        first_home: First-time buyer (UK)

    Raises:
        UnknownJurisdictionError: key is not a known jurisdiction
    """
    config = tax_configuration_from_selector(
        jurisdiction_key, new_build=new_build, first_home=first_home
    )
    return tax_for_configuration(config, house_price, mortgage_principal)


def tax_for_configuration(
    config: TaxConfiguration,
    house_price: float,
    mortgage_principal: float,
) -> float:
    """Dispatch a tax configuration variant to its calculator."""
    if house_price < 0:
        raise InvalidParameterError("house_price", house_price, "must be >= 0")

    if isinstance(config, SpainTax):
        return spain_tax(house_price, mortgage_principal, config.region, config.new_build)
    if isinstance(config, PortugalTax):
        return portugal_tax(house_price, mortgage_principal)
    if isinstance(config, UKTax):
        return uk_tax(house_price, mortgage_principal, config.nation, config.first_home)
    if isinstance(config, CustomTax):
        return config.amount
    raise UnknownJurisdictionError(config)


def resolve_purchase_tax(
    config: TaxConfiguration,
    house_price: float,
    savings: float,
) -> float:
    """Tax owed at purchase, resolving the tax/principal cycle in two passes.

    Pass one assumes the whole price is borrowed. The deposit left after that
    tax gives a principal, and pass two prices the tax for it.
    """
    worst_case = tax_for_configuration(config, house_price, house_price)
    deposit = savings - worst_case
    principal = max(0.0, house_price - deposit)
    return tax_for_configuration(config, house_price, principal)


def tax_configuration_from_selector(
    selector: str,
    new_build: bool = False,
    first_home: bool = False,
    custom_amount: float | None = None,
) -> TaxConfiguration:
    """Map a jurisdiction selector string to a tax configuration.

    Accepted selectors: a Spain region key, ``"portugal"``, a UK nation key
    or ``"custom"`` (which requires ``custom_amount``).
    """
    key = str(selector).strip().lower()

    if key == "custom":
        if custom_amount is None:
            raise InvalidParameterError("custom_amount", custom_amount, "required for a custom tax")
        if custom_amount < 0:
            raise InvalidParameterError("custom_amount", custom_amount, "must be >= 0")
        return CustomTax(amount=custom_amount)
    if key == "portugal":
        return PortugalTax(new_build=new_build, first_home=first_home)
    if key in {nation.value for nation in UKNation}:
        return UKTax(nation=UKNation(key), first_home=first_home)
    if key in {region.value for region in SpainRegion}:
        return SpainTax(region=SpainRegion(key), new_build=new_build)
    raise UnknownJurisdictionError(selector)
