"""Tax jurisdiction configuration.

A purchase is taxed under exactly one jurisdiction variant, selected by the
``kind`` discriminator. Each variant carries only the data it needs.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class SpainRegion(str, Enum):
    """Spanish autonomous communities and cities."""

    ANDALUCIA = "andalucia"
    ARAGON = "aragon"
    ASTURIAS = "asturias"
    BALEARES = "baleares"
    CANARIAS = "canarias"
    CANTABRIA = "cantabria"
    CASTILLA_LA_MANCHA = "castilla_la_mancha"
    CASTILLA_Y_LEON = "castilla_y_leon"
    CATALUNA = "cataluna"
    CEUTA = "ceuta"
    EXTREMADURA = "extremadura"
    GALICIA = "galicia"
    LA_RIOJA = "la_rioja"
    MADRID = "madrid"
    MELILLA = "melilla"
    MURCIA = "murcia"
    NAVARRA = "navarra"
    PAIS_VASCO = "pais_vasco"
    VALENCIA = "valencia"


class UKNation(str, Enum):
    """UK nations with their own property transaction tax."""

    ENGLAND = "england"
    NORTHERN_IRELAND = "northern_ireland"
    SCOTLAND = "scotland"
    WALES = "wales"


class SpainTax(BaseModel):
    """Spanish purchase: notary, land registry and regional transfer tax."""

    kind: Literal["spain"] = "spain"
    region: SpainRegion = Field(..., description="Autonomous community")
    new_build: bool = Field(default=False, description="New build pays VAT + AJD instead of ITP")

    model_config = {"frozen": True}


class PortugalTax(BaseModel):
    """Portuguese purchase: IMT plus stamp duties."""

    kind: Literal["portugal"] = "portugal"
    new_build: bool = Field(default=False, description="Recorded, does not change the estimate")
    first_home: bool = Field(default=False, description="Recorded, does not change the estimate")

    model_config = {"frozen": True}


class UKTax(BaseModel):
    """UK purchase: nation-specific stamp duty plus arrangement fees."""

    kind: Literal["uk"] = "uk"
    nation: UKNation = Field(..., description="UK nation")
    first_home: bool = Field(default=False, description="First-time buyer relief")

    model_config = {"frozen": True}


class CustomTax(BaseModel):
    """Fixed tax amount, held constant for the whole search."""

    kind: Literal["custom"] = "custom"
    amount: float = Field(..., ge=0, description="Total taxes and fees")

    model_config = {"frozen": True}


TaxConfiguration = Annotated[
    Union[SpainTax, PortugalTax, UKTax, CustomTax],
    Field(discriminator="kind"),
]
