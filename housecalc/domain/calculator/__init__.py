"""Purchase tax calculators."""

from .brackets import ProgressiveTaxTable, TaxBracket, progressive_tax
from .taxes import (
    purchase_tax,
    resolve_purchase_tax,
    tax_configuration_from_selector,
    tax_for_configuration,
)

__all__ = [
    "ProgressiveTaxTable",
    "TaxBracket",
    "progressive_tax",
    "purchase_tax",
    "resolve_purchase_tax",
    "tax_configuration_from_selector",
    "tax_for_configuration",
]
