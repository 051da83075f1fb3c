"""
housecalc - House Buying Calculator

Month-by-month projection of when a house becomes affordable, comparing the
earliest-deposit mortgage, the lowest-cost mortgage and an outright purchase.

Modules:
    - core: Financial math, exceptions, logging and settings
    - domain: Pydantic models and the purchase tax calculators
    - application: The scenario search engine
"""

__version__ = "1.4.0"
