"""Domain models and purchase tax calculators."""
