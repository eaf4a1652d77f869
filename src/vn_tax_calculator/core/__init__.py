"""Calculation core: models, rules, calculators and analyzers."""
