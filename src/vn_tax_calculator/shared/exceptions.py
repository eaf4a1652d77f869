"""Custom exceptions for VN Tax Calculator."""


class VNTaxCalculatorError(Exception):
    """Base exception for all VN Tax Calculator errors."""

    pass


class ValidationError(VNTaxCalculatorError):
    """Input that cannot be repaired by clamping."""

    pass


class CurrencyParseError(ValidationError):
    """Currency text with no digits at all."""

    pass


class ConfigurationError(VNTaxCalculatorError):
    """Unknown law version or invalid settings."""

    pass


class ReportGenerationError(VNTaxCalculatorError):
    """Error generating report."""

    pass
