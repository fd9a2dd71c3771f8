"""Extract kWh charged/discharged and signed power from battery dashboard pages."""

from .engine import (
    ExtractionInput,
    MeasurementResult,
    MissingFieldError,
    extract,
    parse_html,
)

__all__ = ["ExtractionInput", "MeasurementResult", "MissingFieldError", "extract", "parse_html"]
__version__ = "0.1.0"
