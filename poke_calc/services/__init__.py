"""Service layer shared by the CLI and the servers."""

from .calculator_service import CalculatorService

__all__ = ["CalculatorService"]
