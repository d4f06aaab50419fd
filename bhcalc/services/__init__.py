"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .calculator_service import BusinessHoursCalculatorService, RecordStoreProtocol

__all__ = ["BusinessHoursCalculatorService", "RecordStoreProtocol"]
